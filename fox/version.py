from __future__ import annotations

import importlib.metadata

DISTRIBUTION = "fox-editor"


def get_version() -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        # Running from a source checkout without an install
        return "unknown"


def get_version_string() -> str:
    return f"fox {get_version()}"
