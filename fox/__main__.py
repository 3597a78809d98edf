"""Fox CLI entry point.

Allows running via `python -m fox` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys

from .version import get_version_string

USAGE = """usage: fox FILE

Edit FILE in the terminal; a missing FILE is created on first save.

options:
  -h, --help     show this help and exit
  -V, --version  show the version and exit

Set FOX_LOG to a file path to write a debug log there."""


def configure_logging() -> None:
    """Log to $FOX_LOG if set; never write log records over the screen."""
    package_logger = logging.getLogger("fox")
    log_path = os.environ.get("FOX_LOG")
    if not log_path:
        package_logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def main() -> None:
    # Very small arg parsing: version, help and a single filename
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return
    if args and args[0] in ("--help", "-h"):
        print(USAGE)
        return
    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        sys.exit(2)

    configure_logging()

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    from .storage import SaveError

    editor = Editor()
    try:
        editor.load_file(args[0])
    except (OSError, UnicodeDecodeError) as e:
        print(f"fox: cannot open {args[0]}: {e}", file=sys.stderr)
        sys.exit(1)
    try:
        editor.run()
    except SaveError as e:
        print(f"fox: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
