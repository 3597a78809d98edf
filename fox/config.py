"""User configuration loaded from ``config.toml``.

The file lives in the platform config directory, e.g.
``~/.config/fox/config.toml`` on Linux::

    [theme]
    name = "gruvbox-dark"
    light_fix = false

A missing or unreadable file silently yields the defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import platformdirs
import toml

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class ThemeConfig:
    name: str = EditorConstants.DEFAULT_THEME
    # Set for light themes so derived gutter/header colors get darker, not lighter
    light_fix: bool = False


@dataclass
class Config:
    theme: ThemeConfig = field(default_factory=ThemeConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Build a config from parsed TOML, ignoring values of the wrong type."""
        theme = ThemeConfig()
        section = data.get("theme", {})
        if not isinstance(section, dict):
            logger.warning("Ignoring [theme]: expected a table")
            section = {}
        name = section.get("name")
        if isinstance(name, str) and name:
            theme.name = name
        elif name is not None:
            logger.warning(f"Ignoring theme.name={name!r}: expected a string")
        light_fix = section.get("light_fix")
        if isinstance(light_fix, bool):
            theme.light_fix = light_fix
        elif light_fix is not None:
            logger.warning(f"Ignoring theme.light_fix={light_fix!r}: expected a boolean")
        return cls(theme=theme)


def config_location() -> Path:
    """Path of the user's config file (it need not exist)."""
    return Path(platformdirs.user_config_dir("fox")) / EditorConstants.CONFIG_FILENAME


def load_config(path: Optional[Path] = None) -> Config:
    """Load the config file, falling back to defaults on any problem."""
    path = path or config_location()
    if not path.exists():
        return Config()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = toml.load(f)
    except (toml.TomlDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not load config from {path}: {e}")
        return Config()
    return Config.from_dict(data)
