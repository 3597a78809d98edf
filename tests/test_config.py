"""Test loading config.toml."""

import logging
from pathlib import Path
from unittest.mock import patch

from fox.config import Config, ThemeConfig, config_location, load_config


def test_defaults_when_file_missing(tmp_path):
    config = load_config(tmp_path / "config.toml")
    assert config == Config()
    assert config.theme.name == "gruvbox-dark"
    assert config.theme.light_fix is False


def test_reads_theme_section(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[theme]\nname = "solarized-light"\nlight_fix = true\n')
    config = load_config(path)
    assert config.theme == ThemeConfig(name="solarized-light", light_fix=True)


def test_partial_theme_section(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[theme]\nlight_fix = true\n')
    config = load_config(path)
    assert config.theme.name == "gruvbox-dark"
    assert config.theme.light_fix is True


def test_invalid_toml_falls_back(tmp_path, caplog):
    path = tmp_path / "config.toml"
    path.write_text('[theme\nname = ')
    with caplog.at_level(logging.WARNING, logger="fox.config"):
        config = load_config(path)
    assert config == Config()
    assert "Could not load config" in caplog.text


def test_wrong_types_are_ignored(caplog):
    with caplog.at_level(logging.WARNING, logger="fox.config"):
        config = Config.from_dict({"theme": {"name": 3, "light_fix": "yes"}})
    assert config == Config()
    assert "theme.name" in caplog.text
    assert "theme.light_fix" in caplog.text


def test_theme_must_be_table():
    assert Config.from_dict({"theme": "monokai"}) == Config()


def test_unknown_keys_ignored():
    config = Config.from_dict({"editor": {"tabs": 8}, "theme": {"name": "monokai", "extra": 1}})
    assert config.theme.name == "monokai"


def test_config_location_uses_platform_dir():
    with patch('fox.config.platformdirs.user_config_dir', return_value="/cfg/fox") as user_config_dir:
        assert config_location() == Path("/cfg/fox/config.toml")
    user_config_dir.assert_called_once_with("fox")


def test_load_config_default_location(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[theme]\nname = "monokai"\n')
    with patch('fox.config.config_location', return_value=path):
        assert load_config().theme.name == "monokai"
