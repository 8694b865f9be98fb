"""Unit tests for woflang.config — YAML configuration loading."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from woflang.config import ConfigError, WoflangConfig, load_config


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "woflang.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:
    def test_default_values(self) -> None:
        config = WoflangConfig()
        assert config.plugin_dir == Path("plugins")
        assert config.load_entrypoints is True
        assert config.entrypoint_group == "woflang.plugins"
        assert config.log_level == "WARNING"
        assert config.debug is False

    def test_log_level_is_normalised(self) -> None:
        config = WoflangConfig(log_level="debug")
        assert config.log_level == "DEBUG"
        assert config.logging_level == logging.DEBUG

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValueError):
            WoflangConfig(log_level="LOUD")

    def test_plugin_dir_string_becomes_path(self) -> None:
        config = WoflangConfig(plugin_dir="ext")  # type: ignore[arg-type]
        assert config.plugin_dir == Path("ext")


class TestMerge:
    def test_none_overrides_are_ignored(self) -> None:
        config = WoflangConfig().merge(plugin_dir=None, log_level=None)
        assert config == WoflangConfig()

    def test_overrides_are_applied(self) -> None:
        config = WoflangConfig().merge(load_entrypoints=False, log_level="info")
        assert config.load_entrypoints is False
        assert config.log_level == "INFO"

    def test_merge_returns_new_instance(self) -> None:
        base = WoflangConfig()
        base.merge(debug=True)
        assert base.debug is False


class TestLoadConfig:
    def test_full_file(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "plugin_dir: ext\nload_entrypoints: false\nlog_level: info\ndebug: true\n",
        )
        config = load_config(path)
        assert config.plugin_dir == tmp_path / "ext"
        assert config.load_entrypoints is False
        assert config.log_level == "INFO"
        assert config.debug is True

    def test_absolute_plugin_dir_is_kept(self, tmp_path: Path) -> None:
        target = tmp_path / "abs"
        config = load_config(_write(tmp_path, f"plugin_dir: {target}\n"))
        assert config.plugin_dir == target

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config(_write(tmp_path, "")) == WoflangConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as info:
            load_config(tmp_path / "missing.yaml")
        assert info.value.path == tmp_path / "missing.yaml"

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="mapping"):
            load_config(_write(tmp_path, "- a\n- b\n"))

    def test_unknown_keys(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="colour"):
            load_config(_write(tmp_path, "colour: blue\n"))

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="YAML"):
            load_config(_write(tmp_path, "plugin_dir: [unclosed\n"))

    def test_invalid_value(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, "log_level: LOUD\n"))

    def test_config_error_is_value_error(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            load_config(_write(tmp_path, "42\n"))
