"""Runtime configuration for the Woflang command-line tools.

Configuration is read from an optional YAML file; command-line options
override whatever the file sets.

Example ``woflang.yaml``::

    plugin_dir: ./plugins
    load_entrypoints: false
    log_level: INFO
    debug: true
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from woflang.plugins.loader import DEFAULT_ENTRYPOINT_GROUP

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised when a configuration file is unreadable or malformed."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"invalid configuration {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


@dataclass(frozen=True)
class WoflangConfig:
    """Settings shared by ``woflang run``, ``exec`` and ``repl``.

    Parameters
    ----------
    plugin_dir:
        Directory scanned for extension modules.  ``None`` disables the scan.
    load_entrypoints:
        Whether to load extensions from installed distributions.
    entrypoint_group:
        Entry-point group consulted when ``load_entrypoints`` is set.
    log_level:
        Name of the logging level for the ``woflang`` logger.
    debug:
        Print the stack after every REPL line.
    """

    plugin_dir: Path | None = Path("plugins")
    load_entrypoints: bool = True
    entrypoint_group: str = DEFAULT_ENTRYPOINT_GROUP
    log_level: str = "WARNING"
    debug: bool = False

    def __post_init__(self) -> None:
        level = self.log_level.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {self.log_level!r}")
        object.__setattr__(self, "log_level", level)
        if self.plugin_dir is not None and not isinstance(self.plugin_dir, Path):
            object.__setattr__(self, "plugin_dir", Path(self.plugin_dir))

    @property
    def logging_level(self) -> int:
        """The numeric ``logging`` level for ``log_level``."""
        return logging.getLevelName(self.log_level)

    def merge(self, **overrides: Any) -> "WoflangConfig":
        """Return a copy with every non-``None`` override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def load_config(path: str | Path) -> WoflangConfig:
    """Read a ``WoflangConfig`` from a YAML file.

    An empty file yields the defaults.  Relative ``plugin_dir`` values are
    resolved against the file's directory.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not a mapping, contains unknown
        keys, or holds invalid values.
    """
    config_path = Path(path)
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(config_path, str(exc)) from exc
    except yaml.YAMLError as exc:
        raise ConfigError(config_path, f"YAML error: {exc}") from exc

    if data is None:
        return WoflangConfig()
    if not isinstance(data, dict):
        raise ConfigError(config_path, "top level must be a mapping")

    known = {f.name for f in fields(WoflangConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(config_path, f"unknown key(s): {', '.join(map(str, unknown))}")

    if data.get("plugin_dir") is not None:
        plugin_dir = Path(str(data["plugin_dir"]))
        if not plugin_dir.is_absolute():
            plugin_dir = config_path.parent / plugin_dir
        data["plugin_dir"] = plugin_dir

    try:
        return WoflangConfig(**data)
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigError(config_path, str(exc)) from exc
