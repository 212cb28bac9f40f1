"""Session configuration.

Configuration is read from a YAML document such as::

    log_level: INFO
    load_entrypoints: true
    settings:
      output.format: table
      simulator.shots: 1000

``settings`` seeds the values shown and changed by ``%config``.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

import yaml

_LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_KNOWN_KEYS: Final[frozenset[str]] = frozenset({"log_level", "load_entrypoints", "settings"})


class ConfigError(ValueError):
    """Raised when a configuration document is unreadable or invalid."""


@dataclass(frozen=True)
class SessionConfig:
    """Settings for a ``MagicSession``.

    Parameters
    ----------
    log_level:
        Name of the logging level used by the CLI.
    load_entrypoints:
        Whether magics declared as package entry-points are registered.
    settings:
        Initial values for ``%config``.
    """

    log_level: str = "WARNING"
    load_entrypoints: bool = True
    settings: Mapping[str, Any] = field(default_factory=dict)

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


def config_from_dict(data: Mapping[str, Any]) -> SessionConfig:
    """Build a ``SessionConfig`` from a decoded mapping.

    Raises
    ------
    ConfigError
        On unknown keys or values of the wrong type.
    """
    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(map(str, unknown))}")

    log_level = str(data.get("log_level", "WARNING")).upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(
            f"Invalid log_level {data.get('log_level')!r}; expected one of {', '.join(_LOG_LEVELS)}"
        )

    load_entrypoints = data.get("load_entrypoints", True)
    if not isinstance(load_entrypoints, bool):
        raise ConfigError("load_entrypoints must be true or false")

    settings = data.get("settings") or {}
    if not isinstance(settings, Mapping):
        raise ConfigError("settings must be a mapping")

    return SessionConfig(
        log_level=log_level,
        load_entrypoints=load_entrypoints,
        settings={str(k): v for k, v in settings.items()},
    )


def load_config(path: str | Path) -> SessionConfig:
    """Read and validate a YAML configuration file.

    An empty file yields the default configuration.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid YAML, or is invalid.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return SessionConfig()
    if not isinstance(data, Mapping):
        raise ConfigError(f"Configuration {path} must be a mapping at the top level")
    return config_from_dict(data)
