"""Unit tests for magicline.config."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from magicline.config import ConfigError, SessionConfig, config_from_dict, load_config


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "magicline.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestConfigFromDict:
    def test_defaults(self) -> None:
        config = config_from_dict({})
        assert config == SessionConfig()
        assert config.log_level == "WARNING"
        assert config.load_entrypoints is True
        assert dict(config.settings) == {}

    def test_log_level_is_normalised(self) -> None:
        config = config_from_dict({"log_level": "info"})
        assert config.log_level == "INFO"
        assert config.log_level_number == logging.INFO

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ConfigError, match="Invalid log_level"):
            config_from_dict({"log_level": "LOUD"})

    def test_unknown_keys(self) -> None:
        with pytest.raises(ConfigError, match="Unknown configuration key"):
            config_from_dict({"marker": "%", "colour": "red"})

    def test_load_entrypoints_must_be_bool(self) -> None:
        with pytest.raises(ConfigError, match="load_entrypoints"):
            config_from_dict({"load_entrypoints": 1})

    def test_settings_must_be_mapping(self) -> None:
        with pytest.raises(ConfigError, match="settings"):
            config_from_dict({"settings": ["a", "b"]})

    def test_settings_keys_become_strings(self) -> None:
        assert dict(config_from_dict({"settings": {1: "x"}}).settings) == {"1": "x"}

    def test_config_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            config_from_dict({"unknown": True})


class TestLoadConfig:
    def test_full_document(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path,
            "log_level: debug\n"
            "load_entrypoints: false\n"
            "settings:\n"
            "  output.format: table\n"
            "  simulator.shots: 1000\n",
        )
        config = load_config(path)
        assert config.log_level == "DEBUG"
        assert config.load_entrypoints is False
        assert dict(config.settings) == {"output.format": "table", "simulator.shots": 1000}

    def test_empty_file_is_default(self, tmp_path: Path) -> None:
        assert load_config(_write(tmp_path, "")) == SessionConfig()

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        assert load_config(str(_write(tmp_path, "log_level: ERROR\n"))).log_level == "ERROR"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(_write(tmp_path, "settings: [unclosed\n"))

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="mapping at the top level"):
            load_config(_write(tmp_path, "- a\n- b\n"))

    def test_invalid_values_are_reported(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="load_entrypoints"):
            load_config(_write(tmp_path, 'load_entrypoints: "sometimes"\n'))
