"""Tests for application config loading (JSON and YAML)."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError
import pytest

from canvasfx.core.config import (
    AppConfig,
    CanvasConfig,
    SchemaConfig,
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from canvasfx.core.scaling import ScalingOptions


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after reconfiguration."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestDetectFormat:
    """Config format detection."""

    @pytest.mark.parametrize(
        ("name", "fmt"),
        [("a.json", "json"), ("a.yaml", "yaml"), ("a.YML", "yaml")],
    )
    def test_known_formats(self, name: str, fmt: str):
        """Extensions map to formats."""
        assert detect_format(name) == fmt

    def test_unknown_format(self):
        """Other extensions are rejected."""
        with pytest.raises(ValueError, match="Unsupported"):
            detect_format("config.toml")


class TestLoadConfig:
    """Raw config loading."""

    def test_json(self, tmp_path: Path):
        """JSON files load as dicts."""
        path = tmp_path / "canvasfx.json"
        path.write_text(json.dumps({"logging": {"level": "DEBUG"}}))

        assert load_config(path) == {"logging": {"level": "DEBUG"}}

    def test_yaml(self, tmp_path: Path):
        """YAML files load as dicts."""
        path = tmp_path / "canvasfx.yaml"
        path.write_text("scaling:\n  round_to_pixel: true\ncanvas:\n  resolution_key: 4k\n")

        assert load_config(path) == {
            "scaling": {"round_to_pixel": True},
            "canvas": {"resolution_key": "4k"},
        }

    def test_empty_yaml(self, tmp_path: Path):
        """Empty YAML is an empty config."""
        path = tmp_path / "empty.yml"
        path.write_text("")

        assert load_config(path) == {}

    def test_missing_file(self, tmp_path: Path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path):
        """Broken JSON is a ValueError."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        with pytest.raises(ValueError, match="Invalid JSON"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path: Path):
        """Broken YAML is a ValueError."""
        path = tmp_path / "bad.yaml"
        path.write_text("a: [1, 2\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(path)

    def test_yaml_must_be_mapping(self, tmp_path: Path):
        """Top-level YAML lists are rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ValueError, match="mapping"):
            load_config(path)

    def test_json_must_be_mapping(self, tmp_path: Path):
        """Top-level JSON arrays are rejected the same way."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")

        with pytest.raises(ValueError, match="mapping"):
            load_config(path)


class TestAppConfig:
    """Validated application config."""

    def test_defaults(self):
        """Every section has defaults."""
        config = AppConfig()

        assert config.logging.level == "INFO"
        assert config.schema_options.cache_enabled
        assert config.canvas.resolution_key == 1920
        assert config.scaling.to_options() == ScalingOptions()

    def test_load_yaml(self, tmp_path: Path):
        """Sections are read from YAML; unknown keys are ignored."""
        path = tmp_path / "app.yaml"
        path.write_text(
            "schema:\n"
            "  cache_enabled: false\n"
            "  number_default_max: 255\n"
            "canvas:\n"
            "  resolution_key: 1080p\n"
            "  is_horizontal: false\n"
            "future_section: 1\n"
        )

        config = load_app_config(path)

        assert config.schema_options == SchemaConfig(cache_enabled=False, number_default_max=255)
        assert config.canvas == CanvasConfig(resolution_key=1920, is_horizontal=False)

    def test_invalid_level(self, tmp_path: Path):
        """Unknown log levels fail validation."""
        path = tmp_path / "app.json"
        path.write_text(json.dumps({"logging": {"level": "LOUD"}}))

        with pytest.raises(ValidationError):
            load_app_config(path)

    def test_unknown_resolution(self):
        """Canvas resolution must be in the catalog."""
        with pytest.raises(ValidationError):
            CanvasConfig(resolution_key=1234)

    def test_inverted_number_defaults(self):
        """Numeric fallback min must not exceed max."""
        with pytest.raises(ValidationError):
            SchemaConfig(number_default_min=10, number_default_max=1)

    def test_explicit_missing_path(self, tmp_path: Path):
        """An explicit path must exist."""
        with pytest.raises(FileNotFoundError):
            load_app_config(tmp_path / "missing.json")

    def test_default_path_is_cached(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """Without a path the defaults are loaded once and cached."""
        monkeypatch.chdir(tmp_path)

        first = load_app_config()
        second = load_app_config()

        assert first is second
        assert first == AppConfig()

    def test_env_log_level(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """CANVASFX_LOG_LEVEL overrides the configured level."""
        path = tmp_path / "app.json"
        path.write_text(json.dumps({"logging": {"level": "ERROR"}}))
        monkeypatch.setenv("CANVASFX_LOG_LEVEL", "debug")

        assert load_app_config(path).logging.level == "DEBUG"


class TestConfigureLogging:
    """Logging setup from config."""

    def test_sets_level(self, restore_root_logger: logging.Logger):
        """Root level follows the config."""
        config = AppConfig.model_validate({"logging": {"level": "WARNING"}})

        configure_logging(config)

        assert restore_root_logger.level == logging.WARNING

    def test_file_output(self, tmp_path: Path, restore_root_logger: logging.Logger):
        """Structured logs can go to a file."""
        log_file = tmp_path / "canvasfx.jsonl"
        config = AppConfig.model_validate(
            {"logging": {"level": "INFO", "structured": True, "filename": str(log_file)}}
        )

        configure_logging(config)
        logging.getLogger("canvasfx.test").info("hello %s", "file")
        for handler in restore_root_logger.handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().splitlines()[-1])
        assert entry["message"] == "hello file"
        assert entry["context"]["logger_name"] == "canvasfx.test"
