"""Tests for settings and logging configuration."""

import json

import pytest
import structlog
from pydantic import ValidationError

from electoral_access.config import Settings, get_settings
from electoral_access.core.logging import configure_logging


pytestmark = pytest.mark.unit


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ELECTORAL_ACCESS_LOG_LEVEL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.log_access_attempts is True
        assert settings.is_production is False
        assert settings.render_json is False

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("ELECTORAL_ACCESS_ENVIRONMENT", "production")
        monkeypatch.setenv("ELECTORAL_ACCESS_LOG_LEVEL", "debug")
        monkeypatch.setenv("ELECTORAL_ACCESS_LOG_ACCESS_ATTEMPTS", "false")
        settings = get_settings()
        assert settings.is_production is True
        assert settings.render_json is True
        assert settings.log_level == "DEBUG"
        assert settings.log_access_attempts is False

    def test_explicit_json_flag_wins(self):
        assert Settings(_env_file=None, environment="production", log_json=False).render_json is False

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_configures_structlog(self):
        try:
            configure_logging(Settings(_env_file=None, log_json=True))
            assert structlog.is_configured()
        finally:
            structlog.reset_defaults()

    def test_json_renderer_and_level_take_effect(self, capsys):
        try:
            configure_logging(Settings(_env_file=None, log_json=True, log_level="WARNING"))
            logger = structlog.get_logger()
            logger.info("table_loaded")
            logger.warning("administrator_access", handler="delete_commission")
        finally:
            structlog.reset_defaults()

        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 1
        event = json.loads(lines[0])
        assert event["event"] == "administrator_access"
        assert event["level"] == "warning"
        assert event["handler"] == "delete_commission"

    def test_console_renderer_outside_production(self, capsys):
        try:
            configure_logging(Settings(_env_file=None, environment="development"))
            structlog.get_logger().info("permission_table_built", roles=5)
        finally:
            structlog.reset_defaults()

        out = capsys.readouterr().out
        assert "permission_table_built" in out
        with pytest.raises(json.JSONDecodeError):
            json.loads(out)
