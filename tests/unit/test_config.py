"""
Unit tests for src/common/config.py
"""

import logging

import pytest

from src.common.config import Config
from src.common.errors import ConfigurationError


class TestIsProduction:

    def test_development_by_default(self, monkeypatch):
        monkeypatch.setattr(Config, "ENVIRONMENT", "development")
        monkeypatch.setattr(Config, "FLASK_ENV", "")
        assert Config.is_production() is False

    def test_environment_production(self, production):
        assert Config.is_production() is True

    def test_flask_env_production(self, monkeypatch):
        monkeypatch.setattr(Config, "ENVIRONMENT", "development")
        monkeypatch.setattr(Config, "FLASK_ENV", "production")
        assert Config.is_production() is True


class TestValidate:

    def test_passes_with_uri(self, monkeypatch):
        monkeypatch.setattr(Config, "MONGODB_URI", "mongodb://localhost:27017/x")
        Config.validate()

    def test_missing_uri_raises_configuration_error(self, unconfigured):
        with pytest.raises(ConfigurationError) as exc_info:
            Config.validate()
        assert "MONGODB_URI" in str(exc_info.value)


class TestWarnIfUnconfigured:

    def test_warns_outside_production(self, unconfigured, monkeypatch, caplog):
        monkeypatch.setattr(Config, "ENVIRONMENT", "development")
        monkeypatch.setattr(Config, "FLASK_ENV", "")
        with caplog.at_level(logging.WARNING, logger="src.common.config"):
            assert Config.warn_if_unconfigured() is True
        assert "MONGODB_URI" in caplog.text

    def test_silent_in_production(self, unconfigured, production):
        assert Config.warn_if_unconfigured() is False

    def test_silent_when_configured(self, monkeypatch):
        monkeypatch.setattr(Config, "MONGODB_URI", "mongodb://localhost:27017/x")
        assert Config.warn_if_unconfigured() is False
