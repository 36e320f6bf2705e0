"""Unit tests for settings and logging setup."""
import logging

import pytest

from smartkissan.config import CHAT_REPLY_TIMEOUT, CHAT_WS_URL, Settings
from smartkissan.log import LogLevel, configure_logging


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self, monkeypatch):
        for name in ("WEATHER_API_KEY", "SMARTKISSAN_WEATHER_API_KEY", "SMARTKISSAN_CHAT_WS_URL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.weather_api_key is None
        assert settings.chat_ws_url == CHAT_WS_URL
        assert settings.chat_reply_timeout == CHAT_REPLY_TIMEOUT
        assert settings.geolocation_timeout == 15
        assert settings.transcript_limit == 50
        assert settings.data_api_url is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("WEATHER_API_KEY", "abc")
        monkeypatch.setenv("SMARTKISSAN_CHAT_TIMEOUT", "2.5")
        monkeypatch.setenv("SMARTKISSAN_CHAT_WS_URL", "")
        monkeypatch.setenv("SMARTKISSAN_CHAT_FALLBACK", "0")
        monkeypatch.setenv("SMARTKISSAN_STORE", "memory")

        settings = Settings.from_env()

        assert settings.weather_api_key == "abc"
        assert settings.chat_reply_timeout == 2.5
        assert settings.chat_ws_url is None
        assert settings.chat_fallback_enabled is False
        assert settings.store_backend == "memory"

    def test_invalid_timeout_rejected(self, monkeypatch):
        monkeypatch.setenv("SMARTKISSAN_CHAT_TIMEOUT", "0")

        with pytest.raises(ValueError):
            Settings.from_env()


class TestLogging:
    """Tests for LogLevel and configure_logging."""

    def test_from_string(self):
        assert LogLevel.from_string("DEBUG") == logging.DEBUG
        assert LogLevel.from_string("error") == logging.ERROR
        assert LogLevel.from_string("verbose") == logging.WARNING

    def test_configure_logging(self):
        configure_logging("info")

        logger = logging.getLogger("smartkissan")
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert logger.propagate is False

        configure_logging("debug")
        assert len(logger.handlers) == 1
