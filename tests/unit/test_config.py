"""Unit tests for environment settings."""
import logging

import pytest

from src.utils import config
from src.utils.config import Settings, configure_logging, load_settings
from src.utils.exceptions import ConfigurationError

ENV_NAMES = [
    "SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL",
    "SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY",
    "SUPABASE_SERVICE_ROLE_KEY", "SUPABASE_TABLE",
    "RESEND_API_KEY", "EMAIL_FROM", "SEND_CONFIRMATION_EMAIL",
    "REQUEST_TIMEOUT", "REGISTRATION_PREFIX", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear related variables and skip .env loading."""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "_ENV_LOADED", True)
    return monkeypatch


@pytest.fixture
def store_env(clean_env):
    clean_env.setenv("SUPABASE_URL", "https://abc.supabase.co")
    clean_env.setenv("SUPABASE_ANON_KEY", "anon")
    clean_env.setenv("SUPABASE_SERVICE_ROLE_KEY", "service")
    return clean_env


class TestLoadSettings:
    """Test load_settings function."""

    def test_defaults(self, store_env):
        settings = load_settings()

        assert settings.supabase_url == "https://abc.supabase.co"
        assert settings.table == "nryli_registrations"
        assert settings.registration_prefix == "NRYLI2025"
        assert settings.request_timeout == 10.0
        assert settings.send_confirmation_email is False
        assert settings.email_enabled is False

    def test_next_public_fallbacks(self, clean_env):
        clean_env.setenv("NEXT_PUBLIC_SUPABASE_URL", "https://legacy.supabase.co")
        clean_env.setenv("NEXT_PUBLIC_SUPABASE_ANON_KEY", "legacy-anon")
        clean_env.setenv("SUPABASE_SERVICE_ROLE_KEY", "service")

        settings = load_settings()

        assert settings.supabase_url == "https://legacy.supabase.co"
        assert settings.supabase_anon_key == "legacy-anon"

    def test_missing_settings_listed(self, clean_env):
        clean_env.setenv("SUPABASE_URL", "https://abc.supabase.co")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings()

        assert "SUPABASE_ANON_KEY" in str(exc_info.value)
        assert "SUPABASE_SERVICE_ROLE_KEY" in str(exc_info.value)

    def test_email_enabled(self, store_env):
        store_env.setenv("SEND_CONFIRMATION_EMAIL", "true")
        store_env.setenv("RESEND_API_KEY", "re_123")

        assert load_settings().email_enabled is True

    def test_email_flag_without_key(self, store_env):
        store_env.setenv("SEND_CONFIRMATION_EMAIL", "yes")

        settings = load_settings()
        assert settings.send_confirmation_email is True
        assert settings.email_enabled is False

    def test_custom_timeout(self, store_env):
        store_env.setenv("REQUEST_TIMEOUT", "2.5")
        assert load_settings().request_timeout == 2.5

    @pytest.mark.parametrize("value", ["abc", "0", "-1"])
    def test_invalid_timeout(self, store_env, value):
        store_env.setenv("REQUEST_TIMEOUT", value)

        with pytest.raises(ConfigurationError):
            load_settings()

    def test_log_level_uppercased(self, store_env):
        store_env.setenv("LOG_LEVEL", "debug")
        assert load_settings().log_level == "DEBUG"

    def test_settings_frozen(self, store_env):
        settings = load_settings()

        with pytest.raises(Exception):
            settings.table = "other"


class TestConfigureLogging:
    """Test configure_logging function."""

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        configure_logging("nonsense")

        assert calls["level"] == logging.INFO

    def test_level_applied(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        configure_logging("warning")

        assert calls["level"] == logging.WARNING


def test_settings_direct_construction():
    settings = Settings(supabase_url="u", supabase_anon_key="a", supabase_service_role_key="s")
    assert settings.email_from.startswith("NRYLI Registration")
