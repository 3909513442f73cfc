"""Tests for firebase_rest.core.settings."""

import pytest
from pydantic import ValidationError

from firebase_rest.core.settings import FirebaseRestSettings, clear_settings_cache, get_settings


class TestFirebaseRestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("DATABASE_URL", "CACHE_TTL_SECONDS", "ENVIRONMENT"):
            monkeypatch.delenv(f"FIREBASE_REST_{name}", raising=False)
        settings = FirebaseRestSettings(_env_file=None)
        assert settings.database_url == ""
        assert settings.cache_ttl_seconds == 2.0
        assert settings.request_timeout_seconds == 30.0
        assert settings.is_production is False

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("FIREBASE_REST_DATABASE_URL", "https://env.firebaseio.com")
        monkeypatch.setenv("FIREBASE_REST_CACHE_TTL_SECONDS", "0.5")
        monkeypatch.setenv("FIREBASE_REST_ENVIRONMENT", " Production ")

        settings = FirebaseRestSettings(_env_file=None)
        assert settings.database_url == "https://env.firebaseio.com"
        assert settings.cache_ttl_seconds == 0.5
        assert settings.is_production is True

    def test_negative_ttl_rejected(self):
        with pytest.raises(ValidationError):
            FirebaseRestSettings(_env_file=None, cache_ttl_seconds=-1)


class TestGetSettings:
    def test_cached_until_cleared(self, monkeypatch):
        monkeypatch.setenv("FIREBASE_REST_LOG_LEVEL", "DEBUG")
        first = get_settings()
        assert get_settings() is first

        clear_settings_cache()
        assert get_settings() is not first

    def test_force_reload(self):
        first = get_settings()
        assert get_settings(_force_reload=True) is not first
