"""
Centralized settings for firebase-rest.

Manifesto:
    The client has very few knobs, but each of them changes observable
    behavior (how stale a read may be, where requests go, whether swallowed
    subscription errors are logged). One validated, cached settings object
    resolves them from the environment in a single place.

All fields can be set via ``FIREBASE_REST_*`` environment variables (e.g.
``FIREBASE_REST_CACHE_TTL_SECONDS=5``) or a ``.env`` file. Values passed
explicitly to :func:`firebase_rest.create_firebase_rest` win over both.

Tags:
    firebase-rest, configuration, settings, pydantic, caching

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FirebaseRestSettings(BaseSettings):
    """firebase-rest configuration.

    Fields
    ──────
    database_url            : Fallback base location when the host app options
                              carry no ``databaseURL``
    cache_ttl_seconds       : Lifetime of a request-cache entry
    request_timeout_seconds : httpx timeout for clients the library creates
    environment             : ``production`` silences logging of swallowed
                              ``on()`` errors
    log_level               : structlog level used by ``configure_logging``
    """

    model_config = SettingsConfigDict(
        env_prefix="FIREBASE_REST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Database ─────────────────────────────────────────────────
    database_url: str = Field(default="", description="e.g. https://demo.firebaseio.com")

    # ── Request cache ────────────────────────────────────────────
    cache_ttl_seconds: float = Field(default=2.0, ge=0)

    # ── Transport ────────────────────────────────────────────────
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    # ── Observability ────────────────────────────────────────────
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, FirebaseRestSettings] = {}


def get_settings(*, _force_reload: bool = False) -> FirebaseRestSettings:
    """Load, validate, and cache a :class:`FirebaseRestSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    settings = FirebaseRestSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = [
    "FirebaseRestSettings",
    "get_settings",
    "clear_settings_cache",
]
