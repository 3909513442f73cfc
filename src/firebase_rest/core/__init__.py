"""firebase-rest core -- cross-cutting primitives shared by the client.

Architecture::

    errors.py      Structured error hierarchy (FirebaseRestError, HttpError)
    logging.py     Structured logging (structlog)
    settings.py    FirebaseRestSettings (pydantic-settings, FIREBASE_REST_*)
    cache.py       RequestCache: URL → fetch future, fixed TTL eviction
"""

from firebase_rest.core.cache import DEFAULT_TTL_SECONDS, RequestCache
from firebase_rest.core.errors import (
    ConfigurationError,
    ErrorCategory,
    ErrorContext,
    FirebaseRestError,
    HttpError,
    UnsupportedEventError,
    categorize_error,
    is_retryable,
)
from firebase_rest.core.logging import configure_logging, get_logger
from firebase_rest.core.settings import (
    FirebaseRestSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # cache
    "DEFAULT_TTL_SECONDS",
    "RequestCache",
    # errors
    "ConfigurationError",
    "ErrorCategory",
    "ErrorContext",
    "FirebaseRestError",
    "HttpError",
    "UnsupportedEventError",
    "categorize_error",
    "is_retryable",
    # logging
    "configure_logging",
    "get_logger",
    # settings
    "FirebaseRestSettings",
    "clear_settings_cache",
    "get_settings",
]
