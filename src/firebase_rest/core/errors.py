"""
Structured error types for firebase-rest.

Provides a small hierarchy of typed errors with metadata for retry
decisions, error categorization and root cause analysis through error
chaining.

Instead of generic exceptions that lose context, FirebaseRestError and its
subclasses carry:
- **Category:** What kind of error (network, validation, config)
- **Retryable:** Whether the request can be retried as-is
- **Context:** Structured metadata such as URL, path, HTTP status and event
- **Cause:** Chained underlying exception for root cause analysis

Manifesto:
    - **Typed Error Hierarchy:** One error type per failure the client reports
    - **Explicit Retry Semantics:** Each error knows if it's retryable
    - **Rich Context:** Errors carry metadata for logging
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                     FirebaseRestError                         │
        │           (category, retryable, context, cause)               │
        ├──────────────────────────────────────────────────────────────┤
        │                                                               │
        │  ConfigurationError     HttpError        UnsupportedEventError│
        │  (CONFIG)               (NETWORK)        (VALIDATION)         │
        │  databaseURL missing    status >= 400    once/on event kind   │
        │                                                               │
        └──────────────────────────────────────────────────────────────┘

Examples:
    Raising an HTTP error for a failed response:

    >>> error = HttpError(503, url="https://demo.firebaseio.com/a.json")
    >>> error.status_code
    503
    >>> error.retryable
    True

    Adding context to an error:

    >>> error = UnsupportedEventError("child_moved", operation="once")
    >>> error.with_context(path="/rooms")
    UnsupportedEventError(...)
    >>> error.context.path
    '/rooms'

Guardrails:
    ❌ DON'T: Put ID tokens into error context or messages
    ✅ DO: Keep the URL without the ``auth`` query parameter

    ❌ DON'T: Swallow the original httpx exception
    ✅ DO: Pass it as cause= for error chaining

Tags:
    error-handling, exception-hierarchy, retry-logic, error-context,
    firebase-rest

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        NETWORK: Transport failures and non-success HTTP statuses
        CONFIG: Missing or invalid client configuration
        VALIDATION: Unsupported arguments (event kinds, payload shapes)
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    NETWORK = "NETWORK"
    CONFIG = "CONFIG"
    VALIDATION = "VALIDATION"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover what a database request knows about itself; anything
    else goes into ``metadata``. ``to_dict()`` serializes non-None fields for
    structured logging.

    Examples:
        >>> ctx = ErrorContext(path="/users/ada", method="GET", http_status=404)
        >>> ctx.to_dict()
        {'path': '/users/ada', 'method': 'GET', 'http_status': 404}

    Attributes:
        path: Sanitized database path of the reference
        url: Request URL (never includes the ``auth`` parameter)
        method: HTTP method of the request
        http_status: HTTP status code if applicable
        event: Event name passed to ``on``/``once``
        operation: Client operation name (``get``, ``set``, ``once`` ...)
        metadata: Additional key-value pairs
    """

    path: str | None = None
    url: str | None = None
    method: str | None = None
    http_status: int | None = None
    event: str | None = None
    operation: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["path", "url", "method", "http_status", "event", "operation"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class FirebaseRestError(Exception):
    """
    Base exception for all firebase-rest errors.

    Subclasses set ``default_category`` and ``default_retryable`` class
    attributes to provide sensible defaults.

    Examples:
        >>> error = FirebaseRestError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["retryable"]
        False
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> FirebaseRestError:
        """
        Add context to this error (fluent API).

        Usage:
            raise HttpError(500).with_context(path="/rooms", operation="push")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class ConfigurationError(FirebaseRestError):
    """Required client configuration (the database URL) is missing.

    Raised lazily, on first use of the database, so hosts that never touch
    the database can run without configuring it.
    """

    default_category = ErrorCategory.CONFIG
    default_retryable = False


class HttpError(FirebaseRestError):
    """The REST API answered with a status code >= 400.

    5xx and 429 responses are marked retryable, everything else is not.
    """

    default_category = ErrorCategory.NETWORK
    default_retryable = False

    def __init__(
        self,
        status_code: int,
        message: str | None = None,
        *,
        url: str | None = None,
        method: str | None = None,
        body: str | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(
            message or f"Response was not OK. ({status_code})",
            retryable=status_code >= 500 or status_code == 429,
            context=ErrorContext(url=url, method=method, http_status=status_code),
            cause=cause,
        )
        self.status_code = status_code
        self.body = body


class UnsupportedEventError(FirebaseRestError):
    """An event kind other than ``value`` was passed to ``once`` or ``on``."""

    default_category = ErrorCategory.VALIDATION
    default_retryable = False

    def __init__(self, event: Any, *, operation: str = "once"):
        event_name = getattr(event, "value", event)
        super().__init__(
            f"Unsupported firebase database {operation} event: {event_name!r}",
            context=ErrorContext(event=str(event_name), operation=operation),
        )
        self.event = event_name


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Check whether an error is worth retrying after the cache TTL elapses."""
    if isinstance(error, FirebaseRestError):
        return error.retryable
    return isinstance(error, (httpx.TransportError, ConnectionError, TimeoutError))


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, FirebaseRestError):
        return error.category
    if isinstance(error, (httpx.TransportError, ConnectionError, OSError)):
        return ErrorCategory.NETWORK
    if isinstance(error, (ValueError, TypeError)):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "FirebaseRestError",
    "ConfigurationError",
    "HttpError",
    "UnsupportedEventError",
    "is_retryable",
    "categorize_error",
]
