"""
Client entry point: wrap a host app handle into a REST-backed database.

:func:`create_firebase_rest` takes an existing app/auth/storage-capable
handle and returns a like-shaped :class:`FirebaseREST` whose ``database()``
talks to the REST API instead of a realtime socket. ``app``, ``auth`` and
``storage`` are forwarded unchanged.

Manifesto:
    Pages that only read a little data should not have to open a socket
    and load the realtime client. Swapping the handle is the whole
    migration: the object graph and call contracts stay the same.

    - **Progressive enhancement:** A missing database URL only fails when
      the database is actually used
    - **Per-client state:** Each client owns its request cache and transport
    - **Pass-through:** Host app/auth/storage handles are not wrapped

Architecture:
    ::

        create_firebase_rest(firebase)
            → FirebaseREST
                ├── app / auth / storage       (host handles, unchanged)
                └── database()                 → Database
                      ├── ref(path)            → Reference
                      ├── go_online()          (no-op)
                      └── go_offline()         (no-op)
                    database.ServerValue       → ServerValue sentinels

Examples:
    >>> from firebase_rest import create_firebase_rest
    >>> host.app().options
    {"databaseURL": "https://demo.firebaseio.com"}
    >>> firebase = create_firebase_rest(host)
    >>> db = firebase.database()
    >>> snapshot = await db.ref("users/ada").get()

Tags:
    client, entry-point, progressive-enhancement, firebase-rest

Doc-Types:
    - API Reference
    - Getting Started
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx

from firebase_rest.auth import TokenProvider, host_token_provider
from firebase_rest.core.cache import RequestCache
from firebase_rest.core.errors import ConfigurationError
from firebase_rest.core.logging import get_logger
from firebase_rest.core.settings import FirebaseRestSettings, get_settings
from firebase_rest.database.paths import ROOT_PATH, sanitize_path
from firebase_rest.database.reference import Reference
from firebase_rest.database.server_value import ServerValue
from firebase_rest.database.transport import JSON_SUFFIX, RestTransport

logger = get_logger(__name__)

DATABASE_URL_OPTION = "databaseURL"


def _app_option(firebase: Any, name: str) -> Any:
    app_factory = getattr(firebase, "app", None)
    if app_factory is None:
        return None
    options = getattr(app_factory(), "options", None)
    if options is None:
        return None
    if hasattr(options, "get"):
        return options.get(name)
    return getattr(options, name, None)


class DatabaseUrlResolver:
    """Lazy getter for the database base URL.

    Looks in the host app options first (``databaseURL``), then in settings.
    Raises :class:`ConfigurationError` on every call while neither is set.
    """

    def __init__(self, firebase: Any, settings: FirebaseRestSettings):
        self._firebase = firebase
        self._settings = settings
        self._url: httpx.URL | None = None

    def __call__(self) -> httpx.URL:
        if self._url is None:
            raw = _app_option(self._firebase, DATABASE_URL_OPTION) or self._settings.database_url
            if not raw:
                raise ConfigurationError(
                    f"Firebase '{DATABASE_URL_OPTION}' option not provided."
                ).with_context(operation="ref")
            url = httpx.URL(raw)
            if url.scheme not in ("http", "https") or not url.host:
                raise ConfigurationError(
                    f"Firebase '{DATABASE_URL_OPTION}' must be an http(s) URL, got {raw!r}"
                ).with_context(operation="ref")
            self._url = url
        return self._url


class Database:
    """``{ref, go_online, go_offline}`` backed by the REST API."""

    def __init__(
        self,
        *,
        resolve_url: Callable[[], httpx.URL],
        transport: RestTransport,
        cache: RequestCache,
        settings: FirebaseRestSettings,
    ):
        self._resolve_url = resolve_url
        self.transport = transport
        self.cache = cache
        self.settings = settings

    def url_for(self, path: str) -> httpx.URL:
        """``<database_url>/<path>.json`` for a sanitized path."""
        base = self._resolve_url()
        request_path = ("/" if path == ROOT_PATH else path) + JSON_SUFFIX
        return base.copy_with(path=base.path.rstrip("/") + request_path)

    def ref(self, path: str = ROOT_PATH) -> Reference:
        return Reference(self, sanitize_path(path))

    def go_online(self) -> None:
        """No-op: there is no connection to resume."""

    def go_offline(self) -> None:
        """No-op: there is no connection to drop."""


class DatabaseAccessor:
    """Callable returning the client's :class:`Database`; carries ``ServerValue``."""

    ServerValue = ServerValue

    def __init__(self, database: Database):
        self._database = database

    def __call__(self) -> Database:
        return self._database


class FirebaseREST:
    """Host handle look-alike whose database is served over HTTP.

    Args:
        firebase: Host handle exposing ``app()``, ``auth()`` and ``storage()``
            (any of them may be missing).
        settings: Overrides the environment-derived settings.
        http_client: Shared ``httpx.AsyncClient``; a private one is created
            (and closed by :meth:`aclose`) when omitted.
        token_provider: Overrides the ID token lookup through ``firebase.auth()``.
    """

    def __init__(
        self,
        firebase: Any,
        *,
        settings: FirebaseRestSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
        token_provider: TokenProvider | None = None,
    ):
        self.settings = settings or get_settings()
        self.app = getattr(firebase, "app", None)
        self.auth = getattr(firebase, "auth", None)
        self.storage = getattr(firebase, "storage", None)

        owns_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=self.settings.request_timeout_seconds)
        self._transport = RestTransport(
            http_client,
            token_provider or host_token_provider(firebase),
            owns_client=owns_client,
        )
        self._cache = RequestCache(ttl_seconds=self.settings.cache_ttl_seconds)
        self.database = DatabaseAccessor(
            Database(
                resolve_url=DatabaseUrlResolver(firebase, self.settings),
                transport=self._transport,
                cache=self._cache,
                settings=self.settings,
            )
        )

    async def aclose(self) -> None:
        """Forget cached reads and close the owned HTTP client."""
        self._cache.clear()
        await self._transport.aclose()

    async def __aenter__(self) -> FirebaseREST:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()


def create_firebase_rest(
    firebase: Any,
    *,
    settings: FirebaseRestSettings | None = None,
    http_client: httpx.AsyncClient | None = None,
    token_provider: TokenProvider | None = None,
) -> FirebaseREST:
    """Wrap ``firebase`` into a :class:`FirebaseREST` handle."""
    client = FirebaseREST(
        firebase,
        settings=settings,
        http_client=http_client,
        token_provider=token_provider,
    )
    logger.debug(
        "client_created",
        cache_ttl_seconds=client.settings.cache_ttl_seconds,
        shared_http_client=http_client is not None,
    )
    return client


__all__ = [
    "Database",
    "DatabaseAccessor",
    "DatabaseUrlResolver",
    "FirebaseREST",
    "create_firebase_rest",
]
