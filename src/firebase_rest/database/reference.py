"""
References: chainable queries, cached reads, emulated events and writes.

A :class:`Reference` names one node of the remote JSON tree and owns the
query state used when reading it. Its surface mirrors the realtime client
(``child``, ``parent``, ``order_by_*``, ``limit_to_*``, ``get``, ``on``,
``once``, ``off``, ``set``, ``push``, ``update``, ``remove``) while every
call maps to a single HTTP request.

Manifesto:
    Code written for a socket-based realtime database should run unchanged
    on a stateless HTTP API. The reference keeps the realtime call contracts
    (callbacks, chaining, ``on("value")``) and is explicit about what cannot
    be emulated: child events never fire and nothing pushes updates.

    - **Modifiers mutate in place:** ``ref.limit_to_first(5) is ref``
    - **Reads are coalesced:** Same URL inside the TTL → same future
    - **Writes never invalidate:** A read inside the TTL may be stale
    - **on() never raises:** Errors go to ``on_error`` and the log

Architecture:
    ::

        Reference(path="/rooms", query=QueryState)
          ├── order_by_* / limit_to_* / start_after / end_before → self
          ├── get()  → RequestCache.get_or_fetch(url+params) → DataSnapshot
          ├── once("value") / on("value") → get() + callbacks
          └── set / push / update / remove → RestTransport (PUT/POST/PATCH/DELETE)

Examples:
    >>> rooms = db.ref("rooms")
    >>> snapshot = await rooms.order_by_child("created").limit_to_last(20).get()
    >>> new_room = await rooms.push({"name": "lobby", "created": ServerValue.TIMESTAMP})
    >>> new_room.key
    '-NxY...'

Guardrails:
    ❌ DON'T: Share a reference with pending modifiers between tasks
    ✅ DO: Build the query and read it from one logical caller

    ❌ DON'T: Expect ``on("child_added", cb)`` to ever call ``cb``
    ✅ DO: Read initial state with ``on("value", cb)`` or ``once("value")``

Tags:
    reference, query, snapshot, events, mutations, firebase-rest

Doc-Types:
    - API Reference
    - Migration Guide
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from firebase_rest.core.errors import UnsupportedEventError, categorize_error, is_retryable
from firebase_rest.core.logging import get_logger
from firebase_rest.database.events import REALTIME_ONLY_EVENTS, EventType, parse_event
from firebase_rest.database.paths import join_path, last_segment, parent_path
from firebase_rest.database.query import (
    ORDER_BY_KEY,
    ORDER_BY_VALUE,
    QueryParam,
    QueryState,
    encode_limit,
    encode_value,
)
from firebase_rest.database.snapshot import DataSnapshot

if TYPE_CHECKING:
    from firebase_rest.client import Database

logger = get_logger(__name__)

T = TypeVar("T")

SuccessCallback = Callable[[DataSnapshot], Any]
ErrorCallback = Callable[[Exception], Any]
CompleteCallback = Callable[[Exception | None], Any]


class Reference:
    """Handle on one node of the remote tree plus its mutable query state.

    Create references through :meth:`Database.ref` or :meth:`child`; the
    path passed here must already be sanitized.
    """

    def __init__(self, database: Database, path: str):
        self._database = database
        self._path = path
        self._url = database.url_for(path)
        self._query = QueryState()

    # ------------------------------------------------------------------ #
    # Identity
    # ------------------------------------------------------------------ #

    @property
    def key(self) -> str | None:
        """Last path segment, or ``None`` at the root."""
        return last_segment(self._path)

    @property
    def path(self) -> str:
        return self._path

    @property
    def url(self) -> httpx.URL:
        """Request URL of this node, without query parameters."""
        return self._url

    @property
    def ref(self) -> Reference:
        return self

    @property
    def parent(self) -> Reference | None:
        path = parent_path(self._path)
        return None if path is None else Reference(self._database, path)

    @property
    def root(self) -> Reference:
        return self._database.ref()

    @property
    def database(self) -> Database:
        return self._database

    @property
    def query(self) -> QueryState:
        return self._query

    def child(self, path: str) -> Reference:
        """New reference for ``path`` below this one, with no query state."""
        return Reference(self._database, join_path(self._path, path))

    def is_equal(self, other: object) -> bool:
        """Same database, path and query parameters."""
        return (
            isinstance(other, Reference)
            and other._database is self._database
            and other._path == self._path
            and other._query.as_dict() == self._query.as_dict()
        )

    def __str__(self) -> str:
        return str(self._url)

    def __repr__(self) -> str:
        return f"Reference({self._path!r}, query={self._query.as_dict()!r})"

    # ------------------------------------------------------------------ #
    # Query modifiers (mutate this reference, return it)
    # ------------------------------------------------------------------ #

    def order_by_key(self) -> Reference:
        self._query.set(QueryParam.ORDER_BY, ORDER_BY_KEY)
        return self

    def order_by_value(self) -> Reference:
        self._query.set(QueryParam.ORDER_BY, ORDER_BY_VALUE)
        return self

    def order_by_child(self, path: str) -> Reference:
        if not path or not path.strip("/"):
            raise ValueError("order_by_child() requires a non-empty child path")
        self._query.set(QueryParam.ORDER_BY, encode_value(path.strip("/")))
        return self

    def limit_to_first(self, limit: int) -> Reference:
        self._query.set(QueryParam.LIMIT_TO_FIRST, encode_limit(limit))
        return self

    def limit_to_last(self, limit: int) -> Reference:
        self._query.set(QueryParam.LIMIT_TO_LAST, encode_limit(limit))
        return self

    def start_after(self, value: Any) -> Reference:
        self._query.set(QueryParam.START_AFTER, encode_value(value))
        return self

    def end_before(self, value: Any) -> Reference:
        self._query.set(QueryParam.END_BEFORE, encode_value(value))
        return self

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def request_key(self) -> str:
        """Full read URL for the current query state; the cache key."""
        return str(self._url.copy_merge_params(self._query.resolve()))

    def get(self) -> asyncio.Future[DataSnapshot]:
        """Read this node (with its query) once.

        Returns a future shared by every ``get()`` producing the same URL
        within the cache TTL. Must be called from a running event loop.
        """
        params = self._query.resolve()
        return self._database.cache.get_or_fetch(
            self.request_key(),
            lambda: self._fetch_snapshot(params),
        )

    async def _fetch_snapshot(self, params: dict[str, str]) -> DataSnapshot:
        response = await self._database.transport.request("GET", self._url, params=params)
        value = json.loads(response.content) if response.content else None
        return DataSnapshot(Reference(self._database, self._path), value)

    # ------------------------------------------------------------------ #
    # Event emulation
    # ------------------------------------------------------------------ #

    async def once(
        self,
        event: EventType | str = EventType.VALUE,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> DataSnapshot:
        """Read once for ``value``; any other event raises ``UnsupportedEventError``.

        Errors are passed to ``on_error`` (when given) and then re-raised.
        """
        try:
            if parse_event(event, operation="once") is not EventType.VALUE:
                raise UnsupportedEventError(event, operation="once")
            snapshot = await self.get()
            if on_success is not None:
                on_success(snapshot)
            return snapshot
        except Exception as error:
            if on_error is not None:
                on_error(error)
            raise

    async def on(
        self,
        event: EventType | str,
        on_success: SuccessCallback,
        on_error: ErrorCallback | None = None,
    ) -> SuccessCallback:
        """Emulated subscription: ``value`` reads once, child events are ignored.

        This is a coroutine: ``ref.on("value", cb)`` without ``await`` (or
        scheduling it as a task) never performs the read.

        Never raises. Errors are logged outside production and passed to
        ``on_error`` when given. Returns ``on_success`` so it can be handed
        to :meth:`off`.
        """
        try:
            kind = parse_event(event, operation="on")
            if kind is EventType.VALUE:
                on_success(await self.get())
            elif kind not in REALTIME_ONLY_EVENTS:
                raise UnsupportedEventError(kind, operation="on")
        except Exception as error:
            self._report_on_error(error, event, on_error)
        return on_success

    def _report_on_error(
        self,
        error: Exception,
        event: EventType | str,
        on_error: ErrorCallback | None,
    ) -> None:
        # Silent in production; on_error still runs
        if not self._database.settings.is_production:
            logger.error(
                "firebase_rest.database.on",
                path=self._path,
                event_type=getattr(event, "value", event),
                error=repr(error),
                category=categorize_error(error).value,
                retryable=is_retryable(error),
            )
        if on_error is not None:
            on_error(error)

    def off(
        self,
        event: EventType | str | None = None,
        callback: SuccessCallback | None = None,
    ) -> None:
        """No-op: there are no subscriptions to cancel."""

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    async def _complete(
        self,
        operation: Awaitable[T],
        on_complete: CompleteCallback | None,
    ) -> T:
        try:
            result = await operation
        except Exception as error:
            if on_complete is not None:
                on_complete(error)
            raise
        if on_complete is not None:
            on_complete(None)
        return result

    async def _send(self, method: str, *, body: Any = None, has_body: bool = True) -> httpx.Response:
        transport = self._database.transport
        if has_body:
            return await transport.request(method, self._url, body=body)
        return await transport.request(method, self._url)

    async def set(self, value: Any, on_complete: CompleteCallback | None = None) -> None:
        """Overwrite this node with ``value`` (``PUT``)."""
        await self._complete(self._send("PUT", body=value), on_complete)

    async def push(
        self,
        value: Any = None,
        on_complete: CompleteCallback | None = None,
    ) -> Reference:
        """Append ``value`` under a server-generated key (``POST``).

        Returns the reference of the new child.
        """

        async def append() -> Reference:
            response = await self._send("POST", body=value)
            return self.child(response.json()["name"])

        return await self._complete(append(), on_complete)

    async def update(
        self,
        values: Mapping[str, Any],
        on_complete: CompleteCallback | None = None,
    ) -> None:
        """Merge ``values`` into this node (``PATCH``).

        A non-mapping ``values`` fails with ``TypeError`` through the same
        ``on_complete`` contract as a failed request.
        """

        async def merge() -> None:
            if not isinstance(values, Mapping):
                raise TypeError(f"update() expects a mapping, got {type(values).__name__}")
            await self._send("PATCH", body=dict(values))

        await self._complete(merge(), on_complete)

    async def remove(self, on_complete: CompleteCallback | None = None) -> None:
        """Delete this node (``DELETE``)."""
        await self._complete(self._send("DELETE", has_body=False), on_complete)


__all__ = [
    "Reference",
    "SuccessCallback",
    "ErrorCallback",
    "CompleteCallback",
]
