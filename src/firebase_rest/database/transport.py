"""
HTTP transport for the REST database API.

Every read and write goes through :meth:`RestTransport.request`, the one
place that knows about HTTP:

- the current ID token is attached as the ``auth`` query parameter when the
  token provider yields one,
- the connection-status pseudo-path is answered locally with ``false``,
  since a stateless transport never holds a live connection,
- a status code of 400 or above raises :class:`HttpError`.

The underlying ``httpx.AsyncClient`` is injectable so hosts can share
connection pools and tests can plug in ``httpx.MockTransport``.

Tags:
    http, httpx, transport, firebase-rest
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import httpx

from firebase_rest.auth import TokenProvider, no_token
from firebase_rest.core.errors import HttpError
from firebase_rest.core.logging import get_logger
from firebase_rest.database.query import QueryParam

logger = get_logger(__name__)

CONNECTED_PATH = "/.info/connected"
JSON_SUFFIX = ".json"

_NO_BODY = object()


class RestTransport:
    """Issues single HTTP requests against ``<path>.json`` URLs.

    Args:
        http_client: Client used for all requests.
        token_provider: Async callable returning the current ID token or ``None``.
        owns_client: Close ``http_client`` in :meth:`aclose`.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token_provider: TokenProvider = no_token,
        *,
        owns_client: bool = False,
    ):
        self._client = http_client
        self._token_provider = token_provider
        self._owns_client = owns_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._client

    async def request(
        self,
        method: str,
        url: httpx.URL,
        *,
        params: Mapping[str, str] | None = None,
        body: Any = _NO_BODY,
    ) -> httpx.Response:
        """Send one request and return the successful response.

        Args:
            method: ``GET``, ``PUT``, ``POST``, ``PATCH`` or ``DELETE``.
            url: Request URL without query parameters.
            params: Query parameters (already JSON-encoded values).
            body: JSON-serializable payload; omitted when not given.

        Raises:
            HttpError: The server answered with a status code >= 400.
            httpx.HTTPError: The request could not be sent.
        """
        if url.path == CONNECTED_PATH + JSON_SUFFIX:
            return httpx.Response(200, content=b"false", request=httpx.Request(method, url))

        query = dict(params or {})
        token = await self._token_provider()
        if token:
            query[QueryParam.AUTH.value] = token

        headers = {}
        content = None
        if body is not _NO_BODY:
            content = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"

        # Merge into the URL so a base query (emulator ``ns``) survives
        response = await self._client.request(
            method,
            url.copy_merge_params(query) if query else url,
            content=content,
            headers=headers or None,
        )
        logger.debug(
            "request_completed",
            method=method,
            path=url.path,
            status=response.status_code,
            authenticated=bool(token),
        )

        if response.status_code >= 400:
            raise HttpError(
                response.status_code,
                url=str(url),
                method=method,
                body=response.text[:500],
            )
        return response

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = [
    "CONNECTED_PATH",
    "JSON_SUFFIX",
    "RestTransport",
]
