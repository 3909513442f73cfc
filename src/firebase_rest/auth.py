"""
Identity token lookup for authorizing REST requests.

The host application owns authentication; the client only needs the current
user's ID token at request time. :func:`host_token_provider` adapts a host
handle exposing ``auth().current_user.get_id_token()`` to an async
zero-argument callable, the shape the transport consumes.

No signed-in user, or a user without a token, is not an error: the request
simply goes out unauthenticated and the database rules decide.

Tags:
    auth, id-token, firebase-rest
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

TokenProvider = Callable[[], Awaitable[str | None]]


class User(Protocol):
    def get_id_token(self) -> str | None | Awaitable[str | None]: ...


class Auth(Protocol):
    current_user: User | None


def host_token_provider(firebase: Any) -> TokenProvider:
    """Build a :data:`TokenProvider` reading ``firebase.auth().current_user``.

    ``get_id_token`` may be synchronous or return an awaitable.
    """

    async def id_token() -> str | None:
        auth_factory = getattr(firebase, "auth", None)
        if auth_factory is None:
            return None
        user = getattr(auth_factory(), "current_user", None)
        if user is None:
            return None
        token = user.get_id_token()
        if inspect.isawaitable(token):
            token = await token
        return token or None

    return id_token


def static_token_provider(token: str | None) -> TokenProvider:
    """Provider returning a fixed token (service credentials, tests)."""

    async def id_token() -> str | None:
        return token

    return id_token


async def no_token() -> str | None:
    return None


__all__ = [
    "TokenProvider",
    "User",
    "Auth",
    "host_token_provider",
    "static_token_provider",
    "no_token",
]
