"""
Mutable query state owned by a single reference.

A ``QueryState`` is the parameter half of a reference's request URL:
ordering and pagination parameters that narrow what a read returns. It is
mutated in place by the reference's query modifiers, never copied.

Manifesto:
    Code written for the realtime client chains modifiers and then reads:
    ``ref.order_by_child("score").limit_to_last(10).get()``. The REST API
    expresses the same thing as query parameters. Keeping the state as a
    plain, owned builder keeps the translation one-to-one.

    - **Fixed vocabulary:** Only the REST API's parameter names are accepted
    - **JSON-encoded values:** What the REST API expects on the wire
    - **Default ordering:** Range/limit parameters require an ``orderBy``;
      ``"$key"`` is filled in at request time when none was chosen

Tags:
    query, ordering, pagination, firebase-rest
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any


class QueryParam(str, Enum):
    """Query parameter names understood by the REST API."""

    ORDER_BY = "orderBy"
    LIMIT_TO_FIRST = "limitToFirst"
    LIMIT_TO_LAST = "limitToLast"
    START_AFTER = "startAfter"
    END_BEFORE = "endBefore"
    AUTH = "auth"


ORDER_BY_KEY = json.dumps("$key")
ORDER_BY_VALUE = json.dumps("$value")

# Parameters a reference may carry; auth is added per request by the transport
_QUERY_PARAMS = frozenset(p.value for p in QueryParam if p is not QueryParam.AUTH)


def encode_value(value: Any) -> str:
    """JSON-encode a query value: numbers bare, strings quoted."""
    return json.dumps(value)


def encode_limit(limit: int) -> str:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise ValueError(f"Query limit must be a non-negative integer, got {limit!r}")
    return str(limit)


class QueryState:
    """Parameter name → serialized value for one reference.

    Example:
        state = QueryState()
        state.set(QueryParam.LIMIT_TO_FIRST, "10")
        state.resolve()  # {"limitToFirst": "10", "orderBy": '"$key"'}
    """

    def __init__(self) -> None:
        self._params: dict[str, str] = {}

    def set(self, name: QueryParam | str, value: str) -> None:
        name = QueryParam(name).value
        if name not in _QUERY_PARAMS:
            raise ValueError(f"{name!r} cannot be stored on a reference")
        self._params[name] = value

    def get(self, name: QueryParam | str) -> str | None:
        return self._params.get(QueryParam(name).value)

    def clear(self) -> None:
        self._params.clear()

    def __bool__(self) -> bool:
        return bool(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def as_dict(self) -> dict[str, str]:
        return dict(self._params)

    def resolve(self) -> dict[str, str]:
        """Parameters to send on a read, sorted by name.

        Injects ordering by key when any parameter is set without an
        explicit ``orderBy``. The stored state is left untouched.
        """
        params = dict(self._params)
        if params and QueryParam.ORDER_BY.value not in params:
            params[QueryParam.ORDER_BY.value] = ORDER_BY_KEY
        return dict(sorted(params.items()))


__all__ = [
    "QueryParam",
    "QueryState",
    "ORDER_BY_KEY",
    "ORDER_BY_VALUE",
    "encode_value",
    "encode_limit",
]
