"""Placeholder values resolved by the database server itself."""

from __future__ import annotations

from typing import Any


class ServerValue:
    """Sentinels for ``set``/``push``/``update`` payloads.

    ``TIMESTAMP`` is replaced by the server's current time in milliseconds;
    ``increment(delta)`` atomically adds ``delta`` to the stored number.
    """

    TIMESTAMP: dict[str, Any] = {".sv": "timestamp"}

    @staticmethod
    def increment(delta: int | float) -> dict[str, Any]:
        if isinstance(delta, bool) or not isinstance(delta, (int, float)):
            raise TypeError(f"increment() expects a number, got {type(delta).__name__}")
        return {".sv": {"increment": delta}}


__all__ = ["ServerValue"]
