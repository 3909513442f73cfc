"""Immutable read results."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote

from firebase_rest.database.paths import sanitize_path

if TYPE_CHECKING:
    from firebase_rest.database.reference import Reference


@dataclass(frozen=True)
class DataSnapshot:
    """Value of one node captured by a single fetch.

    ``exists()`` and ``has_children()`` are computed from the value as it
    was at fetch time. ``ref`` is a fresh reference to the same path,
    without the query modifiers of the reference that was read.
    """

    ref: Reference
    _value: Any = field(default=None, repr=False)

    @property
    def key(self) -> str:
        """Read path with the ``.json`` suffix stripped, e.g. ``/users/ada``.

        Unlike ``ref.key`` this is the full path, not the last segment.
        """
        return self.ref.path

    @property
    def path(self) -> str:
        return self.ref.path

    def val(self) -> Any:
        return self._value

    def exists(self) -> bool:
        return self._value is not None

    def has_children(self) -> bool:
        return isinstance(self._value, (dict, list))

    def num_children(self) -> int:
        return sum(1 for _ in self._children())

    def _child_value(self, child_path: str) -> Any:
        value = self._value
        for segment in sanitize_path(child_path).strip("/").split("/"):
            if not segment:
                continue
            if isinstance(value, dict):
                value = value.get(unquote(segment))
            elif isinstance(value, list) and unquote(segment).isdigit():
                index = int(unquote(segment))
                value = value[index] if index < len(value) else None
            else:
                return None
        return value

    def child(self, child_path: str) -> DataSnapshot:
        """Snapshot of a descendant, taken from this snapshot's value."""
        return DataSnapshot(self.ref.child(child_path), self._child_value(child_path))

    def has_child(self, child_path: str) -> bool:
        return self._child_value(child_path) is not None

    def _children(self) -> Iterator[tuple[str, Any]]:
        if isinstance(self._value, dict):
            yield from ((str(k), v) for k, v in self._value.items())
        elif isinstance(self._value, list):
            yield from ((str(i), v) for i, v in enumerate(self._value) if v is not None)

    def for_each(self, action: Callable[[DataSnapshot], Any]) -> bool:
        """Call ``action`` for each child; stop early when it returns ``True``.

        Returns ``True`` if iteration was stopped early.
        """
        for child_key, child_value in self._children():
            if action(DataSnapshot(self.ref.child(child_key), child_value)) is True:
                return True
        return False


__all__ = ["DataSnapshot"]
