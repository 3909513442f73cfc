"""Event names of the realtime subscription API and how they are emulated.

Only ``value`` can be answered by a one-shot fetch. The ``child_*`` change
events need a persistent channel; ``on()`` accepts added/changed/removed as
silent no-ops so a ``value`` read still provides initial state, and
everything else is unsupported.
"""

from __future__ import annotations

from enum import Enum

from firebase_rest.core.errors import UnsupportedEventError


class EventType(str, Enum):
    VALUE = "value"
    CHILD_ADDED = "child_added"
    CHILD_CHANGED = "child_changed"
    CHILD_REMOVED = "child_removed"
    CHILD_MOVED = "child_moved"


# Accepted by on() without doing anything
REALTIME_ONLY_EVENTS = frozenset(
    {EventType.CHILD_ADDED, EventType.CHILD_CHANGED, EventType.CHILD_REMOVED}
)


def parse_event(event: EventType | str, *, operation: str) -> EventType:
    """Coerce ``event`` to an :class:`EventType` or raise ``UnsupportedEventError``."""
    try:
        return EventType(event)
    except ValueError:
        raise UnsupportedEventError(event, operation=operation) from None


__all__ = [
    "EventType",
    "REALTIME_ONLY_EVENTS",
    "parse_event",
]
