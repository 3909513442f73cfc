"""REST emulation of the realtime database object graph.

Architecture::

    paths.py          sanitize_path: canonical, percent-encoded paths
    query.py          QueryState: orderBy / limitTo* / startAfter / endBefore
    snapshot.py       DataSnapshot: immutable result of one read
    events.py         EventType + which events on()/once() can emulate
    transport.py      RestTransport: auth token, status mapping, .info/connected
    reference.py      Reference: modifiers, cached get(), on/once/off, writes
    server_value.py   ServerValue sentinels (TIMESTAMP, increment)
"""

from firebase_rest.database.events import EventType
from firebase_rest.database.paths import sanitize_path
from firebase_rest.database.query import QueryParam, QueryState
from firebase_rest.database.reference import Reference
from firebase_rest.database.server_value import ServerValue
from firebase_rest.database.snapshot import DataSnapshot
from firebase_rest.database.transport import RestTransport

__all__ = [
    "DataSnapshot",
    "EventType",
    "QueryParam",
    "QueryState",
    "Reference",
    "RestTransport",
    "ServerValue",
    "sanitize_path",
]
