"""
firebase-rest - the realtime database client surface over the REST API.

Lets code written against the socket-based realtime client run unmodified
against the stateless HTTP JSON-tree API: ``database -> reference -> query
-> snapshot`` keep their shape, and every operation is a single request.

    >>> from firebase_rest import create_firebase_rest
    >>> firebase = create_firebase_rest(host)
    >>> snapshot = await firebase.database().ref("rooms").limit_to_last(10).get()
"""

__version__ = "0.1.0"

from firebase_rest.client import Database, FirebaseREST, create_firebase_rest
from firebase_rest.core.errors import (
    ConfigurationError,
    FirebaseRestError,
    HttpError,
    UnsupportedEventError,
)
from firebase_rest.core.settings import FirebaseRestSettings
from firebase_rest.database import DataSnapshot, EventType, Reference, ServerValue

__all__ = [
    "__version__",
    "create_firebase_rest",
    "FirebaseREST",
    "Database",
    "Reference",
    "DataSnapshot",
    "EventType",
    "ServerValue",
    "FirebaseRestSettings",
    "FirebaseRestError",
    "ConfigurationError",
    "HttpError",
    "UnsupportedEventError",
]
