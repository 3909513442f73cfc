"""Path sanitization for database keys.

Turns arbitrary keys into one canonical, percent-encoded form so that
equivalent inputs (extra or trailing slashes) map to the same path and
therefore the same request URL and cache key.

    >>> sanitize_path("/a//b/")
    '/a/b'
    >>> sanitize_path("a/b")
    '/a/b'
    >>> sanitize_path("users/ada lovelace")
    '/users/ada%20lovelace'
"""

from __future__ import annotations

from urllib.parse import quote, unquote

ROOT_PATH = "/"


def sanitize_path(key: str | None = None) -> str:
    """Split on ``/``, drop empty segments and percent-encode each segment."""
    if not key:
        return ROOT_PATH
    segments = [quote(segment, safe="") for segment in key.split("/") if segment]
    return "/" + "/".join(segments)


def join_path(path: str, child: str) -> str:
    """Append raw ``child`` (which may itself contain slashes) to sanitized ``path``.

    Only ``child`` is encoded; ``path`` is already canonical.
    """
    child_path = sanitize_path(child)
    if child_path == ROOT_PATH:
        return path
    if path == ROOT_PATH:
        return child_path
    return path + child_path


def parent_path(path: str) -> str | None:
    """Drop the final segment; ``None`` for the root."""
    if path == ROOT_PATH:
        return None
    head, _, _ = path.rpartition("/")
    return head or ROOT_PATH


def last_segment(path: str) -> str | None:
    """Decoded final segment of ``path``; ``None`` for the root."""
    if path == ROOT_PATH:
        return None
    return unquote(path.rpartition("/")[2])


__all__ = [
    "ROOT_PATH",
    "sanitize_path",
    "join_path",
    "parent_path",
    "last_segment",
]
