from __future__ import annotations
import re

_non_alnum_pattern = re.compile(r"[^a-zA-Z0-9]")


def normalize_service_name(name: str) -> str:
    """Reduce a user-supplied service name to its registry key.

    Strips everything outside [a-zA-Z0-9] and lowercases, so "Last.fm",
    "LASTFM" and "last-fm" all map to "lastfm".
    """
    return _non_alnum_pattern.sub("", name).lower()

__all__ = ["normalize_service_name"]
