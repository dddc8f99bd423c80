"""Citation marker parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass

# `(@key)`: the key runs up to the first closing parenthesis.
_MARKER_RE = re.compile(r"\(@(?P<key>.*?)\)")


@dataclass(frozen=True)
class CitationMarker:
    """A citation marker found in a text value."""

    key: str
    start: int
    end: int


def find_citation_marker(text: str) -> CitationMarker | None:
    """Find the first citation marker in `text`.

    Args:
        text: Text that may include citation markers like `(@smith2020)`.

    Returns:
        The first marker with a non-empty key, or None.
    """

    for m in _MARKER_RE.finditer(text):
        if m.group("key"):
            return CitationMarker(key=m.group("key"), start=m.start(), end=m.end())
    return None


def extract_citation_keys(text: str) -> list[str]:
    """Extract citation keys from `(@key)` markers.

    Returns:
        Keys in first-seen order, without duplicates.
    """

    seen: set[str] = set()
    out: list[str] = []
    for m in _MARKER_RE.finditer(text):
        key = m.group("key")
        if key and key not in seen:
            out.append(key)
            seen.add(key)
    return out

