"""Bibliography formatting interface consumed by the resolver."""

from __future__ import annotations

from typing import Protocol


class CitationFormatter(Protocol):
    """Formats one citation key as bibliography text."""

    def format(self, key: str, template: str) -> str:
        """Render `key` with the named style.

        Raises:
            FormatError: If `key` is unknown to the loaded bibliography.
        """
