"""BibTeX loading and formatting."""

from __future__ import annotations

from bibnotes.bibliography.loader import (
    Bibliography,
    load_bibliography,
    parse_bibliography,
    read_bibliography_source,
)
from bibnotes.bibliography.protocol import CitationFormatter
from bibnotes.bibliography.styles import ApaStyle, available_styles, get_style

__all__ = [
    "ApaStyle",
    "Bibliography",
    "CitationFormatter",
    "available_styles",
    "get_style",
    "load_bibliography",
    "parse_bibliography",
    "read_bibliography_source",
]
