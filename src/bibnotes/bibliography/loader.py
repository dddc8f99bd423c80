"""Load BibTeX data and format single entries."""

from __future__ import annotations

import asyncio
from pathlib import Path

from pybtex.database import BibliographyData, parse_string
from pybtex.exceptions import PybtexError
from pybtex.style.formatting import BaseStyle

from bibnotes.bibliography.styles import get_style
from bibnotes.config import DEFAULT_TEMPLATE
from bibnotes.errors import BibliographyParseError, BibliographyReadError, FormatError
from bibnotes.logging import get_logger

logger = get_logger(__name__)


class Bibliography:
    """Parsed bibliography records, formatted one key at a time.

    Key lookup follows BibTeX and is case-insensitive.
    """

    def __init__(self, data: BibliographyData, *, source: str = "<string>") -> None:
        self._data = data
        self._source = source
        self._styles: dict[str, BaseStyle] = {}

    @property
    def source(self) -> str:
        return self._source

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._data.entries

    def __len__(self) -> int:
        return len(self._data.entries)

    def keys(self) -> list[str]:
        return list(self._data.entries.keys())

    def format(self, key: str, template: str = DEFAULT_TEMPLATE) -> str:
        """Render the entry for `key` as plain text.

        Args:
            key: Citation key.
            template: Formatting style name.

        Returns:
            The formatted bibliography entry.

        Raises:
            FormatError: If the key is unknown or the record cannot be rendered.
            ConfigError: If the style does not exist.
        """

        if key not in self:
            raise FormatError(key, f"citation key {key!r} not found in {self._source}")

        style = self._styles.get(template)
        if style is None:
            style = self._styles[template] = get_style(template)

        entry = self._data.entries[key]
        try:
            formatted = next(iter(style.format_entries([entry])))
            return formatted.text.render_as("text")
        except PybtexError as exc:
            raise FormatError(key, f"cannot format {key!r} with style {template!r}: {exc}") from exc


def parse_bibliography(text: str, *, source: str = "<string>") -> Bibliography:
    """Parse BibTeX source text.

    Raises:
        BibliographyParseError: If the text is not valid BibTeX.
    """

    try:
        data = parse_string(text, "bibtex")
    except PybtexError as exc:
        raise BibliographyParseError(f"invalid BibTeX in {source}: {exc}") from exc
    logger.debug("Parsed %d bibliography entries from %s", len(data.entries), source)
    return Bibliography(data, source=source)


def read_bibliography_source(path: str | Path) -> str:
    """Read raw BibTeX text from disk.

    Raises:
        BibliographyReadError: If the file cannot be read as UTF-8 text.
    """

    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BibliographyReadError(f"cannot read bibliography {path}: {exc}") from exc


async def load_bibliography(path: str | Path) -> Bibliography:
    """Read and parse a BibTeX file without blocking the event loop."""

    text = await asyncio.to_thread(read_bibliography_source, path)
    return parse_bibliography(text, source=str(path))
