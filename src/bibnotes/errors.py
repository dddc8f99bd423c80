"""Error types raised by bibnotes.

Every error aborts the current call. Nothing is retried or recovered internally; the host
pipeline decides whether to halt or report.
"""

from __future__ import annotations


class BibnotesError(RuntimeError):
    pass


class ConfigError(BibnotesError):
    """Required configuration is missing or invalid."""


class BibliographyReadError(BibnotesError):
    """The bibliography source could not be read."""


class BibliographyParseError(BibnotesError):
    """The bibliography source is not valid BibTeX."""


class FormatError(BibnotesError):
    """A citation key could not be formatted.

    Attributes:
        key: The citation key that has no record in the loaded bibliography.
    """

    def __init__(self, key: str, message: str | None = None) -> None:
        super().__init__(message or f"citation key {key!r} not found in bibliography")
        self.key = key
