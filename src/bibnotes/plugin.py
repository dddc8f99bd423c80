"""BibTeX citation transformer.

Typical use::

    transformer = BibtexCitations("refs.bib", template="apa")
    tree = await transformer.transform(tree)
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from bibnotes.bibliography.loader import load_bibliography
from bibnotes.config import DEFAULT_TEMPLATE, Settings
from bibnotes.errors import ConfigError
from bibnotes.logging import get_logger
from bibnotes.models.tree import Node
from bibnotes.resolver import resolve_citations

logger = get_logger(__name__)


class BibtexCitations:
    """Turn `(@key)` markers into footnotes backed by a BibTeX file.

    The bibliography is read again on every call; nothing is shared between calls.

    Args:
        bibtex_file: Path to the `.bib` file. Required.
        template: Bibliography style name, `apa` when not given.

    Raises:
        ConfigError: If no bibliography path is given.
    """

    def __init__(self, bibtex_file: str | Path | None, template: str | None = None) -> None:
        if bibtex_file is None or not str(bibtex_file).strip():
            raise ConfigError("a bibtex_file path to the .bib file is required")
        self.bibtex_file = Path(bibtex_file)
        self.template = template or DEFAULT_TEMPLATE

    @classmethod
    def from_settings(cls, settings: Settings) -> "BibtexCitations":
        return cls(settings.bibtex_file, settings.template)

    async def transform(self, tree: Node) -> Node:
        """Resolve citations in `tree` in place and return it."""

        bibliography = await load_bibliography(self.bibtex_file)
        logger.debug("Loaded %d entries from %s", len(bibliography), self.bibtex_file)
        return resolve_citations(tree, bibliography, self.template)

    def run(self, tree: Node) -> Node:
        """Blocking version of :meth:`transform`."""

        return asyncio.run(self.transform(tree))
