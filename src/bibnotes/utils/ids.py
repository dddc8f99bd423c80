"""Footnote identifier allocation."""

from __future__ import annotations

from collections.abc import Set
from dataclasses import dataclass, field


@dataclass
class FootnoteIdAllocator:
    """Allocate numeric footnote identifiers that avoid existing ones.

    Each allocation starts from a reference rank and moves up until the candidate is neither an
    identifier already present in the document nor at or below the last value handed out by this
    allocator. Allocated values are therefore strictly increasing.
    """

    existing: Set[str] = field(default_factory=frozenset)
    watermark: int = 0

    def allocate(self, rank: int) -> int:
        if rank < 1:
            raise ValueError(f"rank must be >= 1, got {rank}")
        candidate = rank
        while format_footnote_id(candidate) in self.existing or candidate <= self.watermark:
            candidate += 1
        self.watermark = candidate
        return candidate


def format_footnote_id(n: int) -> str:
    """Format a numeric footnote id the way mdast stores identifiers."""

    return str(n)
