"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from bibnotes.errors import FormatError
from bibnotes.models.tree import Node

BIBTEX = """
@article{smith2020,
  author = {Smith, Jane and Doe, Alan},
  title = {deep learning for footnotes},
  journal = {Journal of Examples},
  volume = {12},
  number = {3},
  pages = {45--67},
  year = {2020},
}

@book{jones2019,
  author = {Jones, Mary},
  title = {a book about citations},
  publisher = {Example Press},
  year = {2019},
}
"""


class FakeFormatter:
    """In-memory formatter that records its calls."""

    def __init__(self, entries: dict[str, str]) -> None:
        self.entries = entries
        self.calls: list[tuple[str, str]] = []

    def format(self, key: str, template: str) -> str:
        self.calls.append((key, template))
        if key not in self.entries:
            raise FormatError(key)
        return self.entries[key]


def paragraph(*children: dict) -> dict:
    return {"type": "paragraph", "children": list(children)}


def text(value: str) -> dict:
    return {"type": "text", "value": value}


def document(*children: dict) -> Node:
    return Node.model_validate({"type": "root", "children": list(children)})


@pytest.fixture
def formatter() -> FakeFormatter:
    return FakeFormatter(
        {
            "smith2020": "Smith, J. (2020). Deep learning for footnotes.",
            "jones2019": "Jones, M. (2019). A book about citations.",
            "doe2021": "Doe, A. (2021). Another paper.",
        }
    )


@pytest.fixture
def bibtex_path(tmp_path: Path) -> Path:
    path = tmp_path / "refs.bib"
    path.write_text(BIBTEX, encoding="utf-8")
    return path
