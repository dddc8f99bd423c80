"""Tests for the BibTeX citation transformer."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from conftest import document, paragraph, text

from bibnotes.config import Settings
from bibnotes.errors import BibliographyReadError, ConfigError, FormatError
from bibnotes.plugin import BibtexCitations


@pytest.mark.parametrize("value", [None, "", "   "])
def test_missing_bibtex_file_is_config_error(value: str | None) -> None:
    """It should fail before anything is read."""

    with pytest.raises(ConfigError):
        BibtexCitations(value)


def test_default_template_is_apa(bibtex_path: Path) -> None:
    assert BibtexCitations(bibtex_path).template == "apa"
    assert BibtexCitations(bibtex_path, template="plain").template == "plain"


def test_from_settings(bibtex_path: Path) -> None:
    settings = Settings(bibtex_file=bibtex_path, template="unsrt")
    transformer = BibtexCitations.from_settings(settings)
    assert transformer.bibtex_file == bibtex_path
    assert transformer.template == "unsrt"


def test_from_settings_without_file() -> None:
    with pytest.raises(ConfigError):
        BibtexCitations.from_settings(Settings(bibtex_file=None))


def test_transform_end_to_end(bibtex_path: Path) -> None:
    """It should replace the marker and append the APA entry."""

    tree = document(paragraph(text("See (@smith2020) for details.")))
    out = asyncio.run(BibtexCitations(bibtex_path).transform(tree))

    assert out is tree
    para, definition = tree.children
    assert [c.type for c in para.children] == ["text", "footnoteReference", "text"]
    assert para.children[1].identifier == "1"
    assert definition.type == "footnoteDefinition"
    assert definition.identifier == "1"
    assert definition.children[0].children[0].value.startswith("Smith, J., & Doe, A.")


def test_run_unknown_key_leaves_tree_untouched(bibtex_path: Path) -> None:
    tree = document(paragraph(text("(@smith2020) and (@ghost2000)")))
    before = tree.model_copy(deep=True)

    with pytest.raises(FormatError):
        BibtexCitations(bibtex_path).run(tree)

    assert tree == before


def test_run_unreadable_file_leaves_tree_untouched(tmp_path: Path) -> None:
    tree = document(paragraph(text("(@smith2020)")))
    before = tree.model_copy(deep=True)

    with pytest.raises(BibliographyReadError):
        BibtexCitations(tmp_path / "nope.bib").run(tree)

    assert tree == before


def test_bibliography_is_reloaded_per_call(bibtex_path: Path) -> None:
    """It should pick up changes to the .bib file between calls."""

    transformer = BibtexCitations(bibtex_path)
    transformer.run(document(paragraph(text("(@smith2020)"))))

    bibtex_path.write_text(
        "@misc{new2024, author = {New, Nora}, title = {fresh entry}, year = {2024}}\n",
        encoding="utf-8",
    )
    tree = transformer.run(document(paragraph(text("(@new2024)"))))
    assert tree.children[-1].children[0].children[0].value.startswith("New, N.")
