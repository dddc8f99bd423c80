"""CLI entrypoints for bibnotes.

Documents are exchanged as mdast JSON, e.g. the output of a remark/unified parser.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from pydantic import ValidationError

from bibnotes.bibliography.styles import available_styles
from bibnotes.config import load_settings
from bibnotes.errors import BibnotesError
from bibnotes.logging import configure_logging, document_context, get_logger, log_exception
from bibnotes.models.tree import Node, document_stats, iter_text_nodes
from bibnotes.plugin import BibtexCitations
from bibnotes.utils.citations import extract_citation_keys

app = typer.Typer(add_completion=False, help="Turn (@key) citation markers into BibTeX footnotes")
logger = get_logger(__name__)


def _read_tree(path: Path) -> Node:
    try:
        return Node.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, ValidationError) as exc:
        raise typer.BadParameter(f"{path} is not a readable mdast JSON document: {exc}") from exc


@app.command()
def resolve(
    input_path: Path = typer.Argument(..., metavar="INPUT", help="mdast JSON document"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output JSON file (stdout when omitted)"
    ),
    bibtex_file: str | None = typer.Option(
        None,
        "--bibtex",
        "-b",
        help="BibTeX file (overrides BIBNOTES_BIBTEX_FILE)",
    ),
    template: str | None = typer.Option(
        None, "--template", "-t", help="Bibliography style (overrides BIBNOTES_TEMPLATE)"
    ),
) -> None:
    """Replace citation markers with footnotes and append the bibliography entries."""

    settings = load_settings()
    if bibtex_file is not None:
        settings.bibtex_file = Path(bibtex_file) if bibtex_file.strip() else None
    if template is not None:
        settings.template = template

    configure_logging(settings.log_level)

    with document_context(str(input_path)):
        try:
            transformer = BibtexCitations.from_settings(settings)
            tree = _read_tree(input_path)
            transformer.run(tree)
        except BibnotesError as exc:
            log_exception(logger, "Citation resolution failed", document=str(input_path))
            raise typer.Exit(code=1) from exc

        stats = document_stats(tree)
        logger.info(
            "Document has %d footnote references and %d definitions",
            stats.footnote_references,
            stats.footnote_definitions,
        )

    payload = json.dumps(tree.to_dict(), ensure_ascii=False, indent=2)
    if output is None:
        typer.echo(payload)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(payload + "\n", encoding="utf-8")
    typer.echo(str(output))


@app.command()
def keys(
    input_path: Path = typer.Argument(..., metavar="INPUT", help="mdast JSON document"),
) -> None:
    """List the citation keys used in a document, in first-seen order."""

    tree = _read_tree(input_path)
    seen: dict[str, None] = {}
    for node, _ in iter_text_nodes(tree):
        for key in extract_citation_keys(node.value or ""):
            seen.setdefault(key)
    for key in seen:
        typer.echo(key)


@app.command()
def styles() -> None:
    """List bibliography styles."""

    for name in available_styles():
        typer.echo(name)


if __name__ == "__main__":
    app()
