"""Document tree models.

The tree follows the generic unist/mdast node protocol: every node has a ``type``, containers
carry ordered ``children``, ``text`` nodes carry a ``value`` and footnote nodes carry an
``identifier`` and a ``label``. Any other field a parser attaches (``position``, ``depth``,
``url``, ...) is kept as-is so the tree round-trips through JSON.
"""

from __future__ import annotations

from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator

TEXT = "text"
PARAGRAPH = "paragraph"
FOOTNOTE_REFERENCE = "footnoteReference"
FOOTNOTE_DEFINITION = "footnoteDefinition"


class Node(BaseModel):
    """A node of a parsed document tree."""

    model_config = ConfigDict(extra="allow")

    type: str
    children: list["Node"] | None = None
    value: str | None = None
    identifier: str | None = None
    label: str | None = None

    @field_validator("identifier", "label", mode="before")
    @classmethod
    def _stringify_number(cls, v: Any) -> Any:
        # Some serializers emit numeric footnote identifiers.
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    def to_dict(self) -> dict[str, Any]:
        """Dump the node back to its JSON shape."""

        return self.model_dump(mode="json", exclude_unset=True)


def text(value: str) -> Node:
    return Node(type=TEXT, value=value)


def footnote_reference(identifier: str) -> Node:
    return Node(type=FOOTNOTE_REFERENCE, identifier=identifier, label=identifier)


def footnote_definition(identifier: str, content: str) -> Node:
    """Build a footnote definition holding one paragraph of plain text."""

    return Node(
        type=FOOTNOTE_DEFINITION,
        identifier=identifier,
        label=identifier,
        children=[Node(type=PARAGRAPH, children=[text(content)])],
    )


def walk(node: Node, parent: Node | None = None) -> Iterator[tuple[Node, Node | None]]:
    """Yield ``(node, parent)`` pairs in document (pre-)order."""

    yield node, parent
    for child in node.children or []:
        yield from walk(child, node)


def iter_text_nodes(tree: Node) -> Iterator[tuple[Node, Node]]:
    """Yield every ``text`` node that has a parent, with that parent."""

    for node, parent in walk(tree):
        if node.type == TEXT and parent is not None and node.value is not None:
            yield node, parent


class DocumentStats(BaseModel):
    """Counts of footnote-related nodes in a tree."""

    footnote_references: int = 0
    footnote_definitions: int = 0
    text_nodes: int = Field(default=0, ge=0)


def document_stats(tree: Node) -> DocumentStats:
    stats = DocumentStats()
    for node, _ in walk(tree):
        if node.type == FOOTNOTE_REFERENCE:
            stats.footnote_references += 1
        elif node.type == FOOTNOTE_DEFINITION:
            stats.footnote_definitions += 1
        elif node.type == TEXT:
            stats.text_nodes += 1
    return stats
