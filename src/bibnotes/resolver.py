"""Citation marker resolution.

Replaces `(@key)` markers in text nodes with numbered footnote references and appends one
footnote definition per unique key at the end of the document.

The work happens in phases so that a failure leaves the tree untouched:

1. collect the footnote identifiers the author already used;
2. scan text nodes (read-only) and plan the splices, ranking keys by first occurrence and
   allocating reference identifiers;
3. format one definition per key, in rank order;
4. apply the splices and append the definitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bibnotes.bibliography.protocol import CitationFormatter
from bibnotes.config import DEFAULT_TEMPLATE
from bibnotes.logging import get_logger
from bibnotes.models.tree import (
    FOOTNOTE_DEFINITION,
    FOOTNOTE_REFERENCE,
    Node,
    footnote_definition,
    footnote_reference,
    iter_text_nodes,
    text,
    walk,
)
from bibnotes.utils.citations import find_citation_marker
from bibnotes.utils.ids import FootnoteIdAllocator, format_footnote_id

logger = get_logger(__name__)


@dataclass
class Splice:
    """Replace `node` in `parent.children` with `replacement`."""

    parent: Node
    node: Node
    replacement: list[Node]


@dataclass
class CitationState:
    """Per-call resolver state."""

    existing: frozenset[str]
    # key -> rank, in first-seen order
    references: dict[str, int] = field(default_factory=dict)
    reference_ids: dict[str, str] = field(default_factory=dict)
    allocator: FootnoteIdAllocator = field(init=False)
    splices: list[Splice] = field(default_factory=list)
    marker_count: int = 0

    def __post_init__(self) -> None:
        self.allocator = FootnoteIdAllocator(existing=self.existing)

    def rank(self, key: str) -> int:
        """Return the 1-based rank of `key`, registering it on first sight."""

        rank = self.references.get(key)
        if rank is None:
            rank = len(self.references) + 1
            self.references[key] = rank
        return rank

    def reference_id(self, key: str) -> str:
        """Return the footnote identifier for `key`.

        The first occurrence allocates; repeated citations share that identifier.
        """

        ident = self.reference_ids.get(key)
        if ident is None:
            ident = format_footnote_id(self.allocator.allocate(self.rank(key)))
            self.reference_ids[key] = ident
        self.marker_count += 1
        return ident


def collect_footnote_identifiers(tree: Node) -> frozenset[str]:
    """Collect identifiers of footnotes already present anywhere in the tree."""

    found: set[str] = set()
    for node, _ in walk(tree):
        if node.type in (FOOTNOTE_REFERENCE, FOOTNOTE_DEFINITION) and node.identifier is not None:
            found.add(node.identifier)
    return frozenset(found)


def split_text(value: str, state: CitationState) -> list[Node] | None:
    """Split a text value around every citation marker it contains.

    Returns:
        The replacement nodes, or None when the value has no marker.
    """

    pieces: list[Node] = []
    pending = value
    while pending:
        marker = find_citation_marker(pending)
        if marker is None:
            break
        if marker.start != 0:
            pieces.append(text(pending[: marker.start].rstrip()))
        ident = state.reference_id(marker.key)
        logger.debug("Citation %r -> footnote %s", marker.key, ident)
        pieces.append(footnote_reference(ident))
        pending = pending[marker.end :]

    if not pieces:
        return None
    if pending:
        pieces.append(text(pending))
    return pieces


def plan_references(tree: Node, state: CitationState) -> None:
    """Scan text nodes in document order and record the splices to apply."""

    for node, parent in iter_text_nodes(tree):
        replacement = split_text(node.value or "", state)
        if replacement is not None:
            state.splices.append(Splice(parent=parent, node=node, replacement=replacement))


def build_footnote_definitions(
    state: CitationState, formatter: CitationFormatter, template: str
) -> list[Node]:
    """Format one footnote definition per unique key, in rank order.

    Definition identifiers come from their own allocator; rank is what links a definition to
    its references.
    """

    allocator = FootnoteIdAllocator(existing=state.existing)
    definitions: list[Node] = []
    for key, rank in state.references.items():
        content = formatter.format(key, template)
        ident = format_footnote_id(allocator.allocate(rank))
        definitions.append(footnote_definition(ident, content))
    return definitions


def apply_splices(splices: list[Splice]) -> None:
    for splice in splices:
        children = splice.parent.children or []
        idx = next(i for i, child in enumerate(children) if child is splice.node)
        children[idx : idx + 1] = splice.replacement


class CitationResolver:
    """Resolve citation markers in a document tree.

    Args:
        formatter: Formats a citation key as bibliography text.
        template: Bibliography style name, `apa` when not given.
    """

    def __init__(self, formatter: CitationFormatter, template: str | None = None) -> None:
        self._formatter = formatter
        self._template = template or DEFAULT_TEMPLATE

    @property
    def template(self) -> str:
        return self._template

    def resolve(self, tree: Node) -> Node:
        """Mutate `tree` in place and return it.

        Raises:
            FormatError: If a cited key cannot be formatted. The tree is left unchanged.
        """

        state = CitationState(existing=collect_footnote_identifiers(tree))
        plan_references(tree, state)
        if not state.references:
            logger.debug("No citation markers found")
            return tree

        definitions = build_footnote_definitions(state, self._formatter, self._template)

        apply_splices(state.splices)
        if tree.children is None:
            tree.children = []
        tree.children.extend(definitions)

        logger.info(
            "Resolved %d citation markers into %d footnotes",
            state.marker_count,
            len(definitions),
        )
        return tree


def resolve_citations(
    tree: Node, formatter: CitationFormatter, template: str | None = None
) -> Node:
    """Convenience wrapper around :class:`CitationResolver`."""

    return CitationResolver(formatter, template).resolve(tree)
