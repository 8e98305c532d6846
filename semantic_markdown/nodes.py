"""Semantic Markdown AST node types and generic traversal helpers.

Every node is a plain dataclass with a ``type`` class constant naming its
variant, so callers can either ``isinstance()`` check or compare
``node.type == "link"``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal

SemanticHtmlType = Literal[
    "article",
    "aside",
    "details",
    "figcaption",
    "figure",
    "footer",
    "header",
    "main",
    "mark",
    "nav",
    "section",
    "summary",
    "time",
]

# ---------------------------------------------------------------------------
# Inline nodes
# ---------------------------------------------------------------------------

@dataclass
class TextNode:
    content: str
    type: ClassVar[str] = "text"


@dataclass
class BoldNode:
    content: list[Node] = field(default_factory=list)
    type: ClassVar[str] = "bold"


@dataclass
class ItalicNode:
    content: list[Node] = field(default_factory=list)
    type: ClassVar[str] = "italic"


@dataclass
class StrikethroughNode:
    content: list[Node] = field(default_factory=list)
    type: ClassVar[str] = "strikethrough"


@dataclass
class LinkNode:
    href: str
    content: list[Node] = field(default_factory=list)
    type: ClassVar[str] = "link"


# ---------------------------------------------------------------------------
# Block nodes
# ---------------------------------------------------------------------------

@dataclass
class HeadingNode:
    level: int
    content: list[Node] = field(default_factory=list)
    type: ClassVar[str] = "heading"


@dataclass
class ImageNode:
    src: str
    alt: str | None = None
    type: ClassVar[str] = "image"


@dataclass
class VideoNode:
    src: str
    poster: str | None = None
    controls: bool | None = None
    type: ClassVar[str] = "video"


@dataclass
class ListItemNode:
    content: list[Node] = field(default_factory=list)
    type: ClassVar[str] = "listItem"


@dataclass
class ListNode:
    ordered: bool
    items: list[ListItemNode] = field(default_factory=list)
    type: ClassVar[str] = "list"


@dataclass
class TableCellNode:
    """A single table cell.

    ``content`` is a raw (already escaped) string when the source cell held
    only text, otherwise a lowered AST list.
    """

    content: str | list[Node]
    col_id: str | None = None
    colspan: int | None = None
    rowspan: int | None = None
    type: ClassVar[str] = "tableCell"


@dataclass
class TableRowNode:
    cells: list[TableCellNode] = field(default_factory=list)
    type: ClassVar[str] = "tableRow"


@dataclass
class TableNode:
    rows: list[TableRowNode] = field(default_factory=list)
    col_ids: list[str] | None = None
    type: ClassVar[str] = "table"


@dataclass
class CodeNode:
    content: str
    language: str | None = None
    inline: bool = False
    type: ClassVar[str] = "code"


@dataclass
class BlockquoteNode:
    content: list[Node] = field(default_factory=list)
    type: ClassVar[str] = "blockquote"


@dataclass
class SemanticHtmlNode:
    html_type: SemanticHtmlType
    content: list[Node] = field(default_factory=list)
    type: ClassVar[str] = "semanticHtml"


@dataclass
class MetaNode:
    standard: dict[str, str] = field(default_factory=dict)
    open_graph: dict[str, str] = field(default_factory=dict)
    twitter: dict[str, str] = field(default_factory=dict)
    json_ld: list[Any] | None = None
    type: ClassVar[str] = "meta"


@dataclass
class CustomNode:
    """Opaque payload produced by a user hook; rendered only by a user hook."""

    content: Any = None
    type: ClassVar[str] = "custom"


Node = (
    TextNode |
    BoldNode |
    ItalicNode |
    StrikethroughNode |
    LinkNode |
    HeadingNode |
    ImageNode |
    VideoNode |
    ListNode |
    ListItemNode |
    TableNode |
    TableRowNode |
    TableCellNode |
    CodeNode |
    BlockquoteNode |
    SemanticHtmlNode |
    MetaNode |
    CustomNode
)

# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

_CONTENT_CONTAINERS = (
    HeadingNode,
    BoldNode,
    ItalicNode,
    StrikethroughNode,
    LinkNode,
    BlockquoteNode,
    SemanticHtmlNode,
    ListItemNode,
)


def iter_children(node: Node) -> list[Node]:
    """Return the child nodes the search and refify passes descend into.

    List and table nodes contribute the content of their items and cells
    rather than the item/row/cell wrappers themselves.
    """
    if isinstance(node, _CONTENT_CONTAINERS):
        return list(node.content)
    if isinstance(node, ListNode):
        children: list[Node] = []
        for item in node.items:
            children.extend(item.content)
        return children
    if isinstance(node, TableNode):
        children = []
        for row in node.rows:
            for cell in row.cells:
                if not isinstance(cell.content, str):
                    children.extend(cell.content)
        return children
    return []


def _as_list(ast: Node | list[Node]) -> list[Node]:
    return list(ast) if isinstance(ast, list) else [ast]


def walk_ast(ast: Node | list[Node]) -> Iterator[Node]:
    """Yield every node of *ast* in pre-order (parent before children)."""
    stack = list(reversed(_as_list(ast)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(iter_children(node)))


def find_in_ast(
    ast: Node | list[Node],
    predicate: Callable[[Node], bool],
) -> Node | None:
    """Return the first node in pre-order satisfying *predicate*, or None."""
    for node in walk_ast(ast):
        if predicate(node):
            return node
    return None


def find_all_in_ast(
    ast: Node | list[Node],
    predicate: Callable[[Node], bool],
) -> list[Node]:
    """Return all nodes satisfying *predicate* in pre-order.

    A matching node is collected without searching inside it.
    """
    results: list[Node] = []
    stack = list(reversed(_as_list(ast)))
    while stack:
        node = stack.pop()
        if predicate(node):
            results.append(node)
            continue
        stack.extend(reversed(iter_children(node)))
    return results
