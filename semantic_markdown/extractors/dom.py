"""DOM node classification over BeautifulSoup objects."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any

from bs4 import BeautifulSoup, Tag
from bs4.element import (
    CData,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ProcessingInstruction,
)


class NodeKind(IntEnum):
    """DOM node-type codes, numbered as in the W3C DOM."""

    ELEMENT = 1
    ATTRIBUTE = 2
    TEXT = 3
    CDATA_SECTION = 4
    ENTITY_REFERENCE = 5
    ENTITY = 6
    PROCESSING_INSTRUCTION = 7
    COMMENT = 8
    DOCUMENT = 9
    DOCUMENT_TYPE = 10
    DOCUMENT_FRAGMENT = 11
    NOTATION = 12


def node_kind(node: Any) -> NodeKind | None:
    """Map a bs4 object onto its :class:`NodeKind`, or None if unknown."""
    # BeautifulSoup subclasses Tag and the special strings subclass
    # NavigableString, so the specific checks go first.
    if isinstance(node, BeautifulSoup):
        return NodeKind.DOCUMENT
    if isinstance(node, Tag):
        return NodeKind.ELEMENT
    if isinstance(node, Comment):
        return NodeKind.COMMENT
    if isinstance(node, CData):
        return NodeKind.CDATA_SECTION
    if isinstance(node, ProcessingInstruction):
        return NodeKind.PROCESSING_INSTRUCTION
    if isinstance(node, Doctype):
        return NodeKind.DOCUMENT_TYPE
    if isinstance(node, Declaration):
        return None
    if isinstance(node, NavigableString):
        return NodeKind.TEXT
    return None


# ---------------------------------------------------------------------------
# Element categories
# ---------------------------------------------------------------------------

class ElementCategory(Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LINK = "link"
    IMAGE = "image"
    VIDEO = "video"
    LIST = "list"
    LINE_BREAK = "line_break"
    TABLE = "table"
    HEAD = "head"
    DROPPED = "dropped"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"
    BLOCKQUOTE = "blockquote"
    SEMANTIC = "semantic"
    UNHANDLED = "unhandled"


SEMANTIC_TAGS: frozenset[str] = frozenset({
    "article", "aside", "details", "figcaption", "figure", "footer",
    "header", "main", "mark", "nav", "section", "summary", "time",
})

_DROPPED_TAGS: frozenset[str] = frozenset({"noscript", "script", "style", "html"})

_CATEGORY_BY_TAG: dict[str, ElementCategory] = {
    **{f"h{n}": ElementCategory.HEADING for n in range(1, 7)},
    "p": ElementCategory.PARAGRAPH,
    "a": ElementCategory.LINK,
    "img": ElementCategory.IMAGE,
    "video": ElementCategory.VIDEO,
    "ul": ElementCategory.LIST,
    "ol": ElementCategory.LIST,
    "br": ElementCategory.LINE_BREAK,
    "table": ElementCategory.TABLE,
    "strong": ElementCategory.BOLD,
    "b": ElementCategory.BOLD,
    "em": ElementCategory.ITALIC,
    "i": ElementCategory.ITALIC,
    "s": ElementCategory.STRIKETHROUGH,
    "strike": ElementCategory.STRIKETHROUGH,
    "code": ElementCategory.CODE,
    "blockquote": ElementCategory.BLOCKQUOTE,
    **{tag: ElementCategory.DROPPED for tag in _DROPPED_TAGS},
    **{tag: ElementCategory.SEMANTIC for tag in SEMANTIC_TAGS},
}


def classify(tag_name: str, include_meta_data: bool | str = False) -> ElementCategory:
    """Return the lowering category for an element called *tag_name*.

    ``head`` is only meaningful when metadata extraction is enabled; otherwise
    it is treated like any other unknown element and recursed through.
    """
    name = tag_name.lower()
    if name == "head":
        return ElementCategory.HEAD if include_meta_data else ElementCategory.UNHANDLED
    return _CATEGORY_BY_TAG.get(name, ElementCategory.UNHANDLED)
