"""DOM -> semantic Markdown AST lowering.

Walks the child nodes of a BeautifulSoup element in document order and turns
each into zero or more AST nodes.  Element handling is dispatched on
:func:`~semantic_markdown.extractors.dom.classify`; extension hooks on the
options object are consulted before and after the built-in rules.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from bs4 import Tag

from ..nodes import (
    BlockquoteNode,
    BoldNode,
    CodeNode,
    HeadingNode,
    ImageNode,
    ItalicNode,
    LinkNode,
    ListItemNode,
    ListNode,
    Node,
    SemanticHtmlNode,
    StrikethroughNode,
    TableCellNode,
    TableNode,
    TableRowNode,
    TextNode,
    VideoNode,
)
from ..options import ConversionOptions
from .dom import ElementCategory, NodeKind, classify, node_kind
from .metadata import extract_head_metadata

logger = logging.getLogger(__name__)

_MARKDOWN_SPECIAL_RE = re.compile(r"([\\`*_{}\[\]#+!|])")
_LANGUAGE_CLASS_RE = re.compile(r"^language-(\S+)$")

_DATA_IMAGE_PREFIX = "data:image"
_DATA_URL_PLACEHOLDER = "-"


def escape_markdown(text: str) -> str:
    """Entity-escape ``& < >`` then backslash-escape Markdown metacharacters.

    Whitespace-only and empty strings are returned unchanged.
    """
    if not text.strip():
        return text
    escaped = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    return _MARKDOWN_SPECIAL_RE.sub(r"\\\1", escaped)


def html_to_markdown_ast(
    element: Any,
    options: ConversionOptions | None = None,
    indent_level: int = 0,
) -> list[Node]:
    """Lower the children of *element* into a list of AST nodes.

    *element* itself is never emitted, only its child nodes.
    """
    opts = options or ConversionOptions()
    return _lower_children(element, opts, indent_level, 0)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _lower_children(
    element: Any,
    options: ConversionOptions,
    indent_level: int,
    depth: int,
) -> list[Node]:
    result: list[Node] = []
    if depth > options.max_depth:
        logger.warning(
            "Nesting deeper than %d levels inside <%s>; flattening to text",
            options.max_depth, getattr(element, "name", "?"),
        )
        text = element.get_text(" ", strip=True) if isinstance(element, Tag) else ""
        if text:
            result.append(TextNode(text))
        return result

    for child in list(getattr(element, "children", ())):
        if options.override_element_processing is not None:
            override = options.override_element_processing(child, options, indent_level)
            if override:
                if options.debug:
                    logger.debug("Element processing overridden for %r", _describe(child))
                result.extend(override)
                continue

        kind = node_kind(child)
        if kind == NodeKind.TEXT:
            stripped = str(child).strip()
            if escape_markdown(stripped):
                if options.debug:
                    logger.debug("Text node: %r", stripped[:40])
                result.append(TextNode(stripped))
        elif kind == NodeKind.ELEMENT:
            result.extend(_lower_element(child, options, indent_level, depth))
    return result


def _describe(node: Any) -> str:
    return f"<{node.name}>" if isinstance(node, Tag) else str(node)[:40]


def _children_are_text(elem: Tag) -> bool:
    return all(node_kind(c) == NodeKind.TEXT for c in elem.children)


def _relativize(url: str, options: ConversionOptions) -> str:
    domain = options.website_domain
    if domain and url.startswith(domain):
        return url[len(domain):]
    return url


def _span(value: Any) -> int:
    try:
        span = int(value)
    except (TypeError, ValueError):
        return 1
    return span if span >= 1 else 1


def _lower_element(
    elem: Tag,
    options: ConversionOptions,
    indent_level: int,
    depth: int,
) -> list[Node]:
    category = classify(elem.name, options.include_meta_data)
    if options.debug:
        logger.debug("%s -> %s", _describe(elem), category.value)

    def lower(target: Tag, level: int = indent_level) -> list[Node]:
        return _lower_children(target, options, level, depth + 1)

    if category is ElementCategory.HEADING:
        if not escape_markdown(elem.get_text().strip()):
            return []
        return [HeadingNode(level=int(elem.name[1]), content=lower(elem))]

    if category is ElementCategory.PARAGRAPH:
        return [*lower(elem), TextNode("\n\n")]

    if category is ElementCategory.LINK:
        return [_lower_link(elem, options, lower)]

    if category is ElementCategory.IMAGE:
        src = elem.get("src") or ""
        if not isinstance(src, str):
            src = str(src)
        src = (
            _DATA_URL_PLACEHOLDER if src.startswith(_DATA_IMAGE_PREFIX)
            else _relativize(src, options)
        )
        alt = elem.get("alt")
        return [ImageNode(src=src, alt=escape_markdown(alt) if isinstance(alt, str) else None)]

    if category is ElementCategory.VIDEO:
        poster = elem.get("poster")
        return [VideoNode(
            src=elem.get("src") or "",
            poster=escape_markdown(poster) if isinstance(poster, str) else None,
            controls=True if elem.has_attr("controls") else None,
        )]

    if category is ElementCategory.LIST:
        items = [
            ListItemNode(content=lower(li, indent_level + 1))
            for li in elem.find_all(True, recursive=False)
        ]
        return [ListNode(ordered=elem.name == "ol", items=items)]

    if category is ElementCategory.LINE_BREAK:
        return [TextNode("\n")]

    if category is ElementCategory.TABLE:
        return [_lower_table(elem, options, indent_level, lower)]

    if category is ElementCategory.HEAD:
        return [extract_head_metadata(elem, options.include_meta_data)]

    if category is ElementCategory.DROPPED:
        return []

    if category in (ElementCategory.BOLD, ElementCategory.ITALIC, ElementCategory.STRIKETHROUGH):
        if not escape_markdown(elem.get_text().strip()):
            return []
        wrapper = {
            ElementCategory.BOLD: BoldNode,
            ElementCategory.ITALIC: ItalicNode,
            ElementCategory.STRIKETHROUGH: StrikethroughNode,
        }[category]
        return [wrapper(content=lower(elem))]

    if category is ElementCategory.CODE:
        text = elem.get_text().strip()
        if not text:
            return []
        language = None
        for token in elem.get("class") or []:
            match = _LANGUAGE_CLASS_RE.match(token)
            if match:
                language = match.group(1)
                break
        inline = not (isinstance(elem.parent, Tag) and elem.parent.name == "pre")
        return [CodeNode(content=text, language=language, inline=inline)]

    if category is ElementCategory.BLOCKQUOTE:
        return [BlockquoteNode(content=lower(elem))]

    if category is ElementCategory.SEMANTIC:
        return [SemanticHtmlNode(html_type=elem.name.lower(), content=lower(elem))]

    if options.process_unhandled_element is not None:
        handled = options.process_unhandled_element(elem, options, indent_level)
        if handled:
            return list(handled)
    return lower(elem, indent_level + 1)


def _lower_link(elem: Tag, options: ConversionOptions, lower) -> LinkNode:
    href = elem.get("href")
    if not isinstance(href, str):
        href = "#"
    if href.startswith(_DATA_IMAGE_PREFIX):
        return LinkNode(href=_DATA_URL_PLACEHOLDER, content=lower(elem))
    href = _relativize(href, options)
    if _children_are_text(elem):
        content: list[Node] = [TextNode(elem.get_text().strip())]
    else:
        content = lower(elem)
    return LinkNode(href=href, content=content)


def _lower_table(
    elem: Tag,
    options: ConversionOptions,
    indent_level: int,
    lower,
) -> TableNode:
    tracking = options.enable_table_column_tracking
    tr_elements = elem.find_all("tr")
    rows: list[TableRowNode] = []

    for tr in tr_elements:
        position = 0
        cells: list[TableCellNode] = []
        for cell in tr.find_all(["th", "td"]):
            colspan = _span(cell.get("colspan", 1))
            rowspan = _span(cell.get("rowspan", 1))
            if _children_are_text(cell):
                content: str | list[Node] = escape_markdown(cell.get_text().strip())
            else:
                content = lower(cell, indent_level + 1)
            cells.append(TableCellNode(
                content=content,
                col_id=f"col-{position}" if tracking else None,
                colspan=colspan if colspan > 1 else None,
                rowspan=rowspan if rowspan > 1 else None,
            ))
            position += colspan
        rows.append(TableRowNode(cells=cells))

    col_ids: list[str] | None = None
    if rows:
        header_width = sum(cell.colspan or 1 for cell in rows[0].cells)
        if tracking:
            col_ids = [f"col-{i}" for i in range(header_width)]
        if tr_elements[0].find("th") is not None:
            separator = TableRowNode(cells=[TableCellNode(content="---") for _ in range(header_width)])
            rows.insert(1, separator)
    elif tracking:
        col_ids = []

    return TableNode(rows=rows, col_ids=col_ids)
