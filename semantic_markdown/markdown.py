"""AST -> Markdown string rendering.

The output is an optional YAML-like front-matter block (built from the
:class:`~semantic_markdown.nodes.MetaNode`) followed by the rendered content.
Inline nodes are joined with single spaces where needed; block nodes always
start on their own line.
"""

from __future__ import annotations

import json
import re
from urllib.parse import quote

from .nodes import (
    BlockquoteNode,
    BoldNode,
    CodeNode,
    CustomNode,
    HeadingNode,
    ImageNode,
    ItalicNode,
    LinkNode,
    ListNode,
    MetaNode,
    Node,
    SemanticHtmlNode,
    StrikethroughNode,
    TableNode,
    TextNode,
    VideoNode,
    find_in_ast,
)
from .options import ConversionOptions

# encodeURI's reserved set, plus "%" so existing escapes survive
_URL_SAFE = ";,/?:@&=+$-_.!~*'()#%"

_CLINGING_PUNCTUATION: frozenset[str] = frozenset(".,!?;:)")
_OPENING_BRACKETS = ("(", "[")
_ALT_TRIM = " \t\n\r\f\v\u00a0\u200b\u200c\u200d\ufeff"

_UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)\|")
_NEWLINES_RE = re.compile(r"\n+")


def markdown_ast_to_string(
    nodes: list[Node],
    options: ConversionOptions | None = None,
    indent_level: int = 0,
) -> str:
    """Render *nodes* to Markdown, with front matter when metadata is enabled."""
    opts = options or ConversionOptions()
    return (render_metadata(nodes, opts) + render_content(nodes, opts, indent_level)).rstrip()


def encode_url(url: str) -> str:
    return quote(url, safe=_URL_SAFE)


# ---------------------------------------------------------------------------
# Front matter
# ---------------------------------------------------------------------------

def _quoted(value: object) -> str:
    return '"' + str(value).replace('"', '\\"') + '"'


def render_metadata(nodes: list[Node], options: ConversionOptions) -> str:
    """Render the ``---`` front-matter block, or ``""`` when metadata is off."""
    if not options.include_meta_data:
        return ""

    lines = ["---"]
    meta = find_in_ast(nodes, lambda n: isinstance(n, MetaNode))
    if isinstance(meta, MetaNode):
        lines.extend(f"{key}: {_quoted(value)}" for key, value in meta.standard.items())

        if options.extended_metadata:
            for label, entries in (("openGraph", meta.open_graph), ("twitter", meta.twitter)):
                if entries:
                    lines.append(f"{label}:")
                    lines.extend(f"  {key}: {_quoted(value)}" for key, value in entries.items())

            if meta.json_ld:
                lines.append("schema:")
                for item in meta.json_ld:
                    if not isinstance(item, dict):
                        item = {"value": item}
                    lines.append(f"  {item.get('@type') or '(unknown type)'}:")
                    for key, value in item.items():
                        if key in ("@context", "@type"):
                            continue
                        serialized = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
                        lines.append(f"    {key}: {serialized}")

    return "\n".join(lines) + "\n---\n\n"


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------

def _is_inline(node: Node) -> bool:
    if isinstance(node, (TextNode, BoldNode, ItalicNode, StrikethroughNode, LinkNode)):
        return True
    return isinstance(node, CodeNode) and node.inline


def _is_block(node: Node) -> bool:
    if isinstance(node, CodeNode):
        return not node.inline
    return isinstance(node, (
        HeadingNode, ImageNode, ListNode, VideoNode,
        TableNode, BlockquoteNode, SemanticHtmlNode,
    ))


def _needs_space(out: str, text: str) -> bool:
    return bool(
        out
        and not out[-1].isspace()
        and text
        and not text[0].isspace()
        and text not in _CLINGING_PUNCTUATION
        and not out.endswith(_OPENING_BRACKETS)
    )


def render_content(
    nodes: list[Node],
    options: ConversionOptions,
    indent_level: int = 0,
) -> str:
    """Render content nodes without front matter or final trimming."""
    out = ""
    for index, node in enumerate(nodes):
        if options.override_node_renderer is not None:
            override = options.override_node_renderer(node, options, indent_level)
            if override is not None:
                out += override
                continue

        if isinstance(node, MetaNode):
            continue

        if isinstance(node, CustomNode):
            if options.render_custom_node is not None:
                out += options.render_custom_node(node, options, indent_level) or ""
            continue

        if _is_inline(node):
            text = _render_inline(node, options, indent_level)
            if _needs_space(out, text):
                out += " "
            out += text
            continue

        if not _is_block(node):
            continue

        block = _render_block(node, options, indent_level)
        if not block:
            continue

        if out:
            if isinstance(node, SemanticHtmlNode) and node.html_type == "section":
                out = out.rstrip("\n") + "\n\n"
            elif not out.endswith("\n"):
                out += "\n"
        out += block

        next_node = nodes[index + 1] if index + 1 < len(nodes) else None
        separate = isinstance(node, HeadingNode) or (next_node is not None and _is_block(next_node))
        out = out.rstrip("\n") + ("\n\n" if separate else "\n")
    return out


def _render_inline(node: Node, options: ConversionOptions, indent_level: int) -> str:
    if isinstance(node, TextNode):
        return node.content
    if isinstance(node, CodeNode):
        return f"`{node.content}`"
    if isinstance(node, LinkNode):
        return _render_link(node, options, indent_level)

    inner = render_content(node.content, options, indent_level).strip()
    if isinstance(node, BoldNode):
        return f"**{inner}**"
    if isinstance(node, ItalicNode):
        return f"*{inner}*"
    return f"~~{inner}~~"


def _render_link(node: LinkNode, options: ConversionOptions, indent_level: int) -> str:
    href = encode_url(node.href)
    if len(node.content) == 1 and isinstance(node.content[0], TextNode):
        text = node.content[0].content
        if text == text.strip() and "\n" not in text:
            return f"[{text}]({href})"
    inner = render_content(node.content, options, indent_level + 1).strip()
    return f'<a href="{href}">{inner}</a>'


def _render_block(node: Node, options: ConversionOptions, indent_level: int) -> str:
    if isinstance(node, HeadingNode):
        inner = render_content(node.content, options, indent_level).strip()
        return f"{'#' * node.level} {inner}"

    if isinstance(node, ImageNode):
        alt = (node.alt or "").strip(_ALT_TRIM)
        if alt and not node.src:
            return ""
        return f"![{alt}]({encode_url(node.src)})"

    if isinstance(node, ListNode):
        return _render_list(node, options, indent_level)

    if isinstance(node, VideoNode):
        lines = [f"![Video]({node.src})"]
        if node.poster:
            lines.append(f"![Poster]({node.poster})")
        if node.controls is not None:
            lines.append(f"Controls: {'true' if node.controls else 'false'}")
        return "\n".join(lines)

    if isinstance(node, TableNode):
        return _render_table(node, options, indent_level)

    if isinstance(node, CodeNode):
        return f"```{node.language or ''}\n{node.content}\n```"

    if isinstance(node, BlockquoteNode):
        inner = render_content(node.content, options, indent_level).strip()
        if not inner:
            return ">"
        return "\n".join(f"> {line}".rstrip() for line in inner.split("\n"))

    if isinstance(node, SemanticHtmlNode):
        inner = render_content(node.content, options, indent_level).strip()
        if not inner:
            return ""
        if node.html_type == "article":
            return inner
        if node.html_type == "section":
            return f"---\n\n{inner}\n\n---"
        return f"<!-- {node.html_type} -->\n{inner}\n<!-- /{node.html_type} -->"

    return ""


def _render_list(node: ListNode, options: ConversionOptions, indent_level: int) -> str:
    indent = "  " * indent_level
    lines = []
    for i, item in enumerate(node.items, start=1):
        prefix = f"{i}." if node.ordered else "-"
        contents = render_content(item.content, options, indent_level + 1).strip()
        lines.append(f"{indent}{prefix} {contents}" if contents else f"{indent}{prefix}")
    return "\n".join(lines)


def _render_table(node: TableNode, options: ConversionOptions, indent_level: int) -> str:
    max_columns = max(
        (sum(cell.colspan or 1 for cell in row.cells) for row in node.rows),
        default=0,
    )
    if max_columns == 0:
        return ""

    lines = []
    for row in node.rows:
        parts: list[str] = []
        width = 0
        for cell in row.cells:
            if isinstance(cell.content, str):
                content = cell.content
            else:
                content = render_content(cell.content, options, indent_level + 1).strip()
            content = _UNESCAPED_PIPE_RE.sub(r"\\|", _NEWLINES_RE.sub(" ", content))

            annotations = ""
            if cell.col_id:
                annotations += f" <!-- {cell.col_id} -->"
            if cell.colspan:
                annotations += f" <!-- colspan: {cell.colspan} -->"
            if cell.rowspan:
                annotations += f" <!-- rowspan: {cell.rowspan} -->"

            span = cell.colspan or 1
            parts.append(f" {content}{annotations} ")
            parts.extend(" " for _ in range(span - 1))
            width += span
        parts.extend("  " for _ in range(max_columns - width))
        lines.append("|" + "|".join(parts) + "|")
    return "\n".join(lines)
