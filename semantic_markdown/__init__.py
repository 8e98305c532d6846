"""semantic_markdown - turn HTML into semantic, LLM-friendly Markdown.

Quick usage::

    from semantic_markdown import convert_html_to_markdown

    markdown = convert_html_to_markdown(html, extract_main_content=True)

Working with the AST::

    from semantic_markdown import (
        ConversionOptions, html_to_markdown_ast, markdown_ast_to_string,
        find_all_in_markdown_ast,
    )
    from semantic_markdown.convert import parse_html

    soup = parse_html(html)
    ast = html_to_markdown_ast(soup.body)
    links = find_all_in_markdown_ast(ast, lambda node: node.type == "link")
    print(markdown_ast_to_string(ast, ConversionOptions()))

Extension hooks (see :mod:`semantic_markdown.plugins`)::

    options = ConversionOptions(
        process_unhandled_element=my_lowering_hook,
        render_custom_node=my_renderer,
    )
"""

from .convert import (
    ParserUnavailableError,
    convert_element_to_markdown,
    convert_html_to_markdown,
    find_all_in_markdown_ast,
    find_in_markdown_ast,
    parse_html,
)
from .extractors.lowering import html_to_markdown_ast
from .extractors.main_content import find_main_content, wrap_main_content
from .extractors.urlnorm import refify_urls
from .markdown import markdown_ast_to_string
from .nodes import (
    BlockquoteNode,
    BoldNode,
    CodeNode,
    CustomNode,
    HeadingNode,
    ImageNode,
    ItalicNode,
    LinkNode,
    ListItemNode,
    ListNode,
    MetaNode,
    Node,
    SemanticHtmlNode,
    StrikethroughNode,
    TableCellNode,
    TableNode,
    TableRowNode,
    TextNode,
    VideoNode,
)
from .options import ConversionOptions
from .plugins import CustomNodeRenderer, ElementProcessor, NodeRenderer

__version__ = "0.1.0"

__all__ = [
    # Conversion
    "convert_html_to_markdown",
    "convert_element_to_markdown",
    "parse_html",
    "ParserUnavailableError",
    "ConversionOptions",
    # Pipeline stages
    "html_to_markdown_ast",
    "markdown_ast_to_string",
    "refify_urls",
    "find_main_content",
    "wrap_main_content",
    # AST search
    "find_in_markdown_ast",
    "find_all_in_markdown_ast",
    # AST nodes
    "Node",
    "TextNode",
    "BoldNode",
    "ItalicNode",
    "StrikethroughNode",
    "LinkNode",
    "HeadingNode",
    "ImageNode",
    "VideoNode",
    "ListNode",
    "ListItemNode",
    "TableNode",
    "TableRowNode",
    "TableCellNode",
    "CodeNode",
    "BlockquoteNode",
    "SemanticHtmlNode",
    "MetaNode",
    "CustomNode",
    # Plugin contracts
    "ElementProcessor",
    "NodeRenderer",
    "CustomNodeRenderer",
    "__version__",
]
