"""High-level conversion entry points.

Quick usage::

    from semantic_markdown import convert_html_to_markdown

    markdown = convert_html_to_markdown(html, extract_main_content=True)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from bs4 import BeautifulSoup, FeatureNotFound, Tag

from .extractors.lowering import html_to_markdown_ast
from .extractors.main_content import find_main_content
from .extractors.urlnorm import refify_urls
from .markdown import markdown_ast_to_string
from .nodes import Node, find_all_in_ast, find_in_ast
from .options import ConversionOptions

logger = logging.getLogger(__name__)


class ParserUnavailableError(RuntimeError):
    """Raised when the requested HTML tree builder is not installed.

    Attributes:
        feature -- the bs4 feature name that could not be resolved
    """

    def __init__(self, feature: str, reason: str = "") -> None:
        self.feature = feature
        msg = f"HTML parser {feature!r} is not available"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


def _resolve_options(options: ConversionOptions | None, overrides: dict[str, Any]) -> ConversionOptions:
    if options is None:
        return ConversionOptions(**overrides)
    if overrides:
        return options.model_copy(update=overrides)
    return options


def parse_html(html: str, dom_parser: str | Callable[[str], Any] = "lxml") -> BeautifulSoup:
    """Parse *html* with a bs4 tree builder name or a caller-supplied callable."""
    if callable(dom_parser):
        return dom_parser(html)
    try:
        return BeautifulSoup(html, dom_parser)
    except FeatureNotFound as exc:
        raise ParserUnavailableError(dom_parser, str(exc)) from exc


def _has_head_content(soup: BeautifulSoup) -> bool:
    head = soup.head
    return head is not None and any(True for _ in head.children)


def convert_html_to_markdown(
    html: str,
    options: ConversionOptions | None = None,
    **overrides: Any,
) -> str:
    """Parse an HTML string and convert it to semantic Markdown."""
    opts = _resolve_options(options, overrides)
    soup = parse_html(html, opts.dom_parser)

    if opts.extract_main_content:
        element: Any = find_main_content(soup)
        if (
            opts.include_meta_data
            and _has_head_content(soup)
            and element.find("head") is None
            and element.name != "html"
        ):
            # Extraction drops <head>; graft it back so metadata survives.
            rebuilt = parse_html(f"<html>{soup.head}{element}</html>", opts.dom_parser)
            element = rebuilt.html or rebuilt
    elif opts.include_meta_data and _has_head_content(soup):
        element = soup.html or soup
    else:
        element = soup.body or soup.html or soup

    return convert_element_to_markdown(element, opts)


def convert_element_to_markdown(
    element: Tag,
    options: ConversionOptions | None = None,
    **overrides: Any,
) -> str:
    """Convert an already-parsed element (its children) to semantic Markdown."""
    opts = _resolve_options(options, overrides)
    ast = html_to_markdown_ast(element, opts)

    if opts.refify_urls:
        opts.url_map = refify_urls(ast)
        logger.debug("URL map holds %d entries", len(opts.url_map))

    return markdown_ast_to_string(ast, opts)


def find_in_markdown_ast(
    ast: Node | list[Node],
    predicate: Callable[[Node], bool],
) -> Node | None:
    """Return the first AST node matching *predicate* (pre-order)."""
    return find_in_ast(ast, predicate)


def find_all_in_markdown_ast(
    ast: Node | list[Node],
    predicate: Callable[[Node], bool],
) -> list[Node]:
    """Return every AST node matching *predicate* (pre-order)."""
    return find_all_in_ast(ast, predicate)
