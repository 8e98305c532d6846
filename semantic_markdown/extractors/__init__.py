"""Extraction sub-package: DOM classification, lowering, detection and URL compaction."""

from .dom import ElementCategory, NodeKind, classify, node_kind
from .lowering import escape_markdown, html_to_markdown_ast
from .main_content import find_main_content, wrap_main_content
from .metadata import extract_head_metadata
from .urlnorm import refify_urls

__all__ = [
    "ElementCategory",
    "NodeKind",
    "classify",
    "node_kind",
    "escape_markdown",
    "html_to_markdown_ast",
    "find_main_content",
    "wrap_main_content",
    "extract_head_metadata",
    "refify_urls",
]
