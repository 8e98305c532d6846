"""Document-head metadata extraction.

Collects the ``<title>``, standard ``<meta name>`` entries and, in extended
mode, Open Graph, Twitter Card and JSON-LD blocks into a single
:class:`~semantic_markdown.nodes.MetaNode`.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from bs4 import Tag

from ..nodes import MetaNode

logger = logging.getLogger(__name__)

# <meta name=...> values that describe the browser, not the document
_NON_SEMANTIC_META: frozenset[str] = frozenset({
    "viewport",
    "referrer",
    "Content-Security-Policy",
})


def extract_head_metadata(head: Tag, mode: str | bool = "basic") -> MetaNode:
    """Build a :class:`MetaNode` from a ``<head>`` element."""
    from .lowering import escape_markdown

    extended = mode == "extended"
    meta = MetaNode()

    for title in head.find_all("title"):
        meta.standard["title"] = escape_markdown(title.get_text())

    for tag in head.find_all("meta"):
        name = tag.get("name")
        prop = tag.get("property")
        content = tag.get("content")
        if not content:
            continue
        if isinstance(prop, str) and prop.startswith("og:"):
            if extended:
                meta.open_graph[prop[3:]] = content
        elif isinstance(name, str) and name.startswith("twitter:"):
            if extended:
                meta.twitter[name[8:]] = content
        elif isinstance(name, str) and name not in _NON_SEMANTIC_META:
            meta.standard[name] = content

    if extended:
        meta.json_ld = _extract_json_ld(head)

    return meta


def _extract_json_ld(head: Tag) -> list[Any]:
    items: list[Any] = []
    for script in head.find_all("script", attrs={"type": "application/ld+json"}):
        raw_text = script.string or script.get_text()
        try:
            data = json.loads(raw_text)
        except (json.JSONDecodeError, TypeError) as exc:
            logger.warning("Skipping malformed JSON-LD block: %s", exc)
            continue
        if isinstance(data, list):
            items.extend(data)
        else:
            items.append(data)
    return items
