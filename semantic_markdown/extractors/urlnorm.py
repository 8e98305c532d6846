"""URL compaction: replace long or repeated URLs with short reference tokens."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from ..nodes import ImageNode, LinkNode, Node, VideoNode, walk_ast

logger = logging.getLogger(__name__)

# Suffixes whose URL prefix (directory) is interned instead of the whole URL
MEDIA_SUFFIXES: frozenset[str] = frozenset({
    # images
    "jpeg", "jpg", "png", "gif", "bmp", "tiff", "tif", "svg", "webp", "ico",
    # video
    "avi", "mov", "mp4", "mkv", "flv", "wmv", "webm", "mpeg", "mpg",
    # audio
    "mp3", "wav", "aac", "ogg", "flac", "m4a",
    # documents
    "pdf", "doc", "docx", "ppt", "pptx", "xls", "xlsx", "txt",
    # web assets and markup
    "css", "js", "xml", "json", "html", "htm",
})

_MAX_SEGMENTS = 4


def refify_urls(ast: Node | list[Node], ref_map: dict[str, str] | None = None) -> dict[str, str]:
    """Rewrite link/image/video URLs in *ast* in place.

    Returns the reference map: ``{original prefix-or-url: token}``.  Tokens
    are ``ref0``, ``ref1``, ... in first-seen order.
    """
    refs = ref_map if ref_map is not None else {}

    def intern(prefix: str) -> str:
        token = refs.get(prefix)
        if token is None:
            token = f"ref{len(refs)}"
            refs[prefix] = token
        return token

    for node in walk_ast(ast):
        if isinstance(node, LinkNode):
            node.href = _refify(node.href, intern)
        elif isinstance(node, (ImageNode, VideoNode)):
            node.src = _refify(node.src, intern)

    logger.debug("Refified URLs into %d references", len(refs))
    return refs


def _refify(url: str, intern) -> str:
    if not url.startswith(("http://", "https://")):
        return url

    path = urlparse(url).path
    last_segment = path.rsplit("/", 1)[-1]
    suffix = last_segment.rsplit(".", 1)[-1].lower() if "." in last_segment else ""
    if suffix in MEDIA_SUFFIXES:
        prefix, _, leaf = url.rpartition("/")
        return f"{intern(prefix)}://{leaf}"

    if len(url.split("/")) > _MAX_SEGMENTS:
        return intern(url)
    return url
