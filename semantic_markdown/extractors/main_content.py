"""Main content detection.

Tier 1: explicit landmark  (<main> or role="main")
Tier 2: candidate scoring  (class/id keywords, tag, paragraphs, text length,
                            link density, data-* and role attributes)

The highest-scoring candidate that is not nested inside another candidate
wins; when nothing reaches ``MIN_CANDIDATE_SCORE`` the body is returned
unchanged.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

MIN_CANDIDATE_SCORE = 20

# Class names / ids that strongly suggest a content container
_HIGH_IMPACT_ATTRIBUTES: tuple[str, ...] = (
    "article",
    "content",
    "main-container",
    "main",
    "main-content",
)

_HIGH_IMPACT_TAGS: frozenset[str] = frozenset({"article", "main", "section"})

_LANDMARK_SELECTOR = 'main, [role="main"]'

WRAPPER_ID = "detected-main-content"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def find_main_content(document: BeautifulSoup) -> Tag:
    """Return the element most likely to hold the document's primary content."""
    landmark = document.select_one(_LANDMARK_SELECTOR)
    if landmark is not None:
        logger.debug("Explicit main landmark found: %s", _describe(landmark))
        return landmark

    body = document.body
    if body is None:
        root = document.html or document.find(True)
        logger.debug("No <body>; using document root")
        return root if root is not None else document

    return detect_main_content(body)


def detect_main_content(root: Tag) -> Tag:
    """Pick the best-scoring independent candidate below (and including) *root*."""
    candidates = _collect_candidates(root, MIN_CANDIDATE_SCORE)
    if not candidates:
        logger.debug("No candidate reached %d; keeping %s", MIN_CANDIDATE_SCORE, _describe(root))
        return root

    candidates.sort(key=lambda pair: pair[0], reverse=True)
    best_score, best = candidates[0]
    for i, (score, candidate) in enumerate(candidates[1:], start=1):
        contained = any(
            j != i and _contains(other, candidate)
            for j, (_, other) in enumerate(candidates)
        )
        if not contained and score > best_score:
            best_score, best = score, candidate
            logger.debug("New best independent candidate: %s (%d)", _describe(best), score)

    logger.debug("Selected main content: %s (%d)", _describe(best), best_score)
    return best


def calculate_score(element: Tag) -> int:
    """Additive, non-negative likelihood that *element* is the content container."""
    score = 0

    classes = element.get("class") or []
    element_id = element.get("id") or ""
    for attr in _HIGH_IMPACT_ATTRIBUTES:
        if attr in classes or element_id == attr:
            score += 10

    if element.name in _HIGH_IMPACT_TAGS:
        score += 5

    score += min(len(element.find_all("p")), 5)

    text_length = len(element.get_text().strip())
    if text_length > 200:
        score += min(text_length // 200, 5)

    if calculate_link_density(element) < 0.3:
        score += 5

    if element.has_attr("data-main") or element.has_attr("data-content"):
        score += 10

    role = element.get("role") or ""
    if isinstance(role, str) and "main" in role:
        score += 10

    return score


def calculate_link_density(element: Tag) -> float:
    """Anchor-text length over total text length (empty text counts as 1)."""
    link_length = sum(len(a.get_text()) for a in element.find_all("a"))
    text_length = len(element.get_text()) or 1
    return link_length / text_length


def wrap_main_content(element: Tag, document: BeautifulSoup) -> Tag:
    """Wrap *element* in ``<main id="detected-main-content">`` in place.

    Returns the landmark element: the new wrapper, or *element* itself when it
    already is a ``<main>``.
    """
    if element.name == "main":
        return element
    wrapper = document.new_tag("main", id=WRAPPER_ID)
    element.wrap(wrapper)
    logger.debug("Wrapped %s in <main id=%s>", _describe(element), WRAPPER_ID)
    return wrapper


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _collect_candidates(root: Tag, min_score: int) -> list[tuple[int, Tag]]:
    candidates: list[tuple[int, Tag]] = []
    for element in [root, *root.find_all(True)]:
        score = calculate_score(element)
        if score >= min_score:
            logger.debug("Candidate %s scored %d", _describe(element), score)
            candidates.append((score, element))
    return candidates


def _contains(ancestor: Tag, node: Tag) -> bool:
    # bs4 Tag equality is structural, so identity is compared explicitly
    if ancestor is node:
        return True
    return any(parent is ancestor for parent in node.parents)


def _describe(element: Tag) -> str:
    classes = ".".join(element.get("class") or [])
    return f"{element.name}#{element.get('id') or 'no-id'}.{classes}"
