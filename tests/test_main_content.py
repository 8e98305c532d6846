"""Tests for semantic_markdown.extractors.main_content."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from semantic_markdown.extractors.main_content import (
    calculate_link_density,
    calculate_score,
    detect_main_content,
    find_main_content,
    wrap_main_content,
)

_FIRST_BLOCK = "div, article, p, section, main"


def _first(html: str):
    return BeautifulSoup(html, "lxml").select_one(_FIRST_BLOCK)


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

LONG_PARAGRAPH = (
    '<div id="content">\n'
    f'<p>This is some {"very " * 50} long text content.</p>\n'
    "</div>"
)


@pytest.mark.parametrize("html, expected", [
    ('<div id="main">Content</div>', 15),
    ("<article>Content</article>", 10),
    ('<div class="content">Content</div>', 15),
    ("<div><p>1</p><p>2</p><p>3</p><p>4</p><p>5</p><p>6</p></div>", 10),
    ("<div data-main>Content</div>", 15),
    ('<div role="main">Content</div>', 15),
    ('<div id="main-content" class="article">Test</div>', 25),
    ('<div id="article-wrapper"><h1>Article Title</h1><p>Some text.</p></div>', 6),
    ('<div class="sidebar">Links and ads</div>', 5),
    (LONG_PARAGRAPH, 17),
    ('<div><a href="#">Link</a></div>', 0),
    ('<div><p>Some text.</p><a href="#">Link 1</a><a href="#">Link 2</a><a href="#">Link 3</a></div>', 1),
    (f'<div>\n{"very " * 20} long text\n</div>', 5),
    (f'<div>{"a" * 1200}</div>', 10),
    (f'<div><a href="#">{"L" * 1200}</a></div>', 5),
    ("<section>Content</section>", 10),
])
def test_calculate_score(html, expected):
    assert calculate_score(_first(html)) == expected


def test_score_is_deterministic():
    element = _first(LONG_PARAGRAPH)
    assert calculate_score(element) == calculate_score(element)


def test_matching_class_adds_ten():
    plain = _first('<div class="wrapper"><p>Text</p></div>')
    boosted = _first('<div class="wrapper content"><p>Text</p></div>')
    assert calculate_score(boosted) == calculate_score(plain) + 10


def test_id_must_match_exactly():
    assert calculate_score(_first('<div id="maintenance">x</div>')) == 5


class TestLinkDensity:
    def test_all_links(self):
        assert calculate_link_density(_first('<div><a href="#">Link</a></div>')) == 1.0

    def test_empty_element(self):
        assert calculate_link_density(_first("<div></div>")) == 0.0

    def test_mixed(self):
        density = calculate_link_density(_first('<div>abcdef<a href="#">gh</a></div>'))
        assert density == pytest.approx(0.25)


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------

class TestFindMainContent:
    def test_main_tag_wins(self):
        soup = BeautifulSoup(
            '<body><div class="content main"><p>x</p></div><main><p>y</p></main></body>', "lxml",
        )
        assert find_main_content(soup) is soup.main

    def test_role_main_wins(self):
        soup = BeautifulSoup(
            '<body><header>h</header><div role="main" id="r"><p>x</p></div></body>', "lxml",
        )
        assert find_main_content(soup).get("id") == "r"

    def test_best_candidate(self):
        soup = BeautifulSoup(
            "<body><nav><a href='/'>Home</a></nav>"
            '<div id="post" class="article content"><p>a</p><p>b</p><p>c</p></div>'
            "<footer>f</footer></body>",
            "lxml",
        )
        assert find_main_content(soup) is soup.find(id="post")

    def test_falls_back_to_body(self):
        soup = BeautifulSoup("<body><div>short</div></body>", "lxml")
        assert find_main_content(soup) is soup.body

    def test_without_body(self):
        soup = BeautifulSoup("<div>fragment</div>", "html.parser")
        assert find_main_content(soup).name == "div"


class TestDetectMainContent:
    def test_higher_nested_candidate_wins(self):
        soup = BeautifulSoup(
            '<body><div id="outer" class="content" data-content>'
            '<div id="inner" class="article main-content" role="main"><p>a</p><p>b</p></div>'
            "</div></body>",
            "lxml",
        )
        assert detect_main_content(soup.body).get("id") == "inner"

    def test_nested_tie_keeps_outer(self):
        soup = BeautifulSoup(
            '<body><div id="outer" class="content main">'
            '<div id="inner" class="article main-content"><p>a</p><p>b</p></div>'
            "</div></body>",
            "lxml",
        )
        assert detect_main_content(soup.body).get("id") == "outer"

    def test_independent_higher_candidate_replaces(self):
        soup = BeautifulSoup(
            "<body>"
            '<div id="a" class="content main"><p>x</p></div>'
            '<div id="b" class="content main article"><p>y</p></div>'
            "</body>",
            "lxml",
        )
        assert detect_main_content(soup.body).get("id") == "b"


class TestWrapMainContent:
    def test_wraps_in_landmark(self):
        soup = BeautifulSoup('<body><div id="x"><p>a</p></div></body>', "lxml")
        target = soup.find(id="x")
        wrapper = wrap_main_content(target, soup)
        assert wrapper.name == "main"
        assert wrapper.get("id") == "detected-main-content"
        assert target.parent is wrapper
        assert wrapper.parent is soup.body

    def test_main_left_alone(self):
        soup = BeautifulSoup("<body><main><p>a</p></main></body>", "lxml")
        assert wrap_main_content(soup.main, soup) is soup.main
        assert len(soup.find_all("main")) == 1
