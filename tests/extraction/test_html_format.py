"""Tests for the HTML extractor."""

from __future__ import annotations

import pytest

from paths_le.extraction import MARKUP_RULES, PathType, classify
from paths_le.extraction.formats import extract_from_html


@pytest.mark.parametrize(
    ("markup", "expected"),
    [
        ('<div data="./data/config.json"></div>', "./data/config.json"),
        ('<form action="./submit.php" method="post"></form>', "./submit.php"),
        ('<video poster="./images/thumbnail.jpg"></video>', "./images/thumbnail.jpg"),
        ('<body background="./images/bg.jpg">', "./images/bg.jpg"),
        ('<blockquote cite="./article.html">Quote</blockquote>', "./article.html"),
        ('<button formaction="./process.php">Submit</button>', "./process.php"),
        ('<html manifest="./app.appcache">', "./app.appcache"),
    ],
)
def test_whitelisted_attributes(markup: str, expected: str) -> None:
    result = extract_from_html(markup)

    assert [path.value for path in result] == [expected]


def test_src_and_href_in_line_order() -> None:
    content = (
        "<html>\n"
        '  <link href="./styles.css" rel="stylesheet">\n'
        '  <img src="./image.jpg" alt="Photo">\n'
        '  <script src="./app.js"></script>\n'
        '  <a href="./page.html">Link</a>\n'
        "</html>"
    )

    result = extract_from_html(content)

    assert [path.value for path in result] == ["./styles.css", "./image.jpg", "./app.js", "./page.html"]
    assert [path.position.line for path in result] == [2, 3, 4, 5]
    assert [path.context for path in result] == ["HTML href", "HTML src", "HTML src", "HTML href"]


def test_srcset_descriptors_yield_one_path_each() -> None:
    result = extract_from_html('<img srcset="./s.jpg 480w, ./l.jpg 800w">')

    assert [path.value for path in result] == ["./s.jpg", "./l.jpg"]
    assert {path.context for path in result} == {"HTML srcset"}


def test_srcset_with_pixel_density() -> None:
    result = extract_from_html('<img srcset="./images/standard.jpg 1x, ./images/retina.jpg 2x">')

    assert [path.value for path in result] == ["./images/standard.jpg", "./images/retina.jpg"]


def test_protocol_relative_urls_are_urls() -> None:
    result = extract_from_html('<img src="//cdn.example.com/image.jpg">')

    assert result[0].type is PathType.URL


def test_fragments_are_unknown() -> None:
    result = extract_from_html('<a href="#section">Jump</a>')

    assert result[0].type is PathType.UNKNOWN


@pytest.mark.parametrize(
    "markup",
    [
        '<img src="data:image/svg+xml;base64,ABC123">',
        '<a href="javascript:void(0)">Link</a>',
        "<div><p>Hello World</p></div>",
        "",
        "   ",
    ],
)
def test_yields_nothing(markup: str) -> None:
    assert extract_from_html(markup) == []


def test_classifies_each_shape() -> None:
    content = (
        '<img src="./relative.jpg">\n'
        '<link href="/absolute.css">\n'
        '<script src="https://cdn.example.com/lib.js"></script>'
    )

    assert [path.type for path in extract_from_html(content)] == [
        PathType.RELATIVE,
        PathType.ABSOLUTE,
        PathType.URL,
    ]


def test_recorded_type_matches_fresh_classification() -> None:
    content = (
        '<img src="./relative.jpg">\n'
        '<link href="/absolute.css">\n'
        '<script src="//cdn.example.com/lib.js"></script>\n'
        '<a href="#section">Jump</a>'
    )

    result = extract_from_html(content)

    assert len(result) == 4
    for path in result:
        assert classify(path.value, MARKUP_RULES) is path.type
