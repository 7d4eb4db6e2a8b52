from bs4 import BeautifulSoup

from tab2onsong.markup import (
    class_contains,
    find_first,
    meta_content,
    meta_property,
    node_text,
    tag_named,
    title_text,
)


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# ---------------------------------------------------------------------------
# find_first
# ---------------------------------------------------------------------------


def test_find_first_returns_first_in_document_order():
    soup = _soup("<div><p id='a'><p id='b'></p></p><p id='c'></p></div>")
    assert find_first(soup, tag_named("p"))["id"] == "a"


def test_find_first_checks_starting_node_itself():
    pre = _soup("<pre>G C D</pre>").pre
    assert find_first(pre, tag_named("pre")) is pre


def test_find_first_depth_first_before_later_siblings():
    soup = _soup("<div><section><span id='deep'></span></section><span id='shallow'></span></div>")
    assert find_first(soup, tag_named("span"))["id"] == "deep"


def test_find_first_not_found_returns_none():
    assert find_first(_soup("<div></div>"), tag_named("pre")) is None


def test_find_first_none_node_returns_none():
    assert find_first(None, tag_named("pre")) is None


def test_find_first_within_subtree_only():
    soup = _soup("<pre id='outside'></pre><div class='box'><pre id='inside'></pre></div>")
    box = find_first(soup, class_contains("box"))
    assert find_first(box, tag_named("pre"))["id"] == "inside"


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def test_class_contains_substring_of_attribute_value():
    soup = _soup("<div class='song-chords-content wide'>x</div>")
    assert find_first(soup, class_contains("chords-content")) is not None


def test_class_contains_respects_tag_name():
    soup = _soup("<span class='song-chords-content'></span><div class='song-chords-content' id='d'></div>")
    assert find_first(soup, class_contains("song-chords-content", name="div"))["id"] == "d"


def test_class_contains_ignores_tags_without_class():
    assert find_first(_soup("<div id='x'></div>"), class_contains("x")) is None


def test_meta_property_requires_content():
    soup = _soup(
        '<meta property="og:title" content="">'
        '<meta property="og:title" content="Way Maker Chords - Sinach">'
    )
    assert find_first(soup, meta_property("og:title"))["content"] == "Way Maker Chords - Sinach"


def test_meta_content_missing_returns_empty():
    assert meta_content(_soup("<meta name='description' content='x'>"), "og:title") == ""


# ---------------------------------------------------------------------------
# Text extraction
# ---------------------------------------------------------------------------


def test_node_text_br_becomes_newline():
    pre = _soup("<pre>G<br>Amazing<br/>grace</pre>").pre
    assert node_text(pre) == "G\nAmazing\ngrace"


def test_node_text_keeps_whitespace_verbatim():
    pre = _soup("<pre>  G      C  \n  line  </pre>").pre
    assert node_text(pre) == "  G      C  \n  line  "


def test_node_text_includes_nested_text():
    pre = _soup("<pre><span class='chord'>G</span> grace <b>sweet</b></pre>").pre
    assert node_text(pre) == "G grace sweet"


def test_node_text_skips_comments():
    pre = _soup("<pre>G<!-- ad slot -->C</pre>").pre
    assert node_text(pre) == "GC"


def test_node_text_does_not_unescape_twice():
    pre = _soup("<pre>A &amp;lt; B</pre>").pre
    assert node_text(pre) == "A &lt; B"


def test_title_text():
    assert title_text(_soup("<head><title>Way Maker Chords - Sinach</title></head>")) == (
        "Way Maker Chords - Sinach"
    )


def test_title_text_missing():
    assert title_text(_soup("<head></head>")) == ""
