"""Generic search and text extraction over a parsed BeautifulSoup tree.

Every lookup an adapter needs (title element, ``og:title`` meta, content
container, nested ``<pre>``) goes through :func:`find_first` with one of the
predicate factories below, so there is exactly one traversal to reason about:
depth-first, pre-order, the starting node itself included.

Usage::

    soup = BeautifulSoup(html, "html.parser")
    container = find_first(soup, class_contains("song-chords-content", name="div"))
    pre = find_first(container, tag_named("pre"))
    text = node_text(pre)
"""

from collections.abc import Callable

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

Predicate = Callable[[Tag], bool]


def find_first(node: Tag | None, predicate: Predicate) -> Tag | None:
    """Return the first tag at or below *node* matching *predicate*.

    Document order is preserved: *node* is tested first, then its
    descendants in the order they appear in the markup.  Returns ``None``
    when nothing matches (or *node* itself is ``None``).
    """
    if node is None:
        return None
    if getattr(node, "name", None) and predicate(node):
        return node
    return node.find(predicate)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def tag_named(name: str) -> Predicate:
    """Match tags called *name*."""
    return lambda tag: tag.name == name


def class_contains(fragment: str, name: str | None = None) -> Predicate:
    """Match tags whose ``class`` attribute value contains *fragment*.

    The comparison is a substring test on the attribute as written in the
    markup, so ``"song-chords"`` matches ``class="song-chords-content wide"``.
    """

    def predicate(tag: Tag) -> bool:
        if name is not None and tag.name != name:
            return False
        value = tag.get("class")
        if value is None:
            return False
        if isinstance(value, list):
            value = " ".join(value)
        return fragment in value

    return predicate


def meta_property(prop: str) -> Predicate:
    """Match ``<meta property="prop" content="...">`` with non-empty content."""
    return lambda tag: (
        tag.name == "meta" and tag.get("property") == prop and bool(tag.get("content"))
    )


# ---------------------------------------------------------------------------
# Text extraction
# ---------------------------------------------------------------------------


def node_text(node: Tag) -> str:
    """Concatenate the text below *node*, turning ``<br>`` into newlines.

    Text nodes are appended verbatim.  Comments, doctypes and other
    non-content strings are skipped.
    """
    parts: list[str] = []
    for child in node.descendants:
        if isinstance(child, Tag):
            if child.name == "br":
                parts.append("\n")
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            parts.append(str(child))
    return "".join(parts)


def meta_content(root: Tag, prop: str) -> str:
    """Return the ``content`` of the first matching meta property, or ``""``."""
    meta = find_first(root, meta_property(prop))
    return meta["content"] if meta else ""


def title_text(root: Tag) -> str:
    """Return the text of the document's ``<title>``, or ``""``."""
    title = find_first(root, tag_named("title"))
    if title is None or not title.contents:
        return ""
    first = title.contents[0]
    return str(first) if isinstance(first, NavigableString) else ""
