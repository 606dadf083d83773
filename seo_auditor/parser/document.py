"""Parsed document adapter.

Wraps BeautifulSoup so extractors share one read-only tree. Nothing in this
module mutates the tree: text extraction walks the nodes and skips excluded
subtrees instead of decomposing them.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

# Subtrees that never contribute visible text
EXCLUDED_TAGS = frozenset({"script", "style", "noscript", "iframe", "svg", "template"})

# Elements whose boundaries separate words; inline elements join their text
BLOCK_TAGS = frozenset({
    "address", "article", "aside", "blockquote", "body", "br", "caption", "dd", "div",
    "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3",
    "h4", "h5", "h6", "header", "hr", "html", "li", "main", "nav", "ol", "option",
    "p", "pre", "section", "table", "td", "th", "title", "tr", "ul",
})
_BOUNDARY = object()


def parse_document(html: str | None) -> BeautifulSoup:
    """Parse raw HTML into a tree.

    Malformed markup, missing <head>/<body> and empty input all produce a
    tree that simply lacks the corresponding nodes.
    """
    return BeautifulSoup(html or "", "lxml")


def clean_text(text: str) -> str:
    return " ".join(text.split())


def attr_str(tag: Tag, name: str) -> str:
    """Return an attribute as a string, joining multi-valued attributes."""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def attr_tokens(tag: Tag, name: str) -> set[str]:
    """Return the lower-cased whitespace tokens of an attribute (e.g. rel)."""
    return {token.lower() for token in attr_str(tag, name).split()}


def body_or_root(doc: BeautifulSoup) -> Tag:
    return doc.body or doc


def iter_visible_strings(node: Tag, exclude: Iterable[str] = EXCLUDED_TAGS) -> Iterator[str]:
    """Yield text strings under node in document order, skipping excluded subtrees.

    A single space is yielded at each block element boundary, so joining the
    strings with "" keeps inline markup such as Un<em>believ</em>able intact.
    """
    excluded = frozenset(name.lower() for name in exclude)
    stack: list = [node]
    while stack:
        current = stack.pop()
        if current is _BOUNDARY:
            yield " "
        elif isinstance(current, Tag):
            if current is not node and current.name in excluded:
                continue
            if current.name in BLOCK_TAGS:
                yield " "
                stack.append(_BOUNDARY)
            stack.extend(reversed(current.contents))
        elif isinstance(current, NavigableString) and not isinstance(current, PreformattedString):
            yield str(current)


def visible_text(node: Tag, exclude: Iterable[str] = EXCLUDED_TAGS) -> str:
    """Entity-decoded visible text of node with whitespace collapsed."""
    return clean_text("".join(iter_visible_strings(node, exclude)))


def node_text(tag: Tag) -> str:
    return visible_text(tag)


def find_meta(doc: BeautifulSoup, key: str) -> Tag | None:
    """Find a <meta> whose name or property equals key, case-insensitively."""
    key = key.lower()

    def _matches(tag: Tag) -> bool:
        if tag.name != "meta":
            return False
        for attr in ("name", "property"):
            if attr_str(tag, attr).strip().lower() == key:
                return True
        return False

    return doc.find(_matches)


def meta_content(doc: BeautifulSoup, key: str) -> str | None:
    """Return the stripped content of a named meta tag, or None if absent."""
    tag = find_meta(doc, key)
    if tag is None:
        return None
    return clean_text(attr_str(tag, "content"))


def find_links(doc: BeautifulSoup, rel: str) -> list[Tag]:
    """Return <link> elements whose rel contains the given token."""
    rel = rel.lower()
    return [link for link in doc.find_all("link") if rel in attr_tokens(link, "rel")]


def has_ancestor(tag: Tag, names: Iterable[str]) -> bool:
    return tag.find_parent(list(names)) is not None


def has_meta(doc: BeautifulSoup, key: str) -> bool:
    return find_meta(doc, key) is not None
