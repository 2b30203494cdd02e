"""Markup tree access built on BeautifulSoup.

A markup node is a ``bs4.Tag`` (a parsed document is a ``BeautifulSoup``,
itself a Tag). The helpers here cover what the detector and converter need
beyond the bs4 API: an explicit clone, selector queries that tolerate bad
selectors, visibility checks and safe removal.
"""

import copy
import re
from collections.abc import Iterable

import soupsieve
from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from pagemd.logger import logger

__all__ = [
    "HTML_PARSER",
    "class_and_id",
    "clone",
    "count_words",
    "is_hidden",
    "is_valid_selector",
    "parse_html",
    "remove_matching",
    "remove_node",
    "select_one_safe",
    "select_safe",
    "text_of",
    "to_tree",
]

HTML_PARSER = "html.parser"

_HIDDEN_STYLE_RE = re.compile(r"display\s*:\s*none|visibility\s*:\s*hidden", re.IGNORECASE)


def parse_html(markup: str | bytes | None) -> BeautifulSoup:
    """Parse markup into a document; malformed input is repaired best-effort."""
    return BeautifulSoup(markup or "", HTML_PARSER)


def clone(node: Tag) -> Tag:
    """Return a detached deep copy of ``node``.

    Mutating the copy never touches the original tree.
    """
    return copy.copy(node)


def to_tree(markup: str | bytes | Tag | None) -> Tag:
    """Return a private tree for ``markup``.

    Text is parsed; an existing tree is cloned so the caller's nodes stay intact.
    """
    if isinstance(markup, Tag):
        return clone(markup)
    return parse_html(markup)


def text_of(node: Tag | None) -> str:
    """Return the text content of ``node`` (empty for None)."""
    if node is None:
        return ""
    return node.get_text()


def count_words(text: str) -> int:
    """Count whitespace separated tokens."""
    return len(text.split())


def words_in(node: Tag | None) -> int:
    """Count words below ``node`` with block boundaries kept apart."""
    if node is None:
        return 0
    return count_words(node.get_text(" "))


def class_and_id(node: Tag) -> str:
    """Return the lower-cased class list and id joined by spaces."""
    classes = node.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    element_id = node.get("id") or ""
    return f"{' '.join(classes)} {element_id}".lower()


def is_hidden(node: Tag) -> bool:
    """Check the ``hidden`` attribute and inline display/visibility styles."""
    if node.has_attr("hidden"):
        return True
    style = node.get("style") or ""
    return bool(_HIDDEN_STYLE_RE.search(str(style)))


def select_safe(root: Tag, selector: str) -> list[Tag]:
    """Run a CSS selector, returning no matches when the selector is invalid."""
    try:
        return list(root.select(selector))
    except (SelectorSyntaxError, NotImplementedError, ValueError) as e:
        logger.debug("Skipping invalid selector %r: %s", selector, e)
        return []


def is_valid_selector(selector: str) -> bool:
    """Check whether ``selector`` compiles as a CSS selector."""
    try:
        soupsieve.compile(selector)
    except (SelectorSyntaxError, NotImplementedError, ValueError):
        return False
    return True


def select_one_safe(root: Tag, selector: str) -> Tag | None:
    """Return the first match of ``selector`` or None (also for invalid selectors)."""
    matches = select_safe(root, selector)
    return matches[0] if matches else None


def remove_node(node: Tag) -> bool:
    """Remove ``node`` from its tree.

    Returns:
        False when the node is a tree root or was already removed along
        with an ancestor, True otherwise.

    """
    if node.decomposed or node.parent is None:
        return False
    node.decompose()
    return True


def remove_matching(root: Tag, selectors: Iterable[str]) -> int:
    """Remove every descendant of ``root`` matching any selector.

    Returns:
        Number of subtrees removed.

    """
    removed = 0
    for selector in selectors:
        for element in select_safe(root, selector):
            if remove_node(element):
                removed += 1
    return removed
