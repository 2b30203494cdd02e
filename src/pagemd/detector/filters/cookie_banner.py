"""Cookie and consent banner removal."""

from bs4 import Tag

from pagemd.detector.filters.selector_removal import SelectorRemovalFilter
from pagemd.detector.selectors import (
    BANNER_BLOCK_TAGS,
    BANNER_CONTROL_SELECTOR,
    BANNER_KEYWORDS,
    BANNER_MAX_WORDS,
    REMOVAL_RULES,
    ClutterCategory,
    SelectorRule,
)
from pagemd.dom import class_and_id, count_words, remove_node
from pagemd.logger import logger


class CookieBannerFilter:
    """Removes cookie/consent banners.

    ``apply`` drops elements matching known banner selectors and is safe on
    extracted content. ``sweep`` is the page-wide structural pass: a block
    goes only when it mentions a consent keyword, carries an interactive
    control and is short. It runs on the page, never on extracted content.
    """

    def __init__(self, rules: tuple[SelectorRule, ...] | None = None) -> None:
        """Initialize the filter with optional replacement selector rules."""
        if rules is None:
            rules = REMOVAL_RULES[ClutterCategory.COOKIE_BANNERS]
        self._selector_filter = SelectorRemovalFilter("cookie banner", rules)

    def apply(self, root: Tag) -> int:
        """Remove known banner containers below ``root``."""
        return self._selector_filter.apply(root)

    def sweep(self, root: Tag) -> int:
        """Remove block elements below ``root`` that look like consent banners.

        Elements are visited deepest first so the banner itself goes before
        any wrapper that only looks like a banner because it contains one.
        """
        removed = 0
        for element in reversed(root.find_all(list(BANNER_BLOCK_TAGS))):
            if element.decomposed:
                continue
            if self.looks_like_banner(element) and remove_node(element):
                removed += 1

        if removed:
            logger.debug("Cookie banner sweep removed %d elements", removed)
        return removed

    def looks_like_banner(self, element: Tag) -> bool:
        """Check the keyword + control + size conjunction for one element."""
        # Never take page content or the page heading down with a banner
        if element.find(["article", "main", "h1"]) is not None:
            return False

        text = element.get_text(" ").lower()
        attributes = class_and_id(element)
        if not any(keyword in text or keyword in attributes for keyword in BANNER_KEYWORDS):
            return False

        if element.select_one(BANNER_CONTROL_SELECTOR) is None:
            return False

        return count_words(text) < BANNER_MAX_WORDS
