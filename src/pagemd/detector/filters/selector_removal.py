"""Selector based clutter removal."""

from collections import Counter

from bs4 import Tag

from pagemd.detector.selectors import SelectorRule
from pagemd.dom import remove_node, select_safe
from pagemd.logger import logger


class SelectorRemovalFilter:
    """Removes every element matched by a list of selector rules."""

    def __init__(self, name: str, rules: tuple[SelectorRule, ...]) -> None:
        """Initialize the filter.

        Args:
            name: Label used in log messages (e.g. "nav").
            rules: Selector rules applied in order.

        """
        self.name = name
        self._rules = rules

    def apply(self, root: Tag) -> int:
        """Remove matching descendants of ``root``."""
        reasons: Counter[str] = Counter()
        for rule in self._rules:
            for element in select_safe(root, rule.selector):
                if remove_node(element):
                    reasons[rule.reason] += 1

        removed = sum(reasons.values())
        if removed:
            logger.debug("%s filter removed %d elements (%s)", self.name, removed, dict(reasons))
        return removed
