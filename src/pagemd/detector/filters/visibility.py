"""Hidden and empty element removal."""

from typing import ClassVar

from bs4 import Tag

from pagemd.dom import is_hidden, remove_node
from pagemd.logger import logger


class HiddenElementFilter:
    """Removes elements hidden by the ``hidden`` attribute or inline style."""

    def apply(self, root: Tag) -> int:
        """Remove hidden descendants of ``root``."""
        removed = 0
        for element in root.find_all(True):
            if element.decomposed:
                continue
            if is_hidden(element) and remove_node(element):
                removed += 1

        if removed:
            logger.debug("HiddenElementFilter removed %d elements", removed)
        return removed


class EmptyElementFilter:
    """Removes containers left without text or child elements."""

    EMPTY_CANDIDATES: ClassVar[list[str]] = ["div", "span", "p"]

    def apply(self, root: Tag) -> int:
        """Remove empty containers, innermost first so emptiness cascades."""
        removed = 0
        for element in reversed(root.find_all(self.EMPTY_CANDIDATES)):
            if element.get_text(strip=True) or element.find(True) is not None:
                continue
            if remove_node(element):
                removed += 1

        if removed:
            logger.debug("EmptyElementFilter removed %d elements", removed)
        return removed
