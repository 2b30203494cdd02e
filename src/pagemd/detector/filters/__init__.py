"""Clutter filters applied to detected content."""

from pagemd.detector.filters.cookie_banner import CookieBannerFilter
from pagemd.detector.filters.selector_removal import SelectorRemovalFilter
from pagemd.detector.filters.visibility import EmptyElementFilter, HiddenElementFilter

__all__ = [
    "CookieBannerFilter",
    "EmptyElementFilter",
    "HiddenElementFilter",
    "SelectorRemovalFilter",
]
