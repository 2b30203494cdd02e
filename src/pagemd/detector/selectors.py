"""Curated selector lists used by the content detector.

Removal rules are plain ``(selector, reason)`` data so new patterns can be
added without touching the detection code.
"""

from enum import Enum
from typing import NamedTuple


class SelectorRule(NamedTuple):
    """A CSS selector and why matching elements are removed."""

    selector: str
    reason: str


class ClutterCategory(str, Enum):
    """Groups of removal rules, each switched by one detection option."""

    NAV = "nav"
    FOOTER = "footer"
    SIDEBARS = "sidebars"
    ADS = "ads"
    COMMENTS = "comments"
    COOKIE_BANNERS = "cookie_banners"


# Main content candidates, highest priority first
CONTENT_SELECTORS: tuple[str, ...] = (
    "main",
    "article",
    '[role="main"]',
    '[role="article"]',
    ".main-content",
    ".article-content",
    ".post-content",
    ".entry-content",
    "#main-content",
    "#article",
    "#content",
    ".content",
    ".story-body",
    ".article-body",
    '[itemprop="articleBody"]',
)

# Tags considered by the heuristic fallback
CANDIDATE_SELECTOR = "div, section, article, main"


def _rules(reason: str, *selectors: str) -> tuple[SelectorRule, ...]:
    return tuple(SelectorRule(selector, reason) for selector in selectors)


REMOVAL_RULES: dict[ClutterCategory, tuple[SelectorRule, ...]] = {
    ClutterCategory.NAV: _rules(
        "site navigation",
        "nav", "header nav", ".navigation", ".nav", "#nav",
    ),
    ClutterCategory.FOOTER: _rules(
        "page footer",
        "footer", ".footer", "#footer", ".site-footer",
    ),
    ClutterCategory.SIDEBARS: _rules(
        "sidebar",
        "aside", ".sidebar", ".side-bar", "#sidebar", ".widget-area",
    ),
    ClutterCategory.ADS: _rules(
        "advertising",
        ".ad", ".ads", ".advertisement", '[class*="ad-"]', '[id*="ad-"]', ".sponsored",
    ),
    ClutterCategory.COMMENTS: _rules(
        "comment thread",
        ".comments", "#comments", ".comment-section", "#disqus_thread",
    ),
    ClutterCategory.COOKIE_BANNERS: (
        *_rules(
            "cookie or consent banner",
            '[class*="cookie"]', '[id*="cookie"]',
            '[class*="consent"]', '[id*="consent"]',
            '[class*="gdpr"]', '[id*="gdpr"]',
            '[class*="privacy-banner"]', '[class*="privacy-notice"]',
            '[class*="cc-banner"]', '[class*="cc-window"]',
            ".gdpr-banner", ".gdpr-notice", ".privacy-banner", ".consent-banner",
        ),
        *_rules(
            "consent management library",
            ".cc-window", ".cc-banner", ".cc-cookie-consent",
            ".cky-consent-container", ".cky-consent-bar",
            ".cookiealert", ".cookiebanner", ".cookieconsent",
            ".cookie-law-info-bar", ".cli-modal-backdrop",
            ".moove_gdpr_cookie_info_bar", ".gdpr-cookie-notice",
            ".wp-gdpr-cookie-notice", ".pum-overlay", "#onetrust-banner-sdk",
        ),
        *_rules(
            "consent data attribute",
            "[data-cookie-consent]", "[data-gdpr]", "[data-cookie-banner]",
        ),
        *_rules(
            "consent dialog label",
            '[aria-label*="cookie" i]', '[aria-label*="consent" i]', '[aria-label*="privacy" i]',
        ),
        *_rules(
            "consent overlay",
            ".cookie-overlay", ".gdpr-overlay", ".privacy-overlay", ".consent-overlay",
        ),
    ),
}

# Structural cookie banner sweep
BANNER_BLOCK_TAGS: tuple[str, ...] = (
    "div", "section", "aside", "header", "footer", "form", "dialog", "dl",
)
BANNER_KEYWORDS: tuple[str, ...] = ("cookie", "consent", "privacy", "gdpr")
BANNER_CONTROL_SELECTOR = 'button, [role="button"], a[href="#"], .btn, .button'
BANNER_MAX_WORDS = 200

# Metadata lookups: element selectors first, then meta tags
TITLE_SELECTORS: tuple[str, ...] = (
    "h1",
    ".article-title",
    ".post-title",
    ".entry-title",
    '[itemprop="headline"]',
)
TITLE_META: tuple[str, ...] = (
    'meta[property="og:title"]',
    'meta[name="twitter:title"]',
)
AUTHOR_SELECTORS: tuple[str, ...] = (
    ".author",
    ".by-author",
    ".article-author",
    '[itemprop="author"]',
    '[rel="author"]',
)
AUTHOR_META: tuple[str, ...] = ('meta[name="author"]',)
DATE_SELECTORS: tuple[str, ...] = (
    "time",
    ".publish-date",
    ".post-date",
    '[itemprop="datePublished"]',
)
DATE_META: tuple[str, ...] = ('meta[property="article:published_time"]',)
DESCRIPTION_META: tuple[str, ...] = (
    'meta[name="description"]',
    'meta[property="og:description"]',
)
