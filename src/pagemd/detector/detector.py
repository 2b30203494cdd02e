"""Main content detection.

Pipeline: semantic selector search -> heuristic fallback -> clutter removal
on a clone -> metadata -> word count, reading time and confidence.
"""

import math
from dataclasses import dataclass

from bs4 import Tag

from pagemd.detector.filters import (
    CookieBannerFilter,
    EmptyElementFilter,
    HiddenElementFilter,
    SelectorRemovalFilter,
)
from pagemd.detector.metadata import MetadataExtractor
from pagemd.detector.protocols import CleaningFilter
from pagemd.detector.scoring import calculate_confidence, pick_best_candidate
from pagemd.detector.selectors import (
    CANDIDATE_SELECTOR,
    CONTENT_SELECTORS,
    REMOVAL_RULES,
    ClutterCategory,
)
from pagemd.dom import clone, select_safe, text_of, to_tree, words_in
from pagemd.logger import logger

WORDS_PER_MINUTE = 200


@dataclass(frozen=True, slots=True)
class DetectionOptions:
    """Which clutter to strip and how much text a content block needs."""

    remove_nav: bool = True
    remove_footer: bool = True
    remove_sidebars: bool = True
    remove_ads: bool = True
    remove_comments: bool = True
    remove_cookie_banners: bool = True
    min_text_length: int = 200


@dataclass(slots=True)
class DetectedContent:
    """Result of content detection."""

    main_content: Tag | None
    title: str
    author: str | None = None
    publish_date: str | None = None
    description: str | None = None
    word_count: int = 0
    reading_time: int = 0
    confidence: int = 0

    def to_dict(self, include_html: bool = True) -> dict[str, object]:
        """Return a JSON friendly representation (main content as HTML text)."""
        payload: dict[str, object] = {
            "title": self.title,
            "author": self.author,
            "publishDate": self.publish_date,
            "description": self.description,
            "wordCount": self.word_count,
            "readingTime": self.reading_time,
            "confidence": self.confidence,
        }
        if include_html:
            payload["mainContent"] = str(self.main_content) if self.main_content else None
        return payload


class ContentDetector:
    """Finds and cleans the main content of a page.

    The input tree is never modified: the detector works on its own copy of
    the document and returns a separately cloned content node.
    """

    def __init__(self, options: DetectionOptions | None = None) -> None:
        """Initialize the detector.

        Args:
            options: Detection options; defaults remove all clutter kinds.

        """
        self._options = options or DetectionOptions()
        self._cookie_filter = CookieBannerFilter()
        self._metadata_extractor = MetadataExtractor()

    @property
    def options(self) -> DetectionOptions:
        """Options this detector was built with."""
        return self._options

    def detect(self, document: str | bytes | Tag | None, page_title: str | None = None) -> DetectedContent:
        """Detect the main content of ``document``.

        Args:
            document: Page markup or an already parsed tree.
            page_title: Title reported by the host, used as the last title fallback.

        Returns:
            DetectedContent; ``main_content`` is None when nothing qualifies.

        """
        working = to_tree(document)

        main_content = self._find_semantic(working) or self._find_heuristic(working)
        if main_content is not None:
            self._clean(main_content)

        if self._options.remove_cookie_banners:
            # Page-wide sweep so banner text cannot leak into metadata
            self._cookie_filter.sweep(working)

        metadata = self._metadata_extractor.extract(working, page_title)

        word_count = words_in(main_content)
        if word_count == 0:
            main_content = None
        confidence = calculate_confidence(main_content, word_count)

        logger.debug(
            "Detected content: %d words, confidence %d, title %r",
            word_count, confidence, metadata.title,
        )
        return DetectedContent(
            main_content=main_content,
            title=metadata.title,
            author=metadata.author,
            publish_date=metadata.publish_date,
            description=metadata.description,
            word_count=word_count,
            reading_time=math.ceil(word_count / WORDS_PER_MINUTE),
            confidence=confidence,
        )

    def _is_substantial(self, element: Tag) -> bool:
        return len(text_of(element)) > self._options.min_text_length

    def _find_semantic(self, document: Tag) -> Tag | None:
        """Return a clone of the first priority selector match with enough text."""
        for selector in CONTENT_SELECTORS:
            for element in select_safe(document, selector):
                if self._is_substantial(element):
                    logger.debug("Content selector %r matched", selector)
                    return clone(element)
        return None

    def _find_heuristic(self, document: Tag) -> Tag | None:
        """Return a clone of the best scoring block, or None without candidates."""
        candidates = [
            element for element in select_safe(document, CANDIDATE_SELECTOR)
            if self._is_substantial(element)
        ]
        best = pick_best_candidate(candidates)
        if best is None:
            logger.debug("No content candidate above %d characters", self._options.min_text_length)
            return None
        logger.debug("Heuristic picked <%s> among %d candidates", best.name, len(candidates))
        return clone(best)

    def _clean(self, content: Tag) -> None:
        for content_filter in self._build_filters():
            content_filter.apply(content)

    def _build_filters(self) -> list[CleaningFilter]:
        """Build cleaning filters in application order from the options."""
        options = self._options
        switches = (
            (options.remove_nav, ClutterCategory.NAV),
            (options.remove_footer, ClutterCategory.FOOTER),
            (options.remove_sidebars, ClutterCategory.SIDEBARS),
            (options.remove_ads, ClutterCategory.ADS),
            (options.remove_comments, ClutterCategory.COMMENTS),
        )
        filters: list[CleaningFilter] = [
            SelectorRemovalFilter(category.value, REMOVAL_RULES[category])
            for enabled, category in switches
            if enabled
        ]
        if options.remove_cookie_banners:
            filters.append(self._cookie_filter)
        filters.extend([HiddenElementFilter(), EmptyElementFilter()])
        return filters


def detect_content(
    document: str | bytes | Tag | None,
    options: DetectionOptions | None = None,
    page_title: str | None = None,
) -> DetectedContent:
    """Detect main content with a fresh detector."""
    return ContentDetector(options).detect(document, page_title)
