"""Page metadata extraction (title, author, publish date, description)."""

import json
from typing import Any, NamedTuple

from bs4 import Tag

from pagemd.detector.selectors import (
    AUTHOR_META,
    AUTHOR_SELECTORS,
    DATE_META,
    DATE_SELECTORS,
    DESCRIPTION_META,
    TITLE_META,
    TITLE_SELECTORS,
)
from pagemd.dom import select_one_safe
from pagemd.logger import logger

JSON_LD_ARTICLE_TYPES = {"Article", "BlogPosting", "NewsArticle", "TechArticle"}


class PageMetadata(NamedTuple):
    """Metadata found on a page."""

    title: str
    author: str | None = None
    publish_date: str | None = None
    description: str | None = None


def _clean(text: str | None) -> str:
    return " ".join((text or "").split())


class MetadataExtractor:
    """Reads metadata with "specific element first, then meta tag" precedence."""

    def extract(self, document: Tag, page_title: str | None = None) -> PageMetadata:
        """Extract metadata from ``document``.

        Args:
            document: Parsed page (the detector's working copy).
            page_title: Title reported by the host; used when the page has
                no better title.

        Returns:
            PageMetadata; the title is never None.

        """
        json_ld = self._json_ld_article(document)

        title = (
            self._first_text(document, TITLE_SELECTORS)
            or self._first_meta(document, TITLE_META)
            or _clean(page_title)
            or self._document_title(document)
        )
        author = (
            self._first_text(document, AUTHOR_SELECTORS)
            or self._first_meta(document, AUTHOR_META)
            or self._json_ld_author(json_ld)
        )
        publish_date = (
            self._first_date(document)
            or self._first_meta(document, DATE_META)
            or _clean(str(json_ld.get("datePublished") or ""))
        )
        description = self._first_meta(document, DESCRIPTION_META)

        return PageMetadata(
            title=title,
            author=author or None,
            publish_date=publish_date or None,
            description=description or None,
        )

    def _first_text(self, document: Tag, selectors: tuple[str, ...]) -> str:
        for selector in selectors:
            element = select_one_safe(document, selector)
            if element is not None:
                text = _clean(element.get_text(" "))
                if text:
                    return text
        return ""

    def _first_meta(self, document: Tag, selectors: tuple[str, ...]) -> str:
        for selector in selectors:
            meta = select_one_safe(document, selector)
            if meta is not None:
                content = _clean(str(meta.get("content") or ""))
                if content:
                    return content
        return ""

    def _first_date(self, document: Tag) -> str:
        for selector in DATE_SELECTORS:
            element = select_one_safe(document, selector)
            if element is None:
                continue
            value = _clean(str(element.get("datetime") or "")) or _clean(element.get_text(" "))
            if value:
                return value
        return ""

    def _document_title(self, document: Tag) -> str:
        title = document.find("title")
        return _clean(title.get_text()) if title is not None else ""

    def _json_ld_article(self, document: Tag) -> dict[str, Any]:
        """Return the first JSON-LD object describing an article, or {}."""
        for script in document.find_all("script", attrs={"type": "application/ld+json"}):
            try:
                data = json.loads(script.string or "")
            except (json.JSONDecodeError, TypeError) as e:
                logger.debug("Ignoring invalid JSON-LD block: %s", e)
                continue

            if isinstance(data, dict):
                items = data.get("@graph", [data])
            elif isinstance(data, list):
                items = data
            else:
                continue

            for item in items:
                if not isinstance(item, dict):
                    continue
                item_type = item.get("@type")
                types = set(item_type) if isinstance(item_type, list) else {item_type}
                if types & JSON_LD_ARTICLE_TYPES:
                    return item
        return {}

    def _json_ld_author(self, item: dict[str, Any]) -> str:
        author = item.get("author")
        if isinstance(author, list):
            author = author[0] if author else None
        if isinstance(author, dict):
            return _clean(str(author.get("name") or ""))
        if isinstance(author, str):
            return _clean(author)
        return ""
