"""Page conversion pipeline.

Pipeline: profile matching -> optional main content detection -> Markdown
conversion.
"""

import dataclasses
import logging
from dataclasses import dataclass, field

from bs4 import Tag

from pagemd.config import Settings
from pagemd.converter import ConversionResult, MarkdownConverter, utc_now
from pagemd.converter.converter import Clock
from pagemd.converter.naming import NamingPattern, file_name_for_pattern, validate_template
from pagemd.detector import ContentDetector, DetectedContent, MetadataExtractor
from pagemd.dom import parse_html
from pagemd.exceptions import NamingTemplateError
from pagemd.logger import logger
from pagemd.profiles import (
    DEFAULT_PROFILE,
    ConversionMetadata,
    ConversionProfile,
    PageContext,
    ProfileMatcher,
    get_profile,
    load_profiles,
)
from pagemd.timing import timeit, timer


@dataclass(slots=True)
class PageConversion:
    """Everything produced while converting one page."""

    result: ConversionResult
    profile: ConversionProfile
    match_reasons: list[str] = field(default_factory=list)
    detection: DetectedContent | None = None
    used_detected_content: bool = False

    def to_dict(self) -> dict[str, object]:
        """Return a JSON friendly representation."""
        payload = self.result.to_dict()
        payload["profile"] = {"id": self.profile.id, "name": self.profile.name}
        payload["matchReasons"] = self.match_reasons
        payload["usedDetectedContent"] = self.used_detected_content
        if self.detection is not None:
            payload["detection"] = self.detection.to_dict(include_html=False)
        return payload


class Pipeline:
    """Coordinates profile matching, content detection and conversion.

    Every call builds its own detector and converter; the pipeline itself
    only keeps the read-only profile collection.
    """

    def __init__(
        self,
        settings: Settings,
        profiles: list[ConversionProfile] | None = None,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Application settings.
            profiles: Profile collection; loaded from ``settings.profiles_path`` when omitted.
            clock: Time source passed to converters.

        Raises:
            ProfileLoadError: If the configured profile file is unusable.
            NamingTemplateError: If the custom naming template is invalid.

        """
        self._settings = settings
        self._check_naming_template(settings)
        self._profiles = profiles if profiles is not None else load_profiles(settings.profiles_path)
        self._clock = clock
        self._matcher = ProfileMatcher()

    @staticmethod
    def _check_naming_template(settings: Settings) -> None:
        template = settings.file_naming_template
        if not template:
            return
        validation = validate_template(template)
        if not validation.valid:
            msg = f"Invalid FILE_NAMING_TEMPLATE {template!r}: {'; '.join(validation.errors)}"
            raise NamingTemplateError(msg)

    @property
    def profiles(self) -> list[ConversionProfile]:
        """Profiles available to the pipeline."""
        return list(self._profiles)

    def match_profile(
        self, url: str, title: str | None = None, document: Tag | None = None
    ) -> tuple[ConversionProfile, list[str]]:
        """Pick the profile for a page.

        Returns:
            The matched profile and the descriptions of the rules that fired.

        """
        if document is not None:
            context = PageContext.from_document(url, document, title)
        else:
            context = PageContext(url=url, title=title or "")

        profile = self._matcher.find_matching_profile(self._profiles, context)
        if profile is None:
            profile = self._profiles[0] if self._profiles else DEFAULT_PROFILE
        return profile, self._matcher.get_match_reason(profile, context)

    def detect(self, html: str, title: str | None = None) -> DetectedContent:
        """Run content detection with default options."""
        return ContentDetector().detect(html, page_title=title)

    @timeit("Page conversion", logging.DEBUG)
    def convert_page(
        self,
        html: str,
        url: str,
        title: str | None = None,
        profile_id: str | None = None,
    ) -> PageConversion:
        """Convert a page to Markdown.

        Args:
            html: Page markup.
            url: URL the markup was loaded from.
            title: Page title reported by the browser.
            profile_id: Explicit profile; matched from the page when omitted.

        Returns:
            PageConversion with the result and how it was produced.

        Raises:
            ProfileNotFoundError: If ``profile_id`` is not a known profile.

        """
        document = parse_html(html)

        if profile_id:
            profile = get_profile(self._profiles, profile_id)
            reasons: list[str] = []
        else:
            profile, reasons = self.match_profile(url, title, document)
        logger.debug("Converting %s with profile %r", url, profile.id)

        page = MetadataExtractor().extract(document, title)
        metadata = ConversionMetadata(
            title=title or page.title or None,
            url=url or None,
            author=page.author,
            description=page.description,
            published_date=page.publish_date,
        )

        markup: Tag = document
        detection: DetectedContent | None = None
        used_detected = False
        smart = profile.smart_detection
        if smart is not None and smart.enabled:
            with timer("Content detection"):
                detection = ContentDetector(smart.to_detection_options()).detect(document, title)
            confident = detection.confidence >= smart.min_confidence_threshold
            if detection.main_content is not None and (confident or not smart.fallback_to_full_page):
                markup = detection.main_content
                used_detected = True
            elif detection.main_content is None:
                logger.info("No main content detected for %s, converting full page", url)
            else:
                logger.info(
                    "Detection confidence %d below %d for %s, converting full page",
                    detection.confidence, smart.min_confidence_threshold, url,
                )

        converter = MarkdownConverter(profile, self._settings.converter_name, self._clock)
        result = converter.convert(markup, metadata)

        if self._settings.file_naming_pattern:
            file_name = file_name_for_pattern(
                NamingPattern(self._settings.file_naming_pattern),
                metadata.title or "",
                url,
                self._clock(),
                self._settings.file_naming_template or None,
            )
            result = dataclasses.replace(result, file_name=file_name)

        return PageConversion(
            result=result,
            profile=profile,
            match_reasons=reasons,
            detection=detection,
            used_detected_content=used_detected,
        )
