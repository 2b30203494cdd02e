"""HTML to Markdown conversion under a conversion profile.

Pipeline: clone -> content filters -> render with the profile's rule table
-> tidy -> table of contents -> frontmatter -> file name, size, checksum.
"""

import hashlib
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from bs4 import Tag

from pagemd.converter.filters import apply_content_filters
from pagemd.converter.frontmatter import build_frontmatter
from pagemd.converter.naming import generate_file_name
from pagemd.converter.renderer import MarkdownRenderer
from pagemd.converter.rules import RuleTable
from pagemd.converter.toc import build_table_of_contents
from pagemd.dom import to_tree
from pagemd.logger import logger
from pagemd.profiles.models import ConversionMetadata, ConversionProfile

DEFAULT_CONVERTER_NAME = "pagemd"

Clock = Callable[[], datetime]

_LIST_MARKER_SPACING_RE = re.compile(r"^([-*+]|\d+\.)[ \t]{2,}")
_FENCE_RE = re.compile(r"^\s*(`{3,}|~{3,})")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_INDENTED_CODE_PREFIX = "    "


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(UTC)


def compute_checksum(content: str) -> str:
    """Return the SHA-256 hex digest of the UTF-8 encoded content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def tidy_markdown(text: str) -> str:
    """Collapse extra spaces after top level list markers outside fenced code.

    Only markers in column 0 are touched, so indented code and nested list
    lines keep their spacing.
    """
    lines: list[str] = []
    open_fence: str | None = None
    for line in text.split("\n"):
        fence_match = _FENCE_RE.match(line)
        if open_fence is None:
            if fence_match:
                open_fence = fence_match.group(1)
            else:
                line = _LIST_MARKER_SPACING_RE.sub(r"\1 ", line)
        elif (
            fence_match
            and line.strip() == fence_match.group(1)
            and fence_match.group(1)[0] == open_fence[0]
            and len(fence_match.group(1)) >= len(open_fence)
        ):
            open_fence = None
        lines.append(line)
    return "\n".join(lines)


def _trim_document(text: str) -> str:
    """Trim outer blank lines, keeping the indent of a leading code block."""
    text = text.strip("\n").rstrip()
    if not text.startswith(_INDENTED_CODE_PREFIX):
        text = text.lstrip()
    return text


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """A converted document ready to be copied, downloaded or stored."""

    content: str
    file_name: str
    size_bytes: int
    checksum: str
    metadata: ConversionMetadata | None = None

    def to_dict(self) -> dict[str, object]:
        """Return a JSON friendly representation with camelCase keys."""
        return {
            "content": self.content,
            "fileName": self.file_name,
            "sizeBytes": self.size_bytes,
            "checksum": self.checksum,
            "metadata": (
                self.metadata.model_dump(by_alias=True, exclude_none=True)
                if self.metadata is not None
                else None
            ),
        }


class MarkdownConverter:
    """Converts markup to Markdown with one profile.

    The converter only reads its input: markup trees are cloned before the
    profile filters run. Given a fixed clock, ``convert`` is a pure function
    of its arguments.
    """

    def __init__(
        self,
        profile: ConversionProfile,
        converter_name: str = DEFAULT_CONVERTER_NAME,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize the converter.

        Args:
            profile: Conversion profile to apply.
            converter_name: Value of the ``converter`` frontmatter field.
            clock: Source of the conversion time (frontmatter and fallback file name).

        """
        self._profile = profile
        self._converter_name = converter_name
        self._clock = clock
        self._rules = RuleTable.from_profile(profile)

    @property
    def profile(self) -> ConversionProfile:
        """Profile this converter applies."""
        return self._profile

    @property
    def rules(self) -> RuleTable:
        """Rule table derived from the profile."""
        return self._rules

    def convert(
        self,
        markup: str | bytes | Tag | None,
        metadata: ConversionMetadata | None = None,
    ) -> ConversionResult:
        """Convert ``markup`` to a Markdown document.

        Args:
            markup: HTML text, a parsed document or a single element.
            metadata: Page details for the frontmatter and the file name.

        Returns:
            ConversionResult; empty input gives empty content, never an error.

        """
        profile = self._profile
        working = to_tree(markup)
        root = apply_content_filters(working, profile.content_filters)

        base_url = metadata.url if metadata is not None else None
        rendered = MarkdownRenderer(self._rules).render(root, base_url=base_url)
        body = tidy_markdown(rendered.text)

        if profile.output_format.add_table_of_contents:
            toc = build_table_of_contents(
                rendered.headings, self._rules.bullet_marker, self._rules.list_indentation
            )
            if toc:
                body = f"{toc}\n\n{body}"

        now = self._clock()
        if profile.output_format.add_metadata and metadata is not None:
            frontmatter = build_frontmatter(
                metadata,
                profile_name=profile.name,
                converter_name=self._converter_name,
                converted_at=now,
            )
            body = f"{frontmatter}\n\n{body}"

        content = _trim_document(_EXCESS_NEWLINES_RE.sub("\n\n", body))
        file_name = generate_file_name(metadata.title if metadata is not None else None, now)
        size_bytes = len(content.encode("utf-8"))

        logger.debug(
            "Converted with profile %r: %d bytes, %d headings, file %s",
            profile.id, size_bytes, len(rendered.headings), file_name,
        )
        return ConversionResult(
            content=content,
            file_name=file_name,
            size_bytes=size_bytes,
            checksum=compute_checksum(content),
            metadata=metadata,
        )


def convert(
    markup: str | bytes | Tag | None,
    profile: ConversionProfile,
    metadata: ConversionMetadata | None = None,
    converter_name: str = DEFAULT_CONVERTER_NAME,
    clock: Clock = utc_now,
) -> ConversionResult:
    """Convert markup with a fresh converter for ``profile``."""
    return MarkdownConverter(profile, converter_name, clock).convert(markup, metadata)
