"""Pydantic models for conversion profiles.

Profiles are stored as camelCase JSON; fields are snake_case in Python and
accept either spelling on input.
"""

import re
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from pagemd.detector import DetectionOptions


class MarkdownFlavor(str, Enum):
    """Markdown dialect targeted by a profile."""

    COMMONMARK = "commonmark"
    GFM = "gfm"
    GITHUB = "github"
    GITLAB = "gitlab"
    REDDIT = "reddit"
    DISCORD = "discord"
    MINIMAL = "minimal"


class ImageStrategy(str, Enum):
    """How images are rendered."""

    LINK = "link"
    SKIP = "skip"


class LinkStyle(str, Enum):
    """Whether anchors keep their target."""

    ABSOLUTE = "absolute"
    REMOVE = "remove"


class HeadingStyle(str, Enum):
    """Heading syntax."""

    ATX = "atx"
    SETEXT = "setext"


class CodeBlockStyle(str, Enum):
    """Code block syntax."""

    FENCED = "fenced"
    INDENTED = "indented"


class MarkdownLinkStyle(str, Enum):
    """Inline ``[text](url)`` or reference ``[text][1]`` links."""

    INLINED = "inlined"
    REFERENCED = "referenced"


class LinkReferenceStyle(str, Enum):
    """Label form used by reference links."""

    FULL = "full"
    COLLAPSED = "collapsed"
    SHORTCUT = "shortcut"


class MatchType(str, Enum):
    """How rule results combine."""

    ANY = "any"
    ALL = "all"


class MatchMode(str, Enum):
    """String comparison used by a match rule."""

    EXACT = "exact"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    REGEX = "regex"


class RuleType(str, Enum):
    """Page field a match rule looks at."""

    DOMAIN = "domain"
    URL_PATTERN = "url_pattern"
    TITLE = "title"
    META_TAG = "meta_tag"
    SELECTOR = "selector"


class ProfileModel(BaseModel):
    """Base model: camelCase aliases, immutable, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class ImageHandling(ProfileModel):
    """Image rendering options."""

    strategy: ImageStrategy = ImageStrategy.LINK
    fallback_alt_text: str = "Image"


class LinkHandling(ProfileModel):
    """Anchor rendering options."""

    style: LinkStyle = LinkStyle.ABSOLUTE
    remove_tracking_params: bool = True
    convert_relative_urls: bool = False


class ContentFilters(ProfileModel):
    """Node selection applied before rendering."""

    include_css: list[str] = Field(default_factory=list)
    exclude_css: list[str] = Field(default_factory=lambda: ["script", "style", "noscript"])
    include_hidden: bool = False
    max_heading_level: int = Field(6, ge=1, le=6)


class FormattingOptions(ProfileModel):
    """Presentation details of the rendered Markdown."""

    bold_style: Literal["**", "__"] = "**"
    italic_style: Literal["*", "_"] = "*"
    hr_style: str = "---"
    code_block_syntax: bool = True
    table_alignment: bool = True
    list_indentation: int = Field(2, ge=1, le=8)
    line_width: int = Field(0, ge=0)


class ConversionOptions(ProfileModel):
    """Core Markdown syntax choices."""

    heading_style: HeadingStyle = HeadingStyle.ATX
    bullet_list_marker: Literal["-", "*", "+"] = "-"
    code_block_style: CodeBlockStyle = CodeBlockStyle.FENCED
    fence: str = "```"
    em_delimiter: Literal["*", "_"] = "*"
    strong_delimiter: Literal["**", "__"] = "**"
    link_style: MarkdownLinkStyle = MarkdownLinkStyle.INLINED
    link_reference_style: LinkReferenceStyle = LinkReferenceStyle.FULL

    @field_validator("fence")
    @classmethod
    def validate_fence(cls, value: str) -> str:
        """Accept three or more backticks or tildes.

        Raises:
            ValueError: If the fence is not a valid code fence

        """
        if not re.fullmatch(r"`{3,}|~{3,}", value):
            msg = f"Invalid code fence {value!r}: use three or more ` or ~ characters"
            raise ValueError(msg)
        return value


class OutputFormat(ProfileModel):
    """What is added around the converted content."""

    add_metadata: bool = True
    add_table_of_contents: bool = False
    add_footnotes: bool = True
    preserve_newlines: bool = False


class ProfileMatchRule(ProfileModel):
    """A single (field, mode, pattern) test."""

    type: RuleType
    match_mode: MatchMode = MatchMode.CONTAINS
    pattern: str


class MatchRules(ProfileModel):
    """Rules deciding whether a profile applies to a page."""

    enabled: bool = False
    priority: int = Field(0, ge=0, le=100)
    match_type: MatchType = MatchType.ANY
    rules: list[ProfileMatchRule] = Field(default_factory=list)


class SmartDetectionOptions(ProfileModel):
    """Main content detection run before conversion."""

    enabled: bool = False
    remove_navigation: bool = True
    remove_footer: bool = True
    remove_sidebars: bool = True
    remove_ads: bool = True
    remove_comments: bool = True
    remove_cookie_banners: bool = True
    min_confidence_threshold: int = Field(50, ge=0, le=100)
    fallback_to_full_page: bool = True

    def to_detection_options(self) -> DetectionOptions:
        """Map onto the detector's option set."""
        return DetectionOptions(
            remove_nav=self.remove_navigation,
            remove_footer=self.remove_footer,
            remove_sidebars=self.remove_sidebars,
            remove_ads=self.remove_ads,
            remove_comments=self.remove_comments,
            remove_cookie_banners=self.remove_cookie_banners,
        )


class ConversionProfile(ProfileModel):
    """Named bundle of formatting and filtering choices."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    markdown_flavor: MarkdownFlavor = MarkdownFlavor.COMMONMARK
    image_handling: ImageHandling = Field(default_factory=ImageHandling)
    link_handling: LinkHandling = Field(default_factory=LinkHandling)
    content_filters: ContentFilters = Field(default_factory=ContentFilters)
    formatting: FormattingOptions = Field(default_factory=FormattingOptions)
    conversion_options: ConversionOptions = Field(default_factory=ConversionOptions)
    output_format: OutputFormat = Field(default_factory=OutputFormat)
    match_rules: MatchRules | None = None
    smart_detection: SmartDetectionOptions | None = None
    is_default: bool = False
    is_built_in: bool = False

    @property
    def uses_gfm(self) -> bool:
        """True when GFM tables and strikethrough apply."""
        return self.markdown_flavor in (MarkdownFlavor.GFM, MarkdownFlavor.GITHUB)


class ConversionMetadata(ProfileModel):
    """Page details written to the frontmatter block."""

    title: str | None = None
    url: str | None = None
    author: str | None = None
    description: str | None = None
    published_date: str | None = None
