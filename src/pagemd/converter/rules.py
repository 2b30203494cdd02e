"""Markdown rule table derived from a conversion profile."""

from dataclasses import dataclass

from pagemd.profiles.models import (
    CodeBlockStyle,
    ConversionProfile,
    HeadingStyle,
    ImageStrategy,
    LinkReferenceStyle,
    LinkStyle,
    MarkdownLinkStyle,
)

DEFAULT_ALT_TEXT = "Image"


@dataclass(frozen=True, slots=True)
class RuleTable:
    """Immutable rendering rules for one profile.

    A table is built for each converter; it carries no state between
    conversions and is safe to share between threads.
    """

    heading_style: HeadingStyle = HeadingStyle.ATX
    bullet_marker: str = "-"
    code_block_style: CodeBlockStyle = CodeBlockStyle.FENCED
    fence: str = "```"
    em_delimiter: str = "*"
    strong_delimiter: str = "**"
    link_style: MarkdownLinkStyle = MarkdownLinkStyle.INLINED
    link_reference_style: LinkReferenceStyle = LinkReferenceStyle.FULL
    hr: str = "---"
    gfm: bool = False
    remove_links: bool = False
    remove_tracking_params: bool = True
    resolve_relative_urls: bool = False
    skip_images: bool = False
    fallback_alt_text: str = DEFAULT_ALT_TEXT
    max_heading_level: int = 6
    list_indentation: int = 2
    code_language: bool = True
    table_alignment: bool = True

    @classmethod
    def from_profile(cls, profile: ConversionProfile) -> "RuleTable":
        """Collect the profile options that affect rendering."""
        options = profile.conversion_options
        formatting = profile.formatting
        return cls(
            heading_style=options.heading_style,
            bullet_marker=options.bullet_list_marker,
            code_block_style=options.code_block_style,
            fence=options.fence,
            em_delimiter=options.em_delimiter,
            strong_delimiter=options.strong_delimiter,
            link_style=options.link_style,
            link_reference_style=options.link_reference_style,
            hr=formatting.hr_style or "---",
            gfm=profile.uses_gfm,
            remove_links=profile.link_handling.style == LinkStyle.REMOVE,
            remove_tracking_params=profile.link_handling.remove_tracking_params,
            resolve_relative_urls=profile.link_handling.convert_relative_urls,
            skip_images=profile.image_handling.strategy == ImageStrategy.SKIP,
            fallback_alt_text=profile.image_handling.fallback_alt_text or DEFAULT_ALT_TEXT,
            max_heading_level=profile.content_filters.max_heading_level,
            list_indentation=formatting.list_indentation,
            code_language=formatting.code_block_syntax,
            table_alignment=formatting.table_alignment,
        )
