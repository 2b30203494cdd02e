"""Built-in conversion profiles for common use cases."""

from pagemd.profiles.models import (
    ContentFilters,
    ConversionOptions,
    ConversionProfile,
    ImageHandling,
    ImageStrategy,
    LinkHandling,
    LinkStyle,
    MarkdownFlavor,
    MatchMode,
    MatchRules,
    MatchType,
    OutputFormat,
    ProfileMatchRule,
    RuleType,
    SmartDetectionOptions,
)

DEFAULT_PROFILE_ID = "default"

DEFAULT_PROFILE = ConversionProfile(
    id=DEFAULT_PROFILE_ID,
    name="Default",
    markdown_flavor=MarkdownFlavor.COMMONMARK,
    match_rules=MatchRules(
        # Lowest priority: fallback for every page
        enabled=True,
        priority=0,
        match_type=MatchType.ANY,
        rules=[
            ProfileMatchRule(type=RuleType.URL_PATTERN, match_mode=MatchMode.CONTAINS, pattern="*"),
        ],
    ),
    is_default=True,
    is_built_in=True,
)

GITHUB_PROFILE = ConversionProfile(
    # READMEs, issues and docs hosted on GitHub
    id="github",
    name="GitHub",
    markdown_flavor=MarkdownFlavor.GITHUB,
    match_rules=MatchRules(
        enabled=True,
        priority=50,
        match_type=MatchType.ANY,
        rules=[
            ProfileMatchRule(type=RuleType.DOMAIN, match_mode=MatchMode.ENDS_WITH, pattern="github.com"),
            ProfileMatchRule(type=RuleType.DOMAIN, match_mode=MatchMode.ENDS_WITH, pattern="github.io"),
        ],
    ),
    is_built_in=True,
)

ARTICLE_PROFILE = ConversionProfile(
    # Reading view: main content only, no images, plain text links
    id="article",
    name="Article",
    markdown_flavor=MarkdownFlavor.MINIMAL,
    image_handling=ImageHandling(strategy=ImageStrategy.SKIP),
    link_handling=LinkHandling(style=LinkStyle.REMOVE),
    content_filters=ContentFilters(
        exclude_css=["script", "style", "noscript", "iframe", "form", "figure"],
        max_heading_level=3,
    ),
    conversion_options=ConversionOptions(bullet_list_marker="*"),
    output_format=OutputFormat(add_table_of_contents=True),
    smart_detection=SmartDetectionOptions(enabled=True),
    is_built_in=True,
)

BUILTIN_PROFILES: tuple[ConversionProfile, ...] = (DEFAULT_PROFILE, GITHUB_PROFILE, ARTICLE_PROFILE)
