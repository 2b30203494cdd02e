"""Automatic profile selection from page criteria."""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from bs4 import Tag

from pagemd.dom import select_safe
from pagemd.logger import logger
from pagemd.profiles.models import (
    ConversionProfile,
    MatchMode,
    MatchType,
    ProfileMatchRule,
    RuleType,
)

MODE_TEXT = {
    MatchMode.EXACT: "exactly matches",
    MatchMode.CONTAINS: "contains",
    MatchMode.STARTS_WITH: "starts with",
    MatchMode.ENDS_WITH: "ends with",
    MatchMode.REGEX: "matches pattern",
}

TYPE_TEXT = {
    RuleType.DOMAIN: "Domain",
    RuleType.URL_PATTERN: "URL",
    RuleType.TITLE: "Page title",
    RuleType.META_TAG: "Meta tag",
    RuleType.SELECTOR: "CSS selector",
}

# "contains *" is the catch-all rule of the default profile
WILDCARD = "*"


def extract_domain(url: str) -> str:
    """Return the hostname of ``url`` or an empty string."""
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""


@dataclass(slots=True)
class PageContext:
    """What the matcher knows about the page being converted.

    ``meta_tags`` and ``has_selector`` are supplied by whoever has access to
    the page; without them meta_tag and selector rules never match.
    """

    url: str
    title: str = ""
    domain: str = ""
    meta_tags: dict[str, str] = field(default_factory=dict)
    has_selector: Callable[[str], bool] | None = None

    def __post_init__(self) -> None:
        if not self.domain:
            self.domain = extract_domain(self.url)

    @classmethod
    def from_document(cls, url: str, document: Tag, title: str | None = None) -> "PageContext":
        """Build a context whose meta tags and selector checks read ``document``."""
        meta_tags: dict[str, str] = {}
        for meta in document.find_all("meta"):
            key = meta.get("name") or meta.get("property")
            content = meta.get("content")
            if key and content is not None and str(key) not in meta_tags:
                meta_tags[str(key)] = str(content)

        if title is None:
            title_tag = document.find("title")
            title = title_tag.get_text(strip=True) if title_tag is not None else ""

        return cls(
            url=url,
            title=title,
            meta_tags=meta_tags,
            has_selector=lambda selector: bool(select_safe(document, selector)),
        )


class ProfileMatcher:
    """Selects the conversion profile that applies to a page."""

    def find_matching_profile(
        self, profiles: Sequence[ConversionProfile], context: PageContext
    ) -> ConversionProfile | None:
        """Return the best matching profile.

        The highest priority matching profile wins; among equal priorities
        the one listed first wins. Without any match the default profile is
        returned (None if the collection has no default).
        """
        best: ConversionProfile | None = None
        for profile in profiles:
            if not self.profile_matches(profile, context):
                continue
            if best is None or _priority(profile) > _priority(best):
                best = profile

        if best is not None:
            logger.debug("Profile %r matched %s", best.id, context.url)
            return best

        default = next((p for p in profiles if p.is_default), None)
        logger.debug(
            "No profile rules matched %s, using default %r",
            context.url, default.id if default else None,
        )
        return default

    def profile_matches(self, profile: ConversionProfile, context: PageContext) -> bool:
        """Check a profile's enabled rule set against the context."""
        match_rules = profile.match_rules
        if match_rules is None or not match_rules.enabled or not match_rules.rules:
            return False

        results = (self.rule_matches(rule, context) for rule in match_rules.rules)
        if match_rules.match_type == MatchType.ALL:
            return all(results)
        return any(results)

    def rule_matches(self, rule: ProfileMatchRule, context: PageContext) -> bool:
        """Check one rule against the field its type selects."""
        if rule.type == RuleType.DOMAIN:
            return matches_pattern(context.domain, rule.pattern, rule.match_mode)
        if rule.type == RuleType.URL_PATTERN:
            return matches_pattern(context.url, rule.pattern, rule.match_mode)
        if rule.type == RuleType.TITLE:
            return matches_pattern(context.title, rule.pattern, rule.match_mode)
        if rule.type == RuleType.META_TAG:
            name, expected = split_meta_pattern(rule.pattern, context.meta_tags)
            actual = context.meta_tags.get(name)
            return bool(actual) and matches_pattern(actual, expected, rule.match_mode)
        if rule.type == RuleType.SELECTOR:
            return context.has_selector is not None and context.has_selector(rule.pattern)
        return False

    def get_match_reason(self, profile: ConversionProfile, context: PageContext) -> list[str]:
        """Describe, in rule order, which rules of ``profile`` fire for the context."""
        match_rules = profile.match_rules
        if match_rules is None or not match_rules.enabled:
            return []
        return [
            describe_rule(rule) for rule in match_rules.rules
            if self.rule_matches(rule, context)
        ]


def matches_pattern(value: str | None, pattern: str, mode: MatchMode) -> bool:
    """Compare ``value`` with ``pattern`` using ``mode``.

    ``exact`` is case-sensitive; substring modes and regex ignore case. An
    empty value never matches and an invalid regex is a non-match.
    """
    if not value:
        return False

    if mode == MatchMode.EXACT:
        return value == pattern
    if mode == MatchMode.CONTAINS:
        return pattern == WILDCARD or pattern.lower() in value.lower()
    if mode == MatchMode.STARTS_WITH:
        return value.lower().startswith(pattern.lower())
    if mode == MatchMode.ENDS_WITH:
        return value.lower().endswith(pattern.lower())
    if mode == MatchMode.REGEX:
        try:
            return re.search(pattern, value, re.IGNORECASE) is not None
        except re.error as e:
            logger.warning("Invalid regex pattern %r in profile rule: %s", pattern, e)
            return False
    return False


def split_meta_pattern(pattern: str, meta_tags: dict[str, str]) -> tuple[str, str]:
    """Split a ``name:content`` pattern.

    Meta names may contain colons themselves (``og:type:article``); the
    shortest prefix naming a meta tag of the page is used, otherwise the
    text before the first colon.
    """
    parts = pattern.split(":")
    for index in range(1, len(parts)):
        name = ":".join(parts[:index])
        if name in meta_tags:
            return name, ":".join(parts[index:])
    name, _, expected = pattern.partition(":")
    return name, expected


def describe_rule(rule: ProfileMatchRule) -> str:
    """Return a human readable description of a rule."""
    type_text = TYPE_TEXT.get(rule.type, "Field")
    mode_text = MODE_TEXT.get(rule.match_mode, "matches")
    return f'{type_text} {mode_text} "{rule.pattern}"'


def _priority(profile: ConversionProfile) -> int:
    return profile.match_rules.priority if profile.match_rules else 0
