"""Conversion profiles: models, built-ins, storage and matching."""

from pagemd.profiles.builtin import BUILTIN_PROFILES, DEFAULT_PROFILE, DEFAULT_PROFILE_ID
from pagemd.profiles.matcher import PageContext, ProfileMatcher, describe_rule, matches_pattern
from pagemd.profiles.models import (
    ContentFilters,
    ConversionMetadata,
    ConversionOptions,
    ConversionProfile,
    FormattingOptions,
    ImageHandling,
    LinkHandling,
    MatchRules,
    OutputFormat,
    ProfileMatchRule,
    SmartDetectionOptions,
)
from pagemd.profiles.store import get_default_profile, get_profile, load_profiles, parse_profiles

__all__ = [
    "BUILTIN_PROFILES",
    "DEFAULT_PROFILE",
    "DEFAULT_PROFILE_ID",
    "ContentFilters",
    "ConversionMetadata",
    "ConversionOptions",
    "ConversionProfile",
    "FormattingOptions",
    "ImageHandling",
    "LinkHandling",
    "MatchRules",
    "OutputFormat",
    "PageContext",
    "ProfileMatchRule",
    "ProfileMatcher",
    "SmartDetectionOptions",
    "describe_rule",
    "get_default_profile",
    "get_profile",
    "load_profiles",
    "matches_pattern",
    "parse_profiles",
]
