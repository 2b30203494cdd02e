"""Profile driven HTML to Markdown conversion."""

from pagemd.converter.converter import (
    ConversionResult,
    MarkdownConverter,
    compute_checksum,
    convert,
    tidy_markdown,
    utc_now,
)
from pagemd.converter.links import TRACKING_PARAMS, resolve_url, strip_tracking_params
from pagemd.converter.naming import NamingPattern, file_name_for_pattern, generate_file_name
from pagemd.converter.renderer import MarkdownRenderer
from pagemd.converter.rules import RuleTable

__all__ = [
    "TRACKING_PARAMS",
    "ConversionResult",
    "MarkdownConverter",
    "MarkdownRenderer",
    "NamingPattern",
    "RuleTable",
    "compute_checksum",
    "convert",
    "file_name_for_pattern",
    "generate_file_name",
    "resolve_url",
    "strip_tracking_params",
    "tidy_markdown",
    "utc_now",
]
