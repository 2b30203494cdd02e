"""File name generation for converted documents."""

import re
from datetime import datetime
from enum import Enum
from typing import NamedTuple

from pagemd.profiles.matcher import extract_domain

MARKDOWN_SUFFIX = ".md"
FALLBACK_NAME = "markdown"
MAX_SLUG_LENGTH = 100
MAX_NAME_LENGTH = 200

TEMPLATE_VARIABLES = {
    "{title}": "Page title",
    "{domain}": "Full hostname (e.g. www.example.com)",
    "{host}": "First hostname label without www (e.g. example)",
    "{date}": "Date as YYYY-MM-DD",
    "{time}": "Time as HH-MM-SS",
    "{timestamp}": "Unix time in milliseconds",
    "{year}": "Four digit year",
    "{month}": "Two digit month",
    "{day}": "Two digit day",
}

_SLUG_RE = re.compile(r"[^a-z0-9]+")
_VARIABLE_RE = re.compile(r"\{([^}]+)\}")
_INVALID_CHARS_RE = re.compile(r'[<>:"|?*\\/]')


class NamingPattern(str, Enum):
    """How file names are derived from the page."""

    TAB_TITLE = "tab_title"
    DOMAIN_TITLE = "domain_title"
    TIMESTAMP = "timestamp"
    CUSTOM_PREFIX = "custom_prefix"


class TemplateValidation(NamedTuple):
    """Outcome of checking a custom naming template."""

    valid: bool
    errors: list[str]
    used_variables: list[str]


def generate_file_name(title: str | None, today: datetime) -> str:
    """Derive a file name from a title.

    The title is lower-cased, every run of characters other than ASCII
    letters and digits becomes one hyphen, hyphens are trimmed and the
    result is capped at 100 characters.

    Returns:
        ``<slug>.md``; ``markdown-YYYY-MM-DD.md`` without a title and
        ``markdown.md`` when nothing usable is left of the title.

    """
    if not title:
        return f"{FALLBACK_NAME}-{today:%Y-%m-%d}{MARKDOWN_SUFFIX}"

    slug = _SLUG_RE.sub("-", title.lower()).strip("-")
    slug = slug[:MAX_SLUG_LENGTH].rstrip("-")
    return f"{slug or FALLBACK_NAME}{MARKDOWN_SUFFIX}"


def sanitize_file_name(name: str) -> str:
    """Make ``name`` safe to use as a file name on common file systems."""
    name = _INVALID_CHARS_RE.sub("", name)
    name = re.sub(r"\s+", "_", name)
    name = re.sub(r"[^\w\-.]", "", name, flags=re.ASCII)
    name = re.sub(r"_+", "_", name)
    name = re.sub(r"^[._]", "", name)
    name = re.sub(r"[._]$", "", name)
    return name[:MAX_NAME_LENGTH]


def validate_template(template: str) -> TemplateValidation:
    """Check a custom naming template for unknown variables and bad characters."""
    errors: list[str] = []
    used: list[str] = []

    if not template or not template.strip():
        return TemplateValidation(False, ["Template cannot be empty"], used)

    if _INVALID_CHARS_RE.search(_VARIABLE_RE.sub("", template)):
        errors.append('Template contains invalid characters for file names: < > : " | ? * \\ /')

    for match in _VARIABLE_RE.finditer(template):
        variable = match.group(0)
        if variable in TEMPLATE_VARIABLES:
            used.append(variable)
        else:
            errors.append(f"Unknown variable: {variable}")

    if not used:
        errors.append("Template should include at least one variable")

    return TemplateValidation(not errors, errors, used)


def process_template(template: str, title: str, url: str, now: datetime) -> str:
    """Substitute template variables and sanitize the result."""
    domain = extract_domain(url)
    host = re.sub(r"^www\.", "", domain).split(".")[0] if domain else ""

    values = {
        "{title}": sanitize_file_name(title),
        "{domain}": domain,
        "{host}": host,
        "{date}": f"{now:%Y-%m-%d}",
        "{time}": f"{now:%H-%M-%S}",
        "{timestamp}": str(int(now.timestamp() * 1000)),
        "{year}": f"{now:%Y}",
        "{month}": f"{now:%m}",
        "{day}": f"{now:%d}",
    }
    name = template
    for variable, value in values.items():
        name = name.replace(variable, value)
    return sanitize_file_name(name)


def file_name_for_pattern(
    pattern: NamingPattern,
    title: str,
    url: str,
    now: datetime,
    custom_template: str | None = None,
) -> str:
    """Build a ``.md`` file name following a naming pattern.

    Falls back to :func:`generate_file_name` when the pattern leaves nothing.
    """
    if pattern == NamingPattern.DOMAIN_TITLE:
        domain = re.sub(r"^www\.", "", extract_domain(url)) or "unknown"
        name = sanitize_file_name(f"{domain}_{title}")
    elif pattern == NamingPattern.TIMESTAMP:
        name = sanitize_file_name(f"{now:%Y-%m-%d}_{title}")
    elif pattern == NamingPattern.CUSTOM_PREFIX and custom_template:
        name = process_template(custom_template, title, url, now)
    else:
        name = sanitize_file_name(title)

    if not name:
        return generate_file_name(title, now)
    return f"{name}{MARKDOWN_SUFFIX}"
