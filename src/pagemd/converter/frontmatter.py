"""YAML-style frontmatter block prepended to converted documents.

Field order is fixed (title, url, author, description, published,
converted, converter, profile); export and history tooling read it.
"""

import re
from datetime import UTC, datetime

from pagemd.profiles.models import ConversionMetadata

FRONTMATTER_DELIMITER = "---"

_TITLE_NEEDS_QUOTES_RE = re.compile(r"""[:\[\]{}|><"']""")
_LINE_BREAK_RE = re.compile(r"\s*[\r\n]+\s*")


def format_timestamp(moment: datetime) -> str:
    """Format ``moment`` as an ISO 8601 UTC timestamp with milliseconds."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    moment = moment.astimezone(UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _single_line(value: str) -> str:
    return _LINE_BREAK_RE.sub(" ", value).strip()


def _quote(value: str) -> str:
    escaped = _single_line(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_frontmatter(
    metadata: ConversionMetadata,
    *,
    profile_name: str,
    converter_name: str,
    converted_at: datetime,
) -> str:
    """Return the frontmatter block, delimiters included.

    Page fields are emitted only when present. The title is quoted when it
    contains YAML indicator characters; author and description are always
    quoted.
    """
    lines = [FRONTMATTER_DELIMITER]

    if metadata.title:
        title = _single_line(metadata.title)
        lines.append(f"title: {_quote(title) if _TITLE_NEEDS_QUOTES_RE.search(title) else title}")
    if metadata.url:
        lines.append(f"url: {metadata.url}")
    if metadata.author:
        lines.append(f"author: {_quote(metadata.author)}")
    if metadata.description:
        lines.append(f"description: {_quote(metadata.description)}")
    if metadata.published_date:
        lines.append(f"published: {metadata.published_date}")

    lines.append(f"converted: {format_timestamp(converted_at)}")
    lines.append(f"converter: {converter_name}")
    lines.append(f"profile: {profile_name}")
    lines.append(FRONTMATTER_DELIMITER)

    return "\n".join(lines)
