"""Table of contents built from rendered headings."""

import re
from collections import Counter
from collections.abc import Sequence

from pagemd.converter.renderer import Heading

TOC_TITLE = "Table of Contents"

_ANCHOR_STRIP_RE = re.compile(r"[^\w\- ]")


def heading_anchor(text: str, seen: Counter[str]) -> str:
    """Return the GitHub-style anchor for ``text``, numbering duplicates."""
    anchor = _ANCHOR_STRIP_RE.sub("", text.strip().lower()).replace(" ", "-")
    count = seen[anchor]
    seen[anchor] += 1
    return f"{anchor}-{count}" if count else anchor


def build_table_of_contents(
    headings: Sequence[Heading], bullet_marker: str = "-", indentation: int = 2
) -> str:
    """Render a nested list of links to ``headings``.

    Nesting is relative to the shallowest heading. Returns an empty string
    when there are no headings.
    """
    if not headings:
        return ""

    top_level = min(heading.level for heading in headings)
    seen: Counter[str] = Counter()
    lines = [f"## {TOC_TITLE}", ""]
    for heading in headings:
        label = heading.text.replace("[", "\\[").replace("]", "\\]")
        indent = " " * indentation * (heading.level - top_level)
        lines.append(f"{indent}{bullet_marker} [{label}](#{heading_anchor(heading.text, seen)})")
    return "\n".join(lines)
