"""Markdown rendering of a bs4 tree.

The renderer walks the tree depth first. Every element becomes a string;
block elements pad themselves with blank lines and neighbouring pieces are
joined so that at most one blank line separates them.
"""

import re
from collections.abc import Callable
from typing import NamedTuple

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from pagemd.converter.links import resolve_url, strip_tracking_params
from pagemd.converter.rules import RuleTable
from pagemd.profiles.models import (
    CodeBlockStyle,
    HeadingStyle,
    LinkReferenceStyle,
    MarkdownLinkStyle,
)

BLOCK_TAGS = frozenset({
    "address", "article", "aside", "blockquote", "body", "center", "dd", "details",
    "dialog", "dir", "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer",
    "form", "h1", "h2", "h3", "h4", "h5", "h6", "header", "hgroup", "hr", "html",
    "li", "main", "menu", "nav", "ol", "p", "pre", "section", "summary", "table",
    "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
})

SKIPPED_TAGS = frozenset({
    "canvas", "embed", "head", "iframe", "link", "meta", "noscript", "object",
    "script", "style", "svg", "template", "title",
})

# Heading levels above the profile cap are emphasised instead
CAPPED_HEADING_DELIMITER = "**"

_WHITESPACE_RE = re.compile(r"\s+")
_LANGUAGE_RE = re.compile(r"^(?:language|lang)-(\S+)$")

_ESCAPES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\\"), r"\\\\"),
    (re.compile(r"\*"), r"\\*"),
    (re.compile(r"^-", re.MULTILINE), r"\\-"),
    (re.compile(r"^\+ ", re.MULTILINE), r"\\+ "),
    (re.compile(r"^(=+)", re.MULTILINE), r"\\\1"),
    (re.compile(r"^(#{1,6}) ", re.MULTILINE), r"\\\1 "),
    (re.compile(r"`"), r"\\`"),
    (re.compile(r"^~~~", re.MULTILINE), r"\\~~~"),
    (re.compile(r"\["), r"\\["),
    (re.compile(r"\]"), r"\\]"),
    (re.compile(r"^>", re.MULTILINE), r"\\>"),
    (re.compile(r"_"), r"\\_"),
    (re.compile(r"^(\d+)\. ", re.MULTILINE), r"\1\\. "),
)


class Heading(NamedTuple):
    """A heading emitted with a heading marker."""

    level: int
    text: str


class RenderedMarkdown(NamedTuple):
    """Renderer output: Markdown text and the headings it contains."""

    text: str
    headings: list[Heading]


def escape_markdown(text: str) -> str:
    """Backslash-escape characters that would otherwise read as Markdown."""
    for pattern, replacement in _ESCAPES:
        text = pattern.sub(replacement, text)
    return text


def join_blocks(output: str, addition: str) -> str:
    """Concatenate two rendered pieces keeping at most one blank line between them."""
    head = output.rstrip("\n")
    tail = addition.lstrip("\n")
    newlines = max(len(output) - len(head), len(addition) - len(tail))
    if len(addition) != len(tail):
        head = head.rstrip(" \t")
    return head + "\n\n"[:newlines] + tail


def _is_block(node: PageElement | None) -> bool:
    return isinstance(node, Tag) and (node.name in BLOCK_TAGS or node.name == "br")


def _next_tag(node: Tag, name: str) -> Tag | None:
    sibling = node.find_next_sibling(True)
    return sibling if sibling is not None and sibling.name == name else None


class MarkdownRenderer:
    """Renders a tree to Markdown following a RuleTable.

    A renderer holds per-call state (link references, headings) and should
    not be shared between threads.
    """

    def __init__(self, rules: RuleTable) -> None:
        """Initialize the renderer.

        Args:
            rules: Rendering rules built from the active profile.

        """
        self._rules = rules
        self._base_url: str | None = None
        self._references: list[str] = []
        self._headings: list[Heading] = []
        self._handlers: dict[str, Callable[[Tag, str], str]] = {
            "p": self._block,
            "br": self._line_break,
            "hr": self._horizontal_rule,
            "blockquote": self._blockquote,
            "ul": self._list,
            "ol": self._list,
            "li": self._list_item,
            "em": self._emphasis,
            "i": self._emphasis,
            "strong": self._strong,
            "b": self._strong,
            "del": self._strikethrough,
            "s": self._strikethrough,
            "strike": self._strikethrough,
            "a": self._link,
            "img": self._image,
        }
        for level in range(1, 7):
            self._handlers[f"h{level}"] = self._heading

    def render(self, root: Tag, base_url: str | None = None) -> RenderedMarkdown:
        """Render ``root`` (a document or a single element).

        Args:
            root: Tree to render; it is only read.
            base_url: Page URL used to resolve relative links when enabled.

        Returns:
            RenderedMarkdown with the text trimmed of outer blank lines.

        """
        self._base_url = base_url
        self._references = []
        self._headings = []

        if isinstance(root, BeautifulSoup):
            output = self._children(root)
        else:
            output = self._node(root)

        if self._references:
            output = join_blocks(output, "\n\n" + "\n".join(self._references) + "\n\n")

        return RenderedMarkdown(output.strip("\n"), list(self._headings))

    # --- tree walk ---

    def _children(self, node: Tag) -> str:
        output = ""
        for child in node.children:
            output = join_blocks(output, self._node(child))
        return output

    def _node(self, node: PageElement) -> str:
        if isinstance(node, PreformattedString):
            return ""
        if isinstance(node, NavigableString):
            return self._text(node)
        if not isinstance(node, Tag) or node.name in SKIPPED_TAGS:
            return ""
        if node.name == "pre":
            return self._code_block(node)
        if node.name == "code":
            return self._inline_code(node)
        if node.name == "table" and self._rules.gfm:
            return self._table(node)

        content = self._children(node)
        handler = self._handlers.get(node.name)
        if handler is not None:
            return handler(node, content)
        if node.name in BLOCK_TAGS:
            return self._block(node, content)
        return content

    def _text(self, node: NavigableString) -> str:
        value = _WHITESPACE_RE.sub(" ", str(node))
        parent = node.parent
        parent_is_block = parent is None or isinstance(parent, BeautifulSoup) or _is_block(parent)

        previous = node.previous_sibling
        if _is_block(previous) or (previous is None and parent_is_block):
            value = value.lstrip()
        following = node.next_sibling
        if _is_block(following) or (following is None and parent_is_block):
            value = value.rstrip()

        return escape_markdown(value)

    # --- block elements ---

    def _block(self, node: Tag, content: str) -> str:
        content = content.strip("\n")
        if not content.strip():
            return ""
        return f"\n\n{content}\n\n"

    def _heading(self, node: Tag, content: str) -> str:
        level = int(node.name[1])
        text = _WHITESPACE_RE.sub(" ", content).strip()
        if not text:
            return ""

        if level > self._rules.max_heading_level:
            return f"\n\n{CAPPED_HEADING_DELIMITER}{text}{CAPPED_HEADING_DELIMITER}\n\n"

        self._headings.append(Heading(level, _WHITESPACE_RE.sub(" ", node.get_text()).strip()))
        if self._rules.heading_style == HeadingStyle.SETEXT and level < 3:
            underline = ("=" if level == 1 else "-") * len(text)
            return f"\n\n{text}\n{underline}\n\n"
        return f"\n\n{'#' * level} {text}\n\n"

    def _line_break(self, node: Tag, content: str) -> str:
        return "  \n"

    def _horizontal_rule(self, node: Tag, content: str) -> str:
        return f"\n\n{self._rules.hr}\n\n"

    def _blockquote(self, node: Tag, content: str) -> str:
        content = content.strip("\n")
        if not content.strip():
            return ""
        quoted = "\n".join(f"> {line}" if line else ">" for line in content.split("\n"))
        return f"\n\n{quoted}\n\n"

    def _list(self, node: Tag, content: str) -> str:
        content = content.strip("\n")
        if not content:
            return ""
        if node.parent is not None and node.parent.name == "li":
            return f"\n{content}\n"
        return f"\n\n{content}\n\n"

    def _list_item(self, node: Tag, content: str) -> str:
        parent = node.parent
        if parent is not None and parent.name == "ol":
            start = parent.get("start")
            try:
                first = int(str(start)) if start is not None else 1
            except ValueError:
                first = 1
            position = len(node.find_previous_siblings("li"))
            prefix = f"{first + position}. "
        else:
            prefix = f"{self._rules.bullet_marker} "

        indent = " " * max(self._rules.list_indentation, len(prefix))
        lines = content.strip("\n").split("\n")
        body = "\n".join(
            [lines[0], *(f"{indent}{line}" if line.strip() else "" for line in lines[1:])]
        )
        trailing = "\n" if _next_tag(node, "li") is not None else ""
        return f"{prefix}{body}{trailing}"

    def _code_block(self, node: Tag) -> str:
        code = node.get_text().rstrip("\n")
        if not code.strip():
            return ""

        if self._rules.code_block_style == CodeBlockStyle.INDENTED:
            indented = "\n".join(f"    {line}" if line else "" for line in code.split("\n"))
            return f"\n\n{indented}\n\n"

        fence_char = self._rules.fence[0]
        fence_size = len(self._rules.fence)
        for run in re.findall(rf"^{re.escape(fence_char)}{{3,}}", code, re.MULTILINE):
            if len(run) >= fence_size:
                fence_size = len(run) + 1
        fence = fence_char * fence_size

        language = self._code_language(node) if self._rules.code_language else ""
        return f"\n\n{fence}{language}\n{code}\n{fence}\n\n"

    def _code_language(self, node: Tag) -> str:
        code = node.find("code")
        for element in (code, node):
            if element is None:
                continue
            for class_name in element.get("class") or []:
                match = _LANGUAGE_RE.match(class_name)
                if match:
                    return match.group(1)
        return ""

    def _table(self, node: Tag) -> str:
        """Render a GFM pipe table; the first row is the header."""
        rows = [row for row in node.find_all("tr") if row.find_parent("table") is node]
        if not rows:
            return self._block(node, self._children(node))

        grid = [
            [self._table_cell(cell) for cell in row.find_all(["th", "td"], recursive=False)]
            for row in rows
        ]
        width = max(len(cells) for cells in grid)
        if width == 0:
            return ""
        grid = [cells + [""] * (width - len(cells)) for cells in grid]

        header_cells = rows[0].find_all(["th", "td"], recursive=False)
        divider = [self._alignment(cell) for cell in header_cells]
        divider += ["---"] * (width - len(divider))

        lines = [_table_row(grid[0]), _table_row(divider)]
        lines.extend(_table_row(cells) for cells in grid[1:])
        return "\n\n" + "\n".join(lines) + "\n\n"

    def _table_cell(self, cell: Tag) -> str:
        text = self._children(cell).strip()
        text = _WHITESPACE_RE.sub(" ", text)
        return text.replace("|", "\\|")

    def _alignment(self, cell: Tag) -> str:
        if not self._rules.table_alignment:
            return "---"
        align = str(cell.get("align") or "").lower()
        if not align:
            style_match = re.search(r"text-align\s*:\s*(\w+)", str(cell.get("style") or ""))
            align = style_match.group(1).lower() if style_match else ""
        return {"left": ":---", "right": "---:", "center": ":---:"}.get(align, "---")

    # --- inline elements ---

    def _emphasis(self, node: Tag, content: str) -> str:
        return _wrap_inline(content, self._rules.em_delimiter)

    def _strong(self, node: Tag, content: str) -> str:
        return _wrap_inline(content, self._rules.strong_delimiter)

    def _strikethrough(self, node: Tag, content: str) -> str:
        if not self._rules.gfm:
            return content
        return _wrap_inline(content, "~~")

    def _inline_code(self, node: Tag) -> str:
        code = node.get_text().replace("\r\n", " ").replace("\n", " ")
        if not code:
            return ""
        delimiter = "`"
        runs = set(re.findall(r"`+", code))
        while delimiter in runs:
            delimiter += "`"
        padding = " " if code.startswith("`") or code.endswith("`") else ""
        return f"{delimiter}{padding}{code}{padding}{delimiter}"

    def _link(self, node: Tag, content: str) -> str:
        href = node.get("href")
        if self._rules.remove_links or href is None:
            return content

        href = self._url(str(href).strip())
        if self._rules.remove_tracking_params:
            href = strip_tracking_params(href)
        title = _title_suffix(node)

        if self._rules.link_style == MarkdownLinkStyle.INLINED:
            return f"[{content}]({href}{title})"

        style = self._rules.link_reference_style
        if style == LinkReferenceStyle.COLLAPSED:
            self._references.append(f"[{content}]: {href}{title}")
            return f"[{content}][]"
        if style == LinkReferenceStyle.SHORTCUT:
            self._references.append(f"[{content}]: {href}{title}")
            return f"[{content}]"
        reference_id = len(self._references) + 1
        self._references.append(f"[{reference_id}]: {href}{title}")
        return f"[{content}][{reference_id}]"

    def _image(self, node: Tag, content: str) -> str:
        if self._rules.skip_images:
            return ""
        src = str(node.get("src") or "").strip()
        if not src:
            return ""
        alt = str(node.get("alt") or "") or self._rules.fallback_alt_text
        return f"![{alt}]({self._url(src)}{_title_suffix(node)})"

    def _url(self, url: str) -> str:
        if self._rules.resolve_relative_urls:
            return resolve_url(url, self._base_url)
        return url


def _wrap_inline(content: str, delimiter: str) -> str:
    """Wrap ``content`` keeping its surrounding whitespace outside the delimiters."""
    if not content.strip():
        return content
    stripped = content.strip()
    leading = content[: len(content) - len(content.lstrip())]
    trailing = content[len(content.rstrip()):]
    return f"{leading}{delimiter}{stripped}{delimiter}{trailing}"


def _title_suffix(node: Tag) -> str:
    title = node.get("title")
    if not title:
        return ""
    escaped = str(title).replace('"', '\\"')
    return f' "{escaped}"'


def _table_row(cells: list[str]) -> str:
    return "| " + " | ".join(cells) + " |"
