"""Unit tests for the Markdown converter."""

from datetime import UTC, datetime
from typing import Any

import pytest

from pagemd.converter import ConversionResult, MarkdownConverter, compute_checksum, convert, tidy_markdown
from pagemd.dom import parse_html
from pagemd.profiles.models import (
    CodeBlockStyle,
    ContentFilters,
    ConversionMetadata,
    ConversionOptions,
    ConversionProfile,
    FormattingOptions,
    ImageHandling,
    ImageStrategy,
    LinkHandling,
    LinkStyle,
    MarkdownFlavor,
    OutputFormat,
)

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
UTF8_SIZE = 6
FIXED_NOW = datetime(2024, 5, 6, 7, 8, 9, tzinfo=UTC)


def fixed_clock() -> datetime:
    """Return a constant conversion time."""
    return FIXED_NOW


def make_profile(**fields: Any) -> ConversionProfile:
    """Create a test profile without frontmatter unless asked for."""
    fields.setdefault("output_format", OutputFormat(add_metadata=False))
    return ConversionProfile(id="test", name="Test", **fields)


def to_markdown(html: str, **fields: Any) -> str:
    """Convert ``html`` with a test profile and return the content."""
    return convert(html, make_profile(**fields), clock=fixed_clock).content


@pytest.fixture
def metadata() -> ConversionMetadata:
    """Page metadata with every frontmatter field set."""
    return ConversionMetadata(
        title="Test Page",
        url="https://example.com/a",
        author="Jane",
        description='Say "hi"',
        published_date="2024-01-02",
    )


class TestFrontmatter:
    """Test the metadata block."""

    def test_full_block(self, metadata: ConversionMetadata) -> None:
        """Test field order, quoting and the timestamp format."""
        profile = make_profile(output_format=OutputFormat())
        result = convert("<h1>Hello</h1><p>World</p>", profile, metadata, clock=fixed_clock)

        assert result.content == (
            "---\n"
            "title: Test Page\n"
            "url: https://example.com/a\n"
            'author: "Jane"\n'
            'description: "Say \\"hi\\""\n'
            "published: 2024-01-02\n"
            "converted: 2024-05-06T07:08:09.000Z\n"
            "converter: pagemd\n"
            "profile: Test\n"
            "---\n"
            "\n"
            "# Hello\n"
            "\n"
            "World"
        )

    def test_title_quoted_when_needed(self) -> None:
        """Test that YAML indicator characters force quotes."""
        profile = make_profile(output_format=OutputFormat())
        metadata = ConversionMetadata(title="Guide: Part 1")
        result = convert("<p>Body</p>", profile, metadata, converter_name="tool", clock=fixed_clock)

        assert result.content.startswith('---\ntitle: "Guide: Part 1"\nconverted: ')
        assert "converter: tool\n" in result.content

    def test_quoted_values_escaped(self) -> None:
        """Test backslash and quote escaping and line breaks folded into spaces."""
        profile = make_profile(output_format=OutputFormat())
        metadata = ConversionMetadata(
            title="Paths: C:\\temp\nand more",
            author='Ann "The Pen" Lee',
            description="Line one\r\n  line two \\ end",
        )
        result = convert("<p>Body</p>", profile, metadata, clock=fixed_clock)

        assert 'title: "Paths: C:\\\\temp and more"\n' in result.content
        assert 'author: "Ann \\"The Pen\\" Lee"\n' in result.content
        assert 'description: "Line one line two \\\\ end"\n' in result.content

    def test_disabled(self, metadata: ConversionMetadata) -> None:
        """Test that add_metadata=False leaves only the body."""
        result = convert("<p>Body</p>", make_profile(), metadata, clock=fixed_clock)
        assert result.content == "Body"

    def test_without_metadata(self) -> None:
        """Test that no metadata means no frontmatter even when enabled."""
        profile = make_profile(output_format=OutputFormat())
        assert convert("<p>Body</p>", profile, clock=fixed_clock).content == "Body"


class TestResult:
    """Test file name, size and checksum."""

    def test_file_name_from_title(self, metadata: ConversionMetadata) -> None:
        """Test the slugged title."""
        result = convert("<p>x</p>", make_profile(), metadata, clock=fixed_clock)
        assert result.file_name == "test-page.md"

    def test_file_name_fallbacks(self) -> None:
        """Test the dated fallback and the bare fallback."""
        assert convert("<p>x</p>", make_profile(), clock=fixed_clock).file_name == "markdown-2024-05-06.md"
        untitled = ConversionMetadata(title="!!!")
        assert convert("<p>x</p>", make_profile(), untitled, clock=fixed_clock).file_name == "markdown.md"

    def test_empty_input(self) -> None:
        """Test that empty input converts to empty content."""
        for markup in ("", None, "   "):
            result = convert(markup, make_profile(), clock=fixed_clock)
            assert result.content == ""
            assert result.size_bytes == 0
            assert result.checksum == EMPTY_SHA256

    def test_size_in_utf8_bytes(self) -> None:
        """Test that size counts encoded bytes, not characters."""
        result = convert("<p>héllo</p>", make_profile(), clock=fixed_clock)
        assert result.content == "héllo"
        assert result.size_bytes == UTF8_SIZE

    def test_checksum_matches_content(self) -> None:
        """Test that the checksum is the SHA-256 of the content."""
        result = convert("<p>Body</p>", make_profile(), clock=fixed_clock)
        assert result.checksum == compute_checksum("Body")
        assert result.checksum != convert("<p>Body!</p>", make_profile(), clock=fixed_clock).checksum

    def test_deterministic(self, metadata: ConversionMetadata) -> None:
        """Test that the same input, profile and clock give the same result."""
        profile = make_profile(output_format=OutputFormat())
        html = "<h1>Hi</h1><p>Some <em>text</em></p>"
        assert convert(html, profile, metadata, clock=fixed_clock) == convert(
            html, profile, metadata, clock=fixed_clock
        )

    def test_to_dict(self, metadata: ConversionMetadata) -> None:
        """Test camelCase keys and metadata without missing fields."""
        result = ConversionResult(
            content="x",
            file_name="x.md",
            size_bytes=1,
            checksum="abc",
            metadata=ConversionMetadata(title="T", published_date="2024"),
        )
        assert result.to_dict() == {
            "content": "x",
            "fileName": "x.md",
            "sizeBytes": 1,
            "checksum": "abc",
            "metadata": {"title": "T", "publishedDate": "2024"},
        }


class TestContentFilters:
    """Test include, exclude and hidden handling."""

    def test_include_css(self) -> None:
        """Test that only included elements are rendered."""
        html = "<nav>Menu</nav><article><p>Body</p></article><footer>Foot</footer>"
        assert to_markdown(html, content_filters=ContentFilters(include_css=["article"])) == "Body"

    def test_include_css_outermost_only(self) -> None:
        """Test that nested matches are not emitted twice."""
        html = '<div class="x"><p>One</p><div class="x"><p>Two</p></div></div>'
        assert to_markdown(html, content_filters=ContentFilters(include_css=[".x"])) == "One\n\nTwo"

    def test_invalid_include_ignored(self) -> None:
        """Test that an include list with only invalid selectors keeps everything."""
        html = "<nav>Menu</nav><article><p>Body</p></article>"
        assert to_markdown(html, content_filters=ContentFilters(include_css=["[[bad"])) == "Menu\n\nBody"
        filters = ContentFilters(include_css=["[[bad", "article"])
        assert to_markdown(html, content_filters=filters) == "Body"

    def test_include_without_matches(self) -> None:
        """Test that a valid include selector matching nothing gives empty content."""
        html = "<p>Body</p>"
        assert to_markdown(html, content_filters=ContentFilters(include_css=["section"])) == ""

    def test_exclude_css(self) -> None:
        """Test exclusion, with an invalid selector skipped."""
        html = '<p>Keep</p><div class="ad">Buy now</div>'
        filters = ContentFilters(exclude_css=["[[", ".ad"])
        assert to_markdown(html, content_filters=filters) == "Keep"

    def test_hidden_elements(self) -> None:
        """Test that hidden elements are dropped unless include_hidden is set."""
        html = '<p>Shown</p><p style="display:none">Hidden</p><p hidden>Gone</p>'
        assert to_markdown(html) == "Shown"
        assert to_markdown(html, content_filters=ContentFilters(include_hidden=True)) == "Shown\n\nHidden\n\nGone"

    def test_source_tree_untouched(self) -> None:
        """Test that converting a parsed document leaves it unchanged."""
        document = parse_html('<p>Keep</p><div class="ad">Buy</div><p hidden>Secret</p>')
        before = str(document)
        convert(document, make_profile(content_filters=ContentFilters(exclude_css=[".ad"])), clock=fixed_clock)
        assert str(document) == before

    def test_single_element(self) -> None:
        """Test converting one element of a larger page."""
        document = parse_html("<nav>Menu</nav><article><h2>Part</h2><p>Body</p></article>")
        assert convert(document.article, make_profile(), clock=fixed_clock).content == "## Part\n\nBody"


class TestProfileOptions:
    """Test profile options reaching the rendered output."""

    def test_flavor_controls_strikethrough(self) -> None:
        """Test that github flavor enables GFM syntax."""
        html = "<p><del>old</del> new</p>"
        assert to_markdown(html, markdown_flavor=MarkdownFlavor.GITHUB) == "~~old~~ new"
        assert to_markdown(html, markdown_flavor=MarkdownFlavor.COMMONMARK) == "old new"

    def test_link_and_image_handling(self) -> None:
        """Test link removal and skipped images."""
        html = '<p><a href="https://example.com">Site</a> <img src="/a.png" alt="A"></p>'
        content = to_markdown(
            html,
            link_handling=LinkHandling(style=LinkStyle.REMOVE),
            image_handling=ImageHandling(strategy=ImageStrategy.SKIP),
        )
        assert content == "Site"

    def test_conversion_options(self) -> None:
        """Test delimiters and bullet marker from conversion options."""
        html = "<p><strong>A</strong> <em>B</em></p><ul><li>C</li></ul>"
        options = ConversionOptions(strong_delimiter="__", em_delimiter="_", bullet_list_marker="+")
        assert to_markdown(html, conversion_options=options) == "__A__ _B_\n\n+ C"

    def test_formatting_options(self) -> None:
        """Test the hr style and code language switch."""
        html = '<hr><pre><code class="language-js">x()</code></pre>'
        formatting = FormattingOptions(hr_style="***", code_block_syntax=False)
        assert to_markdown(html, formatting=formatting) == "***\n\n```\nx()\n```"

    def test_max_heading_level(self) -> None:
        """Test the heading cap."""
        html = "<h2>Two</h2><h5>Five</h5>"
        assert to_markdown(html, content_filters=ContentFilters(max_heading_level=2)) == "## Two\n\n**Five**"

    def test_table_of_contents(self) -> None:
        """Test the table of contents with duplicate anchors."""
        html = "<h1>Guide</h1><h2>Setup</h2><h2>Setup</h2>"
        content = to_markdown(html, output_format=OutputFormat(add_metadata=False, add_table_of_contents=True))
        assert content == (
            "## Table of Contents\n"
            "\n"
            "- [Guide](#guide)\n"
            "  - [Setup](#setup)\n"
            "  - [Setup](#setup-1)\n"
            "\n"
            "# Guide\n"
            "\n"
            "## Setup\n"
            "\n"
            "## Setup"
        )

    def test_converter_properties(self) -> None:
        """Test that the converter exposes its profile and rules."""
        profile = make_profile(conversion_options=ConversionOptions(bullet_list_marker="*"))
        converter = MarkdownConverter(profile, clock=fixed_clock)
        assert converter.profile is profile
        assert converter.rules.bullet_marker == "*"


class TestTidyMarkdown:
    """Test list marker spacing cleanup."""

    def test_collapses_marker_spacing(self) -> None:
        """Test bullets and ordered markers in column 0."""
        assert tidy_markdown("-   one\n1.  two") == "- one\n1. two"

    def test_indented_lines_untouched(self) -> None:
        """Test that indented code and nested lines keep their spacing."""
        text = "    -   keep   this\n    1.    also\n  *    nested"
        assert tidy_markdown(text) == text

    def test_fenced_code_untouched(self) -> None:
        """Test that fenced code keeps its spacing."""
        text = "-   item\n```\n-   code\n```\n-   after"
        assert tidy_markdown(text) == "- item\n```\n-   code\n```\n- after"

    def test_indented_code_block_keeps_spacing(self) -> None:
        """Test that list-like lines in indented code survive conversion."""
        profile = make_profile(conversion_options=ConversionOptions(code_block_style=CodeBlockStyle.INDENTED))
        html = "<pre><code>-   keep   this\n1.    also</code></pre>"

        result = convert(html, profile, clock=fixed_clock)

        assert result.content == "    -   keep   this\n    1.    also"
