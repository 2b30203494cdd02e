"""Unit tests for the table of contents."""

from collections import Counter

from pagemd.converter.renderer import Heading
from pagemd.converter.toc import build_table_of_contents, heading_anchor


class TestHeadingAnchor:
    """Test heading_anchor."""

    def test_punctuation_removed(self) -> None:
        """Test lower-casing, punctuation removal and hyphens."""
        assert heading_anchor("Hello, World!", Counter()) == "hello-world"

    def test_duplicates_numbered(self) -> None:
        """Test numbering of repeated anchors."""
        seen: Counter[str] = Counter()
        assert [heading_anchor("Setup", seen) for _ in range(3)] == ["setup", "setup-1", "setup-2"]


class TestBuildTableOfContents:
    """Test build_table_of_contents."""

    def test_empty(self) -> None:
        """Test that no headings give no table."""
        assert build_table_of_contents([]) == ""

    def test_relative_nesting(self) -> None:
        """Test nesting relative to the shallowest heading."""
        headings = [Heading(2, "Intro"), Heading(3, "[Draft] Notes"), Heading(2, "End")]
        assert build_table_of_contents(headings, "*", 4) == (
            "## Table of Contents\n"
            "\n"
            "* [Intro](#intro)\n"
            "    * [\\[Draft\\] Notes](#draft-notes)\n"
            "* [End](#end)"
        )
