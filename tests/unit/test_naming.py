"""Unit tests for file name generation."""

from datetime import UTC, datetime

import pytest

from pagemd.converter.naming import (
    MAX_SLUG_LENGTH,
    NamingPattern,
    file_name_for_pattern,
    generate_file_name,
    process_template,
    sanitize_file_name,
    validate_template,
)

NOW = datetime(2024, 5, 6, 7, 8, 9, tzinfo=UTC)
URL = "https://www.example.com/docs/page"


class TestGenerateFileName:
    """Test the default title slug."""

    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("Test Page", "test-page.md"),
            ("  Hello, World!  ", "hello-world.md"),
            ("Python 3.12 -- What's New?", "python-3-12-what-s-new.md"),
            ("Ünïcode", "n-code.md"),
        ],
    )
    def test_slug(self, title: str, expected: str) -> None:
        """Test lower-casing and hyphenation."""
        assert generate_file_name(title, NOW) == expected

    def test_length_cap(self) -> None:
        """Test the slug length cap."""
        name = generate_file_name("a" * 150, NOW)
        assert name == "a" * MAX_SLUG_LENGTH + ".md"

    def test_no_trailing_hyphen_after_cap(self) -> None:
        """Test that cutting at a word boundary leaves no trailing hyphen."""
        name = generate_file_name("a" * (MAX_SLUG_LENGTH - 1) + " b", NOW)
        assert name == "a" * (MAX_SLUG_LENGTH - 1) + ".md"

    def test_fallbacks(self) -> None:
        """Test missing and unusable titles."""
        assert generate_file_name(None, NOW) == "markdown-2024-05-06.md"
        assert generate_file_name("", NOW) == "markdown-2024-05-06.md"
        assert generate_file_name("!!! ???", NOW) == "markdown.md"


class TestSanitizeFileName:
    """Test sanitize_file_name."""

    def test_invalid_characters_removed(self) -> None:
        """Test reserved characters and whitespace."""
        assert sanitize_file_name("My File: Draft?") == "My_File_Draft"

    def test_non_ascii_removed(self) -> None:
        """Test that non-ASCII word characters are dropped."""
        assert sanitize_file_name("Café Menu") == "Caf_Menu"

    def test_edges_trimmed(self) -> None:
        """Test leading and trailing separators."""
        assert sanitize_file_name(" notes ") == "notes"


class TestNamingPatterns:
    """Test file_name_for_pattern."""

    def test_tab_title(self) -> None:
        """Test the sanitized title."""
        assert file_name_for_pattern(NamingPattern.TAB_TITLE, "My Page", URL, NOW) == "My_Page.md"

    def test_domain_title(self) -> None:
        """Test the domain prefix without www."""
        name = file_name_for_pattern(NamingPattern.DOMAIN_TITLE, "My Page", URL, NOW)
        assert name == "example.com_My_Page.md"

    def test_timestamp(self) -> None:
        """Test the date prefix."""
        name = file_name_for_pattern(NamingPattern.TIMESTAMP, "My Page", URL, NOW)
        assert name == "2024-05-06_My_Page.md"

    def test_custom_prefix(self) -> None:
        """Test a custom template."""
        name = file_name_for_pattern(NamingPattern.CUSTOM_PREFIX, "My Page", URL, NOW, "{host}-{date}-{title}")
        assert name == "example-2024-05-06-My_Page.md"

    def test_custom_prefix_without_template(self) -> None:
        """Test that a missing template falls back to the title."""
        assert file_name_for_pattern(NamingPattern.CUSTOM_PREFIX, "My Page", URL, NOW) == "My_Page.md"

    def test_empty_result_falls_back(self) -> None:
        """Test that an empty name uses the default generator."""
        assert file_name_for_pattern(NamingPattern.TAB_TITLE, "", URL, NOW) == "markdown-2024-05-06.md"


class TestTemplates:
    """Test custom template validation and substitution."""

    def test_valid(self) -> None:
        """Test a template with known variables."""
        result = validate_template("{title}-{date}")
        assert result.valid
        assert result.errors == []
        assert result.used_variables == ["{title}", "{date}"]

    def test_empty(self) -> None:
        """Test the empty template."""
        assert validate_template("  ") == (False, ["Template cannot be empty"], [])

    def test_unknown_variable(self) -> None:
        """Test unknown variables and the missing variable error."""
        result = validate_template("{foo}")
        assert not result.valid
        assert result.errors == ["Unknown variable: {foo}", "Template should include at least one variable"]

    def test_invalid_characters(self) -> None:
        """Test reserved characters outside variables."""
        result = validate_template("notes/{title}")
        assert not result.valid
        assert len(result.errors) == 1
        assert "invalid characters" in result.errors[0]

    def test_date_parts(self) -> None:
        """Test the date and time variables."""
        assert process_template("{year}{month}{day}_{time}", "x", URL, NOW) == "20240506_07-08-09"
