"""Unit tests for page metadata extraction."""

import pytest

from pagemd.detector import MetadataExtractor
from pagemd.dom import parse_html


@pytest.fixture
def extractor() -> MetadataExtractor:
    """Create a metadata extractor."""
    return MetadataExtractor()


class TestTitle:
    """Test title precedence."""

    def test_h1_first(self, extractor: MetadataExtractor) -> None:
        """Test that the h1 wins over meta tags and the title element."""
        document = parse_html(
            '<title>Doc</title><meta property="og:title" content="OG"><h1>  Main   Heading </h1>'
        )
        assert extractor.extract(document).title == "Main Heading"

    def test_headline_selector_before_meta(self, extractor: MetadataExtractor) -> None:
        """Test that title classes come before meta tags."""
        document = parse_html('<meta property="og:title" content="OG"><div class="post-title">Post</div>')
        assert extractor.extract(document).title == "Post"

    def test_og_then_twitter(self, extractor: MetadataExtractor) -> None:
        """Test meta tag order."""
        document = parse_html(
            '<meta name="twitter:title" content="Tweet"><meta property="og:title" content="Open Graph">'
        )
        assert extractor.extract(document).title == "Open Graph"

    def test_page_title_then_title_element(self, extractor: MetadataExtractor) -> None:
        """Test the last fallbacks."""
        document = parse_html("<title>Document Title</title><p>Body</p>")
        assert extractor.extract(document, page_title="Tab").title == "Tab"
        assert extractor.extract(document).title == "Document Title"

    def test_no_title(self, extractor: MetadataExtractor) -> None:
        """Test that a page without any title gives an empty string."""
        assert extractor.extract(parse_html("<p>Body</p>")).title == ""


class TestAuthorAndDate:
    """Test author and date precedence."""

    def test_meta_author(self, extractor: MetadataExtractor) -> None:
        """Test meta author when no author element exists."""
        document = parse_html('<meta name="author" content="Meta Person">')
        assert extractor.extract(document).author == "Meta Person"

    def test_rel_author_before_meta(self, extractor: MetadataExtractor) -> None:
        """Test that author elements win over meta tags."""
        document = parse_html('<meta name="author" content="Meta"><a rel="author" href="/me">Link Person</a>')
        assert extractor.extract(document).author == "Link Person"

    def test_time_text_without_datetime(self, extractor: MetadataExtractor) -> None:
        """Test that time text is used when the attribute is missing."""
        document = parse_html("<time>Yesterday</time>")
        assert extractor.extract(document).publish_date == "Yesterday"

    def test_published_time_meta(self, extractor: MetadataExtractor) -> None:
        """Test the article:published_time meta tag."""
        document = parse_html('<meta property="article:published_time" content="2023-12-24T10:00:00Z">')
        assert extractor.extract(document).publish_date == "2023-12-24T10:00:00Z"

    def test_missing_values_are_none(self, extractor: MetadataExtractor) -> None:
        """Test that missing author, date and description are None."""
        metadata = extractor.extract(parse_html("<p>Nothing here</p>"))
        assert metadata.author is None
        assert metadata.publish_date is None
        assert metadata.description is None


class TestJsonLd:
    """Test JSON-LD fallbacks."""

    def test_article_author_and_date(self, extractor: MetadataExtractor) -> None:
        """Test author name and datePublished from an Article object."""
        document = parse_html(
            '<script type="application/ld+json">'
            '{"@context": "https://schema.org", "@type": "NewsArticle",'
            ' "author": [{"@type": "Person", "name": "Ada Lovelace"}],'
            ' "datePublished": "2024-02-02"}'
            "</script>"
        )
        metadata = extractor.extract(document)
        assert metadata.author == "Ada Lovelace"
        assert metadata.publish_date == "2024-02-02"

    def test_graph_container(self, extractor: MetadataExtractor) -> None:
        """Test objects nested in @graph."""
        document = parse_html(
            '<script type="application/ld+json">'
            '{"@graph": [{"@type": "WebSite"}, {"@type": "BlogPosting", "author": "Grace Hopper"}]}'
            "</script>"
        )
        assert extractor.extract(document).author == "Grace Hopper"

    def test_invalid_json_ignored(self, extractor: MetadataExtractor) -> None:
        """Test that broken JSON-LD is skipped."""
        document = parse_html('<script type="application/ld+json">{not json</script>')
        assert extractor.extract(document).author is None

    def test_description(self, extractor: MetadataExtractor) -> None:
        """Test description from og:description when the name meta is missing."""
        document = parse_html('<meta property="og:description" content="Short summary">')
        assert extractor.extract(document).description == "Short summary"
