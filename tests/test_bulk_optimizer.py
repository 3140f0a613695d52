"""Tests for bulk patterns, templates, URL patterns and bulk edits."""

from datetime import date

import pytest

from seo_metadata_analyzer.bulk_optimizer import (
    BULK_PATTERNS,
    BULK_TEMPLATES,
    BulkOptimizationError,
    apply_bulk_edit,
    apply_bulk_pattern,
    apply_bulk_template,
    extract_from_url,
    generate_from_url_pattern,
    get_pattern,
    get_template,
    replace_text,
    slug_to_title,
    split_replace_value,
)
from seo_metadata_analyzer.models import PageMetadata


@pytest.fixture
def pages() -> list[PageMetadata]:
    """Two simple pages."""
    return [
        PageMetadata(url="https://example.com/a", title="Home", description="Welcome home."),
        PageMetadata(url="https://example.com/b", title="", description=""),
    ]


class TestPatterns:
    """Tests for bulk patterns."""

    def test_registry(self):
        """Test the six patterns are registered by name."""
        assert len(BULK_PATTERNS) == 6
        assert get_pattern("add brand to title").name == "Add Brand to Title"

    def test_unknown_pattern(self):
        """Test unknown names raise BulkOptimizationError."""
        with pytest.raises(BulkOptimizationError, match="Unknown pattern"):
            get_pattern("Shout Titles")

    def test_append_brand(self, pages):
        """Test brand is appended, or used alone for empty titles."""
        result = apply_bulk_pattern(pages, get_pattern("Add Brand to Title"), "| Acme")
        assert result[0].title == "Home | Acme"
        assert result[1].title == "| Acme"

    def test_prefix_title(self, pages):
        """Test prefix goes before the title."""
        result = apply_bulk_pattern(pages, get_pattern("Prefix Title"), "New:")
        assert result[0].title == "New: Home"

    def test_selection_and_no_mutation(self, pages):
        """Test only selected pages change and inputs are untouched."""
        result = apply_bulk_pattern(pages, get_pattern("Suffix Description"), "Call now.", [1, 5])
        assert result[0] is pages[0]
        assert result[1].description == "Call now."
        assert pages[1].description == ""

    def test_replace_in_title(self, pages):
        """Test case-insensitive global replacement."""
        result = apply_bulk_pattern(pages, get_pattern("Replace in Title"), "home|Start")
        assert result[0].title == "Start"


class TestReplaceText:
    """Tests for old|new replacement values."""

    def test_split_on_first_separator(self):
        """Test only the first | separates old from new."""
        assert split_replace_value("a|b|c") == ("a", "b|c")

    def test_invalid_values(self):
        """Test values without both sides are rejected."""
        assert split_replace_value("nothing") is None
        assert split_replace_value("|new") is None
        assert split_replace_value("old|") is None

    def test_global_case_insensitive(self):
        """Test every match is replaced regardless of case."""
        assert replace_text("Cat cat CAT", "cat|dog") == "dog dog dog"

    def test_replacement_is_literal(self):
        """Test backreference syntax in the replacement is not expanded."""
        assert replace_text("abc", r"b|\1") == r"a\1c"

    def test_invalid_regex_leaves_text(self):
        """Test an invalid pattern leaves text unchanged."""
        assert replace_text("a (b)", "(|x") == "a (b)"


class TestTemplates:
    """Tests for bulk templates."""

    def test_registry(self):
        """Test the four templates are registered by name."""
        assert [t.name for t in BULK_TEMPLATES] == [
            "Product Page Template",
            "Blog Post Template",
            "Category Page Template",
            "Landing Page Template",
        ]
        with pytest.raises(BulkOptimizationError):
            get_template("Nope")

    def test_product_with_data(self):
        """Test product fields come from template data."""
        fields = get_template("Product Page Template").generate(
            "https://example.com/p", {"productName": "Widget", "brand": "Acme", "price": "10"},
        )
        assert fields["title"] == "Widget by Acme - $10 | Buy Online"
        assert fields["description"] == (
            "Shop Widget by Acme for $10. High quality product with fast shipping."
        )
        assert fields["h1"] == "Widget"

    def test_product_url_fallback(self):
        """Test the last URL segment is used when no product name is given."""
        fields = get_template("Product Page Template").generate(
            "https://example.com/products/blue-widget", {},
        )
        assert fields["title"] == "Blue Widget | Buy Online"
        assert fields["og_title"] == "Blue Widget"

    def test_blog_date(self):
        """Test blog posts include the given or current date."""
        template = get_template("Blog Post Template")
        fields = template.generate("https://example.com/blog/my-post", {"date": "2025-01-31"})
        assert fields["title"] == "My Post | Blog"
        assert fields["description"].endswith("Published 2025-01-31.")
        fields = template.generate("https://example.com/blog/my-post", {"author": "Sam"})
        assert fields["title"] == "My Post by Sam | Blog"
        assert fields["description"].endswith(f"Published {date.today().isoformat()}.")

    def test_category(self):
        """Test category titles include an item count when given."""
        fields = get_template("Category Page Template").generate(
            "https://example.com/c/shoes", {"itemCount": "42"},
        )
        assert fields["title"] == "Shoes (42 items) | Shop Now"
        assert fields["description"].startswith("Browse our collection of shoes.")

    def test_landing_defaults(self):
        """Test landing pages fall back to a default brand and CTA."""
        fields = get_template("Landing Page Template").generate("https://example.com/spring-sale", {})
        assert fields["title"] == "Spring Sale | Our Company"
        assert fields["description"] == "Discover spring sale. Learn More today!"

    def test_apply_template_selection(self, pages):
        """Test templates merge into selected pages only."""
        result = apply_bulk_template(pages, get_template("Landing Page Template"), {}, [1])
        assert result[0] is pages[0]
        assert result[1].h1 == "B"
        assert result[1].url == "https://example.com/b"


class TestURLHelpers:
    """Tests for URL-derived text."""

    def test_slug_to_title(self):
        """Test hyphenated slugs become Title Case."""
        assert slug_to_title("blue-widget-XL") == "Blue Widget XL"

    def test_extract_from_url(self):
        """Test last segment, host label and fallback."""
        assert extract_from_url("https://example.com/a/blue-widget/") == "Blue Widget"
        assert extract_from_url("https://www.example.com/") == "example"
        assert extract_from_url("not a url") == "Page"

    def test_url_pattern_placeholders(self):
        """Test every placeholder is substituted."""
        result = generate_from_url_pattern(
            "https://www.example.com/shop/blue-widget",
            "{last-segment} | {domain}",
            "{url} in {first-segment} at {path}",
        )
        assert result == {
            "title": "blue-widget | example.com",
            "description": "https://www.example.com/shop/blue-widget in shop at /shop/blue-widget",
            "h1": "Blue Widget",
        }

    def test_url_pattern_root(self):
        """Test the root URL leaves segment placeholders empty."""
        result = generate_from_url_pattern("https://example.com", "[{last-segment}]", "{path}")
        assert result == {"title": "[]", "description": "/", "h1": ""}


class TestBulkEdit:
    """Tests for apply_bulk_edit."""

    def test_only_non_blank_values_applied(self, pages):
        """Test blank updates leave fields untouched and values are trimmed."""
        result = apply_bulk_edit(pages, [0], {
            "title": "  New Title  ",
            "description": "   ",
            "ogTitle": "OG",
            "h1": None,
        })
        assert result[0].title == "New Title"
        assert result[0].description == "Welcome home."
        assert result[0].og_title == "OG"
        assert result[0].h1 == ""
        assert result[1] is pages[1]

    def test_url_never_changes(self, pages):
        """Test the URL cannot be bulk-edited."""
        result = apply_bulk_edit(pages, [0, 1], {"url": "https://evil.example", "keywords": "k"})
        assert [page.url for page in result] == [page.url for page in pages]
        assert all(page.keywords == "k" for page in result)

    def test_nothing_to_apply(self, pages):
        """Test an update with only blanks returns equal pages."""
        assert apply_bulk_edit(pages, [0], {"title": ""}) == pages
