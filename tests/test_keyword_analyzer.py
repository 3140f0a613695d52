"""Tests for keyword extraction, density and placement."""

from seo_metadata_analyzer.config import AnalyzerConfig
from seo_metadata_analyzer.keyword_analyzer import (
    LONG_TAIL_MODIFIERS,
    analyze_keywords,
    analyze_placement,
    calculate_density,
    detect_keyword_stuffing,
    extract_keywords,
    get_long_tail_suggestions,
    select_primary_keyword,
)
from seo_metadata_analyzer.models import PageMetadata


class TestExtractKeywords:
    """Tests for extract_keywords."""

    def test_ranked_by_frequency(self):
        """Test keywords are ranked most frequent first."""
        text = "garden tools, garden hose and garden gloves, tools"
        assert extract_keywords(text, min_length=4) == ["garden", "tools", "hose", "gloves"]

    def test_empty(self):
        """Test empty text yields no keywords."""
        assert extract_keywords("") == []


class TestDensity:
    """Tests for keyword density and stuffing."""

    def test_three_in_hundred_is_exactly_three(self):
        """Test 3 occurrences in 100 words gives 3.0 and is not stuffing."""
        text = " ".join(["widget"] * 3 + ["alpha"] * 97)
        assert calculate_density(text, "widget") == 3.0
        assert detect_keyword_stuffing(text, "widget") is False

    def test_above_threshold_is_stuffing(self):
        """Test density strictly above the threshold is flagged."""
        text = " ".join(["widget"] * 4 + ["alpha"] * 96)
        assert detect_keyword_stuffing(text, "widget") is True

    def test_substring_counts(self):
        """Test words containing the keyword count as occurrences."""
        assert calculate_density("widgets widget gadget other", "widget") == 50.0

    def test_empty_inputs(self):
        """Test empty text or keyword returns zero."""
        assert calculate_density("", "widget") == 0.0
        assert calculate_density("some text", "") == 0.0

    def test_custom_threshold(self):
        """Test stuffing threshold comes from config."""
        text = " ".join(["widget"] * 3 + ["alpha"] * 97)
        config = AnalyzerConfig(stuffing_threshold=2.5, low_density_threshold=0.5)
        assert detect_keyword_stuffing(text, "widget", config) is True


class TestPrimaryKeyword:
    """Tests for primary keyword selection and placement."""

    def test_prefers_keyword_in_title(self):
        """Test the best-ranked keyword found in the title wins."""
        assert select_primary_keyword(["widgets", "blue"], "Blue Things") == "blue"

    def test_falls_back_to_top_keyword(self):
        """Test the top keyword is used when none is in the title."""
        assert select_primary_keyword(["widgets", "blue"], "Other") == "widgets"

    def test_none_without_keywords(self):
        """Test no keywords gives None."""
        assert select_primary_keyword([], "Title") is None

    def test_placement_case_insensitive(self):
        """Test placement checks ignore case."""
        page = PageMetadata(url="https://example.com", title="Blue Widgets", h1="widgets")
        placement = analyze_placement(page, "WIDGETS")
        assert placement.in_title
        assert placement.in_h1
        assert not placement.in_description
        assert not placement.in_first_paragraph


class TestAnalyzeKeywords:
    """Tests for analyze_keywords."""

    def test_ideal_page(self, ideal_page):
        """Test primary and secondary keywords for a complete page."""
        result = analyze_keywords(ideal_page)
        assert result.primary_keyword == "blue"
        assert "widgets" in result.secondary_keywords
        assert len(result.secondary_keywords) <= 5
        assert result.primary_keyword not in result.secondary_keywords
        assert list(result.keyword_density)[0] == "blue"
        assert result.keyword_placement.in_title
        assert result.keyword_placement.in_h1
        assert result.keyword_placement.in_description

    def test_no_keywords(self, empty_page):
        """Test a page without text has no primary keyword."""
        result = analyze_keywords(empty_page)
        assert result.primary_keyword is None
        assert result.secondary_keywords == []
        assert result.keyword_stuffing is False
        assert result.suggestions == [
            "No clear primary keyword identified. "
            "Consider adding a focus keyword to your content."
        ]

    def test_missing_placement_suggestions(self):
        """Test suggestions name the missing placements."""
        page = PageMetadata(
            url="https://example.com",
            title="Gardening tips",
            description="Learn about compost.",
        )
        result = analyze_keywords(page)
        assert result.primary_keyword == "gardening"
        assert 'Include primary keyword "gardening" in the H1 tag' in result.suggestions
        assert (
            'Include primary keyword "gardening" in the meta description'
            in result.suggestions
        )

    def test_does_not_mutate_input(self, ideal_page):
        """Test the input record is unchanged."""
        before = ideal_page.to_dict()
        analyze_keywords(ideal_page)
        assert ideal_page.to_dict() == before


class TestLongTail:
    """Tests for long-tail suggestions."""

    def test_one_per_modifier(self):
        """Test a suggestion is built for every modifier, in order."""
        suggestions = get_long_tail_suggestions("seo audit")
        assert len(suggestions) == len(LONG_TAIL_MODIFIERS) == 18
        assert suggestions[0].keyword == "how to seo audit"
        assert suggestions[-1].keyword == "comparison seo audit"
        assert all(s.search_volume is None and s.difficulty is None for s in suggestions)
