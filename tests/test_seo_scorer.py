"""Tests for the core SEO score, category scores and duplicate detection."""

from itertools import permutations

import pytest

from seo_metadata_analyzer.models import PageMetadata
from seo_metadata_analyzer.seo_scorer import (
    analyze_seo,
    calculate_category_scores,
    find_duplicates,
    get_priority_issues,
)

REQUIRED_FIELDS = ["title", "description", "h1", "canonical", "og_title", "og_description", "og_image"]


class TestAnalyzeSEO:
    """Tests for analyze_seo."""

    def test_ideal_page_scores_100(self, ideal_page):
        """Test a page meeting every rule keeps the full score."""
        result = analyze_seo(ideal_page)
        assert result.score == 100
        assert result.issues == []
        assert result.title_count.in_range
        assert result.description_count.in_range

    def test_empty_page(self, empty_page):
        """Test every deduction applies to a page with only a URL."""
        result = analyze_seo(empty_page)
        assert result.issues == [
            "Missing title tag",
            "Missing meta description",
            "Missing H1 tag",
            "Missing Open Graph title",
            "Missing Open Graph description",
            "Missing Open Graph image",
            "Missing canonical URL",
        ]
        assert result.score == 100 - 20 - 20 - 10 - 5 - 5 - 5 - 5

    def test_short_title(self, ideal_page):
        """Test a short title loses the length penalty only."""
        page = ideal_page.copy_with(title="Short")
        result = analyze_seo(page)
        assert result.score == 90
        assert result.issues == ["Title too short (5 chars, recommended: 30-60)"]
        assert result.suggestions == ["Expand title to 30-60 characters for better SEO"]

    def test_long_description(self, ideal_page):
        """Test a long description loses the length penalty."""
        page = ideal_page.copy_with(description="x" * 161)
        result = analyze_seo(page)
        assert result.score == 90
        assert result.issues == ["Description too long (161 chars, recommended: 120-160)"]

    def test_boundaries_inclusive(self, ideal_page):
        """Test lengths at the range bounds are accepted."""
        for title in ("t" * 30, "t" * 60):
            assert analyze_seo(ideal_page.copy_with(title=title)).score == 100
        for description in ("d" * 120, "d" * 160):
            assert analyze_seo(ideal_page.copy_with(description=description)).score == 100

    def test_character_counts(self, empty_page):
        """Test character counts carry the recommended ranges."""
        result = analyze_seo(empty_page)
        assert result.title_count.current == 0
        assert (result.title_count.recommended_min, result.title_count.recommended_max) == (30, 60)
        assert not result.description_count.in_range

    def test_does_not_mutate_input(self, empty_page):
        """Test the input record is left untouched."""
        analyze_seo(empty_page)
        assert empty_page == PageMetadata(url="https://example.com/about")

    @pytest.mark.parametrize("first", REQUIRED_FIELDS)
    def test_score_never_rises_as_fields_are_removed(self, ideal_page, first):
        """Test blanking required fields one by one, in every order, never raises the score."""
        rest = [name for name in REQUIRED_FIELDS if name != first]
        for order in permutations(rest):
            page = ideal_page
            previous = analyze_seo(page).score
            for name in (first, *order):
                page = page.copy_with(**{name: ""})
                score = analyze_seo(page).score
                assert score <= previous, f"removing {name} after {order} raised the score"
                previous = score


class TestCategoryScores:
    """Tests for calculate_category_scores."""

    def test_ideal_page(self, ideal_page):
        """Test complete metadata keeps full on-page, technical and social scores."""
        scores = calculate_category_scores(ideal_page)
        assert scores.on_page == 100
        assert scores.technical == 100
        assert scores.social == 100
        assert scores.content <= 100

    def test_empty_page(self, empty_page):
        """Test each category is deducted independently and floored."""
        scores = calculate_category_scores(empty_page)
        assert scores.on_page == 20
        assert scores.technical == 60
        assert scores.content == 30
        assert scores.social == 0

    def test_invalid_url_and_canonical(self):
        """Test technical score for an invalid URL and relative canonical."""
        page = PageMetadata(url="nope", canonical="/nope")
        # -20 invalid canonical, -60 for a zero URL score
        assert calculate_category_scores(page).technical == 20


class TestPriorityIssues:
    """Tests for get_priority_issues."""

    def test_empty_page_order(self, empty_page):
        """Test high-priority issues come first in check order."""
        issues = get_priority_issues(empty_page)
        assert [(i.priority, i.issue) for i in issues] == [
            ("high", "Missing title tag"),
            ("high", "Missing meta description"),
            ("high", "Missing H1 tag"),
            ("medium", "Missing canonical URL"),
            ("medium", "Incomplete Open Graph tags (missing: og:title, og:description, og:image)"),
        ]

    def test_stable_sort_across_priorities(self, ideal_page):
        """Test a medium title issue sorts after a high description issue."""
        page = ideal_page.copy_with(title="x" * 70, description="")
        issues = get_priority_issues(page)
        assert [i.priority for i in issues] == ["high", "medium"]
        assert issues[0].issue == "Missing meta description"
        assert issues[1].issue == "Title length is 70 chars (recommended: 30-60)"
        assert issues[1].category == "on-page"

    def test_ideal_page_has_none(self, ideal_page):
        """Test complete metadata yields no priority issues."""
        assert get_priority_issues(ideal_page) == []


class TestFindDuplicates:
    """Tests for find_duplicates."""

    def test_normalized_titles_grouped(self, sample_pages):
        """Test titles are compared after trimming and lowercasing."""
        assert find_duplicates(sample_pages) == {'Duplicate title: "home | example"': [0, 1]}

    def test_description_label_truncated(self):
        """Test description labels keep the first 50 characters."""
        description = "A" * 60
        pages = [
            PageMetadata(url="https://example.com/a", description=description),
            PageMetadata(url="https://example.com/b", description=description.lower()),
            PageMetadata(url="https://example.com/c", description=description),
        ]
        label = f'Duplicate description: "{"a" * 50}..."'
        assert find_duplicates(pages) == {label: [0, 1, 2]}

    def test_titles_before_descriptions(self):
        """Test title groups are listed before description groups."""
        pages = [
            PageMetadata(url="https://example.com/a", title="Same", description="Same text"),
            PageMetadata(url="https://example.com/b", title="Same", description="Same text"),
        ]
        assert list(find_duplicates(pages)) == [
            'Duplicate title: "same"',
            'Duplicate description: "same text..."',
        ]

    def test_colliding_labels_disambiguated(self):
        """Test groups whose truncated labels match are both kept."""
        prefix = "x" * 50
        pages = [
            PageMetadata(url="https://example.com/1", description=prefix + "one"),
            PageMetadata(url="https://example.com/2", description=prefix + "one"),
            PageMetadata(url="https://example.com/3", description=prefix + "two"),
            PageMetadata(url="https://example.com/4", description=prefix + "two"),
        ]
        duplicates = find_duplicates(pages)
        label = f'Duplicate description: "{prefix}..."'
        assert duplicates == {label: [0, 1], f"{label} (2)": [2, 3]}

    def test_blank_values_ignored(self):
        """Test empty or whitespace titles never form a group."""
        pages = [
            PageMetadata(url="https://example.com/a", title="  "),
            PageMetadata(url="https://example.com/b", title=""),
        ]
        assert find_duplicates(pages) == {}

    def test_empty_input(self):
        """Test no pages gives no duplicates."""
        assert find_duplicates([]) == {}

    def test_reordered_input_gives_same_groups(self):
        """Test reversing the pages keeps the groups and reports input positions."""
        pages = [
            PageMetadata(url="https://example.com/a", title="Shoes", description="Buy shoes here"),
            PageMetadata(url="https://example.com/b", title="Hats", description="Buy shoes here"),
            PageMetadata(url="https://example.com/c", title="shoes ", description="Other"),
            PageMetadata(url="https://example.com/d", title="Hats", description="Unique"),
            PageMetadata(url="https://example.com/e", title="Socks", description="Other"),
        ]
        forward = find_duplicates(pages)
        backward = find_duplicates(list(reversed(pages)))
        last = len(pages) - 1

        def by_urls(groups, source):
            return {label: sorted(source[i].url for i in indices) for label, indices in groups.items()}

        assert by_urls(backward, list(reversed(pages))) == by_urls(forward, pages)
        for label, indices in backward.items():
            assert sorted(last - i for i in indices) == forward[label]
        assert forward == {
            'Duplicate title: "shoes"': [0, 2],
            'Duplicate title: "hats"': [1, 3],
            'Duplicate description: "buy shoes here..."': [0, 1],
            'Duplicate description: "other..."': [2, 4],
        }
