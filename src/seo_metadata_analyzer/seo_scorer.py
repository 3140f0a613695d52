"""
Core SEO scoring and cross-page duplicate detection.

This module:
- Scores a page from 100 downwards using a fixed deduction table
- Computes independent on-page/technical/content/social category scores
- Builds a priority-ordered issue list for triage
- Groups pages sharing a title or description
"""

import logging

from .config import DEFAULT_CONFIG, AnalyzerConfig
from .content_analyzer import analyze_content_quality
from .models import (
    PRIORITY_RANK,
    CategoryScores,
    CharacterCount,
    PageMetadata,
    PriorityIssue,
    SEOAnalysis,
)
from .technical_seo import analyze_canonical, analyze_url_structure
from .text_utils import round_half_up

logger = logging.getLogger(__name__)

# Overall score deductions
TITLE_MISSING_PENALTY = 20
TITLE_LENGTH_PENALTY = 10
DESCRIPTION_MISSING_PENALTY = 20
DESCRIPTION_LENGTH_PENALTY = 10
H1_MISSING_PENALTY = 10
OG_FIELD_PENALTY = 5
CANONICAL_MISSING_PENALTY = 5


def analyze_seo(
    metadata: PageMetadata,
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> SEOAnalysis:
    """
    Score a page's metadata.

    Starts at 100 and deducts: missing title -20 (or length outside the
    recommended range -10), missing description -20 (or length -10),
    missing H1 -10, each missing Open Graph title/description/image -5,
    missing canonical -5. Floors at 0.

    Args:
        metadata: Page metadata (not modified).
        config: Analyzer thresholds.

    Returns:
        SEOAnalysis with score, issues, suggestions, character counts,
        category scores and priority issues.
    """
    issues: list[str] = []
    suggestions: list[str] = []
    score = 100

    title_range = f"{config.title_min_length}-{config.title_max_length}"
    description_range = f"{config.description_min_length}-{config.description_max_length}"

    # Title
    title_length = len(metadata.title)
    if title_length == 0:
        issues.append("Missing title tag")
        score -= TITLE_MISSING_PENALTY
    elif title_length < config.title_min_length:
        issues.append(f"Title too short ({title_length} chars, recommended: {title_range})")
        suggestions.append(f"Expand title to {title_range} characters for better SEO")
        score -= TITLE_LENGTH_PENALTY
    elif title_length > config.title_max_length:
        issues.append(f"Title too long ({title_length} chars, recommended: {title_range})")
        suggestions.append(f"Shorten title to {config.title_max_length} characters or less")
        score -= TITLE_LENGTH_PENALTY

    # Description
    description_length = len(metadata.description)
    if description_length == 0:
        issues.append("Missing meta description")
        score -= DESCRIPTION_MISSING_PENALTY
    elif description_length < config.description_min_length:
        issues.append(
            f"Description too short ({description_length} chars, recommended: {description_range})"
        )
        suggestions.append(f"Expand description to {description_range} characters")
        score -= DESCRIPTION_LENGTH_PENALTY
    elif description_length > config.description_max_length:
        issues.append(
            f"Description too long ({description_length} chars, recommended: {description_range})"
        )
        suggestions.append(
            f"Shorten description to {config.description_max_length} characters or less"
        )
        score -= DESCRIPTION_LENGTH_PENALTY

    # H1
    if not metadata.h1:
        issues.append("Missing H1 tag")
        suggestions.append("Add an H1 tag that summarizes the page content")
        score -= H1_MISSING_PENALTY

    # Open Graph
    if not metadata.og_title:
        issues.append("Missing Open Graph title")
        suggestions.append("Add og:title for better social media sharing")
        score -= OG_FIELD_PENALTY
    if not metadata.og_description:
        issues.append("Missing Open Graph description")
        suggestions.append("Add og:description for better social media sharing")
        score -= OG_FIELD_PENALTY
    if not metadata.og_image:
        issues.append("Missing Open Graph image")
        suggestions.append("Add og:image for better social media previews")
        score -= OG_FIELD_PENALTY

    # Canonical
    if not metadata.canonical:
        issues.append("Missing canonical URL")
        suggestions.append("Add canonical URL to prevent duplicate content issues")
        score -= CANONICAL_MISSING_PENALTY

    return SEOAnalysis(
        score=max(0, score),
        issues=issues,
        suggestions=suggestions,
        title_count=CharacterCount(
            current=title_length,
            recommended_min=config.title_min_length,
            recommended_max=config.title_max_length,
        ),
        description_count=CharacterCount(
            current=description_length,
            recommended_min=config.description_min_length,
            recommended_max=config.description_max_length,
        ),
        category_scores=calculate_category_scores(metadata, config),
        priority_issues=get_priority_issues(metadata, config),
    )


def calculate_category_scores(
    metadata: PageMetadata,
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> CategoryScores:
    """
    Compute the four category scores, each from its own deduction table.

    Category scores are floored at 0 independently and do not add up to
    the overall score.
    """
    # On-page: title, description, H1
    on_page = 100
    if not metadata.title:
        on_page -= 30
    elif not config.title_length_ok(len(metadata.title)):
        on_page -= 15
    if not metadata.description:
        on_page -= 30
    elif not config.description_length_ok(len(metadata.description)):
        on_page -= 15
    if not metadata.h1:
        on_page -= 20

    # Technical: canonical and URL structure
    technical = 100
    canonical = analyze_canonical(metadata)
    if not canonical.present:
        technical -= 40
    elif not canonical.valid:
        technical -= 20
    url_structure = analyze_url_structure(metadata.url)
    technical -= round_half_up((100 - url_structure.score) * 0.6)

    # Content: word count, readability, H1
    content = 100
    quality = analyze_content_quality(metadata, config)
    if quality.word_count < config.min_word_count:
        content -= 20
    if quality.readability_score < config.readability_very_difficult:
        content -= 30
    elif quality.readability_score < config.readability_difficult:
        content -= 15
    if quality.h1_count != 1:
        content -= 20

    # Social: Open Graph and Twitter card fields
    social = 100
    if not metadata.og_title:
        social -= 25
    if not metadata.og_description:
        social -= 25
    if not metadata.og_image:
        social -= 25
    if not metadata.twitter_title:
        social -= 15
    if not metadata.twitter_image:
        social -= 10

    return CategoryScores(
        on_page=max(0, on_page),
        technical=max(0, technical),
        content=max(0, content),
        social=max(0, social),
    )


def get_priority_issues(
    metadata: PageMetadata,
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> list[PriorityIssue]:
    """
    Collect fixed checks as prioritized issues.

    Sorted by priority (high, medium, low); issues of equal priority keep
    the order in which they were checked.
    """
    issues: list[PriorityIssue] = []

    if not metadata.title:
        issues.append(PriorityIssue("high", "Missing title tag", "on-page"))
    elif not config.title_length_ok(len(metadata.title)):
        issues.append(PriorityIssue(
            "medium",
            f"Title length is {len(metadata.title)} chars "
            f"(recommended: {config.title_min_length}-{config.title_max_length})",
            "on-page",
        ))

    if not metadata.description:
        issues.append(PriorityIssue("high", "Missing meta description", "on-page"))
    elif not config.description_length_ok(len(metadata.description)):
        issues.append(PriorityIssue(
            "medium",
            f"Description length is {len(metadata.description)} chars "
            f"(recommended: {config.description_min_length}-{config.description_max_length})",
            "on-page",
        ))

    if not metadata.h1:
        issues.append(PriorityIssue("high", "Missing H1 tag", "on-page"))

    if not metadata.canonical:
        issues.append(PriorityIssue("medium", "Missing canonical URL", "technical"))

    missing_og = [
        tag for tag, value in (
            ("og:title", metadata.og_title),
            ("og:description", metadata.og_description),
            ("og:image", metadata.og_image),
        )
        if not value
    ]
    if missing_og:
        issues.append(PriorityIssue(
            "medium",
            f"Incomplete Open Graph tags (missing: {', '.join(missing_og)})",
            "social",
        ))

    return sorted(issues, key=lambda item: PRIORITY_RANK[item.priority])


def _unique_label(label: str, existing: dict[str, list[int]]) -> str:
    """Disambiguate labels that collide after truncation."""
    if label not in existing:
        return label
    suffix = 2
    while f"{label} ({suffix})" in existing:
        suffix += 1
    return f"{label} ({suffix})"


def find_duplicates(
    pages: list[PageMetadata],
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> dict[str, list[int]]:
    """
    Find pages sharing a title or a meta description.

    Titles and descriptions are normalized with strip() and lower(), then
    grouped by hash in one pass each. Only groups with more than one page
    are reported.

    Args:
        pages: Pages to compare.
        config: Analyzer thresholds (description label length).

    Returns:
        Ordered mapping of a readable label to the input positions of the
        pages in the group (first-seen order). Title groups come first.
    """
    title_groups: dict[str, list[int]] = {}
    description_groups: dict[str, list[int]] = {}

    for index, page in enumerate(pages):
        title = page.title.strip().lower()
        if title:
            title_groups.setdefault(title, []).append(index)
        description = page.description.strip().lower()
        if description:
            description_groups.setdefault(description, []).append(index)

    duplicates: dict[str, list[int]] = {}
    for title, indices in title_groups.items():
        if len(indices) > 1:
            label = _unique_label(f'Duplicate title: "{title}"', duplicates)
            duplicates[label] = indices

    for description, indices in description_groups.items():
        if len(indices) > 1:
            label = _unique_label(
                f'Duplicate description: "{description[:config.duplicate_label_length]}..."',
                duplicates,
            )
            duplicates[label] = indices

    if duplicates:
        logger.info(f"Found {len(duplicates)} duplicate groups across {len(pages)} pages")
    return duplicates
