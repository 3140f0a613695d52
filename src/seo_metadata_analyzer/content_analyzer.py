"""
Content quality analysis for page metadata.

Only the short metadata fields are available, so word count, readability
and heading structure are measured on those fields as a proxy for the
page body. A page with a full body of text will usually score better
once analyzed from its HTML.
"""

from .config import DEFAULT_CONFIG, AnalyzerConfig
from .models import ContentQualityMetrics, PageMetadata
from .text_utils import count_words, flesch_readability, join_fields


def count_metadata_words(metadata: PageMetadata) -> int:
    """Count words across title, description, H1 and Open Graph text."""
    return count_words(join_fields(
        metadata.title,
        metadata.description,
        metadata.h1,
        metadata.og_title,
        metadata.og_description,
    ))


def analyze_content_quality(
    metadata: PageMetadata,
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> ContentQualityMetrics:
    """
    Analyze content quality from metadata.

    Args:
        metadata: Page metadata (not modified).
        config: Analyzer thresholds.

    Returns:
        ContentQualityMetrics with counts, readability, issues and suggestions.
    """
    readability = flesch_readability(join_fields(metadata.title, metadata.description, metadata.h1))
    word_count = count_metadata_words(metadata)

    # H1 text is the only heading we know about
    h1_count = 1 if metadata.h1 else 0
    header_hierarchy_valid = h1_count == 1

    # No image data without page HTML
    image_count = 0
    images_with_alt = 0
    alt_text_completeness = (images_with_alt / image_count) * 100 if image_count > 0 else 100.0

    issues: list[str] = []
    suggestions: list[str] = []

    if word_count < config.min_word_count:
        issues.append(f"Low word count (less than {config.min_word_count} words recommended)")
        suggestions.append("Consider adding more content to improve SEO and user engagement")

    if readability.score < config.readability_very_difficult:
        issues.append("Content is very difficult to read")
        suggestions.append("Simplify language and sentence structure for better readability")
    elif readability.score < config.readability_difficult:
        issues.append("Content is difficult to read")
        suggestions.append("Consider simplifying language for broader audience")

    if h1_count == 0:
        issues.append("Missing H1 tag")
        suggestions.append("Add an H1 tag with your primary keyword")
    elif h1_count > 1:
        issues.append("Multiple H1 tags found (should be only one)")
        suggestions.append("Use only one H1 tag per page, use H2-H6 for subheadings")

    if image_count > 0 and alt_text_completeness < 100:
        issues.append(f"{image_count - images_with_alt} images missing alt text")
        suggestions.append("Add descriptive alt text to all images for accessibility and SEO")

    return ContentQualityMetrics(
        word_count=word_count,
        readability_score=readability.score,
        readability_level=readability.level,
        h1_count=h1_count,
        h2_count=0,
        h3_count=0,
        header_hierarchy_valid=header_hierarchy_valid,
        image_count=image_count,
        images_with_alt=images_with_alt,
        alt_text_completeness=alt_text_completeness,
        issues=issues,
        suggestions=suggestions,
    )
