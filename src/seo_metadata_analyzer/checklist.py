"""
SEO checklist generation.

Composes the SEO, keyword, content-quality and technical analyzers into
a fixed list of pass/fail/warning items. The checklist is recomputed on
every call and never stored.
"""

from .config import DEFAULT_CONFIG, AnalyzerConfig
from .content_analyzer import analyze_content_quality
from .keyword_analyzer import analyze_keywords
from .models import (
    ChecklistItem,
    ChecklistStatus,
    KeywordAnalysis,
    PageMetadata,
    SEOChecklist,
)
from .seo_scorer import analyze_seo
from .technical_seo import analyze_technical_seo
from .text_utils import round_half_up


def _length_status(current: int, minimum: int, maximum: int) -> ChecklistStatus:
    if minimum <= current <= maximum:
        return "pass"
    return "fail" if current == 0 else "warning"


def _length_action(label: str, current: int, minimum: int, maximum: int, add_text: str) -> str:
    if current == 0:
        return add_text
    if current < minimum:
        return f"Expand {label} to {minimum}-{maximum} characters (currently {current})"
    return f"Shorten {label} to {maximum} characters or less (currently {current})"


def _placement_item(
    item_id: str,
    priority: str,
    where: str,
    where_long: str,
    placed: bool,
    keywords: KeywordAnalysis,
) -> ChecklistItem:
    primary = keywords.primary_keyword
    if primary:
        action = (
            f"Primary keyword is in {where}"
            if placed
            else f'Add primary keyword "{primary}" to {where}'
        )
    else:
        action = f"Identify and add a primary keyword to your {where}"
    return ChecklistItem(
        id=item_id,
        category="on-page",
        priority=priority,
        title=f"Primary Keyword in {where if where == 'H1' else where.capitalize()}",
        description=f"Primary keyword appears in {where_long}",
        status="pass" if primary and placed else "warning",
        action=action,
    )


def _presence_item(
    item_id: str,
    category: str,
    priority: str,
    title: str,
    description: str,
    present: bool,
    present_action: str,
    missing_action: str,
    missing_status: ChecklistStatus = "warning",
) -> ChecklistItem:
    return ChecklistItem(
        id=item_id,
        category=category,
        priority=priority,
        title=title,
        description=description,
        status="pass" if present else missing_status,
        action=present_action if present else missing_action,
    )


def generate_seo_checklist(
    metadata: PageMetadata,
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> SEOChecklist:
    """
    Build the SEO checklist for a page.

    Items are evaluated in a fixed order: on-page, technical, social,
    content, mobile. Schema, viewport, keyword placement and social tags
    produce warnings rather than failures when absent.

    Args:
        metadata: Page metadata (not modified).
        config: Analyzer thresholds.

    Returns:
        SEOChecklist with items, pass/fail/warning tallies and a score equal
        to the rounded percentage of passed items.
    """
    seo = analyze_seo(metadata, config)
    keywords = analyze_keywords(metadata, config)
    quality = analyze_content_quality(metadata, config)
    technical = analyze_technical_seo(metadata)

    title_len = seo.title_count.current
    desc_len = seo.description_count.current

    items: list[ChecklistItem] = []

    # On-page
    items.append(_presence_item(
        "title-present", "on-page", "high",
        "Title Tag Present", "Page has a title tag",
        bool(metadata.title),
        "Title tag is present", "Add a title tag to your page",
        missing_status="fail",
    ))
    items.append(ChecklistItem(
        id="title-length",
        category="on-page",
        priority="high",
        title="Title Length Optimal",
        description=f"Title is between {config.title_min_length}-{config.title_max_length} characters",
        status=_length_status(title_len, config.title_min_length, config.title_max_length),
        action=_length_action(
            "title", title_len, config.title_min_length, config.title_max_length,
            "Add a title tag",
        ),
    ))
    items.append(_presence_item(
        "meta-description", "on-page", "high",
        "Meta Description Present", "Page has a meta description",
        bool(metadata.description),
        "Meta description is present", "Add a meta description tag",
        missing_status="fail",
    ))
    items.append(ChecklistItem(
        id="meta-description-length",
        category="on-page",
        priority="high",
        title="Meta Description Length Optimal",
        description=(
            f"Description is between {config.description_min_length}-"
            f"{config.description_max_length} characters"
        ),
        status=_length_status(
            desc_len, config.description_min_length, config.description_max_length
        ),
        action=_length_action(
            "description", desc_len,
            config.description_min_length, config.description_max_length,
            "Add a meta description",
        ),
    ))

    if quality.h1_count == 1:
        h1_status, h1_action = "pass", "H1 tag is present"
    elif quality.h1_count == 0:
        h1_status, h1_action = "fail", "Add an H1 tag with your primary keyword"
    else:
        h1_status, h1_action = "warning", f"Use only one H1 tag (found {quality.h1_count})"
    items.append(ChecklistItem(
        id="h1-present",
        category="on-page",
        priority="high",
        title="H1 Tag Present",
        description="Page has exactly one H1 tag",
        status=h1_status,
        action=h1_action,
    ))

    placement = keywords.keyword_placement
    items.append(_placement_item(
        "keyword-in-title", "high", "title", "title tag", placement.in_title, keywords,
    ))
    items.append(_placement_item(
        "keyword-in-h1", "medium", "H1", "H1 tag", placement.in_h1, keywords,
    ))
    items.append(_placement_item(
        "keyword-in-description", "medium", "description", "meta description",
        placement.in_description, keywords,
    ))

    items.append(ChecklistItem(
        id="keyword-stuffing",
        category="on-page",
        priority="high",
        title="No Keyword Stuffing",
        description="Keyword density is within acceptable range",
        status="fail" if keywords.keyword_stuffing else "pass",
        action=(
            "Reduce keyword usage to avoid keyword stuffing penalty"
            if keywords.keyword_stuffing
            else "Keyword density is optimal"
        ),
    ))

    # Technical
    items.append(_presence_item(
        "canonical-url", "technical", "high",
        "Canonical URL Present", "Page has a canonical URL",
        technical.canonical_url.present,
        "Canonical URL is present",
        "Add a canonical URL to prevent duplicate content issues",
        missing_status="fail",
    ))

    url_score = technical.url_structure.score
    if url_score >= config.url_score_pass:
        url_status = "pass"
    elif url_score >= config.url_score_warning:
        url_status = "warning"
    else:
        url_status = "fail"
    items.append(ChecklistItem(
        id="url-structure",
        category="technical",
        priority="medium",
        title="URL Structure Optimized",
        description="URL is clean and keyword-rich",
        status=url_status,
        action=(
            technical.url_structure.issues[0]
            if technical.url_structure.issues
            else "URL structure is optimized"
        ),
    ))

    items.append(_presence_item(
        "schema-markup", "technical", "medium",
        "Schema Markup Present", "Page has structured data markup",
        technical.schema_markup.detected,
        "Schema markup is present",
        "Add JSON-LD structured data for better rich snippets",
    ))

    # Social
    items.append(_presence_item(
        "og-title", "social", "medium",
        "Open Graph Title", "Page has og:title tag",
        bool(metadata.og_title),
        "Open Graph title is present", "Add og:title for better social sharing",
    ))
    items.append(_presence_item(
        "og-description", "social", "medium",
        "Open Graph Description", "Page has og:description tag",
        bool(metadata.og_description),
        "Open Graph description is present", "Add og:description for better social sharing",
    ))
    items.append(_presence_item(
        "og-image", "social", "medium",
        "Open Graph Image", "Page has og:image tag",
        bool(metadata.og_image),
        "Open Graph image is present", "Add og:image for better social media previews",
    ))
    items.append(_presence_item(
        "twitter-card", "social", "low",
        "Twitter Card Tags", "Page has twitter:title and twitter:image tags",
        bool(metadata.twitter_title and metadata.twitter_image),
        "Twitter card tags are present",
        "Add twitter:title and twitter:image for better previews on X/Twitter",
    ))

    # Content
    if quality.word_count >= config.min_word_count:
        words_status = "pass"
    elif quality.word_count >= config.word_count_warning:
        words_status = "warning"
    else:
        words_status = "fail"
    items.append(ChecklistItem(
        id="word-count",
        category="content",
        priority="medium",
        title="Adequate Word Count",
        description=f"Page has sufficient content ({config.min_word_count}+ words recommended)",
        status=words_status,
        action=(
            "Word count is adequate"
            if words_status == "pass"
            else f"Add more content (currently {quality.word_count} words, "
                 f"recommended: {config.min_word_count}+)"
        ),
    ))

    if quality.readability_score >= config.readability_pass:
        readability_status = "pass"
    elif quality.readability_score >= config.readability_warning:
        readability_status = "warning"
    else:
        readability_status = "fail"
    items.append(ChecklistItem(
        id="readability",
        category="content",
        priority="low",
        title="Content Readability",
        description="Content is easy to read",
        status=readability_status,
        action=(
            f"Content readability is good ({quality.readability_level})"
            if readability_status == "pass"
            else f"Improve readability (currently {quality.readability_level})"
        ),
    ))

    # Mobile
    items.append(_presence_item(
        "mobile-viewport", "mobile", "high",
        "Mobile Viewport Meta Tag", "Page has mobile viewport meta tag",
        technical.mobile_viewport.present,
        "Mobile viewport tag is present", "Add mobile viewport meta tag for mobile SEO",
    ))

    passed = sum(1 for item in items if item.status == "pass")
    failed = sum(1 for item in items if item.status == "fail")
    warnings = sum(1 for item in items if item.status == "warning")

    return SEOChecklist(
        items=items,
        passed=passed,
        failed=failed,
        warnings=warnings,
        score=round_half_up(passed / len(items) * 100),
    )
