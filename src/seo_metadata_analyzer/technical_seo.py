"""
Technical SEO analysis for page metadata.

Scores URL structure and canonical URL usage. Robots meta, schema markup
and the mobile viewport tag live in the page HTML, which this analyzer
never fetches, so those checks always report "not detected" with an
explanatory issue.
"""

import logging
import re
from typing import Optional
from urllib.parse import ParseResult, urlparse

from .models import (
    CanonicalAnalysis,
    MobileViewport,
    PageMetadata,
    RobotsMeta,
    SchemaMarkup,
    TechnicalSEOAnalysis,
    URLStructure,
)
from .text_utils import round_half_up

logger = logging.getLogger(__name__)

_KEYWORD_SEGMENT = re.compile(r"[a-z]{3,}")
_LONG_NUMBER = re.compile(r"\d{4,}")
_SPECIAL_CHARS = re.compile(r"[^a-z0-9\-_/]", re.IGNORECASE)

# Credit given to the robots check when it cannot be detected
ROBOTS_UNDETECTED_CREDIT = 50


def parse_absolute_url(url: str) -> Optional[ParseResult]:
    """
    Parse a URL, returning None unless it has a scheme and a host.

    Args:
        url: URL string.

    Returns:
        ParseResult, or None when the URL is not absolute or cannot be parsed.
    """
    if not url or not url.strip():
        return None
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return parsed


def analyze_url_structure(url: str) -> URLStructure:
    """
    Score a URL's structure, starting from 100.

    Deductions: total length over 100 (-20) or over 75 (-10); path over 60
    (-15); no descriptive path segment (-15); underscores (-10); number
    runs of 4+ digits (-5); special characters in the path (-10).

    Args:
        url: Full page URL.

    Returns:
        URLStructure. An unparseable URL scores 0 with "Invalid URL format".
    """
    parsed = parse_absolute_url(url)
    if parsed is None:
        logger.debug(f"Invalid URL for structure analysis: {url!r}")
        return URLStructure(
            score=0,
            length=len(url or ""),
            issues=["Invalid URL format"],
        )

    path = parsed.path or "/"
    issues: list[str] = []
    score = 100

    full_length = len(url)
    if full_length > 100:
        issues.append(f"URL is too long ({full_length} chars, recommended: < 100)")
        score -= 20
    elif full_length > 75:
        issues.append(f"URL is getting long ({full_length} chars)")
        score -= 10

    if len(path) > 60:
        issues.append(f"Path is too long ({len(path)} chars)")
        score -= 15

    has_keywords = any(
        len(segment) > 3 and _KEYWORD_SEGMENT.search(segment.lower())
        for segment in path.split("/")
    )
    if not has_keywords and path != "/":
        issues.append("URL path lacks descriptive keywords")
        score -= 15

    has_hyphens = "-" in path
    if "_" in path:
        issues.append("URL contains underscores (use hyphens instead)")
        score -= 10

    has_numbers = any(ch.isdigit() for ch in path)
    if has_numbers and _LONG_NUMBER.search(path):
        issues.append("URL contains long number sequences (may indicate dynamic URLs)")
        score -= 5

    if _SPECIAL_CHARS.search(path):
        issues.append(
            "URL contains special characters (use only alphanumeric, hyphens, and slashes)"
        )
        score -= 10

    return URLStructure(
        score=max(0, score),
        length=full_length,
        has_keywords=has_keywords,
        has_hyphens=has_hyphens,
        has_numbers=has_numbers,
        issues=issues,
    )


def analyze_canonical(metadata: PageMetadata) -> CanonicalAnalysis:
    """Check canonical URL presence, validity and self-reference."""
    canonical = metadata.canonical
    if not canonical or not canonical.strip():
        return CanonicalAnalysis(issues=["Missing canonical URL"])

    issues: list[str] = []
    valid = parse_absolute_url(canonical) is not None
    if not valid:
        issues.append("Canonical URL is not a valid URL")

    self_referencing = (
        canonical == metadata.url
        or canonical.rstrip("/") == metadata.url.rstrip("/")
    )

    return CanonicalAnalysis(
        present=True,
        valid=valid,
        self_referencing=self_referencing,
        issues=issues,
    )


def analyze_robots_meta(metadata: PageMetadata) -> RobotsMeta:
    """Robots meta tag requires page HTML; always reported as undetected."""
    return RobotsMeta(
        present=False,
        issues=["Unable to detect robots meta tag (requires page HTML)"],
    )


def analyze_schema_markup(metadata: PageMetadata) -> SchemaMarkup:
    """JSON-LD / microdata requires page HTML; always reported as undetected."""
    return SchemaMarkup(
        detected=False,
        issues=["No schema markup detected (add JSON-LD for better rich snippets)"],
    )


def analyze_mobile_viewport(metadata: PageMetadata) -> MobileViewport:
    """Viewport meta tag requires page HTML; always reported as undetected."""
    return MobileViewport(
        present=False,
        issues=["Mobile viewport meta tag not detected (required for mobile SEO)"],
    )


def analyze_technical_seo(metadata: PageMetadata) -> TechnicalSEOAnalysis:
    """
    Run all technical checks for a page.

    The overall score is the rounded mean of the URL score and four
    presence scores. An undetectable robots tag gets partial credit while
    undetectable schema and viewport tags get none.

    Args:
        metadata: Page metadata (not modified).

    Returns:
        TechnicalSEOAnalysis with sub-results, overall score and suggestions.
    """
    url_structure = analyze_url_structure(metadata.url)
    canonical_url = analyze_canonical(metadata)
    robots_meta = analyze_robots_meta(metadata)
    schema_markup = analyze_schema_markup(metadata)
    mobile_viewport = analyze_mobile_viewport(metadata)

    scores = [
        url_structure.score,
        100 if canonical_url.present else 0,
        100 if robots_meta.present else ROBOTS_UNDETECTED_CREDIT,
        100 if schema_markup.detected else 0,
        100 if mobile_viewport.present else 0,
    ]
    overall_score = round_half_up(sum(scores) / len(scores))

    suggestions: list[str] = []
    if not canonical_url.present:
        suggestions.append("Add a canonical URL to prevent duplicate content issues")
    if url_structure.issues:
        suggestions.append("Optimize URL structure: " + url_structure.issues[0])
    if not schema_markup.detected:
        suggestions.append("Add structured data (JSON-LD) for better search result appearance")
    if not mobile_viewport.present:
        suggestions.append("Add mobile viewport meta tag for mobile-friendly SEO")

    return TechnicalSEOAnalysis(
        url_structure=url_structure,
        canonical_url=canonical_url,
        robots_meta=robots_meta,
        schema_markup=schema_markup,
        mobile_viewport=mobile_viewport,
        overall_score=overall_score,
        suggestions=suggestions,
    )
