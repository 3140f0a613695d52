"""
Keyword analysis for page metadata.

This module extracts candidate keywords from the metadata text fields:
- Ranks tokens by frequency to pick primary and secondary keywords
- Measures keyword density and detects keyword stuffing
- Checks keyword placement in title, H1 and description
- Generates long-tail keyword ideas
"""

import re
from typing import Optional

from .config import DEFAULT_CONFIG, AnalyzerConfig
from .models import KeywordAnalysis, KeywordPlacement, LongTailKeyword, PageMetadata
from .text_utils import join_fields, rank_tokens, tokenize


# Modifiers combined with a base keyword to build long-tail ideas
LONG_TAIL_MODIFIERS = [
    "how to", "what is", "best", "top", "guide to", "review of",
    "buy", "price", "cost", "cheap", "affordable", "premium",
    "near me", "online", "2024", "2025", "vs", "comparison",
]

_NON_WORD = re.compile(r"[^\w\s]")


def combined_keyword_text(metadata: PageMetadata) -> str:
    """Join the metadata fields used for keyword extraction."""
    return join_fields(
        metadata.title,
        metadata.description,
        metadata.h1,
        metadata.og_title,
        metadata.og_description,
    )


def extract_keywords(text: str, min_length: int = 3) -> list[str]:
    """
    Extract candidate keywords ranked by frequency.

    Args:
        text: Text to analyze.
        min_length: Minimum keyword length.

    Returns:
        Unique keywords, most frequent first (ties in first-seen order).
    """
    return rank_tokens(tokenize(text, min_length=min_length))


def calculate_density(text: str, keyword: str) -> float:
    """
    Calculate keyword density as a percentage.

    A word counts as an occurrence when it equals or contains the keyword.

    Args:
        text: Text to analyze.
        keyword: Single-word keyword.

    Returns:
        Density as percentage (0-100).
    """
    if not text or not keyword:
        return 0.0

    words = _NON_WORD.sub(" ", text.lower()).split()
    if not words:
        return 0.0

    needle = keyword.lower()
    occurrences = sum(1 for word in words if needle in word)
    return occurrences * 100 / len(words)


def detect_keyword_stuffing(
    text: str,
    keyword: str,
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> bool:
    """Check whether density is strictly above the stuffing threshold."""
    return calculate_density(text, keyword) > config.stuffing_threshold


def analyze_placement(metadata: PageMetadata, keyword: str) -> KeywordPlacement:
    """Check where a keyword appears (case-insensitive substring match)."""
    needle = keyword.lower()
    return KeywordPlacement(
        in_title=needle in metadata.title.lower(),
        in_h1=needle in metadata.h1.lower(),
        in_description=needle in metadata.description.lower(),
        in_first_paragraph=False,
    )


def select_primary_keyword(keywords: list[str], title: str) -> Optional[str]:
    """
    Pick the primary keyword.

    The highest-ranked keyword that appears in the title wins; otherwise
    the top-ranked keyword. None when there are no keywords.
    """
    title_lower = title.lower()
    for keyword in keywords:
        if keyword in title_lower:
            return keyword
    return keywords[0] if keywords else None


def analyze_keywords(
    metadata: PageMetadata,
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> KeywordAnalysis:
    """
    Analyze keyword usage across the metadata text fields.

    Args:
        metadata: Page metadata (not modified).
        config: Analyzer thresholds.

    Returns:
        KeywordAnalysis with primary/secondary keywords, densities,
        placement flags, stuffing flag and suggestions.
    """
    combined = combined_keyword_text(metadata)
    keywords = extract_keywords(combined, min_length=config.keyword_min_length)

    primary = select_primary_keyword(keywords, metadata.title)
    secondary = [kw for kw in keywords if kw != primary][:config.max_secondary_keywords]

    density: dict[str, float] = {}
    if primary:
        density[primary] = calculate_density(combined, primary)
    for kw in secondary:
        density[kw] = calculate_density(combined, kw)

    if primary:
        placement = analyze_placement(metadata, primary)
        stuffing = density[primary] > config.stuffing_threshold
    else:
        placement = KeywordPlacement()
        stuffing = False

    suggestions: list[str] = []
    if primary:
        if not placement.in_title:
            suggestions.append(f'Add primary keyword "{primary}" to the title tag')
        if not placement.in_h1:
            suggestions.append(f'Include primary keyword "{primary}" in the H1 tag')
        if not placement.in_description:
            suggestions.append(f'Include primary keyword "{primary}" in the meta description')
        if stuffing:
            suggestions.append(
                f'Warning: Keyword stuffing detected. Reduce usage of "{primary}"'
            )
        if density[primary] < config.low_density_threshold:
            suggestions.append(
                f'Consider increasing usage of primary keyword "{primary}" '
                f"(current density is low)"
            )
    else:
        suggestions.append(
            "No clear primary keyword identified. "
            "Consider adding a focus keyword to your content."
        )

    return KeywordAnalysis(
        primary_keyword=primary,
        secondary_keywords=secondary,
        keyword_density=density,
        keyword_placement=placement,
        keyword_stuffing=stuffing,
        suggestions=suggestions,
    )


def get_long_tail_suggestions(keyword: str) -> list[LongTailKeyword]:
    """
    Build long-tail keyword ideas from a base keyword.

    No search volume or difficulty data is available, so those fields
    stay unset.
    """
    return [LongTailKeyword(keyword=f"{modifier} {keyword}") for modifier in LONG_TAIL_MODIFIERS]
