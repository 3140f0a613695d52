# -*- coding: utf-8 -*-
"""
Centralized configuration for SEO Metadata Analyzer.

This module provides a single configuration dataclass holding every
threshold used by the analyzers: recommended title and description
lengths, keyword density limits, readability and URL-structure bands,
and content length targets.
"""

from dataclasses import dataclass


@dataclass
class AnalyzerConfig:
    """
    Central configuration for metadata analysis thresholds.

    Attributes:
        title_min_length / title_max_length: Recommended title length range
            in characters (inclusive). Titles outside it lose points.
        description_min_length / description_max_length: Recommended meta
            description length range in characters (inclusive).

        min_word_count: Word count needed for the word-count check to pass.
        word_count_warning: Word count at or above which the check is a
            warning instead of a failure.

        keyword_min_length: Minimum token length considered as a keyword.
        max_secondary_keywords: How many secondary keywords to report.
        stuffing_threshold: Density percentage ABOVE which keyword stuffing
            is flagged. A density equal to the threshold is not stuffing.
        low_density_threshold: Density percentage below which a
            "use the keyword more" suggestion is emitted.

        readability_pass / readability_warning: Flesch score bands for the
            readability checklist item.
        readability_difficult / readability_very_difficult: Flesch score
            bands for content-quality issues.

        url_score_pass / url_score_warning: URL-structure score bands for
            the URL checklist item.

        duplicate_label_length: Characters of a duplicated description kept
            in its human-readable group label.
    """

    # Title and description lengths
    title_min_length: int = 30
    title_max_length: int = 60
    description_min_length: int = 120
    description_max_length: int = 160

    # Content length (metadata word count proxy)
    min_word_count: int = 300
    word_count_warning: int = 150

    # Keyword analysis
    keyword_min_length: int = 4
    max_secondary_keywords: int = 5
    stuffing_threshold: float = 3.0
    low_density_threshold: float = 0.5

    # Readability bands
    readability_pass: float = 60.0
    readability_warning: float = 30.0
    readability_difficult: float = 50.0
    readability_very_difficult: float = 30.0

    # URL structure bands
    url_score_pass: int = 80
    url_score_warning: int = 60

    # Duplicate detection
    duplicate_label_length: int = 50

    def title_length_ok(self, length: int) -> bool:
        """Check whether a title length is inside the recommended range."""
        return self.title_min_length <= length <= self.title_max_length

    def description_length_ok(self, length: int) -> bool:
        """Check whether a description length is inside the recommended range."""
        return self.description_min_length <= length <= self.description_max_length

    def __post_init__(self):
        """Validate configuration values."""
        if self.title_min_length < 1:
            raise ValueError(f"title_min_length must be >= 1, got {self.title_min_length}")
        if self.title_min_length > self.title_max_length:
            raise ValueError(
                f"title_min_length ({self.title_min_length}) must be <= "
                f"title_max_length ({self.title_max_length})"
            )
        if self.description_min_length < 1:
            raise ValueError(
                f"description_min_length must be >= 1, got {self.description_min_length}"
            )
        if self.description_min_length > self.description_max_length:
            raise ValueError(
                f"description_min_length ({self.description_min_length}) must be <= "
                f"description_max_length ({self.description_max_length})"
            )
        if self.word_count_warning > self.min_word_count:
            raise ValueError(
                f"word_count_warning ({self.word_count_warning}) must be <= "
                f"min_word_count ({self.min_word_count})"
            )
        if self.keyword_min_length < 1:
            raise ValueError(f"keyword_min_length must be >= 1, got {self.keyword_min_length}")
        if self.max_secondary_keywords < 0:
            raise ValueError(
                f"max_secondary_keywords must be >= 0, got {self.max_secondary_keywords}"
            )
        if not 0 < self.stuffing_threshold <= 100:
            raise ValueError(
                f"stuffing_threshold must be in (0, 100], got {self.stuffing_threshold}"
            )
        if self.low_density_threshold >= self.stuffing_threshold:
            raise ValueError(
                f"low_density_threshold ({self.low_density_threshold}) must be < "
                f"stuffing_threshold ({self.stuffing_threshold})"
            )
        if self.readability_warning > self.readability_pass:
            raise ValueError(
                f"readability_warning ({self.readability_warning}) must be <= "
                f"readability_pass ({self.readability_pass})"
            )
        if self.url_score_warning > self.url_score_pass:
            raise ValueError(
                f"url_score_warning ({self.url_score_warning}) must be <= "
                f"url_score_pass ({self.url_score_pass})"
            )
        if self.duplicate_label_length < 1:
            raise ValueError(
                f"duplicate_label_length must be >= 1, got {self.duplicate_label_length}"
            )

    @classmethod
    def strict(cls, **overrides) -> "AnalyzerConfig":
        """Create config with tighter bands for mature sites.

        Strict mode:
        - Titles 40-60 characters, descriptions 140-160 characters
        - Stuffing flagged above 2.5% density
        - Readability must reach 70 to pass

        Args:
            **overrides: Override any config values.

        Returns:
            AnalyzerConfig with strict defaults.
        """
        defaults = {
            "title_min_length": 40,
            "description_min_length": 140,
            "stuffing_threshold": 2.5,
            "readability_pass": 70.0,
            "url_score_pass": 90,
        }
        defaults.update(overrides)
        return cls(**defaults)


DEFAULT_CONFIG = AnalyzerConfig()
