"""
Data models for SEO Metadata Analyzer.

This module defines all the core data structures used throughout the application.
"""

from dataclasses import asdict, dataclass, field, replace
from typing import Literal, Optional


ChecklistCategory = Literal["on-page", "technical", "content", "social", "mobile"]
Priority = Literal["high", "medium", "low"]
ChecklistStatus = Literal["pass", "fail", "warning"]

# Rank used to order priority issues (lower sorts first)
PRIORITY_RANK: dict[str, int] = {"high": 0, "medium": 1, "low": 2}


# Attribute name -> external (CSV / JSON) column name, in CSV column order.
METADATA_FIELD_MAP: dict[str, str] = {
    "url": "url",
    "title": "title",
    "description": "description",
    "og_title": "ogTitle",
    "og_description": "ogDescription",
    "og_image": "ogImage",
    "og_url": "ogUrl",
    "twitter_title": "twitterTitle",
    "twitter_description": "twitterDescription",
    "twitter_image": "twitterImage",
    "canonical": "canonical",
    "h1": "h1",
    "keywords": "keywords",
}

CSV_COLUMNS: list[str] = list(METADATA_FIELD_MAP.values())


@dataclass
class PageMetadata:
    """Metadata harvested from (or edited for) a single page."""
    url: str = ""
    title: str = ""
    description: str = ""
    og_title: str = ""
    og_description: str = ""
    og_image: str = ""
    og_url: str = ""
    twitter_title: str = ""
    twitter_description: str = ""
    twitter_image: str = ""
    canonical: str = ""
    h1: str = ""
    keywords: str = ""
    last_modified: Optional[str] = None

    def __post_init__(self) -> None:
        """Normalize missing text fields to empty strings."""
        for name in METADATA_FIELD_MAP:
            if getattr(self, name) is None:
                setattr(self, name, "")

    @classmethod
    def from_dict(cls, data: dict) -> "PageMetadata":
        """
        Build a record from a dict keyed by either attribute or column names.

        Unknown keys are ignored and missing keys default to empty strings.
        """
        values = {}
        for attr, column in METADATA_FIELD_MAP.items():
            value = data.get(column, data.get(attr))
            values[attr] = "" if value is None else str(value)
        last_modified = data.get("lastModified", data.get("last_modified"))
        if last_modified:
            values["last_modified"] = str(last_modified)
        return cls(**values)

    def to_dict(self) -> dict[str, str]:
        """Serialize using the external column names."""
        data = {column: getattr(self, attr) for attr, column in METADATA_FIELD_MAP.items()}
        if self.last_modified:
            data["lastModified"] = self.last_modified
        return data

    def copy_with(self, **changes) -> "PageMetadata":
        """Return a copy with the given attributes replaced."""
        return replace(self, **changes)

    @property
    def is_empty(self) -> bool:
        """True when every field except the URL is blank (missing data)."""
        return not any(
            getattr(self, name) for name in METADATA_FIELD_MAP if name != "url"
        )


@dataclass
class KeywordPlacement:
    """Where the primary keyword appears."""
    in_title: bool = False
    in_h1: bool = False
    in_description: bool = False
    in_first_paragraph: bool = False  # Needs body text, never detected


@dataclass
class KeywordAnalysis:
    """Result of keyword extraction for a page."""
    primary_keyword: Optional[str] = None
    secondary_keywords: list[str] = field(default_factory=list)
    keyword_density: dict[str, float] = field(default_factory=dict)
    keyword_placement: KeywordPlacement = field(default_factory=KeywordPlacement)
    keyword_stuffing: bool = False
    suggestions: list[str] = field(default_factory=list)


@dataclass
class LongTailKeyword:
    """A long-tail keyword idea (no real volume data is available)."""
    keyword: str
    search_volume: Optional[int] = None
    difficulty: Optional[float] = None


@dataclass
class ReadabilityResult:
    """Flesch reading-ease score and its level label."""
    score: float
    level: str


@dataclass
class ContentQualityMetrics:
    """Content quality measured from the short metadata fields."""
    word_count: int = 0
    readability_score: float = 0.0
    readability_level: str = "No content"
    h1_count: int = 0
    h2_count: int = 0
    h3_count: int = 0
    header_hierarchy_valid: bool = False
    image_count: int = 0
    images_with_alt: int = 0
    alt_text_completeness: float = 100.0
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


@dataclass
class URLStructure:
    """URL structure score and findings."""
    score: int
    length: int
    has_keywords: bool = False
    has_hyphens: bool = False
    has_numbers: bool = False
    issues: list[str] = field(default_factory=list)


@dataclass
class CanonicalAnalysis:
    """Canonical URL findings."""
    present: bool = False
    valid: bool = False
    self_referencing: bool = False
    issues: list[str] = field(default_factory=list)


@dataclass
class RobotsMeta:
    """Robots meta findings (undetectable without page HTML)."""
    present: bool = False
    noindex: bool = False
    nofollow: bool = False
    issues: list[str] = field(default_factory=list)


@dataclass
class SchemaMarkup:
    """Structured data findings (undetectable without page HTML)."""
    detected: bool = False
    schema_type: Optional[str] = None
    issues: list[str] = field(default_factory=list)


@dataclass
class MobileViewport:
    """Viewport meta findings (undetectable without page HTML)."""
    present: bool = False
    issues: list[str] = field(default_factory=list)


@dataclass
class TechnicalSEOAnalysis:
    """Aggregated technical SEO checks for a page."""
    url_structure: URLStructure
    canonical_url: CanonicalAnalysis
    robots_meta: RobotsMeta
    schema_markup: SchemaMarkup
    mobile_viewport: MobileViewport
    overall_score: int = 0
    suggestions: list[str] = field(default_factory=list)


@dataclass
class CharacterCount:
    """Current length of a field and its recommended range."""
    current: int
    recommended_min: int
    recommended_max: int

    @property
    def in_range(self) -> bool:
        return self.recommended_min <= self.current <= self.recommended_max


@dataclass
class CategoryScores:
    """Independent 0-100 scores per SEO dimension."""
    on_page: int = 100
    technical: int = 100
    content: int = 100
    social: int = 100


@dataclass
class PriorityIssue:
    """An issue tagged for triage."""
    priority: Priority
    issue: str
    category: str


@dataclass
class SEOAnalysis:
    """Deduction-based SEO score for a single page."""
    score: int
    issues: list[str]
    suggestions: list[str]
    title_count: CharacterCount
    description_count: CharacterCount
    category_scores: CategoryScores = field(default_factory=CategoryScores)
    priority_issues: list[PriorityIssue] = field(default_factory=list)


@dataclass
class ChecklistItem:
    """One pass/fail/warning assertion about an SEO best practice."""
    id: str
    category: ChecklistCategory
    priority: Priority
    title: str
    description: str
    status: ChecklistStatus
    action: str


@dataclass
class SEOChecklist:
    """Checklist items plus their tallies."""
    items: list[ChecklistItem] = field(default_factory=list)
    passed: int = 0
    failed: int = 0
    warnings: int = 0
    score: int = 0

    @property
    def total(self) -> int:
        return len(self.items)


@dataclass
class DuplicateGroup:
    """Pages sharing a normalized title or description."""
    type: str
    page_indices: list[int] = field(default_factory=list)


@dataclass
class PageReport:
    """Report entry for a single page."""
    url: str
    score: int
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass
class ReportSummary:
    """Site-wide summary figures."""
    average_score: int = 0
    pages_with_issues: int = 0
    total_issues: int = 0
    duplicate_content: int = 0


@dataclass
class SEOReport:
    """Full audit report over a set of pages."""
    generated_at: str
    total_pages: int
    summary: ReportSummary
    pages: list[PageReport] = field(default_factory=list)
    duplicates: list[DuplicateGroup] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dict."""
        return asdict(self)


@dataclass
class SitemapUrl:
    """A <url> (or nested <sitemap>) entry of a sitemap."""
    loc: str
    lastmod: Optional[str] = None
    changefreq: Optional[str] = None
    priority: Optional[str] = None


@dataclass
class SessionInfo:
    """Summary of a stored metadata session."""
    id: str
    timestamp: float
    count: int


@dataclass
class AIGeneratedMetadata:
    """Title and description proposed by the AI generator."""
    title: str
    description: str
    suggestions: list[str] = field(default_factory=list)