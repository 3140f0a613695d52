"""
SEO Metadata Analyzer

An SEO health analysis tool for page metadata that:
- Harvests titles, descriptions and social tags from sitemap URLs
- Scores pages, builds checklists and finds duplicate titles/descriptions
- Exports CSV files and HTML/text audit reports
"""

__version__ = "1.0.0"
__author__ = "SEO Metadata Analyzer Team"

from .config import AnalyzerConfig, DEFAULT_CONFIG

from .models import (
    PageMetadata,
    SEOAnalysis,
    KeywordAnalysis,
    ContentQualityMetrics,
    TechnicalSEOAnalysis,
    ChecklistItem,
    SEOChecklist,
    SEOReport,
    SitemapUrl,
    AIGeneratedMetadata,
)

# Analyzers
from .seo_scorer import (
    analyze_seo,
    calculate_category_scores,
    get_priority_issues,
    find_duplicates,
)

from .keyword_analyzer import (
    analyze_keywords,
    extract_keywords,
    calculate_density,
    detect_keyword_stuffing,
    get_long_tail_suggestions,
)

from .content_analyzer import analyze_content_quality
from .technical_seo import analyze_technical_seo, analyze_url_structure
from .checklist import generate_seo_checklist

from .report_generator import (
    generate_seo_report,
    export_report_as_html,
    export_report_as_text,
    write_report,
)

from .bulk_optimizer import (
    BULK_PATTERNS,
    BULK_TEMPLATES,
    apply_bulk_pattern,
    apply_bulk_template,
    apply_bulk_edit,
    generate_from_url_pattern,
)

# I/O boundaries
from .csv_io import export_metadata_to_csv, import_metadata_from_csv

from .storage import (
    MetadataStore,
    InMemoryStore,
    JSONFileStore,
    save_metadata_session,
    load_metadata_session,
    list_metadata_sessions,
    delete_metadata_session,
)

__all__ = [
    # Config
    "AnalyzerConfig",
    "DEFAULT_CONFIG",
    # Models
    "PageMetadata",
    "SEOAnalysis",
    "KeywordAnalysis",
    "ContentQualityMetrics",
    "TechnicalSEOAnalysis",
    "ChecklistItem",
    "SEOChecklist",
    "SEOReport",
    "SitemapUrl",
    "AIGeneratedMetadata",
    # Analyzers
    "analyze_seo",
    "calculate_category_scores",
    "get_priority_issues",
    "find_duplicates",
    "analyze_keywords",
    "extract_keywords",
    "calculate_density",
    "detect_keyword_stuffing",
    "get_long_tail_suggestions",
    "analyze_content_quality",
    "analyze_technical_seo",
    "analyze_url_structure",
    "generate_seo_checklist",
    # Reports
    "generate_seo_report",
    "export_report_as_html",
    "export_report_as_text",
    "write_report",
    # Bulk optimization
    "BULK_PATTERNS",
    "BULK_TEMPLATES",
    "apply_bulk_pattern",
    "apply_bulk_template",
    "apply_bulk_edit",
    "generate_from_url_pattern",
    # I/O
    "export_metadata_to_csv",
    "import_metadata_from_csv",
    "MetadataStore",
    "InMemoryStore",
    "JSONFileStore",
    "save_metadata_session",
    "load_metadata_session",
    "list_metadata_sessions",
    "delete_metadata_session",
]
