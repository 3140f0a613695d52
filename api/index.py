"""
FastAPI wrapper for SEO Metadata Analyzer - Vercel Serverless Function.

This module exposes metadata analysis, checklists, duplicate detection,
reports and bulk optimization as a REST API for deployment on Vercel.
"""

import logging
from dataclasses import asdict
from enum import Enum
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import BaseModel, Field

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from seo_metadata_analyzer import __version__
from seo_metadata_analyzer.ai_generator import AIGeneratorError, AIMetadataGenerator
from seo_metadata_analyzer.bulk_optimizer import (
    BULK_PATTERNS,
    BULK_TEMPLATES,
    BulkOptimizationError,
    apply_bulk_pattern,
    apply_bulk_template,
    generate_from_url_pattern,
    get_pattern,
    get_template,
)
from seo_metadata_analyzer.checklist import generate_seo_checklist
from seo_metadata_analyzer.content_analyzer import analyze_content_quality
from seo_metadata_analyzer.keyword_analyzer import analyze_keywords, get_long_tail_suggestions
from seo_metadata_analyzer.metadata_extractor import (
    MetadataFetchError,
    MetadataParseError,
    extract_metadata,
)
from seo_metadata_analyzer.models import PageMetadata
from seo_metadata_analyzer.report_generator import (
    export_report_as_html,
    export_report_as_text,
    generate_seo_report,
)
from seo_metadata_analyzer.seo_scorer import analyze_seo, find_duplicates
from seo_metadata_analyzer.sitemap import SitemapFetchError, SitemapParseError, load_sitemap
from seo_metadata_analyzer.technical_seo import analyze_technical_seo

logger = logging.getLogger(__name__)

app = FastAPI(
    title="SEO Metadata Analyzer API",
    description="SEO health analysis for page metadata: scores, checklists, duplicates and reports",
    version=__version__,
)

# Enable CORS for all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class PageInput(BaseModel):
    """Page metadata using the CSV column names."""
    url: str
    title: str = ""
    description: str = ""
    ogTitle: str = ""
    ogDescription: str = ""
    ogImage: str = ""
    ogUrl: str = ""
    twitterTitle: str = ""
    twitterDescription: str = ""
    twitterImage: str = ""
    canonical: str = ""
    h1: str = ""
    keywords: str = ""
    lastModified: Optional[str] = None

    def to_metadata(self) -> PageMetadata:
        return PageMetadata.from_dict(self.model_dump())


class PagesRequest(BaseModel):
    """A list of pages."""
    pages: list[PageInput] = Field(default_factory=list)


class PageRequest(BaseModel):
    """A single page."""
    page: PageInput


class ReportFormatEnum(str, Enum):
    """Report output format."""
    json = "json"
    html = "html"
    text = "text"


class ReportRequest(BaseModel):
    """Request model for report generation."""
    pages: list[PageInput] = Field(default_factory=list)
    format: ReportFormatEnum = Field(ReportFormatEnum.json, description="json, html or text")


class LongTailRequest(BaseModel):
    """Request model for long-tail keyword ideas."""
    keyword: str = Field(..., min_length=1, description="Base keyword")


class BulkPatternRequest(BaseModel):
    """Request model for applying a bulk pattern."""
    pages: list[PageInput]
    pattern: str = Field(..., description="Pattern name, e.g. 'Add Brand to Title'")
    value: str = Field(..., description="Pattern value; 'old|new' for replace patterns")
    selection: Optional[list[int]] = Field(None, description="0-based page indices; all pages when omitted")


class BulkTemplateRequest(BaseModel):
    """Request model for applying a bulk template."""
    pages: list[PageInput]
    template: str = Field(..., description="Template name, e.g. 'Product Page Template'")
    data: dict[str, str] = Field(default_factory=dict)
    selection: Optional[list[int]] = None


class URLPatternRequest(BaseModel):
    """Request model for URL pattern generation."""
    url: str
    title_pattern: str
    description_pattern: str


class ExtractRequest(BaseModel):
    """Request model for live metadata extraction."""
    url: str


class SitemapRequest(BaseModel):
    """Request model for sitemap parsing."""
    sitemap_url: str


class GenerateRequest(BaseModel):
    """Request model for AI metadata generation."""
    page: PageInput
    keywords: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


def _pages(items: list[PageInput]) -> list[PageMetadata]:
    return [item.to_metadata() for item in items]


@app.get("/", response_class=HTMLResponse)
async def root():
    """Landing page pointing at the API docs."""
    return HTMLResponse(
        content="<h1>SEO Metadata Analyzer API</h1><p>Visit <a href='/docs'>/docs</a> for API documentation.</p>"
    )


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
    )


@app.post("/api/analyze")
async def analyze_pages(request: PagesRequest):
    """Score each page and return its keyword, content and technical analysis."""
    results = []
    for page in _pages(request.pages):
        results.append({
            "url": page.url,
            "seo": asdict(analyze_seo(page)),
            "keywords": asdict(analyze_keywords(page)),
            "content": asdict(analyze_content_quality(page)),
            "technical": asdict(analyze_technical_seo(page)),
        })
    return {"pages": results}


@app.post("/api/checklist")
async def checklist(request: PageRequest):
    """Build the SEO checklist for one page."""
    result = generate_seo_checklist(request.page.to_metadata())
    return {**asdict(result), "total": result.total}


@app.post("/api/duplicates")
async def duplicates(request: PagesRequest):
    """Group pages sharing a title or description."""
    groups = find_duplicates(_pages(request.pages))
    return {
        "duplicates": [
            {"type": label, "page_indices": indices} for label, indices in groups.items()
        ]
    }


@app.post("/api/report")
async def report(request: ReportRequest):
    """Generate a report as JSON, or rendered as HTML or plain text."""
    result = generate_seo_report(_pages(request.pages))
    if request.format == ReportFormatEnum.html:
        return HTMLResponse(content=export_report_as_html(result))
    if request.format == ReportFormatEnum.text:
        return PlainTextResponse(content=export_report_as_text(result))
    return result.to_dict()


@app.post("/api/keywords/long-tail")
async def long_tail_keywords(request: LongTailRequest):
    """Suggest long-tail variations of a keyword."""
    return {
        "keyword": request.keyword,
        "suggestions": [asdict(s) for s in get_long_tail_suggestions(request.keyword)],
    }


@app.get("/api/bulk/options")
async def bulk_options():
    """List available bulk patterns and templates."""
    return {
        "patterns": [{"name": p.name, "description": p.description} for p in BULK_PATTERNS],
        "templates": [{"name": t.name, "description": t.description} for t in BULK_TEMPLATES],
    }


@app.post("/api/bulk/pattern")
async def bulk_pattern(request: BulkPatternRequest):
    """Apply a named pattern to the selected pages."""
    try:
        pattern = get_pattern(request.pattern)
    except BulkOptimizationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    pages = apply_bulk_pattern(_pages(request.pages), pattern, request.value, request.selection)
    return {"pages": [page.to_dict() for page in pages]}


@app.post("/api/bulk/template")
async def bulk_template(request: BulkTemplateRequest):
    """Apply a named template to the selected pages."""
    try:
        template = get_template(request.template)
    except BulkOptimizationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    pages = apply_bulk_template(_pages(request.pages), template, request.data, request.selection)
    return {"pages": [page.to_dict() for page in pages]}


@app.post("/api/bulk/url-pattern")
async def bulk_url_pattern(request: URLPatternRequest):
    """Fill URL placeholders into title and description patterns."""
    return generate_from_url_pattern(request.url, request.title_pattern, request.description_pattern)


@app.post("/api/extract")
def extract(request: ExtractRequest):
    """Fetch a live page and extract its metadata."""
    try:
        page = extract_metadata(request.url)
    except MetadataFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except MetadataParseError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return page.to_dict()


@app.post("/api/sitemap")
def sitemap(request: SitemapRequest):
    """Fetch and parse a sitemap."""
    if not request.sitemap_url.startswith(("http://", "https://")):
        raise HTTPException(status_code=400, detail="sitemap_url must be an http(s) URL")
    try:
        entries = load_sitemap(request.sitemap_url)
    except SitemapFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except SitemapParseError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"count": len(entries), "urls": [asdict(entry) for entry in entries]}


@app.post("/api/generate")
def generate(request: GenerateRequest):
    """Propose an AI-written title and description for a page."""
    try:
        generator = AIMetadataGenerator()
        result = generator.generate(request.page.to_metadata(), keywords=request.keywords or None)
    except AIGeneratorError as e:
        logger.error(f"AI generation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return asdict(result)


@app.get("/api/info")
async def api_info():
    """Get API information and usage instructions."""
    return {
        "name": "SEO Metadata Analyzer API",
        "version": __version__,
        "description": "SEO health analysis for page metadata",
        "endpoints": {
            "GET /": "Landing page",
            "GET /api/health": "Health check",
            "POST /api/analyze": "Score pages with keyword, content and technical analysis",
            "POST /api/checklist": "SEO checklist for one page",
            "POST /api/duplicates": "Duplicate titles and descriptions",
            "POST /api/report": "Site report as JSON, HTML or text",
            "POST /api/keywords/long-tail": "Long-tail keyword ideas",
            "GET /api/bulk/options": "Available bulk patterns and templates",
            "POST /api/bulk/pattern": "Apply a bulk pattern to selected pages",
            "POST /api/bulk/template": "Apply a bulk template to selected pages",
            "POST /api/bulk/url-pattern": "Fill URL placeholders into patterns",
            "POST /api/extract": "Extract metadata from a live page",
            "POST /api/sitemap": "Fetch and parse a sitemap",
            "POST /api/generate": "AI-generated title and description (requires ANTHROPIC_API_KEY)",
            "GET /api/info": "This endpoint",
        },
        "documentation": "/docs",
        "openapi": "/openapi.json",
    }
