"""
Site-wide SEO report generation and export.

Builds an SEOReport over a list of pages and renders it as HTML or plain
text. Both renderers emit the same sections in the same order: Summary,
Duplicate Content (only when duplicates exist), Page-by-Page Analysis.
"""

import html
import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Literal, Optional, Union

from .checklist import generate_seo_checklist
from .config import DEFAULT_CONFIG, AnalyzerConfig
from .content_analyzer import analyze_content_quality
from .keyword_analyzer import analyze_keywords
from .models import DuplicateGroup, PageMetadata, PageReport, ReportSummary, SEOReport
from .seo_scorer import analyze_seo, find_duplicates
from .technical_seo import analyze_technical_seo
from .text_utils import round_half_up

logger = logging.getLogger(__name__)

ReportFormat = Literal["html", "text", "json"]

REPORT_EXTENSIONS = {"html": "html", "text": "txt", "json": "json"}

# Technical suggestions are only promoted to issues when they contain one of these
ISSUE_MARKERS = ("Add", "Missing")


def generate_seo_report(
    pages: list[PageMetadata],
    generated_at: Optional[str] = None,
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> SEOReport:
    """
    Generate an SEO report for a set of pages.

    The summary average uses the deduction-based ``analyze_seo`` score,
    while each page entry carries its checklist score. The two are
    different metrics.

    Args:
        pages: Pages to report on, in display order.
        generated_at: ISO timestamp; defaults to now (UTC).
        config: Analyzer thresholds.

    Returns:
        SEOReport with one page entry per input page, in input order.
    """
    if generated_at is None:
        generated_at = datetime.now(timezone.utc).isoformat()

    analyses = [analyze_seo(page, config) for page in pages]
    average_score = (
        round_half_up(sum(a.score for a in analyses) / len(analyses)) if analyses else 0
    )
    duplicates = [
        DuplicateGroup(type=label, page_indices=indices)
        for label, indices in find_duplicates(pages, config).items()
    ]

    page_reports: list[PageReport] = []
    for page, seo in zip(pages, analyses):
        keywords = analyze_keywords(page, config)
        quality = analyze_content_quality(page, config)
        technical = analyze_technical_seo(page)
        checklist = generate_seo_checklist(page, config)

        issues = [
            *seo.issues,
            *quality.issues,
            *(s for s in technical.suggestions if any(m in s for m in ISSUE_MARKERS)),
        ]
        recommendations = [
            *seo.suggestions,
            *keywords.suggestions,
            *quality.suggestions,
            *technical.suggestions,
        ]
        page_reports.append(PageReport(
            url=page.url,
            score=checklist.score,
            issues=issues,
            recommendations=recommendations,
        ))

    logger.info(f"Generated SEO report for {len(pages)} pages (average score {average_score})")

    return SEOReport(
        generated_at=generated_at,
        total_pages=len(pages),
        summary=ReportSummary(
            average_score=average_score,
            pages_with_issues=sum(1 for a in analyses if a.issues),
            total_issues=sum(len(a.issues) for a in analyses),
            duplicate_content=len(duplicates),
        ),
        pages=page_reports,
        duplicates=duplicates,
    )


def _page_numbers(indices: list[int]) -> str:
    return ", ".join(f"#{index + 1}" for index in indices)


def _score_class(score: int) -> str:
    if score >= 80:
        return "score-high"
    if score >= 60:
        return "score-medium"
    return "score-low"


_HTML_STYLE = """    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
      line-height: 1.6; color: #333; max-width: 1200px; margin: 0 auto; padding: 20px; background: #f5f5f5; }
    .header, .summary-card, .page-card { background: white; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
    .header { padding: 30px; margin-bottom: 20px; }
    .summary { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 20px; margin-bottom: 30px; }
    .summary-card { padding: 20px; }
    .summary-card h3 { margin: 0 0 10px 0; color: #666; font-size: 14px; font-weight: normal; }
    .summary-card .value { font-size: 32px; font-weight: bold; color: #2563eb; }
    .page-card { padding: 20px; margin-bottom: 20px; }
    .page-card h3 { margin: 0 0 10px 0; color: #2563eb; word-break: break-all; }
    .score { display: inline-block; padding: 4px 12px; border-radius: 4px; font-weight: bold; margin-bottom: 15px; }
    .score-high { background: #d1fae5; color: #065f46; }
    .score-medium { background: #fef3c7; color: #92400e; }
    .score-low { background: #fee2e2; color: #991b1b; }
    .issues, .recommendations { margin-top: 15px; }
    .issues h4, .recommendations h4 { margin: 0 0 10px 0; font-size: 14px; }
    ul { margin: 0; padding-left: 20px; }
    li { margin: 5px 0; }
    .duplicates { background: #fef3c7; padding: 15px; border-radius: 8px; margin-bottom: 20px; }"""


def _html_list(heading: str, css_class: str, entries: list[str]) -> list[str]:
    if not entries:
        return []
    lines = [
        f'    <div class="{css_class}">',
        f"      <h4>{heading} ({len(entries)})</h4>",
        "      <ul>",
    ]
    lines.extend(f"        <li>{html.escape(entry)}</li>" for entry in entries)
    lines.extend(["      </ul>", "    </div>"])
    return lines


def export_report_as_html(report: SEOReport) -> str:
    """
    Render a report as a standalone HTML document.

    All report text is HTML-escaped. Output depends only on the report.
    """
    summary = report.summary
    generated = html.escape(report.generated_at)

    lines = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '  <meta charset="UTF-8">',
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"  <title>SEO Audit Report - {generated}</title>",
        "  <style>",
        _HTML_STYLE,
        "  </style>",
        "</head>",
        "<body>",
        '  <div class="header">',
        "    <h1>SEO Audit Report</h1>",
        f"    <p>Generated: {generated}</p>",
        "  </div>",
        "",
        '  <h2 id="summary">Summary</h2>',
        '  <div class="summary">',
    ]
    for label, value in (
        ("Total Pages", str(report.total_pages)),
        ("Average SEO Score", f"{summary.average_score}/100"),
        ("Pages with Issues", str(summary.pages_with_issues)),
        ("Total Issues", str(summary.total_issues)),
        ("Duplicate Content Issues", str(summary.duplicate_content)),
    ):
        lines.extend([
            '    <div class="summary-card">',
            f"      <h3>{label}</h3>",
            f'      <div class="value">{value}</div>',
            "    </div>",
        ])
    lines.append("  </div>")

    if report.duplicates:
        lines.extend([
            "",
            '  <div class="duplicates">',
            '    <h2 id="duplicates">Duplicate Content</h2>',
        ])
        for group in report.duplicates:
            lines.append(
                f"    <p><strong>{html.escape(group.type)}</strong> - "
                f"Found on pages: {_page_numbers(group.page_indices)}</p>"
            )
        lines.append("  </div>")

    lines.extend(["", '  <h2 id="pages">Page-by-Page Analysis</h2>'])
    for page in report.pages:
        lines.extend([
            '  <div class="page-card">',
            f"    <h3>{html.escape(page.url)}</h3>",
            f'    <div class="score {_score_class(page.score)}">SEO Score: {page.score}/100</div>',
        ])
        lines.extend(_html_list("Issues", "issues", page.issues))
        lines.extend(_html_list("Recommendations", "recommendations", page.recommendations))
        lines.append("  </div>")

    lines.extend(["</body>", "</html>", ""])
    return "\n".join(lines)


def export_report_as_text(report: SEOReport) -> str:
    """Render a report as plain text."""
    summary = report.summary
    heavy = "=" * 60
    light = "-" * 60

    lines = [
        "SEO AUDIT REPORT",
        f"Generated: {report.generated_at}",
        heavy,
        "",
        "SUMMARY",
        light,
        f"Total Pages: {report.total_pages}",
        f"Average SEO Score: {summary.average_score}/100",
        f"Pages with Issues: {summary.pages_with_issues}",
        f"Total Issues: {summary.total_issues}",
        f"Duplicate Content Issues: {summary.duplicate_content}",
        "",
    ]

    if report.duplicates:
        lines.extend(["DUPLICATE CONTENT", light])
        lines.extend(
            f"{group.type} - Pages: {_page_numbers(group.page_indices)}"
            for group in report.duplicates
        )
        lines.append("")

    lines.extend(["PAGE-BY-PAGE ANALYSIS", heavy])
    for number, page in enumerate(report.pages, start=1):
        lines.extend([
            "",
            f"Page {number}: {page.url}",
            f"SEO Score: {page.score}/100",
            light,
        ])
        if page.issues:
            lines.append(f"Issues ({len(page.issues)}):")
            lines.extend(f"  {i}. {issue}" for i, issue in enumerate(page.issues, start=1))
        else:
            lines.append("No issues found.")
        if page.recommendations:
            lines.append(f"Recommendations ({len(page.recommendations)}):")
            lines.extend(
                f"  {i}. {rec}" for i, rec in enumerate(page.recommendations, start=1)
            )

    lines.append("")
    return "\n".join(lines)


def render_report(report: SEOReport, fmt: ReportFormat = "html") -> str:
    """Render a report in the requested format."""
    if fmt == "html":
        return export_report_as_html(report)
    if fmt == "text":
        return export_report_as_text(report)
    if fmt == "json":
        return json.dumps(report.to_dict(), indent=2)
    raise ValueError(f"Unsupported report format: {fmt}. Supported formats: html, text, json")


def default_report_filename(fmt: ReportFormat = "html", today: Optional[date] = None) -> str:
    """Suggest a dated filename such as ``seo-audit-report-2025-01-31.html``."""
    if fmt not in REPORT_EXTENSIONS:
        raise ValueError(f"Unsupported report format: {fmt}. Supported formats: html, text, json")
    today = today or date.today()
    return f"seo-audit-report-{today.isoformat()}.{REPORT_EXTENSIONS[fmt]}"


def write_report(
    report: SEOReport,
    output: Union[str, Path],
    fmt: ReportFormat = "html",
) -> Path:
    """
    Write a rendered report to disk.

    Args:
        report: Report to write.
        output: File path, or a directory to write a dated filename into.
        fmt: "html", "text" or "json".

    Returns:
        Path of the written file.
    """
    path = Path(output)
    if path.is_dir():
        path = path / default_report_filename(fmt)

    path.write_text(render_report(report, fmt), encoding="utf-8")
    logger.info(f"Wrote {fmt} report to {path}")
    return path
