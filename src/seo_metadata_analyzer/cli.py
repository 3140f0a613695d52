"""
Command-line interface for SEO Metadata Analyzer.

Provides commands to audit page metadata from CSV files, build reports and
harvest metadata from a sitemap.
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress
from rich.table import Table

from .ai_generator import AIGeneratorError, AIMetadataGenerator
from .checklist import generate_seo_checklist
from .csv_io import MetadataCSVError, import_metadata_from_csv, write_metadata_csv
from .keyword_analyzer import get_long_tail_suggestions
from .metadata_extractor import extract_metadata_batch
from .report_generator import generate_seo_report, write_report
from .seo_scorer import analyze_seo, find_duplicates
from .sitemap import SitemapFetchError, SitemapParseError, load_sitemap

console = Console()

STATUS_STYLES = {"pass": "green", "warning": "yellow", "fail": "red"}


def _score_style(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"


def _load_pages(csv_file: Path):
    try:
        return import_metadata_from_csv(csv_file)
    except MetadataCSVError as e:
        console.print(f"[red]CSV error:[/red] {e}")
        sys.exit(1)


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
def main(verbose: bool) -> None:
    """
    SEO Metadata Analyzer - Audit page titles, descriptions and social tags.

    Examples:

        seo-metadata sitemap https://example.com/sitemap.xml -o pages.csv

        seo-metadata analyze pages.csv

        seo-metadata report pages.csv -o report.html
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@main.command()
@click.argument("csv_file", type=click.Path(exists=True, path_type=Path))
def analyze(csv_file: Path) -> None:
    """Score every page in a metadata CSV."""
    pages = _load_pages(csv_file)

    table = Table(title=f"SEO Scores ({len(pages)} pages)", show_header=True)
    table.add_column("#", style="dim")
    table.add_column("URL", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Issues", justify="right")
    table.add_column("Top Issue")

    for number, page in enumerate(pages, start=1):
        result = analyze_seo(page)
        style = _score_style(result.score)
        table.add_row(
            str(number),
            page.url,
            f"[{style}]{result.score}[/{style}]",
            str(len(result.issues)),
            result.issues[0] if result.issues else "-",
        )

    console.print(table)


@main.command()
@click.argument("csv_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--index",
    "-i",
    type=int,
    default=0,
    help="0-based row of the page to check (default: 0).",
)
def checklist(csv_file: Path, index: int) -> None:
    """Show the SEO checklist for one page of a metadata CSV."""
    pages = _load_pages(csv_file)
    if not 0 <= index < len(pages):
        console.print(f"[red]Error:[/red] Index {index} out of range (file has {len(pages)} pages)")
        sys.exit(1)

    page = pages[index]
    result = generate_seo_checklist(page)

    console.print(Panel.fit(
        f"[bold]{page.url}[/bold]\n"
        f"Score: {result.score}/100  "
        f"[green]{result.passed} passed[/green]  "
        f"[red]{result.failed} failed[/red]  "
        f"[yellow]{result.warnings} warnings[/yellow]",
        title="SEO Checklist",
    ))

    table = Table(show_header=True)
    table.add_column("Status")
    table.add_column("Check", style="cyan")
    table.add_column("Category")
    table.add_column("Priority")
    table.add_column("Action")
    for item in result.items:
        style = STATUS_STYLES[item.status]
        table.add_row(
            f"[{style}]{item.status}[/{style}]",
            item.title,
            item.category,
            item.priority,
            item.action,
        )
    console.print(table)


@main.command()
@click.argument("csv_file", type=click.Path(exists=True, path_type=Path))
def duplicates(csv_file: Path) -> None:
    """List pages sharing a title or meta description."""
    pages = _load_pages(csv_file)
    groups = find_duplicates(pages)

    if not groups:
        console.print("[green]No duplicate titles or descriptions found.[/green]")
        return

    table = Table(title="Duplicate Content", show_header=True)
    table.add_column("Duplicate", style="yellow")
    table.add_column("Pages")
    for label, indices in groups.items():
        table.add_row(label, ", ".join(f"#{i + 1} {pages[i].url}" for i in indices))
    console.print(table)


@main.command()
@click.argument("csv_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    required=True,
    help="Output file, or a directory for a dated filename.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["html", "text", "json"]),
    default="html",
    help="Report format (default: html).",
)
def report(csv_file: Path, output: Path, fmt: str) -> None:
    """Write a site-wide SEO audit report."""
    pages = _load_pages(csv_file)
    result = generate_seo_report(pages)
    path = write_report(result, output, fmt)

    summary = result.summary
    console.print(
        f"Average score: [bold]{summary.average_score}/100[/bold], "
        f"{summary.pages_with_issues}/{result.total_pages} pages with issues, "
        f"{summary.duplicate_content} duplicate groups"
    )
    console.print(f"\n[bold green]Success![/bold green] Report saved to: {path}")


@main.command()
@click.argument("source")
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    required=True,
    help="Output path for the metadata CSV.",
)
@click.option(
    "--delay",
    type=float,
    default=0.1,
    help="Seconds to wait between page requests (default: 0.1).",
)
@click.option(
    "--limit",
    type=int,
    default=None,
    help="Only extract the first N URLs.",
)
def sitemap(source: str, output: Path, delay: float, limit) -> None:
    """Extract metadata for every URL in a sitemap (URL or file)."""
    try:
        entries = load_sitemap(source)
    except SitemapFetchError as e:
        console.print(f"[red]Network error:[/red] {e}")
        sys.exit(1)
    except SitemapParseError as e:
        console.print(f"[red]Sitemap error:[/red] {e}")
        sys.exit(1)

    urls = [entry.loc for entry in entries]
    if limit is not None:
        urls = urls[:limit]
    console.print(f"  Found {len(entries)} URLs in sitemap, extracting {len(urls)}")

    with Progress(console=console) as progress:
        task = progress.add_task("Extracting metadata", total=len(urls))
        pages = extract_metadata_batch(
            urls,
            on_progress=lambda done, total: progress.update(task, completed=done),
            delay=delay,
        )

    failed = sum(1 for page in pages if page.is_empty)
    if failed:
        console.print(f"[yellow]{failed} pages returned no metadata[/yellow]")

    path = write_metadata_csv(pages, output)
    console.print(f"\n[bold green]Success![/bold green] Metadata saved to: {path}")


@main.command()
@click.argument("keyword")
def keywords(keyword: str) -> None:
    """Suggest long-tail variations of a keyword."""
    table = Table(title=f'Long-tail ideas for "{keyword}"', show_header=True)
    table.add_column("Keyword", style="green")
    for suggestion in get_long_tail_suggestions(keyword):
        table.add_row(suggestion.keyword)
    console.print(table)


@main.command()
@click.argument("csv_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--index",
    "-i",
    type=int,
    default=0,
    help="0-based row of the page to rewrite (default: 0).",
)
@click.option(
    "--keyword",
    "-k",
    "focus_keywords",
    multiple=True,
    help="Focus keyword (repeatable).",
)
@click.option(
    "--api-key",
    type=str,
    envvar="ANTHROPIC_API_KEY",
    help="Anthropic API key. Can also be set via ANTHROPIC_API_KEY env var.",
)
def generate(csv_file: Path, index: int, focus_keywords: tuple, api_key) -> None:
    """Propose an AI-written title and description for one page."""
    pages = _load_pages(csv_file)
    if not 0 <= index < len(pages):
        console.print(f"[red]Error:[/red] Index {index} out of range (file has {len(pages)} pages)")
        sys.exit(1)

    page = pages[index]
    try:
        generator = AIMetadataGenerator(api_key=api_key)
        result = generator.generate(page, keywords=list(focus_keywords) or None)
    except AIGeneratorError as e:
        console.print(f"[red]AI error:[/red] {e}")
        sys.exit(1)

    table = Table(title=page.url, show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Current")
    table.add_column("Proposed", style="green")
    table.add_row("Title", page.title or "-", f"{result.title} ({len(result.title)} chars)")
    table.add_row(
        "Description",
        page.description or "-",
        f"{result.description} ({len(result.description)} chars)",
    )
    console.print(table)

    for suggestion in result.suggestions:
        console.print(f"  [cyan]*[/cyan] {suggestion}")


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
