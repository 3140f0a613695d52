"""
Pytest fixtures and configuration for SEO Metadata Analyzer tests.
"""

import pytest
from pathlib import Path

from seo_metadata_analyzer.models import PageMetadata


@pytest.fixture
def ideal_page() -> PageMetadata:
    """A page that satisfies every deduction rule of the core scorer."""
    return PageMetadata(
        url="https://example.com/blue-widgets",
        title="Blue Widgets for Every Home | Example Store",
        description=(
            "Shop our range of blue widgets built to last. Free shipping on every "
            "order, easy returns, and friendly support from our widget experts."
        ),
        og_title="Blue Widgets for Every Home",
        og_description="Blue widgets built to last, with free shipping.",
        og_image="https://example.com/images/blue-widget.jpg",
        og_url="https://example.com/blue-widgets",
        twitter_title="Blue Widgets for Every Home",
        twitter_description="Blue widgets built to last.",
        twitter_image="https://example.com/images/blue-widget.jpg",
        canonical="https://example.com/blue-widgets",
        h1="Blue Widgets",
        keywords="blue widgets, widgets",
    )


@pytest.fixture
def empty_page() -> PageMetadata:
    """A page with only its URL known."""
    return PageMetadata(url="https://example.com/about")


@pytest.fixture
def sample_pages(ideal_page: PageMetadata) -> list[PageMetadata]:
    """Three pages, two of which share a title."""
    return [
        PageMetadata(url="https://example.com/", title="Home | Example", h1="Welcome"),
        PageMetadata(url="https://example.com/index.html", title="  home | example "),
        ideal_page,
    ]


@pytest.fixture
def sample_metadata_csv(tmp_path: Path) -> Path:
    """Create a sample metadata CSV file with a subset of columns."""
    csv_path = tmp_path / "pages.csv"
    csv_content = """url,title,description,ogTitle,h1
https://example.com/,Home | Example,Welcome to Example.,Example Home,Welcome
https://example.com/contact,Contact Us,,,Contact
"""
    csv_path.write_text(csv_content)
    return csv_path


@pytest.fixture
def sample_sitemap_xml() -> str:
    """A small sitemap with lastmod/priority fields."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url>
    <loc>https://example.com/</loc>
    <lastmod>2025-01-15</lastmod>
    <changefreq>weekly</changefreq>
    <priority>1.0</priority>
  </url>
  <url>
    <loc>https://example.com/blue-widgets</loc>
  </url>
</urlset>
"""


@pytest.fixture
def sample_page_html() -> str:
    """Page HTML carrying every tag the extractor reads."""
    return """<!DOCTYPE html>
<html>
<head>
  <title>Blue Widgets | Example Store</title>
  <meta name="description" content="Shop blue widgets online.">
  <meta name="keywords" content="widgets, blue">
  <meta property="og:title" content="Blue Widgets">
  <meta property="og:description" content="Widgets that are blue.">
  <meta property="og:image" content="https://example.com/w.jpg">
  <meta property="og:url" content="https://example.com/blue-widgets">
  <meta name="twitter:title" content="Blue Widgets on Twitter">
  <meta property="twitter:image" content="https://example.com/t.jpg">
  <link rel="canonical" href="https://example.com/blue-widgets">
</head>
<body>
  <h1>Blue <em>Widgets</em></h1>
  <h1>Second heading</h1>
</body>
</html>
"""
