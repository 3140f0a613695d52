"""
Sitemap fetching and parsing.

Reads <url> entries (loc, lastmod, changefreq, priority) from a sitemap.
Entries of a sitemap index (<sitemap><loc>) are returned as plain URLs
after the page entries.
"""

import logging
from pathlib import Path
from typing import Union

import requests
from bs4 import BeautifulSoup

from .models import SitemapUrl

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; SEOMetadataAnalyzer/1.0)",
    "Accept": "application/xml,text/xml;q=0.9,*/*;q=0.8",
}


class SitemapError(Exception):
    """Raised when a sitemap cannot be loaded."""
    pass


class SitemapFetchError(SitemapError):
    """Raised when the sitemap cannot be downloaded (network failure or HTTP error)."""
    pass


class SitemapParseError(SitemapError):
    """Raised when the sitemap is not valid XML or lists no URLs."""
    pass


def _child_text(element, name: str):
    child = element.find(name, recursive=False)
    if child is None:
        return None
    text = child.get_text(strip=True)
    return text or None


def parse_sitemap_xml(xml_text: str) -> list[SitemapUrl]:
    """
    Parse sitemap XML.

    Args:
        xml_text: Sitemap or sitemap index document.

    Returns:
        List of SitemapUrl in document order.

    Raises:
        SitemapParseError: If the text is not XML or contains no URLs.
    """
    if not xml_text or not xml_text.lstrip().startswith("<"):
        raise SitemapParseError("Invalid XML format")

    soup = BeautifulSoup(xml_text, "xml")

    urls: list[SitemapUrl] = []
    for url_element in soup.find_all("url"):
        loc = _child_text(url_element, "loc")
        if loc:
            urls.append(SitemapUrl(
                loc=loc,
                lastmod=_child_text(url_element, "lastmod"),
                changefreq=_child_text(url_element, "changefreq"),
                priority=_child_text(url_element, "priority"),
            ))

    for sitemap_element in soup.find_all("sitemap"):
        loc = _child_text(sitemap_element, "loc")
        if loc:
            urls.append(SitemapUrl(loc=loc))

    if not urls:
        raise SitemapParseError("No URLs found in sitemap")

    logger.debug(f"Parsed {len(urls)} sitemap entries")
    return urls


def fetch_sitemap(sitemap_url: str, timeout: int = 30) -> list[SitemapUrl]:
    """
    Download and parse a sitemap.

    Raises:
        SitemapFetchError: On network errors or non-2xx responses.
        SitemapParseError: If the response is not a usable sitemap.
    """
    try:
        response = requests.get(sitemap_url, headers=DEFAULT_HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning(f"Sitemap fetch failed for {sitemap_url}: {e}")
        raise SitemapFetchError(f"Error fetching sitemap: {e}")

    return parse_sitemap_xml(response.text)


def load_sitemap_file(file_path: Union[str, Path]) -> list[SitemapUrl]:
    """
    Read and parse a sitemap file.

    Raises:
        SitemapParseError: If the file cannot be read or parsed.
    """
    path = Path(file_path)
    try:
        xml_text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SitemapParseError(f"Failed to read file: {e}")
    return parse_sitemap_xml(xml_text)


def load_sitemap(source: str, timeout: int = 30) -> list[SitemapUrl]:
    """Load a sitemap from an http(s) URL or a local file path."""
    if source.startswith(("http://", "https://")):
        return fetch_sitemap(source, timeout=timeout)
    return load_sitemap_file(source)
