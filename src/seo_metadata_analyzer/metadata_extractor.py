"""
Page metadata extraction from live URLs.

This module fetches page HTML with requests and hands it to a
``MetadataParser``. The default parser uses BeautifulSoup to read:
- <title>, meta description and keywords
- Open Graph (og:*) and Twitter card (twitter:*) tags
- the canonical link and the first <h1>

Batch extraction processes URLs in order; a page that fails yields an
empty record for its URL instead of stopping the batch.
"""

import logging
import re
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

import requests
from bs4 import BeautifulSoup
from charset_normalizer import from_bytes

from .models import PageMetadata

logger = logging.getLogger(__name__)

# Default headers for web requests
DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

ProgressCallback = Callable[[int, int], None]


class MetadataExtractionError(Exception):
    """Raised when metadata extraction fails."""
    pass


class MetadataFetchError(MetadataExtractionError):
    """Raised when a page cannot be downloaded."""
    pass


class MetadataParseError(MetadataExtractionError):
    """Raised when downloaded content cannot be parsed as HTML."""
    pass


class MetadataParser(ABC):
    """Turns page HTML into a PageMetadata record."""

    @abstractmethod
    def parse(self, html: str, url: str) -> PageMetadata:
        """Parse HTML fetched from url."""


def _normalize_space(text: str) -> str:
    return " ".join(text.split())


class BeautifulSoupMetadataParser(MetadataParser):
    """Metadata parser built on BeautifulSoup with the lxml backend."""

    def __init__(self, features: str = "lxml"):
        self.features = features

    def parse(self, html: str, url: str) -> PageMetadata:
        if not html or not html.strip():
            raise MetadataParseError(f"Empty document received from {url}")

        soup = BeautifulSoup(html, self.features)

        def meta_content(name: str = "", prop: str = "") -> str:
            if prop:
                tag = soup.find("meta", attrs={"property": prop})
                if tag is not None:
                    return (tag.get("content") or "").strip()
            if name:
                tag = soup.find("meta", attrs={"name": name})
                if tag is not None:
                    return (tag.get("content") or "").strip()
            return ""

        title_tag = soup.find("title")
        title = _normalize_space(title_tag.get_text(separator=" ", strip=True)) if title_tag else ""

        # Separator keeps nested inline elements from running together
        h1_tag = soup.find("h1")
        h1 = _normalize_space(h1_tag.get_text(separator=" ", strip=True)) if h1_tag else ""

        canonical_tag = soup.find("link", rel="canonical")
        canonical = (canonical_tag.get("href") or "").strip() if canonical_tag else ""

        return PageMetadata(
            url=url,
            title=title,
            description=meta_content(name="description"),
            og_title=meta_content(prop="og:title"),
            og_description=meta_content(prop="og:description"),
            og_image=meta_content(prop="og:image"),
            og_url=meta_content(prop="og:url"),
            twitter_title=meta_content(name="twitter:title") or meta_content(prop="twitter:title"),
            twitter_description=(
                meta_content(name="twitter:description")
                or meta_content(prop="twitter:description")
            ),
            twitter_image=meta_content(name="twitter:image") or meta_content(prop="twitter:image"),
            canonical=canonical,
            h1=h1,
            keywords=meta_content(name="keywords"),
        )


_META_CHARSET = re.compile(rb'<meta[^>]+charset=["\']?([^"\'>\s;]+)', re.I)


def decode_html(response: requests.Response) -> str:
    """
    Decode an HTTP response body.

    Detection order:
    1. Content-Type header charset
    2. HTML meta charset in the first 8KB
    3. charset_normalizer detection
    4. UTF-8 with replacement characters
    """
    content = response.content

    content_type = response.headers.get("Content-Type", "")
    if "charset=" in content_type.lower():
        charset = content_type.lower().split("charset=")[-1].split(";")[0].strip().strip("\"'")
        try:
            return content.decode(charset)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Header charset {charset} failed: {e}")

    match = _META_CHARSET.search(content[:8192])
    if match:
        charset = match.group(1).decode("ascii", errors="ignore")
        try:
            return content.decode(charset)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Meta charset {charset} failed: {e}")

    best = from_bytes(content).best()
    if best is not None:
        return str(best)

    return content.decode("utf-8", errors="replace")


def fetch_page_html(url: str, timeout: int = 30) -> str:
    """
    Download a page's HTML.

    Raises:
        MetadataFetchError: On network failures or non-2xx responses.
    """
    try:
        response = requests.get(url, headers=DEFAULT_HEADERS, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise MetadataFetchError(
            f"Failed to fetch page (the site may block cross-origin or automated requests): {e}"
        )
    return decode_html(response)


def extract_metadata(
    url: str,
    parser: Optional[MetadataParser] = None,
    timeout: int = 30,
) -> PageMetadata:
    """
    Fetch a page and extract its metadata.

    Args:
        url: Page URL.
        parser: HTML parser; defaults to BeautifulSoupMetadataParser.
        timeout: Request timeout in seconds.

    Returns:
        PageMetadata for the page.

    Raises:
        MetadataFetchError: If the page cannot be downloaded.
        MetadataParseError: If the page cannot be parsed.
    """
    parser = parser or BeautifulSoupMetadataParser()
    html = fetch_page_html(url, timeout=timeout)
    try:
        return parser.parse(html, url)
    except MetadataExtractionError:
        raise
    except Exception as e:
        raise MetadataParseError(f"Error extracting metadata from {url}: {e}")


def extract_metadata_batch(
    urls: list[str],
    on_progress: Optional[ProgressCallback] = None,
    parser: Optional[MetadataParser] = None,
    delay: float = 0.1,
    timeout: int = 30,
) -> list[PageMetadata]:
    """
    Extract metadata for many URLs, in order.

    A failed page is logged and replaced by an empty record carrying only
    its URL, so the result always has one record per input URL.

    Args:
        urls: Page URLs.
        on_progress: Called with (completed, total) after each URL.
        parser: HTML parser shared by all pages.
        delay: Seconds to wait between requests.
        timeout: Per-request timeout in seconds.

    Returns:
        List of PageMetadata aligned with ``urls``.
    """
    parser = parser or BeautifulSoupMetadataParser()
    results: list[PageMetadata] = []
    failures = 0

    for index, url in enumerate(urls):
        try:
            results.append(extract_metadata(url, parser=parser, timeout=timeout))
        except MetadataExtractionError as e:
            failures += 1
            logger.warning(f"Metadata extraction failed for {url}: {e}")
            results.append(PageMetadata(url=url))

        if on_progress:
            on_progress(index + 1, len(urls))

        if delay and index < len(urls) - 1:
            time.sleep(delay)

    logger.info(f"Extracted metadata for {len(urls) - failures}/{len(urls)} pages")
    return results
