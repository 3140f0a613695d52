"""
Bulk metadata optimization.

Applies text transforms across a selection of pages:
- Patterns: append/prefix text or regex find-and-replace in titles and descriptions
- Templates: generate metadata for product, blog, category and landing pages
- URL patterns: fill {url}, {domain}, {path}, {last-segment}, {first-segment}
- Bulk edits: copy non-empty field values onto every selected page

Every function returns new records; input records are never modified.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Optional
from urllib.parse import urlparse

from .models import METADATA_FIELD_MAP, PageMetadata

logger = logging.getLogger(__name__)


class BulkOptimizationError(Exception):
    """Raised when an unknown pattern or template is requested."""
    pass


@dataclass(frozen=True)
class BulkPattern:
    """A named text transform applied with a user-supplied value."""
    name: str
    description: str
    apply: Callable[[PageMetadata, str], PageMetadata]


@dataclass(frozen=True)
class BulkTemplate:
    """A named generator of metadata fields from a URL and template data."""
    name: str
    description: str
    generate: Callable[[str, dict[str, str]], dict[str, str]]


def _append(existing: str, value: str) -> str:
    return f"{existing} {value}" if existing else value


def _prepend(existing: str, value: str) -> str:
    return f"{value} {existing}" if existing else value


def split_replace_value(value: str) -> Optional[tuple[str, str]]:
    """
    Split an ``old|new`` value on the first ``|``.

    Returns None when either side is empty or no separator is present.
    """
    old, sep, new = value.partition("|")
    if not sep or not old or not new:
        return None
    return old, new


def replace_text(text: str, value: str) -> str:
    """
    Replace every case-insensitive regex match of ``old`` with ``new``.

    ``new`` is inserted literally. Invalid regexes leave the text unchanged.
    """
    parts = split_replace_value(value)
    if parts is None:
        return text
    old, new = parts
    try:
        pattern = re.compile(old, re.IGNORECASE)
    except re.error as e:
        logger.warning(f"Invalid replace pattern {old!r}: {e}")
        return text
    return pattern.sub(lambda _match: new, text)


BULK_PATTERNS: list[BulkPattern] = [
    BulkPattern(
        name="Add Brand to Title",
        description="Append brand name to all titles",
        apply=lambda meta, value: meta.copy_with(title=_append(meta.title, value)),
    ),
    BulkPattern(
        name="Add Brand to Description",
        description="Append brand name to all descriptions",
        apply=lambda meta, value: meta.copy_with(description=_append(meta.description, value)),
    ),
    BulkPattern(
        name="Prefix Title",
        description="Add prefix to all titles",
        apply=lambda meta, value: meta.copy_with(title=_prepend(meta.title, value)),
    ),
    BulkPattern(
        name="Suffix Description",
        description="Add suffix to all descriptions",
        apply=lambda meta, value: meta.copy_with(description=_append(meta.description, value)),
    ),
    BulkPattern(
        name="Replace in Title",
        description="Replace text in all titles (format: old|new)",
        apply=lambda meta, value: meta.copy_with(title=replace_text(meta.title, value)),
    ),
    BulkPattern(
        name="Replace in Description",
        description="Replace text in all descriptions (format: old|new)",
        apply=lambda meta, value: meta.copy_with(
            description=replace_text(meta.description, value)
        ),
    ),
]


def slug_to_title(slug: str) -> str:
    """Turn ``blue-widget`` into ``Blue Widget`` (only first letters change)."""
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-"))


def _path_segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def extract_from_url(url: str) -> str:
    """
    Derive readable text from a URL.

    Uses the last path segment in Title Case, falling back to the first
    label of the host name (without ``www.``), then to "Page".
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return "Page"
    if not parsed.scheme or not parsed.hostname:
        return "Page"

    segments = _path_segments(parsed.path)
    if segments:
        return slug_to_title(segments[-1])
    return parsed.hostname.replace("www.", "", 1).split(".")[0]


def _by(data: dict[str, str], key: str) -> str:
    value = data.get(key, "")
    return f" by {value}" if value else ""


def _product_template(url: str, data: dict[str, str]) -> dict[str, str]:
    product = data.get("productName") or extract_from_url(url)
    by_brand = _by(data, "brand")
    price = data.get("price", "")
    return {
        "title": f"{product}{by_brand}{f' - ${price}' if price else ''} | Buy Online",
        "description": (
            f"Shop {product}{by_brand}{f' for ${price}' if price else ''}. "
            f"{data.get('description') or 'High quality product with fast shipping.'}"
        ),
        "og_title": f"{product}{by_brand}",
        "og_description": f"Shop {product}{by_brand} online. {data.get('description', '')}",
        "h1": product,
    }


def _blog_template(url: str, data: dict[str, str]) -> dict[str, str]:
    post = data.get("postTitle") or extract_from_url(url)
    published = data.get("date") or date.today().isoformat()
    return {
        "title": f"{post}{_by(data, 'author')} | Blog",
        "description": (
            f"Read about {post.lower()}. "
            f"{data.get('description') or 'Latest blog post with insights and updates.'} "
            f"Published {published}."
        ),
        "og_title": post,
        "og_description": f"Read about {post.lower()}. {data.get('description', '')}",
        "h1": post,
    }


def _category_template(url: str, data: dict[str, str]) -> dict[str, str]:
    category = data.get("category") or extract_from_url(url)
    item_count = data.get("itemCount", "")
    return {
        "title": f"{category}{f' ({item_count} items)' if item_count else ''} | Shop Now",
        "description": (
            f"Browse our collection of {category.lower()}. "
            f"{data.get('description') or 'Find the perfect items with fast shipping and great prices.'}"
        ),
        "og_title": category,
        "og_description": f"Browse our collection of {category.lower()}. {data.get('description', '')}",
        "h1": category,
    }


def _landing_template(url: str, data: dict[str, str]) -> dict[str, str]:
    page = data.get("pageTitle") or extract_from_url(url)
    cta = data.get("cta") or "Learn More"
    fallback = f"Discover {page.lower()}. {cta} today!"
    return {
        "title": f"{page} | {data.get('brand') or 'Our Company'}",
        "description": data.get("description") or fallback,
        "og_title": page,
        "og_description": data.get("description") or fallback,
        "h1": page,
    }


BULK_TEMPLATES: list[BulkTemplate] = [
    BulkTemplate("Product Page Template", "Generate metadata for product pages", _product_template),
    BulkTemplate("Blog Post Template", "Generate metadata for blog posts", _blog_template),
    BulkTemplate("Category Page Template", "Generate metadata for category pages", _category_template),
    BulkTemplate("Landing Page Template", "Generate metadata for landing pages", _landing_template),
]


def get_pattern(name: str) -> BulkPattern:
    """Look up a pattern by name (case-insensitive)."""
    for pattern in BULK_PATTERNS:
        if pattern.name.lower() == name.lower():
            return pattern
    raise BulkOptimizationError(
        f"Unknown pattern: {name}. Available: {', '.join(p.name for p in BULK_PATTERNS)}"
    )


def get_template(name: str) -> BulkTemplate:
    """Look up a template by name (case-insensitive)."""
    for template in BULK_TEMPLATES:
        if template.name.lower() == name.lower():
            return template
    raise BulkOptimizationError(
        f"Unknown template: {name}. Available: {', '.join(t.name for t in BULK_TEMPLATES)}"
    )


def _selected(count: int, selection: Optional[Iterable[int]]) -> set[int]:
    """Resolve a selection to valid indices; None selects every page."""
    if selection is None:
        return set(range(count))
    return {index for index in selection if 0 <= index < count}


def apply_bulk_pattern(
    pages: list[PageMetadata],
    pattern: BulkPattern,
    value: str,
    selection: Optional[Iterable[int]] = None,
) -> list[PageMetadata]:
    """
    Apply a pattern to the selected pages.

    Args:
        pages: Current pages.
        pattern: Pattern to apply.
        value: Pattern value (e.g. brand name, or ``old|new``).
        selection: 0-based indices to change; None means all pages.
            Indices outside the list are ignored.

    Returns:
        New list in input order; unselected pages are returned unchanged.
    """
    chosen = _selected(len(pages), selection)
    return [
        pattern.apply(page, value) if index in chosen else page
        for index, page in enumerate(pages)
    ]


def apply_bulk_template(
    pages: list[PageMetadata],
    template: BulkTemplate,
    data: dict[str, str],
    selection: Optional[Iterable[int]] = None,
) -> list[PageMetadata]:
    """Generate template fields for the selected pages and merge them in."""
    chosen = _selected(len(pages), selection)
    return [
        page.copy_with(**template.generate(page.url, data)) if index in chosen else page
        for index, page in enumerate(pages)
    ]


def generate_from_url_pattern(
    url: str,
    title_pattern: str,
    description_pattern: str,
) -> dict[str, str]:
    """
    Fill URL placeholders into title and description patterns.

    Placeholders: ``{url}``, ``{domain}`` (host without ``www.``),
    ``{path}``, ``{last-segment}``, ``{first-segment}``. The H1 is the last
    path segment in Title Case.

    Returns:
        Dict with ``title``, ``description`` and ``h1``.
    """
    try:
        parsed = urlparse(url)
        domain = (parsed.hostname or "").replace("www.", "", 1)
        path = parsed.path or ("/" if parsed.netloc else "")
    except ValueError:
        domain, path = "", ""

    segments = _path_segments(path)
    values = {
        "{url}": url,
        "{domain}": domain,
        "{path}": path,
        "{last-segment}": segments[-1] if segments else "",
        "{first-segment}": segments[0] if segments else "",
    }

    def fill(template: str) -> str:
        for placeholder, value in values.items():
            template = template.replace(placeholder, value)
        return template

    return {
        "title": fill(title_pattern),
        "description": fill(description_pattern),
        "h1": slug_to_title(segments[-1]) if segments else "",
    }


def _normalize_updates(updates: dict[str, Optional[str]]) -> dict[str, str]:
    """Keep trimmed non-empty values, mapping column names to attributes."""
    columns = {column: attr for attr, column in METADATA_FIELD_MAP.items()}
    normalized: dict[str, str] = {}
    for key, value in updates.items():
        attr = columns.get(key, key)
        if attr not in METADATA_FIELD_MAP or attr == "url":
            continue
        if value and value.strip():
            normalized[attr] = value.strip()
    return normalized


def apply_bulk_edit(
    pages: list[PageMetadata],
    selection: Iterable[int],
    updates: dict[str, Optional[str]],
) -> list[PageMetadata]:
    """
    Copy field values onto every selected page.

    Only trimmed, non-empty values are applied; blank values leave the
    existing field untouched. The URL is never changed.

    Args:
        pages: Current pages.
        selection: 0-based indices to edit.
        updates: Field values keyed by attribute name (``og_title``) or
            column name (``ogTitle``).

    Returns:
        New list in input order.
    """
    changes = _normalize_updates(updates)
    chosen = _selected(len(pages), selection)
    if not changes:
        return list(pages)
    return [
        page.copy_with(**changes) if index in chosen else page
        for index, page in enumerate(pages)
    ]
