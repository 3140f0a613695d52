"""
Metadata import and export as CSV.

Columns are fixed and ordered:
url,title,description,ogTitle,ogDescription,ogImage,ogUrl,twitterTitle,
twitterDescription,twitterImage,canonical,h1,keywords

Missing columns on import default to empty strings.
"""

import io
import logging
from pathlib import Path
from typing import Union

import pandas as pd

from .models import CSV_COLUMNS, PageMetadata

logger = logging.getLogger(__name__)


class MetadataCSVError(Exception):
    """Raised when metadata CSV reading or parsing fails."""
    pass


def metadata_to_dataframe(pages: list[PageMetadata]) -> pd.DataFrame:
    """Build a DataFrame with the fixed CSV columns, one row per page."""
    return pd.DataFrame([page.to_dict() for page in pages], columns=CSV_COLUMNS)


def export_metadata_to_csv(pages: list[PageMetadata]) -> str:
    """
    Serialize pages to CSV text.

    Args:
        pages: Pages to export.

    Returns:
        CSV text with a header row in the fixed column order.
    """
    buffer = io.StringIO()
    metadata_to_dataframe(pages).to_csv(buffer, index=False)
    return buffer.getvalue()


def write_metadata_csv(pages: list[PageMetadata], file_path: Union[str, Path]) -> Path:
    """Write pages to a CSV file and return its path."""
    path = Path(file_path)
    path.write_text(export_metadata_to_csv(pages), encoding="utf-8")
    logger.info(f"Exported {len(pages)} pages to {path}")
    return path


def _parse_metadata_dataframe(df: pd.DataFrame) -> list[PageMetadata]:
    """
    Parse a DataFrame into PageMetadata records.

    Raises:
        MetadataCSVError: If the url column is missing.
    """
    if "url" not in df.columns:
        raise MetadataCSVError(
            f"No url column found. Expected columns: {', '.join(CSV_COLUMNS)}. "
            f"Found columns: {', '.join(str(c) for c in df.columns)}"
        )

    for column in CSV_COLUMNS:
        if column not in df.columns:
            df[column] = ""

    df = df[CSV_COLUMNS].fillna("")

    pages = [
        PageMetadata.from_dict({column: str(row[column]) for column in CSV_COLUMNS})
        for _, row in df.iterrows()
    ]
    return pages


def import_metadata_from_csv(source: Union[str, Path, io.StringIO]) -> list[PageMetadata]:
    """
    Load pages from a CSV file or file-like object.

    Args:
        source: Path or text buffer.

    Returns:
        List of PageMetadata in file order. Blank rows are skipped.

    Raises:
        MetadataCSVError: If the file is missing, unreadable or has no url column.
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise MetadataCSVError(f"File not found: {source}")
        source = path

    try:
        df = pd.read_csv(source, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except UnicodeDecodeError:
        try:
            df = pd.read_csv(
                source, dtype=str, keep_default_na=False, skip_blank_lines=True,
                encoding="latin-1",
            )
        except Exception as e:
            raise MetadataCSVError(f"Failed to read CSV file: {e}")
    except pd.errors.EmptyDataError:
        raise MetadataCSVError("CSV file is empty")
    except Exception as e:
        raise MetadataCSVError(f"Failed to parse CSV file: {e}")

    pages = _parse_metadata_dataframe(df)
    logger.info(f"Imported {len(pages)} pages from CSV")
    return pages
