"""
Naive CSV reader for uploaded work item spreadsheets.

Splits on newlines and commas only. Quoted fields are not understood:
double quotes are stripped and a comma inside a value shifts every
later column in that row. This is a known limitation of the import
format we target, not something to work around here.
"""

from dataclasses import dataclass, field
from typing import Optional
import structlog

from exceptions import EmptyInputError, InvalidFileTypeError

logger = structlog.get_logger(__name__)

CSV_CONTENT_TYPE = "text/csv"
CSV_EXTENSION = ".csv"


# ===================
# DATA CLASSES
# ===================

@dataclass
class CSVParseResult:
    """Headers plus one row dict per data line."""
    headers: list[str] = field(default_factory=list)
    rows: list[dict[str, str]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "headers": self.headers,
            "row_count": self.row_count,
            "column_count": self.column_count,
        }


# ===================
# FILE CHECKS
# ===================

def is_valid_csv_file(filename: Optional[str], content_type: Optional[str]) -> bool:
    """Accept text/csv uploads or anything named *.csv."""
    return content_type == CSV_CONTENT_TYPE or (filename or "").endswith(CSV_EXTENSION)


def ensure_csv_file(filename: Optional[str], content_type: Optional[str]) -> None:
    """
    Reject uploads that fail the CSV check.

    Raises:
        InvalidFileTypeError: If neither MIME type nor extension matches
    """
    if not is_valid_csv_file(filename, content_type):
        logger.warning(
            "csv_upload_rejected",
            filename=filename,
            content_type=content_type
        )
        raise InvalidFileTypeError(filename, content_type)


def decode_upload(content: bytes) -> str:
    """Decode upload bytes as UTF-8, replacing undecodable bytes."""
    return content.decode("utf-8", errors="replace")


# ===================
# PARSING
# ===================

def _split_line(line: str) -> list[str]:
    return [value.strip().replace('"', "") for value in line.split(",")]


def parse_csv(text: str) -> CSVParseResult:
    """
    Parse CSV text into headers and rows.

    Blank and whitespace-only lines are dropped before anything else, so
    a trailing newline never yields an empty row. Short rows are padded
    with empty strings; extra values are ignored.

    Args:
        text: Raw file contents

    Returns:
        CSVParseResult with headers and rows

    Raises:
        EmptyInputError: If no non-blank lines remain
    """
    lines = [line for line in text.split("\n") if line.strip()]

    if not lines:
        raise EmptyInputError()

    headers = _split_line(lines[0])

    rows = []
    for line in lines[1:]:
        values = _split_line(line)
        row = {}
        for index, header in enumerate(headers):
            row[header] = values[index] if index < len(values) else ""
        rows.append(row)

    logger.info(
        "csv_parsed",
        column_count=len(headers),
        row_count=len(rows)
    )

    return CSVParseResult(headers=headers, rows=rows)
