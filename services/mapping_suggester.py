"""
Auto-suggest field mappings from uploaded column names.
"""

from typing import Optional
import structlog

from models.mapping import (
    MappingConfiguration,
    BoundToColumn,
    WORK_ITEM_TYPE,
    TITLE,
)

logger = structlog.get_logger(__name__)


# Checked in order per header; the first rule that matches wins for that
# header. A later header matching the same field replaces the earlier one.
SUGGESTION_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (WORK_ITEM_TYPE, ("type", "item")),
    (TITLE, ("title", "name")),
    ("assignedTo", ("assign", "owner")),
    ("description", ("description", "detail")),
    ("priority", ("priority",)),
    ("effort", ("effort", "point", "hour")),
)


def _match_field(header: str) -> Optional[str]:
    lower_header = header.lower()
    for field_key, keywords in SUGGESTION_RULES:
        if any(keyword in lower_header for keyword in keywords):
            return field_key
    return None


def suggest_mappings(headers: list[str]) -> dict[str, str]:
    """
    Suggest a source column for each built-in field.

    Custom fields are never suggested.

    Args:
        headers: Column names in file order

    Returns:
        Dict of field key -> header for the fields that matched
    """
    suggestions: dict[str, str] = {}

    for header in headers:
        field_key = _match_field(header)
        if field_key is not None:
            suggestions[field_key] = header

    logger.debug(
        "mappings_suggested",
        header_count=len(headers),
        suggested=sorted(suggestions)
    )

    return suggestions


def config_from_suggestions(suggestions: dict[str, str]) -> MappingConfiguration:
    """Initial configuration with every suggestion bound to its column."""
    return MappingConfiguration(
        entries={key: BoundToColumn(column) for key, column in suggestions.items()}
    )
