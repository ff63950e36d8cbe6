"""
Azure DevOps import CSV generation.

Turns the uploaded rows plus a MappingConfiguration into the CSV text
the Azure DevOps work item import expects. Pure and deterministic: the
same rows and configuration always give the same document.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional
import structlog

from models.mapping import (
    MappingConfiguration,
    BoundToColumn,
    LiteralValue,
    FixedDefault,
    BUILTIN_FIELDS_BY_KEY,
    OPTIONAL_FIELDS,
    WORK_ITEM_TYPE,
    TITLE,
    DEFAULT_WORK_ITEM_TYPE,
)

logger = structlog.get_logger(__name__)

EXPORT_FILENAME_PREFIX = "azure-devops-import-"


@dataclass(frozen=True)
class OutputColumn:
    """A column that will appear in the generated document."""
    field_key: str
    label: str
    is_custom: bool = False


def included_columns(config: MappingConfiguration) -> list[OutputColumn]:
    """
    Columns in output order.

    Work Item Type and Title always come first. Optional built-ins follow
    in declaration order, then custom fields in creation order; both only
    when their mapping is not Unset.
    """
    columns = [
        OutputColumn(WORK_ITEM_TYPE, BUILTIN_FIELDS_BY_KEY[WORK_ITEM_TYPE].label),
        OutputColumn(TITLE, BUILTIN_FIELDS_BY_KEY[TITLE].label),
    ]

    for builtin in OPTIONAL_FIELDS:
        if config.is_mapped(builtin.key):
            columns.append(OutputColumn(builtin.key, builtin.label))

    for custom_field in config.custom_fields:
        if config.is_mapped(custom_field):
            columns.append(OutputColumn(custom_field, custom_field, is_custom=True))

    return columns


def apply_decoration(value: str, field_key: str, config: MappingConfiguration) -> str:
    """prepend + value + append, missing sides count as empty."""
    return config.decoration_for(field_key).apply(value or "")


def _quote(value: str) -> str:
    # No escaping: embedded quotes or commas corrupt the row
    return f'"{value}"'


def _work_item_type_cell(row: dict[str, str], config: MappingConfiguration) -> str:
    entry = config.entry_for(WORK_ITEM_TYPE)

    if isinstance(entry, LiteralValue):
        return _quote(config.literal_for(WORK_ITEM_TYPE) or DEFAULT_WORK_ITEM_TYPE)
    if isinstance(entry, FixedDefault):
        return _quote(entry.work_item_type.value)
    if isinstance(entry, BoundToColumn):
        value = row.get(entry.column) or DEFAULT_WORK_ITEM_TYPE
        return _quote(apply_decoration(value, WORK_ITEM_TYPE, config))
    return _quote(DEFAULT_WORK_ITEM_TYPE)


def _title_cell(row: dict[str, str], config: MappingConfiguration) -> str:
    entry = config.entry_for(TITLE)

    # Title never renders its literal
    if isinstance(entry, BoundToColumn):
        return _quote(apply_decoration(row.get(entry.column) or "", TITLE, config))
    return _quote("")


def _mapped_cell(
    row: dict[str, str],
    field_key: str,
    config: MappingConfiguration
) -> Optional[str]:
    """
    Cell for an optional or custom field.

    Returns None when the field's literal is empty: the cell is left out
    of the row entirely while its header stays, so that row ends up one
    column short.
    """
    entry = config.entry_for(field_key)

    if isinstance(entry, LiteralValue):
        literal = config.literal_for(field_key)
        return _quote(literal) if literal else None
    if isinstance(entry, BoundToColumn):
        return _quote(apply_decoration(row.get(entry.column) or "", field_key, config))
    return None


def _render_row(
    row: dict[str, str],
    columns: list[OutputColumn],
    config: MappingConfiguration
) -> str:
    cells = [_work_item_type_cell(row, config), _title_cell(row, config)]

    for column in columns[2:]:
        cell = _mapped_cell(row, column.field_key, config)
        if cell is not None:
            cells.append(cell)

    return ",".join(cells)


def generate_csv(rows: list[dict[str, str]], config: MappingConfiguration) -> str:
    """
    Render the import document.

    Args:
        rows: All parsed source rows
        config: Mapping configuration (read only)

    Returns:
        Header line plus one line per row, joined with "\\n" and without
        a trailing newline. Empty string when there are no rows, header
        line included.
    """
    if not rows:
        return ""

    columns = included_columns(config)
    lines = [",".join(column.label for column in columns)]
    lines.extend(_render_row(row, columns, config) for row in rows)

    logger.debug(
        "csv_generated",
        row_count=len(rows),
        column_count=len(columns)
    )

    return "\n".join(lines)


def export_filename(on_date: Optional[date] = None) -> str:
    """azure-devops-import-YYYY-MM-DD.csv for the given (default: today) date."""
    on_date = on_date or date.today()
    return f"{EXPORT_FILENAME_PREFIX}{on_date.isoformat()}.csv"
