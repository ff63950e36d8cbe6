"""
Mapping session schemas for validation and serialization.

A session is one uploaded file plus its live mapping configuration.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema, RawTextSchema
from models.mapping import DecorationSide


# ===================
# REQUESTS
# ===================

class MappingUpdate(RawTextSchema):
    """
    Change where a field gets its value.

    target: "" clears the mapping, "CUSTOM_VALUE" uses the field's
    literal, "DEFAULT:<type>" picks a fixed work item type (Work Item
    Type only), anything else is a source column name.
    """

    target: str = Field(..., description="Column name or mapping marker")


class LiteralValueUpdate(RawTextSchema):
    """Set the literal used when a field is mapped to CUSTOM_VALUE."""

    value: str = Field(..., max_length=1000, description="Literal cell value")


class DecorationUpdate(RawTextSchema):
    """Set text placed before or after a bound column value."""

    side: DecorationSide = Field(..., description="prepend or append")
    value: str = Field(..., max_length=500, description="Decoration text")


class CustomFieldCreate(RawTextSchema):
    """Register a user-defined output column."""

    name: str = Field(..., max_length=255, description="Custom field name, used as the column header")


# ===================
# RESPONSES
# ===================

class FieldDefinition(BaseSchema):
    """Built-in Azure DevOps field."""

    key: str
    label: str
    required: bool


class FieldCatalogResponse(BaseSchema):
    """Built-in fields and selectable default work item types."""

    fields: list[FieldDefinition]
    work_item_types: list[str]


class FieldMappingState(RawTextSchema):
    """Current mapping of one field as the client sees it."""

    field_key: str
    label: str
    required: bool
    is_custom: bool
    mapping_type: str = Field(..., description="unset, source_column, custom_value or default_value")
    target: str = Field(..., description="Encoded target, see MappingUpdate")
    literal_value: Optional[str] = None
    prepend: Optional[str] = None
    append: Optional[str] = None


class SessionResponse(RawTextSchema):
    """Full session state."""

    session_id: str
    filename: str
    headers: list[str]
    row_count: int
    custom_fields: list[str]
    fields: list[FieldMappingState]
    can_export: bool


class PreviewResponse(RawTextSchema):
    """First source rows plus the document generated from all rows."""

    session_id: str
    preview_rows: list[dict[str, str]]
    columns: list[str]
    csv_content: str


class CSVContentResponse(RawTextSchema):
    """Generated document for clipboard copy."""

    content: str
    filename: str
    row_count: int
    field_count: int
    custom_field_count: int
