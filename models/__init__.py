"""
Domain types and pydantic models for validation and serialization.
"""

from models.base import BaseSchema, RawTextSchema
from models.mapping import (
    WorkItemType,
    MappingKind,
    DecorationSide,
    BuiltinField,
    BUILTIN_FIELDS,
    OPTIONAL_FIELDS,
    WORK_ITEM_TYPE,
    TITLE,
    Unset,
    BoundToColumn,
    LiteralValue,
    FixedDefault,
    MappingEntry,
    Decoration,
    MappingConfiguration,
    UNSET,
    LITERAL,
)
from models.session import (
    MappingUpdate,
    LiteralValueUpdate,
    DecorationUpdate,
    CustomFieldCreate,
    FieldDefinition,
    FieldCatalogResponse,
    FieldMappingState,
    SessionResponse,
    PreviewResponse,
    CSVContentResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "RawTextSchema",

    # Mapping domain
    "WorkItemType",
    "MappingKind",
    "DecorationSide",
    "BuiltinField",
    "BUILTIN_FIELDS",
    "OPTIONAL_FIELDS",
    "WORK_ITEM_TYPE",
    "TITLE",
    "Unset",
    "BoundToColumn",
    "LiteralValue",
    "FixedDefault",
    "MappingEntry",
    "Decoration",
    "MappingConfiguration",
    "UNSET",
    "LITERAL",

    # Session API
    "MappingUpdate",
    "LiteralValueUpdate",
    "DecorationUpdate",
    "CustomFieldCreate",
    "FieldDefinition",
    "FieldCatalogResponse",
    "FieldMappingState",
    "SessionResponse",
    "PreviewResponse",
    "CSVContentResponse",
]
