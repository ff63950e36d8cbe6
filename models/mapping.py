"""
Mapping domain types.

Built-in Azure DevOps fields, the mapping entry variants and the
immutable mapping configuration that the transition functions in
services.mapping_state operate on.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union


# ===================
# ENUMS
# ===================

class WorkItemType(str, Enum):
    """Work item types selectable as a fixed default."""
    TASK = "Task"
    BUG = "Bug"
    USER_STORY = "User Story"
    ISSUE = "Issue"
    FEATURE = "Feature"
    EPIC = "Epic"


class MappingKind(str, Enum):
    """How a field gets its cell value."""
    UNSET = "unset"
    SOURCE_COLUMN = "source_column"
    CUSTOM_VALUE = "custom_value"
    DEFAULT_VALUE = "default_value"


class DecorationSide(str, Enum):
    """Which side of a bound value the decoration text goes."""
    PREPEND = "prepend"
    APPEND = "append"


# ===================
# BUILT-IN FIELDS
# ===================

@dataclass(frozen=True)
class BuiltinField:
    """A fixed Azure DevOps import column."""
    key: str
    label: str
    required: bool


WORK_ITEM_TYPE = "workItemType"
TITLE = "title"

# Declaration order is output column order
BUILTIN_FIELDS: tuple[BuiltinField, ...] = (
    BuiltinField(WORK_ITEM_TYPE, "Work Item Type", True),
    BuiltinField(TITLE, "Title", True),
    BuiltinField("assignedTo", "Assigned To", False),
    BuiltinField("description", "Description", False),
    BuiltinField("priority", "Priority", False),
    BuiltinField("effort", "Effort", False),
)

BUILTIN_FIELDS_BY_KEY: dict[str, BuiltinField] = {f.key: f for f in BUILTIN_FIELDS}

OPTIONAL_FIELDS: tuple[BuiltinField, ...] = tuple(
    f for f in BUILTIN_FIELDS if not f.required
)

DEFAULT_WORK_ITEM_TYPE = WorkItemType.TASK.value


def is_builtin_field(field_key: str) -> bool:
    return field_key in BUILTIN_FIELDS_BY_KEY


# ===================
# MAPPING ENTRY VARIANTS
# ===================

@dataclass(frozen=True)
class Unset:
    """No mapping chosen."""
    kind: ClassVar[MappingKind] = MappingKind.UNSET


@dataclass(frozen=True)
class BoundToColumn:
    """Value comes from a source column (not checked against the headers)."""
    column: str
    kind: ClassVar[MappingKind] = MappingKind.SOURCE_COLUMN


@dataclass(frozen=True)
class LiteralValue:
    """Value comes from the field's stored literal string."""
    kind: ClassVar[MappingKind] = MappingKind.CUSTOM_VALUE


@dataclass(frozen=True)
class FixedDefault:
    """One of the WorkItemType names. Only valid for workItemType."""
    work_item_type: WorkItemType
    kind: ClassVar[MappingKind] = MappingKind.DEFAULT_VALUE


MappingEntry = Union[Unset, BoundToColumn, LiteralValue, FixedDefault]

UNSET = Unset()
LITERAL = LiteralValue()


@dataclass(frozen=True)
class Decoration:
    """Text wrapped around a bound column value."""
    prepend: Optional[str] = None
    append: Optional[str] = None

    def apply(self, value: str) -> str:
        return f"{self.prepend or ''}{value}{self.append or ''}"


# ===================
# CONFIGURATION
# ===================

@dataclass(frozen=True)
class MappingConfiguration:
    """
    Full mapping state for one upload.

    Never mutated in place; services.mapping_state returns a new
    instance for every change. A key missing from ``entries`` is Unset.

    Attributes:
        entries: field key -> mapping entry (Unset entries are absent)
        literals: field key -> stored literal string
        decorations: field key -> prepend/append text
        custom_fields: custom field keys in creation order
    """
    entries: dict[str, MappingEntry] = field(default_factory=dict)
    literals: dict[str, str] = field(default_factory=dict)
    decorations: dict[str, Decoration] = field(default_factory=dict)
    custom_fields: tuple[str, ...] = ()

    def entry_for(self, field_key: str) -> MappingEntry:
        return self.entries.get(field_key, UNSET)

    def literal_for(self, field_key: str) -> str:
        return self.literals.get(field_key, "")

    def decoration_for(self, field_key: str) -> Decoration:
        return self.decorations.get(field_key, Decoration())

    def is_mapped(self, field_key: str) -> bool:
        return not isinstance(self.entry_for(field_key), Unset)

    def is_known_field(self, field_key: str) -> bool:
        return is_builtin_field(field_key) or field_key in self.custom_fields
