"""
Mapping configuration transitions.

Every function takes the current MappingConfiguration and returns the
next one. Nothing here mutates its input or keeps state between calls;
the session layer owns the live configuration and decides what to do
with the result (store it, emit analytics).
"""

from dataclasses import replace
from typing import Union
import structlog

from exceptions import (
    DuplicateOrEmptyFieldError,
    InvalidMappingTargetError,
    UnknownFieldError,
)
from models.mapping import (
    MappingConfiguration,
    MappingEntry,
    Unset,
    BoundToColumn,
    LiteralValue,
    FixedDefault,
    Decoration,
    DecorationSide,
    WorkItemType,
    UNSET,
    LITERAL,
    WORK_ITEM_TYPE,
    DEFAULT_WORK_ITEM_TYPE,
    is_builtin_field,
)

logger = structlog.get_logger(__name__)

# Wire encoding of mapping targets (HTTP shell only)
CUSTOM_VALUE_TARGET = "CUSTOM_VALUE"
DEFAULT_TARGET_PREFIX = "DEFAULT:"


# ===================
# TARGET ENCODING
# ===================

def parse_mapping_target(field_key: str, raw: str) -> MappingEntry:
    """
    Translate a client mapping target into a MappingEntry.

    "" -> Unset, "CUSTOM_VALUE" -> LiteralValue,
    "DEFAULT:<type>" -> FixedDefault, anything else -> BoundToColumn.

    Raises:
        InvalidMappingTargetError: If a DEFAULT: target names an unknown type
    """
    if raw == "":
        return UNSET
    if raw == CUSTOM_VALUE_TARGET:
        return LITERAL
    if raw.startswith(DEFAULT_TARGET_PREFIX):
        type_name = raw[len(DEFAULT_TARGET_PREFIX):]
        try:
            return FixedDefault(WorkItemType(type_name))
        except ValueError:
            raise InvalidMappingTargetError(
                field_key,
                raw,
                f"Unknown work item type: {type_name}"
            )
    return BoundToColumn(raw)


def describe_mapping_target(entry: MappingEntry) -> str:
    """Reverse of parse_mapping_target."""
    if isinstance(entry, BoundToColumn):
        return entry.column
    if isinstance(entry, LiteralValue):
        return CUSTOM_VALUE_TARGET
    if isinstance(entry, FixedDefault):
        return f"{DEFAULT_TARGET_PREFIX}{entry.work_item_type.value}"
    return ""


# ===================
# TRANSITIONS
# ===================

def _require_known_field(config: MappingConfiguration, field_key: str) -> None:
    if not config.is_known_field(field_key):
        raise UnknownFieldError(field_key)


def set_mapping(
    config: MappingConfiguration,
    field_key: str,
    target: MappingEntry
) -> MappingConfiguration:
    """
    Point a field at a column, its literal, a default type, or nothing.

    Switching away from LiteralValue drops the stored literal. Switching
    workItemType to LiteralValue with no literal stored seeds "Task".
    Column names are not checked against the uploaded headers; an
    unknown column simply renders as an empty value.

    Raises:
        UnknownFieldError: If field_key is not built-in or registered
        InvalidMappingTargetError: If FixedDefault is used off workItemType
    """
    _require_known_field(config, field_key)

    if isinstance(target, FixedDefault) and field_key != WORK_ITEM_TYPE:
        raise InvalidMappingTargetError(
            field_key,
            describe_mapping_target(target),
            "Default work item types only apply to Work Item Type"
        )

    entries = dict(config.entries)
    if isinstance(target, Unset):
        entries.pop(field_key, None)
    else:
        entries[field_key] = target

    literals = dict(config.literals)
    if not isinstance(target, LiteralValue):
        literals.pop(field_key, None)
    elif field_key == WORK_ITEM_TYPE and not literals.get(field_key):
        literals[field_key] = DEFAULT_WORK_ITEM_TYPE

    return replace(config, entries=entries, literals=literals)


def set_literal_value(
    config: MappingConfiguration,
    field_key: str,
    value: str
) -> MappingConfiguration:
    """
    Store the literal for a field.

    The mapping entry is untouched, so a literal stored while the field
    is bound to a column only shows up once it switches to LiteralValue.
    """
    _require_known_field(config, field_key)

    literals = dict(config.literals)
    literals[field_key] = value
    return replace(config, literals=literals)


def set_decoration(
    config: MappingConfiguration,
    field_key: str,
    side: Union[DecorationSide, str],
    value: str
) -> MappingConfiguration:
    """Overwrite one side of a field's decoration, keeping the other."""
    _require_known_field(config, field_key)

    side = DecorationSide(side)
    decorations = dict(config.decorations)
    decorations[field_key] = replace(
        config.decoration_for(field_key),
        **{side.value: value}
    )
    return replace(config, decorations=decorations)


def add_custom_field(config: MappingConfiguration, name: str) -> MappingConfiguration:
    """
    Register a custom field and point it at its literal.

    The trimmed name is checked against the registry as stored, and the
    name itself is stored exactly as given. Built-in field keys are
    reserved.

    Raises:
        DuplicateOrEmptyFieldError: If the trimmed name is empty, taken,
            or a built-in field key
    """
    trimmed = name.strip()
    taken = (
        trimmed in config.custom_fields
        or name in config.custom_fields
        or is_builtin_field(trimmed)
        or is_builtin_field(name)
    )

    if not trimmed or taken:
        logger.debug("custom_field_rejected", name=name)
        raise DuplicateOrEmptyFieldError(name)

    entries = dict(config.entries)
    entries[name] = LITERAL

    return replace(
        config,
        entries=entries,
        custom_fields=config.custom_fields + (name,)
    )


def remove_custom_field(config: MappingConfiguration, name: str) -> MappingConfiguration:
    """
    Drop a custom field with its entry, literal and decoration.

    Unknown names (including built-in keys) are ignored.
    """
    if name not in config.custom_fields:
        return config

    entries = dict(config.entries)
    entries.pop(name, None)
    literals = dict(config.literals)
    literals.pop(name, None)
    decorations = dict(config.decorations)
    decorations.pop(name, None)

    return replace(
        config,
        entries=entries,
        literals=literals,
        decorations=decorations,
        custom_fields=tuple(f for f in config.custom_fields if f != name)
    )
