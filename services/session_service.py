"""
Mapping session service.

Owns the live state of each upload: parsed rows, headers and the current
MappingConfiguration. Every change reads the session, runs one pure
transition from services.mapping_state and writes the result back, so a
failed transition leaves the stored session as it was. Analytics events
are sent only after a change has been stored.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional
import structlog

from config import get_settings
from exceptions import (
    SessionNotFoundError,
    UploadTooLargeError,
    MissingTitleMappingError,
    DuplicateOrEmptyFieldError,
)
from integrations import analytics
from models.mapping import (
    MappingConfiguration,
    Unset,
    DecorationSide,
    BUILTIN_FIELDS,
    BUILTIN_FIELDS_BY_KEY,
    TITLE,
)
from models.session import FieldMappingState, SessionResponse
from parsers.csv_parser import parse_csv, decode_upload, ensure_csv_file
from services import mapping_state
from services import session_store
from services.csv_generator import generate_csv, included_columns, export_filename
from services.mapping_suggester import suggest_mappings, config_from_suggestions

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class MapperSession:
    """One upload and its mapping configuration."""
    filename: str
    file_size: int
    headers: list[str]
    rows: list[dict[str, str]]
    config: MappingConfiguration = field(default_factory=MappingConfiguration)

    @property
    def can_export(self) -> bool:
        return self.config.is_mapped(TITLE) and len(self.rows) > 0


@dataclass(frozen=True)
class CSVExport:
    """A generated document ready for delivery."""
    content: str
    filename: str
    row_count: int
    field_count: int
    custom_field_count: int


class MapperSessionService:
    """
    Session lifecycle and mapping changes.

    Sessions live in services.session_store; this class never keeps
    session state of its own.
    """

    def __init__(self):
        self.settings = get_settings()

    # ===================
    # LIFECYCLE
    # ===================

    def create_session(
        self,
        filename: Optional[str],
        content_type: Optional[str],
        content: bytes
    ) -> tuple[str, MapperSession]:
        """
        Parse an upload and start a new session with suggested mappings.

        Nothing is stored if any check fails.

        Raises:
            InvalidFileTypeError: If the file is not CSV
            UploadTooLargeError: If the file exceeds max_upload_bytes
            EmptyInputError: If the file has no non-blank lines
        """
        ensure_csv_file(filename, content_type)

        if len(content) > self.settings.max_upload_bytes:
            raise UploadTooLargeError(len(content), self.settings.max_upload_bytes)

        parsed = parse_csv(decode_upload(content))
        suggestions = suggest_mappings(parsed.headers)

        session = MapperSession(
            filename=filename or "upload.csv",
            file_size=len(content),
            headers=parsed.headers,
            rows=parsed.rows,
            config=config_from_suggestions(suggestions),
        )
        session_id = session_store.store_session(
            session,
            ttl_minutes=self.settings.session_ttl_minutes
        )

        logger.info(
            "session_created",
            session_id=session_id,
            filename=session.filename,
            row_count=parsed.row_count,
            column_count=parsed.column_count,
            suggested_fields=sorted(suggestions)
        )

        analytics.track_file_uploaded(
            session_id,
            filename=session.filename,
            file_size=session.file_size,
            row_count=parsed.row_count,
            column_count=parsed.column_count,
        )

        return session_id, session

    def get_session(self, session_id: str) -> MapperSession:
        """
        Raises:
            SessionNotFoundError: If missing or expired
        """
        session = session_store.retrieve_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def delete_session(self, session_id: str) -> None:
        self.get_session(session_id)
        session_store.delete_session(session_id)
        logger.info("session_deleted", session_id=session_id)

    def _save_config(
        self,
        session_id: str,
        session: MapperSession,
        config: MappingConfiguration
    ) -> MapperSession:
        updated = replace(session, config=config)
        session_store.replace_session(
            session_id,
            updated,
            ttl_minutes=self.settings.session_ttl_minutes
        )
        return updated

    # ===================
    # MAPPING CHANGES
    # ===================

    def update_mapping(self, session_id: str, field_key: str, target: str) -> MapperSession:
        """Set a field's mapping from its wire-encoded target."""
        session = self.get_session(session_id)
        entry = mapping_state.parse_mapping_target(field_key, target)
        config = mapping_state.set_mapping(session.config, field_key, entry)
        updated = self._save_config(session_id, session, config)

        logger.info(
            "field_mapping_updated",
            session_id=session_id,
            field_key=field_key,
            mapping_type=entry.kind.value
        )

        # Clearing a mapping is not a mapping event
        if not isinstance(entry, Unset):
            builtin = BUILTIN_FIELDS_BY_KEY.get(field_key)
            analytics.track_field_mapped(
                session_id,
                field_type=field_key,
                mapping_type=entry.kind.value,
                is_required=builtin.required if builtin else False,
            )

        return updated

    def update_literal(self, session_id: str, field_key: str, value: str) -> MapperSession:
        session = self.get_session(session_id)
        config = mapping_state.set_literal_value(session.config, field_key, value)
        logger.info("literal_value_updated", session_id=session_id, field_key=field_key)
        return self._save_config(session_id, session, config)

    def update_decoration(
        self,
        session_id: str,
        field_key: str,
        side: DecorationSide,
        value: str
    ) -> MapperSession:
        session = self.get_session(session_id)
        config = mapping_state.set_decoration(session.config, field_key, side, value)
        logger.info(
            "decoration_updated",
            session_id=session_id,
            field_key=field_key,
            side=DecorationSide(side).value
        )
        return self._save_config(session_id, session, config)

    def add_custom_field(self, session_id: str, name: str) -> MapperSession:
        """
        Raises:
            DuplicateOrEmptyFieldError: If the trimmed name is empty or taken
        """
        session = self.get_session(session_id)

        try:
            config = mapping_state.add_custom_field(session.config, name)
        except DuplicateOrEmptyFieldError:
            logger.info("custom_field_rejected", session_id=session_id, name=name)
            raise

        updated = self._save_config(session_id, session, config)

        logger.info(
            "custom_field_added",
            session_id=session_id,
            name=name,
            total_custom_fields=len(config.custom_fields)
        )
        analytics.track_custom_field_added(
            session_id,
            field_name=name,
            total_custom_fields=len(config.custom_fields),
        )

        return updated

    def remove_custom_field(self, session_id: str, name: str) -> MapperSession:
        session = self.get_session(session_id)
        config = mapping_state.remove_custom_field(session.config, name)
        logger.info("custom_field_removed", session_id=session_id, name=name)
        return self._save_config(session_id, session, config)

    # ===================
    # OUTPUT
    # ===================

    def preview(self, session_id: str) -> tuple[MapperSession, str]:
        """Session plus the document generated from all of its rows."""
        session = self.get_session(session_id)
        return session, generate_csv(session.rows, session.config)

    def export_csv(
        self,
        session_id: str,
        event: str,
        on_date: Optional[date] = None
    ) -> CSVExport:
        """
        Generate the document for clipboard copy or download.

        Args:
            session_id: Session to export
            event: analytics.CSV_COPIED or analytics.CSV_DOWNLOADED
            on_date: Date used in the filename (default: today)

        Raises:
            MissingTitleMappingError: If Title is unmapped or there are no rows
        """
        session = self.get_session(session_id)

        if not session.can_export:
            raise MissingTitleMappingError(len(session.rows))

        export = CSVExport(
            content=generate_csv(session.rows, session.config),
            filename=export_filename(on_date),
            row_count=len(session.rows),
            field_count=len(included_columns(session.config)),
            custom_field_count=len(session.config.custom_fields),
        )

        logger.info(
            "csv_exported",
            session_id=session_id,
            delivery=event,
            row_count=export.row_count,
            field_count=export.field_count
        )
        analytics.track_csv_exported(
            event,
            session_id,
            row_count=export.row_count,
            field_count=export.field_count,
            custom_field_count=export.custom_field_count,
        )

        return export

    # ===================
    # SERIALIZATION
    # ===================

    def to_response(self, session_id: str, session: MapperSession) -> SessionResponse:
        """Build the API view of a session."""
        config = session.config
        fields = [
            self._field_state(config, f.key, f.label, f.required, False)
            for f in BUILTIN_FIELDS
        ]
        fields.extend(
            self._field_state(config, name, name, False, True)
            for name in config.custom_fields
        )

        return SessionResponse(
            session_id=session_id,
            filename=session.filename,
            headers=session.headers,
            row_count=len(session.rows),
            custom_fields=list(config.custom_fields),
            fields=fields,
            can_export=session.can_export,
        )

    def _field_state(
        self,
        config: MappingConfiguration,
        field_key: str,
        label: str,
        required: bool,
        is_custom: bool
    ) -> FieldMappingState:
        entry = config.entry_for(field_key)
        decoration = config.decoration_for(field_key)
        return FieldMappingState(
            field_key=field_key,
            label=label,
            required=required,
            is_custom=is_custom,
            mapping_type=entry.kind.value,
            target=mapping_state.describe_mapping_target(entry),
            literal_value=config.literals.get(field_key),
            prepend=decoration.prepend,
            append=decoration.append,
        )


# Singleton instance
_session_service: Optional[MapperSessionService] = None


def get_session_service() -> MapperSessionService:
    """Get or create MapperSessionService instance."""
    global _session_service
    if _session_service is None:
        _session_service = MapperSessionService()
    return _session_service
