"""
Column mapper API routes.

Upload a CSV, adjust field mappings, preview and export the Azure
DevOps import file. Session ids come from the upload response.
"""

from fastapi import APIRouter, UploadFile, File
from fastapi.responses import JSONResponse, Response
import structlog

from config import get_settings
from exceptions import AppError, UploadTooLargeError
from integrations import analytics
from models.mapping import BUILTIN_FIELDS, WorkItemType
from models.session import (
    MappingUpdate,
    LiteralValueUpdate,
    DecorationUpdate,
    CustomFieldCreate,
    FieldDefinition,
    FieldCatalogResponse,
    SessionResponse,
    PreviewResponse,
    CSVContentResponse,
)
from services.csv_generator import included_columns
from services.session_service import get_session_service

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/mapper", tags=["Mapper"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# FIELD CATALOG
# ===================

@router.get("/fields", response_model=FieldCatalogResponse)
async def list_fields():
    """Built-in fields and the work item types usable as a default."""
    return FieldCatalogResponse(
        fields=[
            FieldDefinition(key=f.key, label=f.label, required=f.required)
            for f in BUILTIN_FIELDS
        ],
        work_item_types=[t.value for t in WorkItemType],
    )


# ===================
# SESSIONS
# ===================

@router.post("/sessions", response_model=SessionResponse, status_code=201)
async def upload_csv(file: UploadFile = File(...)):
    """
    Upload a CSV file and start a mapping session.

    Mappings are pre-filled from the column names.

    Raises:
        415: Not a CSV file
        413: File too large
        422: File is empty
    """
    logger.info(
        "csv_upload_started",
        filename=file.filename,
        content_type=file.content_type
    )

    try:
        limit = get_settings().max_upload_bytes
        if file.size is not None and file.size > limit:
            raise UploadTooLargeError(file.size, limit)

        # One byte past the limit is enough for the size check
        content = await file.read(limit + 1)
        service = get_session_service()
        session_id, session = service.create_session(
            file.filename,
            file.content_type,
            content
        )
        return service.to_response(session_id, session)

    except Exception as e:
        return handle_error(e)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str):
    """Current headers, row count and field mappings."""
    try:
        service = get_session_service()
        return service.to_response(session_id, service.get_session(session_id))
    except Exception as e:
        return handle_error(e)


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str):
    """Discard a session."""
    try:
        get_session_service().delete_session(session_id)
        return Response(status_code=204)
    except Exception as e:
        return handle_error(e)


# ===================
# MAPPING CHANGES
# ===================

@router.put("/sessions/{session_id}/mappings/{field_key}", response_model=SessionResponse)
async def update_mapping(session_id: str, field_key: str, request: MappingUpdate):
    """Point a field at a column, its literal, a default type, or nothing."""
    try:
        service = get_session_service()
        session = service.update_mapping(session_id, field_key, request.target)
        return service.to_response(session_id, session)
    except Exception as e:
        return handle_error(e)


@router.put("/sessions/{session_id}/literals/{field_key}", response_model=SessionResponse)
async def update_literal(session_id: str, field_key: str, request: LiteralValueUpdate):
    """Set the literal used while a field is mapped to CUSTOM_VALUE."""
    try:
        service = get_session_service()
        session = service.update_literal(session_id, field_key, request.value)
        return service.to_response(session_id, session)
    except Exception as e:
        return handle_error(e)


@router.put("/sessions/{session_id}/decorations/{field_key}", response_model=SessionResponse)
async def update_decoration(session_id: str, field_key: str, request: DecorationUpdate):
    """Set prepend or append text for a field."""
    try:
        service = get_session_service()
        session = service.update_decoration(
            session_id,
            field_key,
            request.side,
            request.value
        )
        return service.to_response(session_id, session)
    except Exception as e:
        return handle_error(e)


@router.post(
    "/sessions/{session_id}/custom-fields",
    response_model=SessionResponse,
    status_code=201
)
async def add_custom_field(session_id: str, request: CustomFieldCreate):
    """
    Add a custom output column.

    Raises:
        409: Name is blank or already used
    """
    try:
        service = get_session_service()
        session = service.add_custom_field(session_id, request.name)
        return service.to_response(session_id, session)
    except Exception as e:
        return handle_error(e)


@router.delete(
    "/sessions/{session_id}/custom-fields/{name:path}",
    response_model=SessionResponse
)
async def remove_custom_field(session_id: str, name: str):
    """Remove a custom column. Unknown names are ignored."""
    try:
        service = get_session_service()
        session = service.remove_custom_field(session_id, name)
        return service.to_response(session_id, session)
    except Exception as e:
        return handle_error(e)


# ===================
# OUTPUT
# ===================

@router.get("/sessions/{session_id}/preview", response_model=PreviewResponse)
async def preview(session_id: str):
    """First few source rows and the document as it stands."""
    try:
        service = get_session_service()
        session, csv_content = service.preview(session_id)
        return PreviewResponse(
            session_id=session_id,
            preview_rows=session.rows[:get_settings().preview_row_count],
            columns=[c.label for c in included_columns(session.config)],
            csv_content=csv_content,
        )
    except Exception as e:
        return handle_error(e)


@router.get("/sessions/{session_id}/csv", response_model=CSVContentResponse)
async def get_csv_content(session_id: str):
    """
    Generated document as JSON, for copying to the clipboard.

    Raises:
        422: Title not mapped or no rows
    """
    try:
        export = get_session_service().export_csv(session_id, analytics.CSV_COPIED)
        return CSVContentResponse(
            content=export.content,
            filename=export.filename,
            row_count=export.row_count,
            field_count=export.field_count,
            custom_field_count=export.custom_field_count,
        )
    except Exception as e:
        return handle_error(e)


@router.get("/sessions/{session_id}/download")
async def download_csv(session_id: str):
    """
    Generated document as a file download.

    Raises:
        422: Title not mapped or no rows
    """
    try:
        export = get_session_service().export_csv(session_id, analytics.CSV_DOWNLOADED)
        return Response(
            content=export.content.encode("utf-8"),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
        )
    except Exception as e:
        return handle_error(e)
