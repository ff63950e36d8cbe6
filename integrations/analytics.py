"""
PostHog integration for product analytics.

Sends capture events over the PostHog HTTP API. Every call is
best-effort: failures are logged and never reach the caller.
"""

from typing import Any, Optional
import requests
import structlog

from config import get_settings

logger = structlog.get_logger(__name__)

# Event names
FILE_UPLOADED = "file_uploaded"
FIELD_MAPPED = "field_mapped"
CUSTOM_FIELD_ADDED = "custom_field_added"
CSV_COPIED = "csv_copied_to_clipboard"
CSV_DOWNLOADED = "csv_file_downloaded"


def capture(event: str, distinct_id: str, properties: Optional[dict[str, Any]] = None) -> bool:
    """
    Send one event to PostHog.

    Args:
        event: Event name
        distinct_id: Id to attribute the event to (the session id)
        properties: Event properties

    Returns:
        True if PostHog accepted the event, False if analytics is
        disabled or the call failed
    """
    settings = get_settings()

    if not settings.analytics_enabled:
        logger.debug("analytics_disabled_skipping_capture", analytics_event=event)
        return False

    url = f"{settings.posthog_host.rstrip('/')}/capture/"
    payload = {
        "api_key": settings.posthog_api_key,
        "event": event,
        "distinct_id": distinct_id,
        "properties": properties or {},
    }

    try:
        response = requests.post(
            url,
            json=payload,
            timeout=settings.analytics_timeout_seconds
        )
        response.raise_for_status()
        return True

    except requests.RequestException as e:
        logger.warning("analytics_capture_failed", analytics_event=event, error=str(e))
        return False

    except Exception as e:
        logger.error(
            "analytics_capture_error",
            analytics_event=event,
            error=str(e),
            error_type=type(e).__name__
        )
        return False


# ===================
# EVENTS
# ===================

def track_file_uploaded(
    distinct_id: str,
    filename: str,
    file_size: int,
    row_count: int,
    column_count: int
) -> bool:
    return capture(FILE_UPLOADED, distinct_id, {
        "filename": filename,
        "file_size_kb": round(file_size / 1024),
        "row_count": row_count,
        "column_count": column_count,
    })


def track_field_mapped(
    distinct_id: str,
    field_type: str,
    mapping_type: str,
    is_required: bool
) -> bool:
    return capture(FIELD_MAPPED, distinct_id, {
        "field_type": field_type,
        "mapping_type": mapping_type,
        "is_required": is_required,
    })


def track_custom_field_added(distinct_id: str, field_name: str, total_custom_fields: int) -> bool:
    return capture(CUSTOM_FIELD_ADDED, distinct_id, {
        "field_name": field_name,
        "total_custom_fields": total_custom_fields,
    })


def track_csv_exported(
    event: str,
    distinct_id: str,
    row_count: int,
    field_count: int,
    custom_field_count: int
) -> bool:
    """Shared by the clipboard and download exports."""
    return capture(event, distinct_id, {
        "row_count": row_count,
        "field_count": field_count,
        "custom_field_count": custom_field_count,
    })
