"""
Business logic services.

Each service handles one step of the upload -> map -> export flow.
"""

from services.mapping_suggester import suggest_mappings, config_from_suggestions
from services.csv_generator import generate_csv, included_columns, export_filename
from services.session_service import (
    MapperSessionService,
    MapperSession,
    CSVExport,
    get_session_service,
)

__all__ = [
    "suggest_mappings",
    "config_from_suggestions",
    "generate_csv",
    "included_columns",
    "export_filename",
    "MapperSessionService",
    "MapperSession",
    "CSVExport",
    "get_session_service",
]
