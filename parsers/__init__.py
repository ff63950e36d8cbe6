"""
File parsers module.
"""

from parsers.csv_parser import (
    parse_csv,
    decode_upload,
    ensure_csv_file,
    is_valid_csv_file,
    CSVParseResult,
)

__all__ = [
    "parse_csv",
    "decode_upload",
    "ensure_csv_file",
    "is_valid_csv_file",
    "CSVParseResult",
]
