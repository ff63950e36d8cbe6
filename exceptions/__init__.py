"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,

    # Upload / parser
    EmptyInputError,
    InvalidFileTypeError,
    UploadTooLargeError,

    # Mapping
    DuplicateOrEmptyFieldError,
    InvalidMappingTargetError,
    UnknownFieldError,
    MissingTitleMappingError,

    # Sessions
    SessionNotFoundError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",

    # Upload / parser
    "EmptyInputError",
    "InvalidFileTypeError",
    "UploadTooLargeError",

    # Mapping
    "DuplicateOrEmptyFieldError",
    "InvalidMappingTargetError",
    "UnknownFieldError",
    "MissingTitleMappingError",

    # Sessions
    "SessionNotFoundError",
]
