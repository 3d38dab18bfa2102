"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    BadRequestError,
    DuplicateError,
    ExternalServiceError,
    DatabaseError,

    # SKU / MSKU
    SKUNotFoundError,
    SKUCodeExistsError,
    MSKUNotFoundError,
    MSKUCodeExistsError,

    # Mappings
    MappingNotFoundError,

    # Uploads / ingestion
    UploadNotFoundError,
    UnsupportedFileTypeError,
    MissingIdentifierColumnError,
    FileReadError,
    NoFileUploadedError,
    FileTooLargeError,

    # AI
    EmptyQueryError,
    AIServiceUnavailableError,

    # Admin
    SeedingNotAllowedError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "BadRequestError",
    "DuplicateError",
    "ExternalServiceError",
    "DatabaseError",

    # SKU / MSKU
    "SKUNotFoundError",
    "SKUCodeExistsError",
    "MSKUNotFoundError",
    "MSKUCodeExistsError",

    # Mappings
    "MappingNotFoundError",

    # Uploads / ingestion
    "UploadNotFoundError",
    "UnsupportedFileTypeError",
    "MissingIdentifierColumnError",
    "FileReadError",
    "NoFileUploadedError",
    "FileTooLargeError",

    # AI
    "EmptyQueryError",
    "AIServiceUnavailableError",

    # Admin
    "SeedingNotAllowedError",
]
