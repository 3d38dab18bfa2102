"""
Upload job schemas.

An upload job tracks one ingestion run: pending -> processing -> completed | failed.
"""

from datetime import datetime
from typing import Optional
from enum import Enum
from pydantic import Field

from models.base import BaseSchema


class UploadStatus(str, Enum):
    """Upload job lifecycle."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (UploadStatus.COMPLETED, UploadStatus.FAILED)


class UploadJobCreate(BaseSchema):
    """Metadata captured when a file is received."""

    filename: str = Field(..., min_length=1, description="Stored file name")
    original_name: str = Field(..., min_length=1, description="Name supplied by the client")
    file_size: int = Field(..., ge=0)
    mime_type: str = Field(default="application/octet-stream")


class UploadJobUpdate(BaseSchema):
    """
    Partial update of an upload job.

    Only provided fields are written.
    """

    status: Optional[UploadStatus] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    rows_processed: Optional[int] = Field(None, ge=0)
    total_rows: Optional[int] = Field(None, ge=0)
    error_message: Optional[str] = None


class UploadJobResponse(BaseSchema):
    """Upload job as stored; polled by clients for progress."""

    id: int
    filename: str
    original_name: str
    file_size: int
    mime_type: str
    status: UploadStatus
    progress: int = 0
    rows_processed: int = 0
    total_rows: int = 0
    error_message: Optional[str] = None
    uploaded_at: datetime
