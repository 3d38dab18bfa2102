"""
Upload API routes.

Files are saved to the upload directory, a job is created, and ingestion
runs as a background task. Clients poll the job for progress.
"""

from pathlib import Path
from typing import Optional
from uuid import uuid4

from fastapi import APIRouter, BackgroundTasks, Depends, File, UploadFile
import structlog

from config import settings
from models.upload import UploadJobCreate, UploadJobResponse
from services.container import ServiceContainer, get_services
from routes.errors import handle_error
from exceptions import NoFileUploadedError, FileTooLargeError

logger = structlog.get_logger(__name__)

# Paths are declared in full; mounted without a prefix
router = APIRouter()


# ===================
# ROUTES
# ===================

@router.post("/api/upload", response_model=UploadJobResponse, status_code=201)
async def upload_file(
    background_tasks: BackgroundTasks,
    file: Optional[UploadFile] = File(None),
    services: ServiceContainer = Depends(get_services)
):
    """
    Accept a sales file and start ingesting it.

    The file type is checked by the pipeline, so a non-CSV upload still
    gets a job, which then fails.

    Raises:
        400: No file in the request
        422: File exceeds the size limit
    """
    try:
        if file is None or not file.filename:
            raise NoFileUploadedError()

        content = await file.read()
        if len(content) > settings.max_upload_bytes:
            raise FileTooLargeError(len(content), settings.max_upload_bytes)

        upload_dir = Path(settings.upload_dir)
        upload_dir.mkdir(parents=True, exist_ok=True)
        stored_name = uuid4().hex
        stored_path = upload_dir / stored_name
        stored_path.write_bytes(content)

        # Ingestion deletes the file once the run is scheduled
        try:
            job = services.uploads.create(UploadJobCreate(
                filename=stored_name,
                original_name=file.filename,
                file_size=len(content),
                mime_type=file.content_type or "application/octet-stream",
            ))

            background_tasks.add_task(
                services.ingestion.run,
                job.id,
                stored_path,
                file.filename,
            )
        except Exception:
            stored_path.unlink(missing_ok=True)
            raise
        logger.info(
            "upload_accepted",
            upload_id=job.id,
            original_name=file.filename,
            file_size=len(content)
        )

        return job

    except Exception as e:
        return handle_error(e)


@router.get("/api/uploads", response_model=list[UploadJobResponse])
async def list_uploads(services: ServiceContainer = Depends(get_services)):
    """List upload jobs, newest first."""
    try:
        return services.uploads.list_all()
    except Exception as e:
        return handle_error(e)


@router.get("/api/uploads/{upload_id}/status", response_model=UploadJobResponse)
async def get_upload_status(upload_id: int, services: ServiceContainer = Depends(get_services)):
    """
    Get one upload job.

    Raises:
        404: Upload not found
    """
    try:
        return services.uploads.get(upload_id)
    except Exception as e:
        return handle_error(e)
