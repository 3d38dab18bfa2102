"""
Upload job tracker.

One job per uploaded file. Clients poll it while ingestion runs in the
background. Writes are last-write-wins.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.upload import (
    UploadStatus,
    UploadJobCreate,
    UploadJobUpdate,
    UploadJobResponse,
)
from exceptions import UploadNotFoundError, DatabaseError

logger = structlog.get_logger(__name__)


class UploadService:
    """Create, update and read upload jobs."""

    def __init__(self, db=None):
        self.db = db or get_supabase_client()
        self.table = "file_uploads"

    def create(self, data: UploadJobCreate) -> UploadJobResponse:
        """
        Create a job in pending state with zero progress.

        Returns:
            The created job
        """
        logger.info(
            "creating_upload_job",
            original_name=data.original_name,
            file_size=data.file_size
        )

        record = {
            **data.model_dump(),
            "status": UploadStatus.PENDING.value,
            "progress": 0,
            "rows_processed": 0,
            "total_rows": 0,
        }

        try:
            result = self.db.table(self.table).insert(record).execute()
            job = UploadJobResponse(**result.data[0])
            logger.info("upload_job_created", upload_id=job.id)
            return job

        except Exception as e:
            logger.error("create_upload_job_failed", error=str(e))
            raise DatabaseError("insert", str(e))

    def update(self, upload_id: int, data: UploadJobUpdate) -> Optional[UploadJobResponse]:
        """
        Apply a partial update to a job.

        Never raises: a missing job or a store failure is logged and
        returns None, so progress writes cannot abort ingestion.
        """
        update_data = data.model_dump(mode="json", exclude_unset=True)

        try:
            result = (
                self.db.table(self.table)
                .update(update_data)
                .eq("id", upload_id)
                .execute()
            )
        except Exception as e:
            logger.warning("upload_job_update_failed", upload_id=upload_id, error=str(e))
            return None

        if not result.data:
            logger.warning("upload_job_not_found", upload_id=upload_id)
            return None

        return UploadJobResponse(**result.data[0])

    def get(self, upload_id: int) -> UploadJobResponse:
        """
        Get one job.

        Raises:
            UploadNotFoundError: If the job doesn't exist
        """
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", upload_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_upload_job_failed", upload_id=upload_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise UploadNotFoundError(str(upload_id))

        return UploadJobResponse(**result.data[0])

    def list_all(self) -> list[UploadJobResponse]:
        """Get all jobs, newest first."""
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("uploaded_at", desc=True)
                .execute()
            )
            return [UploadJobResponse(**row) for row in result.data]

        except Exception as e:
            logger.error("list_upload_jobs_failed", error=str(e))
            raise DatabaseError("select", str(e))


_upload_service: Optional[UploadService] = None


def get_upload_service() -> UploadService:
    """Get or create upload service instance."""
    global _upload_service
    if _upload_service is None:
        _upload_service = UploadService()
    return _upload_service
