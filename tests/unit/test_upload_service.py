"""
Unit tests for UploadService.

Run: pytest tests/unit/test_upload_service.py -v
"""

import pytest

from services.upload_service import UploadService
from models.upload import UploadStatus, UploadJobCreate, UploadJobUpdate
from exceptions import UploadNotFoundError


def make_job(service: UploadService, name: str = "sales.csv"):
    return service.create(UploadJobCreate(
        filename="abc123",
        original_name=name,
        file_size=128,
        mime_type="text/csv",
    ))


class TestUploadServiceCreate:
    """Tests for UploadService.create()"""

    def test_new_job_is_pending_with_zero_progress(self, mock_supabase):
        job = make_job(UploadService(mock_supabase))

        assert job.status == UploadStatus.PENDING
        assert job.progress == 0
        assert job.rows_processed == 0
        assert job.total_rows == 0
        assert job.error_message is None


class TestUploadServiceUpdate:
    """Tests for UploadService.update()"""

    def test_applies_partial_update(self, mock_supabase):
        # Arrange
        service = UploadService(mock_supabase)
        job = make_job(service)

        # Act
        updated = service.update(job.id, UploadJobUpdate(status=UploadStatus.PROCESSING))

        # Assert
        assert updated.status == UploadStatus.PROCESSING
        assert updated.original_name == "sales.csv"

    def test_missing_job_returns_none(self, mock_supabase):
        """Should not raise when the job does not exist."""
        service = UploadService(mock_supabase)

        assert service.update(999, UploadJobUpdate(progress=50)) is None

    def test_store_failure_returns_none(self, mock_supabase):
        service = UploadService(mock_supabase)
        job = make_job(service)
        mock_supabase.fail("file_uploads", "update")

        assert service.update(job.id, UploadJobUpdate(progress=50)) is None

    def test_last_write_wins(self, mock_supabase):
        service = UploadService(mock_supabase)
        job = make_job(service)

        service.update(job.id, UploadJobUpdate(progress=80))
        service.update(job.id, UploadJobUpdate(progress=30))

        assert service.get(job.id).progress == 30


class TestUploadServiceReads:
    """Tests for get() and list_all()"""

    def test_get_missing_raises_not_found(self, mock_supabase):
        with pytest.raises(UploadNotFoundError) as exc_info:
            UploadService(mock_supabase).get(42)

        assert exc_info.value.status_code == 404

    def test_list_all_newest_first(self, mock_supabase):
        service = UploadService(mock_supabase)
        first = make_job(service, "a.csv")
        second = make_job(service, "b.csv")

        jobs = service.list_all()

        assert [j.id for j in jobs] == [second.id, first.id]
