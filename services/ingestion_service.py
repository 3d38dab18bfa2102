"""
Sales CSV ingestion pipeline.

Runs one uploaded file end to end: validates it, parses each row, registers
unseen SKUs, resolves their MSKU mapping and writes one sales fact per row.
Progress and the final outcome are reported only through the upload job.

Per-row failures are logged and the row is abandoned; the job still
completes. Only file-level problems (wrong type, unreadable file, missing
identifier column) fail the job.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union
import os
import structlog

from models.sales import SalesFactCreate
from models.upload import UploadStatus, UploadJobUpdate
from parsers.csv_parser import (
    has_identifier_column,
    parse_header,
    parse_row,
    split_lines,
    IDENTIFIER_HEADER_KEYWORDS,
)
from parsers.row_normalizer import normalize_row, Skipped
from services.sku_service import SKUService, get_sku_service
from services.mapping_service import MappingService, get_mapping_service
from services.sales_service import SalesService, get_sales_service
from services.upload_service import UploadService, get_upload_service
from exceptions import (
    AppError,
    UnsupportedFileTypeError,
    MissingIdentifierColumnError,
    FileReadError,
)

logger = structlog.get_logger(__name__)

SUPPORTED_EXTENSIONS = {".csv"}


@dataclass
class IngestionResult:
    """Summary of one run, for logs and tests."""
    upload_id: int
    status: UploadStatus
    total_rows: int = 0
    rows_processed: int = 0
    rows_created: int = 0
    rows_skipped: int = 0
    rows_failed: int = 0
    error: Optional[str] = None


class IngestionService:
    """
    Process uploaded sales files.

    Rows are handled one at a time in file order. Each store call is made
    serially; separate runs may interleave but share no state.
    """

    def __init__(
        self,
        uploads: Optional[UploadService] = None,
        skus: Optional[SKUService] = None,
        mappings: Optional[MappingService] = None,
        sales: Optional[SalesService] = None,
    ):
        self.uploads = uploads or get_upload_service()
        self.skus = skus or get_sku_service()
        self.mappings = mappings or get_mapping_service()
        self.sales = sales or get_sales_service()

    def run(
        self,
        upload_id: int,
        file_path: Union[str, Path],
        original_name: str,
    ) -> IngestionResult:
        """
        Ingest one uploaded file.

        The file at file_path is deleted when the run ends, whatever the
        outcome. Errors are recorded on the job, never raised. A job that
        already completed or failed is left as it is.

        Args:
            upload_id: Job to report progress on
            file_path: Where the upload was stored
            original_name: Client-supplied name, used for the type check

        Returns:
            IngestionResult
        """
        current = self._current_status(upload_id)
        if current is not None and current.is_terminal:
            logger.warning(
                "upload_already_finished",
                upload_id=upload_id,
                status=current.value
            )
            self._cleanup(file_path)
            return IngestionResult(upload_id=upload_id, status=current)

        result = IngestionResult(upload_id=upload_id, status=UploadStatus.PROCESSING)

        logger.info(
            "upload_processing_started",
            upload_id=upload_id,
            original_name=original_name
        )

        try:
            self.uploads.update(
                upload_id,
                UploadJobUpdate(status=UploadStatus.PROCESSING, progress=0)
            )

            extension = Path(original_name).suffix.lower()
            if extension not in SUPPORTED_EXTENSIONS:
                raise UnsupportedFileTypeError(extension)

            text = self._read(file_path)
            self._process(upload_id, text, result)

            result.status = UploadStatus.COMPLETED
            self.uploads.update(
                upload_id,
                UploadJobUpdate(status=UploadStatus.COMPLETED, progress=100)
            )

            logger.info(
                "upload_processing_completed",
                upload_id=upload_id,
                total_rows=result.total_rows,
                rows_created=result.rows_created,
                rows_skipped=result.rows_skipped,
                rows_failed=result.rows_failed
            )

        except Exception as e:
            message = e.message if isinstance(e, AppError) else str(e)
            result.status = UploadStatus.FAILED
            result.error = message

            logger.error(
                "upload_processing_failed",
                upload_id=upload_id,
                error=message,
                error_type=type(e).__name__
            )
            self.uploads.update(
                upload_id,
                UploadJobUpdate(status=UploadStatus.FAILED, error_message=message)
            )

        finally:
            self._cleanup(file_path)

        return result

    def _current_status(self, upload_id: int) -> Optional[UploadStatus]:
        """Job status, or None when the tracker can't be read."""
        try:
            return self.uploads.get(upload_id).status
        except AppError as e:
            logger.warning("upload_status_unavailable", upload_id=upload_id, error=e.message)
            return None

    def _read(self, file_path: Union[str, Path]) -> str:
        try:
            return Path(file_path).read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(str(e), details={"path": str(file_path)})

    def _process(self, upload_id: int, text: str, result: IngestionResult) -> None:
        lines = split_lines(text)
        headers = parse_header(lines[0]) if lines else []

        if not has_identifier_column(headers):
            raise MissingIdentifierColumnError(headers, IDENTIFIER_HEADER_KEYWORDS)

        data_lines = lines[1:]
        result.total_rows = len(data_lines)
        self.uploads.update(upload_id, UploadJobUpdate(total_rows=result.total_rows))

        logger.info(
            "upload_rows_found",
            upload_id=upload_id,
            headers=headers,
            total_rows=result.total_rows
        )

        for line_number, line in enumerate(data_lines, start=2):
            self._process_row(upload_id, headers, line, line_number, result)

            result.rows_processed += 1
            self.uploads.update(
                upload_id,
                UploadJobUpdate(
                    rows_processed=result.rows_processed,
                    progress=result.rows_processed * 100 // result.total_rows,
                )
            )

    def _process_row(
        self,
        upload_id: int,
        headers: list[str],
        line: str,
        line_number: int,
        result: IngestionResult,
    ) -> None:
        try:
            outcome = normalize_row(parse_row(headers, line), now=datetime.now(timezone.utc))

            if isinstance(outcome, Skipped):
                result.rows_skipped += 1
                logger.debug(
                    "row_skipped",
                    upload_id=upload_id,
                    line=line_number,
                    reason=outcome.reason
                )
                return

            if outcome.defaults:
                logger.debug(
                    "row_fields_defaulted",
                    upload_id=upload_id,
                    line=line_number,
                    defaults=outcome.defaults
                )

            sku = self.skus.get_or_create(outcome.sku_code, outcome.name, outcome.marketplace)
            mapping = self.mappings.find_mapping_for_sku(sku.id)

            self.sales.create(SalesFactCreate(
                sku_id=sku.id,
                msku_id=mapping.msku_id if mapping else None,
                order_date=outcome.order_date,
                quantity=outcome.quantity,
                revenue=outcome.revenue,
                marketplace=outcome.marketplace,
                raw_data=outcome.raw_data,
            ))
            result.rows_created += 1

        except Exception as e:
            result.rows_failed += 1
            logger.warning(
                "row_failed",
                upload_id=upload_id,
                line=line_number,
                error=str(e),
                error_type=type(e).__name__
            )

    def _cleanup(self, file_path: Union[str, Path]) -> None:
        try:
            os.unlink(file_path)
        except FileNotFoundError:
            logger.debug("upload_file_already_removed", path=str(file_path))
        except OSError as e:
            logger.warning("upload_file_cleanup_failed", path=str(file_path), error=str(e))


_ingestion_service: Optional[IngestionService] = None


def get_ingestion_service() -> IngestionService:
    """Get or create ingestion service instance."""
    global _ingestion_service
    if _ingestion_service is None:
        _ingestion_service = IngestionService()
    return _ingestion_service
