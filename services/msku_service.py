"""
Master SKU (MSKU) service.

MSKUs are canonical products. They are never created by ingestion.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.sku import MSKUCreate, MSKUResponse
from models.inventory import InventoryResponse, MSKUWithInventory
from exceptions import (
    MSKUNotFoundError,
    MSKUCodeExistsError,
    DatabaseError
)

logger = structlog.get_logger(__name__)


class MSKUService:
    """MSKU reads, creation and inventory rollup."""

    def __init__(self, db=None):
        self.db = db or get_supabase_client()
        self.table = "mskus"
        self.inventory_table = "inventory"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self) -> list[MSKUResponse]:
        """Get all MSKUs, newest first."""
        logger.info("getting_mskus")

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
            mskus = [MSKUResponse(**row) for row in result.data]
            logger.info("mskus_retrieved", count=len(mskus))
            return mskus

        except Exception as e:
            logger.error("get_mskus_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, msku_id: int) -> MSKUResponse:
        """
        Get a single MSKU by ID.

        Raises:
            MSKUNotFoundError: If the MSKU doesn't exist
        """
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", msku_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_msku_failed", msku_id=msku_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise MSKUNotFoundError(str(msku_id))

        return MSKUResponse(**result.data[0])

    def get_by_code(self, code: str) -> Optional[MSKUResponse]:
        """Get an MSKU by exact code, or None."""
        logger.debug("getting_msku_by_code", msku=code)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("msku", code)
                .execute()
            )

            if not result.data:
                return None

            return MSKUResponse(**result.data[0])

        except Exception as e:
            logger.error("get_msku_by_code_failed", msku=code, error=str(e))
            raise DatabaseError("select", str(e))

    def get_with_inventory(self) -> list[MSKUWithInventory]:
        """
        Get all MSKUs with their inventory records and total stock.

        MSKUs with no inventory rows have total_quantity 0.
        """
        logger.info("getting_mskus_with_inventory")

        mskus = self.get_all()

        try:
            result = self.db.table(self.inventory_table).select("*").execute()
        except Exception as e:
            logger.error("get_inventory_failed", error=str(e))
            raise DatabaseError("select", str(e))

        by_msku: dict[int, list[InventoryResponse]] = {}
        for row in result.data:
            record = InventoryResponse(**row)
            by_msku.setdefault(record.msku_id, []).append(record)

        return [
            MSKUWithInventory(
                **msku.model_dump(),
                inventory=by_msku.get(msku.id, []),
                total_quantity=sum(r.quantity for r in by_msku.get(msku.id, [])),
            )
            for msku in mskus
        ]

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: MSKUCreate) -> MSKUResponse:
        """
        Create a new MSKU.

        Raises:
            MSKUCodeExistsError: If the code is already registered
        """
        logger.info("creating_msku", msku=data.msku)

        if self.get_by_code(data.msku):
            raise MSKUCodeExistsError(data.msku)

        try:
            result = (
                self.db.table(self.table)
                .insert(data.model_dump())
                .execute()
            )
            msku = MSKUResponse(**result.data[0])
            logger.info("msku_created", msku_id=msku.id, msku=msku.msku)
            return msku

        except Exception as e:
            logger.error("create_msku_failed", msku=data.msku, error=str(e))
            raise DatabaseError("insert", str(e))


_msku_service: Optional[MSKUService] = None


def get_msku_service() -> MSKUService:
    """Get or create MSKU service instance."""
    global _msku_service
    if _msku_service is None:
        _msku_service = MSKUService()
    return _msku_service
