"""
Inventory service.

Stock is recorded per MSKU and warehouse. Each record call inserts a new
row; there is no in-place stock adjustment.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.inventory import InventoryCreate, InventoryResponse
from exceptions import MSKUNotFoundError, DatabaseError

logger = structlog.get_logger(__name__)


class InventoryService:
    """Inventory reads and writes."""

    def __init__(self, db=None):
        self.db = db or get_supabase_client()
        self.table = "inventory"

    def get_all(self) -> list[InventoryResponse]:
        """Get every inventory record, most recently updated first."""
        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("last_updated", desc=True)
                .execute()
            )
            return [InventoryResponse(**row) for row in result.data]

        except Exception as e:
            logger.error("get_inventory_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_msku(self, msku_id: int) -> list[InventoryResponse]:
        """
        Get inventory records for one MSKU.

        Args:
            msku_id: MSKU id

        Returns:
            One record per warehouse row; empty if none
        """
        logger.debug("getting_inventory_by_msku", msku_id=msku_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("msku_id", msku_id)
                .execute()
            )
            return [InventoryResponse(**row) for row in result.data]

        except Exception as e:
            logger.error("get_inventory_by_msku_failed", msku_id=msku_id, error=str(e))
            raise DatabaseError("select", str(e))

    def record(self, data: InventoryCreate) -> InventoryResponse:
        """
        Record a stock level.

        Raises:
            MSKUNotFoundError: If the MSKU doesn't exist
        """
        logger.info(
            "recording_inventory",
            msku_id=data.msku_id,
            warehouse=data.warehouse,
            quantity=data.quantity
        )

        try:
            msku = self.db.table("mskus").select("id").eq("id", data.msku_id).execute()
            if not msku.data:
                raise MSKUNotFoundError(str(data.msku_id))

            result = (
                self.db.table(self.table)
                .insert(data.model_dump())
                .execute()
            )
            return InventoryResponse(**result.data[0])

        except MSKUNotFoundError:
            raise
        except Exception as e:
            logger.error("record_inventory_failed", msku_id=data.msku_id, error=str(e))
            raise DatabaseError("insert", str(e))


_inventory_service: Optional[InventoryService] = None


def get_inventory_service() -> InventoryService:
    """Get or create inventory service instance."""
    global _inventory_service
    if _inventory_service is None:
        _inventory_service = InventoryService()
    return _inventory_service
