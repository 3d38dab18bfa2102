"""
SKU service.

Marketplace SKUs are the codes found in sales exports. Ingestion creates
them lazily through get_or_create; admins can also create them directly.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.sku import SKUCreate, SKUResponse
from exceptions import (
    SKUNotFoundError,
    SKUCodeExistsError,
    DatabaseError
)

logger = structlog.get_logger(__name__)

SEARCH_LIMIT = 10


class SKUService:
    """
    SKU business logic.

    Handles reads, creation and the get-or-create used by ingestion.
    """

    def __init__(self, db=None):
        self.db = db or get_supabase_client()
        self.table = "skus"
        self.mappings_table = "sku_mappings"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self) -> list[SKUResponse]:
        """
        Get all SKUs, newest first.

        Returns:
            List of SKUResponse
        """
        logger.info("getting_skus")

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )

            skus = [SKUResponse(**row) for row in result.data]
            logger.info("skus_retrieved", count=len(skus))
            return skus

        except Exception as e:
            logger.error("get_skus_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_by_id(self, sku_id: int) -> SKUResponse:
        """
        Get a single SKU by ID.

        Raises:
            SKUNotFoundError: If the SKU doesn't exist
        """
        logger.debug("getting_sku", sku_id=sku_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", sku_id)
                .execute()
            )
        except Exception as e:
            logger.error("get_sku_failed", sku_id=sku_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise SKUNotFoundError(str(sku_id))

        return SKUResponse(**result.data[0])

    def get_by_code(self, code: str) -> Optional[SKUResponse]:
        """
        Get a SKU by exact code.

        Args:
            code: Marketplace SKU code

        Returns:
            SKUResponse or None if not found
        """
        logger.debug("getting_sku_by_code", sku=code)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("sku", code)
                .execute()
            )

            if not result.data:
                return None

            return SKUResponse(**result.data[0])

        except Exception as e:
            logger.error("get_sku_by_code_failed", sku=code, error=str(e))
            raise DatabaseError("select", str(e))

    def get_unmapped(self) -> list[SKUResponse]:
        """
        Get SKUs that have no mapping row at all, newest first.

        Any mapping counts regardless of status.
        """
        logger.info("getting_unmapped_skus")

        try:
            mapped = (
                self.db.table(self.mappings_table)
                .select("sku_id")
                .execute()
            )
            mapped_ids = {row["sku_id"] for row in mapped.data}

            result = (
                self.db.table(self.table)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )

            unmapped = [
                SKUResponse(**row)
                for row in result.data
                if row["id"] not in mapped_ids
            ]

            logger.info("unmapped_skus_retrieved", count=len(unmapped))
            return unmapped

        except Exception as e:
            logger.error("get_unmapped_skus_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def search(self, query: str, limit: int = SEARCH_LIMIT) -> list[SKUResponse]:
        """
        Search SKUs whose code or name contains the query (case-insensitive).

        Returns at most `limit` SKUs, newest first.
        """
        logger.debug("searching_skus", query=query)

        needle = query.strip().lower()
        if not needle:
            return []

        matches = [
            sku for sku in self.get_all()
            if needle in sku.sku.lower() or needle in sku.name.lower()
        ]
        return matches[:limit]

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, data: SKUCreate) -> SKUResponse:
        """
        Create a new SKU.

        Raises:
            SKUCodeExistsError: If the code is already registered
        """
        logger.info("creating_sku", sku=data.sku, marketplace=data.marketplace)

        if self.get_by_code(data.sku):
            raise SKUCodeExistsError(data.sku)

        try:
            result = (
                self.db.table(self.table)
                .insert(data.model_dump())
                .execute()
            )

            sku = SKUResponse(**result.data[0])
            logger.info("sku_created", sku_id=sku.id, sku=sku.sku)
            return sku

        except Exception as e:
            logger.error("create_sku_failed", sku=data.sku, error=str(e))
            raise DatabaseError("insert", str(e))

    def get_or_create(self, code: str, name: str, marketplace: str) -> SKUResponse:
        """
        Return the SKU with this exact code, creating it if absent.

        Calling twice with the same code returns the same SKU. Name and
        marketplace are only used on creation.
        """
        existing = self.get_by_code(code)
        if existing:
            return existing

        logger.info("registering_new_sku", sku=code, marketplace=marketplace)
        return self.create(SKUCreate(sku=code, name=name or code, marketplace=marketplace))


_sku_service: Optional[SKUService] = None


def get_sku_service() -> SKUService:
    """Get or create SKU service instance."""
    global _sku_service
    if _sku_service is None:
        _sku_service = SKUService()
    return _sku_service
