"""
SKU to MSKU mapping service.

A mapping resolves a marketplace SKU onto its canonical MSKU. Ingestion
reads mappings at processing time; sales facts keep whatever MSKU was
resolved then, even if the mapping changes later.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.sku import SKUResponse, MSKUResponse
from models.mapping import (
    MappingCreate,
    MappingUpdate,
    MappingResponse,
    MappingWithDetails,
)
from exceptions import (
    MappingNotFoundError,
    SKUNotFoundError,
    MSKUNotFoundError,
    DatabaseError
)

logger = structlog.get_logger(__name__)

SUGGESTION_LIMIT = 5


class MappingService:
    """
    Mapping business logic.

    Handles mapping CRUD, the per-row lookup used by ingestion and simple
    name-based MSKU suggestions.
    """

    def __init__(self, db=None):
        self.db = db or get_supabase_client()
        self.table = "sku_mappings"
        self.skus_table = "skus"
        self.mskus_table = "mskus"

    # ===================
    # READ OPERATIONS
    # ===================

    def _all_rows(self) -> list[dict]:
        try:
            result = self.db.table(self.table).select("*").execute()
            return result.data
        except Exception as e:
            logger.error("get_mappings_failed", error=str(e))
            raise DatabaseError("select", str(e))

    def get_all(self) -> list[MappingResponse]:
        """Get all mapping rows, in store order."""
        return [MappingResponse(**row) for row in self._all_rows()]

    def get_all_with_details(self) -> list[MappingWithDetails]:
        """
        Get all mappings joined with their SKU and MSKU, newest first.

        Mappings whose SKU or MSKU no longer exists are left out.
        """
        logger.info("getting_mappings_with_details")

        try:
            mappings = (
                self.db.table(self.table)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
            skus = self.db.table(self.skus_table).select("*").execute()
            mskus = self.db.table(self.mskus_table).select("*").execute()
        except Exception as e:
            logger.error("get_mappings_with_details_failed", error=str(e))
            raise DatabaseError("select", str(e))

        skus_by_id = {row["id"]: row for row in skus.data}
        mskus_by_id = {row["id"]: row for row in mskus.data}

        details = []
        for row in mappings.data:
            sku = skus_by_id.get(row["sku_id"])
            msku = mskus_by_id.get(row["msku_id"])
            if sku is None or msku is None:
                continue
            details.append(MappingWithDetails(
                **row,
                sku=SKUResponse(**sku),
                msku=MSKUResponse(**msku),
            ))

        logger.info("mappings_retrieved", count=len(details))
        return details

    def find_mapping_for_sku(self, sku_id: int) -> Optional[MappingResponse]:
        """
        Find the mapping for a SKU.

        Loads every mapping and returns the first whose sku_id matches.
        Status is not checked: pending and inactive mappings resolve too.

        Args:
            sku_id: SKU id

        Returns:
            MappingResponse or None if the SKU is unmapped
        """
        for row in self._all_rows():
            if row["sku_id"] == sku_id:
                return MappingResponse(**row)
        return None

    def build_sku_index(self) -> dict[int, MappingResponse]:
        """
        Build sku_id -> mapping from one read.

        Keeps the first mapping per SKU so lookups agree with
        find_mapping_for_sku. Use it in place of per-row scans when
        mappings do not change during a run.
        """
        index: dict[int, MappingResponse] = {}
        for row in self._all_rows():
            index.setdefault(row["sku_id"], MappingResponse(**row))
        return index

    def get_suggested_mskus(self, sku_id: int) -> list[MSKUResponse]:
        """
        Suggest MSKUs by name similarity.

        Takes the SKU name up to its first "-" and returns MSKUs whose name
        contains it (case-insensitive), at most five.

        Raises:
            SKUNotFoundError: If the SKU doesn't exist
        """
        try:
            result = (
                self.db.table(self.skus_table)
                .select("*")
                .eq("id", sku_id)
                .execute()
            )
            if not result.data:
                raise SKUNotFoundError(str(sku_id))

            token = result.data[0]["name"].split("-")[0].strip().lower()

            mskus = self.db.table(self.mskus_table).select("*").execute()

        except SKUNotFoundError:
            raise
        except Exception as e:
            logger.error("get_suggested_mskus_failed", sku_id=sku_id, error=str(e))
            raise DatabaseError("select", str(e))

        suggestions = [
            MSKUResponse(**row)
            for row in mskus.data
            if token in row["name"].lower()
        ]
        return suggestions[:SUGGESTION_LIMIT]

    # ===================
    # WRITE OPERATIONS
    # ===================

    def _require(self, table: str, row_id: int, error: type) -> None:
        result = self.db.table(table).select("id").eq("id", row_id).execute()
        if not result.data:
            raise error(str(row_id))

    def create(self, data: MappingCreate) -> MappingResponse:
        """
        Create a mapping.

        Raises:
            SKUNotFoundError: If the SKU doesn't exist
            MSKUNotFoundError: If the MSKU doesn't exist
        """
        logger.info(
            "creating_mapping",
            sku_id=data.sku_id,
            msku_id=data.msku_id,
            mapped_by=data.mapped_by.value
        )

        try:
            self._require(self.skus_table, data.sku_id, SKUNotFoundError)
            self._require(self.mskus_table, data.msku_id, MSKUNotFoundError)

            result = (
                self.db.table(self.table)
                .insert(data.model_dump(mode="json"))
                .execute()
            )
            mapping = MappingResponse(**result.data[0])
            logger.info("mapping_created", mapping_id=mapping.id)
            return mapping

        except (SKUNotFoundError, MSKUNotFoundError):
            raise
        except Exception as e:
            logger.error("create_mapping_failed", error=str(e))
            raise DatabaseError("insert", str(e))

    def update(self, mapping_id: int, data: MappingUpdate) -> MappingResponse:
        """
        Partially update a mapping.

        Raises:
            MappingNotFoundError: If the mapping doesn't exist
        """
        logger.info("updating_mapping", mapping_id=mapping_id)

        update_data = data.model_dump(mode="json", exclude_unset=True)

        try:
            self._require(self.table, mapping_id, MappingNotFoundError)

            if not update_data:
                result = self.db.table(self.table).select("*").eq("id", mapping_id).execute()
            else:
                result = (
                    self.db.table(self.table)
                    .update(update_data)
                    .eq("id", mapping_id)
                    .execute()
                )

            mapping = MappingResponse(**result.data[0])
            logger.info("mapping_updated", mapping_id=mapping_id, fields=list(update_data.keys()))
            return mapping

        except MappingNotFoundError:
            raise
        except Exception as e:
            logger.error("update_mapping_failed", mapping_id=mapping_id, error=str(e))
            raise DatabaseError("update", str(e))

    def delete(self, mapping_id: int) -> None:
        """
        Delete a mapping.

        Raises:
            MappingNotFoundError: If the mapping doesn't exist
        """
        logger.info("deleting_mapping", mapping_id=mapping_id)

        try:
            self._require(self.table, mapping_id, MappingNotFoundError)
            self.db.table(self.table).delete().eq("id", mapping_id).execute()
            logger.info("mapping_deleted", mapping_id=mapping_id)

        except MappingNotFoundError:
            raise
        except Exception as e:
            logger.error("delete_mapping_failed", mapping_id=mapping_id, error=str(e))
            raise DatabaseError("delete", str(e))


_mapping_service: Optional[MappingService] = None


def get_mapping_service() -> MappingService:
    """Get or create mapping service instance."""
    global _mapping_service
    if _mapping_service is None:
        _mapping_service = MappingService()
    return _mapping_service
