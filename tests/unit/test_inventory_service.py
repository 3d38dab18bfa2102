"""
Unit tests for InventoryService.

Run: pytest tests/unit/test_inventory_service.py -v
"""

import pytest

from services.inventory_service import InventoryService
from models.inventory import InventoryCreate
from exceptions import MSKUNotFoundError, DatabaseError

from tests.factories import MSKUFactory, InventoryFactory


class TestInventoryReads:
    """Tests for get_all() and get_by_msku()"""

    def test_get_by_msku_filters(self, mock_supabase):
        # Arrange
        mock_supabase.set_table_data("inventory", [
            InventoryFactory.create(msku_id=1, warehouse="WH-001"),
            InventoryFactory.create(msku_id=1, warehouse="WH-002"),
            InventoryFactory.create(msku_id=2, warehouse="WH-001"),
        ])

        # Act
        records = InventoryService(mock_supabase).get_by_msku(1)

        # Assert
        assert {r.warehouse for r in records} == {"WH-001", "WH-002"}

    def test_get_by_msku_none(self, mock_supabase):
        assert InventoryService(mock_supabase).get_by_msku(1) == []

    def test_get_all_store_failure(self, mock_supabase):
        mock_supabase.fail("inventory", "select")

        with pytest.raises(DatabaseError):
            InventoryService(mock_supabase).get_all()


class TestInventoryRecord:
    """Tests for InventoryService.record()"""

    def test_records_stock_for_known_msku(self, mock_supabase):
        # Arrange
        mock_supabase.set_table_data("mskus", [MSKUFactory.create(id=3)])
        service = InventoryService(mock_supabase)

        # Act
        record = service.record(InventoryCreate(msku_id=3, warehouse="WH-003", quantity=32, reserved_quantity=2))

        # Assert
        assert record.msku_id == 3
        assert record.quantity == 32
        assert record.reserved_quantity == 2
        assert len(mock_supabase.rows("inventory")) == 1

    def test_unknown_msku_raises(self, mock_supabase):
        with pytest.raises(MSKUNotFoundError) as exc_info:
            InventoryService(mock_supabase).record(InventoryCreate(msku_id=9, warehouse="WH-001"))

        assert exc_info.value.status_code == 404
        assert mock_supabase.rows("inventory") == []
