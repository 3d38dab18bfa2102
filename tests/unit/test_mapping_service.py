"""
Unit tests for MappingService.

Run: pytest tests/unit/test_mapping_service.py -v
"""

from decimal import Decimal

import pytest

from services.mapping_service import MappingService
from models.mapping import MappingCreate, MappingUpdate, MappingStatus, MappingMethod
from exceptions import MappingNotFoundError, SKUNotFoundError, MSKUNotFoundError

from tests.factories import SKUFactory, MSKUFactory, MappingFactory


@pytest.fixture
def catalog(mock_supabase):
    """Two SKUs and two MSKUs, no mappings."""
    mock_supabase.set_table_data("skus", [
        SKUFactory.create(id=1, sku="pen-blue", name="Pen-Blue"),
        SKUFactory.create(id=2, sku="apple-1", name="Golden Apple"),
    ])
    mock_supabase.set_table_data("mskus", [
        MSKUFactory.create(id=10, msku="CSTLE-PEN", name="Castle Pen Collection"),
        MSKUFactory.create(id=20, msku="GOLDEN-APPLE", name="Golden Apple Premium"),
    ])
    return mock_supabase


class TestFindMappingForSku:
    """Tests for MappingService.find_mapping_for_sku()"""

    def test_returns_first_matching_mapping(self, catalog):
        """Should return the first mapping for the SKU in store order."""
        # Arrange
        catalog.set_table_data("sku_mappings", [
            MappingFactory.create(id=1, sku_id=2, msku_id=20),
            MappingFactory.create(id=2, sku_id=1, msku_id=10),
            MappingFactory.create(id=3, sku_id=1, msku_id=20),
        ])
        service = MappingService(catalog)

        # Act
        mapping = service.find_mapping_for_sku(1)

        # Assert
        assert mapping.id == 2
        assert mapping.msku_id == 10

    def test_status_is_not_checked(self, catalog):
        """Pending and inactive mappings still resolve."""
        catalog.set_table_data("sku_mappings", [
            MappingFactory.create(id=1, sku_id=1, msku_id=10, status="inactive"),
        ])

        mapping = MappingService(catalog).find_mapping_for_sku(1)

        assert mapping is not None
        assert mapping.status == MappingStatus.INACTIVE

    def test_unmapped_sku_returns_none(self, catalog):
        assert MappingService(catalog).find_mapping_for_sku(1) is None

    def test_index_agrees_with_scan(self, catalog):
        catalog.set_table_data("sku_mappings", [
            MappingFactory.create(id=1, sku_id=1, msku_id=10),
            MappingFactory.create(id=2, sku_id=1, msku_id=20),
        ])
        service = MappingService(catalog)

        index = service.build_sku_index()

        assert index[1].id == service.find_mapping_for_sku(1).id
        assert 2 not in index


class TestMappingCrud:
    """Tests for create, update and delete."""

    def test_create_defaults(self, catalog):
        service = MappingService(catalog)

        mapping = service.create(MappingCreate(sku_id=1, msku_id=10))

        assert mapping.confidence == Decimal("1.00")
        assert mapping.status == MappingStatus.ACTIVE
        assert mapping.mapped_by == MappingMethod.MANUAL

    def test_create_unknown_sku_raises(self, catalog):
        with pytest.raises(SKUNotFoundError):
            MappingService(catalog).create(MappingCreate(sku_id=99, msku_id=10))

    def test_create_unknown_msku_raises(self, catalog):
        with pytest.raises(MSKUNotFoundError):
            MappingService(catalog).create(MappingCreate(sku_id=1, msku_id=99))

    def test_update_changes_only_given_fields(self, catalog):
        # Arrange
        catalog.set_table_data("sku_mappings", [
            MappingFactory.create(id=5, sku_id=1, msku_id=10, status="pending", confidence="0.80"),
        ])
        service = MappingService(catalog)

        # Act
        mapping = service.update(5, MappingUpdate(status=MappingStatus.ACTIVE))

        # Assert
        assert mapping.status == MappingStatus.ACTIVE
        assert mapping.confidence == Decimal("0.80")
        assert mapping.msku_id == 10

    def test_update_missing_raises_not_found(self, catalog):
        with pytest.raises(MappingNotFoundError) as exc_info:
            MappingService(catalog).update(404, MappingUpdate(status=MappingStatus.ACTIVE))

        assert exc_info.value.status_code == 404

    def test_delete_removes_row(self, catalog):
        catalog.set_table_data("sku_mappings", [MappingFactory.create(id=7, sku_id=1, msku_id=10)])

        MappingService(catalog).delete(7)

        assert catalog.rows("sku_mappings") == []

    def test_delete_missing_raises_not_found(self, catalog):
        with pytest.raises(MappingNotFoundError):
            MappingService(catalog).delete(7)

    def test_get_all_with_details_joins_sku_and_msku(self, catalog):
        catalog.set_table_data("sku_mappings", [MappingFactory.create(id=1, sku_id=2, msku_id=20)])

        [mapping] = MappingService(catalog).get_all_with_details()

        assert mapping.sku.sku == "apple-1"
        assert mapping.msku.msku == "GOLDEN-APPLE"


class TestSuggestedMskus:
    """Tests for MappingService.get_suggested_mskus()"""

    def test_matches_first_name_token(self, catalog):
        """A "Pen-Blue" SKU suggests MSKUs whose name contains "Pen"."""
        suggestions = MappingService(catalog).get_suggested_mskus(1)

        assert [m.msku for m in suggestions] == ["CSTLE-PEN"]

    def test_unknown_sku_raises(self, catalog):
        with pytest.raises(SKUNotFoundError):
            MappingService(catalog).get_suggested_mskus(99)

    def test_caps_at_five(self, catalog):
        catalog.set_table_data("mskus", [
            MSKUFactory.create(id=100 + i, name=f"Pen Variant {i}") for i in range(8)
        ])

        assert len(MappingService(catalog).get_suggested_mskus(1)) == 5
