"""
Test data factories.

Uses factory pattern to generate consistent test data.
"""

from datetime import datetime, timezone
from typing import Optional


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SKUFactory:
    """
    Factory for creating test SKU rows.

    Usage:
        sku = SKUFactory.create()
        sku = SKUFactory.create(sku="pen-blue", marketplace="amazon")
        skus = SKUFactory.create_batch(5)
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        id: Optional[int] = None,
        sku: Optional[str] = None,
        name: Optional[str] = None,
        marketplace: str = "amazon",
        created_at: Optional[str] = None
    ) -> dict:
        """Create a single SKU row matching the skus table."""
        counter = cls._next_counter()
        return {
            "id": id or counter,
            "sku": sku or f"test-sku-{counter}",
            "name": name or f"Test Product {counter}",
            "marketplace": marketplace,
            "created_at": created_at or _now(),
        }

    @classmethod
    def create_batch(cls, count: int, **overrides) -> list:
        """Create SKUs with distinct ids."""
        return [cls.create(**overrides) for _ in range(count)]


class MSKUFactory:
    """Factory for creating test MSKU rows."""

    _counter = 0

    @classmethod
    def create(
        cls,
        id: Optional[int] = None,
        msku: Optional[str] = None,
        name: Optional[str] = None,
        category: Optional[str] = "Stationery",
        created_at: Optional[str] = None
    ) -> dict:
        """Create a single MSKU row matching the mskus table."""
        cls._counter += 1
        return {
            "id": id or cls._counter,
            "msku": msku or f"MSKU-{cls._counter}",
            "name": name or f"Master Product {cls._counter}",
            "category": category,
            "created_at": created_at or _now(),
        }


class MappingFactory:
    """Factory for creating test mapping rows."""

    _counter = 0

    @classmethod
    def create(
        cls,
        sku_id: int,
        msku_id: int,
        id: Optional[int] = None,
        status: str = "active",
        confidence: str = "1.00",
        mapped_by: str = "manual",
        created_at: Optional[str] = None
    ) -> dict:
        """Create a single mapping row matching the sku_mappings table."""
        cls._counter += 1
        return {
            "id": id or cls._counter,
            "sku_id": sku_id,
            "msku_id": msku_id,
            "confidence": confidence,
            "status": status,
            "mapped_by": mapped_by,
            "created_at": created_at or _now(),
        }


class SalesFactory:
    """Factory for creating test sales_data rows."""

    _counter = 0

    @classmethod
    def create(
        cls,
        sku_id: int,
        order_date: datetime,
        revenue: str = "10.00",
        quantity: int = 1,
        msku_id: Optional[int] = None,
        marketplace: str = "amazon",
        id: Optional[int] = None
    ) -> dict:
        """Create a single sales fact row."""
        cls._counter += 1
        return {
            "id": id or cls._counter,
            "sku_id": sku_id,
            "msku_id": msku_id,
            "order_date": order_date.isoformat(),
            "quantity": quantity,
            "revenue": revenue,
            "marketplace": marketplace,
            "raw_data": None,
            "processed_at": _now(),
        }


class InventoryFactory:
    """Factory for creating test inventory rows."""

    _counter = 0

    @classmethod
    def create(
        cls,
        msku_id: int,
        warehouse: str = "WH-001",
        quantity: int = 10,
        reserved_quantity: int = 0,
        id: Optional[int] = None
    ) -> dict:
        """Create a single inventory row."""
        cls._counter += 1
        return {
            "id": id or cls._counter,
            "msku_id": msku_id,
            "warehouse": warehouse,
            "quantity": quantity,
            "reserved_quantity": reserved_quantity,
            "last_updated": _now(),
        }


def csv_text(headers: list[str], rows: list[list[str]], line_ending: str = "\n") -> str:
    """
    Build CSV text from headers and rows.

    Cells are written as given, so include quotes where a test needs them.
    """
    lines = [",".join(headers)] + [",".join(row) for row in rows]
    return line_ending.join(lines) + line_ending
