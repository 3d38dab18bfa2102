"""
Inventory schemas.

Inventory is tracked per MSKU and warehouse.
"""

from datetime import datetime
from pydantic import Field

from models.base import BaseSchema
from models.sku import MSKUResponse


class InventoryCreate(BaseSchema):
    """Record a stock level for one MSKU in one warehouse."""

    msku_id: int = Field(..., description="MSKU id")
    warehouse: str = Field(..., min_length=1, examples=["WH-001"])
    quantity: int = Field(default=0, ge=0)
    reserved_quantity: int = Field(default=0, ge=0)


class InventoryResponse(BaseSchema):
    """Inventory record as stored."""

    id: int
    msku_id: int
    warehouse: str
    quantity: int
    reserved_quantity: int
    last_updated: datetime


class MSKUWithInventory(MSKUResponse):
    """MSKU with summed stock across warehouses."""

    inventory: list[InventoryResponse] = Field(default_factory=list)
    total_quantity: int = 0
