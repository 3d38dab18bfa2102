"""
Sales fact schemas.

One sales fact is created per successfully normalized CSV row.
"""

from datetime import datetime
from typing import Any, Optional
from decimal import Decimal
from pydantic import Field, field_validator

from models.base import BaseSchema
from models.sku import SKUResponse, MSKUResponse


class SalesFactCreate(BaseSchema):
    """Schema for creating a sales fact."""

    sku_id: int = Field(..., description="SKU id")
    msku_id: Optional[int] = Field(None, description="MSKU id if a mapping existed at processing time")
    order_date: datetime
    quantity: int = Field(..., ge=1)
    revenue: Decimal = Field(default=Decimal("0"))
    marketplace: str = Field(..., min_length=1)
    raw_data: Optional[dict[str, Any]] = Field(None, description="Original CSV row")

    @field_validator("revenue", mode="before")
    @classmethod
    def round_revenue(cls, v):
        """Round to 2 decimal places."""
        if v is not None:
            return round(Decimal(str(v)), 2)
        return v


class SalesFactResponse(BaseSchema):
    """Schema for sales fact response."""

    id: int
    sku_id: int
    msku_id: Optional[int] = None
    order_date: datetime
    quantity: int
    revenue: Decimal
    marketplace: str
    raw_data: Optional[dict[str, Any]] = None
    processed_at: datetime

    @field_validator("revenue", mode="before")
    @classmethod
    def ensure_decimal(cls, v):
        """Ensure revenue is Decimal."""
        if v is not None:
            return Decimal(str(v))
        return v


class SalesFactWithDetails(SalesFactResponse):
    """Sales fact joined with its SKU and (optional) MSKU."""

    sku: SKUResponse
    msku: Optional[MSKUResponse] = None


class TopProduct(BaseSchema):
    """Revenue and units per MSKU."""

    msku: MSKUResponse
    total_revenue: Decimal
    total_quantity: int


class SalesChartPoint(BaseSchema):
    """Revenue for one calendar day."""

    date: str
    revenue: Decimal
