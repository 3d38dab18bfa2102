"""
SKU and master SKU (MSKU) schemas.

A SKU is the marketplace-specific code found in sales exports.
An MSKU is the canonical product code used for inventory and reporting.
"""

from pydantic import Field, field_validator
from typing import Optional

from models.base import BaseSchema, StoredRecord


class SKUCreate(BaseSchema):
    """
    Create a new SKU.

    SKUs are created lazily by CSV ingestion or manually by an admin.
    There is no update path once created.
    """

    sku: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Marketplace SKU code (unique)",
        examples=["cstle-pen", "golden-apple-1"]
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Display name"
    )
    marketplace: str = Field(
        ...,
        min_length=1,
        description="Marketplace the SKU belongs to"
    )

    @field_validator("marketplace")
    @classmethod
    def marketplace_lowercase(cls, v: str) -> str:
        """Marketplace is stored lower-cased."""
        return v.strip().lower()


class SKUResponse(BaseSchema, StoredRecord):
    """SKU as stored."""

    sku: str
    name: str
    marketplace: str


class MSKUCreate(BaseSchema):
    """
    Create a new master SKU.

    Never created by ingestion; only by admin action or accepted AI suggestion.
    """

    msku: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Master SKU code (unique)",
        examples=["CSTLE-PEN", "GOLDEN-APPLE"]
    )
    name: str = Field(..., min_length=1, description="Display name")
    category: Optional[str] = Field(None, description="Product category")


class MSKUResponse(BaseSchema, StoredRecord):
    """Master SKU as stored."""

    msku: str
    name: str
    category: Optional[str] = None
