"""
SKU to MSKU mapping schemas.
"""

from pydantic import Field, field_validator
from typing import Optional
from decimal import Decimal
from enum import Enum

from models.base import BaseSchema, StoredRecord
from models.sku import SKUResponse, MSKUResponse


class MappingStatus(str, Enum):
    """Mapping lifecycle."""
    ACTIVE = "active"
    PENDING = "pending"
    INACTIVE = "inactive"


class MappingMethod(str, Enum):
    """How the mapping was produced."""
    MANUAL = "manual"
    AI = "ai"
    AUTO = "auto"


def _round_confidence(v):
    if v is None:
        return v
    return round(Decimal(str(v)), 2)


class MappingCreate(BaseSchema):
    """Create a mapping from one SKU to one MSKU."""

    sku_id: int = Field(..., description="SKU id")
    msku_id: int = Field(..., description="MSKU id")
    confidence: Decimal = Field(
        default=Decimal("1.00"),
        ge=0,
        le=1,
        description="Confidence score between 0 and 1"
    )
    status: MappingStatus = Field(default=MappingStatus.ACTIVE)
    mapped_by: MappingMethod = Field(default=MappingMethod.MANUAL)

    @field_validator("confidence", mode="before")
    @classmethod
    def round_confidence(cls, v):
        """Round to 2 decimal places."""
        return _round_confidence(v)


class MappingUpdate(BaseSchema):
    """
    Update an existing mapping.

    All fields optional - only provided fields are updated.
    """

    sku_id: Optional[int] = None
    msku_id: Optional[int] = None
    confidence: Optional[Decimal] = Field(None, ge=0, le=1)
    status: Optional[MappingStatus] = None
    mapped_by: Optional[MappingMethod] = None

    @field_validator("confidence", mode="before")
    @classmethod
    def round_confidence(cls, v):
        """Round to 2 decimal places."""
        return _round_confidence(v)


class MappingResponse(BaseSchema, StoredRecord):
    """Mapping as stored."""

    sku_id: int
    msku_id: int
    confidence: Optional[Decimal] = None
    status: MappingStatus
    mapped_by: Optional[MappingMethod] = None


class MappingWithDetails(MappingResponse):
    """Mapping joined with its SKU and MSKU."""

    sku: SKUResponse
    msku: MSKUResponse


class MappingSuggestionRequest(BaseSchema):
    """Ask the AI assistant to map a SKU name onto existing MSKUs."""

    sku_name: str = Field(..., min_length=1)
    available_mskus: list[str] = Field(default_factory=list)


class MappingSuggestion(BaseSchema):
    """One AI mapping suggestion."""

    suggested_msku: str
    confidence: float = Field(..., ge=0, le=1)
    reasoning: str = ""
