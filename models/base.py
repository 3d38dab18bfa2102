"""
Shared schema bases.

Every table row returned by the store carries an integer id; catalog rows
(SKUs, MSKUs, mappings) also carry created_at.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for all request and response schemas.

    Strings are stripped, assignments are validated, and response models
    can be built straight from store rows.
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


class StoredRecord(BaseModel):
    """Catalog row identity: serial id and insert time."""
    id: int
    created_at: datetime
