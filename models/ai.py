"""
AI assistant request/response schemas.

Generated SQL is advisory only and never executed.
"""

from typing import Any, Optional
from pydantic import Field

from models.base import BaseSchema


class AIQueryRequest(BaseSchema):
    """Natural-language question about warehouse data."""

    query: str = Field(default="", description="Question in plain English")


class AIQueryResult(BaseSchema):
    """Either generated SQL with an explanation, or an error with an explanation."""

    sql: Optional[str] = None
    explanation: str
    result: Optional[list[Any]] = None
    error: Optional[str] = None


class ChartConfigRequest(BaseSchema):
    """Ask the AI assistant how to chart some rows."""

    data: list[dict[str, Any]] = Field(default_factory=list)
    request: str = Field(..., min_length=1)


class ChartConfig(BaseSchema):
    """Chart suggestion."""

    chart_type: str
    config: dict[str, Any] = Field(default_factory=dict)
    title: str
