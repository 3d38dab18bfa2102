"""
Dashboard metric schemas.
"""

from models.base import BaseSchema


class DashboardMetrics(BaseSchema):
    """Headline numbers for the dashboard cards."""

    total_skus: int
    mapped_skus: int
    pending_mappings: int
    total_revenue: str
    revenue_change: str
    mapping_rate: str
