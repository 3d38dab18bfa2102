"""
Dashboard service.

Headline metrics for the dashboard cards and the revenue chart.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional
import structlog

from config import get_supabase_client
from models.dashboard import DashboardMetrics
from models.mapping import MappingStatus
from models.sales import SalesChartPoint
from services.sales_service import SalesService, get_sales_service, to_decimal, parse_timestamp
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)


def format_percent(numerator: float, denominator: float) -> str:
    """One-decimal percentage string, or "0%" when the denominator is 0."""
    if denominator <= 0:
        return "0%"
    return f"{numerator / denominator * 100:.1f}%"


class DashboardService:
    """Dashboard aggregations."""

    def __init__(self, db=None, sales: Optional[SalesService] = None):
        self.db = db or get_supabase_client()
        self.sales = sales or get_sales_service()

    def _count(self, table: str, **filters) -> int:
        query = self.db.table(table).select("id", count="exact")
        for column, value in filters.items():
            query = query.eq(column, value)
        result = query.execute()
        return result.count or 0

    def get_metrics(self, now: Optional[datetime] = None) -> DashboardMetrics:
        """
        Compute dashboard metrics.

        mapped_skus counts mapping rows, so it can exceed the number of
        distinct mapped SKUs. revenue_change compares the last 7 days with
        the 7 days before them.
        """
        now = now or datetime.now(timezone.utc)
        week_ago = now - timedelta(days=7)
        two_weeks_ago = now - timedelta(days=14)

        try:
            total_skus = self._count("skus")
            mapped_skus = self._count("sku_mappings")
            pending_mappings = self._count("sku_mappings", status=MappingStatus.PENDING.value)
        except Exception as e:
            logger.error("dashboard_counts_failed", error=str(e))
            raise DatabaseError("select", str(e))

        total = Decimal("0")
        last_week = Decimal("0")
        previous_week = Decimal("0")
        rows = self.sales.get_rows()

        for row in rows:
            revenue = to_decimal(row.get("revenue"))
            order_date = parse_timestamp(row["order_date"])
            total += revenue
            if order_date >= week_ago:
                last_week += revenue
            elif order_date >= two_weeks_ago:
                previous_week += revenue

        metrics = DashboardMetrics(
            total_skus=total_skus,
            mapped_skus=mapped_skus,
            pending_mappings=pending_mappings,
            total_revenue=str(total) if rows else "0",
            revenue_change=format_percent(
                float(last_week - previous_week), float(previous_week)
            ),
            mapping_rate=format_percent(mapped_skus, total_skus),
        )

        logger.info(
            "dashboard_metrics_computed",
            total_skus=total_skus,
            mapped_skus=mapped_skus,
            total_revenue=metrics.total_revenue
        )
        return metrics

    def get_sales_chart(self, days: int = 7) -> list[SalesChartPoint]:
        """Per-day revenue for the last `days` days."""
        return self.sales.get_chart_data(days)


_dashboard_service: Optional[DashboardService] = None


def get_dashboard_service() -> DashboardService:
    """Get or create dashboard service instance."""
    global _dashboard_service
    if _dashboard_service is None:
        _dashboard_service = DashboardService()
    return _dashboard_service
