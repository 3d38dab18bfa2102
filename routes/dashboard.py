"""
Dashboard API routes.

Headline metrics and the daily revenue chart.
"""

from fastapi import APIRouter, Depends, Query

from models.dashboard import DashboardMetrics
from models.sales import SalesChartPoint
from services.container import ServiceContainer, get_services
from routes.errors import handle_error

router = APIRouter()


# ===================
# ROUTES
# ===================

@router.get("/metrics", response_model=DashboardMetrics)
async def get_metrics(services: ServiceContainer = Depends(get_services)):
    """
    Get dashboard metrics.

    Returns SKU and mapping counts, total revenue, week-over-week revenue
    change and the mapping rate.
    """
    try:
        return services.dashboard.get_metrics()
    except Exception as e:
        return handle_error(e)


@router.get("/sales-chart", response_model=list[SalesChartPoint])
async def get_sales_chart(
    days: int = Query(7, ge=1, le=365, description="Number of days to chart"),
    services: ServiceContainer = Depends(get_services)
):
    """Get revenue per day for the last N days, oldest first."""
    try:
        return services.dashboard.get_sales_chart(days)
    except Exception as e:
        return handle_error(e)
