"""
Sales API routes.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from models.sales import SalesFactWithDetails, TopProduct
from services.container import ServiceContainer, get_services
from routes.errors import handle_error
from exceptions import ValidationError

router = APIRouter()


# ===================
# ROUTES
# ===================

@router.get("", response_model=list[SalesFactWithDetails])
async def list_sales(
    start_date: Optional[datetime] = Query(None, description="Earliest order date (inclusive)"),
    end_date: Optional[datetime] = Query(None, description="Latest order date (inclusive)"),
    services: ServiceContainer = Depends(get_services)
):
    """
    List sales facts with SKU and MSKU, newest order first.

    Pass both start_date and end_date to restrict to a date range.
    """
    try:
        if start_date and end_date:
            if start_date > end_date:
                raise ValidationError(
                    "start_date must be before end_date",
                    details={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()}
                )
            return services.sales.get_by_date_range(start_date, end_date)
        return services.sales.get_all_with_details()
    except Exception as e:
        return handle_error(e)


@router.get("/top-products", response_model=list[TopProduct])
async def get_top_products(
    limit: int = Query(10, ge=1, le=100, description="Number of MSKUs to return"),
    services: ServiceContainer = Depends(get_services)
):
    """Top-selling MSKUs by revenue."""
    try:
        return services.sales.get_top_products(limit)
    except Exception as e:
        return handle_error(e)
