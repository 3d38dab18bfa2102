"""
SKU API routes.
"""

from fastapi import APIRouter, Depends, Query

from models.sku import SKUCreate, SKUResponse
from services.container import ServiceContainer, get_services
from routes.errors import handle_error

router = APIRouter()


# ===================
# ROUTES
# ===================

@router.get("", response_model=list[SKUResponse])
async def list_skus(services: ServiceContainer = Depends(get_services)):
    """List all SKUs, newest first."""
    try:
        return services.skus.get_all()
    except Exception as e:
        return handle_error(e)


@router.get("/unmapped", response_model=list[SKUResponse])
async def list_unmapped_skus(services: ServiceContainer = Depends(get_services)):
    """List SKUs that have no mapping."""
    try:
        return services.skus.get_unmapped()
    except Exception as e:
        return handle_error(e)


@router.get("/search", response_model=list[SKUResponse])
async def search_skus(
    q: str = Query("", description="Substring of SKU code or name"),
    services: ServiceContainer = Depends(get_services)
):
    """
    Search SKUs by code or name.

    Returns at most 10 results; an empty query returns [].
    """
    try:
        return services.skus.search(q)
    except Exception as e:
        return handle_error(e)


@router.post("", response_model=SKUResponse, status_code=201)
async def create_sku(data: SKUCreate, services: ServiceContainer = Depends(get_services)):
    """
    Create a SKU.

    Raises:
        409: SKU code already exists
        422: Validation error
    """
    try:
        return services.skus.create(data)
    except Exception as e:
        return handle_error(e)
