"""
Master SKU API routes.
"""

from fastapi import APIRouter, Depends

from models.sku import MSKUCreate, MSKUResponse
from models.inventory import MSKUWithInventory
from services.container import ServiceContainer, get_services
from routes.errors import handle_error

router = APIRouter()


# ===================
# ROUTES
# ===================

@router.get("", response_model=list[MSKUResponse])
async def list_mskus(services: ServiceContainer = Depends(get_services)):
    """List all MSKUs, newest first."""
    try:
        return services.mskus.get_all()
    except Exception as e:
        return handle_error(e)


@router.get("/with-inventory", response_model=list[MSKUWithInventory])
async def list_mskus_with_inventory(services: ServiceContainer = Depends(get_services)):
    """List MSKUs with their warehouse stock and total quantity."""
    try:
        return services.mskus.get_with_inventory()
    except Exception as e:
        return handle_error(e)


@router.post("", response_model=MSKUResponse, status_code=201)
async def create_msku(data: MSKUCreate, services: ServiceContainer = Depends(get_services)):
    """
    Create an MSKU.

    Raises:
        409: MSKU code already exists
        422: Validation error
    """
    try:
        return services.mskus.create(data)
    except Exception as e:
        return handle_error(e)
