"""
Inventory API routes.
"""

from fastapi import APIRouter, Depends

from models.inventory import InventoryCreate, InventoryResponse, MSKUWithInventory
from services.container import ServiceContainer, get_services
from routes.errors import handle_error

router = APIRouter()


# ===================
# ROUTES
# ===================

@router.get("", response_model=list[MSKUWithInventory])
async def list_inventory(services: ServiceContainer = Depends(get_services)):
    """Stock per MSKU with warehouse records and totals."""
    try:
        return services.mskus.get_with_inventory()
    except Exception as e:
        return handle_error(e)


@router.get("/{msku_id}", response_model=list[InventoryResponse])
async def get_inventory_for_msku(msku_id: int, services: ServiceContainer = Depends(get_services)):
    """Warehouse records for one MSKU."""
    try:
        return services.inventory.get_by_msku(msku_id)
    except Exception as e:
        return handle_error(e)


@router.post("", response_model=InventoryResponse, status_code=201)
async def record_inventory(data: InventoryCreate, services: ServiceContainer = Depends(get_services)):
    """
    Record a stock level for an MSKU in a warehouse.

    Raises:
        404: MSKU not found
    """
    try:
        return services.inventory.record(data)
    except Exception as e:
        return handle_error(e)
