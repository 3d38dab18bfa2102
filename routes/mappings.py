"""
SKU mapping API routes.

Manual mapping CRUD plus name-based and AI-based MSKU suggestions.
"""

from fastapi import APIRouter, Depends, Response

from models.sku import MSKUResponse
from models.mapping import (
    MappingCreate,
    MappingUpdate,
    MappingResponse,
    MappingWithDetails,
    MappingSuggestionRequest,
    MappingSuggestion,
)
from services.container import ServiceContainer, get_services
from routes.errors import handle_error
from exceptions import AIServiceUnavailableError

router = APIRouter()


# ===================
# MAPPING ROUTES
# ===================

@router.get("", response_model=list[MappingWithDetails])
async def list_mappings(services: ServiceContainer = Depends(get_services)):
    """List mappings with their SKU and MSKU, newest first."""
    try:
        return services.mappings.get_all_with_details()
    except Exception as e:
        return handle_error(e)


@router.post("", response_model=MappingResponse, status_code=201)
async def create_mapping(data: MappingCreate, services: ServiceContainer = Depends(get_services)):
    """
    Map a SKU onto an MSKU.

    Raises:
        404: SKU or MSKU not found
        422: Validation error
    """
    try:
        return services.mappings.create(data)
    except Exception as e:
        return handle_error(e)


@router.put("/{mapping_id}", response_model=MappingResponse)
async def update_mapping(
    mapping_id: int,
    data: MappingUpdate,
    services: ServiceContainer = Depends(get_services)
):
    """
    Update a mapping. Only provided fields change.

    Raises:
        404: Mapping not found
    """
    try:
        return services.mappings.update(mapping_id, data)
    except Exception as e:
        return handle_error(e)


@router.delete("/{mapping_id}", status_code=204)
async def delete_mapping(mapping_id: int, services: ServiceContainer = Depends(get_services)):
    """
    Delete a mapping.

    Raises:
        404: Mapping not found
    """
    try:
        services.mappings.delete(mapping_id)
        return Response(status_code=204)
    except Exception as e:
        return handle_error(e)


# ===================
# SUGGESTION ROUTES
# ===================

@router.get("/suggestions/{sku_id}", response_model=list[MSKUResponse])
async def get_mapping_suggestions(sku_id: int, services: ServiceContainer = Depends(get_services)):
    """
    Suggest MSKUs whose name resembles the SKU's name.

    Raises:
        404: SKU not found
    """
    try:
        return services.mappings.get_suggested_mskus(sku_id)
    except Exception as e:
        return handle_error(e)


@router.post("/ai-suggestions", response_model=list[MappingSuggestion])
async def get_ai_mapping_suggestions(
    data: MappingSuggestionRequest,
    services: ServiceContainer = Depends(get_services)
):
    """
    Ask the AI assistant for up to three MSKU suggestions.

    Raises:
        503: AI assistant not configured
    """
    try:
        if not services.ai.available:
            raise AIServiceUnavailableError()
        return services.ai.suggest_sku_mapping(data.sku_name, data.available_mskus)
    except Exception as e:
        return handle_error(e)
