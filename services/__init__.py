"""
Business logic services.

Each service handles one domain area.
"""

from services.sku_service import SKUService, get_sku_service
from services.msku_service import MSKUService, get_msku_service
from services.mapping_service import MappingService, get_mapping_service
from services.inventory_service import InventoryService, get_inventory_service
from services.sales_service import SalesService, get_sales_service
from services.upload_service import UploadService, get_upload_service
from services.ingestion_service import (
    IngestionService,
    IngestionResult,
    get_ingestion_service,
)
from services.dashboard_service import DashboardService, get_dashboard_service
from services.ai_service import AIService, get_ai_service
from services.seed_service import SeedService, get_seed_service
from services.container import ServiceContainer, get_services

__all__ = [
    "SKUService",
    "get_sku_service",
    "MSKUService",
    "get_msku_service",
    "MappingService",
    "get_mapping_service",
    "InventoryService",
    "get_inventory_service",
    "SalesService",
    "get_sales_service",
    "UploadService",
    "get_upload_service",
    "IngestionService",
    "IngestionResult",
    "get_ingestion_service",
    "DashboardService",
    "get_dashboard_service",
    "AIService",
    "get_ai_service",
    "SeedService",
    "get_seed_service",
    "ServiceContainer",
    "get_services",
]
