"""
Service container.

Builds every service once around a single store client. The app creates
one in its lifespan and keeps it on app.state; routes reach it through
get_services().
"""

from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Request

from config import get_supabase_client
from services.sku_service import SKUService
from services.msku_service import MSKUService
from services.mapping_service import MappingService
from services.inventory_service import InventoryService
from services.sales_service import SalesService
from services.upload_service import UploadService
from services.ingestion_service import IngestionService
from services.dashboard_service import DashboardService
from services.ai_service import AIService


@dataclass
class ServiceContainer:
    """All request-facing services sharing one store client."""
    db: Any
    skus: SKUService
    mskus: MSKUService
    mappings: MappingService
    inventory: InventoryService
    sales: SalesService
    uploads: UploadService
    ingestion: IngestionService
    dashboard: DashboardService
    ai: AIService

    @classmethod
    def build(cls, db=None, ai_client: Optional[Any] = None) -> "ServiceContainer":
        """
        Wire the services together.

        Args:
            db: Store client; defaults to the shared Supabase client
            ai_client: Anthropic client override, mainly for tests
        """
        db = db or get_supabase_client()

        skus = SKUService(db)
        mappings = MappingService(db)
        sales = SalesService(db)
        uploads = UploadService(db)

        return cls(
            db=db,
            skus=skus,
            mskus=MSKUService(db),
            mappings=mappings,
            inventory=InventoryService(db),
            sales=sales,
            uploads=uploads,
            ingestion=IngestionService(
                uploads=uploads,
                skus=skus,
                mappings=mappings,
                sales=sales,
            ),
            dashboard=DashboardService(db, sales=sales),
            ai=AIService(client=ai_client),
        )


def get_services(request: Request) -> ServiceContainer:
    """FastAPI dependency returning the app's service container."""
    return request.app.state.services
