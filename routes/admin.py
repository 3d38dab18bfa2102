"""
Admin API routes (development helpers).
"""

from fastapi import APIRouter, Depends

from config import settings
from services.container import ServiceContainer, get_services
from services.seed_service import SeedService
from routes.errors import handle_error

router = APIRouter()


# ===================
# ROUTES
# ===================

@router.post("/api/seed")
async def seed_database(services: ServiceContainer = Depends(get_services)):
    """
    Load sample data.

    Raises:
        403: Not running in development
    """
    try:
        counts = SeedService(services.db).seed(settings.environment)
        return {"message": "Database seeded successfully", "created": counts}
    except Exception as e:
        return handle_error(e)
