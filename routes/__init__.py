"""
API route modules, one per resource.

include_routers() mounts all of them on the app.
"""

from fastapi import FastAPI

from routes.dashboard import router as dashboard_router
from routes.skus import router as skus_router
from routes.mskus import router as mskus_router
from routes.mappings import router as mappings_router
from routes.uploads import router as uploads_router
from routes.sales import router as sales_router
from routes.inventory import router as inventory_router
from routes.ai import router as ai_router
from routes.admin import router as admin_router

# (router, prefix, tag); uploads and admin declare full paths
ROUTERS = [
    (dashboard_router, "/api/dashboard", "Dashboard"),
    (skus_router, "/api/skus", "SKUs"),
    (mskus_router, "/api/mskus", "MSKUs"),
    (mappings_router, "/api/mappings", "Mappings"),
    (sales_router, "/api/sales", "Sales"),
    (inventory_router, "/api/inventory", "Inventory"),
    (ai_router, "/api/ai", "AI"),
    (uploads_router, "", "Uploads"),
    (admin_router, "", "Admin"),
]


def include_routers(app: FastAPI) -> None:
    """Mount every API router on the app."""
    for router, prefix, tag in ROUTERS:
        app.include_router(router, prefix=prefix, tags=[tag])


__all__ = [
    "include_routers",
    "dashboard_router",
    "skus_router",
    "mskus_router",
    "mappings_router",
    "uploads_router",
    "sales_router",
    "inventory_router",
    "ai_router",
    "admin_router",
]
