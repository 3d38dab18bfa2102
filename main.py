"""
Warehouse SKU Mapper API.

Run locally:
    uvicorn main:app --reload
"""

from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from config import settings, check_connection
from config.logging import configure_logging
from routes import include_routers
from services.container import ServiceContainer

VERSION = "0.1.0"

configure_logging(settings)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the service container and log the store's state on startup."""
    logger.info(
        "application_starting",
        environment=settings.environment,
        debug=settings.debug,
        ai_configured=settings.ai_configured
    )

    # Tests install their own container
    if getattr(app.state, "services", None) is None:
        app.state.services = ServiceContainer.build()

    db_status = check_connection(app.state.services.db)
    if db_status["status"] == "healthy":
        logger.info(
            "database_connected",
            skus=db_status["skus_count"],
            mskus=db_status["mskus_count"],
            mappings=db_status["mappings_count"]
        )
    else:
        logger.error("database_connection_failed", error=db_status.get("error"))

    yield

    logger.info("application_shutting_down")


app = FastAPI(
    title="Warehouse SKU Mapper",
    description="Sales CSV ingestion and SKU to MSKU mapping for multi-marketplace sellers",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

include_routers(app)


@app.get("/health")
async def health_check(request: Request):
    """Service status with row counts from the store."""
    services = getattr(request.app.state, "services", None)
    db_status = check_connection(services.db if services else None)

    return {
        "status": "healthy" if db_status["status"] == "healthy" else "degraded",
        "timestamp": datetime.utcnow().isoformat(),
        "environment": settings.environment,
        "ai_configured": settings.ai_configured,
        "database": db_status,
    }


@app.get("/")
async def root():
    """API name and a map of resource paths."""
    return {
        "name": "Warehouse SKU Mapper API",
        "version": VERSION,
        "docs": "/docs" if settings.debug else "Disabled in production",
        "health": "/health",
        "endpoints": {
            "dashboard": "/api/dashboard",
            "skus": "/api/skus",
            "mskus": "/api/mskus",
            "mappings": "/api/mappings",
            "upload": "/api/upload",
            "uploads": "/api/uploads",
            "sales": "/api/sales",
            "inventory": "/api/inventory",
            "ai": "/api/ai",
            "seed": "/api/seed",
        },
    }


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last-resort handler; routes convert their own errors first."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "details": str(exc) if settings.debug else None,
                "timestamp": datetime.utcnow().isoformat(),
            }
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.api_host, port=settings.api_port, reload=settings.debug)
