"""
Supabase client access.

Services receive a client through the service container; outside the
container (scripts, the health check) they fall back to the cached one here.
"""

from functools import lru_cache
from typing import Optional

from supabase import create_client, Client
import structlog

from config.settings import settings

logger = structlog.get_logger(__name__)

# Health check field -> table counted
HEALTH_COUNTS = {
    "skus_count": "skus",
    "mskus_count": "mskus",
    "mappings_count": "sku_mappings",
}


class StoreConnectionError(Exception):
    """The Supabase project could not be reached."""


@lru_cache()
def get_supabase_client() -> Client:
    """
    Cached anon-key client, probed once on creation.

    Raises:
        StoreConnectionError: If the probe query fails
    """
    logger.info("connecting_to_supabase", url=settings.supabase_url[:30] + "...")

    try:
        client = create_client(settings.supabase_url, settings.supabase_key)
        client.table("skus").select("id").limit(1).execute()
    except Exception as e:
        logger.error(
            "supabase_connection_failed",
            error=str(e),
            error_type=type(e).__name__
        )
        raise StoreConnectionError(f"Failed to connect to Supabase: {e}") from e

    logger.info("supabase_connected")
    return client


def get_admin_client() -> Optional[Client]:
    """
    Service-role client for seeding, or None when no service key is set.
    """
    if not settings.supabase_service_key:
        logger.warning("admin_client_not_configured")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_service_key)
    except Exception as e:
        logger.error("admin_client_failed", error=str(e))
        return None


def check_connection(client=None) -> dict:
    """
    Count rows in the catalog tables.

    Never raises; a failure is reported as status "unhealthy".

    Args:
        client: Client to probe; defaults to the cached client
    """
    try:
        client = client or get_supabase_client()
        counts = {
            field: client.table(table).select("id", count="exact").execute().count
            for field, table in HEALTH_COUNTS.items()
        }
        return {"status": "healthy", **counts}

    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}

