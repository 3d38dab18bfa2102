"""
Runtime configuration and the Supabase client.

    from config import settings, get_supabase_client
"""

from config.settings import settings, get_settings, Settings
from config.database import (
    get_supabase_client,
    get_admin_client,
    check_connection,
    StoreConnectionError,
)

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "get_supabase_client",
    "get_admin_client",
    "check_connection",
    "StoreConnectionError",
]
