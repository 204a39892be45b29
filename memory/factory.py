"""Durable store factory."""

import logging
from enum import Enum
from typing import Optional

from config.settings import Settings
from .base_store import DurableStore
from .sqlite_store import SQLiteStore
from .supabase_store import SupabaseStore

logger = logging.getLogger(__name__)


class StoreBackend(str, Enum):
    """Supported durable store backends."""
    SUPABASE = "supabase"
    SQLITE = "sqlite"


def create_store(settings: Settings) -> Optional[DurableStore]:
    """
    Create the durable store selected by settings.

    Args:
        settings: Application settings

    Returns:
        Configured store, or None when the hosted store lacks credentials

    Raises:
        ValueError: If the backend is not supported
    """
    backend = StoreBackend(settings.store_backend)

    if backend == StoreBackend.SQLITE:
        return SQLiteStore(db_path=settings.db_path)

    if not (settings.supabase_url and settings.supabase_key):
        logger.warning("SUPABASE_URL/SUPABASE_KEY not set; execution logging disabled")
        return None

    return SupabaseStore(
        base_url=settings.supabase_url,
        api_key=settings.supabase_key,
        timeout=settings.request_timeout
    )
