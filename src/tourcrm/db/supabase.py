"""Supabase client for the remote document store."""

import logging
from functools import lru_cache
from typing import Optional

from supabase import Client, create_client

from ..config import settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_supabase_client(url: Optional[str] = None, key: Optional[str] = None) -> Client | None:
    """Get a cached Supabase client for the given credentials.

    Falls back to the configured settings when no credentials are passed.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    url = url or settings.supabase_url
    key = key or settings.supabase_key
    if not url or not key:
        logger.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        return create_client(url, key)
    except Exception as e:
        logger.error(f"Failed to create Supabase client: {e}")
        return None
