"""Supabase client for the trip store."""

import logging

from supabase import Client, create_client

from ..config import Settings, settings as default_settings


def create_supabase_client(config: Settings | None = None) -> Client | None:
    """Create the Supabase client used for the lifetime of the application.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    config = config or default_settings
    if not config.supabase_url or not config.supabase_key:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        return create_client(config.supabase_url, config.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


def close_supabase_client(client: Client | None) -> None:
    """Release the client's HTTP sessions on shutdown."""
    if client is None:
        return
    # The PostgREST sub-client is created lazily on first query.
    postgrest = getattr(client, "_postgrest", None)
    session = getattr(postgrest, "session", None)
    if session is not None:
        session.close()
