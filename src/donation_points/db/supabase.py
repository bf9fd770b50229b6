"""Process-wide Supabase client for the Python backend.

The client is created once when the application starts and closed when it
shuts down. Stores receive it through their constructor.
"""

import logging

from supabase import Client, create_client

from ..config import Settings

_client: Client | None = None


def init_supabase_client(settings: Settings) -> Client | None:
    """Create the shared Supabase client if credentials are configured.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    global _client
    if _client is not None:
        return _client

    if not settings.supabase_configured:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        _client = create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None
    logging.info(f"Supabase client initialised for {settings.supabase_url}")
    return _client


def get_supabase_client() -> Client | None:
    """Return the client created by :func:`init_supabase_client`, if any."""
    return _client


def close_supabase_client() -> None:
    """Release the HTTP session held by the shared client."""
    global _client
    if _client is None:
        return

    session = getattr(_client.postgrest, "session", None)
    if session is not None:
        try:
            session.close()
        except Exception as e:
            logging.warning(f"Error while closing Supabase session: {e}")
    _client = None
    logging.info("Supabase client closed")
