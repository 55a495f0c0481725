# core/supabase_client.py
# Supabase client used to validate access tokens remotely

import logging

from django.conf import settings
from supabase import create_client

logger = logging.getLogger("scheduler.auth")

_supabase_client = None


def get_supabase_client():
    """
    Get the Supabase client instance (singleton pattern).
    Uses the anon key: token validation needs no elevated access.
    Returns None when Supabase is not configured.
    """
    global _supabase_client

    if _supabase_client is None:
        url = getattr(settings, "SUPABASE_URL", "")
        key = getattr(settings, "SUPABASE_ANON_KEY", "")

        if not url or not key:
            logger.warning("Supabase credentials not configured")
            return None

        _supabase_client = create_client(url, key)
        logger.info("Supabase client initialized")

    return _supabase_client


def fetch_supabase_user(token: str) -> dict | None:
    """
    Ask Supabase who owns `token`.

    Returns {"id": ..., "email": ...} for a valid token, None when the
    token is rejected or Supabase is unreachable/unconfigured.
    """
    client = get_supabase_client()
    if not client:
        return None

    try:
        response = client.auth.get_user(token)
    except Exception as e:
        # gotrue raises its own AuthApiError family plus transport errors
        logger.debug(f"Supabase rejected token: {e}")
        return None

    user = getattr(response, "user", None)
    if user is None:
        return None

    return {"id": str(user.id), "email": getattr(user, "email", None)}
