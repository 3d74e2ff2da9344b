"""
Offseason - Supabase Client.

Low-level database access. All profile queries go through here.
"""

from supabase import Client, create_client

from offseason.config import settings

# Singleton client instance
_service_client: Client | None = None


def get_service_client() -> Client:
    """
    Get the Supabase client with the service role key.

    Bypasses row level security. Used server-side for token validation and
    profile reads/writes on behalf of an authenticated user.
    Uses singleton pattern to reuse connection.
    """
    global _service_client

    if _service_client is None:
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client
