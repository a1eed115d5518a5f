"""
Bookshelf - Supabase Client.

Low-level database access. The gateway's queries all go through here.
"""

from supabase import Client, create_client

from bookshelf.config import settings

# Singleton client instance
_client: Client | None = None


def get_client() -> Client:
    """
    Get the Supabase client.

    Uses singleton pattern to reuse connection.
    """
    global _client

    if _client is None:
        _client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _client
