"""
Bookshelf - Remote data access.

Supabase-backed implementation of the RemoteGateway protocol.
"""

from bookshelf.db.client import get_client
from bookshelf.db.gateway import SupabaseGateway

__all__ = [
    "get_client",
    "SupabaseGateway",
]
