"""Database clients and utilities."""

from .supabase import close_supabase_client, create_supabase_client

__all__ = ["create_supabase_client", "close_supabase_client"]
