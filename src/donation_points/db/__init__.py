"""Database clients and utilities."""

from .supabase import close_supabase_client, get_supabase_client, init_supabase_client

__all__ = ["init_supabase_client", "get_supabase_client", "close_supabase_client"]
