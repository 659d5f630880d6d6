"""Supabase infrastructure package."""

from .supabase_client import SupabaseRestClient

__all__ = ["SupabaseRestClient"]
