"""Hosted auth provider integration."""

from .supabase_auth import SupabaseAuthClient

__all__ = ["SupabaseAuthClient"]
