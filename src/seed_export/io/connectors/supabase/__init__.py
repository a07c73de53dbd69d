"""
Supabase row source package.
"""

from .core import SupabaseRowSource
from .transport import SupabaseTransport

__all__ = ["SupabaseRowSource", "SupabaseTransport"]
