"""
Row source connectors.

Every connector satisfies ``RowSource``: ``fetch_rows(table_name)`` returns all
rows of a table, ``[]`` for an empty table, and raises
``SourceUnavailableError`` when the table cannot be read.
"""

from .exceptions import (
    SourceAuthenticationError,
    SourceConfigurationError,
    SourceNotFoundError,
    SourceRateLimitError,
    SourceUnavailableError,
)
from .json_directory import JsonDirectoryRowSource
from .protocols import Row, RowSource
from .supabase import SupabaseRowSource

__all__ = [
    "Row",
    "RowSource",
    "JsonDirectoryRowSource",
    "SupabaseRowSource",
    "SourceAuthenticationError",
    "SourceConfigurationError",
    "SourceNotFoundError",
    "SourceRateLimitError",
    "SourceUnavailableError",
]
