"""
SQL module for centralized SQL generation.

This module provides reusable utilities for building seed SQL statements with
identifier formatting, literal quoting and PostgreSQL upsert syntax.
"""

from .core.identifier import format_identifier, quote_identifier
from .core.literals import array_literal, escape_string, quote_literal
from .dialects.postgresql import PostgreSQLDialect
from .operations.insert import InsertBuilder

__all__ = [
    "quote_identifier",
    "format_identifier",
    "escape_string",
    "quote_literal",
    "array_literal",
    "PostgreSQLDialect",
    "InsertBuilder",
]
