"""Core SQL utilities package."""

from .identifier import format_identifier, needs_quoting, quote_identifier
from .literals import array_literal, escape_string, quote_literal

__all__ = [
    "quote_identifier",
    "format_identifier",
    "needs_quoting",
    "escape_string",
    "quote_literal",
    "array_literal",
]
