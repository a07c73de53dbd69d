"""
SQL literal rendering utilities.

Literals assume ``standard_conforming_strings = on``: the only escape applied
is doubling of single quotes. Backslashes are passed through untouched.
"""

from typing import Iterable, Optional


def escape_string(value: str) -> str:
    """Double every single quote in ``value``."""
    return value.replace("'", "''")


def quote_literal(value: str, cast: Optional[str] = None) -> str:
    """
    Quote a string as a SQL literal, optionally followed by a type cast.

    Examples:
        >>> quote_literal("O'Brien")
        "'O''Brien'"
        >>> quote_literal("2024-01-01T00:00:00Z", cast="timestamptz")
        "'2024-01-01T00:00:00Z'::timestamptz"
    """
    literal = f"'{escape_string(value)}'"
    if cast:
        return f"{literal}::{cast}"
    return literal


def array_literal(items: Iterable[str], element_type: str = "text") -> str:
    """
    Build a typed ``ARRAY[...]`` constructor from string items.

    The cast is always emitted so that an empty array still carries its
    element type.

    Examples:
        >>> array_literal(["tech", "large-cap"])
        "ARRAY['tech', 'large-cap']::text[]"
        >>> array_literal([])
        'ARRAY[]::text[]'
    """
    elements = ", ".join(quote_literal(item) for item in items)
    return f"ARRAY[{elements}]::{element_type}[]"
