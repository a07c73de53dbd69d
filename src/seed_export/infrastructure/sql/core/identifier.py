"""
SQL identifier handling utilities.

Provides functions for quoting SQL identifiers (table names,
column names). Seed statements keep plain lower-case identifiers bare so the
generated file reads like hand-written SQL, and quote everything else.
"""

import re

# Plain identifiers PostgreSQL folds to themselves
_PLAIN_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_$]*$")

# Reserved key words that cannot be used as bare column or table names
RESERVED_WORDS = frozenset(
    {
        "all",
        "analyse",
        "analyze",
        "and",
        "any",
        "array",
        "as",
        "asc",
        "asymmetric",
        "both",
        "case",
        "cast",
        "check",
        "collate",
        "column",
        "constraint",
        "create",
        "current_date",
        "current_role",
        "current_time",
        "current_timestamp",
        "current_user",
        "default",
        "deferrable",
        "desc",
        "distinct",
        "do",
        "else",
        "end",
        "except",
        "false",
        "fetch",
        "for",
        "foreign",
        "from",
        "grant",
        "group",
        "having",
        "in",
        "initially",
        "intersect",
        "into",
        "lateral",
        "leading",
        "limit",
        "localtime",
        "localtimestamp",
        "not",
        "null",
        "offset",
        "on",
        "only",
        "or",
        "order",
        "placing",
        "primary",
        "references",
        "returning",
        "select",
        "session_user",
        "some",
        "symmetric",
        "table",
        "then",
        "to",
        "trailing",
        "true",
        "union",
        "unique",
        "user",
        "using",
        "variadic",
        "when",
        "where",
        "window",
        "with",
    }
)


def quote_identifier(name: str) -> str:
    """
    Quote a SQL identifier (table or column name).

    Args:
        name: The identifier to quote

    Returns:
        Double-quoted identifier with internal double quotes doubled

    Examples:
        >>> quote_identifier("symbol")
        '"symbol"'
        >>> quote_identifier('odd"name')
        '"odd""name"'
    """
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def needs_quoting(name: str) -> bool:
    """Return True when ``name`` cannot be written as a bare identifier."""
    return not _PLAIN_IDENTIFIER.match(name) or name in RESERVED_WORDS


def format_identifier(name: str) -> str:
    """
    Render an identifier bare when possible, quoted otherwise.

    Examples:
        >>> format_identifier("created_at")
        'created_at'
        >>> format_identifier("order")
        '"order"'
        >>> format_identifier("Display Name")
        '"Display Name"'
    """
    if needs_quoting(name):
        return quote_identifier(name)
    return name
