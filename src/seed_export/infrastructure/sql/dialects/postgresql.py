"""
PostgreSQL-specific SQL dialect implementation.

Provides PostgreSQL-specific SQL syntax for multi-row INSERT statements,
conflict handling, identifier formatting and the type names used in casts.
"""

from typing import List, Sequence

from ..core.identifier import format_identifier

INDENT = "  "


class PostgreSQLDialect:
    """PostgreSQL SQL dialect implementation."""

    name = "postgresql"

    json_type = "jsonb"
    timestamp_type = "timestamptz"
    text_type = "text"
    float_type = "double precision"

    def quote(self, identifier: str) -> str:
        """Format an identifier, quoting it only when PostgreSQL requires it."""
        return format_identifier(identifier)

    def build_insert(
        self,
        table: str,
        columns: List[str],
        value_rows: Sequence[Sequence[str]],
    ) -> str:
        """
        Build a multi-row INSERT statement from pre-rendered literals.

        Args:
            table: Table name
            columns: List of column names
            value_rows: One sequence of SQL literals per row, in column order

        Returns:
            INSERT SQL statement without a trailing semicolon
        """
        quoted_cols = ", ".join(self.quote(c) for c in columns)
        tuples = ",\n".join(
            f"{INDENT}({', '.join(literals)})" for literals in value_rows
        )
        return f"INSERT INTO {self.quote(table)} ({quoted_cols})\nVALUES\n{tuples}"

    def build_insert_on_conflict_do_nothing(
        self,
        table: str,
        columns: List[str],
        value_rows: Sequence[Sequence[str]],
        conflict_columns: List[str],
    ) -> str:
        """
        Build INSERT ... ON CONFLICT DO NOTHING statement.

        Args:
            table: Table name
            columns: List of column names
            value_rows: Rendered literal rows
            conflict_columns: Columns for conflict detection

        Returns:
            INSERT ... ON CONFLICT DO NOTHING SQL statement
        """
        base_insert = self.build_insert(table, columns, value_rows)
        conflict_cols = ", ".join(self.quote(c) for c in conflict_columns)
        return f"{base_insert}\nON CONFLICT ({conflict_cols}) DO NOTHING"

    def build_insert_on_conflict_do_update(
        self,
        table: str,
        columns: List[str],
        value_rows: Sequence[Sequence[str]],
        conflict_columns: List[str],
        update_columns: List[str],
    ) -> str:
        """
        Build INSERT ... ON CONFLICT DO UPDATE statement.

        Every update column is overwritten with the incoming (EXCLUDED) value,
        one assignment per line.

        Args:
            table: Table name
            columns: List of column names to insert
            value_rows: Rendered literal rows
            conflict_columns: Columns for conflict detection
            update_columns: Columns to update on conflict

        Returns:
            INSERT ... ON CONFLICT DO UPDATE SQL statement
        """
        base_insert = self.build_insert(table, columns, value_rows)
        conflict_cols = ", ".join(self.quote(c) for c in conflict_columns)
        update_set = ",\n".join(
            f"{INDENT}{self.quote(col)} = EXCLUDED.{self.quote(col)}"
            for col in update_columns
        )
        return (
            f"{base_insert}\nON CONFLICT ({conflict_cols}) DO UPDATE SET\n{update_set}"
        )
