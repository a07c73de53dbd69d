"""
SQL INSERT statement builders.

Provides a high-level builder for literal-valued upserts
(INSERT ... ON CONFLICT).
"""

from typing import List, Literal, Optional, Protocol, Sequence


class Dialect(Protocol):
    """Protocol for SQL dialects."""

    name: str

    def quote(self, identifier: str) -> str: ...
    def build_insert_on_conflict_do_nothing(
        self, table: str, columns: List[str], value_rows: Sequence[Sequence[str]], conflict_columns: List[str]
    ) -> str: ...
    def build_insert_on_conflict_do_update(
        self, table: str, columns: List[str], value_rows: Sequence[Sequence[str]], conflict_columns: List[str], update_columns: List[str]
    ) -> str: ...


class InsertBuilder:
    """
    High-level builder for INSERT ... ON CONFLICT statements.

    Example:
        >>> from seed_export.infrastructure.sql import InsertBuilder, PostgreSQLDialect
        >>> builder = InsertBuilder(PostgreSQLDialect())
        >>> print(builder.upsert("sports_leagues", ["id", "name"], [["1", "'NBA'"]], ["id"]))
        INSERT INTO sports_leagues (id, name)
        VALUES
          (1, 'NBA')
        ON CONFLICT (id) DO UPDATE SET
          name = EXCLUDED.name
    """

    def __init__(self, dialect: Dialect):
        """
        Initialize the InsertBuilder.

        Args:
            dialect: SQL dialect to use for statement generation
        """
        self.dialect = dialect

    def upsert(
        self,
        table: str,
        columns: List[str],
        value_rows: Sequence[Sequence[str]],
        conflict_columns: List[str],
        mode: Literal["do_nothing", "do_update"] = "do_update",
        update_columns: Optional[List[str]] = None,
    ) -> str:
        """
        Build an INSERT ... ON CONFLICT (upsert) statement.

        Args:
            table: Table name
            columns: List of column names to insert
            value_rows: Rendered literal rows, one per record
            conflict_columns: Columns for conflict detection
            mode: "do_nothing" or "do_update"
            update_columns: Columns to update on conflict. Defaults to every
                non-conflict column when None.

        Returns:
            INSERT ... ON CONFLICT SQL statement
        """
        if update_columns is None:
            update_columns = [c for c in columns if c not in conflict_columns]

        # An empty SET list is not valid SQL; fall back to DO NOTHING
        if mode == "do_nothing" or not update_columns:
            return self.dialect.build_insert_on_conflict_do_nothing(
                table, columns, value_rows, conflict_columns
            )
        return self.dialect.build_insert_on_conflict_do_update(
            table, columns, value_rows, conflict_columns, update_columns
        )
