"""
Upsert statement compiler.

Turns one table spec and its fetched rows into a ``CompiledStatement``: a
banner comment followed by either a no-data comment or a single
``INSERT ... VALUES ... ON CONFLICT ... DO UPDATE SET ...;`` covering every
row. Re-applying the statement leaves the destination unchanged because every
row either inserts or overwrites the row matching its conflict column.
"""

from typing import Any, List, Mapping, Optional, Sequence

import structlog

from seed_export.config.table_registry import EncoderOptions, TableSpec
from seed_export.domain.seed_values import encode_value
from seed_export.infrastructure.sql import InsertBuilder, PostgreSQLDialect

from .exceptions import DivergentRowShapeError, StatementCompilationError
from .models import CompiledStatement

logger = structlog.get_logger(__name__)

BANNER_RULE = "-- " + "=" * 60

Row = Mapping[str, Any]


def banner(title: str) -> List[str]:
    """Three-line comment banner used for table sections."""
    return [BANNER_RULE, f"-- {title}", BANNER_RULE]


def no_data_comment(table_name: str) -> str:
    return f"-- No data found for {table_name}"


class StatementCompiler:
    """
    Compiles fetched rows into idempotent upsert statements.

    Example:
        >>> compiler = StatementCompiler()
        >>> spec = TableSpec(name="sports_leagues", primary_key="id")
        >>> print(compiler.compile(spec, [{"id": 1, "name": "NBA"}]).sql)
        -- ============================================================
        -- SEED DATA FOR SPORTS_LEAGUES
        -- ============================================================
        -- Total records: 1
        -- Primary key: id
        <BLANKLINE>
        INSERT INTO sports_leagues (id, name)
        VALUES
          (1, 'NBA')
        ON CONFLICT (id) DO UPDATE SET
          name = EXCLUDED.name;
    """

    def __init__(
        self,
        options: Optional[EncoderOptions] = None,
        dialect: Optional[PostgreSQLDialect] = None,
    ):
        self.options = options or EncoderOptions()
        self.dialect = dialect or PostgreSQLDialect()
        self.builder = InsertBuilder(self.dialect)

    def column_list(self, spec: TableSpec, rows: Sequence[Row]) -> List[str]:
        """Columns of the first row, in order, minus the excluded ones."""
        return [col for col in rows[0].keys() if col not in spec.exclude_columns]

    def update_columns(self, spec: TableSpec, columns: List[str]) -> List[str]:
        """Columns reassigned on conflict: all but the conflict and immutable columns."""
        return [
            col
            for col in columns
            if col != spec.conflict_column and col not in self.options.immutable_columns
        ]

    def _check_row_shapes(self, spec: TableSpec, rows: Sequence[Row], columns: List[str]) -> None:
        expected = frozenset(columns)
        for index, row in enumerate(rows[1:], start=1):
            actual = frozenset(col for col in row.keys() if col not in spec.exclude_columns)
            if actual != expected:
                raise DivergentRowShapeError(
                    spec.name,
                    row_index=index,
                    missing_columns=expected - actual,
                    extra_columns=actual - expected,
                )

    def encode_row(self, spec: TableSpec, row: Row, columns: List[str]) -> List[str]:
        return [
            encode_value(spec.name, col, row[col], self.options, self.dialect)
            for col in columns
        ]

    def compile(self, spec: TableSpec, rows: Sequence[Row]) -> CompiledStatement:
        """
        Compile a table's rows into one upsert statement.

        Args:
            spec: Table registry entry
            rows: Every fetched row of the table

        Returns:
            CompiledStatement holding the section text

        Raises:
            DivergentRowShapeError: If a row's columns differ from the first row's
            StatementCompilationError: If every column of the table is excluded
            UnsupportedValueError: If a cell cannot be encoded
        """
        lines = banner(f"SEED DATA FOR {spec.name.upper()}")

        if not rows:
            lines.append(no_data_comment(spec.name))
            logger.info("statement_compiler.no_data", table=spec.name)
            return CompiledStatement(table_name=spec.name, row_count=0, sql="\n".join(lines))

        columns = self.column_list(spec, rows)
        if not columns:
            raise StatementCompilationError(
                spec.name, f"Every column of {spec.name} is excluded; nothing to insert"
            )
        self._check_row_shapes(spec, rows, columns)

        value_rows = [self.encode_row(spec, row, columns) for row in rows]
        conflict_column = spec.conflict_column
        update_columns = self.update_columns(spec, columns)

        lines.append(f"-- Total records: {len(rows)}")
        lines.append(f"-- Primary key: {spec.primary_key}")
        if spec.unique_constraint:
            lines.append(f"-- Unique constraint: {spec.unique_constraint}")
        lines.append("")

        statement = self.builder.upsert(
            table=spec.name,
            columns=columns,
            value_rows=value_rows,
            conflict_columns=[conflict_column],
            mode="do_update",
            update_columns=update_columns,
        )
        lines.append(f"{statement};")

        logger.info(
            "statement_compiler.compiled",
            table=spec.name,
            rows=len(rows),
            columns=len(columns),
            conflict_column=conflict_column,
        )
        return CompiledStatement(
            table_name=spec.name,
            row_count=len(rows),
            sql="\n".join(lines),
            columns=tuple(columns),
            conflict_column=conflict_column,
            update_columns=tuple(update_columns),
        )


def compile_table(
    spec: TableSpec,
    rows: Sequence[Row],
    options: Optional[EncoderOptions] = None,
) -> CompiledStatement:
    """Compile ``rows`` for ``spec`` with a one-off compiler."""
    return StatementCompiler(options).compile(spec, rows)
