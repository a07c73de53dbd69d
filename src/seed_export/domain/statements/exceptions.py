"""Statement compilation exceptions."""

from typing import Dict, FrozenSet, List


class StatementCompilationError(Exception):
    """Raised when a table's rows cannot be compiled into an upsert."""

    def __init__(self, table_name: str, message: str):
        self.table_name = table_name
        super().__init__(message)

    def to_dict(self) -> Dict[str, object]:
        """Convert to structured dict for logging."""
        return {
            "error_type": type(self).__name__,
            "table": self.table_name,
            "message": str(self),
        }


class DivergentRowShapeError(StatementCompilationError):
    """Raised when a row's column set differs from the first row's."""

    def __init__(
        self,
        table_name: str,
        row_index: int,
        missing_columns: FrozenSet[str],
        extra_columns: FrozenSet[str],
    ):
        self.row_index = row_index
        self.missing_columns: List[str] = sorted(missing_columns)
        self.extra_columns: List[str] = sorted(extra_columns)
        details = []
        if self.missing_columns:
            details.append(f"missing {', '.join(self.missing_columns)}")
        if self.extra_columns:
            details.append(f"unexpected {', '.join(self.extra_columns)}")
        super().__init__(
            table_name,
            f"Row {row_index} of {table_name} does not match the columns of "
            f"row 0 ({'; '.join(details)})",
        )

    def to_dict(self) -> Dict[str, object]:
        data = super().to_dict()
        data.update(
            row_index=self.row_index,
            missing_columns=self.missing_columns,
            extra_columns=self.extra_columns,
        )
        return data
