"""Seed value exceptions."""

from typing import Any, Dict


class UnsupportedValueError(Exception):
    """Raised when a cell holds a value with no SQL literal encoding."""

    def __init__(self, table_name: str, column_name: str, value: Any):
        self.table_name = table_name
        self.column_name = column_name
        self.value_type = type(value).__name__
        super().__init__(
            f"Cannot encode value of type '{self.value_type}' "
            f"in {table_name}.{column_name}"
        )

    def to_dict(self) -> Dict[str, str]:
        """Convert to structured dict for logging."""
        return {
            "error_type": "UnsupportedValueError",
            "table": self.table_name,
            "column": self.column_name,
            "value_type": self.value_type,
        }
