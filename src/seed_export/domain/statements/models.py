"""Compiled statement model."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CompiledStatement:
    """One table's section of the seed artifact."""

    table_name: str
    row_count: int
    sql: str
    columns: Tuple[str, ...] = ()
    conflict_column: str = ""
    update_columns: Tuple[str, ...] = ()

    @property
    def has_data(self) -> bool:
        return self.row_count > 0
