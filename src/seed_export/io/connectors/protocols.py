"""Row source protocol."""

from typing import Any, Dict, List, Protocol, runtime_checkable

Row = Dict[str, Any]


@runtime_checkable
class RowSource(Protocol):
    """Anything that can return every row of a named table."""

    def fetch_rows(self, table_name: str) -> List[Row]:
        """
        Return all rows of ``table_name``.

        Returns an empty list for an empty table and raises
        ``SourceUnavailableError`` when the table cannot be read.
        """
        ...
