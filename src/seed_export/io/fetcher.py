"""
Table fetcher.

Wraps a ``RowSource`` with per-table progress logging. Failures propagate as
``SourceUnavailableError`` so callers can tell "failed" apart from "empty".
"""

from typing import List

import structlog

from seed_export.config.table_registry import TableSpec
from seed_export.io.connectors.exceptions import SourceUnavailableError
from seed_export.io.connectors.protocols import Row, RowSource

logger = structlog.get_logger(__name__)


def fetch_table(source: RowSource, spec: TableSpec) -> List[Row]:
    """
    Fetch all rows for one registry table.

    Args:
        source: Row source collaborator
        spec: Table registry entry

    Returns:
        Rows of the table, possibly empty

    Raises:
        SourceUnavailableError: If the source cannot deliver the table
    """
    logger.info("fetcher.started", table=spec.name)
    try:
        rows = list(source.fetch_rows(spec.name))
    except SourceUnavailableError as e:
        if e.table_name is None:
            e.table_name = spec.name
        raise

    logger.info("fetcher.completed", table=spec.name, rows=len(rows))
    return rows
