"""
Local JSON row source.

Reads ``<directory>/<table>.json`` files holding a JSON array of row objects,
the same shape the REST API returns. Used for offline runs and for
re-compiling previously captured table dumps.
"""

import json
from pathlib import Path
from typing import List, Union

import structlog

from .exceptions import SourceNotFoundError, SourceUnavailableError
from .protocols import Row

logger = structlog.get_logger(__name__)


class JsonDirectoryRowSource:
    """Row source backed by a directory of ``<table>.json`` files."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def table_path(self, table_name: str) -> Path:
        return self.directory / f"{table_name}.json"

    def fetch_rows(self, table_name: str) -> List[Row]:
        """
        Load every row of a table from its JSON file.

        Raises:
            SourceNotFoundError: If the table file does not exist
            SourceUnavailableError: If the file cannot be read or is not a
                JSON array of objects
        """
        path = self.table_path(table_name)
        if not path.is_file():
            raise SourceNotFoundError(
                f"No data file for {table_name}: {path}", table_name=table_name
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("json_row_source.read_failed", table=table_name, path=str(path), error=str(e))
            raise SourceUnavailableError(
                f"Cannot read {path}: {e}", table_name=table_name
            ) from e

        if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
            raise SourceUnavailableError(
                f"{path} must contain a JSON array of objects", table_name=table_name
            )
        return data
