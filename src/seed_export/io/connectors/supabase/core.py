"""
Supabase row source core implementation.
"""

from typing import List
from urllib.parse import quote

import requests
import structlog

from seed_export.io.connectors.exceptions import SourceUnavailableError
from seed_export.io.connectors.protocols import Row

from .transport import SupabaseTransport

logger = structlog.get_logger(__name__)


class SupabaseRowSource(SupabaseTransport):
    """
    Reads whole tables through the Supabase REST (PostgREST) API.

    Inherits transport logic (headers, retries, error mapping) from
    SupabaseTransport.
    """

    def table_url(self, table_name: str) -> str:
        return f"{self.base_url}/rest/v1/{quote(table_name, safe='')}"

    def fetch_rows(self, table_name: str) -> List[Row]:
        """
        Fetch every row of a table with ``select=*``.

        Args:
            table_name: Table to read

        Returns:
            List of rows; empty when the table has no rows

        Raises:
            ValueError: If table_name is empty
            SourceUnavailableError: If the request fails or the body is not a
                JSON array of objects
        """
        if not table_name or not table_name.strip():
            raise ValueError("Table name cannot be empty")

        cleaned_name = table_name.strip()
        response = self._make_request(
            "GET",
            self.table_url(cleaned_name),
            table_name=cleaned_name,
            params={"select": "*"},
        )

        try:
            data = response.json()
        except requests.JSONDecodeError as e:
            logger.error(
                "supabase_row_source.invalid_json",
                table=cleaned_name,
                error=str(e),
            )
            raise SourceUnavailableError(
                f"Invalid JSON response for {cleaned_name}: {e}",
                table_name=cleaned_name,
            ) from e

        if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
            logger.error(
                "supabase_row_source.unexpected_payload",
                table=cleaned_name,
                payload_type=type(data).__name__,
            )
            raise SourceUnavailableError(
                f"Expected a JSON array of rows for {cleaned_name}, "
                f"got {type(data).__name__}",
                table_name=cleaned_name,
            )

        return data
