"""
HTTP transport layer for the Supabase row source.
Handles session configuration, authentication headers and retries.
"""

import random
import time
from typing import Optional

import requests
import structlog

from seed_export.config.settings import Settings, get_settings
from seed_export.io.connectors.exceptions import (
    SourceAuthenticationError,
    SourceConfigurationError,
    SourceNotFoundError,
    SourceRateLimitError,
    SourceUnavailableError,
)

logger = structlog.get_logger(__name__)


def _backoff_delay(attempt: int) -> float:
    """Exponential backoff with jitter."""
    return (2**attempt) * (0.8 + 0.4 * random.random())


class SupabaseTransport:
    """
    Base HTTP transport for the Supabase REST (PostgREST) API.
    Handles session management, headers and retries.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        *,
        timeout: Optional[int] = None,
        retry_max: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the transport.

        Args:
            base_url: Project URL (https://<ref>.supabase.co). If None, uses
                settings
            api_key: Service role or anon key. If None, uses settings (service
                role key first)
            timeout: Request timeout in seconds. If None, uses settings default
            retry_max: Maximum retry attempts. If None, uses settings default
            settings: Settings instance; ``get_settings()`` when None

        Raises:
            SourceConfigurationError: If no URL or no key is available
        """
        self.settings = settings or get_settings()

        self.base_url = (base_url or self.settings.base_url or "").rstrip("/")
        if not self.base_url:
            raise SourceConfigurationError(
                "Supabase URL required via SUPABASE_URL or SUPABASE_PROJECT_ID"
            )

        self.api_key = api_key or self.settings.api_key
        if not self.api_key:
            raise SourceConfigurationError(
                "Supabase key required via SERVICE_ROLE_KEY or SUPABASE_ANON_KEY"
            )
        self.uses_service_role = (
            self.settings.uses_service_role
            and self.api_key == self.settings.service_role_key
        )

        self.timeout = timeout if timeout is not None else self.settings.request_timeout
        self.retry_max = retry_max if retry_max is not None else self.settings.retry_max

        self.session = requests.Session()
        self.session.headers.update(
            {
                "apikey": self.api_key,
                "Authorization": f"Bearer {self.api_key}",
                "Accept": "application/json",
                "User-Agent": "seed-export",
            }
        )

        if not self.uses_service_role:
            logger.warning(
                "supabase_transport.limited_access",
                message=(
                    "No service role key configured; using the anon key. "
                    "Row-level security may hide rows or whole tables."
                ),
            )

        logger.info(
            "supabase_transport.initialized",
            base_url=self.base_url,
            timeout=self.timeout,
            retry_max=self.retry_max,
            service_role=self.uses_service_role,
        )

    def _make_request(
        self, method: str, url: str, table_name: Optional[str] = None, **kwargs
    ) -> requests.Response:
        """
        Make an HTTP request with retry logic and error mapping.

        Args:
            method: HTTP method
            url: Request URL
            table_name: Table being read, attached to raised errors
            **kwargs: Additional arguments for requests

        Returns:
            Response object for successful requests

        Raises:
            SourceAuthenticationError: For 401/403 responses
            SourceNotFoundError: For 404 responses
            SourceRateLimitError: For 429 responses after exhausting retries
            SourceUnavailableError: For other HTTP errors or request failures
        """
        for attempt in range(self.retry_max + 1):
            try:
                logger.debug(
                    "supabase_transport.request",
                    method=method,
                    url=url,
                    attempt=attempt + 1,
                    max_attempts=self.retry_max + 1,
                )
                response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            except requests.RequestException as e:
                logger.warning(
                    "supabase_transport.request_failed",
                    url=url,
                    error=str(e),
                    attempt=attempt + 1,
                )
                if attempt < self.retry_max:
                    time.sleep(_backoff_delay(attempt))
                    continue
                raise SourceUnavailableError(
                    f"Request failed after {self.retry_max + 1} attempts: {e}",
                    table_name=table_name,
                ) from e

            status = response.status_code
            if 200 <= status < 300:
                return response

            if status in (401, 403):
                logger.error("supabase_transport.access_denied", url=url, status_code=status)
                raise SourceAuthenticationError(
                    f"Access denied ({status}): {_error_detail(response)}",
                    table_name=table_name,
                    status_code=status,
                )

            if status == 404:
                logger.warning("supabase_transport.not_found", url=url, status_code=status)
                raise SourceNotFoundError(
                    f"Table not found ({status}): {_error_detail(response)}",
                    table_name=table_name,
                    status_code=status,
                )

            if status == 429 or status >= 500:
                logger.warning(
                    "supabase_transport.retryable_status",
                    url=url,
                    status_code=status,
                    attempt=attempt + 1,
                )
                if attempt < self.retry_max:
                    time.sleep(_backoff_delay(attempt))
                    continue
                error_cls = SourceRateLimitError if status == 429 else SourceUnavailableError
                raise error_cls(
                    f"Status {status} after {self.retry_max + 1} attempts",
                    table_name=table_name,
                    status_code=status,
                )

            logger.error("supabase_transport.unexpected_status", url=url, status_code=status)
            raise SourceUnavailableError(
                f"Unexpected status code {status}: {_error_detail(response)}",
                table_name=table_name,
                status_code=status,
            )

        # Should not reach here, but for completeness
        raise SourceUnavailableError("Request failed for unknown reason", table_name=table_name)


def _error_detail(response: requests.Response) -> str:
    """Best-effort error message from a PostgREST error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)[:200]
