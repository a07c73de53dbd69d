"""
Row source exceptions.

A failed fetch always raises a ``SourceUnavailableError`` (or subclass); an
empty table is never an error and is returned as an empty list.
"""

from typing import Dict, Optional


class SourceConfigurationError(Exception):
    """Raised when a row source cannot be built from the given configuration."""

    pass


class SourceUnavailableError(Exception):
    """Base exception for failed row fetches (network, authorization, transport)."""

    def __init__(
        self,
        message: str,
        table_name: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.table_name = table_name
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> Dict[str, object]:
        """Convert to structured dict for logging."""
        return {
            "error_type": type(self).__name__,
            "table": self.table_name,
            "status_code": self.status_code,
            "message": str(self),
        }


class SourceAuthenticationError(SourceUnavailableError):
    """Raised when the source rejects the credentials (401/403)."""

    pass


class SourceNotFoundError(SourceUnavailableError):
    """Raised when the requested table does not exist in the source (404)."""

    pass


class SourceRateLimitError(SourceUnavailableError):
    """Raised when the rate limit is exceeded and retries are exhausted."""

    pass
