"""
Unit tests for the Supabase REST row source.

HTTP traffic is mocked at ``session.request``; retry sleeps are patched out.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from seed_export.config.settings import Settings
from seed_export.io.connectors import (
    SourceAuthenticationError,
    SourceConfigurationError,
    SourceNotFoundError,
    SourceRateLimitError,
    SourceUnavailableError,
    SupabaseRowSource,
)

BASE_URL = "https://abcd1234.supabase.co"


def _response(status_code=200, json_data=None, text=""):
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.text = text
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def service_settings():
    return Settings(supabase_url=BASE_URL, service_role_key="service-key")


@pytest.fixture
def source(service_settings):
    return SupabaseRowSource(settings=service_settings, retry_max=2)


@pytest.mark.unit
class TestSupabaseRowSourceInitialization:
    def test_headers_use_service_role_key(self, source):
        """Test both PostgREST auth headers carry the key."""
        assert source.session.headers["apikey"] == "service-key"
        assert source.session.headers["Authorization"] == "Bearer service-key"
        assert source.uses_service_role

    def test_anon_key_fallback_logs_warning(self):
        settings = Settings(supabase_url=BASE_URL, anon_key="anon-key")

        with patch("seed_export.io.connectors.supabase.transport.logger") as mock_logger:
            source = SupabaseRowSource(settings=settings)

        assert source.api_key == "anon-key"
        assert not source.uses_service_role
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args[0][0] == "supabase_transport.limited_access"

    def test_missing_url_raises(self):
        with pytest.raises(SourceConfigurationError, match="Supabase URL"):
            SupabaseRowSource(settings=Settings(service_role_key="k"))

    def test_missing_key_raises(self):
        with pytest.raises(SourceConfigurationError, match="Supabase key"):
            SupabaseRowSource(settings=Settings(supabase_url=BASE_URL))

    def test_explicit_arguments_override_settings(self, service_settings):
        source = SupabaseRowSource(
            "http://localhost:54321/", "local-key", timeout=5, settings=service_settings
        )

        assert source.base_url == "http://localhost:54321"
        assert source.api_key == "local-key"
        assert source.timeout == 5
        assert not source.uses_service_role

    def test_table_url(self, source):
        assert source.table_url("alpaca_stocks") == f"{BASE_URL}/rest/v1/alpaca_stocks"


@pytest.mark.unit
class TestFetchRows:
    def test_fetch_rows_success(self, source):
        rows = [{"id": 1, "symbol": "AAPL"}]
        with patch.object(source.session, "request", return_value=_response(json_data=rows)) as req:
            result = source.fetch_rows("alpaca_stocks")

        assert result == rows
        req.assert_called_once_with(
            "GET",
            f"{BASE_URL}/rest/v1/alpaca_stocks",
            timeout=30,
            params={"select": "*"},
        )

    def test_empty_table_returns_empty_list(self, source):
        with patch.object(source.session, "request", return_value=_response(json_data=[])):
            assert source.fetch_rows("weather_locations") == []

    def test_empty_table_name_rejected(self, source):
        with pytest.raises(ValueError):
            source.fetch_rows("  ")

    @pytest.mark.parametrize("status", [401, 403])
    def test_access_denied(self, source, status):
        response = _response(status, json_data={"message": "permission denied"})
        with patch.object(source.session, "request", return_value=response):
            with pytest.raises(SourceAuthenticationError) as exc_info:
                source.fetch_rows("ai_providers")

        assert exc_info.value.status_code == status
        assert exc_info.value.table_name == "ai_providers"
        assert "permission denied" in str(exc_info.value)

    def test_missing_table(self, source):
        response = _response(404, json_data={"message": "relation does not exist"})
        with patch.object(source.session, "request", return_value=response):
            with pytest.raises(SourceNotFoundError):
                source.fetch_rows("no_such_table")

    @patch("seed_export.io.connectors.supabase.transport.time.sleep")
    def test_server_error_retried_then_succeeds(self, mock_sleep, source):
        responses = [_response(503, text="unavailable"), _response(json_data=[{"id": 1}])]
        with patch.object(source.session, "request", side_effect=responses) as req:
            assert source.fetch_rows("sports_teams") == [{"id": 1}]

        assert req.call_count == 2
        mock_sleep.assert_called_once()

    @patch("seed_export.io.connectors.supabase.transport.time.sleep")
    def test_rate_limit_exhausts_retries(self, mock_sleep, source):
        with patch.object(source.session, "request", return_value=_response(429)) as req:
            with pytest.raises(SourceRateLimitError):
                source.fetch_rows("sports_teams")

        assert req.call_count == 3
        assert mock_sleep.call_count == 2

    @patch("seed_export.io.connectors.supabase.transport.time.sleep")
    def test_network_error_exhausts_retries(self, mock_sleep, source):
        error = requests.ConnectionError("connection refused")
        with patch.object(source.session, "request", side_effect=error):
            with pytest.raises(SourceUnavailableError, match="after 3 attempts"):
                source.fetch_rows("sports_teams")

    def test_unexpected_status(self, source):
        with patch.object(source.session, "request", return_value=_response(418, text="teapot")):
            with pytest.raises(SourceUnavailableError) as exc_info:
                source.fetch_rows("sports_teams")

        assert exc_info.value.status_code == 418

    def test_invalid_json_body(self, source):
        response = _response(json_data=requests.JSONDecodeError("Expecting value", "x", 0))
        with patch.object(source.session, "request", return_value=response):
            with pytest.raises(SourceUnavailableError, match="Invalid JSON"):
                source.fetch_rows("sports_teams")

    def test_non_array_body(self, source):
        with patch.object(source.session, "request", return_value=_response(json_data={"id": 1})):
            with pytest.raises(SourceUnavailableError, match="Expected a JSON array"):
                source.fetch_rows("sports_teams")
