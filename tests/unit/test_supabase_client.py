from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from ops_control_center.config import Settings
from ops_control_center.store import (
    Filter,
    NotConfiguredError,
    QueryError,
    RowQuery,
    SupabaseRestClient,
)


def make_mock_response(status_code: int, json_data: dict | list, text: str = "") -> MagicMock:
    """Create a mock httpx.Response with proper request object."""
    mock = MagicMock(spec=httpx.Response)
    mock.status_code = status_code
    mock.json.return_value = json_data
    mock.text = text
    mock.request = httpx.Request("GET", "https://example.supabase.co/rest/v1/test")
    return mock


class TestConfiguration:
    @pytest.mark.parametrize(
        ("url", "key"),
        [("", "key"), ("https://example.supabase.co", ""), ("  ", "  ")],
    )
    def test_missing_credentials_raise_not_configured(self, url: str, key: str) -> None:
        with pytest.raises(NotConfiguredError, match="not configured"):
            SupabaseRestClient(url=url, service_role_key=key)

    def test_from_settings(self) -> None:
        settings = Settings(
            supabase_url="https://example.supabase.co/",
            supabase_service_role_key="secret",
            http_timeout_sec=3.0,
            _env_file=None,
        )
        client = SupabaseRestClient.from_settings(settings)

        assert client.url == "https://example.supabase.co"
        assert client.service_role_key == "secret"
        assert client.timeout == 3.0


class TestSelectMany:
    @pytest.fixture
    def client(self) -> SupabaseRestClient:
        return SupabaseRestClient(url="https://example.supabase.co", service_role_key="secret")

    @pytest.mark.asyncio
    async def test_requires_context_manager(self, client: SupabaseRestClient) -> None:
        with pytest.raises(RuntimeError, match="async context manager"):
            await client.select_many("bookings", RowQuery.select("id"))

    @pytest.mark.asyncio
    async def test_returns_rows(self, client: SupabaseRestClient) -> None:
        mock_response = make_mock_response(200, [{"id": "b1"}, {"id": "b2"}])

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = mock_response
            async with client:
                rows = await client.select_many("bookings", RowQuery.select("id"))

        assert rows == [{"id": "b1"}, {"id": "b2"}]

    @pytest.mark.asyncio
    async def test_builds_url_params_and_headers(self, client: SupabaseRestClient) -> None:
        mock_response = make_mock_response(200, [])
        query = RowQuery.select("id,status").where(Filter.eq("status", "open")).take(10)

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = mock_response
            async with client:
                await client.select_many("support_requests", query)

            call_args = mock_get.call_args

        assert call_args.args[0] == "https://example.supabase.co/rest/v1/support_requests"
        assert call_args.kwargs["params"] == [
            ("select", "id,status"),
            ("status", "eq.open"),
            ("limit", "10"),
        ]
        headers = call_args.kwargs["headers"]
        assert headers["apikey"] == "secret"
        assert headers["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_error_status_raises_query_error(self, client: SupabaseRestClient) -> None:
        mock_response = make_mock_response(
            400, {"message": "column bookings.status does not exist"}, text="column does not exist"
        )

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = mock_response
            async with client:
                with pytest.raises(QueryError) as exc_info:
                    await client.select_many("bookings", RowQuery.select("status"))

        assert exc_info.value.table == "bookings"
        assert exc_info.value.status_code == 400
        assert "bookings" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_non_list_payload_yields_no_rows(self, client: SupabaseRestClient) -> None:
        mock_response = make_mock_response(200, {"unexpected": True})

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = mock_response
            async with client:
                rows = await client.select_many("bookings", RowQuery.select("id"))

        assert rows == []

    @pytest.mark.asyncio
    async def test_select_one_limits_to_single_row(self, client: SupabaseRestClient) -> None:
        mock_response = make_mock_response(200, [{"id": "b1"}])

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = mock_response
            async with client:
                row = await client.select_one("bookings", RowQuery.select("id"))

            params = mock_get.call_args.kwargs["params"]

        assert row == {"id": "b1"}
        assert ("limit", "1") in params

    @pytest.mark.asyncio
    async def test_select_one_returns_none_when_empty(self, client: SupabaseRestClient) -> None:
        mock_response = make_mock_response(200, [])

        with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
            mock_get.return_value = mock_response
            async with client:
                row = await client.select_one("bookings", RowQuery.select("id"))

        assert row is None

    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self, client: SupabaseRestClient) -> None:
        async with client:
            assert client._client is not None
        assert client._client is None
