from typing import Any

import httpx

from ops_control_center.config import Settings
from ops_control_center.store.exceptions import NotConfiguredError, QueryError
from ops_control_center.store.query import RowQuery


class SupabaseRestClient:
    """Read-only client for the Supabase PostgREST endpoint.

    Queries tables via:
    GET {url}/rest/v1/{table}?select=...&col=op.value&order=...&limit=...

    Authentication:
    - service_role key sent both as ``apikey`` and as a Bearer token

    The client must be used as an async context manager so that concurrent
    selects share a single connection pool.
    """

    REST_PATH = "/rest/v1/{table}"

    def __init__(self, url: str, service_role_key: str, timeout: float = 10.0) -> None:
        url = (url or "").strip()
        service_role_key = (service_role_key or "").strip()
        if not url or not service_role_key:
            raise NotConfiguredError()

        self.url = url.rstrip("/")
        self.service_role_key = service_role_key
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "SupabaseRestClient":
        return cls(
            url=settings.supabase_url,
            service_role_key=settings.supabase_service_role_key,
            timeout=settings.http_timeout_sec,
        )

    async def __aenter__(self) -> "SupabaseRestClient":
        self._client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {self.service_role_key}",
            "Accept": "application/json",
        }

    async def select_many(self, table: str, query: RowQuery) -> list[dict[str, Any]]:
        """Select rows from ``table``.

        Raises:
            QueryError: On any non-2xx response (unknown table or column, bad filter).
            httpx.HTTPError: On transport failures.
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        url = f"{self.url}{self.REST_PATH.format(table=table)}"
        response = await self._client.get(url, params=query.to_params(), headers=self._headers())

        if response.status_code >= 400:
            raise QueryError(table, response.status_code, response.text[:200])

        return self._extract_rows(response.json())

    async def select_one(self, table: str, query: RowQuery) -> dict[str, Any] | None:
        rows = await self.select_many(table, query.take(1))
        return rows[0] if rows else None

    def _extract_rows(self, data: Any) -> list[dict[str, Any]]:
        if isinstance(data, list):
            return [row for row in data if isinstance(row, dict)]
        return []
