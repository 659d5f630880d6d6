"""Supabase REST client — implements the RemoteDataService interface.

Talks to the PostgREST endpoint Supabase exposes under ``/rest/v1`` using
httpx. Equality filters become ``column=eq.value`` query parameters and
writes ask for ``Prefer: return=representation`` so the stored row
(with its id and timestamps) comes back in the response.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from remoteinbound.application.interfaces import RemoteDataService
from remoteinbound.domain.exceptions import RemoteServiceError

logger = logging.getLogger(__name__)

Row = dict[str, Any]


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _escape_search(term: str) -> str:
    """Strip characters PostgREST treats as syntax inside an ``or=(...)`` group."""
    return "".join(ch for ch in term if ch not in ",()*\"\\").strip()


class SupabaseRestClient(RemoteDataService):
    """Infrastructure adapter — connects to a Supabase project over PostgREST.

    Every failure (transport error, non-2xx status, unparseable body) is
    raised as RemoteServiceError so callers have one error type to handle.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 15.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._http_client = http_client

    @property
    def service_name(self) -> str:
        return "supabase"

    def _get_headers(self, *, write: bool = False) -> dict[str, str]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }
        if write:
            headers["Content-Type"] = "application/json"
            headers["Prefer"] = "return=representation"
        return headers

    def _table_url(self, resource: str) -> str:
        return f"{self._base_url}/rest/v1/{resource}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _request(
        self,
        method: str,
        resource: str,
        *,
        params: list[tuple[str, str]] | None = None,
        json: Any = None,
    ) -> Any:
        if not self._base_url:
            raise RemoteServiceError(self.service_name, None, "Hosted database is not configured")

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            response = await client.request(
                method,
                self._table_url(resource),
                params=params,
                json=json,
                headers=self._get_headers(write=method in ("POST", "PATCH", "DELETE")),
            )
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", method, resource, exc)
            raise RemoteServiceError(self.service_name, None, str(exc) or type(exc).__name__) from exc
        finally:
            if should_close:
                await client.aclose()

        if response.status_code >= 300:
            self._raise_service_error(response, method, resource)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteServiceError(
                self.service_name, response.status_code, "Response body is not valid JSON"
            ) from exc

    def _raise_service_error(self, response: httpx.Response, method: str, resource: str) -> None:
        """Raise RemoteServiceError from a PostgREST error response."""
        try:
            data = response.json()
            message = data.get("message") or data.get("error") or response.text
        except (ValueError, AttributeError):
            message = response.text

        logger.error(
            "%s %s returned %d: %s", method, resource, response.status_code, message
        )
        raise RemoteServiceError(
            service=self.service_name,
            status_code=response.status_code,
            message=message,
        )

    @staticmethod
    def _first(data: Any) -> Row | None:
        if isinstance(data, list):
            return data[0] if data else None
        if isinstance(data, dict):
            return data
        return None

    # ── RemoteDataService ──────────────────────────────────────────

    async def create_entity(self, resource: str, payload: Row) -> Row:
        data = await self._request("POST", resource, json=payload)
        row = self._first(data)
        if row is None:
            raise RemoteServiceError(
                self.service_name, None, f"Insert into '{resource}' returned no row"
            )
        logger.debug("Inserted into %s: %s", resource, row.get("id"))
        return row

    async def get_entity(self, resource: str, entity_id: str) -> Row | None:
        data = await self._request(
            "GET", resource, params=[("select", "*"), ("id", f"eq.{entity_id}"), ("limit", "1")]
        )
        return self._first(data)

    async def list_entities(
        self,
        resource: str,
        filters: Mapping[str, Any] | None = None,
        *,
        search: str | None = None,
        search_fields: Sequence[str] = (),
    ) -> list[Row]:
        params = [("select", "*")]
        for field, value in sorted((filters or {}).items()):
            if value is None:
                continue
            params.append((field, f"eq.{_format_value(value)}"))

        term = _escape_search(search) if search else ""
        if term and search_fields:
            clauses = ",".join(f"{field}.ilike.*{term}*" for field in search_fields)
            params.append(("or", f"({clauses})"))

        data = await self._request("GET", resource, params=params)
        return list(data or [])

    async def find_by_field(self, resource: str, field: str, value: Any) -> Row | None:
        data = await self._request(
            "GET",
            resource,
            params=[("select", "*"), (field, f"eq.{_format_value(value)}"), ("limit", "1")],
        )
        return self._first(data)

    async def update_entity(self, resource: str, entity_id: str, changes: Row) -> Row | None:
        data = await self._request(
            "PATCH", resource, params=[("id", f"eq.{entity_id}")], json=changes
        )
        return self._first(data)

    async def delete_entity(self, resource: str, entity_id: str) -> bool:
        data = await self._request("DELETE", resource, params=[("id", f"eq.{entity_id}")])
        return self._first(data) is not None
