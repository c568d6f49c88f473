from __future__ import annotations

import logging
from typing import Any

import httpx

from commission_shop.application.exceptions import RecordStoreError
from commission_shop.application.ports.record_store import RecordStorePort


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def build_query_params(
    filters: dict[str, Any] | None,
    order_by: str | None,
    descending: bool = False,
) -> dict[str, str]:
    """PostgREST query string: `col=eq.value`, `col=is.null`, `order=col.asc`."""
    params: dict[str, str] = {"select": "*"}
    for column, value in (filters or {}).items():
        op = "is" if value is None else "eq"
        params[column] = f"{op}.{_encode_value(value)}"
    if order_by:
        params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
    return params


class SupabaseRecordStore(RecordStorePort):
    """Record store backed by the hosted database's REST endpoint (`/rest/v1`)."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        access_token: str | None = None,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        if not base_url or not api_key:
            raise ValueError("SUPABASE_URL and an API key are required for the Supabase record store")
        self._rest_url = base_url.rstrip("/") + "/rest/v1"
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {access_token or api_key}",
        }
        self._client = client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def query(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        params = build_query_params(filters, order_by, descending)
        data = self._request("GET", table, params=params)
        return list(data or [])

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        data = self._request(
            "POST",
            table,
            json=row,
            headers={"Prefer": "return=representation"},
        )
        if not data:
            raise RecordStoreError(f"Insert into {table} returned no row")
        return data[0] if isinstance(data, list) else data

    def update(self, table: str, row_id: str, patch: dict[str, Any]) -> None:
        self._request("PATCH", table, params={"id": f"eq.{row_id}"}, json=patch)

    def delete(self, table: str, row_id: str) -> None:
        self._request("DELETE", table, params={"id": f"eq.{row_id}"})

    def _request(
        self,
        method: str,
        table: str,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        url = f"{self._rest_url}/{table}"
        try:
            resp = self._client.request(
                method,
                url,
                params=params,
                json=json,
                headers={**self._headers, **(headers or {})},
            )
        except httpx.HTTPError as e:
            self._logger.error("Record store unreachable", extra={"table": table, "error": str(e)})
            raise RecordStoreError(f"{method} {table} failed: {e}") from e

        if resp.status_code >= 400:
            try:
                error_message = resp.json().get("message")
            except Exception:
                error_message = resp.text
            self._logger.error(
                "Record store request failed",
                extra={"table": table, "status": resp.status_code, "error": error_message},
            )
            raise RecordStoreError(f"{method} {table} returned {resp.status_code}: {error_message}")

        if not resp.content:
            return None
        return resp.json()
