"""Hosted backend (PostgREST) client."""

from __future__ import annotations

from typing import Any

import requests

REST_PATH = "/rest/v1"


class BackendClientError(Exception):
    """Raised when a backend request fails or returns a non-2xx response."""


def _filter_value(value: Any) -> str:
    if isinstance(value, bool):
        return "eq.true" if value else "eq.false"
    if value is None:
        return "is.null"
    return f"eq.{value}"


def _filter_params(filters: dict[str, Any] | None) -> dict[str, str]:
    return {column: _filter_value(value) for column, value in (filters or {}).items()}


def _error_detail(response: requests.Response) -> str:
    body_text = (response.text or "").strip()
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    detail = f"Status {response.status_code}"
    if body_text:
        detail = f"{detail}, Body: {body_text}"
    return f"Backend request failed: {detail}"


def _parse_content_range(value: str | None) -> int:
    # "0-24/573" or "*/573"
    if not value or "/" not in value:
        raise BackendClientError("Backend count response had no Content-Range total")
    total = value.rsplit("/", 1)[1]
    if not total.isdigit():
        raise BackendClientError(f"Backend count total was not a number: {value}")
    return int(total)


class BackendClient:
    """Thin wrapper around the backend's table REST API using requests."""

    def __init__(self, base_url: str, api_key: str, timeout_seconds: float = 10) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds

    def select(
        self,
        table: str,
        columns: str = "*",
        filters: dict[str, Any] | None = None,
        order: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch rows matching equality filters; returns the raw row list."""
        params: dict[str, Any] = {"select": columns}
        params.update(_filter_params(filters))
        if order:
            params["order"] = f"{order}.desc" if descending else f"{order}.asc"
        if limit is not None:
            params["limit"] = limit
        rows = self._request("GET", table, params=params)
        return rows or []

    def select_one(
        self,
        table: str,
        columns: str = "*",
        filters: dict[str, Any] | None = None,
        order: str | None = None,
        descending: bool = False,
    ) -> dict[str, Any] | None:
        """Fetch the first matching row, or None when nothing matches."""
        rows = self.select(table, columns, filters, order=order, descending=descending, limit=1)
        return rows[0] if rows else None

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored by the backend."""
        rows = self._request(
            "POST",
            table,
            json_body=row,
            extra_headers={"Prefer": "return=representation"},
        )
        if not rows:
            raise BackendClientError(f"Backend returned no row for insert into {table}")
        return rows[0]

    def update(
        self, table: str, values: dict[str, Any], filters: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """Update rows matching equality filters; returns the updated rows."""
        rows = self._request(
            "PATCH",
            table,
            params=_filter_params(filters),
            json_body=values,
            extra_headers={"Prefer": "return=representation"},
        )
        return rows or []

    def count(self, table: str, filters: dict[str, Any] | None = None) -> int:
        """Return the exact number of rows matching equality filters."""
        params: dict[str, Any] = {"select": "id"}
        params.update(_filter_params(filters))
        response = self._send(
            "HEAD", table, params=params, extra_headers={"Prefer": "count=exact"}
        )
        return _parse_content_range(response.headers.get("Content-Range"))

    def _headers(self, extra_headers: dict[str, str] | None) -> dict[str, str]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }
        if extra_headers:
            headers.update(extra_headers)
        return headers

    def _send(
        self,
        method: str,
        table: str,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
        extra_headers: dict[str, str] | None = None,
    ) -> requests.Response:
        url = f"{self._base_url}{REST_PATH}/{table}"
        try:
            response = requests.request(
                method,
                url,
                headers=self._headers(extra_headers),
                params=params,
                json=json_body,
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            raise BackendClientError(f"Backend request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise BackendClientError(_error_detail(response))
        return response

    def _request(
        self,
        method: str,
        table: str,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
        extra_headers: dict[str, str] | None = None,
    ) -> Any:
        response = self._send(method, table, params, json_body, extra_headers)
        if response.status_code == 204 or not (response.text or "").strip():
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise BackendClientError("Backend response was not valid JSON") from exc


__all__ = ["BackendClient", "BackendClientError"]
