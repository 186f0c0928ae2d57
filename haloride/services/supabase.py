"""Minimal Supabase REST (PostgREST) client for single-table inserts and selects."""

import logging
from typing import Any, Optional

import httpx

from haloride.core.errors import LeadStoreError

logger = logging.getLogger(__name__)


class SupabaseClient:
    def __init__(
        self,
        url: str,
        anon_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._client = httpx.Client(
            base_url=f"{url.rstrip('/')}/rest/v1",
            headers={
                "apikey": anon_key,
                "Authorization": f"Bearer {anon_key}",
            },
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored."""
        response = self._request(
            "POST",
            f"/{table}",
            json=[row],
            headers={
                "Prefer": "return=representation",
                "Accept": "application/vnd.pgrst.object+json",
            },
        )
        data = response.json() if response.content else None
        if isinstance(data, list):
            data = data[0] if data else None
        if not data:
            raise LeadStoreError("Failed to create lead: No data returned")
        return data

    def select(self, table: str, columns: str = "*") -> list[dict[str, Any]]:
        response = self._request("GET", f"/{table}", params={"select": columns})
        return response.json()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Supabase request %s %s failed: %s", method, path, exc)
            raise LeadStoreError(f"Network error talking to Supabase: {exc}") from exc

        if response.is_error:
            error = _error_payload(response)
            logger.error("Supabase error details: %s", error)
            raise LeadStoreError(
                error.get("message") or f"HTTP {response.status_code}",
                details=error.get("details"),
                hint=error.get("hint"),
                code=error.get("code"),
            )
        return response


def _error_payload(response: httpx.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {"message": response.text or response.reason_phrase}
    if not isinstance(payload, dict):
        return {"message": str(payload)}
    return payload
