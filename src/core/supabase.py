from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode

import httpx
from pydantic_core import to_jsonable_python

from src.core.config import get_settings
from src.core.errors import UpstreamError

logger = logging.getLogger(__name__)

Filters = List[Tuple[str, str]]
Row = Dict[str, Any]


class SupabaseClient:
    _shared_client: httpx.Client | None = None
    _client_lock: Lock = Lock()

    def __init__(self) -> None:
        settings = get_settings()
        self.base_url = settings.supabase_url.rstrip("/") + "/rest/v1"
        self.api_key = settings.supabase_service_role_key or settings.supabase_anon_key
        if not self.api_key:
            raise ValueError("Supabase API key is required")
        self._client = self._get_shared_client(settings.supabase_timeout_seconds)

    @classmethod
    def _get_shared_client(cls, timeout: float) -> httpx.Client:
        if cls._shared_client is not None:
            return cls._shared_client
        with cls._client_lock:
            if cls._shared_client is None:
                cls._shared_client = httpx.Client(
                    timeout=timeout,
                    limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
                )
        return cls._shared_client

    def select(
        self,
        table: str,
        select: str,
        filters: Optional[Filters] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order: Optional[str] = None,
        count: bool = False,
    ) -> Tuple[List[Row], Optional[int]]:
        params: Filters = [("select", select)]
        if filters:
            params.extend(filters)
        if limit is not None:
            params.append(("limit", str(limit)))
        if offset is not None:
            params.append(("offset", str(offset)))
        if order:
            params.append(("order", order))

        headers = self._headers()
        if count:
            headers["Prefer"] = "count=exact"

        response = self._send("GET", table, params, headers)
        total_count = None
        if count and "content-range" in response.headers:
            content_range = response.headers["content-range"]
            if "/" in content_range and not content_range.endswith("*"):
                total_count = int(content_range.split("/")[-1])
        return response.json(), total_count

    def select_one(self, table: str, select: str, filters: Filters) -> Optional[Row]:
        rows, _ = self.select(table=table, select=select, filters=filters, limit=1)
        return rows[0] if rows else None

    def insert(self, table: str, payload: Row | List[Row]) -> List[Row]:
        headers = self._headers(write=True)
        response = self._send("POST", table, [], headers, json=payload)
        return self._rows(response)

    def update(self, table: str, payload: Row, filters: Filters) -> List[Row]:
        if not filters:
            # PostgREST would patch every row in the table.
            raise ValueError("Refusing to update without filters")
        headers = self._headers(write=True)
        response = self._send("PATCH", table, filters, headers, json=payload)
        return self._rows(response)

    def _headers(self, write: bool = False) -> Dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }
        if write:
            headers["Content-Type"] = "application/json"
            headers["Prefer"] = "return=representation"
        return headers

    def _send(
        self,
        method: str,
        table: str,
        params: Filters,
        headers: Dict[str, str],
        json: Any = None,
    ) -> httpx.Response:
        url = f"{self.base_url}/{table}"
        if params:
            url = f"{url}?{urlencode(params, doseq=True)}"
        # Decimals go out as strings; PostgREST casts them into numeric columns.
        body = to_jsonable_python(json) if json is not None else None
        try:
            response = self._client.request(method, url, headers=headers, json=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Supabase %s %s failed with %s: %s",
                method,
                table,
                exc.response.status_code,
                exc.response.text,
            )
            raise UpstreamError(
                f"Supabase request to {table} failed", status=exc.response.status_code
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Supabase %s %s failed: %s", method, table, exc)
            raise UpstreamError(f"Supabase request to {table} failed") from exc
        return response

    @staticmethod
    def _rows(response: httpx.Response) -> List[Row]:
        if not response.content:
            return []
        data = response.json()
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            return [data]
        return []
