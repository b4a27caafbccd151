"""REST client for the hosted no-code application database."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from ..core import NotFoundError, StoreError, StoreSettings
from .base import Constraint, DataStore, Record, encode_constraints

log = logging.getLogger("questlive.store")

# The Data API returns at most 100 results per page.
PAGE_SIZE = 100


class BubbleStore(DataStore):
    """Data API access: ``{base}/obj/{type}`` endpoints with a bearer token.

    ``transport`` is handed to every ``httpx.AsyncClient`` so tests can plug
    in an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: StoreSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._transport = transport
        if not settings.api_key:
            log.warning("Bubble API key not configured; set BUBBLE_API_KEY")

    @property
    def headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.api_key:
            headers["Authorization"] = f"Bearer {self.settings.api_key}"
        return headers

    def _url(self, record_type: str, record_id: Optional[str] = None) -> str:
        url = f"{self.settings.base_url}/obj/{record_type}"
        return f"{url}/{record_id}" if record_id else url

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Record] = None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.settings.timeout, transport=self._transport
        ) as client:
            try:
                response = await client.request(
                    method, url, headers=self.headers, params=params, json=json
                )
            except httpx.HTTPError as exc:
                raise StoreError(0, f"{type(exc).__name__}: {exc}") from exc
        if response.is_error:
            if response.status_code == 404:
                raise NotFoundError(f"{url} not found")
            raise StoreError(response.status_code, response.text)
        return response

    async def list(
        self, record_type: str, constraints: Optional[Sequence[Constraint]] = None
    ) -> List[Record]:
        params: Dict[str, Any] = {"limit": PAGE_SIZE}
        if constraints:
            params["constraints"] = encode_constraints(constraints)

        results: List[Record] = []
        cursor = 0
        while True:
            params["cursor"] = cursor
            response = await self._request("GET", self._url(record_type), params=params)
            body = response.json()["response"]
            page = body.get("results") or []
            results.extend(page)
            if not page or int(body.get("remaining") or 0) <= 0:
                return results
            cursor += int(body.get("count") or len(page))

    async def get(self, record_type: str, record_id: str) -> Record:
        response = await self._request("GET", self._url(record_type, record_id))
        return response.json()["response"]

    async def create(self, record_type: str, fields: Record) -> str:
        response = await self._request("POST", self._url(record_type), json=fields)
        return response.json()["id"]

    async def update(self, record_type: str, record_id: str, fields: Record) -> None:
        await self._request("PATCH", self._url(record_type, record_id), json=fields)

    async def delete(self, record_type: str, record_id: str) -> None:
        await self._request("DELETE", self._url(record_type, record_id))


__all__ = ["BubbleStore", "PAGE_SIZE"]
