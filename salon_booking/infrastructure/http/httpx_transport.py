from __future__ import annotations

import logging
from typing import Any

import httpx

from salon_booking.application.exceptions import ApiUpstreamError
from salon_booking.application.ports.transport import TransportPort, TransportResponse


class HttpxTransport(TransportPort):
    def __init__(self, timeout: float = 10.0, client: httpx.AsyncClient | None = None) -> None:
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json"},
        )
        self._logger = logging.getLogger(__name__)

    async def fetch(
        self,
        url: str,
        method: str = "GET",
        params: list[tuple[str, str]] | None = None,
        json: dict[str, Any] | None = None,
    ) -> TransportResponse:
        try:
            resp = await self._client.request(method, url, params=params, json=json)
        except httpx.TimeoutException as e:
            self._logger.warning("Request timed out", extra={"url": url, "error": str(e)})
            raise ApiUpstreamError(f"Request to {url} timed out", retryable=True) from e
        except httpx.HTTPError as e:
            self._logger.warning("Request failed", extra={"url": url, "error": str(e)})
            raise ApiUpstreamError(f"Request to {url} failed: {e}", retryable=True) from e

        try:
            body = resp.json()
        except ValueError:
            body = None

        if resp.status_code >= 400:
            self._logger.error("Booking API returned an error", extra={"url": url, "status": resp.status_code})
        return TransportResponse(status=resp.status_code, json=body)

    async def close(self) -> None:
        await self._client.aclose()
