from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TransportResponse:
    status: int
    json: Any  # decoded body, None when the body is not JSON


class TransportPort(ABC):
    @abstractmethod
    async def fetch(
        self,
        url: str,
        method: str = "GET",
        params: list[tuple[str, str]] | None = None,
        json: dict[str, Any] | None = None,
    ) -> TransportResponse:
        """Perform one request. Raises ApiUpstreamError on network failure or timeout."""
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        raise NotImplementedError
