"""USDA FoodData Central API client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from intake_tracker.domain.errors import FoodNotFoundError, UpstreamUnavailableError

_logger = logging.getLogger(__name__)


class FdcClient(Protocol):
    """Interface for FoodData Central API interactions.

    Implementations raise ``FoodNotFoundError`` when a food id is unknown and
    ``UpstreamUnavailableError`` on timeouts and failed responses.
    """

    async def search_foods(self, query: str, page_size: int = 25) -> dict[str, object]:
        """Search foods by query and return raw API data."""

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """Fetch a food by FDC id and return raw API data."""


@dataclass
class HttpxFdcClient(FdcClient):
    """HTTPX-backed FDC client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10.0

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout_seconds: float = 10.0
    ) -> "HttpxFdcClient":
        """Create an FDC client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search_foods(self, query: str, page_size: int = 25) -> dict[str, object]:
        """Search foods by query."""
        url = f"{self.base_url}/foods/search"
        response = await self._send(
            "POST",
            url,
            action="search",
            json={"query": query, "pageSize": page_size},
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return {"foods": []}
        return _decode(response, "search")

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        """Fetch a food by FDC id."""
        url = f"{self.base_url}/food/{fdc_id}"
        response = await self._send("GET", url, action=f"get_food:{fdc_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            raise FoodNotFoundError(fdc_id)
        return _decode(response, f"get_food:{fdc_id}")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _send(
        self, method: str, url: str, *, action: str, json: object | None = None
    ) -> httpx.Response:
        try:
            response = await self.http_client.request(
                method,
                url,
                params={"api_key": self.api_key},
                json=json,
                timeout=self.timeout_seconds,
            )
        except httpx.TransportError as exc:
            _logger.warning("FDC %s failed: %s", action, exc)
            raise UpstreamUnavailableError(
                f"Nutrition database unavailable ({type(exc).__name__})"
            ) from exc
        if response.is_error and response.status_code != httpx.codes.NOT_FOUND:
            _logger.warning("FDC %s failed: status=%s", action, response.status_code)
            raise UpstreamUnavailableError(
                f"Nutrition database returned {response.status_code}"
            )
        return response


def _decode(response: httpx.Response, action: str) -> dict[str, object]:
    try:
        payload = response.json()
    except ValueError as exc:
        _logger.warning("FDC %s returned a non-JSON body", action)
        raise UpstreamUnavailableError(
            "Nutrition database returned an invalid response"
        ) from exc
    if not isinstance(payload, dict):
        _logger.warning("FDC %s returned %s", action, type(payload).__name__)
        raise UpstreamUnavailableError(
            "Nutrition database returned an invalid response"
        )
    return payload
