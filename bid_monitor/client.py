"""Marketplace API client routed through an authenticated proxy."""

import logging
from typing import Optional

import httpx

from .config import (
    CURRENCY,
    MARKET_BASE_URL,
    REQUEST_TIMEOUT_SECONDS,
    USER_AGENT,
    Settings,
    normalize_proxy_url,
)
from .errors import FetchError
from .models import ProductSnapshot

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: dict[str, str] = {
    "User-Agent": USER_AGENT,
    # Not meaningful on a GET, kept for request parity
    "Content-Type": "application/json",
}


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Build the shared HTTP client with proxy credentials and default headers."""
    proxy = httpx.Proxy(
        normalize_proxy_url(settings.proxy_url),
        auth=(settings.proxy_user, settings.proxy_password),
    )
    return httpx.AsyncClient(
        headers=DEFAULT_HEADERS,
        proxy=proxy,
        timeout=REQUEST_TIMEOUT_SECONDS,
    )


class MarketClient:
    """Fetches product market data from the marketplace API."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: Optional[str] = None):
        self.http_client = http_client
        self.base_url = (base_url or MARKET_BASE_URL).rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings) -> "MarketClient":
        return cls(create_http_client(settings))

    async def __aenter__(self) -> "MarketClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http_client.aclose()

    def product_url(self, url_key: str) -> str:
        return f"{self.base_url}/api/products/{url_key}/"

    async def fetch(self, url_key: str) -> ProductSnapshot:
        """
        Fetch the current market snapshot for a product.

        Raises FetchError on transport failure, non-success status,
        or a body that is not the expected JSON structure.
        """
        url = self.product_url(url_key)
        params = {"currency": CURRENCY, "includes": "market"}

        try:
            logger.debug(f"Fetching {url}")
            response = await self.http_client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"Marketplace returned {e.response.status_code} for {url_key}"
            ) from e
        except httpx.RequestError as e:
            raise FetchError(f"Request for {url_key} failed: {e!r}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(f"Response for {url_key} is not valid JSON") from e

        try:
            snapshot = ProductSnapshot.from_payload(payload)
        except ValueError as e:
            raise FetchError(f"Unexpected response for {url_key}: {e}") from e

        logger.debug(f"Fetched {len(snapshot.variants)} variants for {url_key}")
        return snapshot
