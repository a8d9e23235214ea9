"""
Jupiter Price API Client

REST client for the Jupiter price endpoint, used for USD token prices.
"""

import logging
from typing import Optional

import httpx

from ...types import ApiResult, ApiSuccess, ApiFailure
from ...config import config as global_config

logger = logging.getLogger(__name__)


class PriceAPI:
    """
    Token price REST client

    Usage:
        api = PriceAPI()
        result = api.get_price("So11111111111111111111111111111111111111112")
        if result.ok:
            print(result.data)
    """

    def __init__(
        self,
        timeout: float = None,
        url: str = None,
    ):
        """
        Initialize price API client

        Args:
            timeout: Request timeout in seconds (default from config)
            url: Price endpoint URL (default from config)
        """
        self._timeout = timeout if timeout is not None else global_config.price.timeout
        self._url = url if url is not None else global_config.price.url
        self._client: Optional[httpx.Client] = None

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def get_price(self, mint: str) -> ApiResult[float]:
        """
        Get the USD price of a token

        Args:
            mint: Token mint address

        Returns:
            Price as float, or ApiFailure if unavailable
        """
        client = self._get_client()

        try:
            response = client.get(self._url, params={"ids": mint})
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            return ApiFailure(f"price request failed: {e}", status_code=e.response.status_code)
        except httpx.HTTPError as e:
            return ApiFailure(f"price request failed: {e}")
        except ValueError:
            return ApiFailure("invalid JSON response")

        data = body.get("data") if isinstance(body, dict) else None
        entry = data.get(mint) if isinstance(data, dict) else None
        if not isinstance(entry, dict) or entry.get("price") is None:
            return ApiFailure(f"no price for {mint}", raw=body if isinstance(body, dict) else None)

        # Price is a decimal string in v2 responses
        try:
            return ApiSuccess(float(entry["price"]))
        except (TypeError, ValueError):
            return ApiFailure(f"invalid price value: {entry['price']!r}", raw=body)

    def close(self):
        """Close HTTP client"""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
