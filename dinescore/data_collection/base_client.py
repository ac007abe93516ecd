"""
Shared HTTP plumbing for the review provider clients.
"""
import asyncio
from typing import Any, Dict, Optional

import aiohttp
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from dinescore.errors import ProviderUnavailable
from dinescore.models import Platform
from dinescore.utils.config import Settings
from dinescore.utils.logger import app_logger


class BaseProviderClient:
    """Base class for clients that talk to a single review provider."""

    platform: Platform
    base_url: str = ""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.api_calls = 0

    @property
    def enabled(self) -> bool:
        """Whether the provider has credentials configured."""
        return True

    @property
    def max_reviews(self) -> int:
        return self.settings.max_reviews_per_provider

    def _default_headers(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    @retry(
        retry=retry_if_exception_type((aiohttp.ClientConnectionError, asyncio.TimeoutError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=4),
        reraise=True,
    )
    async def _request_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET a JSON document, retrying transient connection failures."""
        timeout = aiohttp.ClientTimeout(total=self.settings.request_timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url, headers=self._default_headers(), params=params) as response:
                self.api_calls += 1
                if response.status != 200:
                    body = await response.text()
                    raise ProviderUnavailable(self.platform.value, f"HTTP {response.status} - {body[:200]}")
                return await response.json()

    async def _get_json(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make a call to the provider API, mapping transport errors to ProviderUnavailable."""
        url = f"{self.base_url}{endpoint}"
        app_logger.debug(f"{self.platform.value} request: {endpoint}")
        try:
            payload = await self._request_json(url, params)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise ProviderUnavailable(self.platform.value, f"{type(e).__name__}: {e}") from e
        if not isinstance(payload, dict):
            raise ProviderUnavailable(self.platform.value, f"unexpected payload type {type(payload).__name__}")
        return payload
