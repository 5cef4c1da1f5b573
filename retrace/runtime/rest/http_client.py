"""HTTP client helper."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from ...core.exceptions import SourceUnavailable

logger = logging.getLogger(__name__)


class HTTPClient:
    """Async HTTP client wrapper.

    Transport failures, HTTP error statuses, client timeouts and undecodable
    JSON bodies all surface as ``SourceUnavailable``.
    No retries are attempted here.
    """

    def __init__(self, base_url: str | None = None, timeout: float = 30.0) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def _resolve(self, url: str) -> str:
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """GET request returning the decoded JSON body."""
        url = self._resolve(url)
        logger.debug(f"GET {url} params={params}")
        try:
            async with self.session.get(url, params=params, headers=headers) as response:
                response.raise_for_status()
                return await response.json()
        except aiohttp.ClientResponseError as e:
            raise SourceUnavailable(
                f"GET {url} failed with HTTP {e.status}: {e.message}", status_code=e.status
            ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise SourceUnavailable(f"GET {url} failed: {e!r}") from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
