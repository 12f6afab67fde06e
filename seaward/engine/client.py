"""
Engine HTTP client.

The engine runs the long browser and codebase workflows. This client only
knows its endpoints; status handling and response validation belong to the
callers, which report engine failures differently.
"""

from typing import Any, Dict, Optional
import logging

import httpx

from seaward.config import ENGINE_TIMEOUT_SECONDS, get_engine_url

logger = logging.getLogger(__name__)

BROWSER_CONTEXT_FLOW = "/browser/context_flow"
BROWSER_FULL_FLOW = "/browser/full_flow"
CODEBASE_BASIC_FLOW = "/codebase/basic_flow"
CODEBASE_FULL_FLOW = "/codebase/full_flow"


class EngineNotConfigured(Exception):
    """Raised when SEAWEED_ENGINE_URL is not set."""

    def __init__(self):
        super().__init__("Server configuration error: SEAWEED_ENGINE_URL is not set")


class EngineClient:
    """Thin async client over the engine's workflow endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = ENGINE_TIMEOUT_SECONDS
    ):
        self._base_url = base_url
        self.transport = transport
        self.timeout = timeout

    @property
    def base_url(self) -> str:
        """Configured engine URL, resolved on each access."""
        url = self._base_url or get_engine_url()
        if not url:
            raise EngineNotConfigured()
        return url.rstrip("/")

    async def post(self, path: str, payload: Dict[str, Any]) -> httpx.Response:
        """
        POST a JSON payload to an engine endpoint.

        Raises:
            EngineNotConfigured: If no engine URL is available
            httpx.HTTPError: On transport failures
        """
        url = f"{self.base_url}{path}"
        logger.info(f"Calling engine {url}")
        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            response = await client.post(url, json=payload)
        if response.is_error:
            logger.error(f"Engine request to {url} failed: {response.status_code} {response.text}")
        return response

    async def browser_context_flow(self, payload: Dict[str, Any]) -> httpx.Response:
        return await self.post(BROWSER_CONTEXT_FLOW, payload)

    async def browser_full_flow(self, payload: Dict[str, Any]) -> httpx.Response:
        return await self.post(BROWSER_FULL_FLOW, payload)

    async def codebase_basic_flow(self, payload: Dict[str, Any]) -> httpx.Response:
        return await self.post(CODEBASE_BASIC_FLOW, payload)

    async def codebase_full_flow(self, payload: Dict[str, Any]) -> httpx.Response:
        return await self.post(CODEBASE_FULL_FLOW, payload)


def get_engine_client() -> EngineClient:
    """Dependency returning an engine client bound to the configured URL."""
    return EngineClient()
