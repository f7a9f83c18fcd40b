"""Shared outbound HTTP client for the OmniAPI MCP server."""

from typing import Dict, Optional

import httpx
import structlog
from pydantic import Field
from pydantic_settings import BaseSettings

logger = structlog.get_logger(__name__)


class OmniAPIConfig(BaseSettings):
    """Process-level settings. The registry itself is never configured here."""

    timeout: Optional[float] = Field(
        default=None,
        description="Outbound request timeout in seconds (None waits indefinitely)",
    )
    log_level: str = Field(default="INFO", description="Minimum log level")
    log_json: bool = Field(
        default=True, description="Render logs as JSON instead of console text"
    )

    model_config = {"env_prefix": "OMNIAPI_", "case_sensitive": False}


class OmniAPIError(Exception):
    """Base exception for OmniAPI failures."""


class ApiNotFoundError(OmniAPIError):
    """Raised when a tool references an API name that was never registered."""


class UnknownToolError(OmniAPIError):
    """Raised for a tool name outside the fixed catalog."""


class ApiClient:
    """Asynchronous HTTP client shared by every registered API."""

    def __init__(self, config: Optional[OmniAPIConfig] = None):
        self.config = config or OmniAPIConfig()
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_client(self):
        if not self.client:
            # None disables every httpx timeout
            self.client = httpx.AsyncClient(timeout=self.config.timeout)

    async def close(self) -> None:
        if self.client:
            await self.client.aclose()
            self.client = None

    async def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        content: Optional[str] = None,
    ) -> httpx.Response:
        """Send one request and return the fully read response.

        Transport failures are wrapped in :class:`OmniAPIError`; HTTP error
        statuses are returned as-is for the caller to interpret.
        """
        await self._ensure_client()
        try:
            response = await self.client.request(
                method=method, url=url, headers=headers, content=content
            )
        except httpx.RequestError as e:
            logger.error("Request error", error=str(e), method=method, url=url)
            raise OmniAPIError(f"Request failed: {e}")

        logger.info(
            "API request",
            method=method,
            url=url,
            status_code=response.status_code,
        )
        return response

    async def probe(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Like :meth:`request` but lets ``httpx`` errors through untouched.

        Discovery treats those as per-probe outcomes rather than failures.
        """
        await self._ensure_client()
        response = await self.client.request(method=method, url=url, headers=headers)
        logger.debug(
            "Probe",
            method=method,
            url=url,
            status_code=response.status_code,
        )
        return response
