"""Relay a single request to a registered API."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import structlog

from .client import ApiClient, ApiNotFoundError
from .registry import ApiRegistry

logger = structlog.get_logger(__name__)

# Methods that may carry a JSON request body
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


@dataclass
class ApiCallResult:
    """Outcome of one relayed call, whatever the HTTP status."""

    api: str
    status: int
    status_text: str
    headers: dict[str, str]
    data: Any

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "statusText": self.status_text,
            "headers": self.headers,
            "data": self.data,
        }

    def render(self) -> str:
        payload = json.dumps(self.to_dict(), indent=2, ensure_ascii=False, default=str)
        return f'🌐 Response from API "{self.api}":\n\n{payload}'


class Dispatcher:
    """Execute ``call_api`` requests against entries of an :class:`ApiRegistry`."""

    def __init__(self, registry: ApiRegistry, client: ApiClient):
        self.registry = registry
        self.client = client

    async def invoke(
        self,
        api: str,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        params: dict[str, str] | None = None,
    ) -> ApiCallResult:
        entry = self.registry.get(api)
        if entry is None:
            raise ApiNotFoundError(
                f'API "{api}" not found. Use list_apis to see available APIs.'
            )

        method = method.upper()
        url = self.build_url(entry.base_url, endpoint, params)
        content = None
        if body is not None and method in BODY_METHODS:
            content = json.dumps(body)

        logger.info("Dispatching", api=api, method=method, url=url)

        response = await self.client.request(
            method, url, headers=entry.headers, content=content
        )
        text = response.text

        return ApiCallResult(
            api=api,
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=dict(response.headers.items()),
            data=self._parse_body(text),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def build_url(
        base_url: str,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> str:
        """Join *base_url* and *endpoint*, then append *params* as a query string.

        Only the base URL is ever slash-trimmed (at registration); the
        endpoint is used verbatim apart from a missing leading ``/``.
        """
        if not endpoint.startswith("/"):
            endpoint = "/" + endpoint
        url = f"{base_url}{endpoint}"
        if params:
            url += "?" + urlencode(params)
        return url

    @staticmethod
    def _parse_body(text: str) -> Any:
        try:
            return json.loads(text, parse_constant=_reject_constant)
        except ValueError:
            return text


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON; such bodies are relayed as raw text.
    raise ValueError(f"Invalid JSON constant: {name}")
