"""The fixed tool catalog and its handlers."""

from __future__ import annotations

from typing import Any

from mcp.types import Tool

from .client import UnknownToolError
from .discovery.prober import Prober
from .dispatcher import Dispatcher
from .models.schemas import AddApiRequest, CallApiRequest, DiscoverApiRequest
from .registry import ApiRegistry

# ─── Tool definitions ────────────────────────────────────────────────

TOOL_DEFINITIONS: list[Tool] = [
    Tool(
        name="add_api",
        description=(
            "Adds a new API for use. Just provide the API base URL or simply "
            "its name."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "name": {
                    "type": "string",
                    "description": "Name to identify this API",
                },
                "baseUrl": {
                    "type": "string",
                    "description": "API base URL (e.g., https://api.example.com)",
                },
                "headers": {
                    "type": "object",
                    "description": "Optional headers (e.g., Authorization)",
                    "additionalProperties": {"type": "string"},
                },
            },
            "required": ["name", "baseUrl"],
        },
    ),
    Tool(
        name="list_apis",
        description="Lists all configured APIs",
        inputSchema={"type": "object", "properties": {}},
    ),
    Tool(
        name="call_api",
        description="Makes a request to any configured API",
        inputSchema={
            "type": "object",
            "properties": {
                "api": {
                    "type": "string",
                    "description": "Name of the configured API",
                },
                "endpoint": {
                    "type": "string",
                    "description": "API endpoint (e.g., /users, /posts/1)",
                },
                "method": {
                    "type": "string",
                    "enum": ["GET", "POST", "PUT", "DELETE", "PATCH"],
                    "default": "GET",
                    "description": "HTTP method",
                },
                "body": {
                    "type": "object",
                    "description": "Data to send in the body (for POST/PUT/PATCH)",
                },
                "params": {
                    "type": "object",
                    "description": "Query parameters",
                    "additionalProperties": {"type": ["string", "number", "boolean"]},
                },
            },
            "required": ["api", "endpoint"],
        },
    ),
    Tool(
        name="discover_api",
        description=(
            "Attempts to discover available endpoints in an API (works with "
            "APIs that have OpenAPI documentation)"
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "api": {
                    "type": "string",
                    "description": "Name of the configured API",
                },
            },
            "required": ["api"],
        },
    ),
]

TOOL_NAMES: list[str] = [t.name for t in TOOL_DEFINITIONS]


class OmniTools:
    """Runs the four tools against one registry."""

    def __init__(self, registry: ApiRegistry, dispatcher: Dispatcher, prober: Prober):
        self._registry = registry
        self._dispatcher = dispatcher
        self._prober = prober

    @staticmethod
    def get_tools() -> list[Tool]:
        return list(TOOL_DEFINITIONS)

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> str:
        """Dispatch a tool call. Returns the text shown to the caller."""
        if name == "add_api":
            return self._add_api(arguments)
        if name == "list_apis":
            return self._list_apis()
        if name == "call_api":
            return await self._call_api(arguments)
        if name == "discover_api":
            return await self._discover_api(arguments)
        raise UnknownToolError(f"Unknown tool: {name}")

    # ─── Handlers ──────────────────────────────────────────────────

    def _add_api(self, arguments: dict[str, Any]) -> str:
        request = AddApiRequest.model_validate(arguments)
        entry = self._registry.add(request.name, request.base_url, request.headers)
        return (
            f'✅ API "{entry.name}" added successfully!\n'
            f"URL: {entry.base_url}\n\n"
            "You can now use:\n"
            "- call_api to make calls\n"
            "- discover_api to discover endpoints"
        )

    def _list_apis(self) -> str:
        apis = self._registry.list()
        if not apis:
            return "📝 No APIs configured yet.\n\nUse add_api to add an API."
        lines = "\n".join(f"• {name}: {base_url}" for name, base_url in apis)
        return f"📋 Configured APIs:\n\n{lines}"

    async def _call_api(self, arguments: dict[str, Any]) -> str:
        request = CallApiRequest.model_validate(arguments)
        result = await self._dispatcher.invoke(
            request.api,
            request.endpoint,
            method=request.method,
            body=request.body,
            params=request.params,
        )
        return result.render()

    async def _discover_api(self, arguments: dict[str, Any]) -> str:
        request = DiscoverApiRequest.model_validate(arguments)
        report = await self._prober.discover(request.api)
        return report.render()
