"""OmniAPI MCP Server: register any HTTP API and call it through MCP tools."""

import asyncio
import logging
import os
import sys
from typing import Any, Dict, Optional

import structlog
from mcp import types
from mcp.server import Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import Tool

from . import __version__
from .client import ApiClient, OmniAPIConfig, OmniAPIError
from .discovery.prober import Prober
from .dispatcher import Dispatcher
from .registry import ApiRegistry
from .tools import TOOL_NAMES, OmniTools

logger = structlog.get_logger(__name__)

SERVER_NAME = "omniapi"


class OmniAPIMCPServer:
    """MCP server exposing ``add_api``, ``list_apis``, ``call_api`` and ``discover_api``."""

    def __init__(self, config: Optional[OmniAPIConfig] = None):
        self.config = config or OmniAPIConfig()
        self.server = Server(SERVER_NAME)

        # Per-instance state: the registry is shared only with this server's
        # dispatcher and prober.
        self.registry = ApiRegistry()
        self.client = ApiClient(self.config)
        self.dispatcher = Dispatcher(self.registry, self.client)
        self.prober = Prober(self.registry, self.client)
        self.tools = OmniTools(self.registry, self.dispatcher, self.prober)

        self._register_handlers()

    # ------------------------------------------------------------------
    # Tool boundary
    # ------------------------------------------------------------------

    async def handle_call(
        self, name: str, arguments: Optional[Dict[str, Any]]
    ) -> types.CallToolResult:
        """Run one tool and convert any failure into an ``isError`` result."""
        try:
            logger.info("call_tool", tool=name)
            text = await self.tools.call_tool(name, arguments or {})
            return types.CallToolResult(
                content=[types.TextContent(type="text", text=text)]
            )
        except OmniAPIError as e:
            logger.error("Tool error", error=str(e), tool=name)
            return self._error_result(e)
        except Exception as e:
            logger.error("Unexpected error", error=str(e), tool=name, exc_info=True)
            return self._error_result(e)

    @staticmethod
    def _error_result(exc: Exception) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=f"Error: {exc}")],
            isError=True,
        )

    # ------------------------------------------------------------------
    # MCP handlers
    # ------------------------------------------------------------------

    def _register_handlers(self) -> None:
        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            tools = self.tools.get_tools()
            logger.info("list_tools", count=len(tools))
            return tools

        # Arguments are validated by the pydantic models in handle_call.
        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: Dict[str, Any]) -> types.CallToolResult:
            return await self.handle_call(name, arguments)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    async def run(self) -> None:
        logger.info("Starting OmniAPI MCP server", tools=TOOL_NAMES)
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    InitializationOptions(
                        server_name=SERVER_NAME,
                        server_version=__version__,
                        capabilities=types.ServerCapabilities(
                            tools=types.ToolsCapability(listChanged=False),
                        ),
                    ),
                )
        finally:
            await self.client.close()


# ------------------------------------------------------------------
# Entry points
# ------------------------------------------------------------------


def configure_logging(config: OmniAPIConfig) -> None:
    """Route structlog through stdlib logging on stderr; stdout carries MCP."""
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    renderer = (
        structlog.processors.JSONRenderer()
        if config.log_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


async def async_main() -> None:
    config = OmniAPIConfig()
    configure_logging(config)
    logger.info(
        "Starting OmniAPI",
        python_version=sys.version.split()[0],
        working_directory=os.getcwd(),
    )

    try:
        server = OmniAPIMCPServer(config)
        await server.run()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error("Server error", error=str(e), exc_info=True)
        sys.exit(1)


def main() -> None:
    """Synchronous entry point for console script."""
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
