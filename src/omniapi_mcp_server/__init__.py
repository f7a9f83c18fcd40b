"""OmniAPI MCP Server: call any HTTP API through MCP tools."""

__version__ = "1.0.0"
