"""Node-RED MCP tool surface and stdio server."""

from nodered_mcp.mcp.server import create_server
from nodered_mcp.mcp.tools import NodeRedMCPTools, ToolResult

__all__ = ["NodeRedMCPTools", "ToolResult", "create_server"]
