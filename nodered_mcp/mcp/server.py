"""MCP server for the Node-RED tools.

``list_tools`` and ``call_tool`` both read ``TOOL_CATALOG``; a tool name is
resolved to its ``NodeRedMCPTools`` method and the returned ``ToolResult`` is
sent back as one JSON text block.
"""

from __future__ import annotations

import inspect
import json
import logging
from typing import Any

from mcp import types
from mcp.server import Server

from nodered_mcp.mcp.registry import TOOL_CATALOG
from nodered_mcp.mcp.tools import NodeRedMCPTools, ToolResult

logger = logging.getLogger(__name__)

SERVER_NAME = "node-red"

_DISPATCH: dict[str, str] = {td.name: method_name for method_name, td in TOOL_CATALOG}


def _text(payload: dict[str, Any]) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=json.dumps(payload, default=str, indent=2))]


def create_server(tools: NodeRedMCPTools) -> Server:
    """Build a ``node-red`` MCP server backed by *tools*."""
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=td.name, description=td.description or "", inputSchema=td.parameters)
            for _method_name, td in TOOL_CATALOG
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None = None) -> list[types.TextContent]:
        method_name = _DISPATCH.get(name)
        if method_name is None:
            return _text({"ok": False, "error": f"Unknown tool: {name}"})

        method = getattr(tools, method_name)
        try:
            bound = inspect.signature(method).bind(**(arguments or {}))
        except TypeError as e:
            logger.warning("Bad arguments for %s: %s", name, e)
            return _text({"ok": False, "error": f"Invalid arguments for {name}: {e}"})

        result: ToolResult = await method(*bound.args, **bound.kwargs)
        return [types.TextContent(type="text", text=_serialize(result))]

    return server


def _serialize(result: ToolResult) -> str:
    envelope: dict[str, Any] = {
        "ok": result.ok,
        "summary": result.summary,
        "data": result.data,
        "error": result.error,
    }
    if result.facts:
        envelope["facts"] = result.facts
    return json.dumps(envelope, default=str, indent=2)
