"""Entry point: ``python -m nodered_mcp.mcp`` (or the ``nodered-mcp`` script).

Starts the Node-RED MCP server over stdio.

Environment variables
---------------------
NODE_RED_URL             Node-RED admin URL, may embed ``user:password@`` (required).
NODE_RED_TOKEN           Bearer token; takes precedence over URL credentials.
NODE_RED_TIMEOUT         Request timeout in seconds (default: httpx default).
NODE_RED_MCP_LOG_LEVEL   Python log level (default ``WARNING``).
MCP_TRANSPORT            ``stdio`` (default) or ``sse`` (not yet implemented).

``.env`` and ``.env.local`` in the working directory are read first; real
environment variables always win.
"""

from __future__ import annotations

import asyncio
import logging
import os

from nodered_mcp.env import load_env

load_env()

# stdout carries the protocol; logging.basicConfig writes to stderr.
logging.basicConfig(
    level=os.environ.get("NODE_RED_MCP_LOG_LEVEL", "WARNING").upper(),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

from nodered_mcp.client import NodeRedClient, Settings  # noqa: E402
from nodered_mcp.mcp.server import create_server  # noqa: E402
from nodered_mcp.mcp.tools import NodeRedMCPTools  # noqa: E402

logger = logging.getLogger("nodered_mcp.mcp")


async def main() -> None:
    settings = Settings.from_env()
    client = NodeRedClient(settings)
    try:
        server = create_server(NodeRedMCPTools(client))

        transport = os.environ.get("MCP_TRANSPORT", "stdio")
        if transport == "sse":
            raise NotImplementedError("SSE transport not yet wired, use stdio")

        from mcp.server.stdio import stdio_server  # noqa: E402

        logger.info("Serving Node-RED at %s over stdio", client.connection.base_url)
        async with stdio_server() as (read_stream, write_stream):
            init_options = server.create_initialization_options()
            await server.run(read_stream, write_stream, init_options)
    finally:
        await client.close()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
