"""MCP server exposing the Q Developer agent tool over stdio."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.server.lowlevel import NotificationOptions
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from qbridge import __version__
from qbridge.exceptions import QBridgeError
from qbridge.tools.q_developer import QDeveloperTool, get_default_tool

logger = logging.getLogger(__name__)

SERVER_NAME = "qbridge"


class QBridgeServer:
    """MCP server with a single tool, ``q-developer-agent``.

    Errors raised by the tool propagate out of the call handler; the MCP
    library turns them into an error result carrying the message.
    """

    def __init__(self, tool: QDeveloperTool | None = None) -> None:
        self.tool = tool or get_default_tool()
        self.server = Server(SERVER_NAME)
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        self.server.list_tools()(self.list_tools)
        self.server.call_tool()(self.call_tool)

    async def list_tools(self) -> list[Tool]:
        definition = self.tool.definition()
        return [
            Tool(
                name=definition["name"],
                description=definition["description"],
                inputSchema=definition["input_schema"],
            )
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        """Dispatch a tool call and wrap the answer as text content."""
        if name != self.tool.name:
            raise QBridgeError(f"Unknown tool: {name}")

        logger.info("Tool call: %s", name)
        try:
            output = await self.tool.execute(arguments)
        except QBridgeError as exc:
            logger.info("Tool call failed: %s", exc)
            raise
        return [TextContent(type="text", text=output)]

    async def start(self) -> None:
        """Serve over stdin/stdout until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=__version__,
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )


def run_stdio() -> None:
    """Run the server in stdio mode (blocking)."""
    asyncio.run(QBridgeServer().start())
