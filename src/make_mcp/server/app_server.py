"""
MakeMCPServer - exposes the Make.com API as MCP tools and resources.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from mcp import types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from make_mcp.adapters.make import MakeAdapter
from make_mcp.client.http import HTTPClientConfig
from make_mcp.server.resources import ResourceProvider
from make_mcp.server.tools import ToolDispatcher
from make_mcp.settings import MakeSettings

logger = logging.getLogger(__name__)

STARTED_MESSAGE = "Make.com MCP server started"


class MakeMCPServer:
    """Holds the adapter, dispatcher and resource provider for one process.

    Settings are read once by the caller and injected here; nothing is
    mutated between requests.
    """

    def __init__(self, settings: MakeSettings, adapter: Optional[MakeAdapter] = None) -> None:
        self.settings = settings
        self.adapter = adapter or MakeAdapter(
            settings.API_TOKEN,
            settings.API_URL,
            config=HTTPClientConfig(timeout_ms=settings.HTTP_TIMEOUT_MS),
        )
        self.dispatcher = ToolDispatcher(self.adapter)
        self.resources = ResourceProvider(self.dispatcher)
        self.mcp = create_server(self.settings.SERVER_NAME, self.dispatcher, self.resources)

    async def run_stdio(self) -> None:
        try:
            async with stdio_server() as (read_stream, write_stream):
                logger.info(STARTED_MESSAGE)
                await self.mcp.run(
                    read_stream,
                    write_stream,
                    self.mcp.create_initialization_options(),
                )
        finally:
            await self.adapter.aclose()


def create_server(name: str, dispatcher: ToolDispatcher, resources: ResourceProvider) -> Server:
    """Create a low-level MCP Server wired to ``dispatcher`` and ``resources``.

    Errors raised by the handlers are not caught here; the MCP transport
    turns them into protocol error responses.
    """
    server = Server(name)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return dispatcher.tools

    @server.call_tool()
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]] = None) -> List[types.TextContent]:
        return await dispatcher.call(name, arguments)

    @server.list_resources()
    async def list_resources() -> List[types.Resource]:
        return resources.resources

    @server.read_resource()
    async def read_resource(uri: Any) -> List[ReadResourceContents]:
        return await resources.read(uri)

    return server


__all__ = ["MakeMCPServer", "STARTED_MESSAGE", "create_server"]
