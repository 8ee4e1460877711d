from make_mcp.server.app_server import MakeMCPServer, create_server
from make_mcp.server.resources import RESOURCES, SCENARIOS_URI, ResourceProvider
from make_mcp.server.tools import TOOLS, ToolDispatcher

__all__ = [
    "MakeMCPServer",
    "RESOURCES",
    "ResourceProvider",
    "SCENARIOS_URI",
    "TOOLS",
    "ToolDispatcher",
    "create_server",
]
