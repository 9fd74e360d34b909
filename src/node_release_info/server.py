"""MCP server exposing Node.js release resolution."""
import asyncio
import json
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.models import InitializationOptions
from mcp.server import stdio

from node_release_info import __version__
from node_release_info.errors import ReleaseInfoError, log_error
from node_release_info.logging import configure_logging, get_logger
from node_release_info.platforms import PlatformSelector
from node_release_info.resolver import ReleaseInfoResolver
from node_release_info.urls import ReleaseURLFormatter
from node_release_info.utils.fetching import TextFetcher

logger = get_logger(__name__)

tools = [
    types.Tool(
        name="node_release_info",
        description="Resolve the filename, sha256 and download URL of a Node.js release "
                    "for one platform (defaults to the host platform)",
        inputSchema={
            "type": "object",
            "properties": {
                "version": {"type": "string", "description": "Node.js version, e.g. 20.6.1"},
                "os": {"type": "string", "description": "linux, darwin/macos, win/windows or aix"},
                "arch": {"type": "string", "description": "x64, x86, arm64, armv7l, ppc64, ppc64le or s390x"},
                "ext": {"type": "string", "description": "tar.gz, tar.xz, zip, msi or 7z"},
            },
            "required": ["version"],
        },
    ),
    types.Tool(
        name="node_release_info_all",
        description="Resolve every published platform configuration of a Node.js release",
        inputSchema={
            "type": "object",
            "properties": {
                "version": {"type": "string", "description": "Node.js version, e.g. 20.6.1"}
            },
            "required": ["version"],
        },
    ),
]


def _selector_for(arguments: Dict[str, Any]) -> PlatformSelector:
    if arguments.get("os") and arguments.get("arch"):
        selector = PlatformSelector()
    else:
        selector = PlatformSelector.from_host()
    if arguments.get("os"):
        selector.with_os(arguments["os"])
    if arguments.get("arch"):
        selector.with_arch(arguments["arch"])
    if arguments.get("ext"):
        selector.with_ext(arguments["ext"])
    return selector


async def handle_tool_call(
    name: str,
    arguments: Dict[str, Any],
    urls: Optional[ReleaseURLFormatter] = None,
    fetch_text: Optional[TextFetcher] = None,
) -> Dict[str, Any]:
    """Run a tool and build its JSON-ready result."""
    try:
        if name == "node_release_info":
            resolver = ReleaseInfoResolver(
                arguments["version"],
                selector=_selector_for(arguments),
                urls=urls,
                fetch_text=fetch_text,
            )
            info = await resolver.fetch()
            return {"success": True, "data": info.to_dict()}

        elif name == "node_release_info_all":
            resolver = ReleaseInfoResolver(arguments["version"], urls=urls, fetch_text=fetch_text)
            infos = await resolver.fetch_all()
            return {"success": True, "data": [info.to_dict() for info in infos]}

        return {"success": False, "error": f"Unknown tool: {name}"}

    except ReleaseInfoError as e:
        log_error(e, {"tool": name, "arguments": arguments})
        return {"success": False, "error": str(e), "code": e.code, "details": e.details}
    except KeyError as e:
        return {"success": False, "error": f"Missing argument: {e.args[0]}"}


async def init_server(
    urls: Optional[ReleaseURLFormatter] = None,
    fetch_text: Optional[TextFetcher] = None,
) -> Server:
    logger.info("registered_tools", tools=[t.name for t in tools])

    server = Server("node-release-info")

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        logger.debug("tools_requested")
        return tools

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        logger.debug("tool_call_received", tool=name, arguments=arguments)
        result = await handle_tool_call(name, arguments or {}, urls=urls, fetch_text=fetch_text)
        return [types.TextContent(type="text", text=json.dumps(result))]

    return server


async def serve() -> None:
    configure_logging()
    logger.info("starting_server")
    server = await init_server()
    async with stdio.stdio_server() as (read_stream, write_stream):
        init_options = InitializationOptions(
            server_name="node-release-info",
            server_version=__version__,
            capabilities=types.ServerCapabilities(
                tools=types.ToolsCapability(listChanged=False),
                logging=types.LoggingCapability(),
            ),
        )
        await server.run(read_stream, write_stream, init_options)


def main() -> None:
    """Run the MCP server."""
    asyncio.run(serve())
