"""MCP protocol server for openrouter-mcp.

Exposes the OpenRouter tools over MCP stdio transport. The assistant host
launches this as a subprocess and calls tools via JSON-RPC.

Entry points:
    openrouter-mcp-server      (console script)
    python -m openrouter_mcp
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from openrouter_mcp import __version__
from openrouter_mcp.config import API_KEY_ENV, Settings, load_settings
from openrouter_mcp.dispatcher import ToolDispatcher
from openrouter_mcp.errors import ConfigError

logger = logging.getLogger(__name__)

SERVER_NAME = "openrouter-mcp"


# ─────────────────────────────────────────────────────────────────────
# SERVER
# ─────────────────────────────────────────────────────────────────────

def create_server(dispatcher: ToolDispatcher) -> Server:
    """Build an MCP server whose tools are served by the dispatcher."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return dispatcher.list_tools()

    # Argument checks belong to the dispatcher so every failure gets the
    # same "Error: ..." envelope.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: dict) -> types.CallToolResult:
        return await dispatcher.dispatch(name, arguments)

    return server


async def serve(settings: Settings) -> None:
    """Run the MCP server on stdio until the host closes the pipe."""
    server = create_server(ToolDispatcher.from_settings(settings))

    async with stdio_server() as (read_stream, write_stream):
        logger.info("OpenRouter MCP server running on stdio")
        await server.run(
            read_stream, write_stream, server.create_initialization_options()
        )


# ─────────────────────────────────────────────────────────────────────
# ENTRY POINT
# ─────────────────────────────────────────────────────────────────────

def load_settings_or_exit() -> Settings:
    """Load settings, or print a diagnostic and exit 1 if the key is missing."""
    try:
        return load_settings()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(
            f"Please run 'gemini extension configure openrouter-mcp' or set {API_KEY_ENV}.",
            file=sys.stderr,
        )
        sys.exit(1)


def run(verbose: bool = False) -> None:
    """Entry point for openrouter-mcp MCP server."""
    load_dotenv()

    # stdout carries the MCP stream, so logs go to stderr
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(name)s %(message)s", stream=sys.stderr)

    settings = load_settings_or_exit()
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    run()
