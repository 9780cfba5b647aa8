"""
Run openrouter-mcp as MCP server.

Usage:
    python -m openrouter_mcp

Requires:
    - MCP SDK: pip install mcp
    - OPENROUTER_API_KEY in environment (or in a .env file)
"""

from openrouter_mcp.server import run

if __name__ == "__main__":
    run()
