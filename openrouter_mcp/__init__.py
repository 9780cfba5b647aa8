"""
openrouter-mcp: OpenRouter models as MCP tools.

Usage:
    python -m openrouter_mcp

Requires an OpenRouter key in the environment:
    OPENROUTER_API_KEY=sk-or-...
"""

__version__ = "1.0.0"
