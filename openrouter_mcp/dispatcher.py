"""
Tool dispatcher - routes MCP tool calls to the OpenRouter operations.

This is the single boundary where operation outcomes become transport
results. Operations raise; dispatch() catches everything and returns a
CallToolResult, flagged isError with an "Error: ..." text on failure.

Usage:
    dispatcher = ToolDispatcher.from_settings(load_settings())
    result = await dispatcher.dispatch("list_models", {"free": True})
    print(result.content[0].text)
"""

import logging
from typing import Any, Optional

import httpx
from mcp import types

from openrouter_mcp.adapters.openrouter import OpenRouterAdapter
from openrouter_mcp.adapters.schema import ModelEntry
from openrouter_mcp.cache import ModelCache
from openrouter_mcp.catalog import filter_models, render_models_table
from openrouter_mcp.config import MAX_MODEL_ID_LENGTH, MAX_PROMPT_LENGTH, Settings
from openrouter_mcp.errors import (
    InvalidArgumentError,
    OpenRouterMCPError,
    UnknownToolError,
)

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────
# TOOL SCHEMAS
# ─────────────────────────────────────────────────────────────────────

LIST_MODELS_TOOL = types.Tool(
    name="list_models",
    description="List available models from OpenRouter",
    inputSchema={
        "type": "object",
        "properties": {
            "free": {
                "type": "boolean",
                "description": "Filter only free models",
            },
            "query": {
                "type": "string",
                "description": "Filter models by name or ID",
            },
            "forceRefresh": {
                "type": "boolean",
                "description": "Bypass cache and fetch fresh model list",
            },
        },
    },
)

PROMPT_TOOL = types.Tool(
    name="prompt",
    description="Send a prompt to an OpenRouter model",
    inputSchema={
        "type": "object",
        "properties": {
            "modelId": {
                "type": "string",
                "description": "The ID of the model (e.g., 'google/gemini-2.0-flash-exp:free')",
            },
            "prompt": {
                "type": "string",
                "description": "The prompt message to send",
            },
        },
        "required": ["modelId", "prompt"],
    },
)

TOOLS: list[types.Tool] = [LIST_MODELS_TOOL, PROMPT_TOOL]


# ─────────────────────────────────────────────────────────────────────
# RESULT ENVELOPES
# ─────────────────────────────────────────────────────────────────────

def text_result(text: str) -> types.CallToolResult:
    return types.CallToolResult(content=[types.TextContent(type="text", text=text)])


def error_result(message: str) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=f"Error: {message}")],
        isError=True,
    )


def validate_prompt_args(model_id: Any, prompt: Any) -> None:
    """
    Check prompt tool arguments before any network call.

    Raises:
        InvalidArgumentError: On a missing, empty, non-string or oversized value
    """
    if not isinstance(model_id, str) or not model_id or len(model_id) > MAX_MODEL_ID_LENGTH:
        raise InvalidArgumentError("Invalid or missing modelId")
    if not isinstance(prompt, str) or not prompt or len(prompt) > MAX_PROMPT_LENGTH:
        raise InvalidArgumentError(
            f"Prompt must be a string between 1 and {MAX_PROMPT_LENGTH} characters"
        )


# ─────────────────────────────────────────────────────────────────────
# DISPATCHER
# ─────────────────────────────────────────────────────────────────────

class ToolDispatcher:
    """Routes tool calls to list_models / prompt."""

    def __init__(self, adapter: OpenRouterAdapter, cache: ModelCache):
        self._adapter = adapter
        self._cache = cache

    @classmethod
    def from_settings(cls, settings: Settings) -> "ToolDispatcher":
        return cls(
            adapter=OpenRouterAdapter(settings),
            cache=ModelCache(settings.cache_file, ttl_seconds=settings.cache_ttl_seconds),
        )

    def list_tools(self) -> list[types.Tool]:
        return list(TOOLS)

    async def get_models(self, force_refresh: bool = False) -> list[ModelEntry]:
        """Cached catalog, refetched on miss or when force_refresh is set."""
        models = None if force_refresh else self._cache.read()
        if models is None:
            models = await self._adapter.fetch_models()
            self._cache.write(models)
        return models

    async def list_models(
        self,
        free: bool = False,
        query: Optional[str] = None,
        force_refresh: bool = False,
    ) -> str:
        models = await self.get_models(force_refresh=force_refresh)
        matches = filter_models(models, free=free, query=query)
        logger.debug(f"list_models: {len(matches)} of {len(models)} models match")
        return render_models_table(matches)

    async def prompt(self, model_id: Any, prompt: Any) -> str:
        validate_prompt_args(model_id, prompt)
        logger.info(f"Prompting {model_id} ({len(prompt)} chars)")
        return await self._adapter.complete(model_id, prompt)

    async def _route(self, name: str, arguments: dict[str, Any]) -> str:
        if name == "list_models":
            query = arguments.get("query")
            return await self.list_models(
                free=bool(arguments.get("free")),
                query=str(query) if query else None,
                force_refresh=bool(arguments.get("forceRefresh")),
            )
        if name == "prompt":
            return await self.prompt(arguments.get("modelId"), arguments.get("prompt"))
        raise UnknownToolError(name)

    async def dispatch(
        self, name: str, arguments: Optional[dict[str, Any]] = None
    ) -> types.CallToolResult:
        """Run a tool call. Never raises; failures come back with isError set."""
        try:
            text = await self._route(name, arguments or {})
        except OpenRouterMCPError as e:
            logger.info(f"Tool {name} failed: {e}")
            return error_result(str(e))
        except httpx.HTTPError as e:
            logger.warning(f"Tool {name} transport error: {e!r}")
            return error_result(str(e) or type(e).__name__)
        except Exception as e:
            logger.exception(f"Tool {name} crashed")
            return error_result(str(e) or type(e).__name__)
        return text_result(text)
