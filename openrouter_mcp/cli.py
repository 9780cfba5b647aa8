"""CLI entry point for openrouter-mcp.

Runs the MCP server, or calls the same tools directly from a terminal.
Terminal commands go through the tool dispatcher, so output and error
text match what the assistant host sees.

Entry point:
    openrouter-mcp serve
    openrouter-mcp models [--free] [--query TEXT] [--refresh]
    openrouter-mcp prompt <model-id> <text>
"""

import argparse
import asyncio
import logging
import sys

from mcp import types

from openrouter_mcp.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────
# ARGUMENT PARSING
# ─────────────────────────────────────────────────────────────────────


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="openrouter-mcp",
        description="OpenRouter model listing and prompting over MCP.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("serve", help="Run the MCP server on stdio")

    models_p = sub.add_parser("models", help="List OpenRouter models")
    models_p.add_argument("--free", action="store_true", help="Only free models")
    models_p.add_argument("--query", default=None, help="Filter by id or name")
    models_p.add_argument(
        "--refresh", action="store_true", help="Bypass the model cache"
    )

    prompt_p = sub.add_parser("prompt", help="Send a prompt to a model")
    prompt_p.add_argument("model_id", help="Model ID, e.g. meta-llama/llama-3.3-70b-instruct:free")
    prompt_p.add_argument("text", help="Prompt text ('-' reads stdin)")

    return parser


# ─────────────────────────────────────────────────────────────────────
# COMMANDS
# ─────────────────────────────────────────────────────────────────────


def _emit(result: types.CallToolResult) -> int:
    """Print a tool result. Errors go to stderr. Returns exit code."""
    text = "\n".join(c.text for c in result.content if isinstance(c, types.TextContent))
    if result.isError:
        print(text, file=sys.stderr)
        return 1
    print(text)
    return 0


async def _cmd_models(
    dispatcher: ToolDispatcher,
    free: bool = False,
    query: str | None = None,
    refresh: bool = False,
) -> int:
    """List models as a markdown table. Returns exit code."""
    arguments = {"free": free, "forceRefresh": refresh}
    if query:
        arguments["query"] = query
    return _emit(await dispatcher.dispatch("list_models", arguments))


async def _cmd_prompt(dispatcher: ToolDispatcher, model_id: str, text: str) -> int:
    """Send one prompt and print the reply. Returns exit code."""
    if text == "-":
        text = sys.stdin.read()
    return _emit(
        await dispatcher.dispatch("prompt", {"modelId": model_id, "prompt": text})
    )


# ─────────────────────────────────────────────────────────────────────
# ENTRY POINT
# ─────────────────────────────────────────────────────────────────────


def main():
    parser = _build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "serve":
        from openrouter_mcp.server import run
        run(verbose=args.verbose)
        return

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(name)s %(message)s", stream=sys.stderr)

    from dotenv import load_dotenv
    load_dotenv()

    from openrouter_mcp.server import load_settings_or_exit
    dispatcher = ToolDispatcher.from_settings(load_settings_or_exit())

    if args.command == "models":
        code = asyncio.run(_cmd_models(
            dispatcher, free=args.free, query=args.query, refresh=args.refresh,
        ))
    elif args.command == "prompt":
        code = asyncio.run(_cmd_prompt(dispatcher, args.model_id, args.text))
    else:
        parser.print_help()
        code = 1

    sys.exit(code)


if __name__ == "__main__":
    main()
