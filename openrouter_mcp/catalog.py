"""
Model catalog filtering and markdown rendering for the list_models tool.
"""

from typing import Iterable, Optional

from openrouter_mcp.adapters.schema import ModelEntry

NO_MODELS_MESSAGE = "No models found matching criteria."
TABLE_HEADER = "| Model ID | Tier | Name |\n| :--- | :--- | :--- |"


def filter_models(
    models: Iterable[ModelEntry],
    free: bool = False,
    query: Optional[str] = None,
) -> list[ModelEntry]:
    """
    Apply the free-tier filter, then the case-insensitive query filter.

    Both are optional and combine with AND. The query matches a substring
    of either the id or the display name.
    """
    result = list(models)

    if free:
        result = [m for m in result if m.is_free]

    if query:
        needle = query.lower()
        result = [
            m for m in result
            if needle in m.id.lower() or needle in m.name.lower()
        ]

    return result


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


def render_models_table(models: list[ModelEntry]) -> str:
    """Render models as a markdown table, or the no-results message if empty."""
    if not models:
        return NO_MODELS_MESSAGE

    rows = [f"| `{m.id}` | {m.tier} | {_cell(m.name)} |" for m in models]
    return TABLE_HEADER + "\n" + "\n".join(rows)
