"""
Adapters for the OpenRouter HTTP API.
"""

from .fetch import fetch_with_retry
from .openrouter import OpenRouterAdapter
from .schema import ModelEntry

__all__ = ["ModelEntry", "OpenRouterAdapter", "fetch_with_retry"]
