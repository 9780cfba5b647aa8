"""
Error types for openrouter-mcp.

Every operation failure derives from OpenRouterMCPError. The tool dispatcher
is the only place that turns these into error results for the transport.
"""

from typing import Optional


class OpenRouterMCPError(Exception):
    """Base error for openrouter-mcp failures."""
    pass


class ConfigError(OpenRouterMCPError):
    """Missing or invalid startup configuration."""
    pass


class InvalidArgumentError(OpenRouterMCPError):
    """Tool arguments failed validation. No network call was made."""
    pass


class UnknownToolError(OpenRouterMCPError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class RateLimitedError(OpenRouterMCPError):
    """OpenRouter answered 429. Never retried automatically."""

    def __init__(self, retry_after: str = "10"):
        super().__init__(
            f"Rate limited by OpenRouter. Please wait {retry_after} seconds."
        )
        self.retry_after = retry_after


class UpstreamError(OpenRouterMCPError):
    """Non-2xx response from OpenRouter."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(OpenRouterMCPError):
    """2xx response that is missing the fields we need."""
    pass
