"""
Configuration constants and Pydantic models for openrouter-mcp.
"""

import math
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from openrouter_mcp.errors import ConfigError


# ─────────────────────────────────────────────────────────────────────
# DEFAULTS
# ─────────────────────────────────────────────────────────────────────

DEFAULT_BASE_URL: str = "https://openrouter.ai/api/v1"
DEFAULT_CACHE_FILE: Path = Path(__file__).parent / ".models-cache.json"
DEFAULT_CACHE_TTL_SECONDS: float = 300.0  # 5 minutes
DEFAULT_TIMEOUT_SECONDS: float = 30.0
DEFAULT_MAX_RETRIES: int = 2
DEFAULT_REFERER: str = "https://geminicli.com"
DEFAULT_TITLE: str = "Gemini CLI OpenRouter Extension"

API_KEY_ENV: str = "OPENROUTER_API_KEY"


# ─────────────────────────────────────────────────────────────────────
# INPUT LIMITS
# ─────────────────────────────────────────────────────────────────────

MAX_MODEL_ID_LENGTH: int = 255
MAX_PROMPT_LENGTH: int = 15000


# ─────────────────────────────────────────────────────────────────────
# ENVIRONMENT LOADING
# ─────────────────────────────────────────────────────────────────────

def get_api_key() -> Optional[str]:
    """Get the OpenRouter API key from environment (None if unset or blank)."""
    value = os.environ.get(API_KEY_ENV, "").strip()
    return value or None


def get_base_url() -> str:
    """Get API root from OPENROUTER_BASE_URL, without trailing slash."""
    return os.environ.get("OPENROUTER_BASE_URL", DEFAULT_BASE_URL).rstrip("/")


def get_cache_file() -> Path:
    """
    Get model cache path from environment or default.

    Set OPENROUTER_MCP_CACHE_FILE to move the cache out of the package directory.
    """
    path = os.environ.get("OPENROUTER_MCP_CACHE_FILE")
    if path:
        return Path(path).expanduser()
    return DEFAULT_CACHE_FILE


def _positive_float_env(key: str, default: float) -> float:
    """Read a finite, positive float from the environment, else the default."""
    try:
        value = float(os.environ.get(key, default))
    except ValueError:
        return default
    if not math.isfinite(value) or value <= 0:
        return default
    return value


def get_cache_ttl() -> float:
    """
    Get cache TTL in seconds (OPENROUTER_MCP_CACHE_TTL, default: 300).

    Non-numeric, non-finite and non-positive values fall back to the default.
    """
    return _positive_float_env("OPENROUTER_MCP_CACHE_TTL", DEFAULT_CACHE_TTL_SECONDS)


def get_timeout() -> float:
    """
    Get per-attempt HTTP timeout in seconds (OPENROUTER_MCP_TIMEOUT, default: 30).

    Non-numeric, non-finite and non-positive values fall back to the default.
    """
    return _positive_float_env("OPENROUTER_MCP_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)


def get_max_retries() -> int:
    """Get extra attempts on 5xx (OPENROUTER_MCP_MAX_RETRIES, default: 2)."""
    try:
        value = int(os.environ.get("OPENROUTER_MCP_MAX_RETRIES", DEFAULT_MAX_RETRIES))
    except ValueError:
        return DEFAULT_MAX_RETRIES
    return value if value >= 0 else DEFAULT_MAX_RETRIES


# ─────────────────────────────────────────────────────────────────────
# DATA MODELS
# ─────────────────────────────────────────────────────────────────────

class Settings(BaseModel):
    """Runtime configuration, built once at startup and passed down."""
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    cache_file: Path = DEFAULT_CACHE_FILE
    cache_ttl_seconds: float = Field(DEFAULT_CACHE_TTL_SECONDS, gt=0, allow_inf_nan=False)
    timeout_seconds: float = Field(DEFAULT_TIMEOUT_SECONDS, gt=0, allow_inf_nan=False)
    max_retries: int = Field(DEFAULT_MAX_RETRIES, ge=0)
    referer: str = DEFAULT_REFERER
    title: str = DEFAULT_TITLE

    @property
    def models_url(self) -> str:
        return f"{self.base_url}/models"

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"

    def client_headers(self) -> dict[str, str]:
        """Headers identifying this client to OpenRouter."""
        return {"HTTP-Referer": self.referer, "X-Title": self.title}


def load_settings() -> Settings:
    """
    Build Settings from environment variables.

    Raises:
        ConfigError: If OPENROUTER_API_KEY is not set
    """
    api_key = get_api_key()
    if not api_key:
        raise ConfigError(f"{API_KEY_ENV} environment variable is missing.")

    return Settings(
        api_key=api_key,
        base_url=get_base_url(),
        cache_file=get_cache_file(),
        cache_ttl_seconds=get_cache_ttl(),
        timeout_seconds=get_timeout(),
        max_retries=get_max_retries(),
        referer=os.environ.get("OPENROUTER_MCP_REFERER", DEFAULT_REFERER),
        title=os.environ.get("OPENROUTER_MCP_TITLE", DEFAULT_TITLE),
    )
