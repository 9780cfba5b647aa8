"""Shared test fixtures for openrouter-mcp tests."""

import pytest

from openrouter_mcp.config import Settings


# ─────────────────────────────────────────────────────────────────────
# MOCK DATA
# ─────────────────────────────────────────────────────────────────────

BASE_URL = "https://openrouter.ai/api/v1"
MODELS_URL = f"{BASE_URL}/models"
COMPLETIONS_URL = f"{BASE_URL}/chat/completions"

TEST_API_KEY = "sk-or-test-123"

FREE_LLAMA = "meta-llama/llama-3.3-70b-instruct:free"
PAID_LLAMA = "meta-llama/llama-3.1-405b-instruct"
FREE_GEMINI = "google/gemini-2.0-flash-exp:free"
PAID_CLAUDE = "anthropic/claude-3.5-sonnet"

MOCK_CATALOG_RESPONSE = {
    "data": [
        {"id": FREE_LLAMA, "name": "Meta: Llama 3.3 70B Instruct (free)", "context_length": 131072},
        {"id": PAID_LLAMA, "name": "Meta: Llama 3.1 405B Instruct", "context_length": 131072},
        {"id": FREE_GEMINI, "name": "Google: Gemini 2.0 Flash Experimental (free)"},
        {"id": PAID_CLAUDE, "name": "Anthropic: Claude 3.5 Sonnet"},
    ]
}

MOCK_COMPLETION_RESPONSE = {
    "id": "gen-123",
    "model": FREE_LLAMA,
    "choices": [
        {
            "index": 0,
            "message": {
                "role": "assistant",
                "content": "The capital of France is Paris."
            },
            "finish_reason": "stop"
        }
    ],
    "usage": {
        "prompt_tokens": 10,
        "completion_tokens": 8,
        "total_tokens": 18
    }
}


# ─────────────────────────────────────────────────────────────────────
# FIXTURES
# ─────────────────────────────────────────────────────────────────────

class SleepRecorder:
    """Stands in for asyncio.sleep; records requested delays without waiting."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(float(seconds))


@pytest.fixture
def no_sleep():
    return SleepRecorder()


@pytest.fixture
def cache_file(tmp_path):
    return tmp_path / "models-cache.json"


@pytest.fixture
def settings(cache_file):
    return Settings(api_key=TEST_API_KEY, cache_file=cache_file)


@pytest.fixture
def catalog_models():
    """Catalog entries as ModelEntry objects."""
    from openrouter_mcp.adapters.schema import decode_model_list
    return decode_model_list(MOCK_CATALOG_RESPONSE)
