"""
OpenRouterAdapter - the two remote calls behind the MCP tools.

Catalog listing is anonymous; completion is bearer-authenticated.
Both go through fetch_with_retry.
"""

import asyncio
import logging

import httpx

from openrouter_mcp.adapters.fetch import Sleep, fetch_with_retry
from openrouter_mcp.adapters.schema import (
    ModelEntry,
    decode_completion_content,
    decode_error_message,
    decode_model_list,
)
from openrouter_mcp.config import Settings
from openrouter_mcp.errors import MalformedResponseError, UpstreamError

logger = logging.getLogger(__name__)


class OpenRouterAdapter:
    """
    Thin client for the OpenRouter catalog and chat completion endpoints.

    Holds no state beyond its Settings; a new HTTP client is opened per call.
    """

    def __init__(self, settings: Settings, sleep: Sleep = asyncio.sleep):
        self._settings = settings
        self._sleep = sleep

    async def _fetch(self, method: str, url: str, **kwargs) -> httpx.Response:
        return await fetch_with_retry(
            method,
            url,
            max_retries=self._settings.max_retries,
            timeout=self._settings.timeout_seconds,
            default_headers=self._settings.client_headers(),
            sleep=self._sleep,
            **kwargs,
        )

    async def fetch_models(self) -> list[ModelEntry]:
        """
        Fetch the full model catalog.

        Raises:
            UpstreamError: Non-2xx response
            MalformedResponseError: 2xx body that is not JSON
        """
        response = await self._fetch("GET", self._settings.models_url)

        if not response.is_success:
            raise UpstreamError(
                f"OpenRouter API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                "Invalid response from OpenRouter: catalog is not JSON"
            ) from e

        models = decode_model_list(payload)
        logger.debug(f"Fetched {len(models)} models from catalog")
        return models

    async def complete(self, model_id: str, prompt: str) -> str:
        """
        Send a single user message and return the reply text.

        Raises:
            UpstreamError: Non-2xx response
            MalformedResponseError: 2xx response without choices[0].message.content
        """
        response = await self._fetch(
            "POST",
            self._settings.completions_url,
            headers={
                "Authorization": f"Bearer {self._settings.api_key}",
                "Content-Type": "application/json",
            },
            json={
                "model": model_id,
                "messages": [{"role": "user", "content": prompt}],
            },
        )

        if not response.is_success:
            message = f"HTTP error {response.status_code}"
            try:
                message = decode_error_message(response.json()) or message
            except ValueError:
                pass  # not JSON, keep the status message
            raise UpstreamError(
                f"OpenRouter API Error: {message}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                "Invalid response from OpenRouter: Missing content"
            ) from e

        return decode_completion_content(payload)
