"""
Resilient fetch - one HTTP request with timeout, backoff and rate-limit handling.

Retry rules:
- 429: never retried, raises RateLimitedError with the Retry-After hint
- 5xx: retried after 1s, 2s, 4s, ... up to max_retries extra attempts
- Transport errors (timeouts, connection failures): retried the same way,
  but only for idempotent methods
- Anything else: the response is returned and the caller checks the status

When retries run out the last response is returned, or the last transport
error is raised.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from openrouter_mcp.config import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_REFERER,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_TITLE,
)
from openrouter_mcp.errors import RateLimitedError

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_HEADERS: dict[str, str] = {
    "HTTP-Referer": DEFAULT_REFERER,
    "X-Title": DEFAULT_TITLE,
}
DEFAULT_RETRY_AFTER = "10"
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})

Sleep = Callable[[float], Awaitable[Any]]


def is_server_error(response: httpx.Response) -> bool:
    return response.status_code >= 500


def _retry_transport_errors(method: str) -> Callable[[BaseException], bool]:
    idempotent = method.upper() in IDEMPOTENT_METHODS

    def predicate(exception: BaseException) -> bool:
        return idempotent and isinstance(exception, httpx.TransportError)

    return predicate


def _last_outcome(retry_state: RetryCallState) -> httpx.Response:
    # Hand back the final response, or re-raise the final transport error.
    return retry_state.outcome.result()


async def _send_once(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    headers: dict[str, str],
    json: Any,
    timeout: float,
) -> httpx.Response:
    try:
        response = await asyncio.wait_for(
            client.request(method, url, headers=headers, json=json),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        raise httpx.TimeoutException(
            f"{method} {url} timed out after {timeout:g}s"
        ) from e

    if response.status_code == 429:
        retry_after = response.headers.get("Retry-After") or DEFAULT_RETRY_AFTER
        logger.warning(f"Rate limited on {method} {url}, retry after {retry_after}s")
        raise RateLimitedError(retry_after)

    return response


async def fetch_with_retry(
    method: str,
    url: str,
    *,
    headers: Optional[dict[str, str]] = None,
    json: Any = None,
    max_retries: int = DEFAULT_MAX_RETRIES,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    default_headers: Optional[dict[str, str]] = None,
    sleep: Sleep = asyncio.sleep,
) -> httpx.Response:
    """
    Send one request with bounded retries.

    Args:
        method: HTTP method
        url: Absolute URL
        headers: Caller headers, merged over the client identification headers
        json: Optional JSON body
        max_retries: Extra attempts after the first (5xx / idempotent transport errors)
        timeout: Hard limit per attempt, in seconds
        default_headers: Replaces DEFAULT_CLIENT_HEADERS when given
        sleep: Awaitable used between attempts (injectable for tests)

    Returns:
        The final httpx.Response, whatever its status

    Raises:
        RateLimitedError: On HTTP 429
        httpx.HTTPError: Transport failure that was not retried or outlived retries
    """
    merged_headers = {
        **(DEFAULT_CLIENT_HEADERS if default_headers is None else default_headers),
        **(headers or {}),
    }

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=1, exp_base=2),
        retry=(
            retry_if_result(is_server_error)
            | retry_if_exception(_retry_transport_errors(method))
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        retry_error_callback=_last_outcome,
        sleep=sleep,
    )

    async with httpx.AsyncClient(timeout=timeout) as client:
        return await retrying(
            _send_once, client, method, url, merged_headers, json, timeout
        )
