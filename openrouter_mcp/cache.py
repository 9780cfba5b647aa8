"""
File-backed cache for the OpenRouter model catalog.

One JSON file holds the last successful listing. Its modification time is
the only freshness signal: younger than the TTL is a hit, anything else
(missing, stale, unparseable) is a miss. A file that fails to parse is
deleted so the next listing refetches and rewrites it.

Cache problems never reach the caller. They are logged and treated as a
miss or a dropped write.

Single-process only: writes are not atomic, so concurrent server
instances sharing one file could read a partial write.
"""

import json
import logging
import time
from pathlib import Path
from typing import Callable, Optional

from openrouter_mcp.adapters.schema import MODEL_LIST, ModelEntry
from openrouter_mcp.config import DEFAULT_CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)


class ModelCache:
    """Single-record model list cache with mtime-based TTL."""

    def __init__(
        self,
        path: Path,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.path = Path(path)
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def age(self) -> Optional[float]:
        """Seconds since the record was written, or None if there is none."""
        try:
            return self._clock() - self.path.stat().st_mtime
        except FileNotFoundError:
            return None

    def read(self) -> Optional[list[ModelEntry]]:
        """Return cached models if the record is fresh, else None."""
        try:
            age = self.age()
        except OSError as e:
            logger.warning(f"Model cache stat failed: {e}")
            return None

        if age is None:
            return None
        if age >= self.ttl_seconds:
            logger.debug(f"Model cache stale ({age:.0f}s old)")
            return None

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            models = MODEL_LIST.validate_python(raw)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            # ValueError covers bad JSON, bad encoding and pydantic ValidationError
            logger.warning(f"Model cache read error (possibly corrupted), discarding: {e}")
            self.clear()
            return None

        logger.debug(f"Model cache hit: {len(models)} models, {age:.0f}s old")
        return models

    def write(self, models: list[ModelEntry]) -> None:
        """Replace the cached record. Failures are logged, not raised."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps([m.model_dump() for m in models]), encoding="utf-8"
            )
        except OSError as e:
            logger.warning(f"Model cache write error: {e}")

    def clear(self) -> None:
        """Delete the record if present."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Model cache delete failed: {e}")
