"""
Pydantic shapes for OpenRouter payloads.

Decoding goes through these models so a malformed upstream body turns into
a MalformedResponseError instead of a KeyError deep in the dispatcher.
"""

import logging
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from openrouter_mcp.errors import MalformedResponseError

logger = logging.getLogger(__name__)

FREE_SUFFIX = ":free"


class ModelEntry(BaseModel):
    """One catalog entry. Only id and name are kept; the rest is ignored."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str

    @property
    def is_free(self) -> bool:
        return self.id.endswith(FREE_SUFFIX)

    @property
    def tier(self) -> str:
        return "Free" if self.is_free else "Paid"


MODEL_LIST = TypeAdapter(list[ModelEntry])


class ChatMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: Optional[str] = None
    content: Optional[str] = None


class ChatChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: Optional[ChatMessage] = None


class ChatCompletion(BaseModel):
    """Non-streaming chat completion response."""
    model_config = ConfigDict(extra="ignore")

    choices: list[ChatChoice] = Field(default_factory=list)

    def first_content(self) -> Optional[str]:
        if not self.choices or self.choices[0].message is None:
            return None
        return self.choices[0].message.content


class ErrorDetail(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: Optional[str] = None
    code: Optional[Union[int, str]] = None


class ErrorEnvelope(BaseModel):
    """OpenRouter error body: {"error": {"message": ..., "code": ...}}"""
    model_config = ConfigDict(extra="ignore")

    error: Optional[ErrorDetail] = None


# ─────────────────────────────────────────────────────────────────────
# DECODERS
# ─────────────────────────────────────────────────────────────────────

def decode_model_list(payload: Any) -> list[ModelEntry]:
    """
    Extract models from a catalog response body.

    A missing or non-list "data" field yields an empty list. Entries that
    do not carry a string id and name are skipped.
    """
    if not isinstance(payload, dict):
        return []
    data = payload.get("data")
    if not isinstance(data, list):
        return []

    models = []
    for item in data:
        try:
            models.append(ModelEntry.model_validate(item))
        except ValidationError:
            logger.debug(f"Skipping malformed catalog entry: {item!r}")
    return models


def decode_completion_content(payload: Any) -> str:
    """
    Return choices[0].message.content from a completion body.

    Raises:
        MalformedResponseError: If the body has no usable content
    """
    try:
        completion = ChatCompletion.model_validate(payload)
    except ValidationError as e:
        raise MalformedResponseError(
            "Invalid response from OpenRouter: Missing content"
        ) from e

    content = completion.first_content()
    if not content:
        raise MalformedResponseError("Invalid response from OpenRouter: Missing content")
    return content


def decode_error_message(payload: Any) -> Optional[str]:
    """Return error.message from an error body, or None if it has none."""
    try:
        envelope = ErrorEnvelope.model_validate(payload)
    except ValidationError:
        return None
    if envelope.error is None:
        return None
    return envelope.error.message or None
