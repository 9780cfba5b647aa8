"""Tests for OpenRouter payload decoding."""

import pytest

from openrouter_mcp.adapters.schema import (
    ModelEntry,
    decode_completion_content,
    decode_error_message,
    decode_model_list,
)
from openrouter_mcp.errors import MalformedResponseError

from tests.conftest import MOCK_CATALOG_RESPONSE, MOCK_COMPLETION_RESPONSE


class TestDecodeModelList:
    def test_decodes_catalog(self):
        models = decode_model_list(MOCK_CATALOG_RESPONSE)
        assert len(models) == 4
        assert all(isinstance(m, ModelEntry) for m in models)

    def test_extra_fields_dropped(self):
        models = decode_model_list(MOCK_CATALOG_RESPONSE)
        assert models[0].model_dump() == {
            "id": "meta-llama/llama-3.3-70b-instruct:free",
            "name": "Meta: Llama 3.3 70B Instruct (free)",
        }

    @pytest.mark.parametrize("payload", [
        {},
        {"data": None},
        {"data": "models"},
        [],
        "not a dict",
    ])
    def test_missing_or_malformed_data_is_empty(self, payload):
        assert decode_model_list(payload) == []

    def test_malformed_entries_skipped(self):
        models = decode_model_list({"data": [
            {"id": "good", "name": "Good"},
            {"id": "no-name"},
            "junk",
            {"id": 3, "name": None},
        ]})
        assert [m.id for m in models] == ["good"]


class TestModelEntry:
    def test_tier(self):
        assert ModelEntry(id="x:free", name="x").tier == "Free"
        assert ModelEntry(id="x", name="x").tier == "Paid"

    def test_frozen(self):
        entry = ModelEntry(id="x", name="x")
        with pytest.raises(Exception):
            entry.id = "y"


class TestDecodeCompletion:
    def test_extracts_first_choice_content(self):
        assert decode_completion_content(MOCK_COMPLETION_RESPONSE) == "The capital of France is Paris."

    @pytest.mark.parametrize("payload", [
        {},
        {"choices": []},
        {"choices": None},
        {"choices": [{}]},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": ""}}]},
        {"choices": [{"message": {"content": None}}]},
        ["not", "a", "dict"],
    ])
    def test_missing_content_raises(self, payload):
        with pytest.raises(MalformedResponseError, match="Invalid response"):
            decode_completion_content(payload)


class TestDecodeErrorMessage:
    def test_extracts_message(self):
        assert decode_error_message({"error": {"message": "No credits", "code": 402}}) == "No credits"

    @pytest.mark.parametrize("payload", [
        {},
        {"error": None},
        {"error": {}},
        {"error": {"message": ""}},
        "text",
    ])
    def test_no_message(self, payload):
        assert decode_error_message(payload) is None
