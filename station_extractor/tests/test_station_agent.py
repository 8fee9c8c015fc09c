"""Tests for the station agent and its prompt.

The LLM router is mocked; every failure mode must yield an empty list.
"""

import json

import pytest

from station_extractor.agents.station_agent import (
    extract_stations,
    records_from_items,
    truncate_document_text,
)
from station_extractor.core.config import LLMConfig
from station_extractor.core.errors import ErrorCategory, PipelineErrors
from station_extractor.core.llm_client import LLMClient
from station_extractor.core.parishes import PARISHES
from station_extractor.prompts.station_prompt import build_station_prompt

from conftest import completion


ALPHA = {
    "stationCode": "KIN001",
    "name": "Alpha School",
    "address": "Alpha Road, Kingston",
    "parish": "Kingston",
    "parishId": 1,
}


# =============================================================================
# Prompt
# =============================================================================


class TestStationPrompt:

    def test_contains_every_prefix_and_id(self):
        prompt = build_station_prompt("text", "Main ECJ Document")
        for parish in PARISHES:
            assert f"{parish.name}: {parish.prefix}001" in prompt
            assert f"{parish.name}={parish.parish_id}" in prompt

    def test_contains_document_text_and_name(self):
        prompt = build_station_prompt("Polling Division 12: Alpha School", "Final Count Document")
        assert prompt.rstrip().endswith("Polling Division 12: Alpha School")
        assert '"Final Count Document"' in prompt

    def test_example_is_valid_json(self):
        prompt = build_station_prompt("text")
        example = prompt[prompt.index("[\n"):prompt.index("]\n") + 1]
        parsed = json.loads(example)
        assert parsed[0]["stationCode"] == "KIN001"
        assert parsed[0]["parishId"] == 1

    def test_braces_in_document_text_survive(self):
        assert "{weird} text" in build_station_prompt("{weird} text")


# =============================================================================
# Helpers
# =============================================================================


class TestTruncateDocumentText:

    def test_short_text_unchanged(self):
        assert truncate_document_text("abc", "A", max_chars=10) == "abc"

    def test_long_text_truncated(self):
        assert truncate_document_text("abcdefghij", "A", max_chars=4) == "abcd"


class TestRecordsFromItems:

    def test_valid_items(self):
        records, skipped = records_from_items([ALPHA], "A")
        assert skipped == 0
        assert records[0].station_code == "KIN001"
        assert records[0].name == "Alpha School"

    def test_non_dict_items_skipped(self):
        records, skipped = records_from_items([ALPHA, "Beta Hall", 3, None], "A")
        assert len(records) == 1
        assert skipped == 3

    def test_blank_name_or_parish_skipped(self):
        items = [
            {"name": "  ", "parish": "Kingston"},
            {"name": "Beta Hall", "parish": ""},
            {"parish": "Kingston"},
            {"name": "Gamma Church"},
        ]
        records, skipped = records_from_items(items, "A")
        assert records == []
        assert skipped == 4

    def test_missing_parish_id_filled_from_table(self):
        records, _ = records_from_items([{"name": "Beta Hall", "parish": "St. Andrew"}], "A")
        assert records[0].parish_id == 2

    def test_null_parish_id_filled_from_table(self):
        records, _ = records_from_items([{"name": "Beta Hall", "parish": "Hanover", "parishId": None}], "A")
        assert records[0].parish_id == 12

    def test_unknown_parish_gets_zero(self):
        records, _ = records_from_items([{"name": "Beta Hall", "parish": "Atlantis"}], "A")
        assert records[0].parish_id == 0

    def test_given_parish_id_kept_even_if_wrong(self):
        records, _ = records_from_items([{"name": "Beta Hall", "parish": "Kingston", "parishId": 9}], "A")
        assert records[0].parish_id == 9

    def test_missing_code_and_address_default_empty(self):
        records, _ = records_from_items([{"name": "Beta Hall", "parish": "Kingston", "address": None}], "A")
        assert records[0].station_code == ""
        assert records[0].address == ""


# =============================================================================
# extract_stations
# =============================================================================


class TestExtractStations:

    @pytest.mark.asyncio
    async def test_parses_records_from_prose_response(self, mock_router):
        mock_router.acompletion.return_value = completion(f"Here you go:\n{json.dumps([ALPHA])}\nDone.")
        records = await extract_stations("document text", "Source A", client=LLMClient(router=mock_router))

        assert [r.name for r in records] == ["Alpha School"]

    @pytest.mark.asyncio
    async def test_sends_prompt_with_document_text(self, mock_router):
        await extract_stations("Alpha School, Kingston", "Source A", model="m", client=LLMClient(router=mock_router))

        kwargs = mock_router.acompletion.call_args.kwargs
        assert kwargs["model"] == "m"
        assert "Alpha School, Kingston" in kwargs["messages"][-1]["content"]

    @pytest.mark.asyncio
    async def test_empty_text_skips_model_call(self, mock_router):
        records = await extract_stations("   \n", "Source A", client=LLMClient(router=mock_router))
        assert records == []
        mock_router.acompletion.assert_not_called()

    @pytest.mark.asyncio
    async def test_model_failure_yields_empty_list(self, mock_router):
        mock_router.acompletion.side_effect = RuntimeError("429 quota exceeded")
        errors = PipelineErrors()

        records = await extract_stations("text", "Source A", client=LLMClient(router=mock_router), errors=errors)

        assert records == []
        assert errors.errors[0].category == ErrorCategory.LLM_API
        assert errors.failed_sources == ["Source A"]

    @pytest.mark.asyncio
    async def test_timeout_yields_empty_list(self, mock_router):
        mock_router.acompletion.side_effect = TimeoutError()
        records = await extract_stations("text", "Source A", client=LLMClient(router=mock_router))
        assert records == []

    @pytest.mark.asyncio
    async def test_no_json_yields_empty_list(self, mock_router):
        mock_router.acompletion.return_value = completion("I could not find any stations.")
        errors = PipelineErrors()

        records = await extract_stations("text", "Source A", client=LLMClient(router=mock_router), errors=errors)

        assert records == []
        assert errors.errors[0].category == ErrorCategory.LLM_PARSE

    @pytest.mark.asyncio
    async def test_malformed_json_yields_empty_list(self, mock_router):
        mock_router.acompletion.return_value = completion('[{"name": "Alpha School",]')
        records = await extract_stations("text", "Source A", client=LLMClient(router=mock_router))
        assert records == []

    @pytest.mark.asyncio
    async def test_invalid_items_dropped_with_warning(self, mock_router):
        items = [ALPHA, {"name": "", "parish": "Kingston"}]
        mock_router.acompletion.return_value = completion(json.dumps(items))
        errors = PipelineErrors()

        records = await extract_stations("text", "Source A", client=LLMClient(router=mock_router), errors=errors)

        assert len(records) == 1
        assert errors.warning_count == 1
        assert errors.warnings[0].context["dropped"] == 1
        assert errors.error_count == 0

    @pytest.mark.asyncio
    async def test_long_text_truncated_before_prompting(self, mock_router, monkeypatch):
        monkeypatch.setattr(LLMConfig, "MAX_DOCUMENT_CHARS", 10)
        await extract_stations("A" * 10 + "OVERFLOW", "Source A", client=LLMClient(router=mock_router))

        prompt = mock_router.acompletion.call_args.kwargs["messages"][-1]["content"]
        assert "OVERFLOW" not in prompt
