"""Tests for station_extractor.core.llm_client module.

Tests the LLMClient class with a mocked router:
- complete(): single-turn completion returning raw text
- Cost tracking integration
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from station_extractor.core.config import LLMConfig
from station_extractor.core.cost_tracker import CostTracker
from station_extractor.core.llm_client import LLMClient, LLMResponse

from conftest import completion


# =============================================================================
# LLMResponse tests
# =============================================================================


class TestLLMResponse:
    """Tests for LLMResponse dataclass."""

    def test_response_stores_text_and_model(self):
        response = LLMResponse(text="[]", model="gemini/gemini-1.5-flash")
        assert response.text == "[]"
        assert response.model == "gemini/gemini-1.5-flash"


# =============================================================================
# LLMClient tests
# =============================================================================


class TestLLMClient:
    """Tests for LLMClient class."""

    @pytest.mark.asyncio
    async def test_complete_returns_raw_text(self, mock_router):
        mock_router.acompletion.return_value = completion('Sure! [{"name": "Alpha School"}]')
        client = LLMClient(router=mock_router)

        response = await client.complete(prompt="Extract stations.", model="test-model")

        assert response.text == 'Sure! [{"name": "Alpha School"}]'
        assert response.model == "test-model"

    @pytest.mark.asyncio
    async def test_builds_user_message(self, mock_router):
        client = LLMClient(router=mock_router)
        await client.complete(prompt="Extract stations.", model="test-model")

        kwargs = mock_router.acompletion.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["messages"] == [{"role": "user", "content": "Extract stations."}]

    @pytest.mark.asyncio
    async def test_system_prompt_comes_first(self, mock_router):
        client = LLMClient(router=mock_router)
        await client.complete(prompt="Go.", model="m", system_prompt="You transcribe lists.")

        messages = mock_router.acompletion.call_args.kwargs["messages"]
        assert messages[0] == {"role": "system", "content": "You transcribe lists."}
        assert messages[1]["role"] == "user"

    @pytest.mark.asyncio
    async def test_default_temperature_and_timeout(self, mock_router):
        client = LLMClient(router=mock_router)
        await client.complete(prompt="Go.", model="m")

        kwargs = mock_router.acompletion.call_args.kwargs
        assert kwargs["temperature"] == LLMConfig.TEMPERATURE
        assert kwargs["timeout"] == LLMConfig.TIMEOUT_SECONDS

    @pytest.mark.asyncio
    async def test_explicit_timeout(self, mock_router):
        client = LLMClient(router=mock_router)
        await client.complete(prompt="Go.", model="m", timeout=7.5, temperature=0.3)

        kwargs = mock_router.acompletion.call_args.kwargs
        assert kwargs["timeout"] == 7.5
        assert kwargs["temperature"] == 0.3

    @pytest.mark.asyncio
    async def test_none_content_becomes_empty_text(self, mock_router):
        mock_router.acompletion.return_value = completion(None)
        response = await LLMClient(router=mock_router).complete(prompt="Go.", model="m")
        assert response.text == ""

    @pytest.mark.asyncio
    async def test_errors_propagate(self, mock_router):
        mock_router.acompletion.side_effect = RuntimeError("quota exceeded")
        with pytest.raises(RuntimeError, match="quota exceeded"):
            await LLMClient(router=mock_router).complete(prompt="Go.", model="m")

    @pytest.mark.asyncio
    async def test_shared_router_asked_for_call_model(self, mock_router):
        with patch("station_extractor.core.llm_client.get_router", return_value=mock_router) as get_router:
            await LLMClient().complete(prompt="Go.", model="gemini/custom-model")
        get_router.assert_called_once_with("gemini/custom-model")

    def test_injected_router_wins(self, mock_router):
        with patch("station_extractor.core.llm_client.get_router") as get_router:
            assert LLMClient(router=mock_router).router_for("m") is mock_router
        get_router.assert_not_called()


# =============================================================================
# Cost tracking
# =============================================================================


class TestCostTracking:

    @pytest.mark.asyncio
    async def test_records_usage_per_source(self, mock_router):
        mock_router.acompletion.return_value = completion("[]", prompt_tokens=1200, completion_tokens=300)
        tracker = CostTracker()
        client = LLMClient(cost_tracker=tracker, router=mock_router)

        await client.complete(prompt="Go.", model="gemini/gemini-1.5-flash", source="Main ECJ Document")

        assert tracker.call_count == 1
        assert tracker.total_prompt_tokens == 1200
        assert tracker.total_completion_tokens == 300
        assert tracker.calls[0].source == "Main ECJ Document"

    @pytest.mark.asyncio
    async def test_missing_usage_is_not_recorded(self):
        router = MagicMock()
        response = completion("[]")
        response.usage = None
        router.acompletion = AsyncMock(return_value=response)
        tracker = CostTracker()

        await LLMClient(cost_tracker=tracker, router=router).complete(prompt="Go.", model="m")

        assert tracker.call_count == 0
