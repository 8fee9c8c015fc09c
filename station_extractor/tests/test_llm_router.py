"""Tests for station_extractor.core.llm_router.

Covers the deployment list (configured models plus overrides) and the
shared router cache. Calls use litellm's ``mock_response`` so nothing
leaves the process.
"""

import pytest

from station_extractor.core import llm_router
from station_extractor.core.config import FALLBACK_MODEL, STATION_MODEL

CUSTOM_MODEL = "gemini/custom-station-model"


def deployment_names(router) -> list[str]:
    return [deployment["model_name"] for deployment in router.model_list]


@pytest.fixture
def gemini(monkeypatch):
    monkeypatch.setattr(llm_router, "LLM_PROVIDER", "gemini")
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(llm_router, "_router", None)
    monkeypatch.setattr(llm_router, "_router_models", ())
    return monkeypatch


# =============================================================================
# build_router
# =============================================================================


class TestBuildRouter:

    def test_configured_models_registered(self, gemini):
        names = deployment_names(llm_router.build_router())
        assert STATION_MODEL in names
        assert FALLBACK_MODEL in names

    def test_override_registered(self, gemini):
        names = deployment_names(llm_router.build_router(extra_models=(CUSTOM_MODEL,)))
        assert CUSTOM_MODEL in names

    def test_duplicate_override_not_registered_twice(self, gemini):
        names = deployment_names(llm_router.build_router(extra_models=(STATION_MODEL,)))
        assert names.count(STATION_MODEL) == 1

    @pytest.mark.asyncio
    async def test_override_reaches_a_deployment(self, gemini):
        router = llm_router.build_router(extra_models=(CUSTOM_MODEL,))
        response = await router.acompletion(
            model=CUSTOM_MODEL,
            messages=[{"role": "user", "content": "Extract stations."}],
            mock_response="[]",
        )
        assert response.choices[0].message.content == "[]"


# =============================================================================
# get_router
# =============================================================================


class TestGetRouter:

    def test_cached(self, gemini):
        assert llm_router.get_router() is llm_router.get_router()

    def test_known_model_reuses_router(self, gemini):
        router = llm_router.get_router()
        assert llm_router.get_router(STATION_MODEL) is router

    def test_unknown_model_added(self, gemini):
        llm_router.get_router()
        router = llm_router.get_router(CUSTOM_MODEL)
        assert CUSTOM_MODEL in deployment_names(router)
        assert llm_router.get_router(CUSTOM_MODEL) is router

    def test_earlier_overrides_kept(self, gemini):
        llm_router.get_router(CUSTOM_MODEL)
        router = llm_router.get_router("gemini/another-model")
        assert {CUSTOM_MODEL, "gemini/another-model"} <= set(deployment_names(router))
