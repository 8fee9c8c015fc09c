"""Pytest configuration and shared fixtures.

Provides reusable test fixtures for:
- Fake document fetchers and text backends
- Fake station extractors (the AI stage)
- Mock LLM router responses
- Sample station records
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from station_extractor.core.pipeline_logger import reset_logger
from station_extractor.pydantic_models import PollingStationRecord, Source, SourceDocument


@pytest.fixture(autouse=True)
def fresh_logger():
    """Each test gets its own pipeline logger (no leaked file handlers)."""
    reset_logger()
    yield
    reset_logger()


# =============================================================================
# Sources and Records
# =============================================================================


def make_source(name: str) -> Source:
    slug = name.lower().replace(" ", "-")
    return Source(name=name, url=f"https://example.test/{slug}.pdf")


def make_station(
    name: str,
    parish: str = "Kingston",
    code: str = "",
    parish_id: int = 1,
) -> PollingStationRecord:
    return PollingStationRecord(station_code=code, name=name, address="", parish=parish, parish_id=parish_id)


def make_stations(count: int, prefix: str = "Station") -> list[PollingStationRecord]:
    """``count`` distinct Kingston records: KIN001 'Station 1', ..."""
    return [make_station(f"{prefix} {i}", code=f"KIN{i:03d}") for i in range(1, count + 1)]


@pytest.fixture
def sources():
    return (make_source("Source A"), make_source("Source B"), make_source("Source C"))


# =============================================================================
# Fake Pipeline Collaborators
# =============================================================================


class FakeFetcher:
    """Serves canned bytes per source name; anything missing fails."""

    def __init__(self, documents: dict[str, bytes] | None = None):
        self.documents = documents or {}
        self.fetched: list[str] = []

    async def fetch(self, source: Source) -> SourceDocument:
        self.fetched.append(source.name)
        content = self.documents.get(source.name)
        if content is None:
            return SourceDocument(source=source, error="HTTP 503")
        return SourceDocument(source=source, content=content)

    async def aclose(self):
        pass


class FakeBackend:
    """Text backend that decodes the bytes as UTF-8."""

    def __init__(self):
        self.calls = 0

    def extract(self, data: bytes) -> str:
        self.calls += 1
        return data.decode("utf-8")


class FakeStationExtractor:
    """Stands in for agents.station_agent.extract_stations.

    ``results`` maps source name to the records (or an exception) returned
    for that source.
    """

    def __init__(self, results: dict[str, list[PollingStationRecord] | Exception] | None = None):
        self.results = results or {}
        self.calls: list[tuple[str, str]] = []

    async def __call__(self, text: str, source_name: str, **kwargs) -> list[PollingStationRecord]:
        self.calls.append((source_name, text))
        result = self.results.get(source_name, [])
        if isinstance(result, Exception):
            raise result
        return [record.model_copy() for record in result]


@pytest.fixture
def fake_backend():
    return FakeBackend()


def fetcher_for(sources, content: bytes = b"polling station list") -> FakeFetcher:
    """Fetcher that serves every given source successfully."""
    return FakeFetcher({source.name: content for source in sources})


# =============================================================================
# Mock LLM Router
# =============================================================================


def completion(content: str | None, prompt_tokens: int = 100, completion_tokens: int = 50):
    """A litellm-shaped completion response."""
    return MagicMock(
        choices=[MagicMock(message=MagicMock(content=content))],
        usage=MagicMock(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


@pytest.fixture
def mock_router():
    """Router double whose acompletion returns an empty JSON array."""
    router = MagicMock()
    router.acompletion = AsyncMock(return_value=completion("[]"))
    return router
