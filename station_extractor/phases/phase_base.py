"""Base classes for pipeline phases.

The context is split into three parts so responsibilities are clear:
- **ExtractionResources** (frozen): external dependencies created once:
  fetcher, text extractor, station extractor, concurrency semaphore,
  logger, cost tracker.
- **ExtractionConfig** (frozen): user-chosen settings that never change
  mid-run: sources, parish table, model, fallback threshold.
- **PipelineState** (mutable): the data that accumulates as each phase runs:
  per-source outcomes, the record list, the merged result.

PhaseContext wraps all three and exposes convenience properties so phases can
write ``ctx.fetcher`` instead of ``ctx.resources.fetcher``.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar, Generic, TYPE_CHECKING

from station_extractor.core.config import STATION_MODEL, FallbackConfig, OutputConfig
from station_extractor.core.cost_tracker import CostTracker
from station_extractor.core.errors import PipelineErrors
from station_extractor.core.fetcher import DocumentFetcher
from station_extractor.core.parishes import PARISHES, Parish
from station_extractor.core.pipeline_logger import PipelineLogger
from station_extractor.core.sources import DEFAULT_SOURCES
from station_extractor.core.text_extraction import TextExtractor
from station_extractor.pydantic_models.stations import PollingStationRecord, Source

if TYPE_CHECKING:
    from station_extractor.core.quality import QualityReport
    from station_extractor.pydantic_models.pipeline import SourceOutcome
    from station_extractor.pydantic_models.stations import ExtractionResult


StationExtractor = Callable[..., Awaitable[list[PollingStationRecord]]]
"""Signature of agents.station_agent.extract_stations (injectable for tests)."""


# Split Context Classes

@dataclass(frozen=True)
class ExtractionResources:
    """Shared resources - created once, never modified."""

    fetcher: DocumentFetcher
    text_extractor: TextExtractor
    station_extractor: StationExtractor
    semaphore: asyncio.Semaphore
    logger: PipelineLogger
    cost_tracker: CostTracker


@dataclass(frozen=True)
class ExtractionConfig:
    """Configuration - set at init, never modified.

    Sources are processed, and win dedup ties, in the order given here.
    """

    sources: tuple[Source, ...] = DEFAULT_SOURCES
    parishes: tuple[Parish, ...] = PARISHES
    model: str = STATION_MODEL
    fallback_threshold: int = FallbackConfig.THRESHOLD
    document_source: str = OutputConfig.DOCUMENT_SOURCE
    verbose: bool = False


@dataclass
class PipelineState:
    """Mutable state that accumulates during the pipeline.

    Each field is written by exactly one phase and read by downstream phases:
    - outcomes / records: Written by SourceExtraction, read by Fallback/Merge
    - fallback_used / fallback_count: Written by Fallback
    - result / quality: Written by Merge
    - errors: Accumulated by all phases
    """

    outcomes: list[SourceOutcome] = field(default_factory=list)
    records: list[PollingStationRecord] = field(default_factory=list)
    fallback_used: bool = False
    fallback_count: int = 0
    result: ExtractionResult | None = None
    quality: QualityReport | None = None
    errors: PipelineErrors = field(default_factory=PipelineErrors)


class PhaseContext:
    """Slim context holding references to the three component contexts.

    All sub-context fields are accessible directly (e.g. ``ctx.fetcher``
    instead of ``ctx.resources.fetcher``) via explicit properties below.
    """

    def __init__(self, resources: ExtractionResources, config: ExtractionConfig, state: PipelineState):
        self.resources = resources
        self.config = config
        self.state = state

    # -- Resource properties (read-only) --

    @property
    def fetcher(self) -> DocumentFetcher:
        return self.resources.fetcher

    @property
    def text_extractor(self) -> TextExtractor:
        return self.resources.text_extractor

    @property
    def station_extractor(self) -> StationExtractor:
        return self.resources.station_extractor

    @property
    def semaphore(self) -> asyncio.Semaphore:
        return self.resources.semaphore

    @property
    def logger(self) -> PipelineLogger:
        return self.resources.logger

    @property
    def cost_tracker(self) -> CostTracker:
        return self.resources.cost_tracker

    # -- Config properties (read-only) --

    @property
    def sources(self) -> tuple[Source, ...]:
        return self.config.sources

    @property
    def parishes(self) -> tuple[Parish, ...]:
        return self.config.parishes

    @property
    def model(self) -> str:
        return self.config.model

    @property
    def fallback_threshold(self) -> int:
        return self.config.fallback_threshold

    @property
    def document_source(self) -> str:
        return self.config.document_source

    # -- State properties (read-write) --

    @property
    def outcomes(self) -> list[SourceOutcome]:
        return self.state.outcomes

    @outcomes.setter
    def outcomes(self, value: list[SourceOutcome]) -> None:
        self.state.outcomes = value

    @property
    def records(self) -> list[PollingStationRecord]:
        return self.state.records

    @records.setter
    def records(self, value: list[PollingStationRecord]) -> None:
        self.state.records = value

    @property
    def result(self) -> ExtractionResult | None:
        return self.state.result

    @result.setter
    def result(self, value: ExtractionResult | None) -> None:
        self.state.result = value

    @property
    def errors(self) -> PipelineErrors:
        return self.state.errors


T = TypeVar("T")


class PhaseRunner(ABC, Generic[T]):
    """Base class for pipeline phase runners.

    Each phase:
    - Has a name for logging
    - Takes a PhaseContext with shared state
    - Produces a typed result
    - Handles errors gracefully
    """

    name: str = "unnamed"

    def __init__(self, context: PhaseContext):
        """Initialize the phase runner.

        Args:
            context: Shared pipeline context.
        """
        self.context = context
        self.logger = context.logger

    @abstractmethod
    async def run(self) -> T:
        """Execute the phase.

        Returns:
            Phase-specific result type.
        """
        pass

    def log(self, message: str, level: str = "info", **data):
        """Log a message with phase context."""
        if level == "debug":
            self.logger.debug(f"[{self.name}] {message}", **data)
        elif level == "warning":
            self.logger.warning(f"[{self.name}] {message}", **data)
        elif level == "error":
            self.logger.error(f"[{self.name}] {message}", **data)
        else:
            self.logger.info(f"[{self.name}] {message}", **data)

    def start(self, total: int = 0, model: str = ""):
        """Signal phase start."""
        self.logger.start_phase(self.name, total, model)

    def end(self):
        """Signal phase end."""
        self.logger.end_phase()

    def tick(self, item: str = ""):
        """Report one unit of progress."""
        self.logger.tick(item)
