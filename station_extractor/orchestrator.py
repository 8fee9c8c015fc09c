"""Pipeline orchestrator: runs every phase of the extraction pipeline in order.

Phases are separate classes so each one can be tested and reasoned about in
isolation. Between phases, data flows through a shared PipelineState object
(see phase_base.py) which acts as a typed mailbox: one phase writes its
output, the next phase reads it.

High-level flow:
  Sources (fetch -> text -> AI, per source) -> Fallback (threshold check)
  -> Merge (dedup, group, sort, quality report)

A run is a full rebuild. Nothing is carried over from earlier runs.
"""

import asyncio
from dataclasses import replace
from collections.abc import Sequence
from pathlib import Path

from station_extractor.agents.station_agent import extract_stations
from station_extractor.core import (
    CostTracker,
    DocumentFetcher,
    PipelineErrors,
    PyMuPDFBackend,
    TextExtractor,
    TextExtractorBackend,
    get_logger,
    has_llm_credentials,
)
from station_extractor.core.config import (
    API_KEY_ENV_VAR,
    STATION_MODEL,
    FallbackConfig,
    FetchConfig,
    OutputConfig,
)
from station_extractor.core.parishes import PARISHES, Parish
from station_extractor.core.sources import DEFAULT_SOURCES
from station_extractor.phases import (
    PhaseContext,
    ExtractionResources,
    ExtractionConfig,
    PipelineState,
    StationExtractor,
    SourceExtractionPhase,
    FallbackPhase,
    MergePhase,
)
from station_extractor.pydantic_models import ExtractionResult, Source


class Orchestrator:
    """Pipeline orchestrator coordinating phase runners."""

    def __init__(
        self,
        sources: Sequence[Source] = DEFAULT_SOURCES,
        parishes: tuple[Parish, ...] = PARISHES,
        fetcher: DocumentFetcher | None = None,
        text_backend: TextExtractorBackend | None = None,
        station_extractor: StationExtractor | None = None,
        model: str = STATION_MODEL,
        fallback_threshold: int = FallbackConfig.THRESHOLD,
        max_concurrent: int = FetchConfig.MAX_CONCURRENT,
        document_source: str = OutputConfig.DOCUMENT_SOURCE,
        verbose: bool = False,
        log_dir: str | Path | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            sources: Documents to process, in priority order.
            parishes: Canonical parish table.
            fetcher: Document fetcher. A default one is created (and closed
                     after the run) when not given.
            text_backend: PDF text backend. Defaults to PyMuPDF.
            station_extractor: Async callable turning text into records.
                               Defaults to the station agent.
            model: LLM model for station extraction.
            fallback_threshold: Minimum AI record count that skips the fallback.
            max_concurrent: Max sources processed at once.
            document_source: Provenance label on the result.
            verbose: If True, print detailed logs.
            log_dir: Directory for log files.
        """
        self.logger = get_logger(verbose=verbose, log_dir=log_dir)
        self._owns_fetcher = fetcher is None
        self._fetcher_closed = False
        self._uses_default_extractor = station_extractor is None

        resources = ExtractionResources(
            fetcher=fetcher or DocumentFetcher(),
            text_extractor=TextExtractor(text_backend or PyMuPDFBackend()),
            station_extractor=station_extractor or extract_stations,
            semaphore=asyncio.Semaphore(max(1, max_concurrent)),
            logger=self.logger,
            cost_tracker=CostTracker(),
        )

        config = ExtractionConfig(
            sources=tuple(sources),
            parishes=parishes,
            model=model,
            fallback_threshold=fallback_threshold,
            document_source=document_source,
            verbose=verbose,
        )

        self.context = PhaseContext(
            resources=resources,
            config=config,
            state=PipelineState(),
        )

        # Track results
        self._source_result = None
        self._fallback_result = None
        self._merge_result = None

    async def run(self) -> ExtractionResult:
        """Run the complete extraction pipeline.

        Returns:
            The merged ExtractionResult. Transient source failures never
            raise; at worst the result is entirely synthetic.

        Raises:
            ConfigurationError: The text backend cannot be loaded.
        """
        self._reset()
        self.logger.start_pipeline(self.context.document_source, sources=len(self.context.sources))

        if self._uses_default_extractor and self.context.sources and not has_llm_credentials():
            self.logger.warning(
                f"{API_KEY_ENV_VAR} not set: AI extraction will fail for every source "
                "and the synthetic dataset will be used"
            )

        try:
            # Phase 1: fetch, read and analyse every source
            self._source_result = await SourceExtractionPhase(self.context).run()

            # Phase 2: threshold check and synthetic top-up
            self._fallback_result = await FallbackPhase(self.context).run()

            # Phase 3: dedup, group, sort
            self._merge_result = await MergePhase(self.context).run()

            self.logger.end_pipeline(success=True, stats=self.get_stats())
            return self._merge_result.result

        except Exception as e:
            self.logger.error(f"Pipeline failed: {e}")
            self.logger.end_pipeline(success=False, stats=self.get_stats())
            raise

        finally:
            await self._cleanup()

    def _reset(self):
        """Start from empty state; reopen the fetcher if an earlier run closed it."""
        resources = self.context.resources
        fetcher = DocumentFetcher() if self._fetcher_closed else resources.fetcher
        self._fetcher_closed = False
        self.context.resources = replace(resources, fetcher=fetcher, cost_tracker=CostTracker())
        self.context.state = PipelineState()
        self._source_result = None
        self._fallback_result = None
        self._merge_result = None

    async def _cleanup(self):
        """Close resources this orchestrator created."""
        if self._owns_fetcher:
            await self.context.fetcher.aclose()
            self._fetcher_closed = True

    def get_stats(self) -> dict:
        """Get extraction statistics."""
        state = self.context.state
        sources = {
            outcome.source.name: {
                "fetched": outcome.fetched,
                "text_chars": outcome.text_chars,
                "records": outcome.record_count,
                "error": outcome.error,
            }
            for outcome in state.outcomes
        }

        quality = state.quality.by_type() if state.quality else {}
        return {
            "sources": sources,
            "ai_records": sum(o.record_count for o in state.outcomes),
            "fallback_used": state.fallback_used,
            "synthetic_records": state.fallback_count,
            "total_stations": state.result.total_stations if state.result else 0,
            "parishes": len(state.result.parishes) if state.result else 0,
            "duplicates_removed": self._merge_result.duplicates_removed if self._merge_result else 0,
            "quality_issues": quality,
            "cost": self.context.cost_tracker.to_dict(),
            "errors": self.context.errors.summary(),
        }

    def get_errors(self) -> PipelineErrors:
        """Get pipeline errors."""
        return self.context.errors


def run_extraction(**kwargs) -> ExtractionResult:
    """Run the whole pipeline synchronously with default configuration.

    Keyword arguments are passed to Orchestrator.
    """
    return asyncio.run(Orchestrator(**kwargs).run())
