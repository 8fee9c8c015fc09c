"""Source extraction phase: fetch, read and analyse every registered source.

Each source goes through FETCH -> EXTRACT_TEXT -> AI_EXTRACT. A failure at
any step costs that source its records and nothing else; the remaining
sources still run. Only a ConfigurationError (a broken text backend) stops
the run, since every later source would hit it too.

Sources run under the shared semaphore. ``asyncio.gather`` returns results
in submission order, so records are always concatenated in registration
order whatever order the downloads finish in.
"""

import asyncio
from dataclasses import dataclass, field

from station_extractor.core.errors import (
    ConfigurationError,
    ErrorCategory,
    ErrorSeverity,
    ExtractionError,
    fetch_error,
    text_extraction_error,
    timeout_error,
)
from station_extractor.phases.phase_base import PhaseRunner
from station_extractor.pydantic_models.pipeline import SourceOutcome
from station_extractor.pydantic_models.stations import Source


@dataclass
class SourceExtractionResult:
    """Result from the source extraction phase."""

    outcomes: list[SourceOutcome]
    total_records: int
    failed_sources: list[str] = field(default_factory=list)


class SourceExtractionPhase(PhaseRunner[SourceExtractionResult]):
    """Phase 1: turn every registered source into station records."""

    name = "Sources"

    async def run(self) -> SourceExtractionResult:
        sources = self.context.sources
        self.start(total=len(sources), model=self.context.model)

        if not sources:
            self.context.outcomes = []
            self.context.records = []
            self.log("No sources registered", "warning")
            self.end()
            return SourceExtractionResult(outcomes=[], total_records=0)

        tasks = [self._process_source(order, source) for order, source in enumerate(sources)]
        outcomes = await asyncio.gather(*tasks)

        records = [record for outcome in outcomes for record in outcome.records]
        self.context.outcomes = list(outcomes)
        self.context.records = records

        failed = [o.source.name for o in outcomes if o.error]
        self.logger.phase_result(
            self.name,
            f"{len(records)} records from {len(outcomes) - len(failed)}/{len(outcomes)} sources",
            failed=len(failed),
        )
        self.end()
        return SourceExtractionResult(outcomes=list(outcomes), total_records=len(records), failed_sources=failed)

    async def _process_source(self, order: int, source: Source) -> SourceOutcome:
        async with self.context.semaphore:
            try:
                outcome = await self._extract_source(order, source)
            except ConfigurationError:
                raise
            except Exception as e:
                self.log(f"{source.name} failed: {type(e).__name__}: {e}", "error")
                self.context.errors.add(ExtractionError(
                    category=ErrorCategory.UNKNOWN,
                    severity=ErrorSeverity.ERROR,
                    message=str(e),
                    phase="source",
                    source_name=source.name,
                    url=source.url,
                    original_error=e,
                ))
                outcome = SourceOutcome(source=source, order=order, error=f"{type(e).__name__}: {e}")

        self.tick(f"{source.name}: {outcome.record_count} records")
        return outcome

    async def _extract_source(self, order: int, source: Source) -> SourceOutcome:
        document = await self.context.fetcher.fetch(source)
        if not document.fetched:
            if document.timed_out:
                error = timeout_error("fetch", source.name, document.timeout_seconds, url=source.url)
            else:
                error = fetch_error(document.error or "Download failed", source.name, url=source.url)
            self.context.errors.add(error)
            return SourceOutcome(source=source, order=order, error=document.error)

        # PDF parsing is CPU-bound; keep it off the event loop
        text = await asyncio.to_thread(self.context.text_extractor.extract, document.content, source.name)
        if not text.strip():
            message = "No text extracted from document"
            self.context.errors.add(text_extraction_error(message, source.name))
            return SourceOutcome(source=source, order=order, fetched=True, error=message)

        records = await self.context.station_extractor(
            text,
            source.name,
            model=self.context.model,
            cost_tracker=self.context.cost_tracker,
            parishes=self.context.parishes,
            errors=self.context.errors,
        )
        return SourceOutcome(
            source=source,
            order=order,
            records=records,
            fetched=True,
            text_chars=len(text),
        )
