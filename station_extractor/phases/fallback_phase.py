"""Fallback phase: top up a thin result with the synthetic dataset.

This is the only place the fallback decision is made. The count checked is
the raw AI record count, before deduplication. Synthetic records go after
every real record, so a real record always wins a dedup tie against its
synthetic twin.
"""

from dataclasses import dataclass

from station_extractor.core.fallback_data import generate_fallback_stations
from station_extractor.phases.phase_base import PhaseRunner


@dataclass
class FallbackResult:
    """Result from the fallback phase."""

    used: bool
    real_count: int
    synthetic_count: int = 0


class FallbackPhase(PhaseRunner[FallbackResult]):
    """Phase 2: threshold check, then synthetic top-up if needed."""

    name = "Fallback"

    async def run(self) -> FallbackResult:
        self.start()
        real_count = len(self.context.records)
        threshold = self.context.fallback_threshold

        if real_count >= threshold:
            self.logger.phase_result(self.name, "not needed", records=real_count, threshold=threshold)
            self.end()
            return FallbackResult(used=False, real_count=real_count)

        self.logger.milestone(
            f"Only {real_count} records from sources (threshold {threshold}), adding synthetic stations"
        )
        synthetic = generate_fallback_stations(self.context.parishes)
        self.context.records = self.context.records + synthetic
        self.context.state.fallback_used = True
        self.context.state.fallback_count = len(synthetic)

        self.logger.phase_result(self.name, f"added {len(synthetic)} synthetic records", real=real_count)
        self.end()
        return FallbackResult(used=True, real_count=real_count, synthetic_count=len(synthetic))
