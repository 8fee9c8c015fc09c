"""Merge phase: deduplicate, group by parish, and check data quality."""

from dataclasses import dataclass

from station_extractor.core.merge import merge_records
from station_extractor.core.quality import QualityReport, check_result_quality
from station_extractor.phases.phase_base import PhaseRunner
from station_extractor.pydantic_models.stations import ExtractionResult


@dataclass
class MergeResult:
    """Result from the merge phase."""

    result: ExtractionResult
    input_count: int
    quality: QualityReport

    @property
    def duplicates_removed(self) -> int:
        return self.input_count - self.result.total_stations


class MergePhase(PhaseRunner[MergeResult]):
    """Phase 3: build the final ExtractionResult."""

    name = "Merge"

    async def run(self) -> MergeResult:
        records = self.context.records
        self.start(total=len(records))

        result = merge_records(records, document_source=self.context.document_source)
        quality = check_result_quality(result, self.context.parishes)

        self.context.result = result
        self.context.state.quality = quality

        if not quality.is_clean:
            self.log(f"{quality.issue_count} data-quality issues: {quality.by_type()}", "warning")
            for issue in quality.issues:
                self.log(str(issue), "debug")

        merged = MergeResult(result=result, input_count=len(records), quality=quality)
        self.logger.phase_result(
            self.name,
            f"{result.total_stations} stations in {len(result.parishes)} parishes",
            duplicates=merged.duplicates_removed,
        )
        self.end()
        return merged
