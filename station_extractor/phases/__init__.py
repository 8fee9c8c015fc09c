"""Phase runners for the extraction pipeline.

Each phase is encapsulated in its own runner class with:
- Clear inputs and outputs
- Error handling
- Logging
- Progress tracking
"""

from station_extractor.phases.phase_base import (
    PhaseRunner,
    PhaseContext,
    ExtractionResources,
    ExtractionConfig,
    PipelineState,
    StationExtractor,
)
from station_extractor.phases.source_phase import SourceExtractionPhase, SourceExtractionResult
from station_extractor.phases.fallback_phase import FallbackPhase, FallbackResult
from station_extractor.phases.merge_phase import MergePhase, MergeResult

__all__ = [
    "PhaseRunner",
    "PhaseContext",
    "ExtractionResources",
    "ExtractionConfig",
    "PipelineState",
    "StationExtractor",
    "SourceExtractionPhase",
    "SourceExtractionResult",
    "FallbackPhase",
    "FallbackResult",
    "MergePhase",
    "MergeResult",
]
