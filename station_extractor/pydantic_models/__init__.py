"""Pydantic models for the polling-station pipeline.

Modules:
- stations: output records (PollingStationRecord, ParishGroup, ExtractionResult)
  and the Source registry entry
- pipeline: per-source transient data (SourceDocument, SourceOutcome)
"""

from station_extractor.pydantic_models.stations import (
    Source,
    PollingStationRecord,
    ParishGroup,
    ExtractionResult,
)
from station_extractor.pydantic_models.pipeline import (
    SourceDocument,
    SourceOutcome,
)

__all__ = [
    # Output models
    "Source",
    "PollingStationRecord",
    "ParishGroup",
    "ExtractionResult",
    # Pipeline models
    "SourceDocument",
    "SourceOutcome",
]
