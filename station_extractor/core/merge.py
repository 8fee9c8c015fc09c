"""Merge and deduplicate station records into the final result.

Records arrive in source registration order with synthetic records last.
The first occurrence of each (name, parish) key wins outright; later
duplicates are discarded without merging any of their fields.
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from station_extractor.core.config import OutputConfig
from station_extractor.pydantic_models.stations import ExtractionResult, ParishGroup, PollingStationRecord

logger = logging.getLogger(__name__)


def dedup_key(record: PollingStationRecord) -> tuple[str, str]:
    """Identity of a station across sources.

    Exact match on the raw strings: "Kingston College" and "Kingston College "
    are different stations here, so spelling variants across sources survive
    as separate records.
    """
    return (record.name, record.parish)


def deduplicate_records(records: Iterable[PollingStationRecord]) -> list[PollingStationRecord]:
    """Keep the first record seen for each dedup key, preserving order."""
    seen: set[tuple[str, str]] = set()
    unique: list[PollingStationRecord] = []
    for record in records:
        key = dedup_key(record)
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique


def group_by_parish(records: Iterable[PollingStationRecord]) -> list[ParishGroup]:
    """Bucket records by parish.

    Stations within a group are sorted by station code (stable, so equal
    codes keep input order); groups are sorted by parish name.
    """
    buckets: dict[str, list[PollingStationRecord]] = {}
    for record in records:
        buckets.setdefault(record.parish, []).append(record)

    return [
        ParishGroup(name=name, stations=sorted(stations, key=lambda s: s.station_code))
        for name, stations in sorted(buckets.items())
    ]


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string."""
    return datetime.now(timezone.utc).isoformat()


def merge_records(
    records: Iterable[PollingStationRecord],
    document_source: str = OutputConfig.DOCUMENT_SOURCE,
    extraction_date: str | None = None,
) -> ExtractionResult:
    """Deduplicate, group and sort records into an ExtractionResult.

    Args:
        records: All records in priority order (real sources first).
        document_source: Provenance label for the result.
        extraction_date: ISO timestamp; defaults to now (UTC).

    Returns:
        The final result. ``total_stations`` equals the deduplicated count.
    """
    records = list(records)
    unique = deduplicate_records(records)
    if len(unique) < len(records):
        logger.info(f"Removed {len(records) - len(unique)} duplicate stations")

    return ExtractionResult(
        parishes=group_by_parish(unique),
        total_stations=len(unique),
        document_source=document_source,
        extraction_date=extraction_date or utc_timestamp(),
    )
