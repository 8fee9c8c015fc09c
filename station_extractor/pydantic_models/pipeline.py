"""Pydantic schemas for pipeline-internal, per-source data.

Nothing here outlives a single pipeline run.
"""

from pydantic import BaseModel, Field

from station_extractor.pydantic_models.stations import PollingStationRecord, Source


class SourceDocument(BaseModel):
    """A source as retrieved and parsed.

    ``content`` is None when the download failed; ``text`` is empty when
    nothing could be extracted from ``content``.
    """

    source: Source
    content: bytes | None = None
    text: str = ""
    error: str | None = None
    timeout_seconds: float | None = Field(default=None, description="Set when the download timed out")

    @property
    def fetched(self) -> bool:
        return self.content is not None

    @property
    def timed_out(self) -> bool:
        return self.timeout_seconds is not None


class SourceOutcome(BaseModel):
    """What one source contributed to the run."""

    source: Source
    order: int = Field(description="Registration index, the dedup tie-break order")
    records: list[PollingStationRecord] = Field(default_factory=list)
    fetched: bool = False
    text_chars: int = 0
    error: str | None = None

    @property
    def record_count(self) -> int:
        return len(self.records)
