"""Pydantic models for polling-station reference data.

These are the records the pipeline produces:
- PollingStationRecord: one polling station
- ParishGroup: the stations of one parish
- ExtractionResult: the complete pipeline output
- Source: one registered remote document

Field names serialize in camelCase (``stationCode``, ``parishId``) because
that is the shape downstream consumers read. Always dump with
``by_alias=True``; ``ExtractionResult.to_dict()`` does this for you.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Source(BaseModel):
    """A registered remote document (logical name + URL)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Logical document name, used in logs and cost tracking")
    url: str = Field(description="Absolute URL of the document")


class PollingStationRecord(_CamelModel):
    """A single polling station.

    ``name`` and ``parish`` must be non-blank. They are kept exactly as given,
    because the deduplication key compares them verbatim.
    """

    station_code: str = Field(default="", description="Parish prefix + zero-padded sequence, e.g. 'KIN007'")
    name: str = Field(description="Facility name (school, church, community centre)")
    address: str = Field(default="", description="Free-text location description")
    parish: str = Field(description="Canonical parish name, e.g. 'St. Andrew'")
    parish_id: int = Field(default=0, description="Canonical parish ID, 1-14 (0 = unknown)")

    constituency: str | None = Field(default=None, description="Constituency, if mentioned")
    division: str | None = Field(default=None, description="Electoral division, if mentioned")
    latitude: float | None = None
    longitude: float | None = None
    capacity: int | None = None
    registered_voters: int | None = None

    @field_validator("name", "parish")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("station_code", "address", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value


class ParishGroup(_CamelModel):
    """All stations of one parish, sorted by station code."""

    name: str
    stations: list[PollingStationRecord] = Field(default_factory=list)


class ExtractionResult(_CamelModel):
    """Pipeline output: deduplicated stations grouped by parish."""

    parishes: list[ParishGroup] = Field(default_factory=list, description="Sorted by parish name")
    total_stations: int = Field(description="Count of deduplicated records")
    document_source: str = Field(description="Provenance label")
    extraction_date: str = Field(description="ISO-8601 timestamp of run completion")

    def all_stations(self) -> list[PollingStationRecord]:
        """Flatten the parish groups into one list, in output order."""
        return [station for group in self.parishes for station in group.stations]

    def stations_by_parish(self) -> dict[str, int]:
        """Station count per parish name."""
        return {group.name: len(group.stations) for group in self.parishes}

    def to_dict(self) -> dict:
        """Serialize with the camelCase field names consumers expect."""
        return self.model_dump(by_alias=True, exclude_none=True)
