"""Agent implementations for the extraction pipeline.

Each agent call runs with fresh LLM context, so data from different source
documents never leaks between calls.
"""

from station_extractor.agents.station_agent import (
    extract_stations,
    records_from_items,
    truncate_document_text,
)

__all__ = [
    "extract_stations",
    "records_from_items",
    "truncate_document_text",
]
