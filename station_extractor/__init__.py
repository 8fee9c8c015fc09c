"""Polling-Station Reference-Data Pipeline.

Rebuilds the parish-organized list of Jamaican polling stations from the
Electoral Commission of Jamaica's 2024 documents, with a deterministic
synthetic fallback when the documents yield too little.

Architecture:
    core/             - fetcher, text extraction, LLM access, merge, logging, errors
    prompts/          - LLM prompt templates
    agents/           - station extraction agent
    pydantic_models/  - Pydantic models for internal and output data
    phases/           - Phase runner classes for modular pipeline

Usage:
    from station_extractor import Orchestrator

    orchestrator = Orchestrator()
    result = await orchestrator.run()

    # or, from synchronous code
    from station_extractor import run_extraction
    result = run_extraction()

CLI:
    extract-stations -o outputs
"""

from station_extractor.orchestrator import Orchestrator, run_extraction
from station_extractor.pydantic_models import (
    Source,
    PollingStationRecord,
    ParishGroup,
    ExtractionResult,
)

__all__ = [
    # Main entry points
    "Orchestrator",
    "run_extraction",
    # Output models
    "Source",
    "PollingStationRecord",
    "ParishGroup",
    "ExtractionResult",
]
