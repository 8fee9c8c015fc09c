"""Station agent: reads one document's text and returns structured station records.

Each source gets its own single model call with fresh context, so stations
from different documents never bleed into each other. Every failure on this
path (quota, network, missing credentials, malformed output) is absorbed and
the source simply contributes no records.
"""

import logging

from pydantic import ValidationError

from station_extractor.core.config import STATION_MODEL, LLMConfig
from station_extractor.core.cost_tracker import CostTracker
from station_extractor.core.errors import (
    PipelineErrors,
    llm_api_error,
    llm_parse_error,
    validation_error,
)
from station_extractor.core.json_parsing import parse_first_json_array
from station_extractor.core.llm_client import LLMClient
from station_extractor.core.parishes import PARISHES, Parish, parish_ids
from station_extractor.prompts.station_prompt import build_station_prompt
from station_extractor.pydantic_models.stations import PollingStationRecord

logger = logging.getLogger(__name__)


def truncate_document_text(text: str, source_name: str, max_chars: int = LLMConfig.MAX_DOCUMENT_CHARS) -> str:
    """Cut text that would blow the model's input budget."""
    if len(text) <= max_chars:
        return text
    logger.warning(
        f"{source_name}: document text is {len(text):,} chars, "
        f"truncating to {max_chars:,} (~{max_chars // LLMConfig.CHARS_PER_TOKEN:,} tokens)"
    )
    return text[:max_chars]


def records_from_items(
    items: list,
    source_name: str,
    parishes: tuple[Parish, ...] = PARISHES,
) -> tuple[list[PollingStationRecord], int]:
    """Validate raw array items into records.

    Items that are not objects, or whose name/parish is missing or blank,
    are skipped. A missing parishId is filled from the parish table
    (0 when the parish is unknown).

    Returns:
        (records, skipped_count)
    """
    ids = parish_ids(parishes)
    records: list[PollingStationRecord] = []
    skipped = 0

    for item in items:
        if not isinstance(item, dict):
            skipped += 1
            continue

        missing_id = item.get("parishId") is None and item.get("parish_id") is None
        if missing_id:
            item = {k: v for k, v in item.items() if k not in ("parishId", "parish_id")}

        try:
            record = PollingStationRecord.model_validate(item)
        except ValidationError as e:
            skipped += 1
            logger.debug(f"{source_name}: skipping invalid station {item!r}: {e.error_count()} errors")
            continue

        if missing_id:
            record.parish_id = ids.get(record.parish, 0)
        records.append(record)

    return records, skipped


async def extract_stations(
    text: str,
    source_name: str,
    model: str = STATION_MODEL,
    client: LLMClient | None = None,
    cost_tracker: CostTracker | None = None,
    parishes: tuple[Parish, ...] = PARISHES,
    errors: PipelineErrors | None = None,
) -> list[PollingStationRecord]:
    """Extract polling-station records from one document's text.

    Args:
        text: Plain text of the document.
        source_name: Logical source name (logs, cost tracking, errors).
        model: LLM model to use.
        client: LLM client. Built from ``cost_tracker`` when not given.
        cost_tracker: Optional tracker to record token usage.
        parishes: Parish table embedded in the prompt and used for ID fill-in.
        errors: Optional accumulator for structured errors.

    Returns:
        Validated records in response order. Empty on any failure.
    """
    if not text.strip():
        logger.info(f"{source_name}: no text to analyse, skipping model call")
        return []

    client = client or LLMClient(cost_tracker=cost_tracker)
    prompt = build_station_prompt(
        truncate_document_text(text, source_name, LLMConfig.MAX_DOCUMENT_CHARS),
        document_name=source_name,
        parishes=parishes,
    )

    logger.info(f"Analyzing {source_name} with {model}...")
    try:
        response = await client.complete(
            prompt=prompt,
            model=model,
            source=source_name,
            timeout=LLMConfig.TIMEOUT_SECONDS,
        )
    except Exception as e:
        logger.warning(f"{source_name}: model call failed: {type(e).__name__}: {e}")
        if errors is not None:
            errors.add(llm_api_error(f"{type(e).__name__}: {e}", source_name, original=e))
        return []

    items = parse_first_json_array(response.text)
    if items is None:
        logger.warning(f"{source_name}: no valid JSON array in model response")
        if errors is not None:
            errors.add(llm_parse_error("No valid JSON array found in model response", source_name, response.text))
        return []

    records, skipped = records_from_items(items, source_name, parishes)
    if skipped:
        logger.warning(f"{source_name}: dropped {skipped} of {len(items)} stations that failed validation")
        if errors is not None:
            errors.add(validation_error(f"Dropped {skipped} invalid stations", source_name, dropped=skipped))

    logger.info(f"Extracted {len(records)} stations from {source_name}")
    return records
