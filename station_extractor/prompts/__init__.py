"""Prompt templates for LLM agents."""

from station_extractor.prompts.station_prompt import (
    STATION_PROMPT_TEMPLATE,
    build_station_prompt,
    format_id_table,
    format_prefix_table,
)

__all__ = [
    "STATION_PROMPT_TEMPLATE",
    "build_station_prompt",
    "format_id_table",
    "format_prefix_table",
]
