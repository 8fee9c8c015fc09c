"""Core utilities for the extraction pipeline."""

from station_extractor.core.config import (
    LLM_PROVIDER,
    API_KEY_ENV_VAR,
    API_KEY_ENV_VARS,
    STATION_MODEL,
    FALLBACK_MODEL,
    FetchConfig,
    LLMConfig,
    FallbackConfig,
    OutputConfig,
    has_llm_credentials,
)
from station_extractor.core.parishes import (
    Parish,
    PARISHES,
    parish_by_name,
    parish_ids,
    parish_prefixes,
)
from station_extractor.core.sources import DEFAULT_SOURCES
from station_extractor.core.fetcher import DocumentFetcher, default_headers
from station_extractor.core.text_extraction import (
    TextExtractor,
    TextExtractorBackend,
    PyMuPDFBackend,
)
from station_extractor.core.json_parsing import find_first_json_array, parse_first_json_array
from station_extractor.core.llm_client import LLMClient, LLMResponse
from station_extractor.core.pipeline_logger import PipelineLogger, get_logger, reset_logger
from station_extractor.core.errors import (
    ConfigurationError,
    ErrorSeverity,
    ErrorCategory,
    ExtractionError,
    PipelineErrors,
    fetch_error,
    text_extraction_error,
    llm_api_error,
    llm_parse_error,
    validation_error,
    timeout_error,
)
from station_extractor.core.cost_tracker import CostTracker, CallUsage
from station_extractor.core.fallback_data import FALLBACK_STATION_NAMES, generate_fallback_stations
from station_extractor.core.merge import (
    dedup_key,
    deduplicate_records,
    group_by_parish,
    merge_records,
)
from station_extractor.core.quality import (
    QualityIssue,
    QualityIssueType,
    QualityReport,
    check_result_quality,
)

__all__ = [
    # Config
    "LLM_PROVIDER",
    "API_KEY_ENV_VAR",
    "API_KEY_ENV_VARS",
    "STATION_MODEL",
    "FALLBACK_MODEL",
    "FetchConfig",
    "LLMConfig",
    "FallbackConfig",
    "OutputConfig",
    "has_llm_credentials",
    # Reference data
    "Parish",
    "PARISHES",
    "parish_by_name",
    "parish_ids",
    "parish_prefixes",
    "DEFAULT_SOURCES",
    "FALLBACK_STATION_NAMES",
    "generate_fallback_stations",
    # Retrieval and parsing
    "DocumentFetcher",
    "default_headers",
    "TextExtractor",
    "TextExtractorBackend",
    "PyMuPDFBackend",
    "find_first_json_array",
    "parse_first_json_array",
    # LLM
    "LLMClient",
    "LLMResponse",
    "CostTracker",
    "CallUsage",
    # Merge and quality
    "dedup_key",
    "deduplicate_records",
    "group_by_parish",
    "merge_records",
    "QualityIssue",
    "QualityIssueType",
    "QualityReport",
    "check_result_quality",
    # Logging
    "PipelineLogger",
    "get_logger",
    "reset_logger",
    # Errors
    "ConfigurationError",
    "ErrorSeverity",
    "ErrorCategory",
    "ExtractionError",
    "PipelineErrors",
    "fetch_error",
    "text_extraction_error",
    "llm_api_error",
    "llm_parse_error",
    "validation_error",
    "timeout_error",
]
