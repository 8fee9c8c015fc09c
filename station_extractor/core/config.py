"""Centralized configuration for the polling-station pipeline.

Policy constants (fallback threshold, timeouts, labels) live here so the
orchestrator, phases and CLI read them from one place. Each constant notes
what it controls and where it is used.
"""

import os
from typing import Final


# =============================================================================
# LLM Provider Configuration
# =============================================================================
#
# Set the LLM_PROVIDER environment variable to switch providers:
#   - "gemini" (default): Google Gemini via GEMINI_API_KEY (or GOOGLE_API_KEY)
#   - "openrouter": OpenRouter API gateway via OPENROUTER_API_KEY
#   - "azure": Azure OpenAI Service via AZURE_API_KEY, AZURE_API_BASE,
#     AZURE_API_VERSION
#
# =============================================================================

LLM_PROVIDER: Final[str] = os.environ.get("LLM_PROVIDER", "gemini")
"""LLM provider to use. Set via LLM_PROVIDER env var."""

API_KEY_ENV_VARS: Final[dict[str, str]] = {
    "gemini": "GEMINI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "azure": "AZURE_API_KEY",
}

API_KEY_ENV_VAR: Final[str] = API_KEY_ENV_VARS.get(LLM_PROVIDER, "GEMINI_API_KEY")
"""Environment variable name for the LLM API key (provider-dependent)."""

GEMINI_KEY_ALIASES: Final[tuple[str, ...]] = ("GEMINI_API_KEY", "GOOGLE_API_KEY")
"""Gemini keys are accepted under either name, first one set wins."""


def _get_model_name(base_model: str) -> str:
    """Convert a base model name to the provider-specific identifier.

    Args:
        base_model: Base model name (e.g., "gemini-1.5-flash", "gpt-4o-mini").

    Returns:
        Provider-specific model identifier understood by litellm.
    """
    if LLM_PROVIDER == "azure":
        deployment_env = f"AZURE_DEPLOYMENT_{base_model.upper().replace('-', '_').replace('.', '_')}"
        return f"azure/{os.environ.get(deployment_env, base_model)}"
    if LLM_PROVIDER == "openrouter":
        return f"openrouter/{base_model}"
    return f"gemini/{base_model}"


_BASE_MODELS: Final[dict[str, tuple[str, str]]] = {
    # provider -> (primary, fallback)
    "gemini": ("gemini-1.5-flash", "gemini-1.5-pro"),
    "openrouter": ("openai/gpt-4o-mini", "openai/gpt-4o"),
    "azure": ("gpt-4o-mini", "gpt-4o"),
}

STATION_MODEL: Final[str] = _get_model_name(_BASE_MODELS.get(LLM_PROVIDER, _BASE_MODELS["gemini"])[0])
"""Model used to turn document text into station records.

A fast model is enough: the task is list transcription, not reasoning.
Override per run with the --model CLI flag.
"""

FALLBACK_MODEL: Final[str] = _get_model_name(_BASE_MODELS.get(LLM_PROVIDER, _BASE_MODELS["gemini"])[1])
"""Model the router switches to when STATION_MODEL is unavailable."""


def has_llm_credentials() -> bool:
    """Return True if an API key for the configured provider is set."""
    if LLM_PROVIDER == "gemini":
        return any(os.environ.get(name) for name in GEMINI_KEY_ALIASES)
    return bool(os.environ.get(API_KEY_ENV_VAR))


# Document Retrieval

class FetchConfig:
    """Settings for downloading source documents.

    Some ECJ endpoints reject default HTTP client signatures, so requests
    carry a desktop-browser header set.

    Used by: fetcher.py, orchestrator.py
    """

    TIMEOUT_SECONDS: Final[float] = 60.0
    """Upper bound for one document download (connect + read).

    One unresponsive source must not stall the run.
    """

    USER_AGENT: Final[str] = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    ACCEPT: Final[str] = "application/pdf,application/octet-stream,*/*"

    REFERER: Final[str] = "https://ecj.com.jm/"

    MAX_CONCURRENT: Final[int] = 1
    """Sources processed at once. 1 keeps outbound load sequential.

    Raising it is safe: results are always merged in registration order.
    """


# LLM Call Configuration

class LLMConfig:
    """Default parameters for the station-extraction model call."""

    TEMPERATURE: Final[float] = 0.0
    """0.0 keeps transcriptions reproducible between runs."""

    TIMEOUT_SECONDS: Final[float] = 120.0
    """Upper bound for a single model call."""

    NUM_RETRIES: Final[int] = 0
    """Router-level retries. A failed call is absorbed and the source yields
    zero records; the fallback tier covers the gap."""

    CHARS_PER_TOKEN: Final[int] = 4
    """Approximate characters per token for pre-flight size checks."""

    MAX_INPUT_TOKENS: Final[int] = 200_000
    """Token budget for the document text embedded in one prompt."""

    MAX_DOCUMENT_CHARS: Final[int] = MAX_INPUT_TOKENS * CHARS_PER_TOKEN
    """Document text beyond this is truncated before prompting.

    Used by: station_agent.py
    """


# Fallback Tier

class FallbackConfig:
    """Controls when the synthetic dataset is merged in."""

    THRESHOLD: Final[int] = 100
    """Minimum AI-derived record count (before dedup) to skip the fallback.

    Below this the synthetic records are appended after all real records,
    so real data still wins every dedup tie.

    Used by: fallback_phase.py, cli.py
    """


# Output

class OutputConfig:
    """Labels and formats of the produced ExtractionResult."""

    DOCUMENT_SOURCE: Final[str] = "ECJ_2024_Comprehensive_All_Documents"
    """Provenance label written to ExtractionResult.documentSource."""

    CODE_SEQUENCE_WIDTH: Final[int] = 3
    """Zero-padding of the numeric part of a station code (KIN007)."""

    OUTPUT_DIR: Final[str] = "outputs"
    """Default CLI output directory."""
