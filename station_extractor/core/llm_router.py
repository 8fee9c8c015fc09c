"""LiteLLM Router configuration for provider selection and model fallback.

Supports multiple LLM providers:
- Gemini (default): GEMINI_API_KEY or GOOGLE_API_KEY
- OpenRouter: OPENROUTER_API_KEY
- Azure OpenAI: AZURE_API_KEY, AZURE_API_BASE, AZURE_API_VERSION

The router is built lazily so that importing the package never touches
provider credentials.
"""

import os

from litellm import Router

from station_extractor.core.config import (
    LLM_PROVIDER,
    API_KEY_ENV_VAR,
    GEMINI_KEY_ALIASES,
    STATION_MODEL,
    FALLBACK_MODEL,
    LLMConfig,
)


def _gemini_api_key() -> str:
    for name in GEMINI_KEY_ALIASES:
        value = os.environ.get(name)
        if value:
            return value
    return ""


def _deployment_models(extra_models: tuple[str, ...] = ()) -> tuple[str, ...]:
    """Models the router serves: the two configured ones, then any overrides."""
    models = [STATION_MODEL, FALLBACK_MODEL]
    for model in extra_models:
        if model and model not in models:
            models.append(model)
    return tuple(models)


def _build_gemini_model_list(models: tuple[str, ...]) -> list[dict]:
    """Build model list for the Gemini provider."""
    api_key = _gemini_api_key()
    return [
        {
            "model_name": model,
            "litellm_params": {"model": model, "api_key": api_key},
        }
        for model in models
    ]


def _build_openrouter_model_list(models: tuple[str, ...]) -> list[dict]:
    """Build model list for the OpenRouter provider."""
    api_key_ref = f"os.environ/{API_KEY_ENV_VAR}"
    return [
        {
            "model_name": model,
            "litellm_params": {"model": model, "api_key": api_key_ref},
        }
        for model in models
    ]


def _build_azure_model_list(models: tuple[str, ...]) -> list[dict]:
    """Build model list for the Azure OpenAI provider.

    Deployment names default to "gpt-4o-mini" and "gpt-4o" and can be
    overridden with AZURE_DEPLOYMENT_GPT_4O_MINI and AZURE_DEPLOYMENT_GPT_4O.
    """
    api_key = os.environ.get("AZURE_API_KEY", "")
    api_base = os.environ.get("AZURE_API_BASE", "")
    api_version = os.environ.get("AZURE_API_VERSION", "2024-02-15-preview")

    return [
        {
            "model_name": model,
            "litellm_params": {
                "model": model,
                "api_key": api_key,
                "api_base": api_base,
                "api_version": api_version,
            },
        }
        for model in models
    ]


def build_router(extra_models: tuple[str, ...] = ()) -> Router:
    """Build the LLM Router.

    The router handles:
    - Provider-specific credentials and endpoints
    - Fallback from the primary (or an override) to the secondary model
    - Cooldown tracking for failed deployments

    Args:
        extra_models: Model overrides to register next to STATION_MODEL and
                      FALLBACK_MODEL. The router rejects any model that has
                      no deployment.

    Retries are disabled (LLMConfig.NUM_RETRIES): a failed call costs the
    source its records and the run carries on.
    """
    models = _deployment_models(extra_models)
    if LLM_PROVIDER == "azure":
        model_list = _build_azure_model_list(models)
    elif LLM_PROVIDER == "openrouter":
        model_list = _build_openrouter_model_list(models)
    else:
        model_list = _build_gemini_model_list(models)

    fallbacks = [{model: [FALLBACK_MODEL]} for model in models if model != FALLBACK_MODEL]

    return Router(
        model_list=model_list,
        num_retries=LLMConfig.NUM_RETRIES,
        timeout=LLMConfig.TIMEOUT_SECONDS,
        cooldown_time=60,
        allowed_fails=2,
        fallbacks=fallbacks,
    )


_router: Router | None = None
_router_models: tuple[str, ...] = ()


def get_router(model: str | None = None) -> Router:
    """Get or create the shared Router.

    Args:
        model: Model the caller is about to use. When the shared router has
               no deployment for it, the router is rebuilt with it added.
    """
    global _router, _router_models
    if _router is None or (model and model not in _router_models):
        extra = tuple(m for m in _router_models if m not in (STATION_MODEL, FALLBACK_MODEL))
        if model:
            extra += (model,)
        _router = build_router(extra_models=extra)
        _router_models = _deployment_models(extra)
    return _router
