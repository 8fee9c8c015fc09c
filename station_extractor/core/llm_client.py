"""LLM client for the polling-station pipeline.

Absorbs the boilerplate around a model call: message building, timeout,
cost tracking and pulling the text out of the completion object. Routing,
credentials and model fallback live in the litellm Router
(core/llm_router.py).

The client returns the model's raw text. Station lists come back as a JSON
array wrapped in prose, so parsing happens in core/json_parsing.py rather
than by forcing a JSON-object response format.
"""

import logging
from dataclasses import dataclass
from typing import Any

from station_extractor.core.config import LLMConfig
from station_extractor.core.cost_tracker import CostTracker
from station_extractor.core.llm_router import get_router

logger = logging.getLogger(__name__)

# Suppress LiteLLM debug noise (done once at module load)
logging.getLogger("litellm").setLevel(logging.ERROR)
logging.getLogger("httpx").setLevel(logging.ERROR)


@dataclass
class LLMResponse:
    """Response from an LLM call.

    Attributes:
        text: Raw text content produced by the model ("" if none).
        model: Model identifier used for the call.
    """

    text: str
    model: str


class LLMClient:
    """Client for making LLM API calls.

    Usage:
        client = LLMClient(cost_tracker=tracker)
        response = await client.complete(
            prompt="Extract every polling station from: ...",
            model="gemini/gemini-1.5-flash",
            source="Main ECJ Document",
        )
        response.text  # free-form model output

    A router may be injected for tests; by default the shared Router is used.
    """

    def __init__(self, cost_tracker: CostTracker | None = None, router: Any = None) -> None:
        """Initialize the client.

        Args:
            cost_tracker: Optional tracker; every call is recorded if given.
            router: Object exposing ``acompletion``. Defaults to get_router(model)
                    on every call, so model overrides get a deployment.
        """
        self.cost_tracker = cost_tracker
        self._router = router

    def router_for(self, model: str) -> Any:
        """Injected router, or the shared one with a deployment for ``model``."""
        if self._router is not None:
            return self._router
        return get_router(model)

    async def complete(
        self,
        prompt: str,
        model: str,
        source: str = "",
        system_prompt: str | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
    ) -> LLMResponse:
        """Make a single-turn completion call.

        Args:
            prompt: User message content.
            model: LLM model identifier.
            source: Source document name for cost tracking.
            system_prompt: Optional system message.
            temperature: Sampling temperature. Defaults to 0.0.
            timeout: Seconds before the call is abandoned.

        Returns:
            LLMResponse with the raw text.

        Raises:
            litellm exceptions: For API, auth, quota and timeout errors.
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        response = await self.router_for(model).acompletion(
            model=model,
            messages=messages,
            temperature=temperature if temperature is not None else LLMConfig.TEMPERATURE,
            timeout=timeout if timeout is not None else LLMConfig.TIMEOUT_SECONDS,
        )

        if self.cost_tracker:
            self.cost_tracker.record(model, getattr(response, "usage", None), source=source)

        text = response.choices[0].message.content or ""
        return LLMResponse(text=text, model=model)
