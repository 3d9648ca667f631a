"""Best-effort icebreaker lines for matched pairs.

Generation never raises: a missing provider, an empty completion or a failed
call each map to a fixed fallback line.
"""

from __future__ import annotations

import logging

from .base import BaseLLMProvider
from .prompts import IcebreakerPrompt

logger = logging.getLogger(__name__)

NO_PROVIDER_LINE = "Ask them about their favorite campus food spot!"
EMPTY_RESPONSE_LINE = "Hey! Looks like we both have good taste."
ERROR_LINE = "Hey! Looks like we matched!"

_QUOTE_CHARS = "\"'“”‘’`"


class IcebreakerGenerator:
    provider: BaseLLMProvider | None
    temperature: float
    max_tokens: int

    def __init__(
        self,
        provider: BaseLLMProvider | None,
        prompt: IcebreakerPrompt | None = None,
        temperature: float = 0.9,
        max_tokens: int = 60,
    ) -> None:
        self.provider = provider
        self.prompt = prompt or IcebreakerPrompt()
        self.temperature = temperature
        self.max_tokens = max_tokens

    def generate(self, user_a: str, user_b: str) -> str:
        if self.provider is None:
            return NO_PROVIDER_LINE
        try:
            response = self.provider.generate(
                self.prompt.build(user_a, user_b),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                f"Icebreaker generation failed for {user_a}/{user_b} "
                f"via {self.provider.provider_id}: {exc}"
            )
            return ERROR_LINE
        logger.debug(
            f"Icebreaker for {user_a}/{user_b} from {response.model_id} "
            f"in {response.latency_ms:.0f}ms, usage={response.usage}"
        )
        text = response.text.strip().strip(_QUOTE_CHARS).strip()
        return text or EMPTY_RESPONSE_LINE
