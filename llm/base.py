"""Base LLM provider interface and response schema."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class LLMResponse:
    text: str
    model_id: str
    latency_ms: float = 0.0
    usage: dict[str, int] = field(default_factory=dict)


class BaseLLMProvider(ABC):
    """Abstract interface for LLM providers."""

    provider_id: str
    model_name: str

    def __init__(self, provider_id: str, model_name: str) -> None:
        self.provider_id = provider_id
        self.model_name = model_name

    @abstractmethod
    def generate(self, prompt: str, temperature: float, max_tokens: int) -> LLMResponse:
        """Generate a completion for the prompt."""

    @abstractmethod
    def get_provider_info(self) -> dict[str, object]:
        """Return metadata about the provider/model."""
