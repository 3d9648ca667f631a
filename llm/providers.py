"""LLM provider implementations."""

from __future__ import annotations

import hashlib
import importlib
import os
import time
from collections.abc import Mapping, Sequence
from typing import Protocol, cast

from matching_core.schemas import LLMProviderConfig

from .base import BaseLLMProvider, LLMResponse
from .retry import RetryPolicy

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEEPSEEK_BASE_URL = "https://api.deepseek.com"

_API_KEY_ENV: dict[str, tuple[str, ...]] = {
    "openai": ("OPENAI_API_KEY",),
    "gemini": ("GEMINI_API_KEY", "API_KEY"),
    "deepseek": ("DEEPSEEK_API_KEY", "OPENAI_API_KEY"),
}

_DEFAULT_BASE_URLS: dict[str, str] = {
    "gemini": GEMINI_OPENAI_BASE_URL,
    "deepseek": DEEPSEEK_BASE_URL,
}


class _ChatCompletions(Protocol):
    def create(
        self,
        *,
        model: str,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> object: ...


class _Chat(Protocol):
    completions: _ChatCompletions


class _OpenAIClient(Protocol):
    chat: _Chat


def _load_openai_client(
    api_key: str | None,
    base_url: str | None,
    timeout_seconds: int,
) -> _OpenAIClient:
    try:
        module = importlib.import_module("openai")
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency at runtime
        raise ImportError("openai is required to use OpenAIProvider") from exc
    openai_client = getattr(module, "OpenAI", None)
    if openai_client is None:
        raise ImportError("openai.OpenAI client is unavailable")
    return cast(
        _OpenAIClient,
        openai_client(api_key=api_key, base_url=base_url, timeout=timeout_seconds),
    )


def resolve_api_key(provider_type: str, api_key: str | None = None) -> str | None:
    if api_key:
        return api_key
    for name in _API_KEY_ENV.get(provider_type, ("OPENAI_API_KEY",)):
        value = os.getenv(name)
        if value:
            return value
    return None


def _extract_usage(raw_usage: object) -> dict[str, int]:
    if raw_usage is None:
        return {}
    model_dump = getattr(raw_usage, "model_dump", None)
    if callable(model_dump):
        raw_usage = model_dump()
    if not isinstance(raw_usage, Mapping):
        return {}
    typed_usage = cast(Mapping[str, object], raw_usage)
    return {
        key: int(value)
        for key, value in typed_usage.items()
        if isinstance(value, (int, float)) and not isinstance(value, bool)
    }


def _extract_text(response: object) -> str:
    choices = cast(Sequence[object] | None, getattr(response, "choices", None))
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None) if message is not None else None
    return str(content) if content is not None else ""


class OpenAIProvider(BaseLLMProvider):
    """OpenAI-compatible chat provider (OpenAI, Gemini, DeepSeek)."""

    provider_type: str
    _client: _OpenAIClient
    _base_url: str | None
    _timeout_seconds: int
    _retry_policy: RetryPolicy | None

    def __init__(
        self,
        provider_id: str,
        model_name: str,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout_seconds: int = 30,
        retry_policy: RetryPolicy | None = None,
        provider_type: str = "openai",
    ) -> None:
        super().__init__(provider_id=provider_id, model_name=model_name)
        self.provider_type = provider_type
        self._base_url = base_url or _DEFAULT_BASE_URLS.get(provider_type)
        self._timeout_seconds = timeout_seconds
        self._retry_policy = retry_policy
        self._client = _load_openai_client(
            resolve_api_key(provider_type, api_key), self._base_url, timeout_seconds
        )

    def generate(  # pyright: ignore[reportImplicitOverride]
        self, prompt: str, temperature: float, max_tokens: int
    ) -> LLMResponse:
        def _call() -> object:
            return self._client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
            )

        start = time.perf_counter()
        if self._retry_policy is None:
            response = _call()
        else:
            response = self._retry_policy.execute(_call)
        latency_ms = (time.perf_counter() - start) * 1000

        return LLMResponse(
            text=_extract_text(response),
            model_id=str(getattr(response, "model", None) or self.model_name),
            latency_ms=latency_ms,
            usage=_extract_usage(getattr(response, "usage", None)),
        )

    def get_provider_info(self) -> dict[str, object]:  # pyright: ignore[reportImplicitOverride]
        return {
            "provider_id": self.provider_id,
            "provider_type": self.provider_type,
            "model_name": self.model_name,
            "base_url": self._base_url,
            "timeout_seconds": self._timeout_seconds,
        }


_FAKE_LINES = (
    "So, which of us gets to pick the first coffee spot?",
    "Great minds pick alike. Library or canteen first?",
    "Mutual taste confirmed. What's your go-to exam snack?",
    "We matched! Settle this: best bench on campus?",
)


class FakeProvider(BaseLLMProvider):
    """Deterministic fake provider for offline tests and demos."""

    call_count: int

    def __init__(self, provider_id: str, model_name: str = "fake-model") -> None:
        super().__init__(provider_id=provider_id, model_name=model_name)
        self.call_count = 0

    def generate(  # pyright: ignore[reportImplicitOverride]
        self, prompt: str, temperature: float, max_tokens: int
    ) -> LLMResponse:
        self.call_count += 1
        prompt_hash = hashlib.sha256(prompt.encode("utf-8")).hexdigest()
        text = _FAKE_LINES[int(prompt_hash[:8], 16) % len(_FAKE_LINES)]
        return LLMResponse(
            text=text,
            model_id=self.model_name,
            usage={
                "prompt_tokens": len(prompt.split()),
                "completion_tokens": len(text.split()),
            },
        )

    def get_provider_info(self) -> dict[str, object]:  # pyright: ignore[reportImplicitOverride]
        return {
            "provider_id": self.provider_id,
            "provider_type": "fake",
            "model_name": self.model_name,
        }


def create_provider(
    config: LLMProviderConfig,
    retry_policy: RetryPolicy | None = None,
) -> BaseLLMProvider:
    provider_type = config.provider_type.lower()
    if provider_type in {"openai", "gemini", "deepseek"}:
        policy = retry_policy or RetryPolicy(max_retries=config.max_retries)
        return OpenAIProvider(
            provider_id=config.provider_id,
            model_name=config.model_name,
            api_key=config.api_key,
            base_url=config.base_url,
            timeout_seconds=config.timeout_seconds,
            retry_policy=policy,
            provider_type=provider_type,
        )
    if provider_type == "fake":
        return FakeProvider(provider_id=config.provider_id, model_name=config.model_name)
    raise ValueError(f"Unsupported provider type: {config.provider_type}")
