"""Login / submit / match flow on top of the store and resolver.

``MatchSession`` is the caller the store expects: it rejects invalid input with
a ``ValidationIssue`` before anything is written, and recomputes matches after
every successful login or submit.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from llm.base import BaseLLMProvider
from llm.icebreaker import IcebreakerGenerator
from llm.providers import create_provider, resolve_api_key
from matching_core.resolver import find_matches, nominated_by
from matching_core.schemas import ParticipantRecord
from matching_core.seed import demo_records
from matching_core.validation import ValidationIssue, validate_identifier, validate_submission
from store.repository import NominationStore

from .config import AppConfig

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    matched_user: str
    icebreaker: str | None = None


@dataclass
class LoginResult:
    record: ParticipantRecord | None = None
    matches: list[str] = field(default_factory=list)
    issue: ValidationIssue | None = None

    @property
    def ok(self) -> bool:
        return self.issue is None


@dataclass
class SubmitResult:
    record: ParticipantRecord | None = None
    matches: list[str] = field(default_factory=list)
    issue: ValidationIssue | None = None

    @property
    def ok(self) -> bool:
        return self.issue is None


class MatchSession:
    store: NominationStore
    icebreakers: IcebreakerGenerator | None
    seed_demo: bool
    active_identifier: str | None

    def __init__(
        self,
        store: NominationStore,
        icebreakers: IcebreakerGenerator | None = None,
        seed_demo: bool = False,
    ) -> None:
        self.store = store
        self.icebreakers = icebreakers
        self.seed_demo = seed_demo
        self.active_identifier = None

    def ensure_seeded(self) -> bool:
        if not self.seed_demo:
            return False
        return self.store.seed_if_empty(demo_records())

    def login(self, identifier: str) -> LoginResult:
        issue = validate_identifier(identifier)
        if issue is not None:
            return LoginResult(issue=issue)
        self.ensure_seeded()
        identifier = identifier.strip()
        record = self.store.get_or_create(identifier)
        self.active_identifier = identifier
        matches = find_matches(self.store, identifier) if record.nominations else []
        logger.info(f"Participant {identifier} logged in ({len(matches)} match(es))")
        return LoginResult(record=record, matches=matches)

    def submit(self, identifier: str, nominations: Sequence[str]) -> SubmitResult:
        issue = validate_submission(identifier, nominations)
        if issue is not None:
            logger.debug(f"Rejected submission from {identifier!r}: {issue.value}")
            return SubmitResult(issue=issue)
        identifier = identifier.strip()
        record = self.store.replace_nominations(identifier, nominations)
        matches = find_matches(self.store, identifier)
        return SubmitResult(record=record, matches=matches)

    def matches(self, identifier: str, with_icebreakers: bool = False) -> list[MatchResult]:
        identifier = identifier.strip()
        results = [MatchResult(matched_user=target) for target in find_matches(self.store, identifier)]
        if with_icebreakers and self.icebreakers is not None:
            for result in results:
                result.icebreaker = self.icebreakers.generate(identifier, result.matched_user)
        return results

    def admirer_count(self, identifier: str) -> int:
        return len(nominated_by(self.store, identifier.strip()))

    def logout(self) -> None:
        self.active_identifier = None


def _icebreaker_provider(config: AppConfig) -> BaseLLMProvider | None:
    provider_config = config.icebreaker
    if provider_config is None:
        return None
    provider_type = provider_config.provider_type.lower()
    needs_key = provider_type in {"openai", "gemini", "deepseek"}
    if needs_key and resolve_api_key(provider_type, provider_config.api_key) is None:
        logger.warning(f"API key for {provider_type} not found; icebreakers use fallback lines")
        return None
    try:
        return create_provider(provider_config)
    except ImportError as exc:
        logger.warning(f"Icebreaker provider unavailable: {exc}")
        return None


def build_session(config: AppConfig) -> MatchSession:
    store = NominationStore(db_path=config.db_path, storage_key=config.storage_key)
    provider = _icebreaker_provider(config)
    icebreakers = IcebreakerGenerator(
        provider,
        temperature=config.icebreaker_temperature,
        max_tokens=config.icebreaker_max_tokens,
    )
    return MatchSession(store, icebreakers=icebreakers, seed_demo=config.seed_demo)
