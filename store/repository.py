"""
SQLite-backed nomination store.

The whole store is one JSON document kept under a single key. Every mutating
call loads the document, applies the change and writes the full document back
before returning.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from collections.abc import Iterable, Sequence
from pathlib import Path

from pydantic import ValidationError

from matching_core.schemas import MAX_NOMINATIONS, ParticipantRecord, StoreDocument
from matching_core.validation import sanitize_nominations

from .database import delete_value, initialize_database, read_value, write_value

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "unimatch_db_v1"


class PersistenceFailure(RuntimeError):
    """The storage substrate could not be read or written."""


def parse_document(raw: str | None) -> StoreDocument:
    """Validate a serialized store document; anything malformed is an empty store."""
    if raw is None:
        return StoreDocument()
    try:
        return StoreDocument.from_json(raw)
    except (ValidationError, ValueError) as exc:
        logger.warning(f"Discarding malformed store document: {exc}")
        return StoreDocument()


class NominationStore:
    db_path: str
    storage_key: str

    def __init__(
        self,
        db_path: str | Path = "data/unimatch.db",
        storage_key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self.db_path = str(db_path)
        self.storage_key = storage_key
        self._initialized = False

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        try:
            initialize_database(self.db_path)
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceFailure(f"Cannot open store at {self.db_path}: {exc}") from exc
        self._initialized = True

    def _load(self) -> StoreDocument:
        self._ensure_initialized()
        try:
            raw = read_value(self.db_path, self.storage_key)
        except sqlite3.Error as exc:
            raise PersistenceFailure(f"Cannot read store: {exc}") from exc
        return parse_document(raw)

    def _save(self, document: StoreDocument) -> None:
        self._ensure_initialized()
        try:
            write_value(self.db_path, self.storage_key, document.to_json())
        except sqlite3.Error as exc:
            raise PersistenceFailure(f"Cannot write store: {exc}") from exc

    def get_or_create(self, identifier: str) -> ParticipantRecord:
        if not identifier:
            raise ValueError("identifier must be non-empty")
        document = self._load()
        record = document.users.get(identifier)
        if record is None:
            record = ParticipantRecord(identifier=identifier, nominations=[])
            document.users[identifier] = record
            self._save(document)
            logger.debug(f"Created participant {identifier}")
        return record.model_copy(deep=True)

    def replace_nominations(
        self, identifier: str, candidates: Sequence[str]
    ) -> ParticipantRecord:
        if not identifier:
            raise ValueError("identifier must be non-empty")
        document = self._load()
        existing = document.users.get(identifier) or ParticipantRecord(identifier=identifier)
        cleaned = sanitize_nominations(identifier, candidates, limit=MAX_NOMINATIONS)
        if len(cleaned) != len(candidates):
            logger.debug(
                f"Sanitized nominations for {identifier}: {list(candidates)} -> {cleaned}"
            )
        record = existing.model_copy(update={"nominations": cleaned})
        document.users[identifier] = record
        self._save(document)
        return record.model_copy(deep=True)

    def read(self, identifier: str) -> ParticipantRecord | None:
        record = self._load().users.get(identifier)
        if record is None:
            return None
        return record.model_copy(deep=True)

    def seed_if_empty(self, records: Iterable[ParticipantRecord]) -> bool:
        document = self._load()
        if document.users:
            return False
        for record in records:
            # model_construct() skips validation
            document.users[record.identifier] = ParticipantRecord.from_dict(record.to_dict())
        self._save(document)
        logger.info(f"Seeded store with {len(document.users)} participant(s)")
        return True

    def clear(self) -> None:
        self._ensure_initialized()
        try:
            delete_value(self.db_path, self.storage_key)
        except sqlite3.Error as exc:
            raise PersistenceFailure(f"Cannot clear store: {exc}") from exc
        logger.info("Cleared nomination store")

    def snapshot(self) -> dict[str, ParticipantRecord]:
        return dict(self._load().users)

    def list_records(self) -> list[ParticipantRecord]:
        users = self._load().users
        return [users[key] for key in sorted(users)]

    def export_json(self) -> str:
        """Return the persisted document as pretty-printed JSON."""
        return json.dumps(self._load().to_dict(), indent=2, sort_keys=True)

    def __len__(self) -> int:
        return len(self._load().users)
