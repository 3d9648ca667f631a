"""Reciprocity resolver.

Matches are recomputed from the current snapshot on every call. Nothing here
writes to the store or keeps state between calls.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, TypeAlias

from .schemas import ParticipantRecord

Snapshot: TypeAlias = Mapping[str, ParticipantRecord]


class RecordSource(Protocol):
    def snapshot(self) -> dict[str, ParticipantRecord]: ...


def _records(source: RecordSource | Snapshot) -> Snapshot:
    if isinstance(source, Mapping):
        return source
    return source.snapshot()


def find_matches(source: RecordSource | Snapshot, identifier: str) -> list[str]:
    """Return the participants that ``identifier`` nominated and who nominated back.

    The result follows the order of ``identifier``'s own nomination list.
    """
    records = _records(source)
    current = records.get(identifier)
    if current is None or not current.nominations:
        return []

    matches: list[str] = []
    for target in current.nominations:
        target_record = records.get(target)
        if target_record is not None and target_record.nominates(identifier):
            matches.append(target)
    return matches


def nominated_by(source: RecordSource | Snapshot, identifier: str) -> list[str]:
    """Return everyone whose nominations include ``identifier``, sorted."""
    records = _records(source)
    return sorted(
        record.identifier
        for record in records.values()
        if record.identifier != identifier and record.nominates(identifier)
    )


def mutual_pairs(source: RecordSource | Snapshot) -> list[tuple[str, str]]:
    """Every matched pair once, as ``(smaller, larger)`` identifier tuples."""
    records = _records(source)
    pairs: set[tuple[str, str]] = set()
    for identifier in records:
        for target in find_matches(records, identifier):
            pair = (identifier, target) if identifier < target else (target, identifier)
            pairs.add(pair)
    return sorted(pairs)
