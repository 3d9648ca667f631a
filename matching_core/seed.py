"""Demo participants used to bootstrap an empty store."""

from __future__ import annotations

from .schemas import ParticipantRecord

# 101 and 102 nominate each other; 103 matches nobody.
DEMO_RECORDS: tuple[ParticipantRecord, ...] = (
    ParticipantRecord(identifier="101", nominations=["102", "103", "104"]),
    ParticipantRecord(identifier="102", nominations=["101", "105", "106"]),
    ParticipantRecord(identifier="103", nominations=["107", "108", "109"]),
)


def demo_records() -> list[ParticipantRecord]:
    return [record.model_copy(deep=True) for record in DEMO_RECORDS]
