"""Nomination sanitation and submission validation.

Two layers live here. ``sanitize_nominations`` is what the store applies to
every write: it silently coerces input into a valid list. ``validate_submission``
is the stricter rule callers apply before writing, and reports problems as
``ValidationIssue`` values instead of raising.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from .schemas import MAX_NOMINATIONS


class ValidationIssue(str, Enum):
    EMPTY_IDENTIFIER = "empty_identifier"
    INVALID_NOMINATION_COUNT = "invalid_nomination_count"
    DUPLICATE_NOMINATION = "duplicate_nomination"
    SELF_NOMINATION = "self_nomination"


ISSUE_MESSAGES: dict[ValidationIssue, str] = {
    ValidationIssue.EMPTY_IDENTIFIER: "Please enter a valid roll number.",
    ValidationIssue.INVALID_NOMINATION_COUNT: f"You must enter exactly {MAX_NOMINATIONS} unique roll numbers.",
    ValidationIssue.DUPLICATE_NOMINATION: (
        f"Please enter {MAX_NOMINATIONS} different roll numbers. No duplicates allowed."
    ),
    ValidationIssue.SELF_NOMINATION: "You cannot match with yourself!",
}


def sanitize_nominations(
    identifier: str,
    candidates: Iterable[str],
    limit: int = MAX_NOMINATIONS,
) -> list[str]:
    """Trim entries and drop empties, self references and repeats.

    First occurrence wins and order of first appearance is kept. The result
    is cut to ``limit`` entries.
    """
    cleaned: list[str] = []
    seen: set[str] = set()
    for candidate in candidates:
        value = candidate.strip()
        if not value or value == identifier or value in seen:
            continue
        seen.add(value)
        cleaned.append(value)
    return cleaned[:limit]


def validate_identifier(identifier: str) -> ValidationIssue | None:
    if not identifier.strip():
        return ValidationIssue.EMPTY_IDENTIFIER
    return None


def validate_submission(
    identifier: str,
    candidates: Iterable[str],
    required: int = MAX_NOMINATIONS,
) -> ValidationIssue | None:
    """Check a submission against the exactly-N, no-repeat, no-self rule.

    Checks run in order: identifier, count, duplicates, self reference. The
    first failing check is returned; ``None`` means the submission is valid.
    """
    issue = validate_identifier(identifier)
    if issue is not None:
        return issue
    owner = identifier.strip()
    trimmed = [candidate.strip() for candidate in candidates]
    trimmed = [candidate for candidate in trimmed if candidate]
    if len(trimmed) != required:
        return ValidationIssue.INVALID_NOMINATION_COUNT
    if len(set(trimmed)) != len(trimmed):
        return ValidationIssue.DUPLICATE_NOMINATION
    if owner in trimmed:
        return ValidationIssue.SELF_NOMINATION
    return None
