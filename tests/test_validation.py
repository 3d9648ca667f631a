import pytest

from matching_core.validation import (
    ISSUE_MESSAGES,
    ValidationIssue,
    sanitize_nominations,
    validate_identifier,
    validate_submission,
)


def test_sanitize_strips_self_and_duplicates() -> None:
    assert sanitize_nominations("101", ["101", "102", "102"]) == ["102"]


def test_sanitize_trims_and_drops_empty_entries() -> None:
    assert sanitize_nominations("101", ["  102 ", "", "   ", "103"]) == ["102", "103"]


def test_sanitize_keeps_first_occurrence_order() -> None:
    assert sanitize_nominations("1", ["c", "a", "c", "b", "a"]) == ["c", "a", "b"]


def test_sanitize_caps_at_limit() -> None:
    assert sanitize_nominations("1", ["2", "3", "4", "5"]) == ["2", "3", "4"]


def test_sanitize_is_idempotent() -> None:
    once = sanitize_nominations("101", [" 101", "102 ", "102", "103"])
    assert sanitize_nominations("101", once) == once


def test_sanitize_is_case_sensitive() -> None:
    assert sanitize_nominations("abc", ["ABC", "abc"]) == ["ABC"]


@pytest.mark.parametrize("identifier", ["", "   ", "\t"])
def test_blank_identifier_rejected(identifier: str) -> None:
    assert validate_identifier(identifier) is ValidationIssue.EMPTY_IDENTIFIER


def test_valid_submission_passes() -> None:
    assert validate_submission("101", ["102", "103", "104"]) is None


def test_submission_trims_before_counting() -> None:
    assert validate_submission("101", [" 102", "103 ", "104", ""]) is None


@pytest.mark.parametrize(
    "picks",
    [["102", "103"], ["102", "", "103"], ["102", "103", "104", "105"], []],
)
def test_wrong_count_rejected(picks: list[str]) -> None:
    assert validate_submission("101", picks) is ValidationIssue.INVALID_NOMINATION_COUNT


def test_duplicates_rejected() -> None:
    assert validate_submission("101", ["102", "102 ", "103"]) is ValidationIssue.DUPLICATE_NOMINATION


def test_self_nomination_rejected() -> None:
    assert validate_submission("101", ["101", "102", "103"]) is ValidationIssue.SELF_NOMINATION


def test_blank_submitter_rejected_first() -> None:
    assert validate_submission(" ", ["101", "101"]) is ValidationIssue.EMPTY_IDENTIFIER


def test_every_issue_has_a_message() -> None:
    assert set(ISSUE_MESSAGES) == set(ValidationIssue)


def test_messages_use_roll_number_wording() -> None:
    assert ISSUE_MESSAGES[ValidationIssue.INVALID_NOMINATION_COUNT] == (
        "You must enter exactly 3 unique roll numbers."
    )
    assert ISSUE_MESSAGES[ValidationIssue.DUPLICATE_NOMINATION] == (
        "Please enter 3 different roll numbers. No duplicates allowed."
    )
    assert ISSUE_MESSAGES[ValidationIssue.SELF_NOMINATION] == "You cannot match with yourself!"
