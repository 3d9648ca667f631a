"""
Matching Core Module

Participant data model and mutual-match resolution.

This module provides:
- ParticipantRecord / StoreDocument schemas (pydantic)
- Nomination sanitation shared by the store
- Boundary validation for login and submission
- Reciprocity resolver over a store snapshot
- Demo seed records
"""

__version__ = "0.1.0"

from .resolver import find_matches, mutual_pairs, nominated_by
from .schemas import MAX_NOMINATIONS, ParticipantRecord, StoreDocument
from .validation import ValidationIssue, validate_identifier, validate_submission

__all__ = [
    "MAX_NOMINATIONS",
    "ParticipantRecord",
    "StoreDocument",
    "ValidationIssue",
    "find_matches",
    "mutual_pairs",
    "nominated_by",
    "validate_identifier",
    "validate_submission",
]
