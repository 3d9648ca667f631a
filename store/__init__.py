"""
Store Module

Nomination storage and persistence layer.

This module provides:
- SQLite key/value substrate holding the serialized store document
- Write-through NominationStore (get-or-create, replace, read, seed)
- Schema-validated loading that falls back to an empty store
"""

__version__ = "0.1.0"

from .repository import DEFAULT_STORAGE_KEY, NominationStore, PersistenceFailure

__all__ = ["DEFAULT_STORAGE_KEY", "NominationStore", "PersistenceFailure"]
