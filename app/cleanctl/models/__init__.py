"""Data models for cleanctl.

This module exports the profile schema and the deletion outcome types.
"""

from cleanctl.models.outcome import DeletionOutcome, OutcomeStatus, RunReport
from cleanctl.models.profile import (
    DirectoryEntry,
    Entry,
    ExceptionKind,
    FileEntry,
    PatternEntry,
    Profile,
)

__all__ = [
    "DeletionOutcome",
    "DirectoryEntry",
    "Entry",
    "ExceptionKind",
    "FileEntry",
    "OutcomeStatus",
    "PatternEntry",
    "Profile",
    "RunReport",
]
