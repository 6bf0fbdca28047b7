"""Filesystem domain models for pattern matching and deletion targets.

This module defines the value types exchanged between the pattern
matcher, the entry resolver, and the deletion executor.
"""

from dataclasses import dataclass
from enum import Enum


class TargetKind(str, Enum):
    """Kind of filesystem entry a target refers to.

    Attributes:
        FILE: Regular file, symlink, or anything that is not a real directory.
        DIRECTORY: Real directory, removed recursively.
    """

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class MatchedPath:
    """A single filesystem hit produced by expanding a pattern.

    Attributes:
        path: Absolute filesystem path.
        kind: Whether the hit is a directory or a file.
        mtime: Last modification time in seconds since the epoch
            (None if it could not be read).
    """

    path: str
    kind: TargetKind
    mtime: float | None = None


@dataclass(frozen=True, slots=True)
class ResolvedTarget:
    """A concrete path scheduled for deletion.

    Attributes:
        path: Absolute (or user-supplied literal) filesystem path.
        kind: How the path must be removed.
        entry_index: Index of the profile entry that produced this target.
    """

    path: str
    kind: TargetKind
    entry_index: int = 0

    def __post_init__(self) -> None:
        """Validate target data after initialization."""
        if not self.path:
            msg = "Target path cannot be empty"
            raise ValueError(msg)

    @property
    def is_directory(self) -> bool:
        """Check if this target is removed recursively."""
        return self.kind == TargetKind.DIRECTORY
