"""Outcome models for deletion runs.

This module defines the per-target result of a deletion attempt and
the aggregated report produced by a complete run.
"""

from dataclasses import dataclass, field
from enum import Enum

from cleanctl.filesystem.models import ResolvedTarget


class OutcomeStatus(Enum):
    """Terminal state of a single target.

    Attributes:
        DELETED: The target was removed.
        SKIPPED: The target was declined, aborted, or already absent.
        FAILED: Removal was attempted and the OS refused.
    """

    DELETED = "deleted"
    SKIPPED = "skipped"
    FAILED = "failed"


# Skip reasons
REASON_DECLINED = "declined"
REASON_ABORTED = "aborted"
REASON_NOT_FOUND = "not found"


@dataclass(frozen=True, slots=True)
class DeletionOutcome:
    """Result of processing one target of a deletion plan.

    Attributes:
        target: The target that was processed.
        status: Terminal state reached.
        reason: Why the target was skipped (None unless SKIPPED).
        error: Error message (None unless FAILED).
        bytes_freed: Bytes reclaimed (0 unless DELETED).
    """

    target: ResolvedTarget
    status: OutcomeStatus
    reason: str | None = None
    error: str | None = None
    bytes_freed: int = 0

    @classmethod
    def deleted(cls, target: ResolvedTarget, bytes_freed: int = 0) -> "DeletionOutcome":
        """Create a DELETED outcome."""
        return cls(target=target, status=OutcomeStatus.DELETED, bytes_freed=bytes_freed)

    @classmethod
    def skipped(cls, target: ResolvedTarget, reason: str) -> "DeletionOutcome":
        """Create a SKIPPED outcome."""
        return cls(target=target, status=OutcomeStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, target: ResolvedTarget, error: str) -> "DeletionOutcome":
        """Create a FAILED outcome."""
        return cls(target=target, status=OutcomeStatus.FAILED, error=error)

    @property
    def is_deleted(self) -> bool:
        """Check if the target was removed."""
        return self.status == OutcomeStatus.DELETED

    @property
    def is_skipped(self) -> bool:
        """Check if the target was skipped."""
        return self.status == OutcomeStatus.SKIPPED

    @property
    def is_failed(self) -> bool:
        """Check if removal failed."""
        return self.status == OutcomeStatus.FAILED

    @property
    def path(self) -> str:
        """Path of the processed target."""
        return self.target.path


@dataclass(frozen=True, slots=True)
class RunReport:
    """Aggregated outcomes of a deletion run.

    Attributes:
        outcomes: One outcome per plan target, in plan order.
        elapsed: Wall-clock duration of the run in seconds.
    """

    outcomes: tuple[DeletionOutcome, ...] = field(default_factory=tuple)
    elapsed: float = 0.0

    @property
    def deleted(self) -> int:
        """Number of targets removed."""
        return sum(1 for o in self.outcomes if o.is_deleted)

    @property
    def skipped(self) -> int:
        """Number of targets skipped."""
        return sum(1 for o in self.outcomes if o.is_skipped)

    @property
    def failed(self) -> int:
        """Number of targets that could not be removed."""
        return sum(1 for o in self.outcomes if o.is_failed)

    @property
    def bytes_freed(self) -> int:
        """Total bytes reclaimed by the run."""
        return sum(o.bytes_freed for o in self.outcomes)

    @property
    def has_failures(self) -> bool:
        """Check if any target failed."""
        return self.failed > 0
