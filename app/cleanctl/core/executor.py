"""Deletion execution.

Walks a deletion plan in order, asks for confirmation where the active
mode requires it, removes each target, and records exactly one outcome
per target. A failing target never stops the run.
"""

import logging
import time
from collections.abc import Callable

from cleanctl.core.errors import DeletionError
from cleanctl.core.planner import DeletionPlan
from cleanctl.core.policy import ConfirmationMode, Confirmer, Decision, requires_confirmation
from cleanctl.filesystem.models import ResolvedTarget
from cleanctl.filesystem.operator import FilesystemOperator
from cleanctl.models.outcome import (
    REASON_ABORTED,
    REASON_DECLINED,
    REASON_NOT_FOUND,
    DeletionOutcome,
    RunReport,
)

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[int, DeletionOutcome], None]


class DeletionExecutor:
    """Removes the targets of a deletion plan.

    Each target ends in exactly one of DELETED, SKIPPED or FAILED:

    - In modes that confirm paths, NO skips the target ("declined") and
      ABORT skips it and every remaining target ("aborted").
    - Confirmed targets already absent are SKIPPED ("not found").
    - OS errors other than "not found" are FAILED and the run continues.

    Example:
        >>> executor = DeletionExecutor(LocalFilesystem(), ConfirmationMode.SILENT)
        >>> report = executor.execute(plan)
        >>> report.deleted, report.failed
        (3, 0)
    """

    def __init__(
        self,
        filesystem: FilesystemOperator,
        mode: ConfirmationMode,
        confirmer: Confirmer | None = None,
        on_outcome: OutcomeCallback | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            filesystem: Filesystem operator performing removals.
            mode: Active confirmation mode.
            confirmer: Source of decisions; required when ``mode`` prompts per path.
            on_outcome: Called with (position, outcome) after each target.

        Raises:
            ValueError: If ``mode`` prompts per path and no confirmer is given.
        """
        if mode == ConfirmationMode.EVERY_PATH and confirmer is None:
            msg = f"Mode {mode.value} requires a confirmer"
            raise ValueError(msg)

        self._filesystem = filesystem
        self._mode = mode
        self._confirmer = confirmer
        self._on_outcome = on_outcome

    def execute(self, plan: DeletionPlan) -> RunReport:
        """Process every target of the plan in order.

        Args:
            plan: Deletion plan to execute.

        Returns:
            RunReport with one outcome per target, in plan order.
        """
        start = time.perf_counter()
        aborted = False
        outcomes: list[DeletionOutcome] = []

        for position, target in enumerate(plan.targets):
            if aborted:
                outcome = DeletionOutcome.skipped(target, REASON_ABORTED)
            else:
                outcome = self._process(target)
                aborted = outcome.reason == REASON_ABORTED

            outcomes.append(outcome)
            if self._on_outcome is not None:
                self._on_outcome(position, outcome)

        report = RunReport(outcomes=tuple(outcomes), elapsed=time.perf_counter() - start)
        logger.debug(
            "Run finished: %d deleted, %d skipped, %d failed in %.3fs",
            report.deleted,
            report.skipped,
            report.failed,
            report.elapsed,
        )
        return report

    def _process(self, target: ResolvedTarget) -> DeletionOutcome:
        """Confirm (if needed) and remove a single target."""
        if requires_confirmation(self._mode, target) and self._confirmer is not None:
            decision = self._confirmer.ask(target)
            if decision == Decision.ABORT:
                logger.info("Run aborted at %s", target.path)
                return DeletionOutcome.skipped(target, REASON_ABORTED)
            if decision != Decision.YES:
                return DeletionOutcome.skipped(target, REASON_DECLINED)

        if not self._filesystem.exists(target.path):
            logger.debug("Target not found: %s", target.path)
            return DeletionOutcome.skipped(target, REASON_NOT_FOUND)

        return self._remove(target)

    def _remove(self, target: ResolvedTarget) -> DeletionOutcome:
        """Remove a target, mapping OS errors onto outcomes."""
        try:
            if target.is_directory:
                freed = self._filesystem.remove_dir_recursive(target.path)
            else:
                freed = self._filesystem.remove_file(target.path)
        except FileNotFoundError:
            return DeletionOutcome.skipped(target, REASON_NOT_FOUND)
        except OSError as e:
            error = DeletionError(target.path, e)
            logger.warning("%s", error)
            return DeletionOutcome.failed(target, str(error))

        logger.debug("Deleted %s", target.path)
        return DeletionOutcome.deleted(target, freed)
