"""Profile run orchestration.

Wires the resolver, plan builder and executor together. These functions
are shared between the ``clean`` and ``plan`` CLI commands.
"""

import logging
from collections.abc import Callable

from cleanctl.core.executor import DeletionExecutor, OutcomeCallback
from cleanctl.core.planner import DeletionPlan, TargetSetBuilder
from cleanctl.core.policy import ConfirmationMode, Confirmer, entry_filter
from cleanctl.core.resolver import EntryResolver
from cleanctl.filesystem.operator import FilesystemOperator, LocalFilesystem
from cleanctl.models.outcome import RunReport
from cleanctl.models.profile import Entry, Profile

logger = logging.getLogger(__name__)


def build_plan(
    profile: Profile,
    filesystem: FilesystemOperator | None = None,
    *,
    strict: bool = False,
    include: Callable[[Entry], bool] | None = None,
) -> DeletionPlan:
    """Resolve a profile into a deletion plan.

    Args:
        profile: Loaded profile.
        filesystem: Filesystem to expand patterns against. Defaults to
            the local filesystem.
        strict: Raise on the first entry that cannot be resolved.
        include: Optional per-entry predicate.

    Returns:
        DeletionPlan for the profile.

    Raises:
        ConfigurationError: If any pattern is malformed.
        ResolutionError: If ``strict`` and an entry cannot be resolved.
    """
    fs = filesystem or LocalFilesystem()
    logger.debug("Resolving %d entries of profile '%s'", len(profile.entries), profile.name)
    builder = TargetSetBuilder(EntryResolver(fs), strict=strict)
    return builder.build(profile.entries, include=include)


def execute_plan(
    plan: DeletionPlan,
    mode: ConfirmationMode,
    *,
    confirmer: Confirmer | None = None,
    filesystem: FilesystemOperator | None = None,
    on_outcome: OutcomeCallback | None = None,
) -> RunReport:
    """Delete the targets of a plan.

    Args:
        plan: Plan to execute.
        mode: Active confirmation mode.
        confirmer: Source of decisions for prompting modes.
        filesystem: Filesystem performing removals. Defaults to the local one.
        on_outcome: Called after each target.

    Returns:
        RunReport with one outcome per plan target.
    """
    fs = filesystem or LocalFilesystem()
    executor = DeletionExecutor(fs, mode, confirmer=confirmer, on_outcome=on_outcome)
    return executor.execute(plan)


def run_profile(
    profile: Profile,
    mode: ConfirmationMode,
    *,
    confirmer: Confirmer | None = None,
    filesystem: FilesystemOperator | None = None,
    strict: bool = False,
) -> tuple[DeletionPlan, RunReport]:
    """Resolve and execute a profile in one call.

    In ``every-entry`` mode each entry is confirmed before it is resolved.

    Returns:
        Tuple of (plan, report).

    Raises:
        ConfigurationError: If any pattern is malformed.
        ResolutionError: If ``strict`` and an entry cannot be resolved.
    """
    fs = filesystem or LocalFilesystem()
    plan = build_plan(profile, fs, strict=strict, include=entry_filter(mode, confirmer))
    report = execute_plan(plan, mode, confirmer=confirmer, filesystem=fs)
    return plan, report
