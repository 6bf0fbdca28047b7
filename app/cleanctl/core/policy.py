"""Confirmation policy.

Decides, per target or per entry, whether the operator must be asked
before anything is deleted.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum

from cleanctl.filesystem.models import ResolvedTarget
from cleanctl.models.profile import Entry


class ConfirmationMode(str, Enum):
    """How the operator is prompted during a run.

    Attributes:
        EVERY_PATH: Confirm every resolved target before removing it.
        EVERY_ENTRY: Confirm each profile entry once, before resolution.
        SILENT: Never prompt.
    """

    EVERY_PATH = "every-path"
    EVERY_ENTRY = "every-entry"
    SILENT = "silent"


class Decision(Enum):
    """Operator answer to a confirmation prompt."""

    YES = "yes"
    NO = "no"
    ABORT = "abort"


class Confirmer(ABC):
    """Source of operator decisions.

    Implementations may block waiting for input. ``ABORT`` declines the
    current item and every item after it; callers stop asking once it
    has been returned.
    """

    @abstractmethod
    def ask(self, target: ResolvedTarget) -> Decision:
        """Ask whether a resolved target may be deleted."""

    @abstractmethod
    def ask_entry(self, entry: Entry) -> Decision:
        """Ask whether a profile entry takes part in the run."""


def requires_confirmation(mode: ConfirmationMode, target: ResolvedTarget) -> bool:
    """Check if a target must be confirmed before removal."""
    return mode == ConfirmationMode.EVERY_PATH


def requires_entry_confirmation(mode: ConfirmationMode, entry: Entry) -> bool:
    """Check if an entry must be confirmed before it is resolved."""
    return mode == ConfirmationMode.EVERY_ENTRY


def entry_filter(
    mode: ConfirmationMode, confirmer: Confirmer | None
) -> Callable[[Entry], bool] | None:
    """Build the entry predicate used while building a plan.

    Returns None when no entry needs confirming in ``mode``. Otherwise
    the predicate asks the confirmer about each entry that requires it;
    after an ``ABORT`` every later entry is excluded without asking.

    Args:
        mode: Active confirmation mode.
        confirmer: Confirmer to ask.

    Returns:
        Predicate for :meth:`TargetSetBuilder.build`, or None.

    Raises:
        ValueError: If entries need confirming but no confirmer is given.
    """
    if mode != ConfirmationMode.EVERY_ENTRY:
        return None
    if confirmer is None:
        msg = f"Mode {mode.value} requires a confirmer"
        raise ValueError(msg)

    aborted = False

    def include(entry: Entry) -> bool:
        nonlocal aborted
        if aborted:
            return False
        if not requires_entry_confirmation(mode, entry):
            return True
        decision = confirmer.ask_entry(entry)
        if decision == Decision.ABORT:
            aborted = True
        return decision == Decision.YES

    return include
