"""Deletion plan construction.

Resolves every entry of a profile, concatenates the targets in entry
order, and drops duplicates by canonical path. All patterns are
compiled up front so a malformed profile fails before the filesystem
is touched.
"""

import logging
import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from cleanctl.core.errors import ResolutionError
from cleanctl.core.resolver import EntryResolver
from cleanctl.filesystem.models import MatchedPath, ResolvedTarget
from cleanctl.filesystem.pattern import compile_pattern
from cleanctl.models.profile import Entry, PatternEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EntryFailure:
    """An entry that could not be resolved and was left out of the plan.

    Attributes:
        entry_index: Position of the entry in its profile.
        entry: The entry itself.
        error: Error message explaining the failure.
    """

    entry_index: int
    entry: Entry
    error: str


@dataclass(frozen=True, slots=True)
class DeletionPlan:
    """Ordered, duplicate-free targets for one run.

    Attributes:
        targets: Targets to process, in first-seen order.
        excluded: Matches spared by exception rules.
        failures: Entries skipped because they could not be resolved.
    """

    targets: tuple[ResolvedTarget, ...] = field(default_factory=tuple)
    excluded: tuple[MatchedPath, ...] = field(default_factory=tuple)
    failures: tuple[EntryFailure, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.targets)

    @property
    def is_empty(self) -> bool:
        """Check if the plan has nothing to delete."""
        return not self.targets

    @property
    def has_failures(self) -> bool:
        """Check if any entry failed to resolve."""
        return bool(self.failures)


def canonical_path(path: str) -> str:
    """Build the deduplication key for a path.

    Parent directories are resolved through symlinks and the result is
    case- and separator-normalized for the host. The final component is
    not dereferenced, so a symlink and its target stay distinct.

    Args:
        path: Filesystem path, absolute or relative.

    Returns:
        Canonical string used to compare targets.
    """
    parent, name = os.path.split(os.path.abspath(path))
    if not name:
        return os.path.normcase(parent)
    return os.path.normcase(os.path.join(os.path.realpath(parent), name))


class TargetSetBuilder:
    """Builds a DeletionPlan from profile entries.

    Attributes:
        _resolver: Resolver used for each entry.
        _strict: If True, the first ResolutionError aborts the build.
            Otherwise the failing entry is skipped and reported.
    """

    def __init__(self, resolver: EntryResolver, *, strict: bool = False) -> None:
        """Initialize the builder.

        Args:
            resolver: Entry resolver.
            strict: Raise on resolution errors instead of skipping the entry.
        """
        self._resolver = resolver
        self._strict = strict

    def validate(self, entries: Sequence[Entry]) -> None:
        """Compile every pattern without touching the filesystem.

        Raises:
            PatternSyntaxError: If any pattern is malformed.
        """
        for entry in entries:
            if isinstance(entry, PatternEntry):
                compile_pattern(entry.value)

    def build(
        self,
        entries: Sequence[Entry],
        include: Callable[[Entry], bool] | None = None,
    ) -> DeletionPlan:
        """Resolve entries into a deduplicated deletion plan.

        Args:
            entries: Profile entries, in order.
            include: Optional predicate deciding whether an entry takes
                part in the run. Called once per entry, in order, after
                validation.

        Returns:
            DeletionPlan with targets in first-seen order.

        Raises:
            ConfigurationError: If any pattern is malformed.
            ResolutionError: If ``strict`` and an entry cannot be resolved.
        """
        self.validate(entries)

        seen: set[str] = set()
        targets: list[ResolvedTarget] = []
        excluded: list[MatchedPath] = []
        failures: list[EntryFailure] = []

        for index, entry in enumerate(entries):
            if include is not None and not include(entry):
                logger.info("Entry %d not included: %s", index, entry.describe())
                continue

            try:
                resolution = self._resolver.resolve(entry, index)
            except ResolutionError as e:
                if self._strict:
                    raise
                logger.warning("Skipping entry %d (%s): %s", index, entry.describe(), e)
                failures.append(EntryFailure(entry_index=index, entry=entry, error=str(e)))
                continue

            excluded.extend(resolution.excluded)
            for target in resolution.targets:
                key = canonical_path(target.path)
                if key in seen:
                    logger.debug("Dropping duplicate target %s", target.path)
                    continue
                seen.add(key)
                targets.append(target)

        logger.debug("Built plan with %d target(s)", len(targets))
        return DeletionPlan(
            targets=tuple(targets),
            excluded=tuple(excluded),
            failures=tuple(failures),
        )
