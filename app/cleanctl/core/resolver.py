"""Entry resolution.

Turns one profile entry into the concrete targets it describes. Literal
entries resolve without touching the filesystem; pattern entries are
expanded and then narrowed by their exception rule.
"""

import logging
import os
from dataclasses import dataclass, field

from cleanctl.core.errors import ConfigurationError, ResolutionError
from cleanctl.core.filters import apply_exception
from cleanctl.filesystem.models import MatchedPath, ResolvedTarget, TargetKind
from cleanctl.filesystem.operator import FilesystemOperator
from cleanctl.filesystem.pattern import expand_path
from cleanctl.models.profile import DirectoryEntry, Entry, FileEntry, PatternEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Resolution:
    """Targets produced by one entry.

    Attributes:
        targets: Paths to delete, in expansion order.
        excluded: Matches spared by the entry's exception rule.
    """

    targets: tuple[ResolvedTarget, ...] = field(default_factory=tuple)
    excluded: tuple[MatchedPath, ...] = field(default_factory=tuple)


def literal_path(value: str) -> str:
    """Expand and absolutize a literal profile path."""
    return os.path.abspath(expand_path(value))


class EntryResolver:
    """Resolves profile entries to deletion targets.

    Only read-only filesystem queries are issued.

    Attributes:
        _filesystem: Filesystem used to expand patterns.
    """

    def __init__(self, filesystem: FilesystemOperator) -> None:
        """Initialize the resolver.

        Args:
            filesystem: Filesystem operator used for pattern expansion.
        """
        self._filesystem = filesystem

    def resolve(self, entry: Entry, index: int = 0) -> Resolution:
        """Resolve one entry.

        Args:
            entry: Profile entry to resolve.
            index: Position of the entry in its profile.

        Returns:
            Resolution with the entry's targets and spared matches.

        Raises:
            ConfigurationError: If the entry type is unknown or its
                pattern is malformed.
            ResolutionError: If the pattern root cannot be listed.
        """
        if isinstance(entry, FileEntry):
            target = ResolvedTarget(literal_path(entry.value), TargetKind.FILE, index)
            return Resolution(targets=(target,))

        if isinstance(entry, DirectoryEntry):
            target = ResolvedTarget(literal_path(entry.value), TargetKind.DIRECTORY, index)
            return Resolution(targets=(target,))

        if isinstance(entry, PatternEntry):
            return self._resolve_pattern(entry, index)

        msg = f"Unknown entry type: {type(entry).__name__}"
        raise ConfigurationError(msg)

    def _resolve_pattern(self, entry: PatternEntry, index: int) -> Resolution:
        """Expand a pattern entry and apply its exception rule."""
        try:
            matches = self._filesystem.list_matching(entry.value)
        except ResolutionError as e:
            e.entry_index = index
            raise

        kept, excluded = apply_exception(matches, entry.exception)
        for spared in excluded:
            logger.info("Sparing %s from deletion", spared.path)

        logger.debug(
            "Entry %d (%s): %d match(es), %d excluded",
            index,
            entry.value,
            len(matches),
            len(excluded),
        )
        targets = tuple(ResolvedTarget(m.path, m.kind, index) for m in kept)
        return Resolution(targets=targets, excluded=tuple(excluded))
