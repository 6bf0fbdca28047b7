"""Filesystem capability interface and its local implementation.

The resolution and deletion engine only talks to the filesystem through
:class:`FilesystemOperator`, which keeps the engine testable with fakes
and keeps all OS calls in one place.
"""

import logging
import os
import shutil
from abc import ABC, abstractmethod

from cleanctl.filesystem.models import MatchedPath
from cleanctl.filesystem.pattern import CompiledPattern, PatternMatcher

logger = logging.getLogger(__name__)


class FilesystemOperator(ABC):
    """Abstract base class for filesystem access used by the engine.

    Example:
        >>> fs = LocalFilesystem()
        >>> if fs.exists("/tmp/old.log"):
        ...     freed = fs.remove_file("/tmp/old.log")
    """

    @abstractmethod
    def list_matching(self, pattern: str | CompiledPattern) -> list[MatchedPath]:
        """Expand a pattern to the ordered list of existing matches.

        Raises:
            PatternSyntaxError: If the pattern is malformed.
            ResolutionError: If the pattern root cannot be listed.
        """

    @abstractmethod
    def remove_file(self, path: str) -> int:
        """Remove a single file or symlink.

        Returns:
            Number of bytes reclaimed.

        Raises:
            OSError: If the file cannot be removed.
        """

    @abstractmethod
    def remove_dir_recursive(self, path: str) -> int:
        """Remove a directory and everything beneath it.

        Returns:
            Number of bytes reclaimed.

        Raises:
            OSError: If the directory cannot be removed.
        """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check if a path exists, including dangling symlinks."""


class LocalFilesystem(FilesystemOperator):
    """FilesystemOperator backed by the host operating system."""

    def __init__(self, matcher: PatternMatcher | None = None) -> None:
        """Initialize the local filesystem.

        Args:
            matcher: Pattern matcher to use. Defaults to a new PatternMatcher.
        """
        self._matcher = matcher or PatternMatcher()

    def list_matching(self, pattern: str | CompiledPattern) -> list[MatchedPath]:
        return self._matcher.match(pattern)

    def remove_file(self, path: str) -> int:
        size = _file_size(path)
        os.unlink(path)
        logger.debug("Removed file %s (%d bytes)", path, size)
        return size

    def remove_dir_recursive(self, path: str) -> int:
        # Symlinks to directories are unlinked, never followed
        if os.path.islink(path):
            return self.remove_file(path)

        if not os.path.isdir(path):
            raise NotADirectoryError(20, "Not a directory", path)

        size = directory_size(path)
        shutil.rmtree(path)
        logger.debug("Removed directory %s (%d bytes)", path, size)
        return size

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)


def _file_size(path: str) -> int:
    """Size of a single file without following symlinks (0 if unreadable)."""
    try:
        return os.lstat(path).st_size
    except OSError:
        return 0


def directory_size(path: str) -> int:
    """Calculate the total size of regular files beneath a directory.

    Unreadable entries are counted as zero bytes.

    Args:
        path: Directory to measure.

    Returns:
        Total size in bytes.
    """
    total = 0
    for dirpath, _dirnames, filenames in os.walk(path):
        for name in filenames:
            total += _file_size(os.path.join(dirpath, name))
    return total
