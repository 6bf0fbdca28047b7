"""Exception hierarchy for cleanctl.

Configuration errors are fatal and surface before any deletion happens.
Resolution errors are scoped to a single profile entry. Deletion errors
are scoped to a single target and never abort a run.
"""


class CleanctlError(Exception):
    """Base exception for all cleanctl errors."""


class ConfigurationError(CleanctlError):
    """Raised when a profile or pattern is malformed.

    Always raised before any filesystem mutation takes place.
    """


class PatternSyntaxError(ConfigurationError):
    """Raised when a glob-like pattern cannot be compiled.

    Attributes:
        pattern: The offending pattern string.
        reason: Short description of what is wrong with it.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class ResolutionError(CleanctlError):
    """Raised when an entry cannot be expanded against the filesystem.

    Typically caused by a directory that cannot be listed.

    Attributes:
        path: Path that could not be read.
        cause: Underlying OS error.
        entry_index: Index of the profile entry being resolved, if known.
    """

    def __init__(self, path: str, cause: OSError, entry_index: int | None = None) -> None:
        self.path = path
        self.cause = cause
        self.entry_index = entry_index
        super().__init__(f"Cannot read {path}: {cause.strerror or cause}")


class DeletionError(CleanctlError):
    """Raised when a resolved target cannot be removed.

    Attributes:
        path: Target path.
        cause: Underlying OS error.
    """

    def __init__(self, path: str, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to remove {path}: {cause.strerror or cause}")
