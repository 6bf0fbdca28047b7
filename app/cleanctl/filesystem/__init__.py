"""Filesystem access for pattern expansion and deletion.

This module provides the filesystem value types, the glob-like pattern
matcher, and the filesystem operator used by the cleanup engine.
"""

from cleanctl.filesystem.models import MatchedPath, ResolvedTarget, TargetKind
from cleanctl.filesystem.operator import FilesystemOperator, LocalFilesystem
from cleanctl.filesystem.pattern import (
    CompiledPattern,
    PatternMatcher,
    compile_pattern,
    expand_path,
)

__all__ = [
    "CompiledPattern",
    "FilesystemOperator",
    "LocalFilesystem",
    "MatchedPath",
    "PatternMatcher",
    "ResolvedTarget",
    "TargetKind",
    "compile_pattern",
    "expand_path",
]
