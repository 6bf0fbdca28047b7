"""Glob-like pattern compilation and expansion.

Patterns are split into a literal root directory and a sequence of
path segments. Each segment is either a literal name, a wildcard
segment (``*``, ``?``, ``[...]``), or the recursive ``**`` segment
that spans zero or more directory levels.

Expansion lists directories in sorted order at every level so that two
scans of an unchanged tree always yield the same ordered result.
"""

import fnmatch
import logging
import os
import re
import stat
from collections.abc import Iterator
from dataclasses import dataclass

from cleanctl.core.errors import PatternSyntaxError, ResolutionError
from cleanctl.filesystem.models import MatchedPath, TargetKind

logger = logging.getLogger(__name__)

# Windows filesystems compare names case-insensitively
CASE_INSENSITIVE = os.name == "nt"

_WILDCARD_CHARS = frozenset("*?[")
_RECURSIVE = "**"
_SPLIT_RE = re.compile(r"[\\/]" if os.sep == "\\" else "/")


def expand_path(value: str) -> str:
    """Expand ``~`` and environment variables in a profile path.

    Args:
        value: Raw path or pattern string from a profile.

    Returns:
        The expanded string. Unknown variables are left untouched.
    """
    return os.path.expanduser(os.path.expandvars(value))


def has_wildcards(component: str) -> bool:
    """Check if a single path component contains glob syntax."""
    return any(c in _WILDCARD_CHARS for c in component)


@dataclass(frozen=True, slots=True)
class Segment:
    """One compiled path segment of a pattern.

    Attributes:
        text: Original segment text.
        regex: Compiled name matcher, None for literal and recursive segments.
        recursive: True for the ``**`` segment.
    """

    text: str
    regex: re.Pattern[str] | None = None
    recursive: bool = False

    @property
    def is_literal(self) -> bool:
        """Check if the segment matches exactly one name."""
        return self.regex is None and not self.recursive

    def matches(self, name: str) -> bool:
        """Check whether a directory entry name matches this segment."""
        if self.recursive:
            return True
        if self.regex is None:
            return os.path.normcase(name) == os.path.normcase(self.text)
        return self.regex.fullmatch(name) is not None


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A validated pattern, ready for expansion.

    Attributes:
        source: The pattern as written in the profile.
        root: Absolute literal directory that expansion starts from.
        segments: Segments below the root, starting with the first wildcard.
    """

    source: str
    root: str
    segments: tuple[Segment, ...]


def compile_pattern(pattern: str) -> CompiledPattern:
    """Validate and compile a glob-like pattern without touching the filesystem.

    Args:
        pattern: Pattern string, e.g. ``~/dumps/*/*.dmp``.

    Returns:
        CompiledPattern for use with :class:`PatternMatcher`.

    Raises:
        PatternSyntaxError: If the pattern is empty or malformed.
    """
    if not pattern or not pattern.strip():
        raise PatternSyntaxError(pattern, "pattern cannot be empty")

    expanded = expand_path(pattern)
    drive, rest = os.path.splitdrive(expanded)
    absolute = bool(rest) and _SPLIT_RE.match(rest[0]) is not None
    components = [c for c in _SPLIT_RE.split(rest) if c and c != "."]

    literal: list[str] = []
    index = 0
    while index < len(components) and not has_wildcards(components[index]):
        literal.append(components[index])
        index += 1

    if absolute:
        base = drive + os.sep
    else:
        base = drive or os.curdir
    root = os.path.abspath(os.path.join(base, *literal))

    segments: list[Segment] = []
    for component in components[index:]:
        if component == _RECURSIVE:
            # a/**/**/b is the same as a/**/b
            if segments and segments[-1].recursive:
                continue
            segments.append(Segment(text=component, recursive=True))
        elif _RECURSIVE in component:
            raise PatternSyntaxError(
                pattern, "recursive wildcards must form a single path component"
            )
        elif has_wildcards(component):
            segments.append(Segment(text=component, regex=_compile_segment(component, pattern)))
        else:
            segments.append(Segment(text=component))

    return CompiledPattern(source=pattern, root=root, segments=tuple(segments))


def _compile_segment(component: str, pattern: str) -> re.Pattern[str]:
    """Compile one wildcard component into a name matcher.

    ``fnmatch`` silently treats malformed classes as literals, so
    bracket syntax is validated first.
    """
    _validate_classes(component, pattern)
    flags = re.IGNORECASE if CASE_INSENSITIVE else 0
    return re.compile(fnmatch.translate(component), flags)


def _validate_classes(component: str, pattern: str) -> None:
    """Reject unclosed ``[...]`` classes and reversed ranges.

    A ``]`` directly after ``[`` or ``[!`` is a literal member.
    """
    i, n = 0, len(component)
    while i < n:
        if component[i] != "[":
            i += 1
            continue
        start = i + 1
        if start < n and component[start] == "!":
            start += 1
        first = start + 1 if component[start : start + 1] == "]" else start
        close = component.find("]", first)
        if close == -1:
            raise PatternSyntaxError(pattern, "unclosed character class")

        body = component[start:close]
        k = 0
        while k < len(body):
            if k + 2 < len(body) and body[k + 1] == "-":
                if body[k] > body[k + 2]:
                    raise PatternSyntaxError(
                        pattern, f"invalid character range {body[k]}-{body[k + 2]}"
                    )
                k += 3
            else:
                k += 1
        i = close + 1


class PatternMatcher:
    """Expands compiled patterns against the live filesystem.

    Expansion is read-only. Directories are listed in sorted order, so
    results are deterministic for an unchanged tree.

    Example:
        >>> matcher = PatternMatcher()
        >>> [m.path for m in matcher.match("/tmp/dumps/*.dmp")]
        ['/tmp/dumps/1.dmp', '/tmp/dumps/2.dmp']
    """

    def match(self, pattern: str | CompiledPattern) -> list[MatchedPath]:
        """Return every existing path matching the pattern.

        Args:
            pattern: Raw pattern string or an already compiled pattern.

        Returns:
            Ordered, duplicate-free list of matches. Empty if the
            pattern's root directory does not exist.

        Raises:
            PatternSyntaxError: If a raw pattern string is malformed.
            ResolutionError: If the pattern's root directory cannot be listed.
        """
        compiled = pattern if isinstance(pattern, CompiledPattern) else compile_pattern(pattern)

        if not compiled.segments:
            hit = _stat_match(compiled.root)
            return [hit] if hit is not None else []

        try:
            root_mode = os.stat(compiled.root).st_mode
        except (FileNotFoundError, NotADirectoryError):
            logger.debug("Pattern root does not exist: %s", compiled.root)
            return []
        except OSError as e:
            raise ResolutionError(compiled.root, e) from e
        if not stat.S_ISDIR(root_mode):
            logger.debug("Pattern root is not a directory: %s", compiled.root)
            return []

        seen: set[str] = set()
        matches: list[MatchedPath] = []
        for path in self._expand(compiled.root, compiled.segments, strict=True):
            if path in seen:
                continue
            seen.add(path)
            hit = _stat_match(path)
            if hit is not None:
                matches.append(hit)

        logger.debug("Pattern %s matched %d path(s)", compiled.source, len(matches))
        return matches

    def _expand(
        self, directory: str, segments: tuple[Segment, ...], *, strict: bool
    ) -> Iterator[str]:
        """Yield paths below ``directory`` matching ``segments``."""
        segment, rest = segments[0], segments[1:]

        if segment.recursive:
            yield from self._expand_recursive(directory, rest, strict=strict)
            return

        if segment.is_literal:
            path = os.path.join(directory, segment.text)
            if rest:
                if os.path.isdir(path):
                    yield from self._expand(path, rest, strict=False)
            elif os.path.lexists(path):
                yield path
            return

        for name, is_dir in self._list_dir(directory, strict=strict):
            if not segment.matches(name):
                continue
            path = os.path.join(directory, name)
            if rest:
                if is_dir:
                    yield from self._expand(path, rest, strict=False)
            else:
                yield path

    def _expand_recursive(
        self, directory: str, rest: tuple[Segment, ...], *, strict: bool
    ) -> Iterator[str]:
        """Expand a ``**`` segment: zero levels first, then each subdirectory."""
        if rest:
            yield from self._expand(directory, rest, strict=strict)

        for name, is_dir in self._list_dir(directory, strict=strict):
            path = os.path.join(directory, name)
            if not rest:
                # Trailing ** yields every descendant
                yield path
            if is_dir and not os.path.islink(path):
                yield from self._expand_recursive(path, rest, strict=False)

    def _list_dir(self, directory: str, *, strict: bool) -> list[tuple[str, bool]]:
        """List a directory as sorted (name, is_dir) pairs.

        Args:
            directory: Directory to list.
            strict: If True, listing errors raise ResolutionError.
                Otherwise they are logged and the directory is skipped.

        Raises:
            ResolutionError: If ``strict`` and the directory cannot be read.
        """
        try:
            with os.scandir(directory) as it:
                entries = [(entry.name, _is_dir(entry)) for entry in it]
        except FileNotFoundError:
            return []
        except OSError as e:
            if strict:
                raise ResolutionError(directory, e) from e
            logger.warning("Skipping unreadable directory %s: %s", directory, e)
            return []

        return sorted(entries)


def _is_dir(entry: os.DirEntry[str]) -> bool:
    """Check if a directory entry can be descended into."""
    try:
        return entry.is_dir()
    except OSError:
        return False


def _stat_match(path: str) -> MatchedPath | None:
    """Build a MatchedPath from lstat, or None if the path vanished."""
    try:
        st = os.lstat(path)
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.debug("Cannot stat %s: %s", path, e)
        return MatchedPath(path=path, kind=TargetKind.FILE, mtime=None)

    kind = TargetKind.DIRECTORY if stat.S_ISDIR(st.st_mode) else TargetKind.FILE
    return MatchedPath(path=path, kind=kind, mtime=st.st_mtime)
