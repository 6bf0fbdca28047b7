"""Exception rules that spare matches from deletion.

Each rule picks exactly one match out of a non-empty match list. The
pick is deterministic: ties are always broken on the canonical path so
the same tree always spares the same file.
"""

import os

from cleanctl.core.errors import ConfigurationError
from cleanctl.filesystem.models import MatchedPath
from cleanctl.models.profile import ExceptionKind


def _path_key(match: MatchedPath) -> str:
    return os.path.normcase(match.path)


def _name_key(match: MatchedPath) -> tuple[str, str]:
    return (os.path.normcase(os.path.basename(match.path)), _path_key(match))


def _mtime_key(match: MatchedPath) -> tuple[float, str]:
    # Unreadable timestamps sort below every real one
    mtime = match.mtime if match.mtime is not None else float("-inf")
    return (mtime, _path_key(match))


def select_exclusions(matches: list[MatchedPath], kind: ExceptionKind) -> list[MatchedPath]:
    """Return the matches that an exception rule spares from deletion.

    Rules:
    - MOST_RECENT: the match with the greatest modification time. When
      several share that time, the lexicographically last path wins.
    - FIRST_ASCENDING: the match with the smallest file name, ties broken
      by the smallest path.
    - FIRST_DESCENDING: the match with the largest file name, ties broken
      by the largest path.

    Args:
        matches: Pattern matches to filter.
        kind: Exception rule to apply.

    Returns:
        A list holding exactly one match, or an empty list if ``matches``
        is empty.

    Raises:
        ConfigurationError: If ``kind`` is not a known rule.
    """
    if not matches:
        return []

    if kind == ExceptionKind.MOST_RECENT:
        spared = max(matches, key=_mtime_key)
    elif kind == ExceptionKind.FIRST_ASCENDING:
        spared = min(matches, key=_name_key)
    elif kind == ExceptionKind.FIRST_DESCENDING:
        spared = max(matches, key=_name_key)
    else:
        msg = f"Unknown exception rule: {kind!r}"
        raise ConfigurationError(msg)

    return [spared]


def apply_exception(
    matches: list[MatchedPath], kind: ExceptionKind | None
) -> tuple[list[MatchedPath], list[MatchedPath]]:
    """Split matches into those to delete and those spared.

    Args:
        matches: Pattern matches in expansion order.
        kind: Exception rule, or None to keep every match.

    Returns:
        Tuple of (kept, excluded), both preserving the input order.
    """
    if kind is None:
        return list(matches), []

    excluded = select_exclusions(matches, kind)
    excluded_paths = {m.path for m in excluded}
    kept = [m for m in matches if m.path not in excluded_paths]
    return kept, excluded
