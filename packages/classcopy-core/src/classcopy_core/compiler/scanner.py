"""Ant-style directory scanning.

Patterns use ``/`` as separator on every platform:
- ``**`` matches zero or more directories
- ``*`` matches any characters within one path segment
- ``?`` matches exactly one character within a segment
- a pattern ending in ``/`` matches everything below that directory
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from functools import lru_cache
from pathlib import Path
import re

DEFAULT_INCLUDES: tuple[str, ...] = ("**/**",)


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate an Ant-style pattern into a compiled regular expression.

    Args:
        pattern: Pattern such as ``**/*.class`` or ``com/acme/``.

    Returns:
        Regular expression to use with ``fullmatch`` on POSIX relative paths.
    """
    pattern = pattern.replace("\\", "/").lstrip("/")
    if pattern.endswith("/"):
        pattern += "**"

    segments = pattern.split("/")
    regex: list[str] = []
    for position, segment in enumerate(segments):
        last = position == len(segments) - 1
        if segment == "**":
            regex.append(".*" if last else "(?:[^/]+/)*")
            continue
        for char in segment:
            if char == "*":
                regex.append("[^/]*")
            elif char == "?":
                regex.append("[^/]")
            else:
                regex.append(re.escape(char))
        if not last:
            regex.append("/")

    return re.compile("".join(regex))


def match_path(pattern: str, relative_path: str) -> bool:
    """Check whether a POSIX relative path matches an Ant-style pattern."""
    return compile_pattern(pattern).fullmatch(relative_path) is not None


def _matches_any(patterns: Iterable[str], relative_path: str) -> bool:
    return any(match_path(p, relative_path) for p in patterns)


def scan_directory(
    base_dir: Path | str,
    includes: Sequence[str] = DEFAULT_INCLUDES,
    excludes: Sequence[str] = (),
) -> list[str]:
    """List regular files below base_dir selected by include/exclude patterns.

    Args:
        base_dir: Directory to scan.
        includes: Include patterns. Empty means everything.
        excludes: Exclude patterns, applied after includes.

    Returns:
        Sorted POSIX paths relative to base_dir.

    Raises:
        FileNotFoundError: If base_dir does not exist or is not a directory.

    Example:
        >>> scan_directory("build/classes", includes=["**/*.class"])
        ['a/B.class', 'a/C.class']
    """
    base = Path(base_dir)
    if not base.is_dir():
        raise FileNotFoundError(f"Directory not found: {base}")

    include_patterns = list(includes) or list(DEFAULT_INCLUDES)
    selected: list[str] = []
    for candidate in base.rglob("*"):
        if not candidate.is_file():
            continue
        relative = candidate.relative_to(base).as_posix()
        if not _matches_any(include_patterns, relative):
            continue
        if _matches_any(excludes, relative):
            continue
        selected.append(relative)

    return sorted(selected)
