"""Drop classpath entries that point into the project's own build output.

The build output directory is being regenerated by the same build, so
anything under it may be half-written or stale.
"""

from __future__ import annotations

from os import PathLike
from typing import Iterable, Union

PathEntry = Union[str, PathLike]


def partition(entries: Iterable[PathEntry], exclude_prefix: PathEntry) -> tuple[list[str], list[str]]:
    """Split entries into (kept, removed) by string prefix, preserving order."""
    prefix = str(exclude_prefix)
    kept: list[str] = []
    removed: list[str] = []
    for entry in entries:
        value = str(entry)
        if value.startswith(prefix):
            removed.append(value)
        else:
            kept.append(value)
    return kept, removed


def sanitize(entries: Iterable[PathEntry], exclude_prefix: PathEntry) -> list[str]:
    """Return the entries that do not start with ``exclude_prefix``."""
    kept, _ = partition(entries, exclude_prefix)
    return kept


def unique_entries(entries: Iterable[PathEntry]) -> list[str]:
    """String forms of ``entries`` with duplicates removed, first occurrence kept."""
    seen: set[str] = set()
    result: list[str] = []
    for entry in entries:
        value = str(entry)
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
