"""Import realm for project-owned types.

A ``ClassRealm`` is the set of locations (directories or zip archives) that
use case and engine code is imported from. It is created once per
invocation and passed explicitly to whatever needs to import through it;
``sys.path`` only sees its entries while the realm is activated.
"""

from __future__ import annotations

import importlib
import sys
import threading
import zipfile
from contextlib import contextmanager
from importlib import metadata
from os import PathLike
from pathlib import Path
from types import ModuleType
from typing import Iterable, Iterator, Union

from ..errors import ClasspathInjectionError
from ..utils.logger import get_logger

logger = get_logger(__name__)

# sys.path is process-wide; activations from concurrent invocations take turns.
_activation_lock = threading.RLock()


def to_path_entry(location: Union[str, PathLike]) -> str:
    """Convert a location into an importable ``sys.path`` entry.

    A location that is not on disk is accepted as is; it simply contributes
    nothing to imports until it exists.

    Raises:
        ClasspathInjectionError: if the location cannot be resolved, or is a
            file that is not a zip archive
    """
    try:
        path = Path(location).expanduser().resolve(strict=False)
    except (OSError, RuntimeError) as e:
        raise ClasspathInjectionError(str(location), f"cannot resolve path ({e})") from e

    if path.is_file() and not zipfile.is_zipfile(path):
        raise ClasspathInjectionError(str(location), "not a directory or zip archive")

    return str(path)


def _restore_path(saved: list[str], prefix: list[str], current: list[str]) -> list[str]:
    """Drop the realm prefix from ``current`` and put ``saved`` back in order.

    Paths added while the realm was active are kept: those inserted ahead
    of the original entries go first, the rest go last. Original entries
    removed while active stay removed.
    """
    realm_only = set(prefix) - set(saved)
    added = [p for p in current if p not in saved and p not in realm_only]
    first_original = next(
        (i for i, p in enumerate(current) if p in saved and p not in prefix), len(current)
    )
    front = [p for p in added if current.index(p) < first_original]
    back = [p for p in added if p not in front]
    return front + [p for p in saved if p in current] + back


class ClassRealm:
    """Ordered, append-only set of import locations."""

    def __init__(self, name: str = "usecase-runner") -> None:
        self.name = name
        self._entries: list[str] = []
        self._lock = threading.Lock()

    @property
    def entries(self) -> list[str]:
        """Current entries, in insertion order."""
        return list(self._entries)

    def add(self, location: Union[str, PathLike]) -> bool:
        """Add a location to the realm.

        Returns:
            False if the location was already present
        """
        entry = to_path_entry(location)
        with self._lock:
            if entry in self._entries:
                return False
            self._entries.append(entry)
        return True

    @contextmanager
    def activated(self) -> Iterator[ClassRealm]:
        """Put the realm's entries at the front of ``sys.path`` for the block.

        Entries already on ``sys.path`` are moved ahead of everything else.
        On exit the original order comes back; paths added by the block stay.
        """
        with _activation_lock:
            saved = list(sys.path)
            prefix = self.entries
            sys.path[:] = prefix + [p for p in saved if p not in prefix]
            importlib.invalidate_caches()
            try:
                yield self
            finally:
                sys.path[:] = _restore_path(saved, prefix, list(sys.path))

    def import_module(self, name: str) -> ModuleType:
        """Import a module with the realm activated."""
        with self.activated():
            return importlib.import_module(name)

    def entry_points(self, group: str) -> list[metadata.EntryPoint]:
        """Entry points of ``group`` declared by distributions on the realm's entries."""
        found: list[metadata.EntryPoint] = []
        if not self._entries:
            return found

        for dist in metadata.distributions(path=self.entries):
            found.extend(ep for ep in dist.entry_points if ep.group == group)
        return found


class RuntimeClasspathInjector:
    """Adds resolved dependency locations to a class realm."""

    def __init__(self, realm: ClassRealm) -> None:
        """Initialize the injector.

        Args:
            realm: Realm of the current invocation
        """
        self.realm = realm

    def inject(self, locations: Iterable[Union[str, PathLike]]) -> list[str]:
        """Add each location to the realm, in order.

        Args:
            locations: Resolved dependency locations

        Returns:
            The realm entries newly added by this call

        Raises:
            ClasspathInjectionError: on the first location that cannot be added
        """
        added: list[str] = []
        for location in locations:
            entry = to_path_entry(location)
            if self.realm.add(entry):
                added.append(entry)
            else:
                logger.debug(f"Already in realm '{self.realm.name}': {location}")

        logger.info(f"Added {len(added)} locations to realm '{self.realm.name}'")
        return added
