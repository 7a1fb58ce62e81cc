"""Field-override decorator for UseCase."""

from __future__ import annotations

from typing import Callable, Iterable

from ..engine.interface import UseCase


class AugmentedUseCase(UseCase):
    """A UseCase that forwards to ``base`` but reports its own classpath entries.

    The build tool knows the full classpath the sources need; the use case
    author does not. Operations and the prefiltering predicate come from
    ``base`` unchanged. The base object is never modified.
    """

    def __init__(self, base: UseCase, classpath_entries: Iterable[str]) -> None:
        self.base = base
        self._classpath_entries = frozenset(classpath_entries)

    def operations(self) -> set:
        return self.base.operations()

    def prefiltering_predicate(self) -> Callable[[str], bool]:
        return self.base.prefiltering_predicate()

    def additional_classpath_entries(self) -> set[str]:
        return set(self._classpath_entries)

    def __repr__(self) -> str:
        return f"AugmentedUseCase(base={self.base!r}, classpath_entries={len(self._classpath_entries)})"


def augment(base: UseCase, classpath_entries: Iterable[str]) -> AugmentedUseCase:
    """Wrap ``base`` so it reports exactly ``classpath_entries``."""
    return AugmentedUseCase(base, classpath_entries)
