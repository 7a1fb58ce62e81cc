"""Capabilities consumed from the rewrite engine.

``UseCase`` is what operators implement and name on the command line.
``RewriteEngine`` is what the engine exposes; this package never looks
inside either beyond these methods.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class ASTOperation(Protocol):
    """A single rewrite operation understood by the engine."""

    def run(self, *args: Any, **kwargs: Any) -> Any:
        ...


class UseCase(ABC):
    """A refactoring use case: what to rewrite, where, and with what classpath."""

    @abstractmethod
    def operations(self) -> set:
        """The rewrite operations to apply."""

    def prefiltering_predicate(self) -> Callable[[str], bool]:
        """Predicate over file paths; files it rejects are never parsed."""
        return lambda path: True

    def additional_classpath_entries(self) -> set[str]:
        """Extra locations the engine needs to resolve symbols."""
        return set()


@runtime_checkable
class RewriteEngine(Protocol):
    """Entry point of an external rewrite engine."""

    def run(self, source_root: str, use_case: UseCase) -> None:
        ...
