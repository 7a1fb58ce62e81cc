"""Exception hierarchy for the usecase runner.

Every stage of an invocation raises one of the specific errors below. The
pipeline wraps them in :class:`ExecutionFailure`, which is the only error a
build tool needs to catch.
"""

from __future__ import annotations

from typing import Optional


class UsecaseRunnerError(Exception):
    """Base class for all usecase runner errors."""


class ConfigurationError(UsecaseRunnerError):
    """The build manifest or runner settings are unusable."""


class ClasspathInjectionError(UsecaseRunnerError):
    """A resolved location could not be added to the class realm."""

    def __init__(self, location: str, reason: str) -> None:
        self.location = location
        self.reason = reason
        super().__init__(f"Cannot add [{location}] to the class realm: {reason}")


class StrategyResolutionError(UsecaseRunnerError):
    """A use case name could not be turned into a UseCase instance."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        super().__init__(message)


class StrategyNotFoundError(StrategyResolutionError):
    """The name does not resolve to anything importable."""

    def __init__(self, name: str, detail: str = "") -> None:
        message = f"Use case [{name}] could not be found"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(name, message)


class StrategyTypeError(StrategyResolutionError):
    """The name resolves, but not to a UseCase implementation."""

    def __init__(self, name: str, actual: str) -> None:
        self.actual = actual
        super().__init__(
            name,
            f"Class [{name}] must be of type usecase_runner.engine.interface.UseCase (got {actual})",
        )


class StrategyInstantiationError(StrategyResolutionError):
    """The UseCase class exists but cannot be constructed."""

    def __init__(self, name: str, detail: str) -> None:
        super().__init__(name, f"Unable to instantiate use case [{name}]: {detail}")


class EngineExecutionError(UsecaseRunnerError):
    """The rewrite engine raised while processing the source tree."""

    def __init__(self, source_root: str, usecase: str, cause: BaseException) -> None:
        self.source_root = source_root
        self.usecase = usecase
        super().__init__(
            f"Rewrite engine failed for use case [{usecase}] over [{source_root}]: {cause}"
        )


class ExecutionFailure(UsecaseRunnerError):
    """Build-level failure of a whole invocation.

    Carries the stage that failed; the originating error is chained as
    ``__cause__``.
    """

    def __init__(self, stage: str, message: str, cause: Optional[BaseException] = None) -> None:
        self.stage = stage
        self.message = message
        self.cause = cause
        super().__init__(f"[{stage}] {message}")
