"""Shared data models for the usecase runner.

The build tool hands over an already-resolved artifact graph; these types
describe that input and the outcome of one invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class Scope(Enum):
    """Dependency scope of a resolved artifact."""
    COMPILE = "compile"
    PROVIDED = "provided"
    RUNTIME = "runtime"
    TEST = "test"
    SYSTEM = "system"
    IMPORT = "import"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional[Scope]:
        """Return the matching scope, or None when the value is unset or unknown."""
        if not value:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class Stage(Enum):
    """Stages of a single invocation, in execution order."""
    START = "start"
    INJECT_CLASSPATH = "inject_classpath"
    RESOLVE_ARTIFACTS = "resolve_artifacts"
    SANITIZE = "sanitize"
    LOAD_STRATEGY = "load_strategy"
    AUGMENT = "augment"
    INVOKE_ENGINE = "invoke_engine"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class Artifact:
    """A resolved dependency as reported by the build tool."""

    coordinates: str
    scope: Optional[str] = None
    location: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: dict, base_dir: Optional[Path] = None) -> Artifact:
        """Create an Artifact from a manifest entry.

        Relative locations are resolved against ``base_dir``.
        """
        location = data.get("location")
        path = None
        if location:
            path = Path(location)
            if base_dir is not None and not path.is_absolute():
                path = base_dir / path

        return cls(
            coordinates=str(data.get("coordinates", "")),
            scope=data.get("scope"),
            location=path,
        )


@dataclass
class BuildContext:
    """Everything the build tool supplies for one invocation."""

    source_directory: Path
    build_directory: Path
    usecase: Optional[str] = None
    engine: Optional[str] = None
    artifacts: list[Artifact] = field(default_factory=list)
    classpath_elements: list[Path] = field(default_factory=list)
    scope: Scope = Scope.TEST
    skip: bool = False


@dataclass
class InvocationResult:
    """Outcome of a completed invocation."""

    skipped: bool
    stage: Stage
    usecase: Optional[str] = None
    injected: list[str] = field(default_factory=list)
    classpath: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when the pipeline reached DONE."""
        return self.stage is Stage.DONE
