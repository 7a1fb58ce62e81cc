"""Runs one use case invocation over a project.

Coordinates the stages in a fixed order:
1. Inject test-scoped dependencies into the class realm
2. Resolve the classpath the engine should see
3. Sanitize it against the project's build output directory
4. Load the operator-named use case
5. Augment it with the sanitized classpath
6. Invoke the rewrite engine

Any stage failure ends the invocation with ``ExecutionFailure``; nothing is
retried or rolled back.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from .classpath import (
    ArtifactClasspathResolver,
    ClassRealm,
    RuntimeClasspathInjector,
    partition,
    unique_entries,
)
from .engine import EngineInvoker, UseCase
from .engine.invoker import EngineLike
from .errors import ConfigurationError, ExecutionFailure
from .models import BuildContext, InvocationResult, Stage
from .strategy import ENGINE_GROUP, StrategyLoader, StrategyRegistry, augment, load_named
from .utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class RefactorInvocation:
    """A single run of a use case over one project.

    The class realm is created here and lives as long as the invocation;
    pass ``realm`` to share one between invocations (entries accumulate).
    """

    context: BuildContext
    engine: Optional[EngineLike] = None
    realm: Optional[ClassRealm] = None
    registry: Optional[StrategyRegistry] = None
    resolver: ArtifactClasspathResolver = field(default_factory=ArtifactClasspathResolver)
    on_progress: Optional[Callable[[str, int, int], None]] = None

    def __post_init__(self) -> None:
        """Initialize components."""
        if self.realm is None:
            self.realm = ClassRealm(name=f"usecase-runner:{self.context.source_directory.name}")
        self.injector = RuntimeClasspathInjector(self.realm)

        self.stage = Stage.START
        self._current_step = 0
        self._total_steps = 6

    def _emit_progress(self, message: str) -> None:
        """Emit progress update."""
        self._current_step += 1
        if self.on_progress:
            self.on_progress(message, self._current_step, self._total_steps)
        logger.info(f"[{self._current_step}/{self._total_steps}] {message}")

    @contextmanager
    def _stage(self, stage: Stage, description: str, failure: str) -> Iterator[None]:
        """Run a block as ``stage``; any exception becomes ExecutionFailure."""
        self.stage = stage
        self._emit_progress(description)
        try:
            yield
        except ExecutionFailure:
            self.stage = Stage.FAILED
            raise
        except Exception as e:
            self.stage = Stage.FAILED
            logger.error(f"{failure}: {e}")
            raise ExecutionFailure(stage.value, f"{failure}: {e}", e) from e

    def execute(self) -> InvocationResult:
        """Run the invocation.

        Returns:
            InvocationResult describing what was done

        Raises:
            ExecutionFailure: if any stage fails
        """
        ctx = self.context
        if ctx.skip:
            logger.info("Skipping use case run (skip flag is set)")
            self.stage = Stage.DONE
            return InvocationResult(skipped=True, stage=Stage.DONE, usecase=ctx.usecase)

        if not ctx.usecase:
            self.stage = Stage.FAILED
            error = ConfigurationError("No use case configured (set 'usecase' or USECASE_RUNNER_USECASE)")
            raise ExecutionFailure(Stage.START.value, str(error), error) from error

        with self._stage(
            Stage.INJECT_CLASSPATH,
            "Adding test-scoped dependencies to the class realm...",
            f"Unable to augment class realm with {ctx.scope.value}-scoped dependencies",
        ):
            locations = self.resolver.resolve(ctx.artifacts, ctx.scope)
            injected = self.injector.inject(locations)

        with self._stage(
            Stage.RESOLVE_ARTIFACTS,
            "Resolving classpath...",
            "Unable to resolve the classpath for the project",
        ):
            candidates = unique_entries([*locations, *ctx.classpath_elements])

        with self._stage(Stage.SANITIZE, "Sanitizing classpath...", "Unable to sanitize the classpath"):
            classpath, removed = partition(candidates, ctx.build_directory)
            if removed:
                logger.info(f"Removed {len(removed)} entries under {ctx.build_directory}")

        with self._stage(
            Stage.LOAD_STRATEGY,
            f"Loading use case {ctx.usecase}...",
            f"Unable to instantiate use case [{ctx.usecase}]",
        ):
            base = StrategyLoader(self.realm, self.registry).load(ctx.usecase)

        with self._stage(Stage.AUGMENT, "Augmenting use case...", "Unable to augment use case"):
            use_case = augment(base, classpath)

        with self._stage(
            Stage.INVOKE_ENGINE,
            "Running rewrite engine...",
            f"Rewrite engine failed for use case [{ctx.usecase}]",
        ):
            self._invoke(use_case)

        self.stage = Stage.DONE
        return InvocationResult(
            skipped=False,
            stage=Stage.DONE,
            usecase=ctx.usecase,
            injected=injected,
            classpath=classpath,
            removed=removed,
        )

    def _invoke(self, use_case: UseCase) -> None:
        engine = self._resolve_engine()
        with self.realm.activated():
            EngineInvoker(engine).invoke(self.context.source_directory, use_case, self.context.usecase)

    def _resolve_engine(self) -> EngineLike:
        if self.engine is not None:
            return self.engine
        if not self.context.engine:
            raise ConfigurationError("No rewrite engine configured (set 'engine' or USECASE_RUNNER_ENGINE)")

        registry = StrategyRegistry(self.realm, group=ENGINE_GROUP)
        registry.scan()
        engine = load_named(self.realm, registry, self.context.engine)
        if isinstance(engine, type):
            engine = engine()
        return engine


def run_invocation(context: BuildContext, engine: Optional[EngineLike] = None) -> InvocationResult:
    """Run one invocation with default components."""
    return RefactorInvocation(context=context, engine=engine).execute()
