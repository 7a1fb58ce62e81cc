"""Boundary to the external rewrite engine."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Union

from ..errors import EngineExecutionError
from ..utils.logger import get_logger
from .interface import RewriteEngine, UseCase

logger = get_logger(__name__)

EngineLike = Union[RewriteEngine, Callable[[str, UseCase], None]]


class EngineInvoker:
    """Runs the rewrite engine exactly once over a source root."""

    def __init__(self, engine: EngineLike) -> None:
        """Initialize the invoker.

        Args:
            engine: Object with ``run(source_root, use_case)`` or a callable
                with the same signature
        """
        self.engine = engine

    def invoke(self, source_root: Path, use_case: UseCase, usecase_name: str = "") -> None:
        """Run the engine synchronously.

        Args:
            source_root: Root directory of the sources to rewrite
            use_case: The (augmented) use case to hand to the engine
            usecase_name: Name reported in errors; defaults to the class name

        Raises:
            EngineExecutionError: wrapping whatever the engine raised
        """
        root = str(Path(source_root).resolve())
        name = usecase_name or _describe(use_case)
        run = self.engine.run if isinstance(self.engine, RewriteEngine) else self.engine

        logger.info(f"Running rewrite engine over {root} with {name}")
        try:
            run(root, use_case)
        except Exception as e:
            raise EngineExecutionError(root, name, e) from e
        logger.info(f"Rewrite engine finished for {name}")


def _describe(use_case: UseCase) -> str:
    base = getattr(use_case, "base", use_case)
    cls = type(base)
    return f"{cls.__module__}.{cls.__qualname__}"
