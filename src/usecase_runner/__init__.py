"""usecase-runner: run rewrite use cases against a project's own dependencies."""

__version__ = "1.0.0"

from .engine import ASTOperation, EngineInvoker, RewriteEngine, UseCase
from .errors import (
    ClasspathInjectionError,
    ConfigurationError,
    EngineExecutionError,
    ExecutionFailure,
    StrategyInstantiationError,
    StrategyNotFoundError,
    StrategyResolutionError,
    StrategyTypeError,
    UsecaseRunnerError,
)
from .models import Artifact, BuildContext, InvocationResult, Scope, Stage
from .orchestrator import RefactorInvocation, run_invocation

__all__ = [
    "ASTOperation",
    "Artifact",
    "BuildContext",
    "ClasspathInjectionError",
    "ConfigurationError",
    "EngineExecutionError",
    "EngineInvoker",
    "ExecutionFailure",
    "InvocationResult",
    "RefactorInvocation",
    "RewriteEngine",
    "Scope",
    "Stage",
    "StrategyInstantiationError",
    "StrategyNotFoundError",
    "StrategyResolutionError",
    "StrategyTypeError",
    "UseCase",
    "UsecaseRunnerError",
    "run_invocation",
]
