"""Rewrite engine capabilities and the invocation boundary."""

from .interface import ASTOperation, RewriteEngine, UseCase
from .invoker import EngineInvoker

__all__ = ["ASTOperation", "EngineInvoker", "RewriteEngine", "UseCase"]
