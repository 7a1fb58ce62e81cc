"""Load and instantiate an operator-named UseCase."""

from __future__ import annotations

import inspect
from typing import Any, Optional

from ..classpath.realm import ClassRealm
from ..engine.interface import UseCase
from ..errors import StrategyInstantiationError, StrategyTypeError
from ..utils.logger import get_logger
from .registry import StrategyRegistry, load_named

logger = get_logger(__name__)


def required_parameters(func: Any) -> list[str]:
    """Names of parameters that must be supplied to call ``func``."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return []

    return [
        p.name
        for p in signature.parameters.values()
        if p.default is inspect.Parameter.empty
        and p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]


class StrategyLoader:
    """Resolves a use case name on a class realm and builds the instance.

    The realm must already hold the project's test-scoped dependencies,
    since the use case class may be defined there.
    """

    def __init__(self, realm: ClassRealm, registry: Optional[StrategyRegistry] = None) -> None:
        """Initialize the loader.

        Args:
            realm: Realm of the current invocation
            registry: Named use cases; when omitted, one is built by
                scanning the realm's entry points
        """
        self.realm = realm
        if registry is None:
            registry = StrategyRegistry(realm)
            registry.scan()
        self.registry = registry

    def load(self, name: str) -> UseCase:
        """Load and instantiate the use case called ``name``.

        Raises:
            StrategyNotFoundError: ``name`` resolves to nothing
            StrategyTypeError: ``name`` is not a UseCase class
            StrategyInstantiationError: the class cannot be constructed
        """
        logger.info(f"Loading use case {name}")
        target = load_named(self.realm, self.registry, name)

        if inspect.isclass(target):
            instance = self._instantiate_class(name, target)
        elif name in self.registry and callable(target):
            instance = self._call_factory(name, target)
        else:
            raise StrategyTypeError(name, type(target).__name__)

        logger.debug(f"Instantiated {type(instance).__module__}.{type(instance).__qualname__}")
        return instance

    def _instantiate_class(self, name: str, cls: type) -> UseCase:
        if not issubclass(cls, UseCase):
            raise StrategyTypeError(name, f"{cls.__module__}.{cls.__qualname__}")
        if inspect.isabstract(cls):
            missing = ", ".join(sorted(getattr(cls, "__abstractmethods__", ())))
            raise StrategyInstantiationError(name, f"class is abstract (missing {missing})")
        return self._construct(name, cls)

    def _call_factory(self, name: str, factory: Any) -> UseCase:
        instance = self._construct(name, factory)
        if not isinstance(instance, UseCase):
            raise StrategyTypeError(name, f"factory returned {type(instance).__name__}")
        return instance

    def _construct(self, name: str, func: Any) -> Any:
        required = required_parameters(func)
        if required:
            raise StrategyInstantiationError(
                name, f"constructor requires arguments: {', '.join(required)}"
            )

        with self.realm.activated():
            try:
                return func()
            except Exception as e:
                raise StrategyInstantiationError(
                    name, f"constructor raised {type(e).__name__}: {e}"
                ) from e
