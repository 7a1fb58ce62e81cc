"""Name lookup for plugins living on a class realm.

Names are resolved in two ways: entry points (or programmatic
registrations) known to a ``StrategyRegistry``, and plain qualified names
(``pkg.module.Class`` or ``pkg.module:Class``) imported through the realm.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..classpath.realm import ClassRealm
from ..errors import StrategyInstantiationError, StrategyNotFoundError
from ..utils.logger import get_logger

logger = get_logger(__name__)

STRATEGY_GROUP = "usecase_runner.strategies"
ENGINE_GROUP = "usecase_runner.engines"


@dataclass(frozen=True)
class RegistryEntry:
    """A named plugin and how to load it."""

    name: str
    target: str
    load: Callable[[], Any]


class StrategyRegistry:
    """Maps plugin names to loaders, populated from a realm's entry points."""

    def __init__(self, realm: ClassRealm, group: str = STRATEGY_GROUP) -> None:
        """Initialize the registry.

        Args:
            realm: Realm whose locations are scanned and imported from
            group: Entry point group to scan
        """
        self.realm = realm
        self.group = group
        self._entries: dict[str, RegistryEntry] = {}

    def register(self, name: str, load: Callable[[], Any], target: str = "") -> None:
        """Register a loader under ``name``. Earlier registrations win."""
        if name in self._entries:
            logger.warning(f"Duplicate {self.group} name '{name}' ignored ({target or load!r})")
            return
        self._entries[name] = RegistryEntry(name=name, target=target or repr(load), load=load)

    def scan(self) -> list[str]:
        """Register every entry point of the group found on the realm.

        Returns:
            Names registered by this scan
        """
        added = []
        for ep in self.realm.entry_points(self.group):
            if ep.name in self._entries:
                continue
            self.register(ep.name, ep.load, target=ep.value)
            added.append(ep.name)

        if added:
            logger.debug(f"Found {len(added)} {self.group} entry points: {', '.join(added)}")
        return added

    def names(self) -> list[str]:
        """Registered names, sorted."""
        return sorted(self._entries)

    def get(self, name: str) -> Optional[RegistryEntry]:
        """Return the entry registered under ``name``, if any."""
        return self._entries.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._entries


def _is_missing(exc: ModuleNotFoundError, module: str) -> bool:
    """True when ``exc`` is about ``module`` itself (or a parent package)."""
    missing = exc.name or ""
    return module == missing or module.startswith(missing + ".")


def _get_attribute_path(obj: Any, path: list[str]) -> Any:
    for attr in path:
        obj = getattr(obj, attr)
    return obj


def import_qualified(realm: ClassRealm, name: str) -> Any:
    """Import the object named by a qualified name through ``realm``.

    Accepts ``pkg.module:Attr.Path`` and ``pkg.module.Attr``; for the dotted
    form the longest importable module prefix wins.

    Raises:
        StrategyNotFoundError: nothing importable has that name
        StrategyInstantiationError: the module exists but importing it raised
    """
    if ":" in name:
        module_name, _, attr_path = name.partition(":")
        candidates = [(module_name, attr_path.split(".") if attr_path else [])]
    else:
        parts = name.split(".")
        candidates = [(".".join(parts[:i]), parts[i:]) for i in range(len(parts) - 1, 0, -1)]

    if not candidates or not all(candidates[0]):
        raise StrategyNotFoundError(name, "expected a qualified name such as 'package.module.ClassName'")

    for module_name, attr_path in candidates:
        try:
            module = realm.import_module(module_name)
        except ModuleNotFoundError as e:
            if _is_missing(e, module_name):
                continue
            raise StrategyInstantiationError(name, f"importing '{module_name}' failed: {e}") from e
        except Exception as e:
            raise StrategyInstantiationError(name, f"importing '{module_name}' raised {type(e).__name__}: {e}") from e

        try:
            return _get_attribute_path(module, attr_path)
        except AttributeError as e:
            raise StrategyNotFoundError(name, f"module '{module_name}' has no attribute '{'.'.join(attr_path)}'") from e

    raise StrategyNotFoundError(name, "no such module on the class realm")


def load_named(realm: ClassRealm, registry: Optional[StrategyRegistry], name: str) -> Any:
    """Resolve ``name`` via ``registry`` first, then as a qualified name."""
    entry = registry.get(name) if registry is not None else None
    if entry is None:
        return import_qualified(realm, name)

    with realm.activated():
        try:
            return entry.load()
        except ModuleNotFoundError as e:
            raise StrategyNotFoundError(name, f"registered target '{entry.target}' is missing: {e}") from e
        except AttributeError as e:
            raise StrategyNotFoundError(name, f"registered target '{entry.target}' is missing: {e}") from e
        except Exception as e:
            raise StrategyInstantiationError(name, f"loading '{entry.target}' raised {type(e).__name__}: {e}") from e
