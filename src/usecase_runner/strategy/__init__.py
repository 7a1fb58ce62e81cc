"""Use case loading and augmentation."""

from .augment import AugmentedUseCase, augment
from .loader import StrategyLoader, required_parameters
from .registry import (
    ENGINE_GROUP,
    STRATEGY_GROUP,
    RegistryEntry,
    StrategyRegistry,
    import_qualified,
    load_named,
)

__all__ = [
    "AugmentedUseCase",
    "ENGINE_GROUP",
    "RegistryEntry",
    "STRATEGY_GROUP",
    "StrategyLoader",
    "StrategyRegistry",
    "augment",
    "import_qualified",
    "load_named",
    "required_parameters",
]
