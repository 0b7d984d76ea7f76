"""
Strategy Factory Module - Name-based registry of path search strategies.

Strategies register themselves at import time with @register_strategy;
callers pick one by name (CLI flag, settings file) through
create_strategy().
"""

from typing import Dict, List, Optional, Type

from .base import SolverStrategy


_STRATEGIES: Dict[str, Type[SolverStrategy]] = {}

DEFAULT_STRATEGY = "ordered"


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Class decorator adding a strategy to the registry under cls.name.

    Usage:
        @register_strategy
        class ReverseStrategy(DepthFirstStrategy):
            name = "reverse"

    Raises:
        ValueError: If a different class already uses the name
    """
    existing = _STRATEGIES.get(cls.name)
    if existing is not None and existing is not cls:
        raise ValueError(f"Strategy name '{cls.name}' already registered by {existing.__name__}")
    _STRATEGIES[cls.name] = cls
    return cls


def resolve_strategy_name(name: Optional[str] = None) -> str:
    """
    Validate a strategy name, substituting the default for None or "".

    Raises:
        ValueError: If the name is not registered
    """
    name = name or get_default_strategy_name()
    if name not in _STRATEGIES:
        available = ", ".join(_STRATEGIES)
        raise ValueError(f"Unknown strategy: {name}. Available: {available}")
    return name


def create_strategy(name: Optional[str] = None) -> SolverStrategy:
    """
    Instantiate a registered strategy.

    Strategies hold no per-search state, so a fresh instance per solve
    is cheap and never shared between threads.

    Args:
        name: Strategy name ("ordered", "unordered"); None for the default

    Raises:
        ValueError: If the name is not registered
    """
    return _STRATEGIES[resolve_strategy_name(name)]()


def get_strategy_names() -> List[str]:
    """Registered names in registration order."""
    return list(_STRATEGIES)


def get_strategy_info() -> List[Dict[str, str]]:
    """Name and description of every registered strategy, for --help output."""
    return [{"name": name, "description": cls.description} for name, cls in _STRATEGIES.items()]


def get_default_strategy_name() -> str:
    """
    Name used when none is given.

    "ordered" when registered, otherwise the first registered strategy.
    """
    if DEFAULT_STRATEGY in _STRATEGIES:
        return DEFAULT_STRATEGY
    return next(iter(_STRATEGIES), "")
