"""Name-keyed construction of optimization algorithms from configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ..errors import UnknownAlgorithmError
from .core import DEFAULT_EPSILON, OptAlgorithm
from .gradient import GradientDescent
from .line_search import GoldenRatio
from .newton import NewtonRaphson

AlgorithmFactory = Callable[..., OptAlgorithm]


def normalize_name(name: str) -> str:
    """Map ``"GoldenRatio"``, ``"golden-ratio"`` and ``"golden_ratio"`` to one key."""
    snake = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name.strip())
    return re.sub(r"[\s\-]+", "_", snake).lower()


class AlgorithmRegistry:
    """Mapping from algorithm names to factories.

    Names are case-insensitive and CamelCase, kebab-case and snake_case
    spellings resolve to the same entry.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, AlgorithmFactory] = {}

    def register(self, name: str, factory: AlgorithmFactory) -> None:
        self._factories[normalize_name(name)] = factory

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: str) -> bool:
        return normalize_name(name) in self._factories

    def get_instance(self, name: str, **kwargs: Any) -> OptAlgorithm:
        """Create a new algorithm instance.

        Raises:
            UnknownAlgorithmError: If nothing is registered under ``name``.
        """
        key = normalize_name(name)
        if key not in self._factories:
            raise UnknownAlgorithmError(
                f"Unsupported algorithm name '{name}'. Supported names: {self.names()}"
            )
        return self._factories[key](**kwargs)


@dataclass(frozen=True)
class AlgorithmConfig:
    """
    Configuration for creating an optimization algorithm.

    Args:
        name: Registered algorithm name, e.g. "newton_raphson".
        initial_point: Starting point coordinates. Defaults to None, in which
            case it must be set on the instance before ``run``.
        epsilon: Convergence precision. Must be positive.
        options: Extra keyword arguments for the algorithm constructor, such
            as ``use_line_search`` or ``interval``.
    """

    name: str
    initial_point: Optional[Tuple[float, ...]] = None
    epsilon: float = DEFAULT_EPSILON
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.epsilon <= 0.0:
            raise ValueError("epsilon must be positive.")
        if self.initial_point is not None:
            object.__setattr__(
                self, "initial_point", tuple(float(v) for v in self.initial_point)
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AlgorithmConfig":
        """Build a config from a plain mapping; unknown keys become options."""
        if "name" not in data:
            raise ValueError("Algorithm configuration requires a 'name'.")
        values = dict(data)
        options = dict(values.pop("options", {}))
        name = values.pop("name")
        initial_point = values.pop("initial_point", None)
        epsilon = values.pop("epsilon", DEFAULT_EPSILON)
        options.update(values)
        return cls(name=name, initial_point=initial_point, epsilon=epsilon, options=options)


def build_default_registry() -> AlgorithmRegistry:
    """Registry with every algorithm shipped in :mod:`linopt.optimize`.

    Gradient-family algorithms look up their line search in the same
    registry they were created from.
    """
    registry = AlgorithmRegistry()
    registry.register(GoldenRatio.name, GoldenRatio)
    registry.register(
        NewtonRaphson.name,
        lambda **kwargs: NewtonRaphson(**{"registry": registry, **kwargs}),
    )
    registry.register(
        GradientDescent.name,
        lambda **kwargs: GradientDescent(**{"registry": registry, **kwargs}),
    )
    return registry


_default_registry: Optional[AlgorithmRegistry] = None


def default_registry() -> AlgorithmRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = build_default_registry()
    return _default_registry


def create_algorithm(
    config: AlgorithmConfig, registry: Optional[AlgorithmRegistry] = None
) -> OptAlgorithm:
    """
    Create a configured algorithm instance.

    Args:
        config: Algorithm configuration.
        registry: Registry to resolve ``config.name`` in; the default
            registry when None.

    Returns:
        A new algorithm with initial point and epsilon applied.

    Raises:
        UnknownAlgorithmError: If the name is not registered.
    """
    registry = registry or default_registry()
    kwargs = dict(config.options)
    kwargs["epsilon"] = config.epsilon
    if config.initial_point is not None:
        kwargs["initial_point"] = list(config.initial_point)
    return registry.get_instance(config.name, **kwargs)


__all__ = [
    "AlgorithmConfig",
    "AlgorithmFactory",
    "AlgorithmRegistry",
    "build_default_registry",
    "create_algorithm",
    "default_registry",
    "normalize_name",
]
