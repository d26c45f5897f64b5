"""Tests for the algorithm registry and configuration."""

from __future__ import annotations

import numpy as np
import pytest

from linopt.errors import UnknownAlgorithmError
from linopt.optimize import (
    AlgorithmConfig,
    AlgorithmRegistry,
    Function,
    GoldenRatio,
    GradientDescent,
    NewtonRaphson,
    create_algorithm,
    default_registry,
)
from linopt.optimize.registry import normalize_name


@pytest.mark.parametrize(
    "name, key",
    [
        ("GoldenRatio", "golden_ratio"),
        ("golden-ratio", "golden_ratio"),
        ("  NewtonRaphson ", "newton_raphson"),
        ("gradient descent", "gradient_descent"),
    ],
)
def test_normalize_name(name: str, key: str) -> None:
    assert normalize_name(name) == key


def test_default_registry_contents() -> None:
    registry = default_registry()
    assert registry is default_registry()
    assert registry.names() == ["golden_ratio", "gradient_descent", "newton_raphson"]
    assert "GoldenRatio" in registry


def test_get_instance_returns_fresh_objects() -> None:
    registry = default_registry()
    first = registry.get_instance("GoldenRatio", epsilon=1e-4)
    second = registry.get_instance("golden_ratio")
    assert isinstance(first, GoldenRatio)
    assert first is not second
    assert first.epsilon == 1e-4


def test_unknown_name_raises() -> None:
    with pytest.raises(UnknownAlgorithmError, match="Unsupported algorithm name"):
        default_registry().get_instance("simplex")
    with pytest.raises(KeyError):
        AlgorithmRegistry().get_instance("golden_ratio")


def test_register_custom_factory() -> None:
    registry = AlgorithmRegistry()
    registry.register("CoarseGolden", lambda **kw: GoldenRatio(**{"epsilon": 0.1, **kw}))
    algorithm = registry.get_instance("coarse_golden")
    assert algorithm.epsilon == 0.1


def test_create_newton_from_config() -> None:
    config = AlgorithmConfig(name="NewtonRaphson", initial_point=(0, 0), epsilon=1e-7)
    algorithm = create_algorithm(config)
    assert isinstance(algorithm, NewtonRaphson)
    assert algorithm.epsilon == 1e-7
    assert np.allclose(algorithm.initial_point, [[0.0], [0.0]])
    assert algorithm.registry is default_registry()


def test_create_from_mapping_routes_options() -> None:
    config = AlgorithmConfig.from_mapping(
        {"name": "gradient_descent", "initial_point": [1, 2], "use_line_search": False}
    )
    assert config.initial_point == (1.0, 2.0)
    assert config.options == {"use_line_search": False}
    algorithm = create_algorithm(config)
    assert isinstance(algorithm, GradientDescent)
    assert not algorithm.use_line_search


def test_create_golden_ratio_with_interval() -> None:
    config = AlgorithmConfig.from_mapping(
        {"name": "GoldenRatio", "epsilon": 1e-3, "options": {"interval": (0.0, 2.0)}}
    )
    algorithm = create_algorithm(config)
    assert algorithm.interval == (0.0, 2.0)


def test_config_validation() -> None:
    with pytest.raises(ValueError, match="epsilon"):
        AlgorithmConfig(name="golden_ratio", epsilon=0.0)
    with pytest.raises(ValueError, match="name"):
        AlgorithmConfig.from_mapping({"epsilon": 1e-3})


def test_newton_looks_up_line_search_in_its_registry() -> None:
    registry = AlgorithmRegistry()
    created = []

    def golden_factory(**kwargs):
        instance = GoldenRatio(**kwargs)
        created.append(instance)
        return instance

    registry.register("golden_ratio", golden_factory)
    registry.register("newton_raphson", lambda **kw: NewtonRaphson(registry=registry, **kw))
    config = AlgorithmConfig(name="newton_raphson", initial_point=(3.0,), epsilon=1e-6)
    algorithm = create_algorithm(config, registry)
    x = algorithm.run(
        Function(
            lambda v: float((v[0] + 1) ** 2),
            grad=lambda v: 2 * (v + 1),
            hess=lambda _: np.array([[2.0]]),
        )
    )
    assert len(created) == 1
    assert created[0].epsilon == 1e-6
    assert x.get(0, 0) == pytest.approx(-1.0, abs=1e-5)
