"""Iterative minimization built on the dense matrix engine.

Example
-------
>>> import numpy as np
>>> from linopt.optimize import Function, newton_raphson
>>> f = Function(
...     lambda x: (x[0] - 1) ** 2 + (x[1] - 2) ** 2,
...     grad=lambda x: np.array([2 * (x[0] - 1), 2 * (x[1] - 2)]),
...     hess=lambda x: 2 * np.eye(2),
... )
>>> res = newton_raphson(f, [0.0, 0.0], epsilon=1e-6)
>>> round(res.fun, 6)
0.0
"""

from .core import (
    DEFAULT_EPSILON,
    Function,
    OptAlgorithm,
    OptimizeResult,
    State,
    is_diverging,
    l2_norm,
)
from .gradient import GradientDescent, GradientOptAlgorithm, gradient_descent
from .line_search import GOLDEN_K, GoldenRatio, golden_section, unimodal_interval
from .newton import NewtonRaphson, newton_raphson
from .registry import (
    AlgorithmConfig,
    AlgorithmRegistry,
    build_default_registry,
    create_algorithm,
    default_registry,
)
from .utils import approx_gradient, approx_hessian

__all__ = [
    "AlgorithmConfig",
    "AlgorithmRegistry",
    "DEFAULT_EPSILON",
    "Function",
    "GOLDEN_K",
    "GoldenRatio",
    "GradientDescent",
    "GradientOptAlgorithm",
    "NewtonRaphson",
    "OptAlgorithm",
    "OptimizeResult",
    "State",
    "approx_gradient",
    "approx_hessian",
    "build_default_registry",
    "create_algorithm",
    "default_registry",
    "golden_section",
    "gradient_descent",
    "is_diverging",
    "l2_norm",
    "newton_raphson",
    "unimodal_interval",
]
