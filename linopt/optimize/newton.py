"""Newton-Raphson minimization with optional golden-ratio line search."""

from __future__ import annotations

from typing import Any

from ..matrix import Matrix, invert
from .core import DEFAULT_EPSILON, Function, OptimizeResult
from .gradient import GradientOptAlgorithm, _minimize


class NewtonRaphson(GradientOptAlgorithm):
    """Newton-Raphson iteration.

    Each step is ``H(x)^-1 grad f(x)`` with the Hessian inverted through LUP
    decomposition, so a singular Hessian raises
    :class:`~linopt.errors.SingularPivotError`. The returned point is always
    the last one that improved the objective.

    Example:
        >>> import numpy as np
        >>> from linopt.optimize import Function, NewtonRaphson
        >>> f = Function(
        ...     lambda x: (x[0] - 1) ** 2 + (x[1] - 2) ** 2,
        ...     grad=lambda x: np.array([2 * (x[0] - 1), 2 * (x[1] - 2)]),
        ...     hess=lambda x: 2 * np.eye(2),
        ... )
        >>> x = NewtonRaphson(initial_point=[0.0, 0.0], epsilon=1e-6).run(f)
        >>> [round(v, 4) for v in x.to_array().ravel()]
        [1.0, 2.0]
    """

    name = "newton_raphson"

    def compute_step(self, function: Function, point: Matrix) -> Matrix:
        hesse_inverse = invert(function.hesse(point))
        return hesse_inverse.multiply(function.gradient(point))


def newton_raphson(
    function: Any,
    x0: Any,
    epsilon: float = DEFAULT_EPSILON,
    use_line_search: bool = True,
    history: bool = False,
) -> OptimizeResult:
    """Newton-Raphson minimization of ``function`` from ``x0``.

    ``function`` may be a :class:`Function` or a plain objective callable,
    in which case derivatives are approximated by finite differences.
    """
    algorithm = NewtonRaphson(x0, epsilon, use_line_search=use_line_search)
    return _minimize(algorithm, function, history)


__all__ = ["NewtonRaphson", "newton_raphson"]
