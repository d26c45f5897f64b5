"""Derivative-free one-dimensional minimization by golden-section search.

:func:`unimodal_interval` brackets a minimum around a starting point by
geometric expansion; :func:`golden_section` then shrinks the bracket by the
golden ratio. :class:`GoldenRatio` packages both as an
:class:`~linopt.optimize.core.OptAlgorithm` so it can be served by the
algorithm registry and used as an exact line search.
"""

from __future__ import annotations

import math
from typing import Callable, Optional

from ..logging import get_logger
from ..matrix import Matrix
from .core import DEFAULT_EPSILON, Function, OptAlgorithm, State, as_vector

logger = get_logger(__name__)

GOLDEN_K = 0.5 * (math.sqrt(5.0) - 1.0)

ScalarFunction = Callable[[float], float]


def unimodal_interval(f: ScalarFunction, x0: float, h: float = 1.0) -> tuple[float, float]:
    """Find ``[left, right]`` containing a local minimum of ``f`` near ``x0``.

    Starts from ``[x0 - h, x0 + h]``. If ``f(x0)`` is not already below both
    ends, walks in the direction of decrease with doubling steps
    ``x0 +/- h * 2^k`` until the function stops decreasing.
    """
    if h <= 0:
        raise ValueError("h must be positive")
    left, mid, right = x0 - h, x0, x0 + h
    fl, fm, fr = f(left), f(mid), f(right)
    step = 1

    if fm < fl and fm < fr:
        return left, right

    if fm > fr:
        while True:
            left, mid, fm = mid, right, fr
            step *= 2
            right = x0 + h * step
            fr = f(right)
            if not fm > fr:
                break
    else:
        while True:
            right, mid, fm = mid, left, fl
            step *= 2
            left = x0 - h * step
            fl = f(left)
            if not fm > fl:
                break
    return left, right


def golden_section(
    f: ScalarFunction, left: float, right: float, epsilon: float = DEFAULT_EPSILON
) -> tuple[float, int]:
    """Narrow ``[left, right]`` until it is at most ``epsilon`` wide.

    Returns:
        Tuple ``(x_min, nit)`` with the midpoint of the final interval and the
        number of narrowing iterations.
    """
    if epsilon <= 0:
        raise ValueError("epsilon must be positive")
    a, b = (left, right) if left <= right else (right, left)
    c = b - GOLDEN_K * (b - a)
    d = a + GOLDEN_K * (b - a)
    fc, fd = f(c), f(d)
    nit = 0
    while b - a > epsilon:
        if fc < fd:
            b, d, fd = d, c, fc
            c = b - GOLDEN_K * (b - a)
            fc = f(c)
        else:
            a, c, fc = c, d, fd
            d = a + GOLDEN_K * (b - a)
            fd = f(d)
        nit += 1
    return 0.5 * (a + b), nit


class GoldenRatio(OptAlgorithm):
    """Golden-section minimizer of a one-dimensional :class:`Function`.

    With ``interval`` configured the search narrows it directly, otherwise
    the interval is bracketed around the initial point first.
    """

    name = "golden_ratio"

    def __init__(
        self,
        initial_point: Optional[float] = None,
        epsilon: float = DEFAULT_EPSILON,
        interval: Optional[tuple[float, float]] = None,
        h: float = 1.0,
    ):
        super().__init__(initial_point, epsilon)
        self.interval = interval
        self.h = h

    def run(self, function: Function) -> Matrix:
        self._reset()

        def f(t: float) -> float:
            return function.value(as_vector(t))

        if self.interval is not None:
            left, right = self.interval
        else:
            x0 = self._require_initial_point().get(0, 0)
            left, right = unimodal_interval(f, x0, self.h)
        self.state = State.ITERATING
        x_min, self.iterations = golden_section(f, left, right, self.epsilon)
        self.state = State.CONVERGED
        logger.debug(
            "golden ratio: [%g, %g] narrowed to %g in %d iterations",
            left,
            right,
            x_min,
            self.iterations,
        )
        return Matrix([[x_min]])


__all__ = ["GOLDEN_K", "GoldenRatio", "golden_section", "unimodal_interval"]
