"""Core interfaces shared across the optimization algorithms.

Points handed to a :class:`Function` are ``n x 1`` :class:`~linopt.matrix.Matrix`
column vectors (anything array-like is accepted as well); the wrapped user
callables always receive flat ``float64`` NumPy arrays.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

import numpy as np

from ..matrix import Matrix, MatrixBase
from .utils import approx_gradient, approx_hessian

Array = np.ndarray
Objective = Callable[[Array], float]
Gradient = Callable[[Array], Array]
Hessian = Callable[[Array], Array]

DEFAULT_EPSILON = 1e-6


class State(Enum):
    """Lifecycle of a single :meth:`OptAlgorithm.run` call."""

    INITIALIZING = "initializing"
    ITERATING = "iterating"
    CONVERGED = "converged"
    DIVERGED = "diverged"


def as_vector(point: Any) -> Array:
    """Flatten a point (Matrix, array or sequence) into a 1-D float array."""
    return np.asarray(point, dtype=float).reshape(-1)


def as_column(point: Any) -> Matrix:
    """Turn a point into an ``n x 1`` :class:`Matrix`."""
    return Matrix.column(as_vector(point))


def l2_norm(vector: MatrixBase) -> float:
    return float(np.linalg.norm(vector.to_array()))


def is_diverging(current_value: float, best_value: float) -> bool:
    """An update diverges when it makes the objective worse than the best seen."""
    return current_value > best_value


class Function:
    """Scalar objective with gradient and Hessian access.

    ``grad`` and ``hess`` are optional; missing derivatives are approximated
    with central differences. Every evaluation is counted.

    Args:
        fun: Objective taking a 1-D array and returning a scalar.
        grad: Gradient returning a 1-D array of the same length.
        hess: Hessian returning an ``(n, n)`` array.
        dim: Expected number of variables, checked on every call when given.
    """

    def __init__(
        self,
        fun: Objective,
        grad: Optional[Gradient] = None,
        hess: Optional[Hessian] = None,
        dim: Optional[int] = None,
    ):
        self.fun = fun
        self.grad = grad
        self.hess = hess
        self.dim = dim
        self.reset_counters()

    @classmethod
    def scalar(cls, f: Callable[[float], float]) -> "Function":
        """Wrap a one-dimensional ``f(t) -> float``."""
        return cls(lambda x: f(float(x[0])), dim=1)

    def reset_counters(self) -> None:
        self.nfev = 0
        self.njev = 0
        self.nhev = 0

    def _point(self, point: Any) -> Array:
        x = as_vector(point)
        if self.dim is not None and x.size != self.dim:
            raise ValueError(f"Expected a point with {self.dim} coordinates, got {x.size}.")
        return x

    def value(self, point: Any) -> float:
        self.nfev += 1
        return float(self.fun(self._point(point)))

    __call__ = value

    def gradient(self, point: Any) -> Matrix:
        """Gradient at ``point`` as an ``n x 1`` column."""
        x = self._point(point)
        if self.grad is not None:
            self.njev += 1
            return Matrix.column(self.grad(x))
        grad, evals = approx_gradient(self.fun, x, return_evals=True)
        self.nfev += evals
        return Matrix.column(grad)

    def hesse(self, point: Any) -> Matrix:
        """Hessian at ``point`` as an ``n x n`` matrix."""
        x = self._point(point)
        if self.hess is not None:
            self.nhev += 1
            return Matrix(np.asarray(self.hess(x), dtype=float).reshape(x.size, x.size))
        hess, evals = approx_hessian(self.fun, x, return_evals=True)
        self.nfev += evals
        return Matrix(hess)


@dataclass
class OptimizeResult:
    """Result object returned by the functional optimizer wrappers."""

    x: Array
    fun: float
    nit: int
    status: State
    message: str
    nfev: int
    njev: int
    nhev: int
    history: List[Array] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is State.CONVERGED


class OptAlgorithm(ABC):
    """Configurable iterative minimizer.

    Configuration (initial point, epsilon) is supplied before :meth:`run`;
    each run resets ``state``, ``iterations`` and ``history``.
    """

    name = ""

    def __init__(self, initial_point: Any = None, epsilon: float = DEFAULT_EPSILON):
        self.initial_point: Optional[Matrix] = None
        if initial_point is not None:
            self.set_initial_point(initial_point)
        self.set_epsilon(epsilon)
        self.state = State.INITIALIZING
        self.iterations = 0
        self.history: List[Array] = []

    def set_initial_point(self, point: Any) -> "OptAlgorithm":
        self.initial_point = as_column(point)
        return self

    def set_epsilon(self, epsilon: float) -> "OptAlgorithm":
        if epsilon <= 0:
            raise ValueError("epsilon must be positive")
        self.epsilon = float(epsilon)
        return self

    def _require_initial_point(self) -> Matrix:
        if self.initial_point is None:
            raise ValueError(f"{self.__class__.__name__} has no initial point configured.")
        return self.initial_point

    def _reset(self) -> None:
        self.state = State.INITIALIZING
        self.iterations = 0
        self.history = []

    @abstractmethod
    def run(self, function: Function) -> Matrix:
        """Minimize ``function`` and return the best point found."""


def ensure_function(function: Any) -> Function:
    """Accept a :class:`Function` or a plain objective callable."""
    if isinstance(function, Function):
        return function
    if callable(function):
        return Function(function)
    raise TypeError(f"Expected a Function or callable, got {type(function).__name__}.")


__all__ = [
    "Array",
    "DEFAULT_EPSILON",
    "Function",
    "Gradient",
    "Hessian",
    "Objective",
    "OptAlgorithm",
    "OptimizeResult",
    "State",
    "as_column",
    "as_vector",
    "ensure_function",
    "is_diverging",
    "l2_norm",
]
