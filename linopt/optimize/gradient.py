"""Gradient-family minimizers and the iteration loop they share.

:class:`GradientOptAlgorithm` runs the loop; subclasses only provide the
raw step vector. When a golden-ratio line search is available the step is
rescaled by the minimizer ``t*`` of ``phi(t) = f(x + t * step)`` and added to
the current point. Without one the raw step is subtracted, i.e. a fixed
unit step along the negative step direction.

No iteration cap is applied: the loop ends only on convergence
(``||step|| < epsilon``) or divergence (objective worse than the best seen).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Optional

from ..logging import get_logger
from ..matrix import Matrix
from .core import (
    DEFAULT_EPSILON,
    Function,
    OptAlgorithm,
    OptimizeResult,
    State,
    as_vector,
    ensure_function,
    is_diverging,
    l2_norm,
)

logger = get_logger(__name__)

LINE_SEARCH_NAME = "golden_ratio"


class GradientOptAlgorithm(OptAlgorithm):
    """Base class for minimizers driven by a gradient-derived step.

    Args:
        initial_point: Starting point.
        epsilon: Convergence threshold on the step norm; also used as the
            line-search precision.
        use_line_search: Look up a golden-ratio line search when no explicit
            ``line_search`` is given.
        line_search: Line-search instance to use instead of a registry lookup.
        registry: Registry consulted for the line search; the default
            registry when None.
    """

    def __init__(
        self,
        initial_point: Any = None,
        epsilon: float = DEFAULT_EPSILON,
        use_line_search: bool = True,
        line_search: Optional[OptAlgorithm] = None,
        registry: Any = None,
    ):
        super().__init__(initial_point, epsilon)
        self.use_line_search = use_line_search
        self.line_search = line_search
        self.registry = registry

    @abstractmethod
    def compute_step(self, function: Function, point: Matrix) -> Matrix:
        """Raw step vector at ``point`` (before line search scaling)."""

    def _resolve_line_search(self) -> Optional[OptAlgorithm]:
        if not self.use_line_search:
            return None
        if self.line_search is not None:
            return self.line_search.set_epsilon(self.epsilon)
        registry = self.registry
        if registry is None:
            from .registry import default_registry

            registry = default_registry()
        try:
            return registry.get_instance(LINE_SEARCH_NAME, epsilon=self.epsilon)
        except Exception as exc:
            logger.warning(
                "%s: line search %r unavailable (%s); using fixed unit steps",
                self.__class__.__name__,
                LINE_SEARCH_NAME,
                exc,
            )
            return None

    def _step_length(
        self, line_search: OptAlgorithm, function: Function, current: Matrix, step: Matrix
    ) -> float:
        surrogate = Function.scalar(
            lambda t: function.value(current.n_add(step.n_scalar_multiply(t)))
        )
        line_search.set_initial_point(0.0)
        return line_search.run(surrogate).get(0, 0)

    def run(self, function: Function) -> Matrix:
        self._reset()
        line_search = self._resolve_line_search()
        solution = self._require_initial_point().copy()
        best_value = function.value(solution)
        current = solution.copy()
        self.history.append(as_vector(solution))

        self.state = State.ITERATING
        while True:
            self.iterations += 1
            step = self.compute_step(function, current)
            if line_search is not None:
                step.scalar_multiply(self._step_length(line_search, function, current, step))

            step_norm = l2_norm(step)
            logger.debug(
                "%s iteration %d: |step| = %.6g, best f = %.6g",
                self.name,
                self.iterations,
                step_norm,
                best_value,
            )
            if step_norm < self.epsilon:
                self.state = State.CONVERGED
                break

            # TODO: decide whether the fixed-step branch should add the scaled
            # step as well; without line search convergence relies on subtracting.
            if line_search is not None:
                current.add(step)
            else:
                current.sub(step)

            current_value = function.value(current)
            if is_diverging(current_value, best_value):
                self.state = State.DIVERGED
                break
            solution = current.copy()
            best_value = function.value(solution)
            self.history.append(as_vector(solution))

        logger.info(
            "%s %s after %d iterations, f = %.6g",
            self.name,
            self.state.value,
            self.iterations,
            best_value,
        )
        return solution


class GradientDescent(GradientOptAlgorithm):
    """Steepest descent; the step is the gradient itself."""

    name = "gradient_descent"

    def compute_step(self, function: Function, point: Matrix) -> Matrix:
        return function.gradient(point)


def _minimize(
    algorithm: GradientOptAlgorithm, function: Any, history: bool
) -> OptimizeResult:
    function = ensure_function(function)
    nfev, njev, nhev = function.nfev, function.njev, function.nhev
    solution = algorithm.run(function)
    nfev, njev, nhev = function.nfev - nfev, function.njev - njev, function.nhev - nhev
    fun = function.value(solution)
    if algorithm.state is State.CONVERGED:
        message = "Step norm below epsilon."
    else:
        message = "Objective stopped improving; returning best point."
    return OptimizeResult(
        x=as_vector(solution),
        fun=fun,
        nit=algorithm.iterations,
        status=algorithm.state,
        message=message,
        nfev=nfev,
        njev=njev,
        nhev=nhev,
        history=list(algorithm.history) if history else [],
    )


def gradient_descent(
    function: Any,
    x0: Any,
    epsilon: float = DEFAULT_EPSILON,
    use_line_search: bool = True,
    history: bool = False,
) -> OptimizeResult:
    """Steepest descent with golden-ratio line search."""
    algorithm = GradientDescent(x0, epsilon, use_line_search=use_line_search)
    return _minimize(algorithm, function, history)


__all__ = [
    "GradientDescent",
    "GradientOptAlgorithm",
    "LINE_SEARCH_NAME",
    "gradient_descent",
]
