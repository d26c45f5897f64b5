"""Finite-difference fallbacks for objectives without analytic derivatives."""

from __future__ import annotations

from typing import Callable

import numpy as np

Array = np.ndarray
Objective = Callable[[Array], float]


def approx_gradient(
    fun: Objective, x: Array, eps: float = 1e-6, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Central-difference gradient of ``fun`` at ``x``.

    Parameters
    ----------
    fun:
        Objective function returning a scalar given x.
    x:
        Point where the gradient is approximated.
    eps:
        Perturbation size for finite differences.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float)
    basis = np.eye(x.size) * eps
    grad = np.array(
        [(fun(x + e) - fun(x - e)) / (2.0 * eps) for e in basis], dtype=float
    )
    if return_evals:
        return grad, 2 * x.size
    return grad


def approx_hessian(
    fun: Objective, x: Array, eps: float = 1e-4, return_evals: bool = False
) -> Array | tuple[Array, int]:
    """Second-order central-difference Hessian, symmetric by construction."""
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float)
    n = x.size
    basis = np.eye(n) * eps
    hess = np.zeros((n, n), dtype=float)
    fx = fun(x)
    evals = 1
    for i in range(n):
        ei = basis[i]
        hess[i, i] = (fun(x + ei) - 2 * fx + fun(x - ei)) / eps**2
        evals += 2
        for j in range(i + 1, n):
            ej = basis[j]
            value = (
                fun(x + ei + ej) - fun(x + ei - ej) - fun(x - ei + ej) + fun(x - ei - ej)
            ) / (4 * eps**2)
            evals += 4
            hess[i, j] = hess[j, i] = value
    if return_evals:
        return hess, evals
    return hess


__all__ = ["approx_gradient", "approx_hessian"]
