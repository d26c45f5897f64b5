"""Forward and backward substitution on triangular systems.

Both routines overwrite the right-hand side column vector with the solution
and return it, so ``backward_substitution(U, forward_substitution(L, b))``
solves ``L U x = b`` without allocating.
"""

from __future__ import annotations

from ..errors import DimensionMismatchError, DivisionByZeroError, NotSquareError
from .core import MatrixBase


def _check_system(A: MatrixBase, b: MatrixBase, op: str) -> None:
    if not A.is_square():
        raise NotSquareError(
            f"{op} cannot be performed on a non-square {A.rows}x{A.columns} matrix."
        )
    if b.rows != A.rows or b.columns != 1:
        raise DimensionMismatchError(
            f"{op}: right-hand side must be {A.rows}x1, got {b.rows}x{b.columns}."
        )


def forward_substitution(L: MatrixBase, b: MatrixBase) -> MatrixBase:
    """Solve ``L y = b`` in place for unit lower-triangular ``L``.

    Args:
        L: Square lower-triangular matrix; its diagonal is taken to be 1.
        b: ``n x 1`` vector, overwritten with ``y``.

    Returns:
        ``b``.

    Raises:
        NotSquareError: If ``L`` is not square.
        DimensionMismatchError: If ``b`` is not an ``n x 1`` vector.
    """
    _check_system(L, b, "forward_substitution")
    n = L.rows
    for i in range(n - 1):
        bi = b.get(i, 0)
        for j in range(i + 1, n):
            b.set(j, 0, b.get(j, 0) - L.get(j, i) * bi)
    return b


def backward_substitution(U: MatrixBase, y: MatrixBase) -> MatrixBase:
    """Solve ``U x = y`` in place for upper-triangular ``U``.

    Raises:
        NotSquareError: If ``U`` is not square.
        DimensionMismatchError: If ``y`` is not an ``n x 1`` vector.
        DivisionByZeroError: If a diagonal entry of ``U`` is exactly zero.
    """
    _check_system(U, y, "backward_substitution")
    n = U.rows
    for i in range(n - 1, -1, -1):
        acc = y.get(i, 0)
        for j in range(i + 1, n):
            acc -= U.get(i, j) * y.get(j, 0)
        diag = U.get(i, i)
        if diag == 0.0:
            raise DivisionByZeroError(
                f"backward_substitution: zero on the diagonal at row {i}."
            )
        y.set(i, 0, acc / diag)
    return y


__all__ = ["backward_substitution", "forward_substitution"]
