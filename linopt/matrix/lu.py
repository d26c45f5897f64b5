"""In-place LU / LUP (Doolittle) decomposition and the routines built on it.

:func:`lu_decomposition` overwrites its input so that the strict lower
triangle holds the elimination multipliers of ``L`` and the upper triangle,
diagonal included, holds ``U``. The two factors are exposed as
:class:`TriangularView` objects over that same storage; no data is copied.

A view remembers the :attr:`~linopt.matrix.core.Matrix.version` of its owner
at creation time and refuses to read once the owner has been mutated again,
e.g. by a second factorization of the same matrix.

References:
    - Golub & Van Loan, *Matrix Computations* (2013), section 3.4
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from ..errors import (
    DimensionMismatchError,
    DivisionByZeroError,
    NotSquareError,
    SingularPivotError,
    StaleViewError,
    UnsupportedOperationError,
)
from ..logging import get_logger
from .core import Matrix, MatrixBase
from .substitution import backward_substitution, forward_substitution

logger = get_logger(__name__)

PIVOT_TOL = 1e-9


class TriangularView(MatrixBase):
    """Read-only ``L`` or ``U`` projection over a factorized matrix.

    For ``lower=True`` the diagonal reads as 1 and only the strict lower
    triangle of the owner is visible; for ``lower=False`` the diagonal and
    everything above it. All other positions read as 0.
    """

    def __init__(self, owner: Matrix, lower: bool):
        self._owner = owner
        self.lower = lower
        self._generation = owner.version

    @property
    def owner(self) -> Matrix:
        return self._owner

    @property
    def rows(self) -> int:
        return self._owner.rows

    @property
    def columns(self) -> int:
        return self._owner.columns

    @property
    def swap_count(self) -> int:
        return 0

    @property
    def is_stale(self) -> bool:
        """True once the owner has been mutated after this view was made."""
        return self._owner.version != self._generation

    def get(self, row: int, column: int) -> float:
        self._check_bounds(row, column, "get")
        if self.is_stale:
            raise StaleViewError(
                f"{self._name} view is stale: the factorized matrix was modified."
            )
        if self.lower:
            if row == column:
                return 1.0
            if row > column:
                return self._owner.get(row, column)
        elif column >= row:
            return self._owner.get(row, column)
        return 0.0

    def set(self, row: int, column: int, value: float) -> "TriangularView":
        raise UnsupportedOperationError(f"{self._name} view does not support set().")

    def swap_rows(self, r1: int, r2: int) -> "TriangularView":
        raise UnsupportedOperationError(f"{self._name} view does not support swap_rows().")

    def determinant(self) -> float:
        # Triangular: product of the diagonal, which is all ones for L.
        self._check_square("determinant")
        if self.lower:
            return 1.0
        det = 1.0
        for i in range(self.rows):
            det *= self.get(i, i)
        return det

    def copy(self) -> Matrix:
        """Materialize the view as an independent dense matrix."""
        return Matrix(self.to_array())

    def new_instance(self, rows: int, columns: int) -> Matrix:
        return self._owner.new_instance(rows, columns)

    @property
    def _name(self) -> str:
        return "L" if self.lower else "U"

    def __repr__(self) -> str:
        return f"TriangularView({self._name}, shape={self.shape})"


class LUResult(NamedTuple):
    """Factors returned by :func:`lu_decomposition`.

    ``P`` is ``None`` for plain LU. With pivoting ``P A = L U``.
    """

    L: TriangularView
    U: TriangularView
    P: Optional[MatrixBase]


def lu_decomposition(A: Matrix, pivot: bool = True) -> LUResult:
    """Factorize square ``A`` in place.

    Args:
        A: Square matrix; overwritten with the packed ``L``/``U`` factors.
        pivot: Use partial pivoting (LUP) when True, plain LU otherwise.

    Returns:
        ``LUResult(L, U, P)`` where ``L`` and ``U`` alias ``A``.

    Raises:
        NotSquareError: If ``A`` is not square.
        SingularPivotError: If pivoting finds no entry with magnitude above
            ``PIVOT_TOL`` in the current column.
        DivisionByZeroError: If plain LU meets an exact zero pivot.
    """
    if not A.is_square():
        raise NotSquareError(
            f"lu_decomposition requires a square matrix, got {A.rows}x{A.columns}."
        )
    n = A.rows
    P = A.identity() if pivot else None

    for i in range(n - 1):
        if pivot:
            pivot_row = max(range(i, n), key=lambda r: abs(A.get(r, i)))
            if abs(A.get(pivot_row, i)) <= PIVOT_TOL:
                raise SingularPivotError(
                    f"lu_decomposition: no usable pivot in column {i}, matrix is singular."
                )
            if pivot_row != i:
                A.swap_rows(pivot_row, i)
                P.swap_rows(pivot_row, i)
        pivot_value = A.get(i, i)
        if pivot_value == 0.0:
            raise DivisionByZeroError(
                f"lu_decomposition: zero pivot in column {i}; use pivot=True."
            )
        for j in range(i + 1, n):
            factor = A.get(j, i) / pivot_value
            A.set(j, i, factor)
            for k in range(i + 1, n):
                A.set(j, k, A.get(j, k) - factor * A.get(i, k))

    logger.debug(
        "%s decomposition of %dx%d matrix done with %d row swaps",
        "LUP" if pivot else "LU",
        n,
        n,
        P.swap_count if P is not None else 0,
    )
    return LUResult(TriangularView(A, lower=True), TriangularView(A, lower=False), P)


def lup_determinant(swap_count: int, L: MatrixBase, U: MatrixBase) -> float:
    """``det(A) = (-1)^swaps * det(L) * det(U)``."""
    sign = -1.0 if swap_count % 2 else 1.0
    return sign * L.determinant() * U.determinant()


def determinant(A: MatrixBase) -> float:
    """Determinant of ``A`` via LUP decomposition of a copy.

    Raises:
        SingularPivotError: If a column has no pivot above ``PIVOT_TOL``.
    """
    L, U, P = lu_decomposition(Matrix(A.to_array()), pivot=True)
    return lup_determinant(P.swap_count, L, U)


def _permuted_column(P: Optional[MatrixBase], b: MatrixBase, column: int) -> Matrix:
    rhs = Matrix.zeros(b.rows, 1)
    for i in range(b.rows):
        rhs.set(i, 0, b.get(i, column))
    return rhs if P is None else P.multiply(rhs)


def solve(A: MatrixBase, b: MatrixBase, pivot: bool = True) -> Matrix:
    """Solve ``A x = b`` for an ``n x 1`` right-hand side.

    ``A`` and ``b`` are left untouched.
    """
    if b.rows != A.rows or b.columns != 1:
        raise DimensionMismatchError(
            f"solve: right-hand side must be {A.rows}x1, got {b.rows}x{b.columns}."
        )
    work = Matrix(A.to_array())
    L, U, P = lu_decomposition(work, pivot=pivot)
    x = _permuted_column(P, b, 0)
    return backward_substitution(U, forward_substitution(L, x))


def invert(A: MatrixBase, pivot: bool = True) -> Matrix:
    """Inverse of ``A`` by solving ``A X = I`` one column at a time.

    Raises whatever :func:`lu_decomposition` raises for ``A``.
    """
    work = Matrix(A.to_array())
    L, U, P = lu_decomposition(work, pivot=pivot)
    n = work.rows
    eye = work.identity()
    inverse = Matrix.zeros(n, n)
    for j in range(n):
        x = backward_substitution(U, forward_substitution(L, _permuted_column(P, eye, j)))
        for i in range(n):
            inverse.set(i, j, x.get(i, 0))
    return inverse


__all__ = [
    "LUResult",
    "PIVOT_TOL",
    "TriangularView",
    "determinant",
    "invert",
    "lu_decomposition",
    "lup_determinant",
    "solve",
]
