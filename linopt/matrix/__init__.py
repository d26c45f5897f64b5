"""Dense matrices, LU/LUP decomposition and triangular solves.

Example
-------
>>> from linopt.matrix import Matrix, invert
>>> A = Matrix([[4.0, 3.0], [6.0, 3.0]])
>>> inv = invert(A)
>>> [[round(v, 6) for v in row] for row in inv.to_array().tolist()]
[[-0.5, 0.5], [1.0, -0.666667]]
"""

from .core import ArrayLike, Matrix, MatrixBase
from .io import format_matrix, load_matrix, parse_matrix, save_matrix
from .lu import (
    PIVOT_TOL,
    LUResult,
    TriangularView,
    determinant,
    invert,
    lu_decomposition,
    lup_determinant,
    solve,
)
from .substitution import backward_substitution, forward_substitution

__all__ = [
    "ArrayLike",
    "LUResult",
    "Matrix",
    "MatrixBase",
    "PIVOT_TOL",
    "TriangularView",
    "backward_substitution",
    "determinant",
    "format_matrix",
    "forward_substitution",
    "invert",
    "load_matrix",
    "lu_decomposition",
    "lup_determinant",
    "parse_matrix",
    "save_matrix",
    "solve",
]
