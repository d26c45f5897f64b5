"""Exception hierarchy for linopt.

Every error derives from :class:`LinoptError` and from the built-in exception
type a caller would naturally catch, so ``except ValueError`` keeps working
for shape problems and ``except IndexError`` for bad indices.
"""

from __future__ import annotations


class LinoptError(Exception):
    """Base class for all linopt errors."""


class DimensionMismatchError(LinoptError, ValueError):
    """Operands have incompatible shapes."""


class NotSquareError(DimensionMismatchError):
    """Operation requires a square matrix."""


class SingularPivotError(LinoptError, ArithmeticError):
    """Partial pivoting found no pivot of usable magnitude."""


class DivisionByZeroError(LinoptError, ZeroDivisionError):
    """Elimination without pivoting divided by an exact zero."""


class UnsupportedOperationError(LinoptError, TypeError):
    """Mutation attempted on a read-only matrix view."""


class StaleViewError(LinoptError, RuntimeError):
    """A view was read after its owning matrix changed."""


class OutOfBoundsError(LinoptError, IndexError):
    """Row or column index outside the matrix."""


class MatrixParseError(LinoptError, ValueError):
    """Matrix text definition is invalid."""


class UnknownAlgorithmError(LinoptError, KeyError):
    """No algorithm is registered under the requested name."""


__all__ = [
    "DimensionMismatchError",
    "DivisionByZeroError",
    "LinoptError",
    "MatrixParseError",
    "NotSquareError",
    "OutOfBoundsError",
    "SingularPivotError",
    "StaleViewError",
    "UnknownAlgorithmError",
    "UnsupportedOperationError",
]
