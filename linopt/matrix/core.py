"""Dense matrix abstraction shared by the decomposition and optimization code.

:class:`MatrixBase` is the capability interface. Concrete matrices provide
element access, row swapping, copying and a zero-matrix factory
(:meth:`MatrixBase.new_instance`); everything else (arithmetic, transpose,
multiplication, cofactor determinant, identity) is derived from those
primitives so that generic algorithms never hard-code a concrete type.

:class:`Matrix` stores its values in a contiguous ``float64`` NumPy array and
overrides the derived operations with vectorized versions. Every mutation
bumps :attr:`Matrix.version`, which read-only views use to detect that the
storage they alias has changed underneath them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence, Union

import numpy as np

from ..errors import DimensionMismatchError, NotSquareError, OutOfBoundsError

ArrayLike = Union[np.ndarray, Sequence[Sequence[float]]]


class MatrixBase(ABC):
    """Minimal matrix interface with copy-then-delegate helpers."""

    @property
    @abstractmethod
    def rows(self) -> int:
        """Number of rows."""

    @property
    @abstractmethod
    def columns(self) -> int:
        """Number of columns."""

    @abstractmethod
    def get(self, row: int, column: int) -> float:
        """Return the value at ``[row][column]``."""

    @abstractmethod
    def set(self, row: int, column: int, value: float) -> "MatrixBase":
        """Store ``value`` at ``[row][column]`` and return ``self``."""

    @abstractmethod
    def swap_rows(self, r1: int, r2: int) -> "MatrixBase":
        """Swap two rows in place and return ``self``."""

    @property
    @abstractmethod
    def swap_count(self) -> int:
        """Number of :meth:`swap_rows` calls performed on this matrix."""

    @abstractmethod
    def copy(self) -> "MatrixBase":
        """Return a deep copy."""

    @abstractmethod
    def new_instance(self, rows: int, columns: int) -> "MatrixBase":
        """Return a zero-filled matrix of the given shape."""

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.columns

    def is_square(self) -> bool:
        return self.rows == self.columns

    def to_array(self) -> np.ndarray:
        """Return the values as a new ``(rows, columns)`` float array."""
        out = np.empty((self.rows, self.columns), dtype=float)
        for i in range(self.rows):
            for j in range(self.columns):
                out[i, j] = self.get(i, j)
        return out

    def _check_bounds(self, row: int, column: int, op: str) -> None:
        if not (0 <= row < self.rows and 0 <= column < self.columns):
            raise OutOfBoundsError(
                f"{op}: index ({row}, {column}) is out of range for "
                f"{self.rows}x{self.columns} matrix."
            )

    def _check_same_shape(self, other: "MatrixBase", op: str) -> None:
        if self.shape != other.shape:
            raise DimensionMismatchError(
                f"{op}: shapes {self.shape} and {other.shape} do not match."
            )

    def _check_square(self, op: str) -> None:
        if not self.is_square():
            raise NotSquareError(
                f"{op} requires a square matrix, got {self.rows}x{self.columns}."
            )

    # ------------------------------------------------------------------
    # In-place arithmetic and their copying counterparts
    # ------------------------------------------------------------------

    def add(self, other: "MatrixBase") -> "MatrixBase":
        """Add ``other`` element-wise into ``self``."""
        self._check_same_shape(other, "add")
        for i in range(self.rows):
            for j in range(self.columns):
                self.set(i, j, self.get(i, j) + other.get(i, j))
        return self

    def sub(self, other: "MatrixBase") -> "MatrixBase":
        """Subtract ``other`` element-wise from ``self``."""
        self._check_same_shape(other, "sub")
        for i in range(self.rows):
            for j in range(self.columns):
                self.set(i, j, self.get(i, j) - other.get(i, j))
        return self

    def scalar_multiply(self, scalar: float) -> "MatrixBase":
        """Multiply every element of ``self`` by ``scalar``."""
        for i in range(self.rows):
            for j in range(self.columns):
                self.set(i, j, self.get(i, j) * scalar)
        return self

    def n_add(self, other: "MatrixBase") -> "MatrixBase":
        return self.copy().add(other)

    def n_sub(self, other: "MatrixBase") -> "MatrixBase":
        return self.copy().sub(other)

    def n_scalar_multiply(self, scalar: float) -> "MatrixBase":
        return self.copy().scalar_multiply(scalar)

    # ------------------------------------------------------------------
    # Structural operations (always produce new matrices)
    # ------------------------------------------------------------------

    def transpose(self) -> "MatrixBase":
        result = self.new_instance(self.columns, self.rows)
        for i in range(self.rows):
            for j in range(self.columns):
                result.set(j, i, self.get(i, j))
        return result

    def multiply(self, other: "MatrixBase") -> "MatrixBase":
        """Matrix product ``self @ other``.

        Raises:
            DimensionMismatchError: If ``self.columns != other.rows``.
        """
        if self.columns != other.rows:
            raise DimensionMismatchError(
                f"multiply: cannot multiply {self.rows}x{self.columns} by "
                f"{other.rows}x{other.columns}."
            )
        product = self.to_array() @ other.to_array()
        result = self.new_instance(self.rows, other.columns)
        for i in range(result.rows):
            for j in range(result.columns):
                result.set(i, j, product[i, j])
        return result

    def sub_matrix(self, row: int, column: int) -> "MatrixBase":
        """Return a copy of ``self`` without ``row`` and ``column``."""
        self._check_bounds(row, column, "sub_matrix")
        if self.rows < 2 or self.columns < 2:
            raise DimensionMismatchError(
                f"sub_matrix: {self.rows}x{self.columns} matrix has no minors."
            )
        result = self.new_instance(self.rows - 1, self.columns - 1)
        for i, src_i in enumerate(r for r in range(self.rows) if r != row):
            for j, src_j in enumerate(c for c in range(self.columns) if c != column):
                result.set(i, j, self.get(src_i, src_j))
        return result

    def determinant(self) -> float:
        """Determinant by recursive cofactor expansion along the first row."""
        self._check_square("determinant")
        if self.rows == 1:
            return self.get(0, 0)
        if self.rows == 2:
            return self.get(0, 0) * self.get(1, 1) - self.get(0, 1) * self.get(1, 0)
        det = 0.0
        for j in range(self.columns):
            entry = self.get(0, j)
            if entry == 0.0:
                continue
            sign = -1.0 if j % 2 else 1.0
            det += sign * entry * self.sub_matrix(0, j).determinant()
        return det

    def identity(self) -> "MatrixBase":
        """Identity matrix with the same shape as ``self``."""
        self._check_square("identity")
        result = self.new_instance(self.rows, self.columns)
        for i in range(self.rows):
            result.set(i, i, 1.0)
        return result

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------

    def __getitem__(self, index: tuple[int, int]) -> float:
        row, column = index
        return self.get(row, column)

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        row, column = index
        self.set(row, column, value)

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        arr = self.to_array()
        return arr if dtype is None else arr.astype(dtype)

    def __add__(self, other: "MatrixBase") -> "MatrixBase":
        return self.n_add(other)

    def __sub__(self, other: "MatrixBase") -> "MatrixBase":
        return self.n_sub(other)

    def __iadd__(self, other: "MatrixBase") -> "MatrixBase":
        return self.add(other)

    def __isub__(self, other: "MatrixBase") -> "MatrixBase":
        return self.sub(other)

    def __mul__(self, scalar: float) -> "MatrixBase":
        return self.n_scalar_multiply(float(scalar))

    __rmul__ = __mul__

    def __matmul__(self, other: "MatrixBase") -> "MatrixBase":
        return self.multiply(other)


class Matrix(MatrixBase):
    """Dense, mutable ``rows x columns`` matrix of floats.

    Examples:
        >>> m = Matrix([[4.0, 3.0], [6.0, 3.0]])
        >>> m.determinant()
        -6.0
        >>> Matrix.zeros(2, 3).shape
        (2, 3)
    """

    def __init__(self, data: ArrayLike):
        values = np.array(data, dtype=float)
        if values.ndim != 2:
            raise ValueError(f"Matrix data must be 2-D, got {values.ndim}-D input.")
        if values.shape[0] < 1 or values.shape[1] < 1:
            raise ValueError("Matrix must have at least one row and one column.")
        self._data = values
        self._swap_count = 0
        self._version = 0

    @classmethod
    def zeros(cls, rows: int, columns: int) -> "Matrix":
        if rows < 1 or columns < 1:
            raise ValueError(f"Matrix dimensions must be positive, got {rows}x{columns}.")
        return cls(np.zeros((rows, columns)))

    @classmethod
    def column(cls, values: Sequence[float]) -> "Matrix":
        """Build an ``n x 1`` column vector."""
        return cls(np.asarray(values, dtype=float).reshape(-1, 1))

    @classmethod
    def eye(cls, n: int) -> "Matrix":
        return cls(np.eye(n))

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def columns(self) -> int:
        return self._data.shape[1]

    @property
    def swap_count(self) -> int:
        return self._swap_count

    @property
    def version(self) -> int:
        """Counter bumped by every mutation of the stored values."""
        return self._version

    def get(self, row: int, column: int) -> float:
        self._check_bounds(row, column, "get")
        return float(self._data[row, column])

    def set(self, row: int, column: int, value: float) -> "Matrix":
        self._check_bounds(row, column, "set")
        self._data[row, column] = value
        self._version += 1
        return self

    def swap_rows(self, r1: int, r2: int) -> "Matrix":
        self._check_bounds(r1, 0, "swap_rows")
        self._check_bounds(r2, 0, "swap_rows")
        self._data[[r1, r2]] = self._data[[r2, r1]]
        self._swap_count += 1
        self._version += 1
        return self

    def copy(self) -> "Matrix":
        """Deep copy, including the row-swap count."""
        clone = Matrix(self._data)
        clone._swap_count = self._swap_count
        return clone

    def new_instance(self, rows: int, columns: int) -> "Matrix":
        return Matrix.zeros(rows, columns)

    def to_array(self) -> np.ndarray:
        return self._data.copy()

    def add(self, other: MatrixBase) -> "Matrix":
        self._check_same_shape(other, "add")
        self._data += other.to_array()
        self._version += 1
        return self

    def sub(self, other: MatrixBase) -> "Matrix":
        self._check_same_shape(other, "sub")
        self._data -= other.to_array()
        self._version += 1
        return self

    def scalar_multiply(self, scalar: float) -> "Matrix":
        self._data *= scalar
        self._version += 1
        return self

    def transpose(self) -> "Matrix":
        return Matrix(self._data.T)

    def multiply(self, other: MatrixBase) -> "Matrix":
        if self.columns != other.rows:
            raise DimensionMismatchError(
                f"multiply: cannot multiply {self.rows}x{self.columns} by "
                f"{other.rows}x{other.columns}."
            )
        return Matrix(self._data @ other.to_array())

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r})"


__all__ = ["ArrayLike", "Matrix", "MatrixBase"]
