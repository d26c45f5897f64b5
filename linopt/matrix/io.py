"""Plain-text matrix format.

One row per line, columns separated by any whitespace. Blank lines are
ignored and every row must have the same number of columns::

    4   3
    6   3
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from ..errors import MatrixParseError
from .core import Matrix, MatrixBase

PathLike = Union[str, Path]


def parse_matrix(text: str) -> Matrix:
    """Parse a matrix from its text definition.

    Raises:
        MatrixParseError: If a value is not a number, rows differ in length
            or the text holds no rows at all.
    """
    rows = [line.split() for line in text.splitlines() if line.strip()]
    try:
        data = [[float(token) for token in row] for row in rows]
    except ValueError as exc:
        raise MatrixParseError("Matrix definition is invalid.") from exc
    if not data or len({len(row) for row in data}) != 1:
        raise MatrixParseError("Matrix definition is invalid.")
    return Matrix(data)


def load_matrix(path: PathLike) -> Matrix:
    """Read and parse a matrix file."""
    try:
        return parse_matrix(Path(path).read_text())
    except MatrixParseError as exc:
        raise MatrixParseError(f"Parsing '{path}' failed! Matrix definition is invalid.") from exc


def format_matrix(matrix: MatrixBase, precision: int | None = None) -> str:
    """Render ``matrix`` in the text format accepted by :func:`parse_matrix`."""
    lines = []
    for i in range(matrix.rows):
        values = [matrix.get(i, j) for j in range(matrix.columns)]
        if precision is None:
            lines.append(" ".join(repr(v) for v in values))
        else:
            lines.append(" ".join(f"{v:.{precision}f}" for v in values))
    return "\n".join(lines)


def save_matrix(matrix: MatrixBase, path: PathLike, precision: int | None = None) -> None:
    Path(path).write_text(format_matrix(matrix, precision) + "\n")


__all__ = ["format_matrix", "load_matrix", "parse_matrix", "save_matrix"]
