import numpy as np
import pytest

from linopt.errors import (
    DimensionMismatchError,
    DivisionByZeroError,
    NotSquareError,
    SingularPivotError,
    StaleViewError,
    UnsupportedOperationError,
)
from linopt.matrix import (
    Matrix,
    TriangularView,
    determinant,
    invert,
    lu_decomposition,
    lup_determinant,
    solve,
)


def test_lup_reconstructs_permuted_matrix(well_conditioned):
    for n in (2, 3, 5):
        a = well_conditioned(n)
        L, U, P = lu_decomposition(Matrix(a), pivot=True)
        assert np.allclose(np.array(P) @ a, np.array(L) @ np.array(U))


def test_lup_pivots_on_largest_entry():
    a = np.array([[1.0, 2.0], [4.0, 3.0]])
    L, U, P = lu_decomposition(Matrix(a))
    assert np.allclose(P, [[0.0, 1.0], [1.0, 0.0]])
    assert P.swap_count == 1
    assert U.get(0, 0) == 4.0
    assert L.get(1, 0) == pytest.approx(0.25)


def test_plain_lu_reconstructs_matrix():
    a = np.array([[4.0, 3.0, 2.0], [2.0, 5.0, 1.0], [1.0, 2.0, 6.0]])
    L, U, P = lu_decomposition(Matrix(a), pivot=False)
    assert P is None
    assert np.allclose(np.array(L) @ np.array(U), a)


def test_views_have_triangular_shape():
    a = np.array([[2.0, 1.0, 1.0], [4.0, 3.0, 3.0], [8.0, 7.0, 9.0]])
    L, U, _ = lu_decomposition(Matrix(a), pivot=False)
    lower = np.array(L)
    upper = np.array(U)
    assert np.allclose(np.diag(lower), 1.0)
    assert np.allclose(np.triu(lower, 1), 0.0)
    assert np.allclose(np.tril(upper, -1), 0.0)


def test_views_alias_factorized_storage():
    A = Matrix([[4.0, 3.0], [6.0, 3.0]])
    L, U, _ = lu_decomposition(A, pivot=False)
    assert L.owner is A
    assert U.owner is A
    assert A.get(1, 0) == pytest.approx(1.5)
    assert L.get(1, 0) == pytest.approx(1.5)
    assert U.get(1, 1) == pytest.approx(A.get(1, 1))


def test_views_are_read_only():
    L, U, _ = lu_decomposition(Matrix([[2.0, 1.0], [1.0, 2.0]]))
    with pytest.raises(UnsupportedOperationError):
        L.set(0, 0, 1.0)
    with pytest.raises(UnsupportedOperationError):
        U.swap_rows(0, 1)
    with pytest.raises(UnsupportedOperationError):
        U.add(Matrix.zeros(2, 2))


def test_view_copy_is_dense_and_mutable():
    _, U, _ = lu_decomposition(Matrix([[2.0, 1.0], [1.0, 2.0]]))
    dense = U.copy()
    assert isinstance(dense, Matrix)
    dense.set(1, 0, 7.0)
    assert U.get(1, 0) == 0.0
    assert isinstance(U.n_scalar_multiply(2.0), Matrix)


def test_refactorizing_invalidates_views():
    A = Matrix([[4.0, 3.0], [6.0, 3.0]])
    L, U, _ = lu_decomposition(A)
    assert not L.is_stale
    lu_decomposition(A)
    assert L.is_stale
    with pytest.raises(StaleViewError):
        L.get(1, 0)
    with pytest.raises(StaleViewError):
        U.determinant()


def test_singular_matrix_with_pivoting_fails():
    with pytest.raises(SingularPivotError):
        lu_decomposition(Matrix.zeros(2, 2), pivot=True)


def test_zero_pivot_without_pivoting_fails():
    with pytest.raises(DivisionByZeroError):
        lu_decomposition(Matrix([[0.0, 1.0], [1.0, 0.0]]), pivot=False)


def test_decomposition_requires_square():
    with pytest.raises(NotSquareError):
        lu_decomposition(Matrix.zeros(2, 3))


def test_one_by_one_decomposition():
    L, U, P = lu_decomposition(Matrix([[5.0]]))
    assert L.get(0, 0) == 1.0
    assert U.get(0, 0) == 5.0
    assert np.allclose(P, [[1.0]])


def test_decomposition_determinant_matches_cofactor(well_conditioned):
    for n in (2, 3, 4):
        a = well_conditioned(n)
        # reverse the rows so pivoting has to swap
        a = a[::-1].copy()
        work = Matrix(a)
        L, U, P = lu_decomposition(work)
        expected = Matrix(a).determinant()
        assert lup_determinant(P.swap_count, L, U) == pytest.approx(expected)
        assert determinant(Matrix(a)) == pytest.approx(expected)


def test_triangular_view_determinants():
    L, U, _ = lu_decomposition(Matrix([[2.0, 1.0], [4.0, 5.0]]), pivot=False)
    assert isinstance(L, TriangularView)
    assert L.determinant() == 1.0
    assert U.determinant() == pytest.approx(6.0)


def test_determinant_propagates_pivot_failure():
    with pytest.raises(SingularPivotError):
        determinant(Matrix.zeros(3, 3))
    # tiny but non-singular: the cofactor path still sees 1e-20
    tiny = Matrix(1e-10 * np.eye(2))
    with pytest.raises(SingularPivotError):
        determinant(tiny)
    assert tiny.determinant() == pytest.approx(1e-20, rel=1e-12, abs=0.0)


def test_solve_matches_numpy(well_conditioned, rng):
    a = well_conditioned(4)
    b = rng.normal(size=4)
    x = solve(Matrix(a), Matrix.column(b))
    assert np.allclose(np.array(x).ravel(), np.linalg.solve(a, b))


def test_solve_leaves_inputs_untouched():
    a = [[2.0, 1.0], [1.0, 3.0]]
    A = Matrix(a)
    b = Matrix.column([1.0, 2.0])
    solve(A, b)
    assert np.allclose(A, a)
    assert np.allclose(b, [[1.0], [2.0]])


def test_solve_rejects_bad_rhs():
    with pytest.raises(DimensionMismatchError):
        solve(Matrix.eye(2), Matrix.column([1.0, 2.0, 3.0]))


def test_invert_gives_identity(well_conditioned):
    for n in (1, 2, 3, 6):
        a = well_conditioned(n)
        inverse = invert(Matrix(a))
        assert np.allclose(np.array(inverse) @ a, np.eye(n))


def test_invert_needs_pivoting_for_zero_leading_entry():
    a = Matrix([[0.0, 1.0], [1.0, 0.0]])
    assert np.allclose(invert(a), [[0.0, 1.0], [1.0, 0.0]])
    with pytest.raises(DivisionByZeroError):
        invert(a, pivot=False)


def test_invert_singular_matrix_fails():
    with pytest.raises(SingularPivotError):
        invert(Matrix.zeros(2, 2))
    # the last pivot is not checked, back substitution hits the zero instead
    with pytest.raises(ArithmeticError):
        invert(Matrix([[1.0, 2.0], [2.0, 4.0]]))
