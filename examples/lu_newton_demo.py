"""
Example: LUP decomposition and Newton-Raphson minimization with linopt

Factorizes a small system read from the plain-text matrix format, solves
it, and then minimizes a shifted quadratic with and without the
golden-ratio line search.
"""

import numpy as np

from linopt import (
    AlgorithmConfig,
    Function,
    create_algorithm,
    determinant,
    format_matrix,
    invert,
    lu_decomposition,
    newton_raphson,
    parse_matrix,
    solve,
)

SYSTEM = """
3  9  6
4 12 12
1 -1  1
"""


def example_decomposition():
    """Example: LUP factors, determinant, solve and inverse."""
    print("=" * 60)
    print("Example 1: LUP decomposition")
    print("=" * 60)

    A = parse_matrix(SYSTEM)
    b = parse_matrix("12\n12\n1")
    print(f"det(A) = {determinant(A):.6f}")

    x = solve(A, b)
    print("Solution of A x = b:")
    print(format_matrix(x, precision=6))

    inverse = invert(A)
    print("A^-1:")
    print(format_matrix(inverse, precision=6))

    work = A.copy()
    L, U, P = lu_decomposition(work, pivot=True)
    print("L:")
    print(format_matrix(L, precision=6))
    print("U:")
    print(format_matrix(U, precision=6))
    print("P:")
    print(format_matrix(P, precision=0))
    print()


def example_newton():
    """Example: Newton-Raphson on (x - 1)^2 + (y - 2)^2."""
    print("=" * 60)
    print("Example 2: Newton-Raphson")
    print("=" * 60)

    function = Function(
        lambda x: float((x[0] - 1) ** 2 + (x[1] - 2) ** 2),
        grad=lambda x: np.array([2 * (x[0] - 1), 2 * (x[1] - 2)]),
        hess=lambda _: 2 * np.eye(2),
    )
    for use_line_search in (True, False):
        result = newton_raphson(function, [0.0, 0.0], epsilon=1e-6, use_line_search=use_line_search)
        print(f"line search={use_line_search}: status={result.status.value}")
        print(f"  x = {result.x}, f = {result.fun:.3e}, iterations = {result.nit}")

    config = AlgorithmConfig.from_mapping({"name": "GoldenRatio", "initial_point": [0.0]})
    golden = create_algorithm(config)
    t_min = golden.run(Function.scalar(lambda t: (t - 3.0) ** 2))
    print(f"Golden ratio minimum of (t - 3)^2: {t_min.get(0, 0):.6f}")
    print()


if __name__ == "__main__":
    example_decomposition()
    example_newton()
    print("Done.")
