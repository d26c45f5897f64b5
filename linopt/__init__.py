"""linopt - dense matrix decomposition and Newton-type minimization."""

__version__ = "0.1.0"

# Errors
from .errors import (
    DimensionMismatchError,
    DivisionByZeroError,
    LinoptError,
    MatrixParseError,
    NotSquareError,
    OutOfBoundsError,
    SingularPivotError,
    StaleViewError,
    UnknownAlgorithmError,
    UnsupportedOperationError,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Matrix engine
from .matrix import (
    LUResult,
    Matrix,
    MatrixBase,
    TriangularView,
    backward_substitution,
    determinant,
    format_matrix,
    forward_substitution,
    invert,
    load_matrix,
    lu_decomposition,
    lup_determinant,
    parse_matrix,
    save_matrix,
    solve,
)

# Optimization
from .optimize import (
    AlgorithmConfig,
    AlgorithmRegistry,
    Function,
    GoldenRatio,
    GradientDescent,
    NewtonRaphson,
    OptimizeResult,
    State,
    create_algorithm,
    default_registry,
    gradient_descent,
    newton_raphson,
    unimodal_interval,
)

__all__ = [
    "__version__",
    "AlgorithmConfig",
    "AlgorithmRegistry",
    "DimensionMismatchError",
    "DivisionByZeroError",
    "Function",
    "GoldenRatio",
    "GradientDescent",
    "LUResult",
    "LinoptError",
    "Matrix",
    "MatrixBase",
    "MatrixParseError",
    "NewtonRaphson",
    "NotSquareError",
    "OptimizeResult",
    "OutOfBoundsError",
    "SingularPivotError",
    "StaleViewError",
    "State",
    "TriangularView",
    "UnknownAlgorithmError",
    "UnsupportedOperationError",
    "backward_substitution",
    "configure_logging",
    "create_algorithm",
    "default_registry",
    "determinant",
    "format_matrix",
    "forward_substitution",
    "get_logger",
    "gradient_descent",
    "invert",
    "load_matrix",
    "lu_decomposition",
    "lup_determinant",
    "newton_raphson",
    "parse_matrix",
    "save_matrix",
    "set_log_level",
    "solve",
    "unimodal_interval",
]
