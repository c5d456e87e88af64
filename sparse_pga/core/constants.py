"""
Centralized constants for sparse-pga.

This module defines the default values and numeric constants used throughout
the library. Keeping them here makes it easy to adjust defaults globally.

Usage:
    from sparse_pga.core.constants import DEFAULT_ATOL

    def my_check(a, b, atol: float = DEFAULT_ATOL):
        ...
"""

# =============================================================================
# Algebra
# =============================================================================

# Number of basis blades of G(3,0,1)
NUM_BLADES: int = 16

# Mask with every blade present
FULL_SHAPE: int = (1 << NUM_BLADES) - 1

# Highest grade (the pseudoscalar e0123)
MAX_GRADE: int = 4


# =============================================================================
# Numeric Constants
# =============================================================================

# Absolute tolerance used by allclose comparisons
DEFAULT_ATOL: float = 1e-6

# Relative tolerance used by allclose comparisons
DEFAULT_RTOL: float = 1e-5

# Significant digits used by the debug text representation ('%0.7g')
DEFAULT_PRINT_PRECISION: int = 7


# =============================================================================
# Scalar Backends
# =============================================================================

BACKEND_FLOAT: str = "float"
BACKEND_NUMPY: str = "numpy"
BACKEND_TORCH: str = "torch"

# Backend used when a multivector is built without any values
DEFAULT_BACKEND: str = BACKEND_FLOAT

# Floating point dtype name for the torch backend
DEFAULT_TORCH_DTYPE: str = "float64"
