"""
Core module for sparse-pga.

Contains:
- Constants: Centralized default values and numeric constants
- Types: Type aliases for blade sets and scalar values
- Base: Abstract base class for scalar backends
"""

from .constants import (
    NUM_BLADES,
    FULL_SHAPE,
    MAX_GRADE,
    DEFAULT_ATOL,
    DEFAULT_RTOL,
    DEFAULT_PRINT_PRECISION,
    DEFAULT_BACKEND,
    DEFAULT_TORCH_DTYPE,
    BACKEND_FLOAT,
    BACKEND_NUMPY,
    BACKEND_TORCH,
)

from .types import (
    BladeSet,
    ScalarLike,
    Vector3,
    BLADESET_CONVENTION,
)

from .base import ScalarBackend

__all__ = [
    # Constants
    "NUM_BLADES",
    "FULL_SHAPE",
    "MAX_GRADE",
    "DEFAULT_ATOL",
    "DEFAULT_RTOL",
    "DEFAULT_PRINT_PRECISION",
    "DEFAULT_BACKEND",
    "DEFAULT_TORCH_DTYPE",
    "BACKEND_FLOAT",
    "BACKEND_NUMPY",
    "BACKEND_TORCH",
    # Types
    "BladeSet",
    "ScalarLike",
    "Vector3",
    "BLADESET_CONVENTION",
    # Base classes
    "ScalarBackend",
]
