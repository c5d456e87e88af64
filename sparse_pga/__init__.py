"""
sparse-pga: Sparse Projective Geometric Algebra for Python

Multivectors of G(3,0,1) that store only the blades they can carry. The set
of blades an object holds (its BladeSet, or shape) is a bitmask; products
derive the output shape and the contributing terms from the operand shapes
alone, so no zero terms are computed and no product branches on values.

Key Features:
- Named shapes: Plane, Line, Point, Rotor, Translator, Motor, ...
- Geometric, inner, outer, regressive and commutator products
- Reverse, conjugate, involute and dual
- Scalars can be floats, numpy arrays or torch tensors (autograd works)
- Dense 16-component torch reference implementation

Example:
    >>> import sparse_pga
    >>> from sparse_pga.pga import point, rotor_from_axis_angle, transform
    >>> R = rotor_from_axis_angle((0.0, 0.0, 1.0), 0.5)
    >>> P = transform(point(1.0, 0.0, 0.0), R)
"""

__version__ = "0.1.0"
__author__ = "sparse-pga Contributors"

from . import core
from . import backends
from . import pga
from . import utils

__all__ = [
    "core",
    "backends",
    "pga",
    "utils",
]
