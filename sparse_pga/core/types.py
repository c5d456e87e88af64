"""
Type aliases for sparse-pga.

BladeSet convention:
    A BladeSet (or "shape") is a plain int bitmask over the 16 blade indices.
    Bit i set means a multivector of that shape stores a value for blade i.

        e1=0  e2=1  e3=2  e0=3
        1=4   e12=5 e31=6 e23=7
        e01=8 e02=9 e03=10 e0123=11
        e021=12 e013=13 e032=14 e123=15
"""

from numbers import Number
from typing import Sequence, Tuple, Union

import numpy as np
import torch

# Bitmask over blade indices
BladeSet = int

# Anything the product engines accept as a component value
ScalarLike = Union[float, int, np.floating, np.ndarray, torch.Tensor]

# Cartesian triple
Vector3 = Union[Tuple[float, float, float], Sequence[float], np.ndarray, torch.Tensor]

# Runtime check for values that can be lifted to a Scalar multivector
SCALAR_TYPES = (Number, np.generic, np.ndarray, torch.Tensor)

BLADESET_CONVENTION = """
BladeSet bit layout (ascending storage order):
    bits 0-3:   e1, e2, e3, e0
    bits 4-7:   scalar, e12, e31, e23
    bits 8-11:  e01, e02, e03, e0123
    bits 12-15: e021, e013, e032, e123
"""
