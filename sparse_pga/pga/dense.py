"""
Dense 16-component multivectors on torch tensors.

Every multivector carries all 16 blades in display order:

[s, e0, e1, e2, e3, e01, e02, e03, e12, e31, e23, e021, e013, e032, e123, e0123]
 0   1   2   3   4   5    6    7    8    9    10   11    12    13    14    15

Products contract the operands against (16, 16, 16) sign tensors built from
the same Cayley table as the sparse engines, so a dense result is the
reference a sparse result must agree with. Leading batch dimensions
broadcast through every operation.
"""

from __future__ import annotations
from typing import Dict, Union

import torch

from ..core.constants import NUM_BLADES
from ..core.types import BladeSet
from .algebra import Multivector, multivector_type
from .blades import Blade, DISPLAY_ORDER, DUAL_PAIRS, GRADES, blades_of
from .cayley import CAYLEY
from .shapes import (
    COMMUTATOR,
    CONJUGATE_SIGNS,
    GEOMETRIC,
    INNER,
    INVOLUTE_SIGNS,
    OUTER,
    REVERSE_SIGNS,
    contributes,
)

# Component index of each blade in display order
DISPLAY_INDEX: Dict[Blade, int] = {blade: i for i, blade in enumerate(DISPLAY_ORDER)}

IDX_S = DISPLAY_INDEX[Blade.SCALAR]
IDX_E0123 = DISPLAY_INDEX[Blade.E0123]

# Grade masks for extraction
GRADE_MASKS = tuple(
    [i for i, blade in enumerate(DISPLAY_ORDER) if GRADES[blade] == k]
    for k in range(5)
)


def _sign_vector(signs) -> torch.Tensor:
    return torch.tensor([signs[blade] for blade in DISPLAY_ORDER], dtype=torch.float64)


REVERSION_SIGNS = _sign_vector(REVERSE_SIGNS)
CONJUGATION_SIGNS = _sign_vector(CONJUGATE_SIGNS)
INVOLUTION_SIGNS = _sign_vector(INVOLUTE_SIGNS)

# The dual pairs each display slot with its mirror image
DUAL_INDEX = torch.tensor(
    [DISPLAY_INDEX[DUAL_PAIRS[blade]] for blade in DISPLAY_ORDER], dtype=torch.long
)


def _build_product_tensor(op: str) -> torch.Tensor:
    """
    Build table[i, j, k] = sign of blade k in blade(i) * blade(j) for op.
    """
    table = torch.zeros(NUM_BLADES, NUM_BLADES, NUM_BLADES, dtype=torch.float64)
    for i, a in enumerate(DISPLAY_ORDER):
        for j, b in enumerate(DISPLAY_ORDER):
            if not contributes(op, a, b):
                continue
            sign, blade = CAYLEY[int(a)][int(b)]
            table[i, j, DISPLAY_INDEX[blade]] = sign
    return table


PRODUCT_TABLES: Dict[str, torch.Tensor] = {
    op: _build_product_tensor(op) for op in (GEOMETRIC, OUTER, INNER, COMMUTATOR)
}


class DenseMultivector:
    """
    Dense multivector of G(3,0,1).

    Args:
        components: Tensor of shape (..., 16) in display order

    Raises:
        ValueError: If the last dimension is not 16
    """

    def __init__(self, components: torch.Tensor):
        if components.shape[-1] != NUM_BLADES:
            raise ValueError(
                f"Expected {NUM_BLADES} components in the last dimension, "
                f"got {components.shape[-1]}"
            )
        self.mv = components

    @property
    def shape(self) -> torch.Size:
        """Batch shape (all dimensions but the last)."""
        return self.mv.shape[:-1]

    @property
    def device(self) -> torch.device:
        return self.mv.device

    @property
    def dtype(self) -> torch.dtype:
        return self.mv.dtype

    def __getitem__(self, blade: Blade) -> torch.Tensor:
        return self.mv[..., DISPLAY_INDEX[Blade(blade)]]

    @property
    def scalar(self) -> torch.Tensor:
        return self.mv[..., IDX_S]

    def grade(self, k: int) -> 'DenseMultivector':
        """Extract the grade-k part."""
        out = torch.zeros_like(self.mv)
        idx = GRADE_MASKS[k]
        out[..., idx] = self.mv[..., idx]
        return DenseMultivector(out)

    def reverse(self) -> 'DenseMultivector':
        return DenseMultivector(self.mv * REVERSION_SIGNS.to(self.mv))

    def __invert__(self) -> 'DenseMultivector':
        return self.reverse()

    def conjugate(self) -> 'DenseMultivector':
        return DenseMultivector(self.mv * CONJUGATION_SIGNS.to(self.mv))

    def involute(self) -> 'DenseMultivector':
        return DenseMultivector(self.mv * INVOLUTION_SIGNS.to(self.mv))

    def dual(self) -> 'DenseMultivector':
        return DenseMultivector(self.mv[..., DUAL_INDEX.to(self.mv.device)])

    def _product(self, other: 'DenseMultivector', op: str) -> 'DenseMultivector':
        table = PRODUCT_TABLES[op].to(dtype=self.mv.dtype, device=self.mv.device)
        return DenseMultivector(torch.einsum('...i,...j,ijk->...k', self.mv, other.mv, table))

    def __mul__(self, other: Union['DenseMultivector', float, torch.Tensor]) -> 'DenseMultivector':
        if isinstance(other, DenseMultivector):
            return self._product(other, GEOMETRIC)
        return DenseMultivector(self.mv * torch.as_tensor(other, dtype=self.mv.dtype).unsqueeze(-1))

    def __rmul__(self, other: Union[float, torch.Tensor]) -> 'DenseMultivector':
        return self * other

    def __add__(self, other: 'DenseMultivector') -> 'DenseMultivector':
        return DenseMultivector(self.mv + other.mv)

    def __sub__(self, other: 'DenseMultivector') -> 'DenseMultivector':
        return DenseMultivector(self.mv - other.mv)

    def __neg__(self) -> 'DenseMultivector':
        return DenseMultivector(-self.mv)

    def __truediv__(self, other: Union[float, torch.Tensor]) -> 'DenseMultivector':
        return DenseMultivector(self.mv / torch.as_tensor(other, dtype=self.mv.dtype).unsqueeze(-1))

    def __xor__(self, other: 'DenseMultivector') -> 'DenseMultivector':
        return self._product(other, OUTER)

    def __or__(self, other: 'DenseMultivector') -> 'DenseMultivector':
        return self._product(other, INNER)

    def __and__(self, other: 'DenseMultivector') -> 'DenseMultivector':
        return (self.dual() ^ other.dual()).dual()

    def commutator(self, other: 'DenseMultivector') -> 'DenseMultivector':
        return self._product(other, COMMUTATOR)

    def support(self, atol: float = 0.0) -> BladeSet:
        """BladeSet of the blades with a component above atol anywhere in the batch."""
        nonzero = (self.mv.abs() > atol).reshape(-1, NUM_BLADES).any(dim=0)
        shape = 0
        for i, blade in enumerate(DISPLAY_ORDER):
            if bool(nonzero[i]):
                shape |= blade.bit
        return shape

    def __repr__(self) -> str:
        return f"DenseMultivector(shape={tuple(self.shape)}, dtype={self.dtype})"


def to_dense(mv: Multivector, dtype: torch.dtype = torch.float64) -> DenseMultivector:
    """Expand a sparse multivector to all 16 components."""
    values = [torch.as_tensor(v, dtype=dtype) for v in mv.values]
    if values:
        values = list(torch.broadcast_tensors(*values))
        batch = values[0].shape
        device = values[0].device
    else:
        batch, device = torch.Size(), torch.device('cpu')

    components = torch.zeros(*batch, NUM_BLADES, dtype=dtype, device=device)
    for blade, value in zip(mv.BLADES, values):
        components[..., DISPLAY_INDEX[blade]] = value
    return DenseMultivector(components)


def from_dense(dense: DenseMultivector, shape: BladeSet) -> Multivector:
    """Read the blades of shape out of a dense multivector."""
    cls = multivector_type(shape)
    return cls(*(dense.mv[..., DISPLAY_INDEX[blade]] for blade in blades_of(shape)))
