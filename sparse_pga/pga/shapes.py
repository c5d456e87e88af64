"""
Blade algebra: output shapes and evaluation plans for every operation.

For two input shapes S1, S2 an operation's output shape holds blade b iff
some pair (b1 in S1, b2 in S2) contributes to b:

    geometric   every pair with a nonzero product
    outer       grade(b) == grade(b1) + grade(b2)
    inner       grade(b) == |grade(b1) - grade(b2)|
    commutator  b1 and b2 anticommute
    addition    S1 | S2 (values never inspected)
    dual        blade-wise complement permutation
    regressive  dual(outer(dual S1, dual S2))
    sandwich    geometric(geometric(S_T, S_X), reverse(S_T))

Derivations are pure functions of their integer arguments and are memoized
with lru_cache; the cache is write-once per key.
"""

import logging
from functools import lru_cache
from typing import NamedTuple, Tuple

from ..core.constants import NUM_BLADES
from ..core.types import BladeSet
from .blades import Blade, DUAL_PAIRS, GRADES, blades_of, describe, grade_mask, rank
from .cayley import CAYLEY, anticommutes, is_inner_term, is_outer_term

logger = logging.getLogger(__name__)

GEOMETRIC = 'geometric'
OUTER = 'outer'
INNER = 'inner'
COMMUTATOR = 'commutator'

PRODUCTS = (GEOMETRIC, OUTER, INNER, COMMUTATOR)

# (slot in operand a, slot in operand b, sign)
Term = Tuple[int, int, int]


class ProductPlan(NamedTuple):
    """
    Evaluation plan for one product of two shapes.

    Attributes:
        shape: Output BladeSet
        terms: One tuple of (slot_a, slot_b, sign) per output slot, in
            storage order; every tuple is non-empty
    """
    shape: BladeSet
    terms: Tuple[Tuple[Term, ...], ...]


def contributes(op: str, a: Blade, b: Blade) -> bool:
    if op == GEOMETRIC:
        return CAYLEY[int(a)][int(b)][0] != 0
    if op == OUTER:
        return is_outer_term(a, b)
    if op == INNER:
        return is_inner_term(a, b)
    if op == COMMUTATOR:
        return anticommutes(a, b)
    raise ValueError(f"Unknown product '{op}'. Expected one of {PRODUCTS}")


@lru_cache(maxsize=None)
def product_plan(op: str, shape_a: BladeSet, shape_b: BladeSet) -> ProductPlan:
    """
    Derive the output shape and per-slot terms of a product.

    Args:
        op: One of 'geometric', 'outer', 'inner', 'commutator'
        shape_a: Shape of the left operand
        shape_b: Shape of the right operand

    Returns:
        ProductPlan
    """
    contributions = [[] for _ in range(NUM_BLADES)]
    blades_a = blades_of(shape_a)
    blades_b = blades_of(shape_b)

    for i, a in enumerate(blades_a):
        for j, b in enumerate(blades_b):
            if not contributes(op, a, b):
                continue
            sign, blade = CAYLEY[int(a)][int(b)]
            contributions[int(blade)].append((i, j, sign))

    shape = 0
    terms = []
    for blade in Blade:
        if contributions[int(blade)]:
            shape |= blade.bit
            terms.append(tuple(contributions[int(blade)]))

    logger.debug(
        f"Derived {op} product {describe(shape_a)} x {describe(shape_b)} -> {describe(shape)}"
    )
    return ProductPlan(shape, tuple(terms))


def geometric_shape(shape_a: BladeSet, shape_b: BladeSet) -> BladeSet:
    return product_plan(GEOMETRIC, shape_a, shape_b).shape


def outer_shape(shape_a: BladeSet, shape_b: BladeSet) -> BladeSet:
    return product_plan(OUTER, shape_a, shape_b).shape


def inner_shape(shape_a: BladeSet, shape_b: BladeSet) -> BladeSet:
    return product_plan(INNER, shape_a, shape_b).shape


def commutator_shape(shape_a: BladeSet, shape_b: BladeSet) -> BladeSet:
    return product_plan(COMMUTATOR, shape_a, shape_b).shape


def addition_shape(shape_a: BladeSet, shape_b: BladeSet) -> BladeSet:
    """Union of the operand shapes, kept even where values cancel."""
    return shape_a | shape_b


@lru_cache(maxsize=None)
def dual_shape(shape: BladeSet) -> BladeSet:
    out = 0
    for blade in blades_of(shape):
        out |= DUAL_PAIRS[blade].bit
    return out


def regressive_shape(shape_a: BladeSet, shape_b: BladeSet) -> BladeSet:
    return dual_shape(outer_shape(dual_shape(shape_a), dual_shape(shape_b)))


def reverse_shape(shape: BladeSet) -> BladeSet:
    return shape


def sandwich_shape(transform: BladeSet, shape: BladeSet) -> BladeSet:
    """Shape of transform * x * reverse(transform)."""
    return geometric_shape(geometric_shape(transform, shape), reverse_shape(transform))


def grade_shape(shape: BladeSet, k: int) -> BladeSet:
    """Part of shape with grade k."""
    return shape & grade_mask(k)


@lru_cache(maxsize=None)
def dual_plan(shape: BladeSet) -> Tuple[int, ...]:
    """Source slot of every output slot of the dual."""
    out_shape = dual_shape(shape)
    return tuple(rank(DUAL_PAIRS[blade], shape) for blade in blades_of(out_shape))


@lru_cache(maxsize=None)
def merge_plan(shape_a: BladeSet, shape_b: BladeSet) -> Tuple[Tuple[int, int], ...]:
    """
    Slots read by addition/subtraction for each output slot.

    Returns:
        One (slot_a, slot_b) pair per output blade; -1 marks an operand that
        lacks the blade
    """
    plan = []
    for blade in blades_of(shape_a | shape_b):
        slot_a = rank(blade, shape_a) if shape_a & blade.bit else -1
        slot_b = rank(blade, shape_b) if shape_b & blade.bit else -1
        plan.append((slot_a, slot_b))
    return tuple(plan)


@lru_cache(maxsize=None)
def cast_plan(source: BladeSet, target: BladeSet) -> Tuple[int, ...]:
    """Source slot for each target slot, -1 where the source lacks the blade."""
    return tuple(
        rank(blade, source) if source & blade.bit else -1
        for blade in blades_of(target)
    )


# Per-blade sign maps from the blade's grade
REVERSE_SIGNS: Tuple[int, ...] = tuple(
    -1 if (k * (k - 1) // 2) % 2 else 1 for k in GRADES
)
CONJUGATE_SIGNS: Tuple[int, ...] = tuple(
    -1 if (k * (k + 1) // 2) % 2 else 1 for k in GRADES
)
INVOLUTE_SIGNS: Tuple[int, ...] = tuple(-1 if k % 2 else 1 for k in GRADES)


def clear_caches() -> None:
    """Drop every memoized derivation."""
    for fn in (product_plan, dual_shape, dual_plan, merge_plan, cast_plan):
        fn.cache_clear()
