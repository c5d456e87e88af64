"""
Basis blades of G(3,0,1) and BladeSet bitmask helpers.

The 16 blades are indexed in storage order, grouped so that the four
groups of four line up with the common geometric objects:

    idx  0-3:   e1, e2, e3, e0              (planes)
    idx  4-7:   1, e12, e31, e23            (rotors)
    idx  8-11:  e01, e02, e03, e0123        (translators, ideal lines)
    idx 12-15:  e021, e013, e032, e123      (points)

A BladeSet ("shape") is an int whose bit i is set when blade i is present.
The debug/display order differs from the storage order:

    1, e0, e1, e2, e3, e01, e02, e03, e12, e31, e23, e021, e013, e032, e123, e0123

Metric: e1² = e2² = e3² = +1, e0² = 0.
"""

from enum import IntEnum
from typing import Dict, Iterable, Tuple

from ..core.constants import FULL_SHAPE, MAX_GRADE, NUM_BLADES
from ..core.types import BladeSet


class Blade(IntEnum):
    """Basis blade, valued by its storage index."""

    E1 = 0
    E2 = 1
    E3 = 2
    E0 = 3
    SCALAR = 4
    E12 = 5
    E31 = 6
    E23 = 7
    E01 = 8
    E02 = 9
    E03 = 10
    E0123 = 11
    E021 = 12
    E013 = 13
    E032 = 14
    E123 = 15

    @property
    def label(self) -> str:
        """Attribute name of the blade ('scalar', 'e0', 'e12', ...)."""
        return self.name.lower()

    @property
    def display_name(self) -> str:
        """Name used in the debug text representation (empty for the scalar)."""
        return '' if self is Blade.SCALAR else self.label

    @property
    def generators(self) -> Tuple[int, ...]:
        return GENERATORS[self]

    @property
    def grade(self) -> int:
        return len(GENERATORS[self])

    @property
    def bit(self) -> BladeSet:
        return 1 << int(self)


# Generator sequence of each blade, in the order the blade is written.
# e31 is e3∧e1 (not e13), e021 is e0∧e2∧e1, and so on.
GENERATORS: Dict[Blade, Tuple[int, ...]] = {
    Blade.E1: (1,),
    Blade.E2: (2,),
    Blade.E3: (3,),
    Blade.E0: (0,),
    Blade.SCALAR: (),
    Blade.E12: (1, 2),
    Blade.E31: (3, 1),
    Blade.E23: (2, 3),
    Blade.E01: (0, 1),
    Blade.E02: (0, 2),
    Blade.E03: (0, 3),
    Blade.E0123: (0, 1, 2, 3),
    Blade.E021: (0, 2, 1),
    Blade.E013: (0, 1, 3),
    Blade.E032: (0, 3, 2),
    Blade.E123: (1, 2, 3),
}

GRADES: Tuple[int, ...] = tuple(len(GENERATORS[Blade(i)]) for i in range(NUM_BLADES))

DISPLAY_ORDER: Tuple[Blade, ...] = (
    Blade.SCALAR,
    Blade.E0, Blade.E1, Blade.E2, Blade.E3,
    Blade.E01, Blade.E02, Blade.E03, Blade.E12, Blade.E31, Blade.E23,
    Blade.E021, Blade.E013, Blade.E032, Blade.E123,
    Blade.E0123,
)

# Structural complement of each blade; an involution with no fixed points
DUAL_PAIRS: Dict[Blade, Blade] = {
    Blade.SCALAR: Blade.E0123,
    Blade.E1: Blade.E032,
    Blade.E2: Blade.E013,
    Blade.E3: Blade.E021,
    Blade.E0: Blade.E123,
    Blade.E01: Blade.E23,
    Blade.E02: Blade.E31,
    Blade.E03: Blade.E12,
}
DUAL_PAIRS.update({v: k for k, v in list(DUAL_PAIRS.items())})

_BY_LABEL: Dict[str, Blade] = {b.label: b for b in Blade}


def blade_from_label(label: str) -> Blade:
    """
    Look up a blade by attribute name.

    Raises:
        KeyError: If label is not the name of a blade
    """
    try:
        return _BY_LABEL[label]
    except KeyError:
        raise KeyError(f"Unknown blade '{label}'") from None


def to_blade(key) -> Blade:
    """Accept a Blade, a storage index or a label."""
    if isinstance(key, str):
        return blade_from_label(key)
    return Blade(key)


# =============================================================================
# BladeSet operations
# =============================================================================

def has(blade: Blade, shape: BladeSet) -> bool:
    """Whether blade is present in shape."""
    return bool((shape >> int(blade)) & 1)


def popcount(shape: BladeSet) -> int:
    """Number of blades present in shape."""
    return bin(shape & FULL_SHAPE).count('1')


def rank(blade: Blade, shape: BladeSet) -> int:
    """Storage position of blade within shape: the number of set bits below it."""
    return popcount(shape & ((1 << int(blade)) - 1))


def make_shape(
    scalar: bool = False,
    e0: bool = False,
    e1: bool = False,
    e2: bool = False,
    e3: bool = False,
    e01: bool = False,
    e02: bool = False,
    e03: bool = False,
    e12: bool = False,
    e31: bool = False,
    e23: bool = False,
    e021: bool = False,
    e013: bool = False,
    e032: bool = False,
    e123: bool = False,
    e0123: bool = False,
) -> BladeSet:
    """
    Build a BladeSet from 16 presence flags given in display order.

    Example:
        >>> make_shape(e0=True, e1=True, e2=True, e3=True) == PLANE
        True
    """
    flags = (scalar, e0, e1, e2, e3, e01, e02, e03, e12, e31, e23,
             e021, e013, e032, e123, e0123)
    shape = 0
    for blade, flag in zip(DISPLAY_ORDER, flags):
        if flag:
            shape |= blade.bit
    return shape


def shape_of(*blades: Blade) -> BladeSet:
    """BladeSet containing exactly the given blades."""
    shape = 0
    for blade in blades:
        shape |= to_blade(blade).bit
    return shape


def blades_of(shape: BladeSet) -> Tuple[Blade, ...]:
    """Blades present in shape, in storage order."""
    return tuple(b for b in Blade if has(b, shape))


def grade_of(blade: Blade) -> int:
    return GRADES[int(blade)]


def grade_mask(k: int) -> BladeSet:
    """BladeSet of every blade of grade k."""
    if not 0 <= k <= MAX_GRADE:
        return 0
    return shape_of(*(b for b in Blade if GRADES[int(b)] == k))


def describe(shape: BladeSet) -> str:
    """Human readable shape, e.g. '{e0, e1, e2, e3}'."""
    return '{' + ', '.join(b.label for b in DISPLAY_ORDER if has(b, shape)) + '}'


def iter_shapes() -> Iterable[BladeSet]:
    """Every BladeSet, from the empty one to the full one."""
    return range(FULL_SHAPE + 1)


# =============================================================================
# Named shapes
# =============================================================================

ZERO: BladeSet = 0
SCALAR: BladeSet = shape_of(Blade.SCALAR)
COMPLEX: BladeSet = shape_of(Blade.SCALAR, Blade.E12)
DUAL_NUMBER: BladeSet = shape_of(Blade.SCALAR, Blade.E0)
PLANE: BladeSet = shape_of(Blade.E0, Blade.E1, Blade.E2, Blade.E3)
LINE: BladeSet = shape_of(
    Blade.E01, Blade.E02, Blade.E03, Blade.E12, Blade.E31, Blade.E23
)
POINT: BladeSet = shape_of(Blade.E021, Blade.E013, Blade.E032, Blade.E123)
ROTOR: BladeSet = shape_of(Blade.SCALAR, Blade.E12, Blade.E31, Blade.E23)
TRANSLATOR: BladeSet = shape_of(Blade.SCALAR, Blade.E01, Blade.E02, Blade.E03)
MOTOR: BladeSet = ROTOR | TRANSLATOR | shape_of(Blade.E0123)
FULL: BladeSet = FULL_SHAPE
