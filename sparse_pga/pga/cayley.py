"""
Cayley table of G(3,0,1), derived from the generator reduction rule.

The product of two blades is computed by concatenating their generator
sequences and bubble sorting the result:
  - swapping two distinct adjacent generators flips the sign,
  - an adjacent pair e0 e0 annihilates the whole term (e0² = 0),
  - an adjacent pair of equal Euclidean generators is removed (e1² = e2² = e3² = 1).

The sorted survivor is then matched to the blade with the same generators,
correcting the sign by that blade's own ordering parity (e31 sorts to e1 e3
with one swap, so e1·e3 = -e31).

The table is generated once at import time.
"""

from typing import Dict, Optional, Sequence, Tuple

from ..core.constants import NUM_BLADES
from .blades import Blade, GENERATORS, GRADES

# Metric: e0^2 = 0, e1^2 = e2^2 = e3^2 = 1
METRIC: Dict[int, int] = {0: 0, 1: 1, 2: 1, 3: 1}


def canonical_blade(generators: Sequence[int]) -> Tuple[Tuple[int, ...], int]:
    """
    Sort distinct generators, counting swaps.

    Returns:
        (sorted generators, sign of the permutation)
    """
    blade = list(generators)
    sign = 1
    for i in range(len(blade)):
        for j in range(len(blade) - 1 - i):
            if blade[j] > blade[j + 1]:
                blade[j], blade[j + 1] = blade[j + 1], blade[j]
                sign = -sign
    return tuple(blade), sign


def reduce_generators(generators: Sequence[int]) -> Tuple[Tuple[int, ...], int]:
    """
    Reduce a generator word to canonical form.

    Returns:
        (sorted generators with no repeats, sign), where sign is 0 when the
        word contains e0 twice
    """
    combined = list(generators)
    sign = 1

    changed = True
    while changed:
        changed = False
        i = 0
        while i < len(combined) - 1:
            if combined[i] == combined[i + 1]:
                m = METRIC[combined[i]]
                if m == 0:
                    return (), 0
                sign *= m
                del combined[i:i + 2]
                changed = True
            elif combined[i] > combined[i + 1]:
                combined[i], combined[i + 1] = combined[i + 1], combined[i]
                sign = -sign
                changed = True
                i += 1
            else:
                i += 1

    return tuple(combined), sign


# Sorted generator tuple -> (blade, sign of the blade's own ordering)
_CANONICAL: Dict[Tuple[int, ...], Tuple[Blade, int]] = {}
for _blade, _gens in GENERATORS.items():
    _sorted, _sign = canonical_blade(_gens)
    _CANONICAL[_sorted] = (_blade, _sign)


def multiply_blades(a: Blade, b: Blade) -> Tuple[int, Optional[Blade]]:
    """
    Geometric product of two basis blades.

    Returns:
        (sign, blade) with sign in {-1, 0, 1}; blade is None when sign is 0

    Example:
        >>> multiply_blades(Blade.E1, Blade.E3)
        (-1, <Blade.E31: 6>)
        >>> multiply_blades(Blade.E0, Blade.E0)
        (0, None)
    """
    word = GENERATORS[Blade(a)] + GENERATORS[Blade(b)]
    reduced, sign = reduce_generators(word)
    if sign == 0:
        return 0, None
    blade, blade_sign = _CANONICAL[reduced]
    return sign * blade_sign, blade


def _build_cayley_table() -> Tuple[Tuple[Tuple[int, Optional[Blade]], ...], ...]:
    return tuple(
        tuple(multiply_blades(Blade(i), Blade(j)) for j in range(NUM_BLADES))
        for i in range(NUM_BLADES)
    )


# CAYLEY[i][j] = (sign, blade) for blade(i) * blade(j)
CAYLEY = _build_cayley_table()


def anticommutes(a: Blade, b: Blade) -> bool:
    """Whether a·b = -b·a with a nonzero product."""
    sign_ab, _ = CAYLEY[int(a)][int(b)]
    sign_ba, _ = CAYLEY[int(b)][int(a)]
    return sign_ab != 0 and sign_ab == -sign_ba


def is_outer_term(a: Blade, b: Blade) -> bool:
    """Whether a·b survives in the outer product (grades add)."""
    sign, blade = CAYLEY[int(a)][int(b)]
    return sign != 0 and GRADES[blade] == GRADES[int(a)] + GRADES[int(b)]


def is_inner_term(a: Blade, b: Blade) -> bool:
    """Whether a·b survives in the inner product (grades subtract)."""
    sign, blade = CAYLEY[int(a)][int(b)]
    return sign != 0 and GRADES[blade] == abs(GRADES[int(a)] - GRADES[int(b)])
