"""Print the derived Cayley table for PGA(3,0,1) and check its algebraic laws."""
import itertools

import torch

from sparse_pga.pga.blades import Blade, DISPLAY_ORDER, DUAL_PAIRS, PLANE, POINT, LINE, MOTOR, ROTOR, TRANSLATOR, describe
from sparse_pga.pga.cayley import CAYLEY
from sparse_pga.pga.shapes import geometric_shape, sandwich_shape
from sparse_pga.pga.dense import PRODUCT_TABLES

errors = []

# Associativity: (a b) c == a (b c) for every triple of blades
for a, b, c in itertools.product(Blade, repeat=3):
    s_ab, ab = CAYLEY[a][b]
    s_bc, bc = CAYLEY[b][c]
    left = (0, None) if s_ab == 0 else CAYLEY[ab][c]
    right = (0, None) if s_bc == 0 else CAYLEY[a][bc]
    left = (s_ab * left[0], left[1])
    right = (s_bc * right[0], right[1])
    if left[0] != right[0] or (left[0] != 0 and left[1] != right[1]):
        errors.append(f"associativity: ({a.label} {b.label}) {c.label}")

# Metric on the generators
for blade, expected in ((Blade.E0, 0), (Blade.E1, 1), (Blade.E2, 1), (Blade.E3, 1)):
    if CAYLEY[blade][blade][0] != expected:
        errors.append(f"metric: {blade.label}^2 != {expected}")

# Dual is an involution
for blade in Blade:
    if DUAL_PAIRS[DUAL_PAIRS[blade]] is not blade:
        errors.append(f"dual: {blade.label} is not an involution")

# Motors map the named shapes back onto themselves
for name, shape in (("plane", PLANE), ("line", LINE), ("point", POINT)):
    for versor_name, versor in (("rotor", ROTOR), ("translator", TRANSLATOR), ("motor", MOTOR)):
        derived = sandwich_shape(versor, shape)
        if not derived & shape == shape:
            errors.append(f"sandwich: {versor_name} x {name} -> {describe(derived)}")

# Motors are closed under composition
if geometric_shape(MOTOR, MOTOR) != MOTOR:
    errors.append(f"closure: motor x motor -> {describe(geometric_shape(MOTOR, MOTOR))}")

print(f"Found {len(errors)} problems:")
for error in errors:
    print(f"  {error}")

# Print the table in display order
width = max(len(b.label) for b in Blade) + 2
print("\n\n# Geometric product, display order (row * column):")
print(" " * width + "".join(b.label.rjust(width) for b in DISPLAY_ORDER))
for a in DISPLAY_ORDER:
    cells = []
    for b in DISPLAY_ORDER:
        sign, blade = CAYLEY[a][b]
        if sign == 0:
            cells.append("0".rjust(width))
        else:
            cells.append((("-" if sign < 0 else "") + blade.label).rjust(width))
    print(a.label.rjust(width) + "".join(cells))

nonzero = {op: int(torch.count_nonzero(table)) for op, table in PRODUCT_TABLES.items()}
print(f"\nNonzero terms per product: {nonzero}")
