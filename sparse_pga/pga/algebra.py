"""
Sparse multivectors of Projective Geometric Algebra G(3,0,1).

A multivector stores one value per blade of its shape (BladeSet), in storage
order; the slot of blade i is the number of present blades below i. Every
distinct shape gets its own class, created on first use, whose attributes
are exactly the blades of the shape:

    >>> p = Plane(e1=1.0, e2=2.0, e3=3.0, e0=4.0)
    >>> p.e2
    2.0
    >>> p.scalar
    AttributeError: 'Plane' object has no attribute 'scalar'

Products never branch on values: the output shape and the contributing
(slot_a, slot_b, sign) terms come from the blade algebra in shapes.py and are
computed once per pair of shapes. Component values only need binary
+ - * / and unary -, so floats, numpy arrays and torch tensors all work.

Operators:
    a * b    geometric product
    a | b    inner product
    a ^ b    outer product (meet)
    a & b    regressive product (join)
    ~a       reverse
    x << T   T x ~T, projected back onto the shape of x
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Optional, Tuple, Type, Union

import numpy as np

from ..backends import backend_for, default_backend, to_numpy
from ..core.types import SCALAR_TYPES, BladeSet, ScalarLike
from ..utils.config import get_config
from . import blades as blade_sets
from .blades import Blade, blades_of, describe, rank, to_blade
from .display import format_multivector
from .shapes import (
    COMMUTATOR,
    CONJUGATE_SIGNS,
    GEOMETRIC,
    INNER,
    INVOLUTE_SIGNS,
    OUTER,
    REVERSE_SIGNS,
    ProductPlan,
    cast_plan,
    dual_plan,
    dual_shape,
    grade_shape,
    merge_plan,
    product_plan,
)

logger = logging.getLogger(__name__)


class Multivector:
    """
    Base class of every shape-specific multivector class.

    Do not instantiate directly; use a named class (Plane, Point, Motor, ...)
    or multivector_type(shape).

    Construction:
        Plane(1.0, 2.0, 3.0, 4.0)        # positional, in storage order
        Plane(e0=4.0, e1=1.0)            # by blade name, others zero
        Plane()                          # all zero (configured backend)

    Raises:
        ValueError: Wrong number of positional values, or a keyword naming a
            blade the shape does not have
        TypeError: Positional and keyword values mixed
    """

    SHAPE: BladeSet = blade_sets.ZERO
    BLADES: Tuple[Blade, ...] = ()

    __slots__ = ('values',)

    # Make numpy defer to our reflected operators (np.float64(2) * mv)
    __array_ufunc__ = None

    # Multivectors are not sequences
    __iter__ = None

    def __init__(self, *values: ScalarLike, **named: ScalarLike):
        cls = type(self)
        if cls is Multivector:
            raise TypeError("Multivector is abstract; use multivector_type(shape)")
        if values and named:
            raise TypeError(
                f"{cls.__name__} takes positional or keyword components, not both"
            )

        if named:
            labels = {b.label for b in cls.BLADES}
            unknown = sorted(set(named) - labels)
            if unknown:
                raise ValueError(
                    f"{cls.__name__} has no blade(s) {unknown}; "
                    f"its blades are {describe(cls.SHAPE)}"
                )
            like = next(iter(named.values()))
            zero = backend_for(like).zero(like)
            values = tuple(named.get(b.label, zero) for b in cls.BLADES)
        elif values:
            if len(values) != len(cls.BLADES):
                raise ValueError(
                    f"Expected {len(cls.BLADES)} components for {cls.__name__}, "
                    f"got {len(values)}"
                )
        else:
            backend = default_backend()
            values = tuple(backend.zero() for _ in cls.BLADES)

        self.values = list(values)

    # -------------------------------------------------------------------------
    # Shape and component access
    # -------------------------------------------------------------------------

    @property
    def shape(self) -> BladeSet:
        """BladeSet of this multivector."""
        return self.SHAPE

    @property
    def blades(self) -> Tuple[Blade, ...]:
        return self.BLADES

    def _slot(self, key) -> int:
        blade = to_blade(key)
        if not self.SHAPE & blade.bit:
            raise KeyError(f"{type(self).__name__} has no blade '{blade.label}'")
        return rank(blade, self.SHAPE)

    def __getitem__(self, key: Union[Blade, str, int]) -> Any:
        return self.values[self._slot(key)]

    def __setitem__(self, key: Union[Blade, str, int], value: ScalarLike) -> None:
        self.values[self._slot(key)] = value

    def __contains__(self, key: Union[Blade, str, int]) -> bool:
        return bool(self.SHAPE & to_blade(key).bit)

    def get(self, key: Union[Blade, str, int], default: Any = None) -> Any:
        """Component of blade, or default when the shape lacks it."""
        blade = to_blade(key)
        if not self.SHAPE & blade.bit:
            return default
        return self.values[rank(blade, self.SHAPE)]

    def items(self) -> Iterator[Tuple[Blade, Any]]:
        return zip(self.BLADES, self.values)

    def copy(self) -> 'Multivector':
        return type(self)(*self.values)

    def map(self, fn) -> 'Multivector':
        """Same shape, fn applied to every component (e.g. Tensor.detach)."""
        return type(self)(*(fn(v) for v in self.values))

    # -------------------------------------------------------------------------
    # Unary operations
    # -------------------------------------------------------------------------

    def reverse(self) -> 'Multivector':
        return reverse(self)

    def conjugate(self) -> 'Multivector':
        return conjugate(self)

    def involute(self) -> 'Multivector':
        return involute(self)

    def dual(self) -> 'Multivector':
        return dual(self)

    def grade(self, k: int) -> 'Multivector':
        return grade(self, k)

    def cast(self, target: Union[BladeSet, Type['Multivector']]) -> 'Multivector':
        return cast(self, target)

    def norm(self) -> Any:
        return norm(self)

    def inorm(self) -> Any:
        return inorm(self)

    def normalized(self) -> 'Multivector':
        return normalized(self)

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __mul__(self, other):
        other = _as_multivector(other)
        if other is None:
            return NotImplemented
        return geometric_product(self, other)

    def __rmul__(self, other):
        other = _as_multivector(other)
        if other is None:
            return NotImplemented
        return geometric_product(other, self)

    def __add__(self, other):
        other = _as_multivector(other)
        if other is None:
            return NotImplemented
        return addition(self, other)

    def __radd__(self, other):
        other = _as_multivector(other)
        if other is None:
            return NotImplemented
        return addition(other, self)

    def __sub__(self, other):
        other = _as_multivector(other)
        if other is None:
            return NotImplemented
        return subtraction(self, other)

    def __rsub__(self, other):
        other = _as_multivector(other)
        if other is None:
            return NotImplemented
        return subtraction(other, self)

    def __neg__(self) -> 'Multivector':
        return type(self)(*(-v for v in self.values))

    def __pos__(self) -> 'Multivector':
        return self

    def __truediv__(self, other):
        if isinstance(other, Multivector) or not isinstance(other, SCALAR_TYPES):
            return NotImplemented
        divide = backend_for(other).divide
        return type(self)(*(divide(v, other) for v in self.values))

    def __or__(self, other):
        other = _as_multivector(other)
        if other is None:
            return NotImplemented
        return inner_product(self, other)

    def __ror__(self, other):
        other = _as_multivector(other)
        if other is None:
            return NotImplemented
        return inner_product(other, self)

    def __xor__(self, other):
        other = _as_multivector(other)
        if other is None:
            return NotImplemented
        return outer_product(self, other)

    def __rxor__(self, other):
        other = _as_multivector(other)
        if other is None:
            return NotImplemented
        return outer_product(other, self)

    def __and__(self, other):
        if not isinstance(other, Multivector):
            return NotImplemented
        return regressive_product(self, other)

    def __invert__(self) -> 'Multivector':
        return reverse(self)

    def __lshift__(self, transform):
        if not isinstance(transform, Multivector):
            return NotImplemented
        return transform_object(self, transform)

    def __repr__(self) -> str:
        parts = ', '.join(f"{b.label}={v!r}" for b, v in self.items())
        return f"{type(self).__name__}({parts})"

    def __str__(self) -> str:
        return format_multivector(self).rstrip('\n')


# =============================================================================
# Per-shape classes
# =============================================================================

_TYPES: Dict[BladeSet, Type[Multivector]] = {}


def _component(slot: int, blade: Blade) -> property:
    def fget(self):
        return self.values[slot]

    def fset(self, value):
        self.values[slot] = value

    return property(fget, fset, doc=f"Coefficient of {blade.label}.")


def multivector_type(shape: BladeSet, name: Optional[str] = None) -> Type[Multivector]:
    """
    Class for multivectors of the given shape, created on first use.

    The class defines one read/write property per present blade and nothing
    for absent blades, so reading an absent blade is an AttributeError.

    Args:
        shape: BladeSet
        name: Class name used when the class is first created

    Returns:
        Multivector subclass (the same object for every call with this shape)
    """
    shape &= blade_sets.FULL
    cls = _TYPES.get(shape)
    if cls is None:
        present = blades_of(shape)
        namespace = {
            '__slots__': (),
            '__module__': __name__,
            '__doc__': f"Multivector with blades {describe(shape)}.",
            'SHAPE': shape,
            'BLADES': present,
        }
        for slot, blade in enumerate(present):
            namespace[blade.label] = _component(slot, blade)
        created = type(name or f"Multivector_{shape:04x}", (Multivector,), namespace)
        # Concurrent callers racing on a new shape all keep the stored class
        cls = _TYPES.setdefault(shape, created)
        if cls is created:
            logger.debug(f"Created multivector class {cls.__name__} for {describe(shape)}")
    return cls


Zero = multivector_type(blade_sets.ZERO, 'Zero')
Scalar = multivector_type(blade_sets.SCALAR, 'Scalar')
Complex = multivector_type(blade_sets.COMPLEX, 'Complex')
DualNumber = multivector_type(blade_sets.DUAL_NUMBER, 'DualNumber')
Plane = multivector_type(blade_sets.PLANE, 'Plane')
Line = multivector_type(blade_sets.LINE, 'Line')
Point = multivector_type(blade_sets.POINT, 'Point')
Rotor = multivector_type(blade_sets.ROTOR, 'Rotor')
Translator = multivector_type(blade_sets.TRANSLATOR, 'Translator')
Motor = multivector_type(blade_sets.MOTOR, 'Motor')
FullMultivector = multivector_type(blade_sets.FULL, 'FullMultivector')


def basis(blade: Union[Blade, str], coeff: ScalarLike = 1.0) -> Multivector:
    """Single-blade multivector coeff * blade."""
    blade = to_blade(blade)
    return multivector_type(blade.bit)(coeff)


# =============================================================================
# Helpers
# =============================================================================

def _as_multivector(value) -> Optional[Multivector]:
    if isinstance(value, Multivector):
        return value
    if isinstance(value, SCALAR_TYPES):
        return Scalar(value)
    return None


def _coerce(value) -> Multivector:
    mv = _as_multivector(value)
    if mv is None:
        raise TypeError(f"Cannot use {type(value).__name__} as a multivector")
    return mv


def _zero_like(mv: Multivector) -> Any:
    if mv.values:
        like = mv.values[0]
        return backend_for(like).zero(like)
    return default_backend().zero()


def _evaluate(plan: ProductPlan, a: list, b: list) -> Multivector:
    out = []
    for terms in plan.terms:
        i, j, sign = terms[0]
        acc = a[i] * b[j]
        if sign < 0:
            acc = -acc
        for i, j, sign in terms[1:]:
            if sign > 0:
                acc = acc + a[i] * b[j]
            else:
                acc = acc - a[i] * b[j]
        out.append(acc)
    return multivector_type(plan.shape)(*out)


def _apply_signs(mv: Multivector, signs: Tuple[int, ...]) -> Multivector:
    return type(mv)(*(
        v if signs[int(b)] > 0 else -v for b, v in mv.items()
    ))


# =============================================================================
# Product engines
# =============================================================================

def geometric_product(a: Multivector, b: Multivector) -> Multivector:
    """
    Geometric product a * b.

    Only slots present in the operands are read; the output shape holds
    exactly the blades some pair of input blades reduces to.
    """
    a, b = _coerce(a), _coerce(b)
    return _evaluate(product_plan(GEOMETRIC, a.SHAPE, b.SHAPE), a.values, b.values)


def outer_product(a: Multivector, b: Multivector) -> Multivector:
    """Outer (wedge) product a ^ b: pairs whose grades add."""
    a, b = _coerce(a), _coerce(b)
    return _evaluate(product_plan(OUTER, a.SHAPE, b.SHAPE), a.values, b.values)


def inner_product(a: Multivector, b: Multivector) -> Multivector:
    """Symmetric inner product a | b: pairs whose grades subtract."""
    a, b = _coerce(a), _coerce(b)
    return _evaluate(product_plan(INNER, a.SHAPE, b.SHAPE), a.values, b.values)


def commutator_product(a: Multivector, b: Multivector) -> Multivector:
    """Commutator product (ab - ba) / 2."""
    a, b = _coerce(a), _coerce(b)
    return _evaluate(product_plan(COMMUTATOR, a.SHAPE, b.SHAPE), a.values, b.values)


def regressive_product(a: Multivector, b: Multivector) -> Multivector:
    """
    Regressive product (join) a & b = dual(dual(a) ^ dual(b)).

    The dual is the unsigned blade permutation, so the orientation of the
    result follows it: joins of points and lines can differ by an overall
    sign from a signed-complement join. Incidence (a zero join) is exact.
    """
    return dual(outer_product(dual(_coerce(a)), dual(_coerce(b))))


def addition(a: Multivector, b: Multivector) -> Multivector:
    """
    Componentwise sum.

    The output shape is the union of the operand shapes, also for blades
    whose values cancel.
    """
    a, b = _coerce(a), _coerce(b)
    av, bv = a.values, b.values
    out = []
    for i, j in merge_plan(a.SHAPE, b.SHAPE):
        if i < 0:
            out.append(bv[j])
        elif j < 0:
            out.append(av[i])
        else:
            out.append(av[i] + bv[j])
    return multivector_type(a.SHAPE | b.SHAPE)(*out)


def subtraction(a: Multivector, b: Multivector) -> Multivector:
    """Componentwise difference, shaped like addition."""
    a, b = _coerce(a), _coerce(b)
    av, bv = a.values, b.values
    out = []
    for i, j in merge_plan(a.SHAPE, b.SHAPE):
        if i < 0:
            out.append(-bv[j])
        elif j < 0:
            out.append(av[i])
        else:
            out.append(av[i] - bv[j])
    return multivector_type(a.SHAPE | b.SHAPE)(*out)


def dual(a: Multivector) -> Multivector:
    """Structural dual: every value moves to its complement blade, unsigned."""
    a = _coerce(a)
    return multivector_type(dual_shape(a.SHAPE))(*(a.values[k] for k in dual_plan(a.SHAPE)))


def reverse(a: Multivector) -> Multivector:
    """Reverse: grade k scaled by (-1)^(k(k-1)/2)."""
    return _apply_signs(_coerce(a), REVERSE_SIGNS)


def conjugate(a: Multivector) -> Multivector:
    """Clifford conjugate: grade k scaled by (-1)^(k(k+1)/2)."""
    return _apply_signs(_coerce(a), CONJUGATE_SIGNS)


def involute(a: Multivector) -> Multivector:
    """Grade involution: grade k scaled by (-1)^k."""
    return _apply_signs(_coerce(a), INVOLUTE_SIGNS)


def sandwich(transform: Multivector, x: Multivector) -> Multivector:
    """transform * x * reverse(transform), keeping every derived blade."""
    return geometric_product(geometric_product(transform, x), reverse(transform))


def transform_object(x: Multivector, transform: Multivector) -> Multivector:
    """Sandwich x with transform and project the result onto the shape of x."""
    return cast(sandwich(transform, x), x.SHAPE)


# =============================================================================
# Shape conversion and norms
# =============================================================================

def cast(a: Multivector, target: Union[BladeSet, Type[Multivector]]) -> Multivector:
    """
    Re-express a in another shape.

    Blades missing from target are dropped; blades missing from a are zero.
    """
    shape = target.SHAPE if isinstance(target, type) else target
    cls = multivector_type(shape)
    zero = None
    out = []
    for k in cast_plan(a.SHAPE, cls.SHAPE):
        if k < 0:
            if zero is None:
                zero = _zero_like(a)
            out.append(zero)
        else:
            out.append(a.values[k])
    return cls(*out)


def grade(a: Multivector, k: int) -> Multivector:
    """Grade-k part of a."""
    return cast(a, grade_shape(a.SHAPE, k))


def scalar_part(a: Multivector) -> Any:
    value = a.get(Blade.SCALAR)
    if value is None:
        return _zero_like(a)
    return value


def norm(a: Multivector) -> Any:
    """Euclidean norm sqrt(|<a * conjugate(a)>_0|)."""
    s = scalar_part(geometric_product(a, conjugate(a)))
    return backend_for(s).sqrt(abs(s))


def inorm(a: Multivector) -> Any:
    """Ideal norm: the norm of the dual."""
    return norm(dual(a))


def normalized(a: Multivector) -> Multivector:
    """
    a divided by its norm.

    No degeneracy check: a null object comes back with inf/NaN components,
    for plain floats as for numpy and torch.
    """
    return a / norm(a)


def allclose(
    a: Multivector,
    b: Multivector,
    atol: Optional[float] = None,
    rtol: Optional[float] = None,
) -> bool:
    """
    Whether two multivectors agree on the union of their shapes.

    Blades absent from one side compare against zero.
    """
    config = get_config()
    atol = config.atol if atol is None else atol
    rtol = config.rtol if rtol is None else rtol
    a, b = _coerce(a), _coerce(b)
    for blade in blades_of(a.SHAPE | b.SHAPE):
        x = to_numpy(a.get(blade, 0.0))
        y = to_numpy(b.get(blade, 0.0))
        if not np.allclose(x, y, atol=atol, rtol=rtol):
            return False
    return True
