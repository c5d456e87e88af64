"""
Tests for the blade algebra: output shapes derived from operand shapes.
"""

import pytest
import torch

from sparse_pga.pga import blades
from sparse_pga.pga.algebra import multivector_type
from sparse_pga.pga.blades import Blade, popcount, shape_of
from sparse_pga.pga.dense import to_dense
from sparse_pga.pga.shapes import (
    COMMUTATOR,
    GEOMETRIC,
    INNER,
    OUTER,
    addition_shape,
    cast_plan,
    commutator_shape,
    dual_shape,
    geometric_shape,
    grade_shape,
    inner_shape,
    merge_plan,
    outer_shape,
    product_plan,
    regressive_shape,
    sandwich_shape,
)


SAMPLE_SHAPES = [
    blades.SCALAR, blades.PLANE, blades.LINE, blades.POINT,
    blades.ROTOR, blades.TRANSLATOR, blades.MOTOR,
    0b0000000000011001, 0b1010011000110101, blades.FULL,
]


class TestProductShapes:
    """Tests for shape derivation of the products."""

    def test_plane_inner_plane_is_scalar(self):
        assert inner_shape(blades.PLANE, blades.PLANE) == blades.SCALAR

    def test_plane_outer_plane_is_line(self):
        assert outer_shape(blades.PLANE, blades.PLANE) == blades.LINE

    def test_plane_geometric_plane(self):
        assert geometric_shape(blades.PLANE, blades.PLANE) == blades.SCALAR | blades.LINE

    def test_even_subalgebras_are_closed(self):
        assert geometric_shape(blades.ROTOR, blades.ROTOR) == blades.ROTOR
        assert geometric_shape(blades.TRANSLATOR, blades.TRANSLATOR) == blades.TRANSLATOR
        assert geometric_shape(blades.MOTOR, blades.MOTOR) == blades.MOTOR

    def test_translator_times_rotor_is_motor(self):
        assert geometric_shape(blades.TRANSLATOR, blades.ROTOR) == blades.MOTOR

    def test_degenerate_square_is_empty(self):
        e0 = shape_of(Blade.E0)
        assert geometric_shape(e0, e0) == 0
        assert outer_shape(e0, e0) == 0

    def test_scalar_is_neutral(self):
        for shape in SAMPLE_SHAPES:
            assert geometric_shape(blades.SCALAR, shape) == shape
            assert geometric_shape(shape, blades.SCALAR) == shape

    def test_commutator_of_rotors(self):
        expected = shape_of(Blade.E12, Blade.E31, Blade.E23)
        assert commutator_shape(blades.ROTOR, blades.ROTOR) == expected

    def test_unknown_product(self):
        with pytest.raises(ValueError, match="Unknown product"):
            product_plan('cross', blades.PLANE, blades.PLANE)

    def test_plan_terms(self):
        """Scalar of plane * plane sums e1 e1, e2 e2, e3 e3; e0 e0 vanishes."""
        plan = product_plan(GEOMETRIC, blades.PLANE, blades.PLANE)
        assert plan.terms[0] == ((0, 0, 1), (1, 1, 1), (2, 2, 1))
        assert len(plan.terms) == popcount(plan.shape)

    def test_plans_are_memoized(self):
        first = product_plan(OUTER, blades.LINE, blades.PLANE)
        assert product_plan(OUTER, blades.LINE, blades.PLANE) is first


class TestStructuralShapes:
    """Tests for addition, dual, regressive and sandwich shapes."""

    def test_addition_is_union(self):
        for a in SAMPLE_SHAPES:
            for b in SAMPLE_SHAPES:
                assert popcount(addition_shape(a, b)) == popcount(a | b)

    def test_dual_of_named_shapes(self):
        assert dual_shape(blades.PLANE) == blades.POINT
        assert dual_shape(blades.POINT) == blades.PLANE
        assert dual_shape(blades.LINE) == blades.LINE
        assert dual_shape(blades.SCALAR) == shape_of(Blade.E0123)
        assert dual_shape(blades.ROTOR) == shape_of(Blade.E0123, Blade.E01, Blade.E02, Blade.E03)

    def test_dual_is_involutive(self):
        for shape in SAMPLE_SHAPES:
            assert dual_shape(dual_shape(shape)) == shape

    def test_regressive(self):
        assert regressive_shape(blades.POINT, blades.POINT) == blades.LINE
        assert regressive_shape(blades.LINE, blades.POINT) == blades.PLANE

    def test_sandwich_keeps_object_blades(self):
        for versor in (blades.ROTOR, blades.TRANSLATOR, blades.MOTOR):
            for shape in (blades.PLANE, blades.LINE, blades.POINT):
                derived = sandwich_shape(versor, shape)
                assert derived & shape == shape

    def test_grade_shape(self):
        assert grade_shape(blades.MOTOR, 0) == blades.SCALAR
        assert grade_shape(blades.MOTOR, 2) == blades.LINE
        assert grade_shape(blades.MOTOR, 4) == shape_of(Blade.E0123)
        assert grade_shape(blades.MOTOR, 3) == 0

    def test_merge_plan_marks_missing(self):
        plan = merge_plan(blades.SCALAR, shape_of(Blade.E12))
        assert plan == ((0, -1), (-1, 0))

    def test_cast_plan(self):
        assert cast_plan(blades.PLANE, blades.PLANE | blades.SCALAR) == (0, 1, 2, 3, -1)


class TestShapesAgainstValues:
    """Derived shapes equal the support of densely computed products."""

    @pytest.mark.parametrize("op", [GEOMETRIC, OUTER, INNER, COMMUTATOR])
    def test_shape_equals_dense_support(self, op, random_mv):
        dense_ops = {
            GEOMETRIC: lambda a, b: a * b,
            OUTER: lambda a, b: a ^ b,
            INNER: lambda a, b: a | b,
            COMMUTATOR: lambda a, b: a.commutator(b),
        }
        for shape_a in SAMPLE_SHAPES:
            for shape_b in SAMPLE_SHAPES:
                a = random_mv(multivector_type(shape_a))
                b = random_mv(multivector_type(shape_b))
                dense = dense_ops[op](to_dense(a), to_dense(b))
                assert dense.support(atol=1e-12) == product_plan(op, shape_a, shape_b).shape

    def test_regressive_shape_equals_dense_support(self, random_mv):
        for shape_a in SAMPLE_SHAPES:
            for shape_b in SAMPLE_SHAPES:
                a = random_mv(multivector_type(shape_a))
                b = random_mv(multivector_type(shape_b))
                dense = to_dense(a) & to_dense(b)
                assert dense.support(atol=1e-12) == regressive_shape(shape_a, shape_b)
