"""
PGA (Projective Geometric Algebra) module.

Implements G(3,0,1) with sparse multivectors: every value stores only the
blades of its shape, and products derive their output shape from the
operand shapes alone.
"""

from .blades import (
    Blade,
    DISPLAY_ORDER,
    has,
    rank,
    popcount,
    make_shape,
    shape_of,
    blades_of,
    grade_of,
    grade_mask,
    describe,
)

from .shapes import (
    product_plan,
    geometric_shape,
    outer_shape,
    inner_shape,
    commutator_shape,
    addition_shape,
    dual_shape,
    regressive_shape,
    sandwich_shape,
    grade_shape,
)

from .algebra import (
    Multivector,
    multivector_type,
    Zero,
    Scalar,
    Complex,
    DualNumber,
    Plane,
    Line,
    Point,
    Rotor,
    Translator,
    Motor,
    FullMultivector,
    basis,
    addition,
    subtraction,
    geometric_product,
    inner_product,
    outer_product,
    commutator_product,
    regressive_product,
    dual,
    reverse,
    conjugate,
    involute,
    sandwich,
    transform_object,
    cast,
    grade,
    scalar_part,
    norm,
    inorm,
    normalized,
    allclose,
)

from .display import (
    format_multivector,
    print_multivector,
    log_multivector,
)

from .motors import (
    rotor,
    rotor_from_axis_angle,
    translator,
    translator_from_direction,
    motor,
    motor_from_axis_angle_translation,
)

from .primitives import (
    point,
    point_from_coords,
    ideal_point,
    point_to_cartesian,
    point_to_coords,
    plane,
    plane_from_normal_point,
    plane_to_normal_distance,
    line_from_points,
    line_from_plucker,
    line_from_point_direction,
    line_to_plucker,
    join,
    meet,
    distance_point_plane,
    distance_point_point,
    project_point_plane,
    reflect_point_plane,
    origin,
    xy_plane,
    xz_plane,
    yz_plane,
    x_axis,
    y_axis,
    z_axis,
)

from .transforms import (
    rotate,
    translate,
    transform,
    transform_point,
    transform_points,
    compose_transforms,
    invert_transform,
)

from .dense import (
    DenseMultivector,
    to_dense,
    from_dense,
)

__all__ = [
    # Blades
    "Blade",
    "DISPLAY_ORDER",
    "has",
    "rank",
    "popcount",
    "make_shape",
    "shape_of",
    "blades_of",
    "grade_of",
    "grade_mask",
    "describe",
    # Blade algebra
    "product_plan",
    "geometric_shape",
    "outer_shape",
    "inner_shape",
    "commutator_shape",
    "addition_shape",
    "dual_shape",
    "regressive_shape",
    "sandwich_shape",
    "grade_shape",
    # Multivectors
    "Multivector",
    "multivector_type",
    "Zero",
    "Scalar",
    "Complex",
    "DualNumber",
    "Plane",
    "Line",
    "Point",
    "Rotor",
    "Translator",
    "Motor",
    "FullMultivector",
    "basis",
    # Products
    "addition",
    "subtraction",
    "geometric_product",
    "inner_product",
    "outer_product",
    "commutator_product",
    "regressive_product",
    "dual",
    "reverse",
    "conjugate",
    "involute",
    "sandwich",
    "transform_object",
    "cast",
    "grade",
    "scalar_part",
    "norm",
    "inorm",
    "normalized",
    "allclose",
    # Display
    "format_multivector",
    "print_multivector",
    "log_multivector",
    # Motors
    "rotor",
    "rotor_from_axis_angle",
    "translator",
    "translator_from_direction",
    "motor",
    "motor_from_axis_angle_translation",
    # Primitives
    "point",
    "point_from_coords",
    "ideal_point",
    "point_to_cartesian",
    "point_to_coords",
    "plane",
    "plane_from_normal_point",
    "plane_to_normal_distance",
    "line_from_points",
    "line_from_plucker",
    "line_from_point_direction",
    "line_to_plucker",
    "join",
    "meet",
    "distance_point_plane",
    "distance_point_point",
    "project_point_plane",
    "reflect_point_plane",
    "origin",
    "xy_plane",
    "xz_plane",
    "yz_plane",
    "x_axis",
    "y_axis",
    "z_axis",
    # Transforms
    "rotate",
    "translate",
    "transform",
    "transform_point",
    "transform_points",
    "compose_transforms",
    "invert_transform",
    # Dense reference
    "DenseMultivector",
    "to_dense",
    "from_dense",
]
