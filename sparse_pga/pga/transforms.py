"""
Geometric transformations using PGA motors.

Provides high-level functions for rotating, translating and transforming
geometric primitives (points, lines, planes) with the sandwich product.
Every function returns an element of the same shape it was given.
"""

from __future__ import annotations
from functools import reduce
from typing import Any, Optional, Tuple

from ..core.types import ScalarLike, Vector3
from .algebra import Multivector, geometric_product, reverse, transform_object
from .motors import rotor_from_axis_angle, translator_from_direction
from .primitives import point, point_from_coords, point_to_cartesian, point_to_coords


def rotate(
    element: Multivector,
    axis: Vector3,
    angle: ScalarLike,
    center: Optional[Vector3] = None,
) -> Multivector:
    """
    Rotate a geometric element around an axis.

    Args:
        element: Multivector to rotate
        axis: Rotation axis direction
        angle: Rotation angle in radians (right-handed)
        center: Center of rotation (defaults to origin)

    Returns:
        Rotated element, same shape as element
    """
    versor = rotor_from_axis_angle(axis, angle)

    if center is not None:
        # Translate to origin, rotate, translate back
        to_origin = translator_from_direction((-center[0], -center[1], -center[2]))
        from_origin = translator_from_direction(center)
        versor = from_origin * versor * to_origin

    return transform_object(element, versor)


def translate(element: Multivector, translation: Vector3) -> Multivector:
    """
    Translate a geometric element.

    Args:
        element: Multivector to translate
        translation: Displacement (dx, dy, dz)

    Returns:
        Translated element, same shape as element
    """
    return transform_object(element, translator_from_direction(translation))


def transform(element: Multivector, versor: Multivector) -> Multivector:
    """Apply a rotor, translator or motor: versor * element * ~versor."""
    return element << versor


def transform_point(coords: Vector3, versor: Multivector) -> Tuple[Any, Any, Any]:
    """Transform a Cartesian point, returning Cartesian (x, y, z)."""
    return point_to_cartesian(transform(point(coords[0], coords[1], coords[2]), versor))


def transform_points(coords, versor: Multivector):
    """
    Transform a batch of Cartesian points.

    Args:
        coords: Array or tensor of shape (..., 3)
        versor: Rotor, translator or motor

    Returns:
        Array or tensor of shape (..., 3), same type as coords
    """
    return point_to_coords(transform(point_from_coords(coords), versor))


def compose_transforms(*versors: Multivector) -> Multivector:
    """
    Compose transforms, applied in the order given.

    compose_transforms(a, b) transforms by a first, then by b.
    """
    if not versors:
        raise ValueError("compose_transforms needs at least one transform")
    return reduce(lambda acc, v: geometric_product(v, acc), versors)


def invert_transform(versor: Multivector) -> Multivector:
    """Inverse of a normalized rotor, translator or motor."""
    return reverse(versor)
