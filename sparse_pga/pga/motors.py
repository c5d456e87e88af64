"""
Rotors, translators and motors for Projective Geometric Algebra (PGA).

A Motor represents a rigid body motion (rotation + translation) and lives in
the even subalgebra:

    M = T * R

where R is a rotor (pure rotation) and T is a translator (pure translation).
Motors have 8 components: [s, e12, e31, e23, e01, e02, e03, e0123].

The fundamental operation is the sandwich product:
    X' = M * X * ~M

which transforms any element X (point, line, plane) while preserving
distances and angles.
"""

from __future__ import annotations

from ..backends import backend_for
from ..core.types import ScalarLike, Vector3
from .algebra import (
    Motor,
    Multivector,
    Rotor,
    Translator,
    addition,
    cast,
    geometric_product,
    normalized,
)


def rotor(angle: ScalarLike, line: Multivector) -> Multivector:
    """
    Rotor about an arbitrary line: cos(θ/2) + sin(θ/2) * normalized(line).

    For a line through the origin the result is a pure rotation; an offset
    line also carries the matching translation part.

    Args:
        angle: Rotation angle in radians
        line: Rotation axis (any Line-shaped multivector)

    Returns:
        Motor
    """
    backend = backend_for(angle)
    half = angle / 2
    return cast(
        addition(backend.cos(half), backend.sin(half) * normalized(line)),
        Motor,
    )


def rotor_from_axis_angle(axis: Vector3, angle: ScalarLike) -> Multivector:
    """
    Rotor for a right-handed rotation about an axis through the origin.

    Args:
        axis: Rotation axis (need not be unit length)
        angle: Rotation angle in radians

    Returns:
        Rotor
    """
    ax, ay, az = axis[0], axis[1], axis[2]
    backend = backend_for(angle)
    length = backend_for(ax).sqrt(ax * ax + ay * ay + az * az)
    half = angle / 2
    s = backend_for(length).divide(backend.sin(half), length)
    return Rotor(
        scalar=backend.cos(half),
        e12=-s * az,
        e31=-s * ay,
        e23=-s * ax,
    )


def translator(dx: ScalarLike, dy: ScalarLike, dz: ScalarLike) -> Multivector:
    """
    Translator moving elements by (dx, dy, dz).

    T = 1 - (dx*e01 + dy*e02 + dz*e03) / 2
    """
    one = backend_for(dx).one(dx)
    return Translator(scalar=one, e01=-dx / 2, e02=-dy / 2, e03=-dz / 2)


def translator_from_direction(direction: Vector3) -> Multivector:
    """Translator for a displacement vector."""
    return translator(direction[0], direction[1], direction[2])


def motor(rotation: Multivector, translation: Multivector) -> Multivector:
    """
    Motor that applies rotation first, then translation.

    Returns:
        Motor (T * R)
    """
    return cast(geometric_product(translation, rotation), Motor)


def motor_from_axis_angle_translation(
    axis: Vector3,
    angle: ScalarLike,
    translation: Vector3,
) -> Multivector:
    """Motor rotating about an axis through the origin, then translating."""
    return motor(rotor_from_axis_angle(axis, angle), translator_from_direction(translation))
