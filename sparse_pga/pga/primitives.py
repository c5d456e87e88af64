"""
Geometric primitives in Projective Geometric Algebra (PGA).

PGA represents geometric objects as follows:
- Points: Grade-3 trivectors (normalized: e123 + x*e032 + y*e013 + z*e021)
- Lines: Grade-2 bivectors (Plücker coordinates)
- Planes: Grade-1 vectors (a*e1 + b*e2 + c*e3 + d*e0 for ax + by + cz + d = 0)

Key operations:
- Join (&, regressive product): point & point -> line, line & point -> plane
- Meet (^, outer product): plane ^ plane -> line, line ^ plane -> point

Values may be floats, numpy arrays (one primitive per element) or torch
tensors; nothing here converts between them.
"""

from __future__ import annotations
from typing import Any, Tuple

import numpy as np
import torch

from ..backends import backend_for
from ..core.types import ScalarLike, Vector3
from .algebra import (
    Line,
    Multivector,
    Plane,
    Point,
    cast,
    inner_product,
    geometric_product,
    outer_product,
    regressive_product,
)
from .blades import Blade


def _literal(value: ScalarLike, like: Any) -> Any:
    if isinstance(value, (int, float)):
        return backend_for(like).literal(value, like=like)
    return value


def _cross(a: Vector3, b: Vector3) -> Tuple[Any, Any, Any]:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _stack(components) -> Any:
    if isinstance(components[0], torch.Tensor):
        return torch.stack(list(components), dim=-1)
    return np.stack([np.asarray(c) for c in components], axis=-1)


def point(x: ScalarLike, y: ScalarLike, z: ScalarLike, w: ScalarLike = 1.0) -> Multivector:
    """
    Create a PGA point from Cartesian coordinates.

    In PGA, a point is represented as:
        P = w*e123 + x*w*e032 + y*w*e013 + z*w*e021

    Where e032 = e0∧e3∧e2, e013 = e0∧e1∧e3, e021 = e0∧e2∧e1.

    Args:
        x, y, z: Cartesian coordinates
        w: Homogeneous weight (1 for a normalized point)

    Returns:
        Point multivector
    """
    w = _literal(w, x)
    return Point(e021=z * w, e013=y * w, e032=x * w, e123=w)


def point_from_coords(coords) -> Multivector:
    """
    Create points from an array or tensor of shape (..., 3).

    Each component of the returned point holds an array of shape (...).
    """
    return point(coords[..., 0], coords[..., 1], coords[..., 2])


def ideal_point(dx: ScalarLike, dy: ScalarLike, dz: ScalarLike) -> Multivector:
    """
    Create an ideal point (point at infinity) from a direction.

    Ideal points have e123 = 0 and represent directions.
    """
    return Point(e021=dz, e013=dy, e032=dx, e123=_literal(0.0, dx))


def point_to_cartesian(p: Multivector) -> Tuple[Any, Any, Any]:
    """
    Extract Cartesian coordinates from a PGA point.

    The weight is divided out through the scalar backend, so an ideal point
    yields inf/NaN coordinates rather than raising.

    Returns:
        (x, y, z)
    """
    w = p.e123
    divide = backend_for(w).divide
    return divide(p.e032, w), divide(p.e013, w), divide(p.e021, w)


def point_to_coords(p: Multivector) -> Any:
    """Cartesian coordinates stacked along a trailing axis of size 3."""
    return _stack(point_to_cartesian(p))


def plane(a: ScalarLike, b: ScalarLike, c: ScalarLike, d: ScalarLike) -> Multivector:
    """
    Create the plane a*x + b*y + c*z + d = 0.

    In PGA, a plane is represented as:
        π = a*e1 + b*e2 + c*e3 + d*e0

    Returns:
        Plane multivector (grade-1 vector)
    """
    return Plane(e1=a, e2=b, e3=c, e0=d)


def plane_from_normal_point(normal: Vector3, through: Vector3) -> Multivector:
    """Plane with the given normal passing through a Cartesian point."""
    d = -(normal[0] * through[0] + normal[1] * through[1] + normal[2] * through[2])
    return plane(normal[0], normal[1], normal[2], d)


def plane_to_normal_distance(p: Multivector) -> Tuple[Tuple[Any, Any, Any], Any]:
    """
    Extract (normal, offset) from a plane.

    Returns:
        ((a, b, c), d) for the plane a*x + b*y + c*z + d = 0
    """
    return (p.e1, p.e2, p.e3), p.e0


def line_from_plucker(direction: Vector3, moment: Vector3) -> Multivector:
    """
    Create a line from Plücker coordinates.

    The direction sits on the Euclidean bivectors (e23, e31, e12) and the
    moment m = p × d of any point p on the line on the ideal ones
    (e01, e02, e03).
    """
    return Line(
        e01=moment[0], e02=moment[1], e03=moment[2],
        e12=direction[2], e31=direction[1], e23=direction[0],
    )


def line_from_point_direction(through: Vector3, direction: Vector3) -> Multivector:
    """Line through a Cartesian point with the given direction."""
    return line_from_plucker(direction, _cross(through, direction))


def line_to_plucker(line: Multivector) -> Tuple[Tuple[Any, Any, Any], Tuple[Any, Any, Any]]:
    """Inverse of line_from_plucker: ((dx, dy, dz), (mx, my, mz))."""
    return (line.e23, line.e31, line.e12), (line.e01, line.e02, line.e03)


def join(a: Multivector, b: Multivector) -> Multivector:
    """
    Join of two elements (regressive product).

    point & point gives the line through both; line & point gives the
    plane containing both. The result is zero when the point lies on the line.
    """
    return regressive_product(a, b)


def meet(a: Multivector, b: Multivector) -> Multivector:
    """
    Meet of two elements (outer product).

    plane ^ plane gives their line of intersection; line ^ plane gives the
    point where the line crosses the plane.
    """
    return outer_product(a, b)


def line_from_points(p1: Multivector, p2: Multivector) -> Multivector:
    """Line through two points."""
    return cast(join(p1, p2), Line)


def distance_point_plane(p: Multivector, plane_mv: Multivector) -> Any:
    """
    Signed distance from a point to a plane.

    Positive on the side the plane normal points to.
    """
    volume = outer_product(plane_mv, p).get(Blade.E0123)
    normal_norm = backend_for(plane_mv.e1).sqrt(
        plane_mv.e1 * plane_mv.e1 + plane_mv.e2 * plane_mv.e2 + plane_mv.e3 * plane_mv.e3
    )
    denominator = normal_norm * p.e123
    return backend_for(denominator).divide(volume, denominator)


def distance_point_point(p1: Multivector, p2: Multivector) -> Any:
    """Euclidean distance between two finite points."""
    x1, y1, z1 = point_to_cartesian(p1)
    x2, y2, z2 = point_to_cartesian(p2)
    dx, dy, dz = x2 - x1, y2 - y1, z2 - z1
    return backend_for(dx).sqrt(dx * dx + dy * dy + dz * dz)


def project_point_plane(p: Multivector, plane_mv: Multivector) -> Multivector:
    """
    Orthogonal projection of a point onto a plane: (π | P) π.

    Returns:
        Normalized point (e123 = 1)
    """
    projected = cast(geometric_product(inner_product(plane_mv, p), plane_mv), Point)
    return projected / projected.e123


def reflect_point_plane(p: Multivector, plane_mv: Multivector) -> Multivector:
    """
    Mirror a point in a plane: π P π.

    Returns:
        Normalized point (e123 = 1)
    """
    reflected = cast(geometric_product(geometric_product(plane_mv, p), plane_mv), Point)
    return reflected / reflected.e123


def origin() -> Multivector:
    return point(0.0, 0.0, 0.0)


def xy_plane() -> Multivector:
    return plane(0.0, 0.0, 1.0, 0.0)


def xz_plane() -> Multivector:
    return plane(0.0, 1.0, 0.0, 0.0)


def yz_plane() -> Multivector:
    return plane(1.0, 0.0, 0.0, 0.0)


def x_axis() -> Multivector:
    return line_from_plucker((1.0, 0.0, 0.0), (0.0, 0.0, 0.0))


def y_axis() -> Multivector:
    return line_from_plucker((0.0, 1.0, 0.0), (0.0, 0.0, 0.0))


def z_axis() -> Multivector:
    return line_from_plucker((0.0, 0.0, 1.0), (0.0, 0.0, 0.0))
