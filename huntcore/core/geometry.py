"""Geometry kernel: vector math, interpolation, hitboxes and vision cones.

Every function here is pure.  ``angle_between`` returns NaN for a
zero-length vector; NaN compares false, so a degenerate cone never
contains anything.
"""

from __future__ import annotations

import math

from huntcore.core.models import Hitbox, Vector2


def magnitude(v: Vector2) -> float:
    return math.hypot(v.x, v.y)


def dot(v1: Vector2, v2: Vector2) -> float:
    return v1.x * v2.x + v1.y * v2.y


def angle_between(v1: Vector2, v2: Vector2) -> float:
    """Angle in radians between *v1* and *v2*, or NaN if either is zero-length."""
    m = magnitude(v1) * magnitude(v2)
    if m == 0.0:
        return math.nan
    # rounding can push the cosine a hair outside acos' domain
    cos = max(-1.0, min(1.0, dot(v1, v2) / m))
    return math.acos(cos)


def lerp(p1: Vector2, p2: Vector2, t: float) -> Vector2:
    return Vector2(p1.x + t * (p2.x - p1.x), p1.y + t * (p2.y - p1.y))


def distance(p1: Vector2, p2: Vector2) -> float:
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def sample_segment(start: Vector2, end: Vector2, steps: int) -> list[Vector2]:
    """Return ``steps + 1`` evenly spaced points from *start* to *end* inclusive."""
    return [lerp(start, end, i / steps) for i in range(steps + 1)]


def offset_along(pos: Vector2, facing: Vector2, dist: float, behind: bool = True) -> Vector2:
    """Move *dist* units from *pos* against (or along) *facing*.

    A stationary facing (zero vector) returns *pos* unchanged.
    """
    m = magnitude(facing)
    if m == 0.0:
        return pos
    sign = -1.0 if behind else 1.0
    return Vector2(pos.x + facing.x / m * dist * sign, pos.y + facing.y / m * dist * sign)


def hitbox_bounds(anchor: Vector2, box: Hitbox) -> tuple[float, float, float, float]:
    """Return (left, right, top, bottom) of *box* anchored bottom-centre at *anchor*."""
    half = box.width / 2
    return anchor.x - half, anchor.x + half, anchor.y - box.height, anchor.y


def point_in_hitbox(point: Vector2, anchor: Vector2, box: Hitbox) -> bool:
    left, right, top, bottom = hitbox_bounds(anchor, box)
    return left <= point.x <= right and top <= point.y <= bottom


def hitboxes_overlap(pos_a: Vector2, box_a: Hitbox, pos_b: Vector2, box_b: Hitbox) -> bool:
    """True if two anchored boxes overlap.

    A degenerate *box_a* (zero width or height) is treated as the bare point
    *pos_a*.
    """
    if not (box_a.width and box_a.height):
        return point_in_hitbox(pos_a, pos_b, box_b)
    al, ar, at, ab = hitbox_bounds(pos_a, box_a)
    bl, br, bt, bb = hitbox_bounds(pos_b, box_b)
    return bl < ar and br > al and bt < ab and bb > at


def point_in_cone(
    origin: Vector2,
    facing: Vector2,
    point: Vector2,
    radius: float,
    half_angle: float,
) -> bool:
    """True if *point* lies within *radius* of *origin* and *half_angle* of *facing*."""
    to_point = point - origin
    if magnitude(to_point) > radius:
        return False
    return angle_between(facing, to_point) <= half_angle


def normalized(v: Vector2) -> Vector2:
    """Unit vector along *v*; the zero vector stays zero."""
    m = magnitude(v)
    if m == 0.0:
        return v
    return Vector2(v.x / m, v.y / m)


def path_length(path) -> float:
    """Total length of a polyline."""
    return sum(distance(a, b) for a, b in zip(path, path[1:]))
