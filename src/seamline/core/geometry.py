"""Polyline geometry for segment and sewing calculations.

This module provides the arc-length parametrization that the ratio model is
built on:
- Clamped projection of a point onto a line segment
- Point-to-polyline distance and nearest parameter
- Arc-length accumulation and sampling
- Point and tangent at an arc length
- Point-in-polygon testing (ray casting algorithm)

All functions are pure and never raise on degenerate input; they return the
geometrically inert answer instead (zero length, infinite distance, no-op
projection).
"""

import math
from collections.abc import Sequence
from typing import NamedTuple

from seamline.domain import Point

# First and last vertex closer than this (world units) make a closed segment
CLOSED_TOLERANCE: float = 1.0

# Arc-length step for central-difference tangent estimates
TANGENT_SAMPLE_DELTA: float = 1.0

# Squared lengths below this are treated as zero-length pairs
ZERO_LENGTH_SQ: float = 1e-20


class PolylineParameter(NamedTuple):
    """Position on a polyline as a vertex-pair index and in-pair parameter."""

    segment_index: int
    t: float


class TangentSample(NamedTuple):
    """A point on a polyline with its unit tangent (dx, dy)."""

    point: Point
    tangent: tuple[float, float]


def project_point_onto_segment(point: Point, seg_start: Point, seg_end: Point) -> tuple[Point, float]:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps to the segment endpoints.

    Args:
        point: The point to project
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Tuple of (nearest_point, t) where t in [0, 1] is the clamped parameter.
        A zero-length segment projects onto its start with t = 0.

    Examples:
        >>> nearest, t = project_point_onto_segment(Point(1.0, 1.0), Point(0.0, 0.0), Point(2.0, 0.0))
        >>> nearest, t
        (Point(x=1.0, y=0.0), 0.5)
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    length_sq = dx * dx + dy * dy
    if length_sq < ZERO_LENGTH_SQ:
        return seg_start, 0.0

    # t = dot(point - start, end - start) / ||end - start||^2
    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))

    return Point(seg_start.x + t * dx, seg_start.y + t * dy), t


def distance_to_segment(point: Point, seg_start: Point, seg_end: Point) -> float:
    """Distance from a point to the clamped projection on a line segment."""
    nearest, _ = project_point_onto_segment(point, seg_start, seg_end)
    return math.hypot(point.x - nearest.x, point.y - nearest.y)


def distance_to_polyline(point: Point, vertexes: Sequence[Point]) -> float:
    """Minimum distance from a point to any consecutive vertex pair.

    Args:
        point: The point to measure from
        vertexes: Polyline vertexes

    Returns:
        Minimum distance; the direct distance for a single vertex and
        ``math.inf`` for an empty polyline
    """
    if not vertexes:
        return math.inf
    if len(vertexes) == 1:
        return point.distance_to(vertexes[0])

    return min(
        distance_to_segment(point, vertexes[i], vertexes[i + 1])
        for i in range(len(vertexes) - 1)
    )


def nearest_parameter(point: Point, vertexes: Sequence[Point]) -> PolylineParameter:
    """Find the vertex pair and in-pair parameter closest to a point.

    Zero-length pairs are skipped. Ties go to the first pair in traversal order.

    Args:
        point: The point to project
        vertexes: Polyline vertexes

    Returns:
        PolylineParameter(segment_index, t); (0, 0.0) when no pair has length
    """
    min_distance = math.inf
    best = PolylineParameter(0, 0.0)

    for i in range(len(vertexes) - 1):
        v1 = vertexes[i]
        v2 = vertexes[i + 1]
        dx = v2.x - v1.x
        dy = v2.y - v1.y
        if dx * dx + dy * dy < ZERO_LENGTH_SQ:
            continue

        nearest, t = project_point_onto_segment(point, v1, v2)
        distance = math.hypot(point.x - nearest.x, point.y - nearest.y)

        if distance < min_distance:
            min_distance = distance
            best = PolylineParameter(i, t)

    return best


def cumulative_lengths(vertexes: Sequence[Point]) -> list[float]:
    """Arc length from the first vertex to each vertex.

    Returns:
        List with one entry per vertex, starting at 0.0
    """
    lengths: list[float] = []
    accumulated = 0.0
    for i, vertex in enumerate(vertexes):
        if i > 0:
            accumulated += vertexes[i - 1].distance_to(vertex)
        lengths.append(accumulated)
    return lengths


def arc_length(vertexes: Sequence[Point]) -> float:
    """Total length of a polyline (0.0 for fewer than two vertexes)."""
    if len(vertexes) < 2:
        return 0.0
    return sum(vertexes[i].distance_to(vertexes[i + 1]) for i in range(len(vertexes) - 1))


def arc_length_at(vertexes: Sequence[Point], parameter: PolylineParameter) -> float:
    """Arc length from the first vertex to a polyline parameter."""
    if len(vertexes) < 2:
        return 0.0

    index = max(0, min(parameter.segment_index, len(vertexes) - 2))
    length = sum(vertexes[i].distance_to(vertexes[i + 1]) for i in range(index))
    return length + parameter.t * vertexes[index].distance_to(vertexes[index + 1])


def _locate(vertexes: Sequence[Point], length: float) -> tuple[int, float]:
    """Find the pair containing an arc length and the interpolation factor."""
    accumulated = 0.0
    for i in range(len(vertexes) - 1):
        seg_len = vertexes[i].distance_to(vertexes[i + 1])
        if accumulated + seg_len >= length:
            t = 0.0 if seg_len == 0 else (length - accumulated) / seg_len
            return i, max(0.0, min(1.0, t))
        accumulated += seg_len
    return len(vertexes) - 2, 1.0


def point_at_arc_length(vertexes: Sequence[Point], length: float) -> Point:
    """Sample the polyline at an arc length, clamped to ``[0, total]``.

    Args:
        vertexes: Polyline vertexes (at least one)
        length: Arc length from the first vertex

    Returns:
        Interpolated point on the polyline
    """
    if len(vertexes) == 1:
        return vertexes[0]

    total = arc_length(vertexes)
    target = max(0.0, min(total, length))
    index, t = _locate(vertexes, target)
    v1 = vertexes[index]
    v2 = vertexes[index + 1]
    return Point(v1.x + t * (v2.x - v1.x), v1.y + t * (v2.y - v1.y))


def _unit(dx: float, dy: float) -> tuple[float, float] | None:
    norm = math.hypot(dx, dy)
    if norm < 1e-12:
        return None
    return (dx / norm, dy / norm)


def point_and_tangent_at_arc_length(
    vertexes: Sequence[Point],
    length: float,
    delta: float = TANGENT_SAMPLE_DELTA,
) -> TangentSample | None:
    """Sample a point and the unit tangent direction at an arc length.

    The tangent is a central difference between points ``delta`` before and
    after the target. Near either end, or where the difference vanishes, the
    containing pair's own direction is used.

    Args:
        vertexes: Polyline vertexes
        length: Arc length from the first vertex
        delta: Arc-length step for the central difference

    Returns:
        TangentSample, or None for fewer than two vertexes. A polyline with no
        length yields a zero tangent.
    """
    if len(vertexes) < 2:
        return None

    total = arc_length(vertexes)
    target = max(0.0, min(total, length))
    point = point_at_arc_length(vertexes, target)

    tangent: tuple[float, float] | None = None
    if target - delta >= 0.0 and target + delta <= total:
        before = point_at_arc_length(vertexes, target - delta)
        after = point_at_arc_length(vertexes, target + delta)
        tangent = _unit(after.x - before.x, after.y - before.y)

    if tangent is None:
        index, _ = _locate(vertexes, target)
        # Walk forward past zero-length pairs to find a usable direction
        for i in list(range(index, len(vertexes) - 1)) + list(range(index - 1, -1, -1)):
            tangent = _unit(vertexes[i + 1].x - vertexes[i].x, vertexes[i + 1].y - vertexes[i].y)
            if tangent is not None:
                break

    return TangentSample(point, tangent if tangent is not None else (0.0, 0.0))


def polyline_center(vertexes: Sequence[Point]) -> Point:
    """Average of the vertexes (origin for an empty polyline)."""
    if not vertexes:
        return Point(0.0, 0.0)
    n = len(vertexes)
    return Point(sum(v.x for v in vertexes) / n, sum(v.y for v in vertexes) / n)


def is_closed(vertexes: Sequence[Point], tolerance: float = CLOSED_TOLERANCE) -> bool:
    """Check whether a polyline forms a closed loop.

    A loop needs at least three vertexes, a positive length, and first and last
    vertexes within ``tolerance`` of each other.
    """
    if len(vertexes) < 3:
        return False
    if arc_length(vertexes) <= 0:
        return False
    return vertexes[0].distance_to(vertexes[-1]) <= tolerance


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise

    Examples:
        >>> square = [Point(0.0, 0.0), Point(2.0, 0.0), Point(2.0, 2.0), Point(0.0, 2.0)]
        >>> point_in_polygon(Point(1.0, 1.0), square)
        True
        >>> point_in_polygon(Point(3.0, 3.0), square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def find_closest_polyline(
    point: Point, candidates: Sequence[tuple[int, Sequence[Point]]]
) -> tuple[int, float] | None:
    """Find the candidate polyline nearest to a point.

    Args:
        point: The point to measure from
        candidates: (id, vertexes) pairs

    Returns:
        (id, distance) of the first nearest candidate, or None when empty
    """
    best: tuple[int, float] | None = None
    for candidate_id, vertexes in candidates:
        distance = distance_to_polyline(point, vertexes)
        if best is None or distance < best[1]:
            best = (candidate_id, distance)
    return best
