"""Sewing vertex generation from a parent segment.

A sewing inherits the shape of its parent between two arc-length offsets.
The generated polyline contains:
- a sampled point exactly at the start offset
- every parent vertex whose arc length falls strictly inside the span
- a sampled point at the end offset, unless it coincides with the last point

Keeping every interior parent vertex preserves the parent's bends; sampling
at a fixed density would cut corners.
"""

import math
from collections.abc import Sequence

from seamline.core.geometry import (
    CLOSED_TOLERANCE,
    arc_length,
    cumulative_lengths,
    is_closed,
    point_at_arc_length,
)
from seamline.core.ratio import normalize_span
from seamline.domain import Point

# End point closer than this to the previously emitted point is dropped
END_POINT_TOLERANCE: float = 0.1


def _append_end(result: list[Point], end_point: Point, tolerance: float) -> None:
    if not result or result[-1].distance_to(end_point) > tolerance:
        result.append(end_point)


def _sample_open(
    vertexes: Sequence[Point],
    cumulative: list[float],
    start: float,
    end: float,
    tolerance: float,
) -> list[Point]:
    result = [point_at_arc_length(vertexes, start)]
    for vertex, accumulated in zip(vertexes, cumulative):
        if start < accumulated < end:
            result.append(vertex)
    _append_end(result, point_at_arc_length(vertexes, end), tolerance)
    return result


def _sample_wrapped(
    vertexes: Sequence[Point],
    cumulative: list[float],
    total: float,
    start: float,
    end: float,
    tolerance: float,
) -> list[Point]:
    # Tail of the loop up to and including the seam vertex, then its head.
    head_end = end - total
    result = [point_at_arc_length(vertexes, start)]
    for vertex, accumulated in zip(vertexes, cumulative):
        if start < accumulated <= total:
            result.append(vertex)
    for vertex, accumulated in zip(vertexes, cumulative):
        if 0.0 < accumulated < head_end:
            result.append(vertex)
    _append_end(result, point_at_arc_length(vertexes, head_end), tolerance)
    return result


def build_sewing_vertexes(
    parent_vertexes: Sequence[Point],
    start_offset: float,
    end_offset: float,
    closed: bool | None = None,
    closed_tolerance: float = CLOSED_TOLERANCE,
    end_tolerance: float = END_POINT_TOLERANCE,
) -> list[Point]:
    """Build the vertexes of the sub-curve between two arc-length offsets.

    Open parent: both offsets are clamped to ``[0, total]`` and ``end`` is
    raised to at least ``start``. Closed parent: both offsets are read modulo
    the total length and a span with ``end < start`` wraps through the seam.

    Args:
        parent_vertexes: Parent polyline vertexes
        start_offset: Arc length where the sewing starts
        end_offset: Arc length where the sewing ends
        closed: Whether the parent is closed (detected when None)
        closed_tolerance: Tolerance for closed detection
        end_tolerance: Distance under which the end point is merged

    Returns:
        Ordered sewing vertexes; empty when the span is empty or the parent
        is degenerate
    """
    if len(parent_vertexes) < 2:
        return []
    if not (math.isfinite(start_offset) and math.isfinite(end_offset)):
        return []

    total = arc_length(parent_vertexes)
    if total <= 0:
        return []

    if closed is None:
        closed = is_closed(parent_vertexes, closed_tolerance)
    cumulative = cumulative_lengths(parent_vertexes)

    if not closed:
        start = max(0.0, min(total, start_offset))
        end = max(start, min(total, end_offset))
        if end - start <= 0:
            return []
        return _sample_open(parent_vertexes, cumulative, start, end, end_tolerance)

    span = normalize_span(start_offset, end_offset, total)
    if span is None:
        return []
    start, end = span
    if end <= total:
        return _sample_open(parent_vertexes, cumulative, start, end, end_tolerance)
    return _sample_wrapped(parent_vertexes, cumulative, total, start, end, end_tolerance)


def build_sewing_from_ratios(
    parent_vertexes: Sequence[Point],
    start_ratio: float,
    end_ratio: float,
    closed: bool | None = None,
    closed_tolerance: float = CLOSED_TOLERANCE,
    end_tolerance: float = END_POINT_TOLERANCE,
) -> list[Point]:
    """Build sewing vertexes from a ratio span on the parent.

    Ratios are scaled by the parent's current length and passed to
    build_sewing_vertexes, so the result depends only on the ratios and the
    parent geometry.
    """
    total = arc_length(parent_vertexes)
    if total <= 0:
        return []
    return build_sewing_vertexes(
        parent_vertexes,
        start_ratio * total,
        end_ratio * total,
        closed=closed,
        closed_tolerance=closed_tolerance,
        end_tolerance=end_tolerance,
    )
