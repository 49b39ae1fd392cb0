"""Conversion between arc-length offsets and ratios on a parent polyline.

A ratio is an arc-length offset divided by the parent's total length. On an
open parent ratios live in ``[0, 1]`` and are clamped. On a closed parent they
are read modulo 1 (offsets modulo the total length) and never clamped, which
lets a span slide across the seam.

Every conversion returns None instead of raising when the parent has no
length or the arithmetic is not finite; callers keep their prior state.
"""

import math
from collections.abc import Sequence

from seamline.core.geometry import (
    CLOSED_TOLERANCE,
    arc_length,
    arc_length_at,
    is_closed,
    nearest_parameter,
)
from seamline.domain import Point

SEAM_LOW_FRACTION: float = 0.25
SEAM_HIGH_FRACTION: float = 0.75


def _usable(total_length: float) -> bool:
    return math.isfinite(total_length) and total_length > 0


def offset_to_ratio(offset: float, total_length: float, closed: bool) -> float | None:
    """Convert an arc-length offset to a ratio.

    Args:
        offset: Arc length from the parent's first vertex
        total_length: Parent length
        closed: Whether the parent is a closed loop

    Returns:
        Ratio in ``[0, 1]`` (``[0, 1)`` when closed), or None
    """
    if not _usable(total_length) or not math.isfinite(offset):
        return None
    if closed:
        return (offset % total_length) / total_length
    return max(0.0, min(total_length, offset)) / total_length


def ratio_to_offset(ratio: float, total_length: float, closed: bool) -> float | None:
    """Convert a ratio to an arc-length offset (inverse of offset_to_ratio)."""
    if not _usable(total_length) or not math.isfinite(ratio):
        return None
    if closed:
        return (ratio % 1.0) * total_length
    return max(0.0, min(1.0, ratio)) * total_length


def normalize_span(start: float, end: float, total_length: float) -> tuple[float, float] | None:
    """Normalize a span on a closed curve.

    The start is reduced modulo the total length. The span ``end - start`` is
    reduced into ``(0, total]``: a negative span wraps through the seam and a
    nonzero multiple of the total length is a full loop.

    Returns:
        (start, end) with ``0 <= start < total`` and ``start < end <= start + total``,
        or None for an empty span or unusable input
    """
    if not _usable(total_length) or not (math.isfinite(start) and math.isfinite(end)):
        return None

    raw_span = end - start
    if raw_span == 0:
        return None

    span = raw_span % total_length
    if span == 0:
        span = total_length

    start_n = start % total_length
    return start_n, start_n + span


def offsets_to_ratios(
    start_offset: float,
    end_offset: float,
    total_length: float,
    closed: bool,
) -> tuple[float, float] | None:
    """Convert a legacy offset pair to a ratio pair.

    Open parents clamp both offsets to ``[0, total]`` with ``end >= start``.
    Closed parents normalize the span; a span that crosses the seam is
    returned in wrap form (``end_ratio < start_ratio``).

    Returns:
        (start_ratio, end_ratio), or None when the parent has no length
    """
    if not _usable(total_length):
        return None
    if not (math.isfinite(start_offset) and math.isfinite(end_offset)):
        return None

    if not closed:
        start = max(0.0, min(total_length, start_offset))
        end = max(start, min(total_length, end_offset))
        return start / total_length, end / total_length

    span = normalize_span(start_offset, end_offset, total_length)
    if span is None:
        ratio = (start_offset % total_length) / total_length
        return ratio, ratio

    start_n, end_n = span
    start_ratio = start_n / total_length
    end_ratio = end_n / total_length
    if end_ratio > 1.0 and end_n - start_n < total_length:
        end_ratio -= 1.0
    return start_ratio, end_ratio


def project_cursor_arc_length(
    vertexes: Sequence[Point],
    point: Point,
    previous: float | None = None,
    closed: bool | None = None,
    seam_low: float = SEAM_LOW_FRACTION,
    seam_high: float = SEAM_HIGH_FRACTION,
    closed_tolerance: float = CLOSED_TOLERANCE,
) -> float:
    """Project a cursor onto a polyline as an arc length, keeping continuity.

    Plain projection onto a closed curve jumps from near ``total`` to near 0
    when the cursor crosses the seam. Given the previous frame's estimate, the
    new arc length is placed on the same lap as ``previous``; if it is more
    than half a lap away and the two sit on opposite sides of the seam (one in
    the last ``1 - seam_high`` of the loop, the other in the first
    ``seam_low``), one full length is added or subtracted.

    Args:
        vertexes: Parent polyline vertexes
        point: Cursor position
        previous: Arc length returned for the previous frame, if any
        closed: Whether the parent is closed (detected when None)
        seam_low: Fraction of the length counted as just after the seam
        seam_high: Fraction of the length counted as just before the seam
        closed_tolerance: Tolerance for closed detection

    Returns:
        Arc length; on a closed curve with a previous estimate it may lie
        outside ``[0, total]``
    """
    projected = arc_length_at(vertexes, nearest_parameter(point, vertexes))

    if previous is None or not math.isfinite(previous):
        return projected

    if closed is None:
        closed = is_closed(vertexes, closed_tolerance)
    total = arc_length(vertexes)
    if not closed or not _usable(total):
        return projected

    lap = math.floor(previous / total)
    previous_mod = previous - lap * total
    candidate = lap * total + projected

    if abs(candidate - previous) > total / 2:
        if previous_mod > seam_high * total and projected < seam_low * total:
            candidate += total
        elif previous_mod < seam_low * total and projected > seam_high * total:
            candidate -= total

    return candidate
