"""Sewing direction relative to a closed parent's traversal order."""

from collections.abc import Sequence
from enum import Enum

from seamline.core.geometry import (
    CLOSED_TOLERANCE,
    arc_length,
    arc_length_at,
    is_closed,
    nearest_parameter,
)
from seamline.domain import Point

# Corrected arc-length differences within this distance are inconclusive
DIRECTION_TOLERANCE: float = 1.0


class SewingDirection(str, Enum):
    """How a sewing's point order relates to its parent's."""

    SAME = "same"
    OPPOSITE = "opposite"
    UNKNOWN = "unknown"


def classify_direction(
    parent_vertexes: Sequence[Point],
    sewing_endpoints: Sequence[Point],
    closed: bool | None = None,
    tolerance: float = DIRECTION_TOLERANCE,
    closed_tolerance: float = CLOSED_TOLERANCE,
) -> SewingDirection:
    """Determine whether a sewing runs with or against its closed parent.

    Both sewing endpoints are projected onto the parent as arc lengths. When
    they are more than half a loop apart the sewing is assumed to cross the
    seam, and the smaller value is moved up by one full length before comparing.

    Args:
        parent_vertexes: Parent polyline vertexes
        sewing_endpoints: Sewing vertexes (only the first and last are used)
        closed: Whether the parent is closed (detected when None)
        tolerance: Differences within this distance give UNKNOWN
        closed_tolerance: Tolerance for closed detection

    Returns:
        SAME, OPPOSITE, or UNKNOWN when the parent is open or degenerate or
        the endpoints are too close to tell
    """
    if len(parent_vertexes) < 2 or len(sewing_endpoints) < 2:
        return SewingDirection.UNKNOWN

    if closed is None:
        closed = is_closed(parent_vertexes, closed_tolerance)
    total = arc_length(parent_vertexes)
    if not closed or total <= 0:
        return SewingDirection.UNKNOWN

    first = arc_length_at(parent_vertexes, nearest_parameter(sewing_endpoints[0], parent_vertexes))
    last = arc_length_at(parent_vertexes, nearest_parameter(sewing_endpoints[-1], parent_vertexes))

    diff = last - first
    if abs(diff) > total / 2:
        if first < last:
            first += total
        else:
            last += total
        diff = last - first

    if abs(diff) <= tolerance:
        return SewingDirection.UNKNOWN
    return SewingDirection.SAME if diff > 0 else SewingDirection.OPPOSITE
