"""Block outline assembly from connected segments.

Segments of a block share endpoints but may be stored in either direction.
Stitching walks the segments in order, appending each one forward when its
first vertex touches the current end of the outline and reversed when its
last vertex does. Segments that touch at neither end are skipped.

By default endpoints must match exactly, as in the source data. A positive
snap tolerance accepts near misses.
"""

from collections.abc import Sequence

import structlog

from seamline.domain import Point, Segment


def _touches(a: Point, b: Point, snap_tolerance: float) -> bool:
    if snap_tolerance <= 0:
        return a.x == b.x and a.y == b.y
    return a.distance_to(b) <= snap_tolerance


def stitch_segments(
    segments: Sequence[Segment], snap_tolerance: float = 0.0
) -> tuple[list[Point], list[int]]:
    """Stitch segments into a single outline.

    Args:
        segments: Segments in stitching order
        snap_tolerance: Endpoint match distance (0 = exact equality)

    Returns:
        Tuple of (outline points, ids of segments that could not be attached).
        Segments with fewer than two vertexes are ignored, not reported.
    """
    polygon: list[Point] = []
    skipped: list[int] = []

    for segment in segments:
        vertexes = segment.vertexes
        if len(vertexes) < 2:
            continue

        if not polygon:
            polygon.extend(vertexes)
            continue

        last_point = polygon[-1]
        if _touches(last_point, vertexes[0], snap_tolerance):
            polygon.extend(vertexes[1:])
        elif _touches(last_point, vertexes[-1], snap_tolerance):
            polygon.extend(reversed(vertexes[:-1]))
        else:
            skipped.append(segment.id)

    return polygon, skipped


def assemble_polygon(segments: Sequence[Segment], snap_tolerance: float = 0.0) -> list[Point]:
    """Assemble a block outline for containment tests.

    Args:
        segments: Segments in stitching order
        snap_tolerance: Endpoint match distance (0 = exact equality)

    Returns:
        Outline points (empty when no segment has two vertexes)
    """
    polygon, _ = stitch_segments(segments, snap_tolerance)
    return polygon


class PolygonAssembler:
    """Assembles block outlines and reports segments that failed to attach.

    Example:
        assembler = PolygonAssembler(snap_tolerance=0.5)
        outline = assembler.assemble(block.segments())
    """

    def __init__(
        self,
        snap_tolerance: float = 0.0,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.snap_tolerance = snap_tolerance
        self._logger = logger or structlog.get_logger("seamline.polygon")
        self.skipped_count = 0

    def assemble(self, segments: Sequence[Segment], block_id: int | None = None) -> list[Point]:
        """Assemble an outline, logging any unattached segments."""
        polygon, skipped = stitch_segments(segments, self.snap_tolerance)
        if skipped:
            self.skipped_count += len(skipped)
            self._logger.debug(
                "Segments not stitched into outline",
                block=block_id,
                segments=skipped,
                snap_tolerance=self.snap_tolerance,
            )
        return polygon
