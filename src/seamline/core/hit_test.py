"""Pointer hit testing against blocks and their entities.

Priority order is sewing, then segment, then block interior. Distances are
compared in world units against a threshold derived from the zoom level, so
the precision the user needs stays roughly constant on screen.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from seamline.config import GeometryConfig, HitTestConfig
from seamline.core.geometry import distance_to_polyline, point_in_polygon
from seamline.core.polygon import PolygonAssembler, assemble_polygon
from seamline.domain import Block, Point, Segment, Sewing


class HitKind(str, Enum):
    """What a pointer position landed on."""

    SEWING = "sewing"
    SEGMENT = "segment"
    BLOCK = "block"
    NONE = "none"


@dataclass(frozen=True)
class HitResult:
    """Result of a hit test.

    Attributes:
        kind: Kind of object hit
        id: Entity id for SEWING/SEGMENT, block id for BLOCK, None for NONE
        block_id: Block owning the hit object
    """

    kind: HitKind
    id: int | None = None
    block_id: int | None = None

    @classmethod
    def none(cls) -> "HitResult":
        return cls(HitKind.NONE)


def hit_threshold(
    zoom_level: float,
    base: float = 5.0,
    minimum: float = 0.5,
    maximum: float = 5.0,
) -> float:
    """Hit distance in world units for a zoom level.

    Returns ``base / zoom`` clamped to ``[minimum, maximum]``. A non-positive
    zoom returns ``maximum``.
    """
    if zoom_level <= 0:
        return maximum
    return max(minimum, min(maximum, base / zoom_level))


def point_in_block(
    point: Point,
    block: Block,
    snap_tolerance: float = 0.0,
    assembler: PolygonAssembler | None = None,
) -> bool:
    """Check whether a point lies inside a block's stitched outline.

    With an assembler the outline is built through it, so segments that fail
    to attach are logged and counted; its own snap tolerance then applies.
    """
    segments = block.segments()
    if not segments:
        return False
    if assembler is not None:
        return point_in_polygon(point, assembler.assemble(segments, block_id=block.id))
    return point_in_polygon(point, assemble_polygon(segments, snap_tolerance))


def _first_entity_hit(
    point: Point,
    blocks: Sequence[Block],
    entity_type: type[Segment] | type[Sewing],
    threshold: float,
) -> HitResult | None:
    kind = HitKind.SEWING if entity_type is Sewing else HitKind.SEGMENT
    for block in blocks:
        for entity in block.entities:
            if not isinstance(entity, entity_type) or not entity.is_renderable():
                continue
            if distance_to_polyline(point, entity.vertexes) < threshold:
                return HitResult(kind, entity.id, block.id)
    return None


def hit_test(
    point: Point,
    blocks: Sequence[Block],
    zoom_level: float,
    config: HitTestConfig | None = None,
    geometry: GeometryConfig | None = None,
    assembler: PolygonAssembler | None = None,
) -> HitResult:
    """Find what lies under a pointer position.

    Args:
        point: Pointer position in world coordinates
        blocks: Blocks in paint order
        zoom_level: Current zoom level
        config: Hit threshold settings
        geometry: Geometry tolerances (polygon snapping)
        assembler: Outline assembler that reports unattached segments

    Returns:
        The first sewing within the threshold, else the first segment, else
        the first block whose outline contains the point, else NONE
    """
    config = config or HitTestConfig()
    geometry = geometry or GeometryConfig()
    threshold = hit_threshold(
        zoom_level,
        base=config.base_threshold,
        minimum=config.min_threshold,
        maximum=config.max_threshold,
    )

    for entity_type in (Sewing, Segment):
        hit = _first_entity_hit(point, blocks, entity_type, threshold)
        if hit is not None:
            return hit

    for block in blocks:
        if point_in_block(point, block, geometry.polygon_snap_tolerance, assembler):
            return HitResult(HitKind.BLOCK, block.id, block.id)

    return HitResult.none()
