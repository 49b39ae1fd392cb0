"""Entity types: boundary segments and the sewings that ride on them.

An entity is a tagged union of two variants:
- Segment: a polyline that is the geometry of record
- Sewing: a derived polyline bound to a ratio span of a parent segment

The sewing's ``(segment_id, start_ratio, end_ratio)`` is the source of truth;
its vertexes are a cached projection onto the parent's current geometry.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from seamline.domain.point import Point


class EntityLayer(str, Enum):
    """Layer tag used by the document format."""

    SEGMENT = "segment"
    SEWING = "sewing"


@dataclass(frozen=True, slots=True)
class Segment:
    """A boundary piece of a pattern block.

    Attributes:
        id: Stable entity identity within the block
        vertexes: Ordered polyline vertexes
        type: Free-form entity type carried through from the document
    """

    id: int
    vertexes: tuple[Point, ...] = field(default_factory=tuple)
    type: str = "polyline"

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertexes", tuple(self.vertexes))

    @property
    def layer(self) -> EntityLayer:
        return EntityLayer.SEGMENT

    def is_renderable(self) -> bool:
        """Check whether the segment has at least two vertexes."""
        return len(self.vertexes) >= 2

    def with_vertexes(self, vertexes: "list[Point] | tuple[Point, ...]") -> "Segment":
        return replace(self, vertexes=tuple(vertexes))

    def translated(self, dx: float, dy: float) -> "Segment":
        return self.with_vertexes([v.translated(dx, dy) for v in self.vertexes])

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the document entity shape."""
        return {
            "id": self.id,
            "type": self.type,
            "layer": self.layer.value,
            "vertexes": [v.to_dict() for v in self.vertexes],
        }


@dataclass(frozen=True, slots=True)
class Sewing:
    """A sub-curve glued to a ratio span of a parent segment.

    Both ratios lie in ``[0, 1]``. For an open parent ``end_ratio >= start_ratio``.
    For a closed parent ``end_ratio < start_ratio`` is legal and means the span
    wraps across the seam. Values outside ``[0, 1]`` from older documents are
    read modulo 1 on a closed parent.

    Attributes:
        id: Stable entity identity within the block
        segment_id: Lookup key of the parent segment (non-owning)
        start_ratio: Start of the span as a fraction of the parent's length
        end_ratio: End of the span as a fraction of the parent's length
        vertexes: Cached projection of the span onto the parent
        type: Free-form entity type carried through from the document
    """

    id: int
    segment_id: int
    start_ratio: float
    end_ratio: float
    vertexes: tuple[Point, ...] = field(default_factory=tuple)
    type: str = "polyline"

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertexes", tuple(self.vertexes))

    @property
    def layer(self) -> EntityLayer:
        return EntityLayer.SEWING

    @property
    def span_ratio(self) -> float:
        """Raw ``end_ratio - start_ratio`` (negative for a wrapped span)."""
        return self.end_ratio - self.start_ratio

    def is_renderable(self) -> bool:
        """Check whether the sewing has at least two vertexes."""
        return len(self.vertexes) >= 2

    def with_vertexes(self, vertexes: "list[Point] | tuple[Point, ...]") -> "Sewing":
        return replace(self, vertexes=tuple(vertexes))

    def with_span(
        self,
        segment_id: int,
        start_ratio: float,
        end_ratio: float,
        vertexes: "list[Point] | tuple[Point, ...]",
    ) -> "Sewing":
        """Return a copy re-bound to a (possibly new) parent span."""
        return replace(
            self,
            segment_id=segment_id,
            start_ratio=start_ratio,
            end_ratio=end_ratio,
            vertexes=tuple(vertexes),
        )

    def translated(self, dx: float, dy: float) -> "Sewing":
        # Rigid translation leaves the ratio span valid.
        return self.with_vertexes([v.translated(dx, dy) for v in self.vertexes])

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the document entity shape."""
        return {
            "id": self.id,
            "type": self.type,
            "layer": self.layer.value,
            "vertexes": [v.to_dict() for v in self.vertexes],
            "segmentId": self.segment_id,
            "startRatio": self.start_ratio,
            "endRatio": self.end_ratio,
        }


Entity = Segment | Sewing
