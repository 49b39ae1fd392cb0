"""Block representation.

A block owns the segments and sewings of one pattern piece. Blocks are
treated as values: every edit returns a new block, so a sewing's parent
reference is always resolved against the current geometry.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from seamline.domain.entity import Entity, Segment, Sewing


@dataclass
class Block:
    """A pattern block with its entities.

    Attributes:
        id: Opaque, stable block identity
        name: Display name
        entities: Segments and sewings in document order
        _index: Id to entity map built once per block
    """

    id: int
    name: str
    entities: tuple[Entity, ...] = field(default_factory=tuple)
    _index: dict[int, Entity] = field(default_factory=dict, repr=False, init=False, compare=False)

    def __post_init__(self) -> None:
        self.entities = tuple(self.entities)
        self._index = {entity.id: entity for entity in self.entities}

    def get_entity(self, entity_id: int) -> Entity | None:
        """Look up an entity by id."""
        return self._index.get(entity_id)

    def get_segment(self, segment_id: int) -> Segment | None:
        """Look up a segment by id.

        Returns:
            The segment, or None if the id is unknown or names a sewing
        """
        entity = self._index.get(segment_id)
        return entity if isinstance(entity, Segment) else None

    def get_sewing(self, sewing_id: int) -> Sewing | None:
        """Look up a sewing by id."""
        entity = self._index.get(sewing_id)
        return entity if isinstance(entity, Sewing) else None

    def segments(self) -> list[Segment]:
        """Segments in document order."""
        return [e for e in self.entities if isinstance(e, Segment)]

    def sewings(self) -> list[Sewing]:
        """Sewings in document order."""
        return [e for e in self.entities if isinstance(e, Sewing)]

    def with_entities(self, entities: Iterable[Entity]) -> "Block":
        return Block(id=self.id, name=self.name, entities=tuple(entities))

    def with_entity(self, entity: Entity) -> "Block":
        """Return a copy with the entity of the same id replaced."""
        return self.with_entities(
            entity if existing.id == entity.id else existing for existing in self.entities
        )

    def translated(self, dx: float, dy: float) -> "Block":
        """Rigidly translate every entity of the block."""
        return self.with_entities(entity.translated(dx, dy) for entity in self.entities)

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box over all entity vertexes.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y); zeros for an empty block
        """
        xs = [v.x for e in self.entities for v in e.vertexes]
        ys = [v.y for e in self.entities for v in e.vertexes]
        if not xs:
            return (0.0, 0.0, 0.0, 0.0)
        return (min(xs), min(ys), max(xs), max(ys))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the document block shape."""
        return {
            "id": self.id,
            "name": self.name,
            "entities": [e.to_dict() for e in self.entities],
        }
