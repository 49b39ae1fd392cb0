"""Conversion from domain models to document schema models."""

from seamline.domain import Block, Point, Sewing
from seamline.io.schema import RawBlock, RawEntity, RawPoint


def raw_points_to_domain(raw_points: list[RawPoint]) -> tuple[Point, ...]:
    return tuple(Point(p.x, p.y) for p in raw_points)


def domain_block_to_raw(block: Block) -> RawBlock:
    """Convert a domain block to its document form.

    Sewings are written with ratios only; legacy offsets are never emitted.
    """
    entities: list[RawEntity] = []
    for entity in block.entities:
        vertexes = [RawPoint(x=v.x, y=v.y) for v in entity.vertexes]
        if isinstance(entity, Sewing):
            entities.append(
                RawEntity(
                    id=entity.id,
                    type=entity.type,
                    layer="sewing",
                    vertexes=vertexes,
                    segment_id=entity.segment_id,
                    start_ratio=entity.start_ratio,
                    end_ratio=entity.end_ratio,
                )
            )
        else:
            entities.append(
                RawEntity(id=entity.id, type=entity.type, layer="segment", vertexes=vertexes)
            )
    return RawBlock(id=block.id, name=block.name, entities=entities)
