"""Synthetic layout generation.

Template blocks are cloned into a grid for load testing. Each clone picks a
random template, is placed after the previous clones of its row and sits on
the row's baseline (rows are as tall as the tallest template). Every clone
gets fresh sequential block and entity ids, and sewings are re-pointed at the
cloned copies of their parents.
"""

import random
from collections.abc import Sequence
from dataclasses import replace

import structlog

from seamline.domain import Block, Entity, Sewing

DEFAULT_GAP: float = 60.0
DEFAULT_BLOCKS_PER_ROW: int = 10

logger = structlog.get_logger("seamline.generator")


def _clone(
    template: Block, block_id: int, name: str, first_entity_id: int, dx: float, dy: float
) -> Block:
    id_map = {entity.id: first_entity_id + i for i, entity in enumerate(template.entities)}

    entities: list[Entity] = []
    for entity in template.entities:
        moved = entity.translated(dx, dy)
        if isinstance(moved, Sewing):
            cloned: Entity = moved.with_span(
                id_map.get(moved.segment_id, moved.segment_id),
                moved.start_ratio,
                moved.end_ratio,
                moved.vertexes,
            )
        else:
            cloned = moved
        entities.append(replace(cloned, id=id_map[entity.id]))

    return Block(id=block_id, name=name, entities=tuple(entities))


def generate_layout(
    templates: Sequence[Block],
    count: int,
    gap: float = DEFAULT_GAP,
    blocks_per_row: int = DEFAULT_BLOCKS_PER_ROW,
    rng: random.Random | None = None,
) -> list[Block]:
    """Clone template blocks into a grid.

    Args:
        templates: Normalized template blocks
        count: Number of blocks to generate
        gap: Spacing between blocks and from the origin
        blocks_per_row: Grid width
        rng: Random source for template choice (module random when None)

    Returns:
        Generated blocks named ``"{template name} #{n}"``; empty when count is
        not positive or there are no templates
    """
    if count <= 0 or not templates or blocks_per_row <= 0:
        logger.debug("Nothing to generate", count=count, templates=len(templates))
        return []

    rng = rng or random.Random()
    boxes = [template.bounding_box() for template in templates]
    sizes = [(max_x - min_x, max_y - min_y) for min_x, min_y, max_x, max_y in boxes]
    row_height = max(height for _, height in sizes)

    generated: list[Block] = []
    next_entity_id = 1
    offset_x = 0.0

    for i in range(count):
        index = rng.randrange(len(templates))
        template = templates[index]
        min_x, min_y, _, _ = boxes[index]
        width, height = sizes[index]

        col = i % blocks_per_row
        row = i // blocks_per_row
        if col == 0:
            offset_x = 0.0

        # Bottom-align each block within its row.
        offset_y = row * (row_height + gap) + (row_height - height)

        block = _clone(
            template,
            block_id=i + 1,
            name=f"{template.name} #{i + 1}",
            first_entity_id=next_entity_id,
            dx=offset_x + gap - min_x,
            dy=offset_y + gap - min_y,
        )
        generated.append(block)

        next_entity_id += len(template.entities)
        offset_x += width + gap

    logger.info("Layout generated", count=len(generated), entities=next_entity_id - 1)
    return generated
