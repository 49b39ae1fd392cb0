"""Load-time normalization and sewing rebuilds.

``normalize`` turns raw document blocks into domain blocks: legacy sewings
that only carry absolute offsets are converted to ratios once, against the
parent's length at load time, and every sewing's vertexes are then rebuilt
from its ratios. ``rebuild_all_ratios`` repeats the rebuild after bulk
geometry changes.

A sewing whose parent is missing or degenerate keeps its stored vertexes.
Those skips are counted in ``RebuildStats`` and logged.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from seamline.config import SeamlineSettings
from seamline.core.geometry import arc_length, is_closed
from seamline.core.ratio import offsets_to_ratios
from seamline.core.sewing import build_sewing_from_ratios
from seamline.domain import Block, Entity, Point, Segment, Sewing
from seamline.exceptions import DocumentFormatError
from seamline.io.converter import raw_points_to_domain
from seamline.io.schema import RawBlock, RawEntity
from seamline.utils.logging import GeometryLogger, RebuildStats

# Ratios given to sewings whose span cannot be recovered
FALLBACK_RATIOS: tuple[float, float] = (0.0, 1.0)


class BlockNormalizer:
    """Converts raw blocks to domain blocks and keeps sewings on their parents.

    Example:
        normalizer = BlockNormalizer()
        blocks = normalizer.normalize(reader.iter_raw_blocks())
        print(normalizer.stats.skipped_count)
    """

    def __init__(
        self,
        settings: SeamlineSettings | None = None,
        logger: GeometryLogger | None = None,
    ) -> None:
        self.settings = settings or SeamlineSettings()
        self.logger = logger or GeometryLogger()

    @property
    def stats(self) -> RebuildStats:
        return self.logger.stats

    def _legacy_ratios(
        self, raw: RawEntity, parents: Mapping[int, tuple[Point, ...]]
    ) -> tuple[float, float]:
        if raw.has_ratios:
            return raw.start_ratio, raw.end_ratio  # type: ignore[return-value]

        parent = parents.get(raw.segment_id)  # type: ignore[arg-type]
        if parent is None or not raw.has_offsets:
            return FALLBACK_RATIOS

        ratios = offsets_to_ratios(
            raw.start_offset,  # type: ignore[arg-type]
            raw.end_offset,  # type: ignore[arg-type]
            arc_length(parent),
            is_closed(parent, self.settings.geometry.closed_tolerance),
        )
        return ratios if ratios is not None else FALLBACK_RATIOS

    def raw_block_to_domain(self, raw: RawBlock) -> Block:
        """Convert a validated raw block, expressing every sewing in ratios.

        Existing ratio fields are preferred over legacy offsets. Sewing
        vertexes are copied as stored.
        """
        parents = {
            entity.id: raw_points_to_domain(entity.vertexes)
            for entity in raw.entities
            if entity.layer == "segment"
        }

        entities: list[Entity] = []
        for entity in raw.entities:
            vertexes = raw_points_to_domain(entity.vertexes)
            if entity.layer == "segment":
                entities.append(Segment(id=entity.id, vertexes=vertexes, type=entity.type))
                continue

            start_ratio, end_ratio = self._legacy_ratios(entity, parents)
            entities.append(
                Sewing(
                    id=entity.id,
                    segment_id=entity.segment_id,  # type: ignore[arg-type]
                    start_ratio=start_ratio,
                    end_ratio=end_ratio,
                    vertexes=vertexes,
                    type=entity.type,
                )
            )

        return Block(id=raw.id, name=raw.name, entities=tuple(entities))

    def rebuild_sewing(self, block: Block, sewing: Sewing) -> Sewing:
        """Recompute a sewing's vertexes from its ratios and current parent.

        Returns:
            The rebuilt sewing, or the original one when its parent is
            missing or degenerate or the span yields fewer than two vertexes
        """
        parent = block.get_segment(sewing.segment_id)
        if parent is None:
            self.logger.log_sewing_skipped(block.id, sewing.id, "missing_parent")
            return sewing

        total = arc_length(parent.vertexes)
        if len(parent.vertexes) < 2 or total <= 0:
            self.logger.log_sewing_skipped(block.id, sewing.id, "degenerate_parent")
            return sewing

        geometry = self.settings.geometry
        vertexes = build_sewing_from_ratios(
            parent.vertexes,
            sewing.start_ratio,
            sewing.end_ratio,
            closed_tolerance=geometry.closed_tolerance,
            end_tolerance=geometry.end_point_tolerance,
        )
        if len(vertexes) < 2:
            self.logger.log_sewing_skipped(block.id, sewing.id, "empty_span")
            return sewing

        self.logger.log_sewing_rebuilt(block.id, sewing.id, len(vertexes))
        return sewing.with_vertexes(vertexes)

    def rebuild_block(self, block: Block) -> Block:
        entities = [
            self.rebuild_sewing(block, entity) if isinstance(entity, Sewing) else entity
            for entity in block.entities
        ]
        return block.with_entities(entities)

    def rebuild_all_ratios(self, blocks: Sequence[Block]) -> list[Block]:
        """Rebuild every sewing in every block from its stored ratios."""
        return [self.rebuild_block(block) for block in blocks]

    def normalize(self, raw_blocks: Iterable[RawBlock | Mapping[str, Any]]) -> list[Block]:
        """Convert raw blocks to domain blocks with rebuilt sewings.

        Args:
            raw_blocks: Validated RawBlock models or plain JSON mappings

        Returns:
            Domain blocks in input order

        Raises:
            DocumentFormatError: If a mapping does not match the block schema
        """
        blocks: list[Block] = []
        for raw in raw_blocks:
            if not isinstance(raw, RawBlock):
                try:
                    raw = RawBlock.model_validate(raw)
                except ValidationError as e:
                    raise DocumentFormatError("<blocks>", str(e)) from e
            blocks.append(self.raw_block_to_domain(raw))
        return self.rebuild_all_ratios(blocks)


def normalize(
    raw_blocks: Iterable[RawBlock | Mapping[str, Any]],
    settings: SeamlineSettings | None = None,
) -> list[Block]:
    """Load-time ratio conversion and vertex rebuild."""
    return BlockNormalizer(settings).normalize(raw_blocks)


def rebuild_all_ratios(
    blocks: Sequence[Block],
    settings: SeamlineSettings | None = None,
) -> list[Block]:
    """Recompute every sewing's vertexes against its current parent."""
    return BlockNormalizer(settings).rebuild_all_ratios(blocks)
