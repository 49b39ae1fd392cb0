"""Drag constraint solver for sewings.

A drag moves a sewing along its parent while keeping two things fixed: the
ratio span ``end_ratio - start_ratio`` and the anchor ratio, the point inside
the span where the pointer grabbed it. Each frame the nearest segment in the
sewing's block becomes the parent, so a sewing can hop between segments that
touch.

On a closed parent the committed ratios always have a start in [0, 1) and an
end in wrap form once the span runs past the seam, so a later grab reads
them the same way as a freshly loaded sewing.

Key classes:
    DragState: IDLE, ANCHORING, DRAGGING
    DragSession: Explicit per-gesture state, including the seam continuity hint
    DragConstraintSolver: begin_drag / update_drag / end_drag
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from seamline.config import SeamlineSettings
from seamline.core.geometry import arc_length, find_closest_polyline, is_closed
from seamline.core.ratio import project_cursor_arc_length
from seamline.core.sewing import build_sewing_from_ratios
from seamline.domain import Block, Point, Sewing
from seamline.utils.logging import GeometryLogger

# Float noise allowed past the seam before an end ratio is wrapped
RATIO_EPSILON: float = 1e-12


class DragState(str, Enum):
    """Drag session lifecycle."""

    IDLE = "idle"
    ANCHORING = "anchoring"
    DRAGGING = "dragging"


@dataclass
class DragSession:
    """State of one pointer-down to pointer-up gesture on a sewing.

    Attributes:
        state: Current lifecycle state
        block_id: Block owning the dragged sewing
        sewing_id: Dragged sewing
        anchor_ratio: Grab position inside the span, in [0, 1]
        span_ratio: Span held constant through the drag (unwrapped, >= 0 for
            spans that were valid at grab time)
        last_arc_length: Previous frame's cursor arc length on the hint parent
        hint_parent_id: Segment that ``last_arc_length`` was measured on
        frames: Number of accepted drag frames
    """

    state: DragState = DragState.IDLE
    block_id: int | None = None
    sewing_id: int | None = None
    anchor_ratio: float = 0.5
    span_ratio: float = 0.0
    last_arc_length: float | None = None
    hint_parent_id: int | None = None
    frames: int = 0

    @property
    def active(self) -> bool:
        return self.state is not DragState.IDLE


def shift_into_unit_range(start: float, end: float) -> tuple[float, float]:
    """Move a ratio span back inside [0, 1] without changing its width.

    Only one overflow is corrected. A span wider than 1 ends up clamped to
    [0, 1] and loses width.
    """
    if start < 0.0:
        end -= start
        start = 0.0
    elif end > 1.0:
        start -= end - 1.0
        end = 1.0
    return max(0.0, min(1.0, start)), max(0.0, min(1.0, end))


def unwrap_closed_span(start: float, end: float) -> tuple[float, float]:
    """Read a closed-parent span as a start in [0, 1) and a width in [0, 1].

    Stored ratios are taken modulo 1, so wrap-form spans (``end < start``)
    and spans left past the seam by older documents measure the same way.
    A nonzero span that is a whole number of laps is a full loop.
    """
    start_mod = start % 1.0
    if start_mod >= 1.0:
        start_mod = 0.0
    span = (end - start) % 1.0
    if span == 0.0 and end != start:
        span = 1.0
    return start_mod, span


def wrap_into_unit_range(start: float, span: float) -> tuple[float, float]:
    """Commit form of a closed-parent span.

    The start is reduced to [0, 1). When the span runs past the seam the end
    is stored in wrap form, below the start. A full loop is stored as [0, 1].
    """
    if span >= 1.0:
        return 0.0, 1.0
    start = start % 1.0
    if start >= 1.0:
        start = 0.0
    end = start + span
    if end > 1.0 + RATIO_EPSILON:
        end -= 1.0
    return start, min(end, 1.0)


class DragConstraintSolver:
    """Repositions sewings along their parents while preserving span and anchor.

    Example:
        solver = DragConstraintSolver()
        session = solver.begin_drag(pointer, sewing, block)
        blocks = solver.update_drag(pointer, session, blocks)
        solver.end_drag(session)
    """

    def __init__(
        self,
        settings: SeamlineSettings | None = None,
        logger: GeometryLogger | None = None,
    ) -> None:
        self.settings = settings or SeamlineSettings()
        self.logger = logger or GeometryLogger()

    def begin_drag(self, point: Point, sewing: Sewing, block: Block) -> DragSession:
        """Start a drag on a sewing.

        Args:
            point: Pointer position in world coordinates
            sewing: Sewing under the pointer
            block: Block owning the sewing

        Returns:
            Session in the ANCHORING state
        """
        geometry = self.settings.geometry
        session = DragSession(
            state=DragState.ANCHORING,
            block_id=block.id,
            sewing_id=sewing.id,
            anchor_ratio=self.settings.drag.default_anchor_ratio,
            span_ratio=sewing.span_ratio,
        )

        parent = block.get_segment(sewing.segment_id)
        if parent is None or not parent.is_renderable():
            self.logger.log_drag_begin(sewing.id, session.anchor_ratio, session.span_ratio)
            return session

        total = arc_length(parent.vertexes)
        if not math.isfinite(total) or total <= 0:
            self.logger.log_drag_begin(sewing.id, session.anchor_ratio, session.span_ratio)
            return session

        closed = is_closed(parent.vertexes, geometry.closed_tolerance)
        cursor_length = project_cursor_arc_length(
            parent.vertexes, point, closed=closed, closed_tolerance=geometry.closed_tolerance
        )
        cursor = cursor_length / total
        start = sewing.start_ratio
        span = sewing.span_ratio

        if closed:
            # Measure both the span and the cursor forward from the start, past the seam.
            start, span = unwrap_closed_span(sewing.start_ratio, sewing.end_ratio)
            if cursor < start:
                cursor += 1.0

        if span > 0 and math.isfinite(span):
            anchor = (cursor - start) / span
            session.anchor_ratio = max(0.0, min(1.0, anchor))

        session.span_ratio = span
        session.last_arc_length = cursor_length
        session.hint_parent_id = parent.id

        self.logger.log_drag_begin(sewing.id, session.anchor_ratio, session.span_ratio)
        return session

    def update_drag(
        self, point: Point, session: DragSession, blocks: Sequence[Block]
    ) -> list[Block]:
        """Move the dragged sewing toward a new pointer position.

        Args:
            point: Pointer position in world coordinates
            session: Active session from begin_drag
            blocks: Current blocks

        Returns:
            Blocks with the dragged sewing updated; the input blocks unchanged
            when the session is idle or the frame cannot be solved
        """
        result = list(blocks)
        if not session.active or session.sewing_id is None:
            return result

        index = next((i for i, b in enumerate(result) if b.id == session.block_id), None)
        if index is None:
            self.logger.log_drag_rejected(session.sewing_id, "block_missing")
            return result
        block = result[index]

        sewing = block.get_sewing(session.sewing_id)
        if sewing is None:
            self.logger.log_drag_rejected(session.sewing_id, "sewing_missing")
            return result

        candidates = [(s.id, s.vertexes) for s in block.segments() if s.is_renderable()]
        closest = find_closest_polyline(point, candidates)
        if closest is None:
            self.logger.log_drag_rejected(sewing.id, "no_parent")
            return result
        parent = block.get_segment(closest[0])

        total = arc_length(parent.vertexes)
        if not math.isfinite(total) or total <= 0:
            self.logger.log_drag_rejected(sewing.id, "degenerate_parent")
            return result

        geometry = self.settings.geometry
        drag = self.settings.drag
        closed = is_closed(parent.vertexes, geometry.closed_tolerance)

        # The continuity hint is only meaningful on the segment it was measured on.
        previous = session.last_arc_length if session.hint_parent_id == parent.id else None
        cursor_length = project_cursor_arc_length(
            parent.vertexes,
            point,
            previous=previous,
            closed=closed,
            seam_low=drag.seam_low_fraction,
            seam_high=drag.seam_high_fraction,
            closed_tolerance=geometry.closed_tolerance,
        )
        session.last_arc_length = cursor_length
        session.hint_parent_id = parent.id

        cursor = cursor_length / total
        span = session.span_ratio
        new_start = cursor - session.anchor_ratio * span
        new_end = new_start + span
        if closed:
            new_start, new_end = wrap_into_unit_range(new_start, span)
        else:
            new_start, new_end = shift_into_unit_range(new_start, new_end)

        if not (math.isfinite(new_start) and math.isfinite(new_end)):
            self.logger.log_drag_rejected(sewing.id, "non_finite")
            return result

        vertexes = build_sewing_from_ratios(
            parent.vertexes,
            new_start,
            new_end,
            closed=closed,
            closed_tolerance=geometry.closed_tolerance,
            end_tolerance=geometry.end_point_tolerance,
        )
        if len(vertexes) < 2:
            self.logger.log_drag_rejected(sewing.id, "empty_span")
            return result

        updated = sewing.with_span(parent.id, new_start, new_end, vertexes)
        result[index] = block.with_entity(updated)
        session.state = DragState.DRAGGING
        session.frames += 1

        self.logger.log_drag_update(sewing.id, parent.id, new_start, new_end)
        return result

    def end_drag(self, session: DragSession) -> DragSession:
        """Finish a drag, discarding anchor and continuity state."""
        self.logger.log_drag_end(session.sewing_id, session.frames)
        session.state = DragState.IDLE
        session.block_id = None
        session.sewing_id = None
        session.anchor_ratio = self.settings.drag.default_anchor_ratio
        session.span_ratio = 0.0
        session.last_arc_length = None
        session.hint_parent_id = None
        session.frames = 0
        return session


_default_solver = DragConstraintSolver()


def begin_drag(point: Point, sewing: Sewing, block: Block) -> DragSession:
    """Start a drag with default settings."""
    return _default_solver.begin_drag(point, sewing, block)


def update_drag(point: Point, session: DragSession, blocks: Sequence[Block]) -> list[Block]:
    """Advance a drag with default settings."""
    return _default_solver.update_drag(point, session, blocks)


def end_drag(session: DragSession) -> DragSession:
    """Finish a drag."""
    return _default_solver.end_drag(session)
