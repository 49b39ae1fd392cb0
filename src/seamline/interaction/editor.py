"""Headless pattern editor.

PatternEditor owns the block collection and routes pointer, wheel and key
events to hit testing, the sewing drag solver, whole-block translation and
the viewport. Event positions are in screen coordinates. A rendering layer
reads ``blocks``, ``selection``, ``hover``, ``cursor`` and ``viewport``.
"""

from collections.abc import Sequence
from enum import Enum

import structlog

from seamline.config import SeamlineSettings
from seamline.core.drag import DragConstraintSolver, DragSession
from seamline.core.hit_test import HitKind, HitResult, hit_test, point_in_block
from seamline.core.polygon import PolygonAssembler
from seamline.core.viewport import Viewport
from seamline.domain import Block, Point
from seamline.interaction.selection import HoverState, SelectionState
from seamline.utils.logging import GeometryLogger


class PointerButton(int, Enum):
    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


class CursorStyle(str, Enum):
    DEFAULT = "default"
    GRAB = "grab"
    GRABBING = "grabbing"
    PANNING = "panning"


class PatternEditor:
    """Routes input events to the geometry core.

    Pointer-down over a sewing starts a sewing drag; otherwise pointer-down
    inside a block starts a block drag. The middle button pans. Releasing the
    pointer ends whichever gesture is active.

    Example:
        editor = PatternEditor(blocks)
        editor.pointer_down(Point(120, 80))
        editor.pointer_move(Point(140, 80))
        editor.pointer_up()
    """

    def __init__(
        self,
        blocks: Sequence[Block],
        settings: SeamlineSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.settings = settings or SeamlineSettings()
        self.blocks: list[Block] = list(blocks)
        self.viewport = Viewport(zoom=self.settings.view.zoom_default, config=self.settings.view)
        self.selection = SelectionState()
        self.hover = HoverState()
        self.cursor = CursorStyle.DEFAULT
        self.solver = DragConstraintSolver(self.settings, GeometryLogger(logger))
        self._logger = logger or structlog.get_logger("seamline.editor")
        self.assembler = PolygonAssembler(
            snap_tolerance=self.settings.geometry.polygon_snap_tolerance, logger=self._logger
        )

        self._session: DragSession | None = None
        self._dragged_block_id: int | None = None
        self._block_drag_last: Point | None = None
        self._pan_origin: Point | None = None

    @property
    def drag_session(self) -> DragSession | None:
        return self._session

    @property
    def is_dragging(self) -> bool:
        return self._session is not None or self._dragged_block_id is not None

    @property
    def is_panning(self) -> bool:
        return self._pan_origin is not None

    def replace_blocks(self, blocks: Sequence[Block]) -> None:
        """Swap in a new block collection and drop all gesture state."""
        self.blocks = list(blocks)
        self.selection.clear()
        self.hover.clear()
        self.pointer_up()

    def hit(self, screen: Point) -> HitResult:
        """Hit test a screen position at the current zoom."""
        return hit_test(
            self.viewport.screen_to_world(screen),
            self.blocks,
            self.viewport.zoom,
            config=self.settings.hit_test,
            geometry=self.settings.geometry,
            assembler=self.assembler,
        )

    def _block(self, block_id: int | None) -> Block | None:
        return next((b for b in self.blocks if b.id == block_id), None)

    def pointer_down(self, screen: Point, button: PointerButton = PointerButton.LEFT) -> bool:
        """Start a gesture.

        Returns:
            True if a pan, sewing drag or block drag started
        """
        if button is PointerButton.MIDDLE:
            self._pan_origin = Point(screen.x - self.viewport.pan_x, screen.y - self.viewport.pan_y)
            return True
        if button is not PointerButton.LEFT:
            return False

        world = self.viewport.screen_to_world(screen)
        result = self.hit(screen)

        if result.kind is HitKind.SEWING:
            block = self._block(result.block_id)
            sewing = block.get_sewing(result.id) if block is not None else None
            if block is not None and sewing is not None:
                self._session = self.solver.begin_drag(world, sewing, block)
                return True

        block = next(
            (b for b in self.blocks if point_in_block(world, b, assembler=self.assembler)), None
        )
        if block is None:
            return False

        self._dragged_block_id = block.id
        self._block_drag_last = world
        return True

    def pointer_move(self, screen: Point) -> None:
        """Advance the active gesture, or update hover state when idle."""
        if self._pan_origin is not None:
            self.cursor = CursorStyle.PANNING
            self.viewport.pan_x = screen.x - self._pan_origin.x
            self.viewport.pan_y = screen.y - self._pan_origin.y
            return

        world = self.viewport.screen_to_world(screen)

        if self._dragged_block_id is not None and self._block_drag_last is not None:
            self.cursor = CursorStyle.GRABBING
            dx = world.x - self._block_drag_last.x
            dy = world.y - self._block_drag_last.y
            self.blocks = [
                b.translated(dx, dy) if b.id == self._dragged_block_id else b for b in self.blocks
            ]
            self._block_drag_last = world
            return

        if self._session is not None:
            self.cursor = CursorStyle.GRABBING
            self.blocks = self.solver.update_drag(world, self._session, self.blocks)
            return

        self._update_hover(screen)

    def _update_hover(self, screen: Point) -> None:
        result = self.hit(screen)
        if result.kind in (HitKind.SEWING, HitKind.SEGMENT):
            self.hover.set_entity(result.id)
        else:
            self.hover.set_entity(None)
            self.hover.set_block(result.block_id if result.kind is HitKind.BLOCK else None)
        self.cursor = CursorStyle.DEFAULT if result.kind is HitKind.NONE else CursorStyle.GRAB

    def pointer_up(self) -> None:
        """End any active gesture."""
        if self._session is not None:
            self.solver.end_drag(self._session)
            self._session = None
        self._dragged_block_id = None
        self._block_drag_last = None
        self._pan_origin = None
        self.cursor = CursorStyle.DEFAULT

    def click(self, screen: Point, shift: bool = False) -> HitResult:
        """Update the selection for a click.

        Shift toggles membership instead of replacing the selection. A plain
        click on empty space clears it.
        """
        result = self.hit(screen)
        if result.kind in (HitKind.SEWING, HitKind.SEGMENT):
            if shift:
                self.selection.toggle_entity(result.id)  # type: ignore[arg-type]
            else:
                self.selection.select_entity(result.id)  # type: ignore[arg-type]
        elif result.kind is HitKind.BLOCK:
            if shift:
                self.selection.toggle_block(result.id)  # type: ignore[arg-type]
            else:
                self.selection.select_block(result.id)  # type: ignore[arg-type]
        elif not shift:
            self.selection.clear()
        return result

    def wheel(self, screen: Point, delta_y: float) -> float:
        """Zoom toward the cursor; positive delta zooms out."""
        return self.viewport.zoom_at(screen, zoom_in=delta_y <= 0)

    def key(self, key: str) -> bool:
        """Handle keyboard zoom shortcuts.

        Returns:
            True if the key was handled
        """
        if key in ("+", "="):
            self.viewport.zoom_in()
        elif key in ("-", "_"):
            self.viewport.zoom_out()
        elif key == "0":
            self.viewport.reset()
        else:
            return False
        self._logger.debug("Zoom changed", key=key, zoom=self.viewport.zoom)
        return True
