"""Unit tests for the interaction layer."""

from unittest.mock import MagicMock

import pytest

from seamline.core.drag import DragState
from seamline.domain import Block, Point, Segment, Sewing
from seamline.interaction import CursorStyle, HoverState, PatternEditor, PointerButton, SelectionState


def coords(points) -> list[float]:
    return [c for p in points for c in p.to_tuple()]


@pytest.fixture
def block() -> Block:
    """100x100 square with a sewing on [0.2, 0.6] of the bottom edge."""
    return Block(
        id=10,
        name="Square",
        entities=(
            Segment(id=1, vertexes=[Point(0, 0), Point(100, 0)]),
            Segment(id=2, vertexes=[Point(100, 0), Point(100, 100)]),
            Segment(id=3, vertexes=[Point(0, 100), Point(100, 100)]),
            Segment(id=4, vertexes=[Point(0, 100), Point(0, 0)]),
            Sewing(id=5, segment_id=1, start_ratio=0.2, end_ratio=0.6, vertexes=[Point(20, 0), Point(60, 0)]),
        ),
    )


@pytest.fixture
def editor(block: Block) -> PatternEditor:
    return PatternEditor([block], logger=MagicMock())


class TestSelectionState:
    """Tests for SelectionState."""

    def test_select_replaces(self) -> None:
        selection = SelectionState()
        selection.select_block(1)
        selection.select_block(2)
        assert selection.block_ids == [2]

    def test_kinds_are_exclusive(self) -> None:
        """Test selecting one kind clears the other."""
        selection = SelectionState()
        selection.toggle_block(1)
        selection.toggle_entity(7)
        assert selection.block_ids == []
        assert selection.is_entity_selected(7)
        selection.select_block(3)
        assert selection.entity_ids == []

    def test_toggle(self) -> None:
        selection = SelectionState()
        selection.toggle_entity(1)
        selection.toggle_entity(2)
        selection.toggle_entity(1)
        assert selection.entity_ids == [2]

    def test_clear(self) -> None:
        selection = SelectionState(block_ids=[1, 2])
        assert not selection.is_empty
        selection.clear()
        assert selection.is_empty


class TestHoverState:
    """Tests for HoverState."""

    def test_entity_hover_clears_block(self) -> None:
        hover = HoverState(block_id=4)
        hover.set_entity(9)
        assert (hover.entity_id, hover.block_id) == (9, None)

    def test_clearing_entity_keeps_block(self) -> None:
        hover = HoverState(block_id=4)
        hover.set_entity(None)
        assert hover.block_id == 4


class TestSewingDrag:
    """Tests for sewing drags through the editor."""

    def test_drag_moves_sewing(self, editor: PatternEditor) -> None:
        assert editor.pointer_down(Point(40, 1))
        assert editor.drag_session.state is DragState.ANCHORING

        editor.pointer_move(Point(70, 1))
        sewing = editor.blocks[0].get_sewing(5)
        assert (sewing.start_ratio, sewing.end_ratio) == pytest.approx((0.5, 0.9))
        assert coords(sewing.vertexes) == pytest.approx([50, 0, 90, 0])
        assert editor.cursor is CursorStyle.GRABBING

        editor.pointer_up()
        assert editor.drag_session is None
        assert not editor.is_dragging
        assert editor.cursor is CursorStyle.DEFAULT

    def test_drag_respects_viewport(self, editor: PatternEditor) -> None:
        """Test screen positions are mapped to world before dragging."""
        editor.viewport.zoom = 2.0
        assert editor.pointer_down(Point(80, 2))
        editor.pointer_move(Point(140, 2))
        sewing = editor.blocks[0].get_sewing(5)
        assert (sewing.start_ratio, sewing.end_ratio) == pytest.approx((0.5, 0.9))


class TestBlockDrag:
    """Tests for whole-block translation."""

    def test_interior_drag_translates(self, editor: PatternEditor) -> None:
        assert editor.pointer_down(Point(50, 50))
        editor.pointer_move(Point(55, 60))
        editor.pointer_move(Point(60, 70))
        editor.pointer_up()

        moved = editor.blocks[0]
        assert moved.bounding_box() == (10, 20, 110, 120)
        assert moved.get_sewing(5).vertexes == (Point(30, 20), Point(70, 20))

    def test_miss_starts_nothing(self, editor: PatternEditor) -> None:
        assert not editor.pointer_down(Point(500, 500))
        assert not editor.is_dragging

    def test_right_button_ignored(self, editor: PatternEditor) -> None:
        assert not editor.pointer_down(Point(50, 50), PointerButton.RIGHT)


class TestPanAndZoom:
    """Tests for viewport gestures."""

    def test_middle_button_pans(self, editor: PatternEditor) -> None:
        assert editor.pointer_down(Point(10, 10), PointerButton.MIDDLE)
        assert editor.is_panning
        editor.pointer_move(Point(30, 5))
        assert (editor.viewport.pan_x, editor.viewport.pan_y) == (20, -5)
        assert editor.cursor is CursorStyle.PANNING
        editor.pointer_up()
        assert not editor.is_panning

    def test_wheel(self, editor: PatternEditor) -> None:
        assert editor.wheel(Point(0, 0), -120) == pytest.approx(1.1)
        assert editor.wheel(Point(0, 0), 120) == pytest.approx(0.99)

    @pytest.mark.parametrize(("key", "expected"), [("+", 1.1), ("=", 1.1), ("-", 0.9), ("_", 0.9)])
    def test_zoom_keys(self, editor: PatternEditor, key: str, expected: float) -> None:
        assert editor.key(key)
        assert editor.viewport.zoom == pytest.approx(expected)

    def test_reset_key(self, editor: PatternEditor) -> None:
        editor.key("+")
        editor.viewport.pan_by(5, 5)
        assert editor.key("0")
        assert (editor.viewport.zoom, editor.viewport.pan_x) == (1.0, 0.0)

    def test_other_keys_ignored(self, editor: PatternEditor) -> None:
        assert not editor.key("x")


class TestHoverAndClick:
    """Tests for hover tracking and click selection."""

    def test_hover_segment(self, editor: PatternEditor) -> None:
        editor.pointer_move(Point(80, 2))
        assert editor.hover.entity_id == 1
        assert editor.cursor is CursorStyle.GRAB

    def test_hover_block_then_nothing(self, editor: PatternEditor) -> None:
        editor.pointer_move(Point(50, 50))
        assert (editor.hover.entity_id, editor.hover.block_id) == (None, 10)
        editor.pointer_move(Point(500, 500))
        assert (editor.hover.entity_id, editor.hover.block_id) == (None, None)
        assert editor.cursor is CursorStyle.DEFAULT

    def test_click_selection(self, editor: PatternEditor) -> None:
        editor.click(Point(40, 1))
        assert editor.selection.entity_ids == [5]

        editor.click(Point(80, 2), shift=True)
        assert editor.selection.entity_ids == [5, 1]

        editor.click(Point(50, 50))
        assert editor.selection.block_ids == [10]
        assert editor.selection.entity_ids == []

    def test_click_empty_space(self, editor: PatternEditor) -> None:
        """Test a plain click clears, a shift click keeps the selection."""
        editor.click(Point(50, 50))
        editor.click(Point(500, 500), shift=True)
        assert editor.selection.block_ids == [10]
        editor.click(Point(500, 500))
        assert editor.selection.is_empty

    def test_replace_blocks_resets(self, editor: PatternEditor, block: Block) -> None:
        editor.click(Point(50, 50))
        editor.pointer_down(Point(40, 1))
        editor.replace_blocks([block.translated(200, 0)])
        assert editor.selection.is_empty
        assert editor.drag_session is None
        assert editor.blocks[0].bounding_box()[0] == 200


class TestOutlineReporting:
    """Tests for unattached outline segments seen by the editor."""

    def test_hover_logs_stray_segment(self, block: Block) -> None:
        stray = Segment(id=6, vertexes=[Point(200, 200), Point(300, 200)])
        logger = MagicMock()
        editor = PatternEditor(
            [Block(id=block.id, name=block.name, entities=(*block.entities, stray))], logger=logger
        )

        editor.pointer_move(Point(50, 50))

        assert editor.hover.block_id == 10
        assert editor.assembler.skipped_count == 1
        messages = [c.args[0] for c in logger.debug.call_args_list]
        assert "Segments not stitched into outline" in messages

    def test_block_drag_counts_skip(self, block: Block) -> None:
        stray = Segment(id=6, vertexes=[Point(200, 200), Point(300, 200)])
        editor = PatternEditor(
            [Block(id=block.id, name=block.name, entities=(*block.entities, stray))], logger=MagicMock()
        )
        assert editor.pointer_down(Point(50, 50))
        # Once for the hit test, once for the block lookup
        assert editor.assembler.skipped_count == 2
