"""Unit tests for offset/ratio conversion and seam-continuous projection."""

import math

import pytest

from seamline.core.ratio import (
    normalize_span,
    offset_to_ratio,
    offsets_to_ratios,
    project_cursor_arc_length,
    ratio_to_offset,
)
from seamline.domain import Point

CLOSED_SQUARE = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10), Point(0, 0)]
OPEN_LINE = [Point(0, 0), Point(20, 0)]


class TestOffsetRatio:
    """Tests for single offset/ratio conversion."""

    def test_open_ratio(self) -> None:
        assert offset_to_ratio(5.0, 20.0, closed=False) == pytest.approx(0.25)

    def test_open_clamps(self) -> None:
        """Test open parents clamp offsets to the curve."""
        assert offset_to_ratio(-5.0, 20.0, closed=False) == 0.0
        assert offset_to_ratio(30.0, 20.0, closed=False) == 1.0
        assert ratio_to_offset(1.5, 20.0, closed=False) == 20.0

    def test_closed_wraps(self) -> None:
        """Test closed parents read offsets modulo the length."""
        assert offset_to_ratio(45.0, 40.0, closed=True) == pytest.approx(0.125)
        assert offset_to_ratio(-4.0, 40.0, closed=True) == pytest.approx(0.9)
        assert ratio_to_offset(1.25, 40.0, closed=True) == pytest.approx(10.0)

    def test_zero_length_parent(self) -> None:
        """Test that a parent without length yields no ratio."""
        assert offset_to_ratio(1.0, 0.0, closed=False) is None
        assert ratio_to_offset(0.5, 0.0, closed=True) is None

    def test_non_finite_input(self) -> None:
        assert offset_to_ratio(math.nan, 10.0, closed=False) is None
        assert ratio_to_offset(math.inf, 10.0, closed=True) is None


class TestNormalizeSpan:
    """Tests for closed-curve span normalization."""

    def test_forward_span(self) -> None:
        assert normalize_span(4.0, 12.0, 40.0) == pytest.approx((4.0, 12.0))

    def test_wrapping_span(self) -> None:
        """Test a span with end before start wraps through the seam."""
        assert normalize_span(36.0, 4.0, 40.0) == pytest.approx((36.0, 44.0))

    def test_start_beyond_one_lap(self) -> None:
        assert normalize_span(50.0, 58.0, 40.0) == pytest.approx((10.0, 18.0))

    def test_full_loop(self) -> None:
        assert normalize_span(0.0, 40.0, 40.0) == pytest.approx((0.0, 40.0))

    def test_empty_span(self) -> None:
        assert normalize_span(5.0, 5.0, 40.0) is None

    def test_unusable_length(self) -> None:
        assert normalize_span(0.0, 1.0, 0.0) is None


class TestOffsetsToRatios:
    """Tests for legacy offset pair conversion."""

    def test_open_parent(self) -> None:
        assert offsets_to_ratios(5.0, 15.0, 20.0, closed=False) == pytest.approx((0.25, 0.75))

    def test_open_parent_raises_end_to_start(self) -> None:
        """Test a reversed open span collapses to zero width."""
        assert offsets_to_ratios(15.0, 5.0, 20.0, closed=False) == pytest.approx((0.75, 0.75))

    def test_closed_wrap_form(self) -> None:
        """Test a seam-crossing span keeps end below start."""
        assert offsets_to_ratios(36.0, 4.0, 40.0, closed=True) == pytest.approx((0.9, 0.1))

    def test_closed_full_loop(self) -> None:
        assert offsets_to_ratios(0.0, 40.0, 40.0, closed=True) == pytest.approx((0.0, 1.0))

    def test_zero_length_parent(self) -> None:
        assert offsets_to_ratios(0.0, 1.0, 0.0, closed=False) is None


class TestProjectCursor:
    """Tests for seam-continuous cursor projection."""

    def test_plain_projection_without_hint(self) -> None:
        assert project_cursor_arc_length(CLOSED_SQUARE, Point(10, 5)) == pytest.approx(15.0)

    def test_crossing_seam_forward(self) -> None:
        """Test moving past the seam continues beyond the total length."""
        result = project_cursor_arc_length(CLOSED_SQUARE, Point(1, 0), previous=39.0)
        assert result == pytest.approx(41.0)

    def test_crossing_seam_backward(self) -> None:
        """Test moving back across the seam returns to the previous lap."""
        result = project_cursor_arc_length(CLOSED_SQUARE, Point(0, 1), previous=41.0)
        assert result == pytest.approx(39.0)

    def test_stays_on_current_lap(self) -> None:
        """Test small moves on a later lap keep the lap offset."""
        result = project_cursor_arc_length(CLOSED_SQUARE, Point(6, 0), previous=45.0)
        assert result == pytest.approx(46.0)

    def test_open_parent_ignores_hint(self) -> None:
        result = project_cursor_arc_length(OPEN_LINE, Point(1, 0), previous=19.0)
        assert result == pytest.approx(1.0)

    def test_custom_thresholds(self) -> None:
        """Test narrower seam bands disable the correction."""
        result = project_cursor_arc_length(
            CLOSED_SQUARE, Point(5, 0), previous=33.0, seam_low=0.1, seam_high=0.9
        )
        assert result == pytest.approx(5.0)
