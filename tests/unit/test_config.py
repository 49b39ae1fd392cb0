"""Unit tests for settings models."""

import pytest
from pydantic import ValidationError

from seamline.config import DragConfig, HitTestConfig, SeamlineSettings, get_default_settings


class TestSettings:
    """Tests for SeamlineSettings and its sections."""

    def test_defaults(self) -> None:
        settings = get_default_settings()
        assert settings.hit_test.base_threshold == 5.0
        assert settings.drag.seam_low_fraction == 0.25
        assert settings.drag.seam_high_fraction == 0.75
        assert settings.generation.blocks_per_row == 10
        assert settings.geometry.polygon_snap_tolerance == 0.0

    def test_nested_override(self) -> None:
        settings = SeamlineSettings.model_validate({"view": {"zoom_max": 8.0}})
        assert settings.view.zoom_max == 8.0
        assert settings.view.zoom_min == 0.01

    def test_threshold_bounds_ordered(self) -> None:
        with pytest.raises(ValidationError, match="min_threshold"):
            HitTestConfig(min_threshold=6.0, max_threshold=2.0)

    @pytest.mark.parametrize("value", [0.0, 0.5, 0.6])
    def test_seam_low_range(self, value: float) -> None:
        with pytest.raises(ValidationError):
            DragConfig(seam_low_fraction=value)
