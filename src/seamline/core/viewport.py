"""Zoom and pan state for mapping between screen and world coordinates.

``screen = world * zoom + pan``. Zooming with the wheel keeps the world point
under the cursor fixed; keyboard zoom scales about the screen origin.
"""

from dataclasses import dataclass, field

from seamline.config import HitTestConfig, ViewConfig
from seamline.core.hit_test import hit_threshold
from seamline.domain import Point


@dataclass
class Viewport:
    """Mutable view transform."""

    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    config: ViewConfig = field(default_factory=ViewConfig)

    def _clamp_zoom(self, zoom: float) -> float:
        return max(self.config.zoom_min, min(self.config.zoom_max, zoom))

    def screen_to_world(self, screen: Point) -> Point:
        return Point((screen.x - self.pan_x) / self.zoom, (screen.y - self.pan_y) / self.zoom)

    def world_to_screen(self, world: Point) -> Point:
        return Point(world.x * self.zoom + self.pan_x, world.y * self.zoom + self.pan_y)

    def zoom_at(self, screen: Point, zoom_in: bool) -> float:
        """Zoom one step toward a screen position.

        Args:
            screen: Cursor position in screen coordinates
            zoom_in: True to zoom in, False to zoom out

        Returns:
            The new zoom level
        """
        factor = self.config.zoom_step if zoom_in else self.config.zoom_step_reverse
        new_zoom = self._clamp_zoom(self.zoom * factor)
        world = self.screen_to_world(screen)
        self.pan_x = screen.x - world.x * new_zoom
        self.pan_y = screen.y - world.y * new_zoom
        self.zoom = new_zoom
        return new_zoom

    def zoom_in(self) -> float:
        self.zoom = min(self.config.zoom_max, self.zoom * self.config.zoom_step)
        return self.zoom

    def zoom_out(self) -> float:
        self.zoom = max(self.config.zoom_min, self.zoom * self.config.zoom_step_reverse)
        return self.zoom

    def pan_by(self, dx: float, dy: float) -> None:
        """Shift the view by a screen-space delta."""
        self.pan_x += dx
        self.pan_y += dy

    def reset(self) -> None:
        self.zoom = self.config.zoom_default
        self.pan_x = 0.0
        self.pan_y = 0.0

    def hit_threshold(self, config: HitTestConfig | None = None) -> float:
        """World-space hit distance at the current zoom."""
        config = config or HitTestConfig()
        return hit_threshold(
            self.zoom,
            base=config.base_threshold,
            minimum=config.min_threshold,
            maximum=config.max_threshold,
        )
