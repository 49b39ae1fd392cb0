"""Point type shared by every polyline in the world space."""

import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D world space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in world units
        y: Y coordinate in world units
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def translated(self, dx: float, dy: float) -> "Point":
        """Return a copy moved by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the document's ``{x, y}`` shape."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from a ``{x, y}`` mapping."""
        return cls(x=float(data["x"]), y=float(data["y"]))
