"""Domain models for seamline.

This module contains the models for blocks and their entities. All models are:

- Immutable where possible (frozen dataclasses; edits return new objects)
- Serializable to the block document shape
- Independent of the geometry algorithms in ``seamline.core``

Key classes:
- Point: A 2D world-space point
- Segment: A boundary polyline (geometry of record)
- Sewing: A polyline bound to a ratio span of a parent segment
- Block: A pattern piece owning its segments and sewings
"""

from seamline.domain.block import Block
from seamline.domain.entity import Entity, EntityLayer, Segment, Sewing
from seamline.domain.point import Point

__all__: list[str] = [
    # Enums
    "EntityLayer",
    # Core types
    "Point",
    "Entity",
    "Segment",
    "Sewing",
    "Block",
]
