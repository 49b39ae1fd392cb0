"""Core geometry and interaction algorithms for seamline.

This module contains the core algorithms for:

- Polyline math (projection, distances, arc-length parametrization)
- Ratio projection (offset/ratio conversion, closed-curve wraparound)
- Sewing construction from ratio spans
- Block outline assembly and hit testing
- The sewing drag solver
- Load-time normalization and rebuilds

Geometry functions never raise on degenerate input; they return neutral
values or empty results instead.

Key functions:
- arc_length: Total length of a polyline
- nearest_parameter: Closest (segment index, t) on a polyline
- offsets_to_ratios: Legacy offset pair to ratio pair
- project_cursor_arc_length: Seam-continuous cursor projection
- build_sewing_vertexes: Sample the sub-curve between two offsets
- classify_direction: Sewing direction on a closed parent
- hit_test: Sewing > segment > block priority hit test
- normalize / rebuild_all_ratios: Document load and bulk rebuild
- begin_drag / update_drag / end_drag: Drag protocol

Key classes:
- PolygonAssembler: Stitches block outlines
- DragConstraintSolver: Span- and anchor-preserving drag
- BlockNormalizer: Ratio conversion and sewing rebuilds
- Viewport: Zoom and pan
"""

from seamline.core.direction import SewingDirection, classify_direction
from seamline.core.drag import (
    DragConstraintSolver,
    DragSession,
    DragState,
    begin_drag,
    end_drag,
    shift_into_unit_range,
    unwrap_closed_span,
    update_drag,
    wrap_into_unit_range,
)
from seamline.core.generator import generate_layout
from seamline.core.geometry import (
    arc_length,
    arc_length_at,
    cumulative_lengths,
    distance_to_polyline,
    distance_to_segment,
    find_closest_polyline,
    is_closed,
    nearest_parameter,
    point_and_tangent_at_arc_length,
    point_at_arc_length,
    point_in_polygon,
    polyline_center,
    project_point_onto_segment,
)
from seamline.core.hit_test import HitKind, HitResult, hit_test, hit_threshold, point_in_block
from seamline.core.normalizer import BlockNormalizer, normalize, rebuild_all_ratios
from seamline.core.polygon import PolygonAssembler, assemble_polygon, stitch_segments
from seamline.core.ratio import (
    normalize_span,
    offset_to_ratio,
    offsets_to_ratios,
    project_cursor_arc_length,
    ratio_to_offset,
)
from seamline.core.sewing import build_sewing_from_ratios, build_sewing_vertexes
from seamline.core.viewport import Viewport

__all__ = [
    "BlockNormalizer",
    "DragConstraintSolver",
    "DragSession",
    "DragState",
    "HitKind",
    "HitResult",
    "PolygonAssembler",
    "SewingDirection",
    "Viewport",
    "arc_length",
    "arc_length_at",
    "assemble_polygon",
    "begin_drag",
    "build_sewing_from_ratios",
    "build_sewing_vertexes",
    "classify_direction",
    "cumulative_lengths",
    "distance_to_polyline",
    "distance_to_segment",
    "end_drag",
    "find_closest_polyline",
    "generate_layout",
    "hit_test",
    "hit_threshold",
    "is_closed",
    "nearest_parameter",
    "normalize",
    "normalize_span",
    "offset_to_ratio",
    "offsets_to_ratios",
    "point_and_tangent_at_arc_length",
    "point_at_arc_length",
    "point_in_block",
    "point_in_polygon",
    "polyline_center",
    "project_cursor_arc_length",
    "project_point_onto_segment",
    "ratio_to_offset",
    "rebuild_all_ratios",
    "shift_into_unit_range",
    "stitch_segments",
    "unwrap_closed_span",
    "update_drag",
    "wrap_into_unit_range",
]
