"""Configuration settings for Seamline."""

from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class GeometryConfig(BaseModel):
    """Tolerances for polyline geometry, in world units."""

    closed_tolerance: float = Field(
        default=1.0,
        ge=0.0,
        le=10.0,
        description="Max distance between first and last vertex for a segment to count as closed",
    )
    end_point_tolerance: float = Field(
        default=0.1,
        ge=0.0,
        le=5.0,
        description="A sewing end point closer than this to the previous vertex is dropped",
    )
    direction_tolerance: float = Field(
        default=1.0,
        ge=0.0,
        le=50.0,
        description="Arc-length difference below which a sewing direction is unknown",
    )
    polygon_snap_tolerance: float = Field(
        default=0.0,
        ge=0.0,
        le=10.0,
        description="Endpoint snapping distance when stitching block polygons (0 = exact match)",
    )


class HitTestConfig(BaseModel):
    """Configuration for pointer hit testing.

    The threshold is specified in screen units and converted to world units by
    dividing by the zoom level, then clamped to ``[min_threshold, max_threshold]``.
    """

    base_threshold: float = Field(
        default=5.0,
        gt=0.0,
        le=100.0,
        description="Hit distance at zoom 1",
    )
    min_threshold: float = Field(
        default=0.5,
        gt=0.0,
        le=100.0,
        description="Lower bound for the world-space hit distance",
    )
    max_threshold: float = Field(
        default=5.0,
        gt=0.0,
        le=100.0,
        description="Upper bound for the world-space hit distance",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "HitTestConfig":
        if self.min_threshold > self.max_threshold:
            raise ValueError("min_threshold must not exceed max_threshold")
        return self


class DragConfig(BaseModel):
    """Configuration for the sewing drag solver."""

    default_anchor_ratio: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Anchor ratio used when the grab position cannot be measured",
    )
    seam_low_fraction: float = Field(
        default=0.25,
        gt=0.0,
        lt=0.5,
        description="Fraction of a closed curve's length treated as 'just after the seam'",
    )
    seam_high_fraction: float = Field(
        default=0.75,
        gt=0.5,
        lt=1.0,
        description="Fraction of a closed curve's length treated as 'just before the seam'",
    )


class ViewConfig(BaseModel):
    """Zoom limits and steps for the viewport."""

    zoom_min: float = Field(default=0.01, gt=0.0, description="Minimum zoom level")
    zoom_max: float = Field(default=50.0, gt=0.0, description="Maximum zoom level")
    zoom_default: float = Field(default=1.0, gt=0.0, description="Zoom level after reset")
    zoom_step: float = Field(default=1.1, gt=1.0, description="Zoom-in multiplier")
    zoom_step_reverse: float = Field(
        default=0.9, gt=0.0, lt=1.0, description="Zoom-out multiplier"
    )


class GenerationConfig(BaseModel):
    """Configuration for synthetic layout generation."""

    blocks_per_row: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Number of blocks placed on each grid row",
    )
    gap: float = Field(
        default=60.0,
        ge=0.0,
        description="Spacing between generated blocks",
    )
    seed: int | None = Field(
        default=None,
        description="Random seed for template selection (None = nondeterministic)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class SeamlineSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    hit_test: HitTestConfig = Field(default_factory=HitTestConfig)
    drag: DragConfig = Field(default_factory=DragConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> SeamlineSettings:
    """Get default application settings."""
    return SeamlineSettings()
