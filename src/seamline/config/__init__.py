"""Configuration management for seamline.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Closed-curve, end-point and snapping tolerances
- HitTestConfig: Zoom-aware hit distance
- DragConfig: Anchor default and seam hysteresis thresholds
- ViewConfig: Zoom limits and steps
- GenerationConfig: Synthetic layout settings
- LoggingConfig: Logging settings
- SeamlineSettings: Main application settings
"""

from seamline.config.settings import (
    DragConfig,
    GenerationConfig,
    GeometryConfig,
    HitTestConfig,
    LoggingConfig,
    SeamlineSettings,
    ViewConfig,
    get_default_settings,
)

__all__ = [
    "DragConfig",
    "GenerationConfig",
    "GeometryConfig",
    "HitTestConfig",
    "LoggingConfig",
    "SeamlineSettings",
    "ViewConfig",
    "get_default_settings",
]
