"""Utility functions for seamline.

This module provides utility functions including:

- Logging setup and configuration
- Rebuild statistics and drag session logging
"""

from seamline.utils.logging import (
    GeometryLogger,
    RebuildStats,
    configure_logging,
)

__all__ = [
    "GeometryLogger",
    "RebuildStats",
    "configure_logging",
]
