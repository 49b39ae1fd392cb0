"""Seamline - Ratio-anchored sewing annotations for garment pattern blocks.

Seamline keeps dependent sub-curves (sewings) glued to a portion of their parent
boundary segment. The portion is stored as a normalized arc-length ratio, so a
sewing survives translation, resizing and closed-loop wraparound of its parent.

Example:
    $ seamline inspect blocks.json

This loads the document, converts legacy offsets to ratios, rebuilds every
sewing from its parent and prints a summary.
"""

__version__ = "0.1.0"
__author__ = "Seamline contributors"

__all__ = ["__author__", "__version__"]
