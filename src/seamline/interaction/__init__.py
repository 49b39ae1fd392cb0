"""Headless interaction layer: selection, hover and event routing."""

from seamline.interaction.editor import CursorStyle, PatternEditor, PointerButton
from seamline.interaction.selection import HoverState, SelectionState

__all__ = [
    "CursorStyle",
    "HoverState",
    "PatternEditor",
    "PointerButton",
    "SelectionState",
]
