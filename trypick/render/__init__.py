"""Rendering for the selector screen.

``build_frame`` is pure and testable without a terminal; ``FrameWriter``
turns frames into minimal ANSI updates.
"""

from __future__ import annotations

from .frame import Frame, Row, Segment, build_frame, highlight_name, row_text
from .writer import FrameWriter, compose_row

__all__ = [
    "Frame",
    "FrameWriter",
    "Row",
    "Segment",
    "build_frame",
    "compose_row",
    "highlight_name",
    "row_text",
]
