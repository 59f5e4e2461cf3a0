"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .state import SelectionRange
from .surface import SelectionError


def ensure_selection(text: str, start: int, end: int) -> SelectionRange:
    selection = SelectionRange(start, end)
    for offset in (start, end):
        if offset < 0 or offset > len(text):
            raise SelectionError("Offset out of range", selection=selection)
    return selection.normalized()
