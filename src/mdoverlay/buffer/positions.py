"""Conversions between flat offsets and (row, column) locations."""

from __future__ import annotations

from .state import Location


def location_from_offset(text: str, offset: int) -> Location:
    lines = text.split("\n")
    running = 0
    for row, line in enumerate(lines):
        line_len = len(line)
        if offset <= running + line_len:
            return (row, max(0, offset - running))
        running += line_len + 1  # newline
    return (len(lines) - 1, len(lines[-1]))


def offset_from_location(text: str, location: Location) -> int:
    lines = text.split("\n")
    row, col = location
    row = max(0, min(row, len(lines) - 1))
    offset = 0
    for i in range(row):
        offset += len(lines[i]) + 1
    return offset + max(0, min(col, len(lines[row])))


def line_bounds(text: str, offset: int) -> tuple[int, int]:
    """Start and end offsets of the line containing ``offset``."""

    offset = max(0, min(offset, len(text)))
    start = text.rfind("\n", 0, offset) + 1
    end = text.find("\n", offset)
    return start, len(text) if end == -1 else end


__all__ = ["location_from_offset", "offset_from_location", "line_bounds"]
