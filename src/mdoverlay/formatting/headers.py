"""ATX header insertion, replacement and toggling on the current line."""

from __future__ import annotations

import re

from .selection import EditState, LineRewrite
from .styles import header_style

HEADER_PREFIX = re.compile(r"^(#{1,6})\s*")


def existing_header(line: str) -> tuple[int, int]:
    """``(level, prefix_length)`` of a leading ``#`` run, ``(0, 0)`` if none."""

    match = HEADER_PREFIX.match(line)
    if match is None:
        return 0, 0
    return len(match.group(1)), len(match.group(0))


def header_operation(level: int, toggle: bool = False):
    """Line operation setting the first selected line to header ``level``.

    With ``toggle`` set, a line already at ``level`` loses its header instead.
    """

    prefix = header_style(level).prefix
    wanted = len(prefix) - 1

    def operation(block: EditState) -> LineRewrite:
        lines = block.selected.split("\n")
        current_level, prefix_length = existing_header(lines[0])
        cleaned = lines[0][prefix_length:]
        if toggle and current_level == wanted:
            first, added = cleaned, 0
        else:
            first, added = prefix + cleaned, len(prefix)
        prefixes = [(prefix_length, added)] + [(0, 0)] * (len(lines) - 1)
        return LineRewrite([first, *lines[1:]], prefixes)

    return operation


__all__ = ["HEADER_PREFIX", "existing_header", "header_operation"]
