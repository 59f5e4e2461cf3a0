"""Bullet/numbered list toggling, including switching between the two."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from .selection import EditState, LineRewrite, newlines_to_surround
from .styles import FormatStyle

ORDERED_PREFIX = re.compile(r"^\d+\.\s+")
UNORDERED_PREFIX = "- "


@dataclass(frozen=True, slots=True)
class UndoResult:
    text: str
    processed: bool


def undo_ordered_list_style(text: str) -> UndoResult:
    lines = text.split("\n")
    if not all(ORDERED_PREFIX.match(line) for line in lines):
        return UndoResult(text, False)
    return UndoResult("\n".join(ORDERED_PREFIX.sub("", line, count=1) for line in lines), True)


def undo_unordered_list_style(text: str) -> UndoResult:
    lines = text.split("\n")
    if not all(line.startswith(UNORDERED_PREFIX) for line in lines):
        return UndoResult(text, False)
    width = len(UNORDERED_PREFIX)
    return UndoResult("\n".join(line[width:] for line in lines), True)


def make_prefix(index: int, unordered: bool) -> str:
    return UNORDERED_PREFIX if unordered else f"{index + 1}. "


def clear_existing_list_style(
    style: FormatStyle, selected: str
) -> Tuple[UndoResult, UndoResult, str]:
    """Strip the requested list style, then the opposite one.

    Returns both intermediate results and the text left with no list prefix.
    """

    if style.ordered_list:
        same = undo_ordered_list_style(selected)
        opposite = undo_unordered_list_style(same.text)
    else:
        same = undo_unordered_list_style(selected)
        opposite = undo_ordered_list_style(same.text)
    return same, opposite, opposite.text


def list_style(style: FormatStyle):
    """Line operation applying ``style`` as a bullet or numbered list."""

    def operation(block: EditState) -> LineRewrite:
        lines = block.selected.split("\n")
        same, _opposite, pristine = clear_existing_list_style(style, block.selected)
        bare = pristine.split("\n")
        removed = [len(old) - len(new) for old, new in zip(lines, bare)]
        if same.processed:
            return LineRewrite(bare, [(count, 0) for count in removed])

        prefixes = [make_prefix(index, style.unordered_list) for index in range(len(bare))]
        lead, trail = newlines_to_surround(block)
        return LineRewrite(
            [prefix + line for prefix, line in zip(prefixes, bare)],
            [(count, len(prefix)) for count, prefix in zip(removed, prefixes)],
            lead,
            trail,
        )

    return operation


__all__ = [
    "ORDERED_PREFIX",
    "UNORDERED_PREFIX",
    "UndoResult",
    "undo_ordered_list_style",
    "undo_unordered_list_style",
    "make_prefix",
    "clear_existing_list_style",
    "list_style",
]
