"""Selection-aware text mutations.

Every operation here is pure: it reads an :class:`EditState` (buffer text plus
selection offsets) and returns a :class:`TextEdit` describing which range to
replace, with what, and where the selection lands afterwards. Applying the
edit to a host surface is the job of :mod:`mdoverlay.formatting.commands`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from mdoverlay.buffer.positions import line_bounds
from mdoverlay.buffer.state import SelectionRange

from .styles import FormatStyle

URL_SELECTION = re.compile(r"^https?://")


@dataclass(slots=True)
class EditState:
    """Working copy of ``(text, selection_start, selection_end)``."""

    value: str
    start: int = 0
    end: int = 0

    def __post_init__(self) -> None:
        selection = SelectionRange(self.start, self.end).clamped(len(self.value))
        self.start, self.end = selection

    @property
    def selected(self) -> str:
        return self.value[self.start : self.end]

    @property
    def is_collapsed(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace ``[replace_start, replace_end)`` with ``text``, then select."""

    text: str
    replace_start: int
    replace_end: int
    selection_start: int
    selection_end: int

    @property
    def selection(self) -> SelectionRange:
        return SelectionRange(self.selection_start, self.selection_end)

    def apply(self, value: str) -> str:
        return value[: self.replace_start] + self.text + value[self.replace_end :]


@dataclass(slots=True)
class LineRewrite:
    """Result of a whole-line operation.

    ``prefixes`` holds ``(removed, added)`` prefix lengths for each line so
    the selection can be carried across the edit line by line.
    """

    lines: List[str]
    prefixes: List[Tuple[int, int]]
    lead: str = ""
    trail: str = ""

    @property
    def text(self) -> str:
        return self.lead + "\n".join(self.lines) + self.trail


LineOperation = Callable[[EditState], LineRewrite]


def is_multiple_lines(text: str) -> bool:
    return len(text.strip().split("\n")) > 1


def word_selection_start(text: str, index: int) -> int:
    while index > 0 and not text[index - 1].isspace():
        index -= 1
    return index


def word_selection_end(text: str, index: int, multiline: bool = False) -> int:
    while index < len(text):
        char = text[index]
        if char == "\n" or (not multiline and char.isspace()):
            break
        index += 1
    return index


def expand_selected_text(
    state: EditState, prefix: str, suffix: str, multiline: bool = False
) -> str:
    """Grow the selection to the word under the caret or over adjacent markers."""

    if state.is_collapsed:
        state.start = word_selection_start(state.value, state.start)
        state.end = word_selection_end(state.value, state.end, multiline)
    else:
        outer_start = state.start - len(prefix)
        outer_end = state.end + len(suffix)
        begins = outer_start >= 0 and state.value[outer_start : state.start] == prefix
        ends = state.value[state.end : outer_end] == suffix
        if begins and ends:
            state.start = outer_start
            state.end = outer_end
    return state.selected


def newlines_to_surround(state: EditState) -> Tuple[str, str]:
    """Blank-line padding needed to put the selection in its own paragraph."""

    before = state.value[: state.start]
    after = state.value[state.end :]
    breaks_before = len(before) - len(before.rstrip("\n"))
    breaks_after = len(after) - len(after.lstrip("\n"))
    to_append = ""
    to_prepend = ""
    if re.search(r"\S", before) and breaks_before < 2:
        to_append = "\n" * (2 - breaks_before)
    if re.search(r"\S", after) and breaks_after < 2:
        to_prepend = "\n" * (2 - breaks_after)
    return to_append, to_prepend


def _whitespace_edges(text: str) -> Tuple[str, str]:
    leading = text[: len(text) - len(text.lstrip())]
    if not text.strip():
        return leading, ""
    return leading, text[len(text.rstrip()) :]


def block_style(state: EditState, style: FormatStyle) -> TextEdit:
    """Wrap or unwrap the selection in ``style.prefix``/``style.suffix``."""

    original_start, original_end = state.start, state.end
    selected = state.selected
    multiple = is_multiple_lines(selected)
    prefix = f"{style.block_prefix}\n" if multiple and style.block_prefix else style.prefix
    suffix = f"\n{style.block_suffix}" if multiple and style.block_suffix else style.suffix

    if style.prefix_space and state.start > 0 and not state.value[state.start - 1].isspace():
        prefix = f" {prefix}"

    selected = expand_selected_text(state, prefix, suffix, style.multiline)
    start, end = state.start, state.end
    has_replace_next = bool(
        style.replace_next and style.replace_next in suffix and selected
    )

    if style.surround_with_newlines:
        to_append, to_prepend = newlines_to_surround(state)
        prefix = to_append + style.prefix
        suffix += to_prepend

    wrapped = len(selected) >= len(prefix) + len(suffix)
    if wrapped and selected.startswith(prefix) and selected.endswith(suffix):
        inner = selected[len(prefix) : len(selected) - len(suffix)]
        if original_start == original_end:
            position = original_start - len(prefix)
            position = max(position, start)
            position = min(position, start + len(inner))
            selection = (position, position)
        else:
            selection = (start, start + len(inner))
        return TextEdit(inner, start, end, *selection)

    if not has_replace_next:
        replacement = prefix + selected + suffix
        sel_start = original_start + len(prefix)
        sel_end = original_end + len(prefix)
        if style.trim_first:
            leading, trailing = _whitespace_edges(selected)
            replacement = leading + prefix + selected.strip() + suffix + trailing
            sel_start += len(leading)
            sel_end -= len(trailing)
        return TextEdit(replacement, start, end, sel_start, sel_end)

    if style.scan_for and re.search(style.scan_for, selected):
        suffix = suffix.replace(style.replace_next, selected, 1)
        caret = start + len(prefix)
        return TextEdit(prefix + suffix, start, end, caret, caret)

    placeholder = start + len(prefix) + len(selected) + suffix.index(style.replace_next)
    return TextEdit(
        prefix + selected + suffix,
        start,
        end,
        placeholder,
        placeholder + len(style.replace_next),
    )


def link_edit(
    state: EditState,
    style: FormatStyle,
    *,
    url: Optional[str] = None,
    text: Optional[str] = None,
) -> TextEdit:
    """``[text](url)`` insertion with a known target or a selected URL."""

    selected = state.selected
    if url:
        style = style.with_suffix(f"]({url})")
    elif selected and URL_SELECTION.match(selected):
        style = style.with_suffix(f"]({selected})")

    if not text or selected:
        return block_style(state, style)

    # Insert the link text first, then wrap it as if it had been selected.
    inserted_at = state.start
    working = EditState(
        state.value[:inserted_at] + text + state.value[inserted_at:],
        inserted_at,
        inserted_at + len(text),
    )
    edit = block_style(working, style)
    return TextEdit(
        edit.text,
        edit.replace_start,
        edit.replace_end - len(text),
        edit.selection_start,
        edit.selection_end,
    )


def multiline_style(state: EditState, style: FormatStyle) -> LineRewrite:
    """Prefix every selected line, or strip the prefix when all lines carry it."""

    prefix, suffix = style.prefix, style.suffix
    lines = state.selected.split("\n")
    undo = all(
        line.startswith(prefix) and (not suffix or line.endswith(suffix))
        for line in lines
    )
    if undo:
        stripped = []
        for line in lines:
            line = line[len(prefix) :]
            if suffix:
                line = line[: len(line) - len(suffix)]
            stripped.append(line)
        return LineRewrite(stripped, [(len(prefix), 0)] * len(lines))

    styled = [prefix + line + suffix for line in lines]
    rewrite = LineRewrite(styled, [(0, len(prefix))] * len(lines))
    if style.surround_with_newlines:
        rewrite.lead, rewrite.trail = newlines_to_surround(state)
    return rewrite


def _map_offset(value: str, block_start: int, offset: int, rewrite: LineRewrite) -> int:
    rows = value[block_start:offset].split("\n")
    row = len(rows) - 1
    column = len(rows[-1])
    removed, added = rewrite.prefixes[row]
    base = block_start + len(rewrite.lead)
    base += sum(len(line) + 1 for line in rewrite.lines[:row])
    column = added + max(column - removed, 0)
    return base + min(column, len(rewrite.lines[row]))


def apply_line_operation(state: EditState, operation: LineOperation) -> TextEdit:
    """Run ``operation`` over the whole lines touched by the selection.

    Both selection endpoints are carried through the per-line prefix changes,
    so a caret keeps its place in the line's content and a multi-line
    selection keeps its extent.
    """

    block_start, _ = line_bounds(state.value, state.start)
    _, block_end = line_bounds(state.value, state.end)
    block = EditState(state.value, block_start, block_end)
    rewrite = operation(block)
    selection_start = _map_offset(state.value, block_start, state.start, rewrite)
    if state.is_collapsed:
        selection_end = selection_start
    else:
        selection_end = _map_offset(state.value, block_start, state.end, rewrite)
    return TextEdit(
        rewrite.text, block_start, block_end, selection_start, selection_end
    )


__all__ = [
    "EditState",
    "TextEdit",
    "LineRewrite",
    "LineOperation",
    "is_multiple_lines",
    "word_selection_start",
    "word_selection_end",
    "expand_selected_text",
    "newlines_to_surround",
    "block_style",
    "link_edit",
    "multiline_style",
    "apply_line_operation",
]
