"""Formatting commands applied to a host :class:`TextSurface`.

Each command reads the surface's text and selection, computes a
:class:`~mdoverlay.formatting.selection.TextEdit` and applies it through
``apply_replacement`` so hosts with a native insert primitive keep their undo
history. Read-only surfaces are left untouched and the command returns
``None``.
"""

from __future__ import annotations

import re
from functools import wraps
from typing import Callable, List, Optional

from mdoverlay.buffer.surface import TextSurface, apply_replacement, is_read_only

from .headers import header_operation
from .lists import list_style
from .selection import (
    EditState,
    TextEdit,
    apply_line_operation,
    block_style,
    link_edit,
    multiline_style,
)
from .styles import FORMATS

INDENT = "  "
NUMBERED_LINE = re.compile(r"^\d+\.\s")
ACTIVE_FORMAT_WINDOW = 10
ACTIVE_FORMAT_REACH = 100

Command = Callable[..., Optional[TextEdit]]


def edit_state(surface: TextSurface) -> EditState:
    selection = surface.get_selection().normalized()
    return EditState(surface.get_text(), selection.start, selection.end)


def apply_edit(surface: TextSurface, edit: TextEdit) -> TextEdit:
    apply_replacement(
        surface,
        edit.replace_start,
        edit.replace_end,
        edit.text,
        selection=edit.selection,
    )
    return edit


def command(compute: Callable[..., TextEdit]) -> Command:
    """Turn a pure ``EditState -> TextEdit`` function into a surface command."""

    @wraps(compute)
    def run(surface: TextSurface, *args, **kwargs) -> Optional[TextEdit]:
        if is_read_only(surface):
            return None
        return apply_edit(surface, compute(edit_state(surface), *args, **kwargs))

    return run


@command
def toggle_bold(state: EditState) -> TextEdit:
    return block_style(state, FORMATS["bold"])


@command
def toggle_italic(state: EditState) -> TextEdit:
    return block_style(state, FORMATS["italic"])


@command
def toggle_code(state: EditState) -> TextEdit:
    return block_style(state, FORMATS["code"])


@command
def insert_link(
    state: EditState, url: Optional[str] = None, text: Optional[str] = None
) -> TextEdit:
    return link_edit(state, FORMATS["link"], url=url, text=text)


@command
def toggle_bullet_list(state: EditState) -> TextEdit:
    return apply_line_operation(state, list_style(FORMATS["bullet_list"]))


@command
def toggle_numbered_list(state: EditState) -> TextEdit:
    return apply_line_operation(state, list_style(FORMATS["numbered_list"]))


@command
def toggle_quote(state: EditState) -> TextEdit:
    style = FORMATS["quote"]
    return apply_line_operation(state, lambda block: multiline_style(block, style))


@command
def toggle_task_list(state: EditState) -> TextEdit:
    style = FORMATS["task_list"]
    return apply_line_operation(state, lambda block: multiline_style(block, style))


@command
def insert_header(state: EditState, level: int = 1, toggle: bool = False) -> TextEdit:
    if level < 1 or level > 6:
        level = 1
    return apply_line_operation(state, header_operation(level, toggle))


def toggle_h1(surface: TextSurface) -> Optional[TextEdit]:
    return insert_header(surface, 1, True)


def toggle_h2(surface: TextSurface) -> Optional[TextEdit]:
    return insert_header(surface, 2, True)


def toggle_h3(surface: TextSurface) -> Optional[TextEdit]:
    return insert_header(surface, 3, True)


@command
def insert_indent(state: EditState, indent: str = INDENT) -> TextEdit:
    """Tab with no selection: replace the selection with ``indent``."""

    caret = state.start + len(indent)
    return TextEdit(indent, state.start, state.end, caret, caret)


@command
def indent_selection(state: EditState, indent: str = INDENT) -> TextEdit:
    lines = state.selected.split("\n")
    text = "\n".join(indent + line for line in lines)
    return TextEdit(text, state.start, state.end, state.start, state.start + len(text))


@command
def outdent_selection(state: EditState, indent: str = INDENT) -> TextEdit:
    """Remove up to ``len(indent)`` leading spaces from each selected line."""

    width = len(indent)
    lines = []
    for line in state.selected.split("\n"):
        spaces = len(line) - len(line.lstrip(" "))
        lines.append(line[min(spaces, width) :])
    text = "\n".join(lines)
    return TextEdit(text, state.start, state.end, state.start, state.start + len(text))


def _current_line(text: str, offset: int) -> str:
    line_start = 0
    for line in text.split("\n"):
        if line_start <= offset <= line_start + len(line):
            return line
        line_start += len(line) + 1
    return ""


def get_active_formats(text: str, start: int, end: Optional[int] = None) -> List[str]:
    """Formats in effect around the selection, for toolbar button state.

    Inline formats are a heuristic: a marker somewhere shortly before the
    selection and another shortly after it.
    """

    end = start if end is None else end
    formats: List[str] = []
    line = _current_line(text, start)

    if line.startswith("- "):
        if line.startswith(("- [ ] ", "- [x] ")):
            formats.append("task-list")
        else:
            formats.append("bullet-list")
    if NUMBERED_LINE.match(line):
        formats.append("numbered-list")
    if line.startswith("> "):
        formats.append("quote")
    if line.startswith("# "):
        formats.append("header")
    if line.startswith("## "):
        formats.append("header-2")
    if line.startswith("### "):
        formats.append("header-3")

    surrounding = text[max(0, start - ACTIVE_FORMAT_WINDOW) : end + ACTIVE_FORMAT_WINDOW]
    before = text[max(0, start - ACTIVE_FORMAT_REACH) : start]
    after = text[end : end + ACTIVE_FORMAT_REACH]

    if "**" in surrounding and "**" in before and "**" in after:
        formats.append("bold")
    if "_" in surrounding and "_" in before and "_" in after:
        formats.append("italic")
    if "`" in surrounding and "`" in before and "`" in after:
        formats.append("code")
    if "[" in surrounding and "]" in surrounding:
        close = after.find("]")
        if "[" in before and close != -1:
            if text[end + close + 1 : end + close + 10].startswith("("):
                formats.append("link")
    return formats


__all__ = [
    "INDENT",
    "apply_edit",
    "command",
    "edit_state",
    "get_active_formats",
    "indent_selection",
    "insert_header",
    "insert_indent",
    "insert_link",
    "outdent_selection",
    "toggle_bold",
    "toggle_bullet_list",
    "toggle_code",
    "toggle_h1",
    "toggle_h2",
    "toggle_h3",
    "toggle_italic",
    "toggle_numbered_list",
    "toggle_quote",
    "toggle_task_list",
]
