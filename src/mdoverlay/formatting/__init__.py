"""Selection-aware formatting commands (bold, lists, headers, ...)."""

from .commands import (
    apply_edit,
    edit_state,
    get_active_formats,
    indent_selection,
    insert_header,
    insert_indent,
    insert_link,
    outdent_selection,
    toggle_bold,
    toggle_bullet_list,
    toggle_code,
    toggle_h1,
    toggle_h2,
    toggle_h3,
    toggle_italic,
    toggle_numbered_list,
    toggle_quote,
    toggle_task_list,
)
from .selection import EditState, LineRewrite, TextEdit, apply_line_operation, block_style, multiline_style
from .styles import FORMATS, FormatStyle

__all__ = [
    "FORMATS",
    "FormatStyle",
    "EditState",
    "LineRewrite",
    "TextEdit",
    "apply_edit",
    "apply_line_operation",
    "block_style",
    "edit_state",
    "get_active_formats",
    "indent_selection",
    "insert_header",
    "insert_indent",
    "insert_link",
    "multiline_style",
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
