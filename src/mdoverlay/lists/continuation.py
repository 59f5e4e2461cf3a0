"""Enter-key list continuation and ordered-list renumbering."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Literal, Optional, Tuple

from mdoverlay.formatting.selection import TextEdit

ListType = Literal["bullet", "numbered", "checkbox", "none"]
ContinuationAction = Literal["exit", "split", "new_item"]

LIST_PATTERNS: Dict[str, re.Pattern[str]] = {
    "bullet": re.compile(r"^(\s*)([-*+])\s+(.*)$"),
    "numbered": re.compile(r"^(\s*)(\d+)\.\s+(.*)$"),
    "checkbox": re.compile(r"^(\s*)-\s+\[([ x])\]\s+(.*)$"),
}


@dataclass(frozen=True, slots=True)
class ListContext:
    in_list: bool
    list_type: ListType
    indent: str
    marker: str
    content: str
    line_start: int
    line_end: int
    marker_end_pos: int
    checked: bool = False

    @property
    def number(self) -> Optional[int]:
        if self.list_type != "numbered":
            return None
        return int(self.marker)


@dataclass(frozen=True, slots=True)
class Continuation:
    """What Enter did inside a list item."""

    edit: TextEdit
    action: ContinuationAction
    renumber: bool = False


def _line_at(text: str, cursor: int) -> Tuple[str, int]:
    lines = text.split("\n")
    position = 0
    for line in lines:
        if position + len(line) >= cursor:
            return line, position
        position += len(line) + 1
    return lines[-1], position - len(lines[-1]) - 1


def get_list_context(text: str, cursor: int) -> ListContext:
    """Describe the list item (if any) on the line holding ``cursor``."""

    line, line_start = _line_at(text, cursor)
    line_end = line_start + len(line)

    for list_type in ("checkbox", "bullet", "numbered"):
        match = LIST_PATTERNS[list_type].match(line)
        if match is None:
            continue
        if list_type == "checkbox":
            marker, checked = "-", match.group(2) == "x"
        else:
            marker, checked = match.group(2), False
        return ListContext(
            in_list=True,
            list_type=list_type,  # type: ignore[arg-type]
            indent=match.group(1),
            marker=marker,
            content=match.group(3),
            line_start=line_start,
            line_end=line_end,
            marker_end_pos=line_start + match.start(3),
            checked=checked,
        )

    return ListContext(
        in_list=False,
        list_type="none",
        indent="",
        marker="",
        content=line,
        line_start=line_start,
        line_end=line_end,
        marker_end_pos=line_start,
    )


def create_new_list_item(context: ListContext) -> str:
    if context.list_type == "bullet":
        return f"{context.indent}{context.marker} "
    if context.list_type == "numbered":
        return f"{context.indent}{int(context.marker) + 1}. "
    if context.list_type == "checkbox":
        return f"{context.indent}- [ ] "
    return ""


def continue_list(text: str, cursor: int) -> Optional[Continuation]:
    """Edit produced by Enter at ``cursor``; ``None`` outside a list."""

    context = get_list_context(text, cursor)
    if not context.in_list:
        return None

    if not context.content.strip() and cursor >= context.marker_end_pos:
        edit = TextEdit(
            "", context.line_start, context.marker_end_pos,
            context.line_start, context.line_start,
        )
        return Continuation(edit, "exit")

    new_item = create_new_list_item(context)
    renumber = context.list_type == "numbered"
    if context.marker_end_pos < cursor < context.line_end:
        tail = text[cursor : context.line_end]
        caret = cursor + 1 + len(new_item)
        edit = TextEdit(f"\n{new_item}{tail}", cursor, context.line_end, caret, caret)
        return Continuation(edit, "split", renumber)

    caret = context.line_end + 1 + len(new_item)
    edit = TextEdit(
        f"\n{new_item}", context.line_end, context.line_end, caret, caret
    )
    return Continuation(edit, "new_item", renumber)


def renumber_lists(text: str) -> str:
    """Renumber ordered list items sequentially per indentation depth.

    Counters reset on a blank line or an unindented non-list line, and a
    dedent forgets every deeper level.
    """

    numbers: Dict[int, int] = {}
    in_list = False
    result = []
    for line in text.split("\n"):
        match = LIST_PATTERNS["numbered"].match(line)
        if match is None:
            if not line.strip() or not line[:1].isspace():
                in_list = False
                numbers.clear()
            result.append(line)
            continue

        indent, content = match.group(1), match.group(3)
        depth = len(indent)
        if not in_list:
            numbers.clear()
        current = numbers.get(depth, 0) + 1
        numbers[depth] = current
        for level in [level for level in numbers if level > depth]:
            del numbers[level]
        in_list = True
        result.append(f"{indent}{current}. {content}")
    return "\n".join(result)


def renumber_with_cursor(text: str, cursor: int) -> Tuple[str, int]:
    """``renumber_lists`` plus the caret moved by the length changes before it.

    On the caret's own line the shift applies only once the caret sits past
    the digits, so a caret inside the marker stays put.
    """

    renumbered = renumber_lists(text)
    if renumbered == text:
        return text, cursor

    offset = 0
    consumed = 0
    for old, new in zip(text.split("\n"), renumbered.split("\n")):
        if consumed > cursor:
            break
        if old != new:
            line_end = consumed + len(old)
            if line_end < cursor or cursor - consumed >= old.index("."):
                offset += len(new) - len(old)
        consumed += len(old) + 1
    return renumbered, max(0, min(cursor + offset, len(renumbered)))


__all__ = [
    "LIST_PATTERNS",
    "ListContext",
    "Continuation",
    "get_list_context",
    "create_new_list_item",
    "continue_list",
    "renumber_lists",
    "renumber_with_cursor",
]
