"""Per-line block dispatch.

Order matters and the first structural match wins: horizontal rule, fence
marker, header, blockquote, task list, bullet list, numbered list. Lines that
end up neither a header nor a list item get the inline pipeline.
"""

from __future__ import annotations

import re
from typing import Optional

from .config import RenderState
from .escaping import NBSP, decode_entities, escape_html, preserve_indentation
from .inline import marker
from .nodes import ParsedLine
from .sanctuary import parse_inline_elements

HORIZONTAL_RULE = re.compile(r"^(-{3,}|\*{3,}|_{3,})$")
CODE_FENCE = re.compile(r"^`{3}[^`]*$")
HEADER = re.compile(r"^(#{1,3})\s(.+)$")
BLOCKQUOTE = re.compile(r"^&gt; (.+)$")
TASK_ITEM = re.compile(r"^((?:&nbsp;)*)-\s+\[([ xX])\]\s+(.+)$")
BULLET_ITEM = re.compile(r"^((?:&nbsp;)*)([-*+])\s(.+)$")
NUMBERED_ITEM = re.compile(r"^((?:&nbsp;)*)(\d+\.)\s(.+)$")


def is_code_fence(line: str) -> bool:
    return CODE_FENCE.match(line) is not None


def parse_horizontal_rule(html: str) -> Optional[ParsedLine]:
    if HORIZONTAL_RULE.match(html):
        return ParsedLine(html=f'<span class="hr-marker">{html}</span>')
    return None


def parse_code_fence(html: str) -> Optional[ParsedLine]:
    if CODE_FENCE.match(html):
        return ParsedLine(
            html=f'<span class="code-fence">{html}</span>',
            kind="fence",
            language=decode_entities(html[3:].strip()),
        )
    return None


def parse_header(html: str, state: RenderState) -> Optional[str]:
    match = HEADER.match(html)
    if not match:
        return None
    hashes, content = match.groups()
    level = len(hashes)
    content = parse_inline_elements(content, state)
    return f"<h{level}>{marker(hashes + ' ')}{content}</h{level}>"


def parse_blockquote(html: str) -> str:
    match = BLOCKQUOTE.match(html)
    if not match:
        return html
    return f'<span class="blockquote">{marker("&gt;")} {match.group(1)}</span>'


def parse_task_item(
    html: str, state: RenderState, *, preview_mode: bool = False
) -> Optional[str]:
    """Task items keep ``- [ ] `` visible outside preview mode."""

    match = TASK_ITEM.match(html)
    if not match:
        return None
    indent, checked, content = match.groups()
    content = parse_inline_elements(content, state)
    if preview_mode:
        checked_attr = "checked" if checked.lower() == "x" else ""
        box = f'<input type="checkbox" {checked_attr}>'
        return f'{indent}<li class="task-list">{box} {content}</li>'
    return f'{indent}<li class="task-list">{marker(f"- [{checked}] ")}{content}</li>'


def _parse_list_item(
    pattern: re.Pattern[str], html: str, state: RenderState, list_type: str
) -> Optional[ParsedLine]:
    match = pattern.match(html)
    if not match:
        return None
    indent, list_marker, content = match.groups()
    content = parse_inline_elements(content, state)
    return ParsedLine(
        html=f"{marker(list_marker + ' ')}{content}",
        kind="list_item",
        indent=indent,
        list_type=list_type,  # type: ignore[arg-type]
    )


def parse_line(
    line: str,
    *,
    state: Optional[RenderState] = None,
    preview_mode: bool = False,
) -> ParsedLine:
    """Render a single raw markdown line. Never raises on malformed input."""

    state = state or RenderState()
    html = preserve_indentation(escape_html(line), line)

    for structural in (parse_horizontal_rule, parse_code_fence):
        parsed = structural(html)
        if parsed is not None:
            parsed.source = line
            return parsed

    header = parse_header(html, state)
    if header is not None:
        return ParsedLine(html=header, source=line)

    html = parse_blockquote(html)

    task = parse_task_item(html, state, preview_mode=preview_mode)
    if task is not None:
        return ParsedLine(html=task, source=line)

    for pattern, list_type in ((BULLET_ITEM, "bullet"), (NUMBERED_ITEM, "ordered")):
        item = _parse_list_item(pattern, html, state, list_type)
        if item is not None:
            item.source = line
            return item

    html = parse_inline_elements(html, state)
    if not html.strip():
        html = NBSP
    return ParsedLine(html=html, source=line)


def parse_code_line(line: str) -> ParsedLine:
    """Literal line inside an open fence: escaped and indented, nothing else."""

    html = preserve_indentation(escape_html(line), line)
    return ParsedLine(html=html or NBSP, kind="code", source=line)


def parse_raw_line(line: str) -> ParsedLine:
    return ParsedLine(
        html=escape_html(line) or NBSP, kind="raw", is_active_raw=True, source=line
    )


__all__ = [
    "HORIZONTAL_RULE",
    "CODE_FENCE",
    "is_code_fence",
    "parse_horizontal_rule",
    "parse_code_fence",
    "parse_header",
    "parse_blockquote",
    "parse_task_item",
    "parse_line",
    "parse_code_line",
    "parse_raw_line",
]
