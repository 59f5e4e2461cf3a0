"""Inline span rules: strikethrough, bold, italic and code.

Every rule wraps its match as ``<tag><marker>open</marker>content<marker>close</marker></tag>``
so the markers stay in the visible text stream and rendered characters keep
the columns of the raw markdown.

The input is always HTML-escaped line text (see ``escaping.escape_html``).
"""

from __future__ import annotations

import re
from typing import Callable

MARKER_CLASS = "syntax-marker"

BOLD_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\*\*(.+?)\*\*"),
    re.compile(r"__(.+?)__"),
)

# A run of N backticks closed by the same run, never part of a longer run.
CODE_SPAN_PATTERN = re.compile(r"(?<!`)(`+)(?!`)((?:(?!\1).)+?)(\1)(?!`)")

BoundaryCheck = Callable[[str, int], bool]


def marker(text: str, *, extra_class: str = "") -> str:
    css = f"{MARKER_CLASS} {extra_class}" if extra_class else MARKER_CLASS
    return f'<span class="{css}">{text}</span>'


def wrap_span(tag: str, open_marker: str, content: str, close_marker: str) -> str:
    return f"<{tag}>{marker(open_marker)}{content}{marker(close_marker)}</{tag}>"


def render_code_span(open_ticks: str, content: str, close_ticks: str) -> str:
    return wrap_span("code", open_ticks, content, close_ticks)


def _char_at(text: str, index: int) -> str:
    if 0 <= index < len(text):
        return text[index]
    return ""


def _find_close(text: str, start: int, delimiter: str, closes: BoundaryCheck) -> int:
    index = text.find(delimiter, start)
    while index != -1:
        if closes(text, index):
            return index
        index = text.find(delimiter, index + 1)
    return -1


def wrap_delimited(
    text: str,
    delimiter: str,
    tag: str,
    *,
    opens: BoundaryCheck,
    closes: BoundaryCheck,
) -> str:
    """Wrap ``delimiter``-bounded spans, scanning left to right.

    ``opens``/``closes`` inspect the neighbours of a candidate delimiter at a
    given index. The shortest non-empty span wins; unmatched openers are left
    as literal text.
    """

    width = len(delimiter)
    pieces: list[str] = []
    index = 0
    last = 0
    while index < len(text):
        if text.startswith(delimiter, index) and opens(text, index):
            close = _find_close(text, index + width + 1, delimiter, closes)
            if close != -1:
                pieces.append(text[last:index])
                pieces.append(
                    wrap_span(tag, delimiter, text[index + width : close], delimiter)
                )
                index = last = close + width
                continue
        index += 1
    pieces.append(text[last:])
    return "".join(pieces)


def _star_opens(text: str, index: int) -> bool:
    # ">" excludes a star that directly follows an already rendered marker span.
    before_ok = index == 0 or text[index - 1] not in "*>"
    return before_ok and _char_at(text, index + 1) != "*"


def _star_closes(text: str, index: int) -> bool:
    return text[index - 1] != "*" and _char_at(text, index + 1) != "*"


def _underscore_opens(text: str, index: int) -> bool:
    before_ok = index == 0 or text[index - 1].isspace()
    return before_ok and _char_at(text, index + 1) != "_"


def _underscore_closes(text: str, index: int) -> bool:
    after = _char_at(text, index + 1)
    return text[index - 1] != "_" and (after == "" or after.isspace())


def _tilde_opens(width: int) -> BoundaryCheck:
    def check(text: str, index: int) -> bool:
        return _char_at(text, index - 1) != "~" and _char_at(text, index + width) != "~"

    return check


def _tilde_closes(width: int) -> BoundaryCheck:
    def check(text: str, index: int) -> bool:
        return text[index - 1] != "~" and _char_at(text, index + width) != "~"

    return check


def parse_strikethrough(html: str) -> str:
    """``~~x~~`` and ``~x~``; runs of three or more tildes never match."""

    html = wrap_delimited(
        html, "~~", "del", opens=_tilde_opens(2), closes=_tilde_closes(2)
    )
    return wrap_delimited(
        html, "~", "del", opens=_tilde_opens(1), closes=_tilde_closes(1)
    )


def parse_bold(html: str) -> str:
    for pattern in BOLD_PATTERNS:
        html = pattern.sub(
            lambda match: wrap_span(
                "strong", match.group(0)[:2], match.group(1), match.group(0)[-2:]
            ),
            html,
        )
    return html


def parse_italic(html: str) -> str:
    html = wrap_delimited(html, "*", "em", opens=_star_opens, closes=_star_closes)
    return wrap_delimited(
        html, "_", "em", opens=_underscore_opens, closes=_underscore_closes
    )


def apply_emphasis(html: str) -> str:
    """Run strikethrough, bold and italic in their fixed order."""

    html = parse_strikethrough(html)
    html = parse_bold(html)
    return parse_italic(html)


__all__ = [
    "MARKER_CLASS",
    "CODE_SPAN_PATTERN",
    "marker",
    "wrap_span",
    "wrap_delimited",
    "render_code_span",
    "parse_strikethrough",
    "parse_bold",
    "parse_italic",
    "apply_emphasis",
]
