"""Character-level helpers shared by the line parser and renderer."""

from __future__ import annotations

import re

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)

# Reverse order of _HTML_ESCAPES so "&amp;lt;" decodes to "&lt;", not "<".
_ENTITY_DECODES = (
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
)

_LEADING_WHITESPACE = re.compile(r"^\s*")

NBSP = "&nbsp;"


def escape_html(text: str) -> str:
    return text.translate(_HTML_ESCAPES)


def decode_entities(text: str) -> str:
    """Undo ``escape_html``. Only the five entities it produces are decoded."""

    for entity, char in _ENTITY_DECODES:
        text = text.replace(entity, char)
    return text


def leading_whitespace(line: str) -> str:
    match = _LEADING_WHITESPACE.match(line)
    return match.group(0) if match else ""


def preserve_indentation(html: str, original_line: str) -> str:
    """Swap the leading whitespace of ``html`` for the original indentation.

    Spaces become ``&nbsp;`` so the rendered overlay keeps the same column
    for every character that follows.
    """

    indentation = leading_whitespace(original_line).replace(" ", NBSP)
    return indentation + _LEADING_WHITESPACE.sub("", html, count=1)


__all__ = [
    "NBSP",
    "escape_html",
    "decode_entities",
    "leading_whitespace",
    "preserve_indentation",
]
