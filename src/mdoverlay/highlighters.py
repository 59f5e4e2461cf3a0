"""Optional code-block highlighter backed by Pygments."""

from __future__ import annotations

from typing import Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

_FORMATTER = HtmlFormatter(nowrap=True)


def pygments_highlighter(code: str, language: str) -> Optional[str]:
    """Highlight ``code`` as ``language``; ``None`` for unknown languages.

    Output is bare token spans (no ``<pre>`` wrapper) so it can sit inside the
    renderer's own ``<pre><code>`` block line for line.
    """

    if not language.strip():
        return None
    try:
        lexer = get_lexer_by_name(language.strip(), stripnl=False, ensurenl=False)
    except ClassNotFound:
        return None
    return highlight(code, lexer, _FORMATTER).rstrip("\n")


def pygments_css(style: str = "default") -> str:
    """Stylesheet for the token classes emitted by :func:`pygments_highlighter`."""

    return HtmlFormatter(style=style).get_style_defs(".code-block")


__all__ = ["pygments_highlighter", "pygments_css"]
