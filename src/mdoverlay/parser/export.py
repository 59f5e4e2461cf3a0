"""Export helpers that strip the overlay-only markup."""

from __future__ import annotations

import re

_MARKER_SPAN = re.compile(r'<span class="syntax-marker[^"]*">.*?</span>')
_EDITOR_CLASSES = re.compile(
    r'\sclass="(bullet-list|ordered-list|code-fence|hr-marker|blockquote|url-part)"'
)
_EMPTY_CLASS = re.compile(r'\sclass=""')


def render_clean_html(html: str) -> str:
    """Drop syntax markers and editor-specific classes from rendered HTML."""

    html = _MARKER_SPAN.sub("", html)
    html = _EDITOR_CLASSES.sub("", html)
    return _EMPTY_CLASS.sub("", html)


__all__ = ["render_clean_html"]
