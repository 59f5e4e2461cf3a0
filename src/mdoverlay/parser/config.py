"""Caller-supplied parser configuration and per-render state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

Highlighter = Callable[[str, str], Any]
"""``(code, language) -> html | falsy``. Must return synchronously."""

CustomSyntax = Callable[[str], str]
"""Post-processor applied to each rendered line's markup.

List items are handed their whole `<li class="...">...</li>` element so the
hook can decorate the item itself; every other line gets its inner markup.
"""


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Everything a render needs beyond the text itself.

    One instance per editor; nothing here is shared through module globals so
    independent editors never see each other's highlighter or syntax hooks.
    """

    highlighter: Optional[Highlighter] = None
    custom_syntax: Optional[CustomSyntax] = None
    preview_mode: bool = False
    show_active_line_raw: bool = False


@dataclass(slots=True)
class RenderState:
    """Mutable bookkeeping that lives for exactly one document render."""

    link_index: int = 0

    def next_anchor_name(self) -> str:
        name = f"--link-{self.link_index}"
        self.link_index += 1
        return name


__all__ = ["Highlighter", "CustomSyntax", "ParserConfig", "RenderState"]
