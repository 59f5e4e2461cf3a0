"""Protect code spans and links while the other inline rules run.

Code spans and links are swapped for opaque tokens before emphasis parsing so
``**`` inside a code span or a URL can never be read as markup. Tokens are
ASCII and start with ``<``, which escaped line text cannot contain, so they
never collide with user input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence

from .config import RenderState
from .inline import CODE_SPAN_PATTERN, apply_emphasis, marker, render_code_span
from .sanitize import sanitize_url

SanctuaryKind = Literal["code", "link"]

LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
TOKEN_PATTERN = re.compile(r"<sanctuary:(\d+)\|")


def make_token(sanctuary_id: int) -> str:
    return f"<sanctuary:{sanctuary_id}|"


@dataclass(frozen=True, slots=True)
class Sanctuary:
    """One protected span, addressed by its ``id`` in the token arena."""

    id: int
    kind: SanctuaryKind
    original: str
    content: str
    open_marker: str
    close_marker: str
    link_text: Optional[str] = None
    url: Optional[str] = None

    @property
    def placeholder(self) -> str:
        return make_token(self.id)


@dataclass(slots=True)
class ProtectedText:
    text: str
    sanctuaries: list[Sanctuary] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class _Region:
    start: int
    end: int

    def contains(self, start: int, end: int) -> bool:
        return start >= self.start and end <= self.end


def _url_regions(text: str) -> list[_Region]:
    regions: list[_Region] = []
    for match in LINK_PATTERN.finditer(text):
        regions.append(_Region(match.start(2), match.end(2)))
    return regions


def protect(text: str) -> ProtectedText:
    """Replace code spans, then links, with sanctuary tokens.

    Code spans go first because their content may hold brackets that look like
    link syntax. A code span lying entirely inside a link URL is left alone.
    """

    regions = _url_regions(text)
    code_matches = [
        match
        for match in CODE_SPAN_PATTERN.finditer(text)
        if not any(region.contains(match.start(), match.end()) for region in regions)
    ]

    sanctuaries: list[Sanctuary] = []
    protected = text
    # Right to left so earlier offsets stay valid while splicing.
    for match in reversed(code_matches):
        sanctuary = Sanctuary(
            id=len(sanctuaries),
            kind="code",
            original=match.group(0),
            content=match.group(2),
            open_marker=match.group(1),
            close_marker=match.group(3),
        )
        sanctuaries.append(sanctuary)
        protected = (
            protected[: match.start()] + sanctuary.placeholder + protected[match.end() :]
        )

    def _protect_link(match: re.Match[str]) -> str:
        sanctuary = Sanctuary(
            id=len(sanctuaries),
            kind="link",
            original=match.group(0),
            content=match.group(1),
            open_marker="[",
            close_marker=f"]({match.group(2)})",
            link_text=match.group(1),
            url=match.group(2),
        )
        sanctuaries.append(sanctuary)
        return sanctuary.placeholder

    protected = LINK_PATTERN.sub(_protect_link, protected)
    return ProtectedText(text=protected, sanctuaries=sanctuaries)


def _render_code(sanctuary: Sanctuary) -> str:
    return render_code_span(
        sanctuary.open_marker, sanctuary.content, sanctuary.close_marker
    )


def _render_link(
    sanctuary: Sanctuary, arena: Dict[int, Sanctuary], state: RenderState
) -> str:
    link_text = apply_emphasis(sanctuary.link_text or "")
    link_text = _substitute(link_text, arena, state, kinds=("code",))
    url = sanctuary.url or ""
    anchor_name = state.next_anchor_name()
    return (
        f'<a href="{sanitize_url(url)}" style="anchor-name: {anchor_name}">'
        f"{marker('[')}{link_text}{marker(sanctuary.close_marker, extra_class='url-part')}"
        "</a>"
    )


def _substitute(
    html: str,
    arena: Dict[int, Sanctuary],
    state: RenderState,
    *,
    kinds: Sequence[SanctuaryKind] = ("code", "link"),
) -> str:
    def _replace(match: re.Match[str]) -> str:
        sanctuary = arena.get(int(match.group(1)))
        if sanctuary is None or sanctuary.kind not in kinds:
            return match.group(0)
        if sanctuary.kind == "code":
            return _render_code(sanctuary)
        return _render_link(sanctuary, arena, state)

    return TOKEN_PATTERN.sub(_replace, html)


def restore(
    html: str,
    sanctuaries: Sequence[Sanctuary],
    state: Optional[RenderState] = None,
) -> str:
    """Turn every token back into its rendered span, left to right."""

    arena = {sanctuary.id: sanctuary for sanctuary in sanctuaries}
    return _substitute(html, arena, state or RenderState())


def parse_inline_elements(text: str, state: Optional[RenderState] = None) -> str:
    """Full inline pipeline for one span of escaped text."""

    protected = protect(text)
    html = apply_emphasis(protected.text)
    return restore(html, protected.sanctuaries, state)


__all__ = [
    "LINK_PATTERN",
    "Sanctuary",
    "ProtectedText",
    "make_token",
    "protect",
    "restore",
    "parse_inline_elements",
]
