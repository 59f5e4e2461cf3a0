"""Lightweight node list produced per line and consumed by the post-pass.

The renderer first turns every input line into a ``ParsedLine``. A single
post-pass then folds runs of list items into ``ListBlock`` containers and
fenced code into ``CodeBlock`` s, and the string serializer turns the result
into HTML. Any other renderer (a DOM builder, a terminal view) can consume the
same blocks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal, Optional, Sequence, Union

from .escaping import NBSP, escape_html

LineKind = Literal["line", "list_item", "fence", "code", "raw"]
ListType = Literal["bullet", "ordered"]

LIST_ITEM_CLASSES: dict[str, str] = {
    "bullet": "bullet-list",
    "ordered": "ordered-list",
}
LIST_TAGS: dict[str, str] = {"bullet": "ul", "ordered": "ol"}


@dataclass(slots=True)
class ParsedLine:
    """Rendered form of exactly one input line.

    ``html`` is the inner markup without the ``<div>`` wrapper. List items keep
    their leading ``&nbsp;`` run in ``indent`` and their marker + content in
    ``html`` so the post-pass can move the indentation inside the ``<li>``.
    """

    html: str
    kind: LineKind = "line"
    is_active_raw: bool = False
    source: str = ""
    indent: str = ""
    list_type: Optional[ListType] = None
    language: str = ""
    opens_fence: bool = False
    item_markup: str = ""

    def li_markup(self) -> str:
        """The item's `<li>` markup, as left by any custom syntax hook."""

        if self.item_markup:
            return self.item_markup
        css = LIST_ITEM_CLASSES[self.list_type or "bullet"]
        return f'<li class="{css}">{self.html}</li>'

    def indented_li_markup(self) -> str:
        """`li_markup` with the indentation moved just inside the opening tag."""

        markup = self.li_markup()
        cut = markup.find(">") + 1
        return markup[:cut] + self.indent + markup[cut:]

    def to_html(self) -> str:
        if self.is_active_raw:
            return f'<div class="raw-line">{self.html or NBSP}</div>'
        if self.kind == "list_item" and self.list_type:
            return f"<div>{self.indent}{self.li_markup()}</div>"
        return f"<div>{self.html or NBSP}</div>"


@dataclass(slots=True)
class ListBlock:
    list_type: ListType
    items: list[ParsedLine] = field(default_factory=list)

    def to_html(self) -> str:
        tag = LIST_TAGS[self.list_type]
        body = "".join(item.indented_li_markup() for item in self.items)
        return f"<{tag}>{body}</{tag}>"


@dataclass(slots=True)
class CodeBlock:
    open_fence: ParsedLine
    lines: list[ParsedLine]
    close_fence: ParsedLine
    body: str = ""

    @property
    def code(self) -> str:
        return "\n".join(line.source for line in self.lines)

    @property
    def language(self) -> str:
        return self.open_fence.language

    def to_html(self) -> str:
        lang_attr = (
            f' class="language-{escape_html(self.language)}"' if self.language else ""
        )
        return (
            f"<div>{self.open_fence.html}</div>"
            f'<pre class="code-block"><code{lang_attr}>{self.body}</code></pre>'
            f"<div>{self.close_fence.html}</div>"
        )


Block = Union[ParsedLine, ListBlock, CodeBlock]
CodeFormatter = Callable[[str, str], str]


def _plain_code(code: str, language: str) -> str:
    del language
    return escape_html(code)


def _collect_code_block(
    lines: Sequence[ParsedLine], start: int
) -> Optional[tuple[list[ParsedLine], int]]:
    """Return the interior lines and closing index of a fence opened at ``start``."""

    index = start + 1
    while index < len(lines) and lines[index].kind == "code":
        index += 1
    if index >= len(lines):
        return None
    closing = lines[index]
    if closing.kind != "fence" or closing.opens_fence or closing.is_active_raw:
        return None
    return list(lines[start + 1 : index]), index


def fold_blocks(
    lines: Sequence[ParsedLine], format_code: CodeFormatter = _plain_code
) -> list[Block]:
    """Merge adjacent list items and fenced code into container blocks."""

    blocks: list[Block] = []
    index = 0
    while index < len(lines):
        node = lines[index]
        if node.kind == "fence" and node.opens_fence and not node.is_active_raw:
            collected = _collect_code_block(lines, index)
            if collected is not None:
                interior, close_index = collected
                block = CodeBlock(
                    open_fence=node, lines=interior, close_fence=lines[close_index]
                )
                block.body = format_code(block.code, block.language)
                blocks.append(block)
                index = close_index + 1
                continue

        if node.kind == "list_item" and node.list_type and not node.is_active_raw:
            previous = blocks[-1] if blocks else None
            if isinstance(previous, ListBlock) and previous.list_type == node.list_type:
                previous.items.append(node)
            else:
                blocks.append(ListBlock(list_type=node.list_type, items=[node]))
            index += 1
            continue

        blocks.append(node)
        index += 1
    return blocks


def serialize(blocks: Sequence[Block]) -> str:
    return "".join(block.to_html() for block in blocks)


__all__ = [
    "LineKind",
    "ListType",
    "ParsedLine",
    "ListBlock",
    "CodeBlock",
    "Block",
    "fold_blocks",
    "serialize",
]
