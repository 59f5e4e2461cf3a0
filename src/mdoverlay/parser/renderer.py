"""Whole-document rendering: fence state machine, active line, post-pass."""

from __future__ import annotations

import inspect
from typing import Any, List, Optional

from mdoverlay.runtime import telemetry

from .block import is_code_fence, parse_code_line, parse_line, parse_raw_line
from .config import ParserConfig, RenderState
from .escaping import escape_html
from .nodes import Block, ParsedLine, fold_blocks, serialize

ASYNC_HIGHLIGHTER_WARNING = (
    "Async highlighters are not supported: rendering produces a plain HTML "
    "string, so a result that arrives later has no element to attach to. "
    "Use a synchronous highlighter."
)


def _is_thenable(value: Any) -> bool:
    return inspect.isawaitable(value) or callable(getattr(value, "then", None))


def _discard_pending(value: Any) -> None:
    # Close coroutines so the interpreter does not warn they were never awaited.
    close = getattr(value, "close", None)
    if inspect.iscoroutine(value) and callable(close):
        close()


class DocumentRenderer:
    """Renders markdown text to overlay HTML using an explicit ``ParserConfig``."""

    def __init__(
        self, config: Optional[ParserConfig] = None, *, logger_name: str | None = None
    ) -> None:
        self.config = config or ParserConfig()
        self._logger_name = logger_name or "mdoverlay.parser"

    def parse_lines(self, text: str, active_line: int = -1) -> List[ParsedLine]:
        """First pass: one ``ParsedLine`` per input line."""

        state = RenderState()
        config = self.config
        in_fence = False
        parsed: List[ParsedLine] = []
        for index, line in enumerate(text.split("\n")):
            fence = is_code_fence(line)
            if config.show_active_line_raw and index == active_line:
                if fence:
                    in_fence = not in_fence
                parsed.append(parse_raw_line(line))
                continue

            if fence:
                in_fence = not in_fence
                node = parse_line(line, state=state, preview_mode=config.preview_mode)
                node.opens_fence = in_fence
                parsed.append(self._apply_custom_syntax(node))
                continue

            if in_fence:
                parsed.append(parse_code_line(line))
                continue

            node = parse_line(line, state=state, preview_mode=config.preview_mode)
            parsed.append(self._apply_custom_syntax(node))
        return parsed

    def render_blocks(self, text: str, active_line: int = -1) -> List[Block]:
        return fold_blocks(self.parse_lines(text, active_line), self.highlight)

    def render(self, text: str, active_line: int = -1) -> str:
        with telemetry.span(
            "parser::render",
            logger_name=self._logger_name,
            component="parser",
            metadata={"chars": len(text), "active_line": active_line},
        ):
            return serialize(self.render_blocks(text, active_line))

    def highlight(self, code: str, language: str) -> str:
        """Run the configured highlighter, falling back to escaped plain text."""

        plain = escape_html(code)
        highlighter = self.config.highlighter
        if highlighter is None or not code:
            return plain
        try:
            result = highlighter(code, language)
        except Exception as exc:
            telemetry.record_event(
                "highlighter.failed",
                level="warning",
                data={"language": language, "error": repr(exc)},
                logger_name=self._logger_name,
            )
            return plain

        if _is_thenable(result):
            _discard_pending(result)
            telemetry.record_event(
                "highlighter.async_rejected",
                level="warning",
                data={"language": language, "reason": ASYNC_HIGHLIGHTER_WARNING},
                logger_name=self._logger_name,
            )
            return plain
        if isinstance(result, str) and result.strip():
            return result
        return plain

    def _apply_custom_syntax(self, node: ParsedLine) -> ParsedLine:
        processor = self.config.custom_syntax
        if processor is None:
            return node
        if node.kind == "list_item" and node.list_type and not node.is_active_raw:
            node.item_markup = processor(node.li_markup())
        else:
            node.html = processor(node.html)
        return node


def render(
    text: str,
    config: Optional[ParserConfig] = None,
    *,
    active_line: int = -1,
) -> str:
    """Convenience wrapper around ``DocumentRenderer(config).render``."""

    return DocumentRenderer(config).render(text, active_line)


def active_line_index(text: str, cursor: int) -> int:
    """Line index that contains ``cursor``."""

    cursor = max(0, min(cursor, len(text)))
    return text.count("\n", 0, cursor)


__all__ = [
    "ASYNC_HIGHLIGHTER_WARNING",
    "DocumentRenderer",
    "render",
    "active_line_index",
]
