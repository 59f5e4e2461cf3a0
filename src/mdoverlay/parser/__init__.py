"""Character-aligned markdown line parser and document renderer."""

from .block import parse_line
from .config import CustomSyntax, Highlighter, ParserConfig, RenderState
from .escaping import decode_entities, escape_html, preserve_indentation
from .export import render_clean_html
from .inline import apply_emphasis, parse_bold, parse_italic, parse_strikethrough
from .nodes import CodeBlock, ListBlock, ParsedLine, fold_blocks, serialize
from .renderer import DocumentRenderer, active_line_index, render
from .sanctuary import Sanctuary, parse_inline_elements, protect, restore
from .sanitize import sanitize_url

__all__ = [
    "CodeBlock",
    "CustomSyntax",
    "DocumentRenderer",
    "Highlighter",
    "ListBlock",
    "ParsedLine",
    "ParserConfig",
    "RenderState",
    "Sanctuary",
    "active_line_index",
    "apply_emphasis",
    "decode_entities",
    "escape_html",
    "fold_blocks",
    "parse_bold",
    "parse_inline_elements",
    "parse_italic",
    "parse_line",
    "parse_strikethrough",
    "preserve_indentation",
    "protect",
    "render",
    "render_clean_html",
    "restore",
    "sanitize_url",
    "serialize",
]
