"""Character-aligned live markdown overlay: parser, formatting commands, editor."""

from mdoverlay.config import EditorOptions
from mdoverlay.editor import EditorBus, KeyInput, KeyResult, MarkdownEditor
from mdoverlay.parser import ParserConfig, render, render_clean_html

__version__ = "0.1.0"

__all__ = [
    "EditorBus",
    "EditorOptions",
    "KeyInput",
    "KeyResult",
    "MarkdownEditor",
    "ParserConfig",
    "render",
    "render_clean_html",
    "__version__",
]
