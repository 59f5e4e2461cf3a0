"""Textual host integration."""

from .controller import TextualEditorAdapter, TextualUIHooks
from .surface import TextAreaSurface

__all__ = ["TextAreaSurface", "TextualEditorAdapter", "TextualUIHooks"]
