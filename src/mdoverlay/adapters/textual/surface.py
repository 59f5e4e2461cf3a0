"""``TextSurface`` implementation over a Textual ``TextArea``."""

from __future__ import annotations

from textual.widgets import TextArea
from textual.widgets.text_area import Selection

from mdoverlay.buffer.positions import location_from_offset, offset_from_location
from mdoverlay.buffer.state import SelectionRange


class TextAreaSurface:
    """Flat-offset view of a ``TextArea``.

    Edits go through ``TextArea.replace`` so they land in the widget's own
    undo history.
    """

    def __init__(self, text_area: TextArea) -> None:
        self.text_area = text_area

    @property
    def read_only(self) -> bool:
        return bool(self.text_area.read_only)

    def get_text(self) -> str:
        return self.text_area.text

    def set_text(self, text: str) -> None:
        document = self.text_area.document
        self.text_area.replace(text, (0, 0), document.end, maintain_selection_offset=False)

    def get_selection(self) -> SelectionRange:
        text = self.get_text()
        selection = self.text_area.selection
        return SelectionRange(
            offset_from_location(text, selection.start),
            offset_from_location(text, selection.end),
        ).normalized()

    def set_selection(self, start: int, end: int) -> None:
        text = self.get_text()
        self.text_area.selection = Selection(
            location_from_offset(text, start), location_from_offset(text, end)
        )

    def insert_text(self, text: str) -> None:
        current = self.text_area.selection
        start, end = sorted((current.start, current.end))
        self.text_area.replace(text, start, end, maintain_selection_offset=False)


__all__ = ["TextAreaSurface"]
