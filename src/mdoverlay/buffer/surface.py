"""Adapter boundary: the buffer/selection primitive a host must provide."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from .state import SelectionRange


@runtime_checkable
class TextSurface(Protocol):
    """Protocol describing the host editing surface.

    Hosts may additionally expose ``insert_text(text)`` (replace the current
    selection through the host's native undo history) and a ``read_only``
    attribute. ``apply_replacement`` falls back to ``set_text`` when
    ``insert_text`` is missing.
    """

    def get_text(self) -> str:
        ...

    def set_text(self, text: str) -> None:
        ...

    def get_selection(self) -> SelectionRange:
        ...

    def set_selection(self, start: int, end: int) -> None:
        ...


class SelectionError(ValueError):
    """Raised when a host supplies out-of-bounds selection offsets."""

    def __init__(self, message: str, *, selection: SelectionRange | None = None) -> None:
        super().__init__(message)
        self.selection = selection


def is_read_only(surface: TextSurface) -> bool:
    return bool(getattr(surface, "read_only", False))


def apply_replacement(
    surface: TextSurface,
    start: int,
    end: int,
    text: str,
    *,
    selection: Optional[SelectionRange] = None,
) -> None:
    """Replace ``[start, end)`` with ``text`` and then place the selection.

    Uses the host's ``insert_text`` when available so the edit lands in its
    undo history; otherwise rewrites the whole buffer with ``set_text``.
    """

    surface.set_selection(start, end)
    insert = getattr(surface, "insert_text", None)
    if callable(insert):
        insert(text)
    else:
        value = surface.get_text()
        surface.set_text(value[:start] + text + value[end:])
    if selection is None:
        caret = start + len(text)
        surface.set_selection(caret, caret)
    else:
        surface.set_selection(selection.start, selection.end)


__all__ = ["TextSurface", "SelectionError", "is_read_only", "apply_replacement"]
