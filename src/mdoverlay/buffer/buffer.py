"""In-memory text surface with selection state and undo history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, List, Optional

from mdoverlay.runtime import telemetry

from .state import SelectionRange
from .validation import ensure_selection


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    selection: SelectionRange
    label: str


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One committed edit: text and selection on both sides of it."""

    label: str
    before_text: str
    after_text: str
    selection_before: SelectionRange
    selection_after: SelectionRange


class Buffer:
    """Reference ``TextSurface`` used by tests, scripts and the CLI.

    Every change goes through a :class:`Transaction` and lands on the undo
    stack, standing in for a browser textarea's native history. Undo puts the
    selection back where it was before the edit; redo restores the selection
    the edit left behind.
    """

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "default",
        selection: Optional[SelectionRange] = None,
        read_only: bool = False,
    ) -> None:
        self.name = name
        self._text = text
        self._selection = (selection or SelectionRange()).clamped(len(text))
        self._undo_stack: List[HistoryEntry] = []
        self._redo_stack: List[HistoryEntry] = []
        self.read_only = read_only
        self.version = 0

    @classmethod
    def from_text(
        cls, text: str, *, cursor: int | None = None, name: str = "default"
    ) -> "Buffer":
        offset = len(text) if cursor is None else cursor
        return cls(text, name=name, selection=SelectionRange.caret(offset))

    # -- TextSurface -----------------------------------------------------

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._commit("set_text", text, self._selection.clamped(len(text)))

    def get_selection(self) -> SelectionRange:
        return self._selection

    def set_selection(self, start: int, end: int) -> None:
        self._selection = ensure_selection(self._text, start, end)

    def insert_text(self, text: str) -> BufferDelta:
        start, end = self._selection
        new_text = self._text[:start] + text + self._text[end:]
        caret = start + len(text)
        return self._commit("insert_text", new_text, SelectionRange.caret(caret))

    # -- history ---------------------------------------------------------

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def history(self) -> List[str]:
        """Labels of the undoable edits, oldest first."""

        return [entry.label for entry in self._undo_stack]

    def undo(self) -> bool:
        if not self._undo_stack:
            return False
        entry = self._undo_stack.pop()
        self._redo_stack.append(entry)
        self._restore(entry.before_text, entry.selection_before)
        return True

    def redo(self) -> bool:
        if not self._redo_stack:
            return False
        entry = self._redo_stack.pop()
        self._undo_stack.append(entry)
        self._restore(entry.after_text, entry.selection_after)
        return True

    def snapshot(self) -> BufferDelta:
        return BufferDelta(
            version=self.version,
            text=self._text,
            selection=self._selection,
            label="snapshot",
        )

    def _record(self, entry: HistoryEntry) -> None:
        self._undo_stack.append(entry)
        self._redo_stack.clear()

    def _restore(self, text: str, selection: SelectionRange) -> None:
        self._text = text
        self._selection = selection.clamped(len(text))
        self.version += 1

    def _commit(self, label: str, text: str, selection: SelectionRange) -> BufferDelta:
        with Transaction(self, label) as tx:
            before_text = self._text
            before_selection = self._selection
            self._text = text
            self._selection = selection
            self.version += 1
            tx.commit(before_text, text, before_selection, selection)
        return BufferDelta(
            version=self.version, text=text, selection=selection, label=label
        )


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(
        self,
        before_text: str,
        after_text: str,
        selection_before: SelectionRange,
        selection_after: SelectionRange,
    ) -> None:
        """Record the edit unless it left the text unchanged."""

        if before_text == after_text:
            return
        self.buffer._record(
            HistoryEntry(
                label=self.label,
                before_text=before_text,
                after_text=after_text,
                selection_before=selection_before,
                selection_after=selection_after,
            )
        )

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
