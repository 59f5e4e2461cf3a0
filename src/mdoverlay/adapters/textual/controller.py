"""Textual adapter that wires MarkdownEditor events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from mdoverlay.editor import KeyInput, KeyResult, MarkdownEditor


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_preview: Callable[[str], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges editor key handling and bus events to a Textual surface."""

    def __init__(self, editor: MarkdownEditor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(self, key: str, *, text: Optional[str] = None) -> KeyResult:
        """Translate a Textual key name (``"ctrl+b"``) and dispatch it."""

        key_input = KeyInput.parse(key, text)
        self._log_state("key ->", key=key)
        result = self.editor.handle_key(key_input)
        if result.consumed:
            self.hooks.update_status(self._status_for(result))
        self._log_state(
            "result <-",
            consumed=result.consumed,
            action=result.action,
            status=result.status,
        )
        return result

    def process_timers(self) -> bool:
        """Fire the renumber debounce when due."""

        fired = self.editor.process_timers()
        if fired:
            self.hooks.update_status("renumbered")
            self._log_state("timer ->", fired=True)
        return fired

    def refresh(self) -> str:
        html = self.editor.render()
        self.hooks.update_preview(html)
        formats = self.editor.get_active_formats()
        if formats:
            self.hooks.update_status(" ".join(formats))
        return html

    def _status_for(self, result: KeyResult) -> str:
        if result.status != "ok":
            return f"{result.action or 'key'}:{result.status}"
        return result.action or ""

    def _subscribe_events(self) -> None:
        for event in ("change", "action", "action_error"):
            self.editor.bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "change":
            self.refresh()

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        selection = self.editor.surface.get_selection()
        return {
            "selection": (selection.start, selection.end),
            "length": len(self.editor.get_value()),
            "renumber_pending": self.editor.scheduler.pending,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
