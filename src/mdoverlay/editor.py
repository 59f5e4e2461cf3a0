"""Editor controller tying a host surface to the renderer and commands."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from mdoverlay.buffer.surface import TextSurface, is_read_only
from mdoverlay.config import EditorOptions
from mdoverlay.formatting import commands
from mdoverlay.keymaps import KeymapRegistry, KeyStroke, load_default_keymaps
from mdoverlay.lists import RenumberScheduler, continue_list, renumber_with_cursor
from mdoverlay.parser import DocumentRenderer, ParserConfig, active_line_index
from mdoverlay.parser.export import render_clean_html
from mdoverlay.runtime import telemetry

MODIFIER_NAMES = ("alt", "ctrl", "meta", "shift")


@dataclass(slots=True)
class KeyInput:
    """Normalized key event handed to :meth:`MarkdownEditor.handle_key`."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @classmethod
    def parse(cls, spec: str, text: Optional[str] = None) -> "KeyInput":
        """Build from a ``"ctrl+shift+7"`` style key name."""

        if spec == "+":
            return cls("+", (), text)
        *modifiers, key = spec.lower().split("+")
        return cls(key, tuple(modifiers), text)

    @property
    def shift(self) -> bool:
        return "shift" in self.modifiers

    @property
    def ctrl(self) -> bool:
        return "ctrl" in self.modifiers

    @property
    def meta(self) -> bool:
        return "meta" in self.modifiers

    @property
    def stroke(self) -> KeyStroke:
        known = tuple(m for m in self.modifiers if m in MODIFIER_NAMES)
        return KeyStroke(self.key, known)


@dataclass(slots=True)
class KeyResult:
    """Outcome of a key press; unconsumed keys fall through to the host."""

    consumed: bool
    action: Optional[str] = None
    status: str = "ok"


class EditorBus:
    """Minimal event bus for ``change``, ``action``, ``render`` and ``action_error``."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class MarkdownEditor:
    """Routes keys and actions to the formatting engine and re-renders.

    The host owns the text; the editor only reads it through ``surface`` and
    writes back through the same protocol.
    """

    def __init__(
        self,
        surface: TextSurface,
        *,
        options: EditorOptions | None = None,
        config: ParserConfig | None = None,
        registry: KeymapRegistry | None = None,
        bus: EditorBus | None = None,
        clock: Callable[[], float] = time.monotonic,
        load_defaults: bool = True,
    ) -> None:
        self.surface = surface
        self.options = options or EditorOptions()
        self.config = config or self.options.parser_config()
        self.renderer = DocumentRenderer(self.config)
        self.bus = bus or EditorBus()
        self.logger = telemetry.get_logger("mdoverlay.editor")
        self.registry = registry or KeymapRegistry(logger_name="mdoverlay.keymaps")
        if load_defaults and registry is None:
            load_default_keymaps(self.registry, mod=self.options.platform_mod)
        self.scheduler = RenumberScheduler(
            self.update_numbered_lists,
            delay_ms=self.options.renumber_delay_ms,
            clock=clock,
        )

    # -- content ---------------------------------------------------------

    def get_value(self) -> str:
        return self.surface.get_text()

    def set_value(self, text: str) -> None:
        self.surface.set_text(text)
        self._changed("set_value")

    def active_line(self) -> int:
        if not self.config.show_active_line_raw:
            return -1
        return active_line_index(self.get_value(), self.surface.get_selection().start)

    def render(self) -> str:
        html = self.renderer.render(self.get_value(), self.active_line())
        self.bus.emit("render", html)
        return html

    def rendered_html(self, *, clean: bool = False) -> str:
        """Full render without the active-line override, optionally cleaned."""

        html = self.renderer.render(self.get_value())
        return render_clean_html(html) if clean else html

    def get_active_formats(self) -> List[str]:
        selection = self.surface.get_selection().normalized()
        return commands.get_active_formats(self.get_value(), selection.start, selection.end)

    # -- keys ------------------------------------------------------------

    def handle_key(self, key: KeyInput) -> KeyResult:
        with telemetry.span(
            name="editor::key",
            component="editor",
            metadata={"key": key.stroke.token},
        ):
            if key.key == "tab":
                return self._handle_tab(key)
            if key.key == "enter" and not (key.shift or key.ctrl or key.meta):
                if self.options.smart_lists and self._continue_list():
                    return KeyResult(consumed=True, action="continue_list")
                return KeyResult(consumed=False)

            binding = self.registry.lookup(key.stroke)
            if binding is None:
                return KeyResult(consumed=False)
            performed = self.perform_action(binding.action_id)
            return KeyResult(
                consumed=True,
                action=binding.action_id,
                status="ok" if performed else "error",
            )

    def _handle_tab(self, key: KeyInput) -> KeyResult:
        selection = self.surface.get_selection().normalized()
        if key.shift and selection.is_collapsed:
            return KeyResult(consumed=False)
        if is_read_only(self.surface):
            return KeyResult(consumed=True, status="read_only")

        indent = self.options.indent
        if selection.is_collapsed:
            commands.insert_indent(self.surface, indent)
            action = "indent"
        elif key.shift:
            commands.outdent_selection(self.surface, indent)
            action = "outdent_selection"
        else:
            commands.indent_selection(self.surface, indent)
            action = "indent_selection"
        self._changed(action)
        return KeyResult(consumed=True, action=action)

    def _continue_list(self) -> bool:
        if is_read_only(self.surface):
            return False
        cursor = self.surface.get_selection().normalized().start
        result = continue_list(self.get_value(), cursor)
        if result is None:
            return False
        commands.apply_edit(self.surface, result.edit)
        if result.renumber:
            self.scheduler.schedule()
        self._changed(f"list_{result.action}")
        return True

    # -- actions ---------------------------------------------------------

    def perform_action(self, action_id: str, **kwargs: object) -> bool:
        """Run a registered action against the surface.

        Unknown ids and failing handlers are logged and reported as ``False``.
        """

        if not self.registry.has_action(action_id):
            telemetry.record_event(
                "editor.unknown_action",
                level="warning",
                data={"action_id": action_id},
                logger_name="mdoverlay.editor",
            )
            return False

        action = self.registry.get_action(action_id)
        try:
            with telemetry.span(
                name=f"actions::{action.telemetry_name}",
                component=True,
                metadata={"action_id": action_id},
            ):
                action(self.surface, **kwargs)
        except Exception as exc:
            telemetry.record_event(
                "editor.action_failed",
                level="error",
                data={"action_id": action_id, "error": repr(exc)},
                logger_name="mdoverlay.editor",
            )
            self.bus.emit("action_error", {"action_id": action_id, "error": exc})
            return False

        self.bus.emit("action", action_id)
        self._changed(action_id)
        return True

    # -- renumbering -----------------------------------------------------

    def update_numbered_lists(self) -> bool:
        """Renumber ordered lists now, keeping the caret on the same content."""

        text = self.get_value()
        cursor = self.surface.get_selection().normalized().start
        renumbered, caret = renumber_with_cursor(text, cursor)
        if renumbered == text:
            return False
        self.surface.set_text(renumbered)
        self.surface.set_selection(caret, caret)
        self._changed("renumber")
        return True

    def process_timers(self, now: float | None = None) -> bool:
        return self.scheduler.process_due(now)

    def _changed(self, reason: str) -> None:
        self.bus.emit("change", reason)


__all__ = ["EditorBus", "KeyInput", "KeyResult", "MarkdownEditor"]
