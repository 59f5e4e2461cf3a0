"""Executable Textual app hosting the markdown overlay editor."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use mdoverlay.adapters.textual.app"
    ) from exc

from mdoverlay.config import EditorOptions
from mdoverlay.editor import MarkdownEditor
from mdoverlay.parser import DocumentRenderer, render_clean_html
from mdoverlay.parser.config import Highlighter
from mdoverlay.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks
from .surface import TextAreaSurface

KeyHandler = Callable[[events.Key], bool]

TIMER_INTERVAL_S = 0.01


class MarkdownTextArea(TextArea):
    """TextArea that offers every key to the editor before handling it."""

    def __init__(self, *args, key_handler: KeyHandler | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.key_handler = key_handler

    async def _on_key(self, event: events.Key) -> None:
        if self.key_handler is not None and self.key_handler(event):
            event.stop()
            event.prevent_default()
            return
        await super()._on_key(event)


@dataclass
class UIState:
    preview_html: str = ""
    status_text: str = ""


class MarkdownOverlayApp(App[None]):
    """Editor pane on the left, live overlay HTML on the right."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#panes {
		height: 1fr;
	}

	#editor {
		width: 1fr;
		border: round $accent;
	}

	#preview {
		width: 1fr;
		border: round $secondary;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        text: str = "",
        *,
        options: EditorOptions | None = None,
        highlighter: Highlighter | None = None,
    ) -> None:
        super().__init__()
        self._initial_text = text
        self._state = UIState()
        self.options = options or EditorOptions.from_env()
        self._highlighter = highlighter
        self.editor: MarkdownEditor | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._text_area: MarkdownTextArea | None = None
        self._preview_widget: Static | None = None
        self._status_widget: Static | None = None
        self.logger = telemetry.get_logger("mdoverlay.textual")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="panes"):
            self._text_area = MarkdownTextArea(
                self._initial_text,
                id="editor",
                tab_behavior="indent",
                key_handler=self._handle_key,
            )
            yield self._text_area
            self._preview_widget = Static("", id="preview", markup=False)
            yield self._preview_widget
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        assert self._text_area is not None
        surface = TextAreaSurface(self._text_area)
        self.editor = MarkdownEditor(
            surface,
            options=self.options,
            config=self.options.parser_config(highlighter=self._highlighter),
        )
        hooks = TextualUIHooks(
            update_preview=self._update_preview,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.editor, hooks)
        self.set_interval(TIMER_INTERVAL_S, self._process_timers)
        self._text_area.focus()

    def on_text_area_changed(self, _event: TextArea.Changed) -> None:
        if self.adapter:
            self.adapter.refresh()

    def on_text_area_selection_changed(self, _event: TextArea.SelectionChanged) -> None:
        if self.adapter and self.options.show_active_line_raw:
            self.adapter.refresh()

    def _handle_key(self, event: events.Key) -> bool:
        if not self.adapter:
            return False
        result = self.adapter.handle_textual_key(event.key, text=event.character)
        return result.consumed

    def _process_timers(self) -> None:
        if self.adapter:
            self.adapter.process_timers()

    def _update_preview(self, html: str) -> None:
        self._state.preview_html = html
        if self._preview_widget:
            self._preview_widget.update(html)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Edit markdown with a character-aligned live preview."
    )
    parser.add_argument("path", nargs="?", help="Markdown file to open")
    parser.add_argument(
        "--render",
        action="store_true",
        help="Print the rendered HTML to stdout instead of starting the editor",
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="With --render, strip syntax markers and editor classes",
    )
    parser.add_argument(
        "--preview", action="store_true", help="Render task lists as checkboxes"
    )
    parser.add_argument(
        "--raw-active-line",
        action="store_true",
        help="Show the line under the cursor as raw markdown",
    )
    parser.add_argument(
        "--highlight",
        action="store_true",
        help="Highlight fenced code blocks with Pygments",
    )
    return parser.parse_args(argv)


def _load_highlighter(enabled: bool) -> Highlighter | None:
    if not enabled:
        return None
    from mdoverlay.highlighters import pygments_highlighter

    return pygments_highlighter


def render_to_stdout(text: str, options: EditorOptions, *, clean: bool, highlighter) -> str:
    html = DocumentRenderer(options.parser_config(highlighter=highlighter)).render(text)
    if clean:
        html = render_clean_html(html)
    sys.stdout.write(html + "\n")
    return html


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    overrides: dict[str, object] = {}
    if args.preview:
        overrides["preview_mode"] = True
    if args.raw_active_line:
        overrides["show_active_line_raw"] = True
    options = EditorOptions.from_env(**overrides)
    highlighter = _load_highlighter(args.highlight)

    text = ""
    if args.path:
        path = Path(args.path)
        if path.exists():
            text = path.read_text(encoding="utf-8")
    elif args.render:
        text = sys.stdin.read()

    if args.render:
        render_to_stdout(text, options, clean=args.clean, highlighter=highlighter)
        return

    app = MarkdownOverlayApp(text, options=options, highlighter=highlighter)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
