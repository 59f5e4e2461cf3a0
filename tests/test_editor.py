from __future__ import annotations

from typing import List, Optional

from mdoverlay.buffer import Buffer, SelectionRange
from mdoverlay.config import EditorOptions
from mdoverlay.editor import EditorBus, KeyInput, MarkdownEditor
from mdoverlay.keymaps import ActionRef


def make_editor(
    text: str = "",
    *,
    start: Optional[int] = None,
    end: Optional[int] = None,
    options: Optional[EditorOptions] = None,
    clock=None,
    read_only: bool = False,
) -> MarkdownEditor:
    start = len(text) if start is None else start
    end = start if end is None else end
    buffer = Buffer(text, selection=SelectionRange(start, end), read_only=read_only)
    kwargs = {"clock": clock} if clock is not None else {}
    return MarkdownEditor(buffer, options=options, **kwargs)


def press(editor: MarkdownEditor, key: str):
    return editor.handle_key(KeyInput.parse(key))


def test_key_input_parse() -> None:
    key = KeyInput.parse("ctrl+shift+7")

    assert key.key == "7"
    assert key.ctrl and key.shift and not key.meta
    assert key.stroke.token == "ctrl+shift+7"
    assert KeyInput.parse("+").key == "+"


def test_tab_inserts_indent_at_caret() -> None:
    editor = make_editor("ab", start=1)

    result = press(editor, "tab")

    assert result.consumed and result.action == "indent"
    assert editor.get_value() == "a  b"
    assert editor.surface.get_selection() == SelectionRange(3, 3)


def test_tab_and_shift_tab_on_selection() -> None:
    editor = make_editor("a\nb", start=0, end=3)

    press(editor, "tab")
    assert editor.get_value() == "  a\n  b"

    result = press(editor, "shift+tab")
    assert result.action == "outdent_selection"
    assert editor.get_value() == "a\nb"


def test_shift_tab_without_selection_falls_through() -> None:
    editor = make_editor("  a", start=3)

    assert not press(editor, "shift+tab").consumed
    assert editor.get_value() == "  a"


def test_tab_on_read_only_surface_is_blocked() -> None:
    editor = make_editor("a", read_only=True)

    result = press(editor, "tab")

    assert result.consumed
    assert result.status == "read_only"
    assert editor.get_value() == "a"


def test_shortcuts_run_formatting_actions() -> None:
    editor = make_editor("hello", start=0)

    result = press(editor, "ctrl+b")
    assert result.action == "toggle_bold"
    assert editor.get_value() == "**hello**"

    press(editor, "ctrl+shift+8")
    assert editor.get_value() == "- **hello**"


def test_meta_platform_modifier() -> None:
    editor = make_editor("hello", start=0, options=EditorOptions(platform_mod="meta"))

    assert not press(editor, "ctrl+i").consumed
    assert press(editor, "meta+i").consumed
    assert editor.get_value() == "_hello_"


def test_unbound_key_falls_through() -> None:
    editor = make_editor("hello")

    assert not press(editor, "ctrl+q").consumed


def test_enter_continues_list_and_renumbers_later(clock) -> None:
    editor = make_editor("1. a\n1. b", clock=clock)

    result = press(editor, "enter")

    assert result.consumed and result.action == "continue_list"
    assert editor.get_value() == "1. a\n1. b\n2. "
    assert editor.scheduler.pending
    assert not editor.process_timers(0.005)

    clock.now = 0.02
    assert editor.process_timers()
    assert editor.get_value() == "1. a\n2. b\n3. "
    assert editor.surface.get_selection() == SelectionRange(13, 13)


def test_modified_enter_is_not_handled() -> None:
    editor = make_editor("- item")

    assert not press(editor, "shift+enter").consumed
    assert editor.get_value() == "- item"


def test_enter_with_smart_lists_disabled() -> None:
    editor = make_editor("- item", options=EditorOptions(smart_lists=False))

    assert not press(editor, "enter").consumed
    assert editor.get_value() == "- item"


def test_enter_outside_list_falls_through() -> None:
    editor = make_editor("text")

    assert not press(editor, "enter").consumed


def test_perform_action_passes_options() -> None:
    editor = make_editor("")

    assert editor.perform_action("insert_link", url="https://a.b", text="A")

    assert editor.get_value() == "[A](https://a.b)"


def test_unknown_action_is_reported(recorded_events) -> None:
    editor = make_editor("x")

    assert not editor.perform_action("missing")

    assert ("editor.unknown_action", "warning", {"action_id": "missing"}) in recorded_events


def test_failing_action_is_reported(recorded_events) -> None:
    editor = make_editor("x")
    errors: List[object] = []
    editor.bus.subscribe("action_error", errors.append)

    def explode(surface) -> None:
        raise RuntimeError("boom")

    editor.registry.register_action(ActionRef(id="explode", handler=explode))

    assert not editor.perform_action("explode")

    names = [(name, level) for name, level, _ in recorded_events]
    assert ("editor.action_failed", "error") in names
    assert len(errors) == 1
    assert editor.get_value() == "x"


def test_bus_receives_action_and_change() -> None:
    bus = EditorBus()
    events: List[tuple[str, object]] = []
    for name in ("action", "change", "render"):
        bus.subscribe(name, lambda payload, name=name: events.append((name, payload)))
    editor = MarkdownEditor(Buffer.from_text("hi", cursor=0), bus=bus)

    editor.perform_action("toggle_italic")
    editor.render()

    assert events[0] == ("action", "toggle_italic")
    assert events[1] == ("change", "toggle_italic")
    assert events[2][0] == "render"


def test_set_value_emits_change() -> None:
    editor = make_editor("")
    reasons: List[object] = []
    editor.bus.subscribe("change", reasons.append)

    editor.set_value("new")

    assert editor.get_value() == "new"
    assert reasons == ["set_value"]


def test_render_keeps_active_line_raw() -> None:
    options = EditorOptions(show_active_line_raw=True)
    editor = make_editor("**a**\n**b**", start=0, options=options)

    html = editor.render()

    assert '<div class="raw-line">**a**</div>' in html
    assert "<strong>" in html
    assert editor.active_line() == 0


def test_rendered_html_ignores_active_line() -> None:
    options = EditorOptions(show_active_line_raw=True)
    editor = make_editor("**a**", start=0, options=options)

    assert "raw-line" not in editor.rendered_html()
    clean = editor.rendered_html(clean=True)
    assert "syntax-marker" not in clean
    assert "<strong>a</strong>" in clean


def test_active_formats_follow_selection() -> None:
    editor = make_editor("- item", start=3)

    assert editor.get_active_formats() == ["bullet-list"]


def test_options_from_env(monkeypatch) -> None:
    monkeypatch.setenv("MDOVERLAY_SMART_LISTS", "0")
    monkeypatch.setenv("MDOVERLAY_RENUMBER_DELAY_MS", "25")

    options = EditorOptions.from_env(platform_mod="ctrl")

    assert not options.smart_lists
    assert options.renumber_delay_ms == 25
    assert options.platform_mod == "ctrl"
