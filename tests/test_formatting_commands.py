from __future__ import annotations

from typing import Callable, Optional

import pytest

from mdoverlay.buffer import Buffer, SelectionRange
from mdoverlay.formatting import (
    get_active_formats,
    indent_selection,
    insert_header,
    insert_link,
    outdent_selection,
    toggle_bold,
    toggle_bullet_list,
    toggle_code,
    toggle_h1,
    toggle_h2,
    toggle_italic,
    toggle_numbered_list,
    toggle_quote,
    toggle_task_list,
)


def make_buffer(text: str, start: int, end: Optional[int] = None, **kwargs) -> Buffer:
    end = start if end is None else end
    return Buffer(text, selection=SelectionRange(start, end), **kwargs)


def state_of(buffer: Buffer) -> tuple[str, int, int]:
    selection = buffer.get_selection()
    return buffer.get_text(), selection.start, selection.end


def test_bold_wraps_word_under_caret() -> None:
    buffer = make_buffer("hello world", 2)

    toggle_bold(buffer)

    assert state_of(buffer) == ("**hello** world", 4, 4)


def test_bold_wraps_selection_and_trims_whitespace() -> None:
    buffer = make_buffer("say hello ", 3, 10)

    toggle_bold(buffer)

    assert buffer.get_text() == "say **hello** "
    text, start, end = state_of(buffer)
    assert text[start:end] == "hello"


def test_word_at_end_of_buffer_is_expanded() -> None:
    buffer = make_buffer("hello", 5)

    toggle_italic(buffer)

    assert buffer.get_text() == "_hello_"


@pytest.mark.parametrize(
    ("command", "text", "start", "end"),
    [
        (toggle_bold, "hello world", 2, 2),
        (toggle_bold, "say hello", 4, 9),
        (toggle_bold, "hello", 5, 5),
        (toggle_italic, "a word", 3, 3),
        (toggle_code, "run this", 4, 8),
        (toggle_code, "one\ntwo", 0, 7),
        (toggle_quote, "hello", 2, 2),
        (toggle_quote, "a\nb", 0, 3),
        (toggle_task_list, "todo", 0, 0),
        (toggle_bullet_list, "item", 0, 0),
        (toggle_bullet_list, "a\nb", 0, 3),
        (toggle_numbered_list, "a\nb\nc", 1, 5),
    ],
)
def test_toggle_twice_restores_text(
    command: Callable[..., object], text: str, start: int, end: int
) -> None:
    buffer = make_buffer(text, start, end)

    command(buffer)
    assert buffer.get_text() != text
    command(buffer)

    assert buffer.get_text() == text


def test_bold_toggle_off_restores_caret() -> None:
    buffer = make_buffer("hello world", 2)

    toggle_bold(buffer)
    toggle_bold(buffer)

    assert state_of(buffer) == ("hello world", 2, 2)


def test_multiline_code_uses_fences() -> None:
    buffer = make_buffer("one\ntwo", 0, 7)

    toggle_code(buffer)

    assert state_of(buffer) == ("```\none\ntwo\n```", 4, 11)


def test_link_placeholder_is_selected() -> None:
    buffer = make_buffer("visit site", 6, 10)

    insert_link(buffer)

    text, start, end = state_of(buffer)
    assert text == "visit [site](url)"
    assert text[start:end] == "url"


def test_selected_url_becomes_text_and_target() -> None:
    buffer = make_buffer("https://x.com", 0, 13)

    insert_link(buffer)

    assert buffer.get_text() == "[https://x.com](https://x.com)"


def test_link_with_url_and_text_options() -> None:
    buffer = make_buffer("see ", 4)

    insert_link(buffer, url="https://a.b", text="A")

    text, start, end = state_of(buffer)
    assert text == "see [A](https://a.b)"
    assert text[start:end] == "A"


def test_quote_pads_with_blank_lines() -> None:
    buffer = make_buffer("intro\nquote me\noutro", 8)

    toggle_quote(buffer)

    text, start, _ = state_of(buffer)
    assert text == "intro\n\n> quote me\n\noutro"
    assert text[start:].startswith("ote me")


def test_quote_caret_tracks_content() -> None:
    buffer = make_buffer("hello", 2)

    toggle_quote(buffer)
    assert state_of(buffer) == ("> hello", 4, 4)

    toggle_quote(buffer)
    assert state_of(buffer) == ("hello", 2, 2)


def test_numbered_list_counts_from_one() -> None:
    buffer = make_buffer("a\nb\nc", 0, 5)

    toggle_numbered_list(buffer)

    assert buffer.get_text() == "1. a\n2. b\n3. c"


def test_switching_list_styles_keeps_selection_on_content() -> None:
    buffer = make_buffer("1. alpha\n2. beta", 0, 16)

    toggle_bullet_list(buffer)

    text, start, end = state_of(buffer)
    assert text == "- alpha\n- beta"
    assert text[start:end] == "alpha\n- beta"


def test_switching_list_style_moves_caret_by_prefix_delta() -> None:
    buffer = make_buffer("- item", 4)

    toggle_numbered_list(buffer)

    assert state_of(buffer) == ("1. item", 5, 5)


def test_header_insert_replace_and_toggle() -> None:
    buffer = make_buffer("Title", 0)

    insert_header(buffer, 2)
    assert state_of(buffer) == ("## Title", 3, 3)

    toggle_h1(buffer)
    assert state_of(buffer) == ("# Title", 2, 2)

    toggle_h1(buffer)
    assert state_of(buffer) == ("Title", 0, 0)


def test_header_toggle_replaces_other_level() -> None:
    buffer = make_buffer("### Deep", 6)

    toggle_h2(buffer)

    assert state_of(buffer) == ("## Deep", 5, 5)


def test_header_level_out_of_range_becomes_one() -> None:
    buffer = make_buffer("Title", 0)

    insert_header(buffer, 9)

    assert buffer.get_text() == "# Title"


def test_commands_skip_read_only_surfaces() -> None:
    buffer = make_buffer("hello", 2, read_only=True)

    assert toggle_bold(buffer) is None
    assert toggle_bullet_list(buffer) is None
    assert buffer.get_text() == "hello"


def test_indent_and_outdent_selection() -> None:
    buffer = make_buffer("a\n b", 0, 4)

    indent_selection(buffer)
    assert state_of(buffer) == ("  a\n   b", 0, 8)

    outdent_selection(buffer)
    assert state_of(buffer) == ("a\n b", 0, 4)


def test_commands_land_in_undo_history() -> None:
    buffer = make_buffer("hello", 0)

    toggle_bold(buffer)
    assert buffer.undo()

    assert buffer.get_text() == "hello"


@pytest.mark.parametrize(
    ("text", "offset", "expected"),
    [
        ("- [ ] task", 6, ["task-list"]),
        ("- item", 3, ["bullet-list"]),
        ("12. item", 5, ["numbered-list"]),
        ("> quote", 3, ["quote"]),
        ("# Head", 3, ["header"]),
        ("## Head", 4, ["header-2"]),
        ("a **bold** b", 5, ["bold"]),
        ("a `code` b", 4, ["code"]),
        ("see [docs](/d)", 6, ["link"]),
        ("plain", 2, []),
    ],
)
def test_get_active_formats(text: str, offset: int, expected: list[str]) -> None:
    assert get_active_formats(text, offset) == expected
