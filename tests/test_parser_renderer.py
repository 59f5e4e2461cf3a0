from __future__ import annotations

import pytest

from mdoverlay.parser import DocumentRenderer, ParserConfig, render, render_clean_html
from mdoverlay.parser.renderer import active_line_index

CODE_DOC = "```python\nx < 1\n\ny = 2\n```"
PLAIN_BODY = "x &lt; 1\n\ny = 2"


def make_renderer(**config: object) -> DocumentRenderer:
    return DocumentRenderer(ParserConfig(**config))  # type: ignore[arg-type]


class Thenable:
    def then(self, *_callbacks: object) -> None:
        return None


def test_fenced_code_is_merged_into_one_block() -> None:
    html = render(CODE_DOC)

    assert html == (
        '<div><span class="code-fence">```python</span></div>'
        f'<pre class="code-block"><code class="language-python">{PLAIN_BODY}</code></pre>'
        '<div><span class="code-fence">```</span></div>'
    )


def test_code_lines_are_literal() -> None:
    html = render("```\n**x** - item\n```")

    assert "<strong>" not in html
    assert "<li" not in html


def test_unclosed_fence_stays_line_by_line() -> None:
    html = render("```\ncode")

    assert "code-block" not in html
    assert html.endswith("<div>code</div>")


def test_highlighter_output_is_used() -> None:
    seen = []

    def highlighter(code: str, language: str) -> str:
        seen.append((code, language))
        return "<b>highlighted</b>"

    html = make_renderer(highlighter=highlighter).render(CODE_DOC)

    assert seen == [("x < 1\n\ny = 2", "python")]
    assert "<b>highlighted</b>" in html


@pytest.mark.parametrize("result", [None, "", "   \n", 0])
def test_falsy_highlighter_falls_back_silently(result, recorded_events) -> None:
    html = make_renderer(highlighter=lambda code, lang: result).render(CODE_DOC)

    assert PLAIN_BODY in html
    assert recorded_events == []


def test_thenable_highlighter_is_rejected_with_warning(recorded_events) -> None:
    html = make_renderer(highlighter=lambda code, lang: Thenable()).render(CODE_DOC)

    assert PLAIN_BODY in html
    assert [(name, level) for name, level, _ in recorded_events] == [
        ("highlighter.async_rejected", "warning")
    ]


def test_coroutine_highlighter_is_rejected(recorded_events) -> None:
    async def highlighter(code: str, language: str) -> str:
        return "<b>late</b>"

    html = make_renderer(highlighter=highlighter).render(CODE_DOC)

    assert "late" not in html
    assert recorded_events[0][0] == "highlighter.async_rejected"


def test_failing_highlighter_logs_and_falls_back(recorded_events) -> None:
    def highlighter(code: str, language: str) -> str:
        raise RuntimeError("boom")

    html = make_renderer(highlighter=highlighter).render(CODE_DOC)

    assert PLAIN_BODY in html
    assert recorded_events[0][:2] == ("highlighter.failed", "warning")


def test_highlighter_skipped_for_empty_block() -> None:
    calls = []
    renderer = make_renderer(highlighter=lambda code, lang: calls.append(code))

    renderer.render("```\n```")

    assert calls == []


def test_adjacent_list_items_are_merged_by_type() -> None:
    html = render("- a\n- b\n1. c\n2. d\ntext")

    assert html.startswith("<ul>")
    assert html.count('<li class="bullet-list">') == 2
    assert "<ol>" in html
    assert html.count('<li class="ordered-list">') == 2
    assert html.endswith("<div>text</div>")


def test_list_indentation_moves_inside_item() -> None:
    html = render("- a\n  - b")

    assert '<li class="bullet-list">&nbsp;&nbsp;<span class="syntax-marker">- </span>b</li>' in html


def test_active_line_rendered_raw() -> None:
    renderer = make_renderer(show_active_line_raw=True)

    html = renderer.render("**a**\n**b**", active_line=0)

    assert html.startswith('<div class="raw-line">**a**</div>')
    assert "<strong>" in html


def test_active_line_ignored_without_flag() -> None:
    html = render("**a**", active_line=0)

    assert "raw-line" not in html


def test_custom_syntax_skips_code_lines() -> None:
    renderer = make_renderer(
        custom_syntax=lambda html: html.replace("TODO", "<mark>TODO</mark>")
    )

    html = renderer.render("TODO\n```\nTODO\n```")

    assert html.count("<mark>") == 1


def test_custom_syntax_sees_whole_list_item() -> None:
    seen: list[str] = []

    def tag_items(html: str) -> str:
        seen.append(html)
        return html.replace('<li class="bullet-list">', '<li class="bullet-list" data-x="1">')

    html = make_renderer(custom_syntax=tag_items).render("- a\n  - b")

    assert seen[0] == '<li class="bullet-list"><span class="syntax-marker">- </span>a</li>'
    assert html.count('<li class="bullet-list" data-x="1">') == 2
    assert '<li class="bullet-list" data-x="1">&nbsp;&nbsp;<span' in html


def test_link_anchor_names_restart_per_render() -> None:
    text = "[a](/a) [b](/b)"

    first = render(text)
    second = render(text)

    assert "anchor-name: --link-0" in first
    assert "anchor-name: --link-1" in first
    assert first == second


def test_renderers_do_not_share_configuration() -> None:
    loud = make_renderer(highlighter=lambda code, lang: "<i>loud</i>")
    quiet = make_renderer()

    assert "<i>loud</i>" in loud.render(CODE_DOC)
    assert "<i>loud</i>" not in quiet.render(CODE_DOC)


def test_empty_lines_keep_their_height() -> None:
    assert render("a\n\nb") == "<div>a</div><div>&nbsp;</div><div>b</div>"


def test_clean_html_export() -> None:
    assert render_clean_html(render("**b**")) == "<div><strong>b</strong></div>"
    cleaned = render_clean_html(render("- a\n---"))
    assert "syntax-marker" not in cleaned
    assert "bullet-list" not in cleaned
    assert "hr-marker" not in cleaned


def test_active_line_index() -> None:
    text = "one\ntwo\nthree"

    assert active_line_index(text, 0) == 0
    assert active_line_index(text, 4) == 1
    assert active_line_index(text, len(text)) == 2
