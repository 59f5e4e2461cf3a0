from __future__ import annotations

import io
from pathlib import Path

import pytest

from mdoverlay.adapters.textual.app import main
from mdoverlay.highlighters import pygments_css, pygments_highlighter


def write_doc(tmp_path: Path, text: str) -> str:
    path = tmp_path / "doc.md"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_render_prints_overlay_html(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--render", write_doc(tmp_path, "# Title\n**bold**")])

    out = capsys.readouterr().out
    assert '<span class="syntax-marker">**</span>' in out
    assert "<h1>" in out


def test_render_clean_strips_markers(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--render", "--clean", write_doc(tmp_path, "- item")])

    out = capsys.readouterr().out
    assert "syntax-marker" not in out
    assert "<li>item</li>" in out


def test_render_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("~~gone~~"))

    main(["--render"])

    assert "<del>" in capsys.readouterr().out


def test_render_with_pygments(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["--render", "--highlight", write_doc(tmp_path, "```python\nx = 1\n```")])

    out = capsys.readouterr().out
    assert '<span class="n">x</span>' in out


def test_pygments_highlighter_unknown_language() -> None:
    assert pygments_highlighter("x", "not-a-language") is None
    assert pygments_highlighter("x", "") is None


def test_pygments_css_targets_code_blocks() -> None:
    assert ".code-block" in pygments_css()
