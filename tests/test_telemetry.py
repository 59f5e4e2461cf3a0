from __future__ import annotations

from contextlib import contextmanager
from types import SimpleNamespace
from typing import Any, Dict, List, Tuple

import pytest

from mdoverlay.runtime import telemetry


class FakeLogger:
    def __init__(self) -> None:
        self.context: Dict[str, str] = {}
        self.lines: List[Tuple[str, str, Any]] = []
        self.profiles: List[str] = []
        self.components: List[str] = []

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def profile(self, name: str):
        self.profiles.append(name)
        yield

    @contextmanager
    def track_component(self, name: str):
        self.components.append(name)
        yield

    def error_with(self, message: str, pairs: Any) -> None:
        self.lines.append(("error", message, dict(pairs)))

    def info(self, message: str) -> None:
        self.lines.append(("info", message, None))


class FakeConfig:
    def __init__(self) -> None:
        self.calls: Dict[str, Any] = {}

    def __getattr__(self, name: str):
        if not name.startswith("with_"):
            raise AttributeError(name)
        return lambda value: self.calls.__setitem__(name, value)


def make_logger(monkeypatch: pytest.MonkeyPatch) -> FakeLogger:
    log = FakeLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: log)
    return log


def test_span_profiles_and_tracks_component(monkeypatch: pytest.MonkeyPatch) -> None:
    log = make_logger(monkeypatch)

    with telemetry.span("render", component=True, metadata={"chars": 3}) as handle:
        assert log.context == {"chars": "3"}
        handle.add_metadata("lines", 1)

    assert log.profiles == ["render"]
    assert log.components == ["render"]
    assert log.context == {}
    assert log.lines == []


def test_span_logs_failure_and_reraises(monkeypatch: pytest.MonkeyPatch) -> None:
    log = make_logger(monkeypatch)

    with pytest.raises(RuntimeError):
        with telemetry.span("actions::boom", component="actions", metadata={"id": "x"}):
            raise RuntimeError("boom")

    level, message, payload = log.lines[0]
    assert (level, message) == ("error", "span::fail")
    assert payload["reason"] == "boom"
    assert payload["component"] == "actions"
    assert payload["id"] == "x"
    assert log.context == {}


def test_span_without_component(monkeypatch: pytest.MonkeyPatch) -> None:
    log = make_logger(monkeypatch)

    with telemetry.span("plain", component=False):
        pass

    assert log.components == []


def test_record_event_falls_back_to_plain_method(monkeypatch: pytest.MonkeyPatch) -> None:
    log = make_logger(monkeypatch)

    telemetry.record_event("renumbered", data={"lines": 2})

    level, message, _ = log.lines[0]
    assert level == "info"
    assert message.startswith("event::renumbered")
    assert "'lines': 2" in message


def test_record_event_rejects_unknown_level(monkeypatch: pytest.MonkeyPatch) -> None:
    make_logger(monkeypatch)

    with pytest.raises(ValueError):
        telemetry.record_event("x", level="loud")


def test_build_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(telemetry, "tl", SimpleNamespace(Config=FakeConfig))
    monkeypatch.setenv("MDOVERLAY_LOG_LEVEL", "debug")
    monkeypatch.setenv("MDOVERLAY_NO_COLOR", "1")
    monkeypatch.setenv("MDOVERLAY_LOG_FILE", "edits.log")
    monkeypatch.setenv("MDOVERLAY_LOG_BUFFERED", "yes")
    monkeypatch.setenv("MDOVERLAY_LOG_BUFFER_SIZE", "64")

    calls = telemetry.build_config().calls

    assert calls["with_min_level"] == "DEBUG"
    assert calls["with_console_output"] is True
    assert calls["with_colored_output"] is False
    assert calls["with_file_output"] == "edits.log"
    assert calls["with_buffer_size"] == 64
    assert calls["with_profiling"] is True
    assert "with_json_format" not in calls


def test_build_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(telemetry, "tl", SimpleNamespace(Config=FakeConfig))
    for name in ("LOG_LEVEL", "DISABLE_CONSOLE", "LOG_FILE", "LOG_BUFFERED", "LOG_JSON"):
        monkeypatch.delenv(f"MDOVERLAY_{name}", raising=False)

    calls = telemetry.build_config().calls

    assert calls["with_min_level"] == "WARNING"
    assert "with_file_output" not in calls
    assert "with_buffering" not in calls
