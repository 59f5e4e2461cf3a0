from __future__ import annotations

from typing import Any, Dict, List, Tuple

import pytest

from mdoverlay.runtime import telemetry

RecordedEvent = Tuple[str, str, Dict[str, Any]]


@pytest.fixture
def recorded_events(monkeypatch: pytest.MonkeyPatch) -> List[RecordedEvent]:
    events: List[RecordedEvent] = []

    def fake_record_event(
        name: str,
        *,
        level: str = "info",
        data: Dict[str, Any] | None = None,
        logger_name: str | None = None,
    ) -> None:
        del logger_name
        events.append((name, str(level), dict(data or {})))

    monkeypatch.setattr(telemetry, "record_event", fake_record_event)
    return events


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
