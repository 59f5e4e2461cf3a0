"""Debounced renumbering timer."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from mdoverlay.runtime import telemetry

Clock = Callable[[], float]


@dataclass
class PendingRenumber:
    deadline: float
    delay_ms: int
    generation: int


class RenumberScheduler:
    """Single-slot debounce: every ``schedule`` replaces the pending run.

    Nothing fires on its own; the host polls :meth:`process_due` from its event
    loop (a Textual interval, a test, ...), which keeps everything on one
    thread.
    """

    def __init__(
        self,
        callback: Callable[[], object],
        *,
        delay_ms: int = 10,
        clock: Clock = time.monotonic,
    ) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must not be negative")
        self.callback = callback
        self.delay_ms = delay_ms
        self._clock = clock
        self._pending: Optional[PendingRenumber] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self) -> None:
        self._generation += 1
        self._pending = PendingRenumber(
            deadline=self._clock() + self.delay_ms / 1000.0,
            delay_ms=self.delay_ms,
            generation=self._generation,
        )

    def cancel(self) -> None:
        self._pending = None

    def process_due(self, now: Optional[float] = None) -> bool:
        """Run the callback if its deadline passed; return whether it ran."""

        timer = self._pending
        if timer is None:
            return False
        now = self._clock() if now is None else now
        if timer.deadline > now:
            return False
        return self._trigger(timer.generation)

    def flush(self) -> bool:
        """Run a pending callback immediately, regardless of its deadline."""

        if self._pending is None:
            return False
        return self._trigger(self._pending.generation)

    def _trigger(self, generation: int) -> bool:
        timer = self._pending
        if timer is None or timer.generation != generation:
            return False
        self._pending = None
        with telemetry.span(
            name="lists::renumber",
            component=True,
            metadata={"delay_ms": timer.delay_ms},
        ):
            self.callback()
        return True


__all__ = ["RenumberScheduler", "PendingRenumber"]
