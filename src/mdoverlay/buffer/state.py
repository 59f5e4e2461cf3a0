"""Selection ranges expressed as character offsets into the host buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Location = Tuple[int, int]  # (row, column)


@dataclass(frozen=True, slots=True)
class SelectionRange:
    """``start``/``end`` offsets; ``start <= end`` once normalized."""

    start: int = 0
    end: int = 0

    @classmethod
    def caret(cls, offset: int) -> "SelectionRange":
        return cls(offset, offset)

    @property
    def is_collapsed(self) -> bool:
        return self.start == self.end

    def normalized(self) -> "SelectionRange":
        if self.start <= self.end:
            return self
        return SelectionRange(self.end, self.start)

    def clamped(self, length: int) -> "SelectionRange":
        start, end = self.normalized()
        return SelectionRange(max(0, min(start, length)), max(0, min(end, length)))

    def __iter__(self):
        yield self.start
        yield self.end
