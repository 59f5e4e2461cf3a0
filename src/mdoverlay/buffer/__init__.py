"""Host buffer/selection primitives and the in-memory reference surface."""

from .buffer import Buffer, BufferDelta, HistoryEntry, Transaction
from .positions import line_bounds, location_from_offset, offset_from_location
from .state import Location, SelectionRange
from .surface import SelectionError, TextSurface, apply_replacement, is_read_only
from .validation import ensure_selection

__all__ = [
    "Buffer",
    "BufferDelta",
    "HistoryEntry",
    "Transaction",
    "Location",
    "SelectionRange",
    "SelectionError",
    "TextSurface",
    "apply_replacement",
    "ensure_selection",
    "is_read_only",
    "line_bounds",
    "location_from_offset",
    "offset_from_location",
]
