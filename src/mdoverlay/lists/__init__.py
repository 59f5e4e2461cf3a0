"""List continuation on Enter and deferred ordered-list renumbering."""

from .continuation import (
    LIST_PATTERNS,
    Continuation,
    ListContext,
    continue_list,
    create_new_list_item,
    get_list_context,
    renumber_lists,
    renumber_with_cursor,
)
from .scheduler import RenumberScheduler

__all__ = [
    "LIST_PATTERNS",
    "Continuation",
    "ListContext",
    "RenumberScheduler",
    "continue_list",
    "create_new_list_item",
    "get_list_context",
    "renumber_lists",
    "renumber_with_cursor",
]
