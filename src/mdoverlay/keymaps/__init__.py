"""Keyboard shortcut registry and the default formatting bindings."""

from .defaults import DEFAULT_ACTIONS, default_bindings, load_default_keymaps
from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats

__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "DEFAULT_ACTIONS",
    "default_bindings",
    "load_default_keymaps",
]
