"""Built-in formatting actions and the shortcuts bound to them."""

from __future__ import annotations

from typing import Iterable, Sequence

from mdoverlay.formatting import commands

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

PLATFORM_MODIFIERS = ("ctrl", "meta")

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(id="toggle_bold", handler=commands.toggle_bold, description="Bold"),
    ActionRef(id="toggle_italic", handler=commands.toggle_italic, description="Italic"),
    ActionRef(id="toggle_code", handler=commands.toggle_code, description="Inline code"),
    ActionRef(id="insert_link", handler=commands.insert_link, description="Insert link"),
    ActionRef(
        id="toggle_bullet_list",
        handler=commands.toggle_bullet_list,
        description="Bullet list",
    ),
    ActionRef(
        id="toggle_numbered_list",
        handler=commands.toggle_numbered_list,
        description="Numbered list",
    ),
    ActionRef(id="toggle_quote", handler=commands.toggle_quote, description="Quote"),
    ActionRef(
        id="toggle_task_list",
        handler=commands.toggle_task_list,
        description="Task list",
    ),
    ActionRef(id="insert_header", handler=commands.insert_header, description="Header"),
    ActionRef(id="toggle_h1", handler=commands.toggle_h1, description="Heading 1"),
    ActionRef(id="toggle_h2", handler=commands.toggle_h2, description="Heading 2"),
    ActionRef(id="toggle_h3", handler=commands.toggle_h3, description="Heading 3"),
)

# (binding id, key spec, action id)
DEFAULT_SHORTCUTS: tuple[tuple[str, str, str], ...] = (
    ("shortcut.bold", "mod+b", "toggle_bold"),
    ("shortcut.italic", "mod+i", "toggle_italic"),
    ("shortcut.link", "mod+k", "insert_link"),
    ("shortcut.numbered_list", "mod+shift+7", "toggle_numbered_list"),
    ("shortcut.bullet_list", "mod+shift+8", "toggle_bullet_list"),
)


def default_bindings(mod: str = "ctrl") -> tuple[Binding, ...]:
    if mod not in PLATFORM_MODIFIERS:
        raise ValueError(f"platform modifier must be one of {PLATFORM_MODIFIERS}")
    return tuple(
        Binding(id=binding_id, stroke=KeyStroke.parse(spec, mod=mod), action_id=action)
        for binding_id, spec, action in DEFAULT_SHORTCUTS
    )


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    mod: str = "ctrl",
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the formatting actions and their shortcuts."""

    excluded = set(exclude_bindings or ())
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in default_bindings(mod):
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_SHORTCUTS",
    "PLATFORM_MODIFIERS",
    "default_bindings",
    "load_default_keymaps",
]
