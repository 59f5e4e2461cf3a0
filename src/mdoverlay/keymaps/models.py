"""Keystrokes, actions and the bindings between them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

MODIFIERS: tuple[str, ...] = ("alt", "ctrl", "meta", "shift")
MOD_PLACEHOLDER = "mod"


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press, e.g. ``ctrl+shift+7``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", self.key.lower())
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key

    def has(self, modifier: str) -> bool:
        return modifier in self.modifiers

    @classmethod
    def parse(cls, spec: str, *, mod: str = "ctrl") -> "KeyStroke":
        """Parse ``"mod+shift+7"``; ``mod`` expands to the platform modifier."""

        parts = [part for part in spec.strip().split("+") if part]
        if not parts:
            raise ValueError("key spec cannot be empty")
        *modifiers, key = parts
        expanded = [mod if m.lower() == MOD_PLACEHOLDER else m for m in modifiers]
        unknown = [m for m in expanded if m.lower() not in MODIFIERS]
        if unknown:
            raise ValueError(f"Unknown modifiers {unknown} in '{spec}'")
        return cls(key, tuple(expanded))


@dataclass(frozen=True, slots=True)
class ActionRef:
    """A named command a binding (or `perform_action`) can run."""

    id: str
    handler: Callable[..., object]
    telemetry_name: str | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        if self.telemetry_name is None:
            object.__setattr__(self, "telemetry_name", self.id)

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a keystroke with an action."""

    id: str
    stroke: KeyStroke
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def key_signature(self) -> str:
        return self.stroke.token


__all__ = ["KeyStroke", "ActionRef", "Binding", "MODIFIERS"]
