"""Editor options with environment-driven defaults."""

from __future__ import annotations

import sys
from dataclasses import dataclass

from mdoverlay.parser.config import ParserConfig, Highlighter, CustomSyntax
from mdoverlay.runtime import telemetry


def default_platform_mod() -> str:
    return "meta" if sys.platform == "darwin" else "ctrl"


@dataclass(slots=True)
class EditorOptions:
    """Behaviour switches for :class:`~mdoverlay.editor.MarkdownEditor`."""

    smart_lists: bool = True
    show_active_line_raw: bool = False
    preview_mode: bool = False
    renumber_delay_ms: int = 10
    indent: str = "  "
    platform_mod: str = "ctrl"

    def __post_init__(self) -> None:
        if self.platform_mod not in ("ctrl", "meta"):
            raise ValueError("platform_mod must be 'ctrl' or 'meta'")
        if self.renumber_delay_ms < 0:
            raise ValueError("renumber_delay_ms must not be negative")

    @classmethod
    def from_env(cls, **overrides: object) -> "EditorOptions":
        """Read ``MDOVERLAY_*`` switches; keyword overrides win."""

        values: dict[str, object] = {
            "smart_lists": telemetry.env_flag("SMART_LISTS", True),
            "show_active_line_raw": telemetry.env_flag("SHOW_ACTIVE_LINE_RAW", False),
            "preview_mode": telemetry.env_flag("PREVIEW", False),
            "renumber_delay_ms": telemetry.env_int("RENUMBER_DELAY_MS", 10),
            "platform_mod": default_platform_mod(),
        }
        values.update(overrides)
        return cls(**values)  # type: ignore[arg-type]

    def parser_config(
        self,
        *,
        highlighter: Highlighter | None = None,
        custom_syntax: CustomSyntax | None = None,
    ) -> ParserConfig:
        return ParserConfig(
            highlighter=highlighter,
            custom_syntax=custom_syntax,
            preview_mode=self.preview_mode,
            show_active_line_raw=self.show_active_line_raw,
        )


__all__ = ["EditorOptions", "default_platform_mod"]
