"""Declarative descriptors for every formatting command."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Mapping


@dataclass(frozen=True, slots=True)
class FormatStyle:
    """How one command wraps, prefixes or templates a selection."""

    prefix: str = ""
    suffix: str = ""
    block_prefix: str = ""
    block_suffix: str = ""
    multiline: bool = False
    replace_next: str = ""
    prefix_space: bool = False
    scan_for: str = ""
    surround_with_newlines: bool = False
    ordered_list: bool = False
    unordered_list: bool = False
    trim_first: bool = False

    def with_suffix(self, suffix: str, *, replace_next: str = "") -> "FormatStyle":
        return replace(self, suffix=suffix, replace_next=replace_next)


FORMATS: Mapping[str, FormatStyle] = {
    "bold": FormatStyle(prefix="**", suffix="**", trim_first=True),
    "italic": FormatStyle(prefix="_", suffix="_", trim_first=True),
    "code": FormatStyle(prefix="`", suffix="`", block_prefix="```", block_suffix="```"),
    "link": FormatStyle(
        prefix="[", suffix="](url)", replace_next="url", scan_for=r"https?://"
    ),
    "bullet_list": FormatStyle(prefix="- ", multiline=True, unordered_list=True),
    "numbered_list": FormatStyle(prefix="1. ", multiline=True, ordered_list=True),
    "quote": FormatStyle(prefix="> ", multiline=True, surround_with_newlines=True),
    "task_list": FormatStyle(
        prefix="- [ ] ", multiline=True, surround_with_newlines=True
    ),
    "header1": FormatStyle(prefix="# "),
    "header2": FormatStyle(prefix="## "),
    "header3": FormatStyle(prefix="### "),
    "header4": FormatStyle(prefix="#### "),
    "header5": FormatStyle(prefix="##### "),
    "header6": FormatStyle(prefix="###### "),
}


def header_style(level: int) -> FormatStyle:
    if level < 1 or level > 6:
        level = 1
    return FORMATS[f"header{level}"]


__all__ = ["FormatStyle", "FORMATS", "header_style"]
