"""URL allowlist applied to every rendered link target."""

from __future__ import annotations

SAFE_PROTOCOLS: tuple[str, ...] = (
    "http://",
    "https://",
    "mailto:",
    "ftp://",
    "ftps://",
)
RELATIVE_PREFIXES: tuple[str, ...] = ("/", "#", "?", ".")

BLOCKED_URL = "#"


def is_relative_url(url: str) -> bool:
    if url.startswith(RELATIVE_PREFIXES):
        return True
    return ":" not in url and "//" not in url


def sanitize_url(url: str) -> str:
    """Return ``url`` untouched when it is safe to link to, else ``"#"``."""

    trimmed = url.strip()
    if trimmed.lower().startswith(SAFE_PROTOCOLS) or is_relative_url(trimmed):
        return url
    return BLOCKED_URL


__all__ = ["SAFE_PROTOCOLS", "BLOCKED_URL", "is_relative_url", "sanitize_url"]
