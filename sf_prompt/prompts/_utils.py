"""Shared text helpers for the prompts package."""

from __future__ import annotations

import re
from typing import Any, Iterable

# A leading "-" or "*" bullet marker plus at most one following whitespace char.
_BULLET_MARKER = re.compile(r"^\s*[-*]\s?")

NONE_PROVIDED = "(none provided)"
NOT_PROVIDED = "(not provided)"
NONE_SELECTED = "(none selected)"


def clean(value: Any) -> str:
    """Return *value* as a stripped string; ``None`` becomes ``""``."""
    if value is None:
        return ""
    return str(value).strip()


def bulletize(text: Any) -> list[str]:
    """Split free text into bullet items.

    Each line loses a leading ``-``/``*`` marker and surrounding whitespace;
    lines that end up empty are dropped. Order is preserved.
    """
    raw = clean(text)
    if not raw:
        return []
    items: list[str] = []
    for line in raw.splitlines():
        item = _BULLET_MARKER.sub("", line, count=1).strip()
        if item:
            items.append(item)
    return items


def join_bullets(items: Iterable[str]) -> str:
    """Render *items* as ``- item`` lines, or a single placeholder bullet."""
    lines = [f"- {item}" for item in items]
    if not lines:
        return f"- {NONE_PROVIDED}"
    return "\n".join(lines)
