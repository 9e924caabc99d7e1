"""@mention parsing: extraction on submit, active token + in-place insert while typing."""

from __future__ import annotations

import re
from typing import Optional

MENTION_PATTERN = re.compile(r"@(\w+)")
# Unterminated "@token" right before the cursor (token may be empty)
ACTIVE_MENTION_PATTERN = re.compile(r"@(\w*)$")


def extract_mentions(text: str) -> list[str]:
    """Handles mentioned in text, deduplicated case-insensitively, first occurrence order."""
    seen: set[str] = set()
    handles: list[str] = []
    for match in MENTION_PATTERN.finditer(text or ""):
        handle = match.group(1)
        key = handle.lower()
        if key not in seen:
            seen.add(key)
            handles.append(handle)
    return handles


def _clamp_cursor(text: str, cursor: Optional[int]) -> int:
    if cursor is None:
        return len(text)
    return max(0, min(cursor, len(text)))


def active_mention_query(text: str, cursor: Optional[int] = None) -> Optional[str]:
    """Lowercased partial handle being typed at the cursor, or None if not in a mention."""
    text = text or ""
    match = ACTIVE_MENTION_PATTERN.search(text[: _clamp_cursor(text, cursor)])
    if match is None:
        return None
    return match.group(1).lower()


def insert_mention(text: str, cursor: Optional[int], username: str) -> tuple[str, int]:
    """Replace the partial @token before the cursor with "@username ".

    Works on the cursor offset, not a search over the whole text, so an
    identical token elsewhere in the text is left alone. Returns the new text
    and the cursor position just after the inserted handle and space.
    """
    text = text or ""
    pos = _clamp_cursor(text, cursor)
    before, after = text[:pos], text[pos:]
    match = ACTIVE_MENTION_PATTERN.search(before)
    if match is None:
        inserted = f"@{username} "
        return before + inserted + after, pos + len(inserted)
    new_before = before[: match.start()] + f"@{username} "
    return new_before + after, len(new_before)
