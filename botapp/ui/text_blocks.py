"""Reusable helpers for composing plain-text chat messages."""

from __future__ import annotations

from typing import Iterable, List

TELEGRAM_MESSAGE_LIMIT = 4000


class TextBlockBuilder:
    """Utility for building multi-line messages with bullet support."""

    __slots__ = ("_lines",)

    def __init__(self) -> None:
        self._lines: List[str] = []

    def heading(self, text: str) -> "TextBlockBuilder":
        if text:
            self._lines.append(text)
        return self

    def bullet(self, text: str) -> "TextBlockBuilder":
        if text:
            self._lines.append(f"• {text}")
        return self

    def bullets(self, items: Iterable[str]) -> "TextBlockBuilder":
        for item in items:
            self.bullet(item)
        return self

    def blank(self) -> "TextBlockBuilder":
        self._lines.append("")
        return self

    def build(self) -> str:
        return "\n".join(self._lines)


def split_message(text: str, max_length: int = TELEGRAM_MESSAGE_LIMIT) -> List[str]:
    """Split ``text`` on line boundaries into chunks of at most ``max_length``."""

    if len(text) <= max_length:
        return [text]

    chunks: List[str] = []
    current_chunk = ""
    for line in text.split('\n'):
        while len(line) > max_length:
            if current_chunk:
                chunks.append(current_chunk)
                current_chunk = ""
            chunks.append(line[:max_length])
            line = line[max_length:]

        if not current_chunk:
            current_chunk = line
        elif len(current_chunk) + len(line) + 1 <= max_length:
            current_chunk += "\n" + line
        else:
            chunks.append(current_chunk)
            current_chunk = line

    if current_chunk:
        chunks.append(current_chunk)
    return chunks


__all__ = ["TELEGRAM_MESSAGE_LIMIT", "TextBlockBuilder", "split_message"]
