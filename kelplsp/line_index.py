"""Conversion between text offsets and editor line/UTF-16 column positions."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    """A zero-based line and UTF-16 column."""

    line: int
    character: int


def _utf16_length(text: str) -> int:
    """Number of UTF-16 code units needed to encode the text."""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def normalize_line_endings(text: str) -> str:
    """Turn CRLF and lone CR line endings into LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


class LineIndex:
    """Start offsets of every line of a text."""

    def __init__(self, text: str) -> None:
        starts = [0]
        starts.extend(i + 1 for i, char in enumerate(text) if char == "\n")
        self.line_starts: tuple[int, ...] = tuple(starts)

    def offset_to_position(self, offset: int, text: str) -> Position:
        """Return the position of a character offset, clamped to the text's end."""
        if offset < 0:
            raise ValueError("offset must not be negative")
        clamped = min(offset, len(text))
        line = bisect_right(self.line_starts, clamped) - 1
        line_start = self.line_starts[line]
        return Position(line, _utf16_length(text[line_start:clamped]))

    def position_to_offset(self, position: Position, text: str) -> int | None:
        """Return the character offset of a position, or None if it is not on a character boundary of its line."""
        if position.line < 0 or position.character < 0:
            raise ValueError("position must not be negative")
        if position.line >= len(self.line_starts):
            return len(text)

        line_start = self.line_starts[position.line]
        next_line = position.line + 1
        line_end = (
            self.line_starts[next_line] if next_line < len(self.line_starts) else len(text)
        )

        column = 0
        for index, char in enumerate(text[line_start:line_end]):
            if column == position.character:
                return line_start + index
            if column > position.character:
                return None
            column += _utf16_length(char)

        if column == position.character:
            return line_end
        return None