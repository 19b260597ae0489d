"""Token classes, source buffers, lexemes, and character helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenClass(Enum):
    WORD = auto()  # any word shape from the input or plain dictionary grammar
    LOWER = auto()  # dictionary entry starting with a lowercase letter
    UPPER = auto()  # dictionary entry starting with an uppercase letter


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class SourceBuffer:
    """Immutable text loaded from a file (``path`` set) or a stream (``path`` None)."""

    text: str
    path: str | None = None

    def __len__(self) -> int:
        return len(self.text)

    @property
    def display_name(self) -> str:
        return self.path if self.path is not None else "<stdin>"


@dataclass(frozen=True, slots=True)
class Lexeme:
    """A span of a SourceBuffer classified by the scanner."""

    buffer: SourceBuffer
    start: int
    end: int
    token_class: TokenClass

    @property
    def text(self) -> str:
        return self.buffer.text[self.start : self.end]

    @property
    def line(self) -> int:
        return line_of(self.buffer.text, self.start)

    @property
    def position(self) -> Position:
        return position_of(self.buffer.text, self.start)


def line_of(text: str, offset: int) -> int:
    """Return the 1-based line containing *offset*."""
    return text.count("\n", 0, offset) + 1


def position_of(text: str, offset: int) -> Position:
    """Return the line/column Position of *offset* in *text*."""
    line_start = text.rfind("\n", 0, offset) + 1
    return Position(line_of(text, offset), offset - line_start + 1, offset)


_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "abcdefghijklmnopqrstuvwxyz",
)


def ascii_lower(text: str) -> str:
    """Lower-case A-Z only, leaving every other character untouched."""
    return text.translate(_ASCII_LOWER)
