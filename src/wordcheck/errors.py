"""Error types, with formatted source context for grammar violations."""

from __future__ import annotations

from dataclasses import dataclass

from wordcheck.tokens import Position


class ConfigurationError(Exception):
    """Raised when the run cannot proceed with the given options."""


class ResourceError(Exception):
    """Raised when a required file (a dictionary) cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"failed to open {path}: {reason}")


def format_context(
    message: str,
    position: Position,
    source: str,
    filename: str,
    length: int = 1,
) -> str:
    """Render an ``error:`` header, the source line at *position*, and carets.

    The line is cut from *source* around the offset, so only ``\\n`` ends a
    line, matching how lines are numbered everywhere else.
    """
    offset = position.offset
    line_start = source.rfind("\n", 0, offset) + 1
    line_end = source.find("\n", offset)
    if line_end == -1:
        line_end = len(source)
    source_line = source[line_start:line_end].rstrip("\r")

    col = position.column
    # At least one caret, and none past the end of the line
    carets = "^" * max(1, min(length, len(source_line) - col + 1))
    pad = " " * (col - 1)

    line_num = str(position.line)
    gutter_width = len(line_num) + 1
    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{position.line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


class GrammarViolation(Exception):
    """Raised on the first character a strict grammar cannot classify."""

    def __init__(
        self,
        message: str,
        position: Position,
        source: str,
        filename: str | None = None,
    ) -> None:
        self.message = message
        self.position = position
        self.source = source
        self.filename = filename
        super().__init__(self.format())

    @property
    def character(self) -> str:
        return self.source[self.position.offset : self.position.offset + 1]

    def format(self, filename: str | None = None) -> str:
        if filename is None:
            filename = self.filename or "<dictionary>"
        return format_context(
            self.message, self.position, self.source, filename, len(self.character)
        )


@dataclass(frozen=True, slots=True)
class LoadWarning:
    """A non-fatal problem: an input file that was skipped."""

    path: str
    reason: str

    def format(self) -> str:
        return f"warning: failed to open {self.path}: {self.reason}"
