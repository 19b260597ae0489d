"""Loading dictionaries and input text into SourceBuffers."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from wordcheck.errors import LoadWarning, ResourceError
from wordcheck.tokens import SourceBuffer


def _decode(data: bytes) -> str:
    # No newline translation: line numbers count "\n" characters only
    return data.decode("utf-8", errors="replace")


def _read(path: Path) -> str:
    return _decode(path.read_bytes())


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


def load_dictionaries(paths: Iterable[str | Path]) -> list[SourceBuffer]:
    """Read every dictionary. The first unreadable one raises ResourceError."""
    buffers: list[SourceBuffer] = []
    for p in paths:
        try:
            text = _read(Path(p))
        except OSError as exc:
            raise ResourceError(str(p), _reason(exc)) from exc
        buffers.append(SourceBuffer(text, str(p)))
    return buffers


def load_inputs(paths: Iterable[str | Path]) -> tuple[list[SourceBuffer], list[LoadWarning]]:
    """Read every input file, skipping (with a warning) those that fail."""
    buffers: list[SourceBuffer] = []
    warnings: list[LoadWarning] = []
    for p in paths:
        try:
            text = _read(Path(p))
        except OSError as exc:
            warnings.append(LoadWarning(str(p), _reason(exc)))
            continue
        buffers.append(SourceBuffer(text, str(p)))
    return buffers, warnings


def read_stream(stream: TextIO) -> SourceBuffer:
    """Read all of *stream* into an unnamed buffer.

    Streams backed by a binary buffer (such as ``sys.stdin``) are decoded the
    same way as files; plain text streams are read as they are.
    """
    raw = getattr(stream, "buffer", None)
    if raw is not None:
        return SourceBuffer(_decode(raw.read()))
    return SourceBuffer(stream.read())
