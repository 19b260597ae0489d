"""--debug dumps of the index and scanned lexemes to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from wordcheck.grammar import Grammar
from wordcheck.index import DictionaryIndex
from wordcheck.tokens import SourceBuffer


def dump_index(index: DictionaryIndex, *, file: TextIO = sys.stderr) -> None:
    """Print the case mode and size of *index* to *file*."""
    mode = index.case_mode.name.lower()
    file.write(f"Index {len(index)} words, case {mode}\n")
    if index.words:
        file.write(f"  first {index.words[0]!r}\n")
        file.write(f"  last {index.words[-1]!r}\n")


def dump_lexemes(buffer: SourceBuffer, grammar: Grammar, *, file: TextIO = sys.stderr) -> None:
    """Print one line per lexeme the grammar finds in *buffer*."""
    file.write(f"Buffer {buffer.display_name}\n")
    for lexeme in grammar.scan(buffer):
        pos = lexeme.position
        file.write(
            f"  {pos.line}:{pos.column} {lexeme.token_class.name} {lexeme.text!r}\n"
        )
