"""Match input words against a DictionaryIndex and report the misses."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from wordcheck.grammar import Grammar, input_grammar
from wordcheck.index import CaseMode, DictionaryIndex
from wordcheck.tokens import Lexeme, SourceBuffer, ascii_lower


@dataclass(frozen=True, slots=True)
class MatchReport:
    """An unmatched word, where it was found, and its original spelling."""

    path: str | None
    line: int
    column: int
    word: str

    def format(self) -> str:
        if self.path is None:
            return self.word
        return f"{self.path}({self.line}): {self.word}"


def normalize(word: str, case_mode: CaseMode) -> str:
    """Return the lookup key for *word* under *case_mode*."""
    if case_mode is CaseMode.INSENSITIVE:
        return ascii_lower(word)
    return word


class Checker:
    """Scan buffers with the input grammar and look each word up in the index."""

    def __init__(self, index: DictionaryIndex, grammar: Grammar | None = None) -> None:
        self.index = index
        self.grammar = grammar if grammar is not None else input_grammar()

    def is_known(self, word: str) -> bool:
        return normalize(word, self.index.case_mode) in self.index

    def unmatched(self, buffer: SourceBuffer) -> Iterator[Lexeme]:
        """Yield the lexemes of *buffer* that are not in the index."""
        for lexeme in self.grammar.scan(buffer):
            if not self.is_known(lexeme.text):
                yield lexeme

    def check(self, buffer: SourceBuffer) -> Iterator[MatchReport]:
        """Yield a MatchReport for every unknown word, in source order."""
        for lexeme in self.unmatched(buffer):
            pos = lexeme.position
            yield MatchReport(buffer.path, pos.line, pos.column, lexeme.text)
