"""Sorted dictionary index and case-mode inference."""

from __future__ import annotations

import bisect
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto

from wordcheck.errors import ConfigurationError
from wordcheck.grammar import DictionaryFormat, dictionary_grammar
from wordcheck.tokens import SourceBuffer, TokenClass


class CaseMode(Enum):
    INSENSITIVE = auto()
    SENSITIVE = auto()


@dataclass(frozen=True, slots=True)
class DictionaryIndex:
    """All dictionary words, sorted ascending, plus the run-wide case mode."""

    words: tuple[str, ...]
    case_mode: CaseMode = CaseMode.INSENSITIVE

    def __len__(self) -> int:
        return len(self.words)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        i = bisect.bisect_left(self.words, key)
        return i < len(self.words) and self.words[i] == key

    @property
    def case_sensitive(self) -> bool:
        return self.case_mode is CaseMode.SENSITIVE


def build_index(
    dictionaries: Iterable[SourceBuffer],
    fmt: DictionaryFormat = DictionaryFormat.WORDS,
) -> DictionaryIndex:
    """Merge dictionary buffers into one sorted index.

    Any entry starting with an uppercase letter (words format only) makes the
    whole run case-sensitive. Entries are stored exactly as written; case
    folding only ever happens on the input side.
    """
    grammar = dictionary_grammar(fmt)
    case_mode = CaseMode.INSENSITIVE
    words: list[str] = []
    seen_any = False

    for buffer in dictionaries:
        seen_any = True
        for lexeme in grammar.scan(buffer):
            if lexeme.token_class is TokenClass.UPPER:
                case_mode = CaseMode.SENSITIVE
            words.append(lexeme.text)

    if not seen_any:
        raise ConfigurationError("no dictionaries specified")

    words.sort()
    return DictionaryIndex(tuple(words), case_mode)
