"""wordcheck: report words missing from a set of dictionaries."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wordcheck.checker import MatchReport
    from wordcheck.grammar import DictionaryFormat

__version__ = "0.1.0"


def check(
    source: str,
    dictionaries: list[str],
    path: str | None = None,
    word_pattern: str | None = None,
    dictionary_format: DictionaryFormat | None = None,
) -> list[MatchReport]:
    """Check *source* against in-memory dictionary texts and return the misses."""
    from wordcheck.checker import Checker
    from wordcheck.grammar import DictionaryFormat, input_grammar
    from wordcheck.index import build_index
    from wordcheck.tokens import SourceBuffer

    if dictionary_format is None:
        dictionary_format = DictionaryFormat.WORDS
    index = build_index((SourceBuffer(text) for text in dictionaries), dictionary_format)
    checker = Checker(index, input_grammar(word_pattern))
    return list(checker.check(SourceBuffer(source, path)))
