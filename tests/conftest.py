"""Shared test fixtures and helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from wordcheck.checker import Checker, MatchReport
from wordcheck.grammar import DictionaryFormat, Grammar, input_grammar
from wordcheck.index import DictionaryIndex, build_index
from wordcheck.tokens import SourceBuffer


@pytest.fixture
def words():
    """Return a helper that scans text with a grammar and returns the word texts."""

    def _words(source: str, grammar: Grammar | None = None) -> list[str]:
        g = grammar if grammar is not None else input_grammar()
        return [lex.text for lex in g.scan(SourceBuffer(source))]

    return _words


@pytest.fixture
def index_of():
    """Return a helper that builds a DictionaryIndex from dictionary texts."""

    def _index(*texts: str, fmt: DictionaryFormat = DictionaryFormat.WORDS) -> DictionaryIndex:
        return build_index([SourceBuffer(t, f"dict{i}.txt") for i, t in enumerate(texts)], fmt)

    return _index


@pytest.fixture
def misses(index_of):
    """Return a helper that checks source against dictionaries and returns reports."""

    def _misses(
        source: str,
        *dictionaries: str,
        path: str | None = None,
        fmt: DictionaryFormat = DictionaryFormat.WORDS,
    ) -> list[MatchReport]:
        checker = Checker(index_of(*dictionaries, fmt=fmt))
        return list(checker.check(SourceBuffer(source, path)))

    return _misses


@pytest.fixture
def write_file(tmp_path: Path):
    """Return a helper that writes text to a file under tmp_path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
