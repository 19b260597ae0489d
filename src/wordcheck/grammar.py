"""Lexical grammars and the scanner that runs them over a SourceBuffer."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from wordcheck.errors import ConfigurationError, GrammarViolation
from wordcheck.tokens import Lexeme, SourceBuffer, TokenClass, position_of

# Capitalized, all-lowercase, and all-uppercase words. A single hyphen or
# apostrophe may join letter groups.
DEFAULT_WORD_PATTERNS = (
    r"[A-Z][a-z]*(?:[-'][A-Z]?[a-z]+)*",
    r"[a-z](?:[-']?[a-z])*",
    r"[A-Z](?:[-']?[A-Z])*",
)
DEFAULT_WORD_PATTERN = "|".join(DEFAULT_WORD_PATTERNS)

LOWER_ENTRY_PATTERN = r"[a-z](?:[-']?[a-z])*"
UPPER_ENTRY_PATTERN = r"[A-Z](?:[-']?[A-Za-z])*"
PLAIN_ENTRY_PATTERN = r"\S+"
WHITESPACE_PATTERN = r"\s+"
ANY_CHAR_PATTERN = r"(?s:.)"

_GLOBAL_FLAGS = re.compile(r"(?:\(\?[aiLmsux]+\))+")


class DictionaryFormat(Enum):
    WORDS = "words"  # classifying, strict: letters, hyphens, apostrophes only
    PLAIN = "plain"  # whitespace-separated entries, anything goes


@dataclass(frozen=True, slots=True)
class Rule:
    """A pattern and the token class it yields (None means skip)."""

    pattern: str
    token_class: TokenClass | None


@dataclass(frozen=True, slots=True)
class Cursor:
    """Scan position: a buffer and the offset of the next unread character."""

    buffer: SourceBuffer
    offset: int = 0

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.buffer)


class Grammar:
    """Ordered rules compiled into a longest-match scanner.

    At each position every rule is tried; the longest non-empty match wins
    and ties go to the rule declared first. Skip rules consume input without
    producing a lexeme. If no rule matches, the grammar is strict and
    GrammarViolation is raised; grammars meant to accept anything end with a
    catch-all skip rule.
    """

    def __init__(self, rules: Iterable[Rule], name: str = "input") -> None:
        self.rules = tuple(rules)
        self.name = name
        self._compiled: list[tuple[re.Pattern[str], TokenClass | None]] = []
        for rule in self.rules:
            try:
                rx = re.compile(rule.pattern, re.ASCII)
            except re.error as exc:
                raise ConfigurationError(f"invalid pattern {rule.pattern!r}: {exc}") from exc
            self._compiled.append((rx, rule.token_class))

    def __repr__(self) -> str:
        return f"Grammar({self.name!r}, {len(self.rules)} rules)"

    def next_lexeme(self, cursor: Cursor) -> tuple[Lexeme, Cursor] | None:
        """Return the next lexeme at or after *cursor* and the advanced cursor.

        Returns None once only skipped input (or nothing) remains.
        """
        buffer = cursor.buffer
        text = buffer.text
        pos = cursor.offset
        size = len(text)

        while pos < size:
            best_end = pos
            best_class: TokenClass | None = None
            for rx, token_class in self._compiled:
                m = rx.match(text, pos)
                if m is not None and m.end() > best_end:
                    best_end = m.end()
                    best_class = token_class

            if best_end == pos:
                raise GrammarViolation(
                    f"unexpected character {text[pos]!r} in {self.name}",
                    position_of(text, pos),
                    text,
                    buffer.path,
                )

            if best_class is None:
                pos = best_end
                continue

            return Lexeme(buffer, pos, best_end, best_class), Cursor(buffer, best_end)

        return None

    def scan(self, buffer: SourceBuffer) -> Iterator[Lexeme]:
        """Lazily yield every lexeme in *buffer*."""
        cursor = Cursor(buffer)
        while True:
            step = self.next_lexeme(cursor)
            if step is None:
                return
            lexeme, cursor = step
            yield lexeme


def split_alternatives(pattern: str) -> list[str]:
    """Split *pattern* on its top-level ``|`` operators.

    Alternatives inside groups and character classes, and escaped bars, are
    left alone. Each piece becomes its own rule so that the longest
    alternative wins instead of the leftmost one.

    Leading global flags such as ``(?i)`` apply to the whole pattern, so they
    are repeated at the front of every piece.
    """
    flags = _GLOBAL_FLAGS.match(pattern)
    prefix = flags.group(0) if flags else ""
    pattern = pattern[len(prefix) :]

    pieces: list[str] = []
    current: list[str] = []
    depth = 0
    in_class = False
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            current.append(pattern[i : i + 2])
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
            # A ']' straight after '[' or '[^' is a literal member
            j = i + 1
            if j < len(pattern) and pattern[j] == "^":
                j += 1
            if j < len(pattern) and pattern[j] == "]":
                current.append(pattern[i : j + 1])
                i = j + 1
                continue
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "|" and depth == 0:
            pieces.append("".join(current))
            current = []
            i += 1
            continue
        current.append(ch)
        i += 1
    pieces.append("".join(current))
    return [prefix + piece for piece in pieces]


def input_grammar(word_pattern: str | None = None) -> Grammar:
    """Build the grammar for text being checked.

    *word_pattern* replaces the default capitalized/lowercase/uppercase word
    shapes. Everything that is not a word is skipped one character at a time.
    """
    if word_pattern is None:
        patterns: list[str] = list(DEFAULT_WORD_PATTERNS)
    else:
        try:
            re.compile(word_pattern, re.ASCII)
        except re.error as exc:
            raise ConfigurationError(f"invalid word pattern {word_pattern!r}: {exc}") from exc
        patterns = split_alternatives(word_pattern)
        try:
            for piece in patterns:
                re.compile(piece, re.ASCII)
        except re.error:
            # e.g. a back-reference into another alternative
            patterns = [word_pattern]

    rules = [Rule(p, TokenClass.WORD) for p in patterns]
    rules.append(Rule(ANY_CHAR_PATTERN, None))
    return Grammar(rules, name="input")


def dictionary_grammar(fmt: DictionaryFormat = DictionaryFormat.WORDS) -> Grammar:
    """Build the grammar used to read dictionary entries."""
    if fmt is DictionaryFormat.PLAIN:
        rules = [
            Rule(PLAIN_ENTRY_PATTERN, TokenClass.WORD),
            Rule(WHITESPACE_PATTERN, None),
        ]
    else:
        rules = [
            Rule(LOWER_ENTRY_PATTERN, TokenClass.LOWER),
            Rule(UPPER_ENTRY_PATTERN, TokenClass.UPPER),
            Rule(WHITESPACE_PATTERN, None),
        ]
    return Grammar(rules, name="dictionary")


def parse_dictionary_format(value: str) -> DictionaryFormat:
    """Map a config/CLI string onto a DictionaryFormat."""
    try:
        return DictionaryFormat(value)
    except ValueError:
        choices = ", ".join(f.value for f in DictionaryFormat)
        raise ConfigurationError(
            f"unknown dictionary format {value!r} (expected one of: {choices})"
        ) from None
