"""Test matching, case folding, line numbers, and report formatting."""

from __future__ import annotations

import wordcheck
from wordcheck.checker import Checker, MatchReport, normalize
from wordcheck.grammar import DictionaryFormat, input_grammar
from wordcheck.index import CaseMode
from wordcheck.tokens import SourceBuffer


class TestLineNumbers:
    def test_unknown_word_on_third_line(self, misses):
        reports = misses("alpha\nbeta\nunknownword\n", "alpha beta", path="in.txt")
        assert len(reports) == 1
        assert reports[0].line == 3
        assert reports[0].word == "unknownword"

    def test_first_line_is_one(self, misses):
        reports = misses("oops", "alpha")
        assert reports[0].line == 1
        assert reports[0].column == 1

    def test_blank_lines_counted(self, misses):
        reports = misses("\n\n\n  zzz", "alpha")
        assert reports[0].line == 4
        assert reports[0].column == 3

    def test_order_of_encounter(self, misses):
        reports = misses("bb aa\ncc aa", "aa")
        assert [(r.word, r.line) for r in reports] == [("bb", 1), ("cc", 2)]

    def test_repeated_miss_reported_each_time(self, misses):
        reports = misses("zz zz", "aa")
        assert [r.word for r in reports] == ["zz", "zz"]


class TestCaseFolding:
    def test_insensitive_folds_input(self, misses):
        assert misses("Alpha ALPHA alpha", "alpha") == []

    def test_sensitive_reports_wrong_case(self, misses):
        reports = misses("hello", "Hello")
        assert [r.word for r in reports] == ["hello"]

    def test_sensitive_matches_exact_case(self, misses):
        assert misses("Hello", "Hello") == []

    def test_sensitivity_is_global(self, misses):
        # A capitalized entry makes "Cat" unknown even though "cat" is listed
        reports = misses("Cat cat", "cat Dog")
        assert [r.word for r in reports] == ["Cat"]

    def test_report_keeps_original_spelling(self, misses):
        reports = misses("NASSA", "nasa")
        assert reports[0].word == "NASSA"

    def test_plain_dictionary_folds_input(self, misses):
        assert misses("Hello HELLO", "hello", fmt=DictionaryFormat.PLAIN) == []

    def test_plain_dictionary_uppercase_entry_unreachable(self, misses):
        # Plain dictionaries are matched case-insensitively against folded input
        reports = misses("Dog", "Dog", fmt=DictionaryFormat.PLAIN)
        assert [r.word for r in reports] == ["Dog"]


class TestNormalize:
    def test_insensitive(self):
        assert normalize("MiXeD-Case", CaseMode.INSENSITIVE) == "mixed-case"

    def test_sensitive(self):
        assert normalize("MiXeD", CaseMode.SENSITIVE) == "MiXeD"

    def test_ascii_only(self):
        assert normalize("ÉCOLE", CaseMode.INSENSITIVE) == "École"


class TestMembership:
    def test_round_trip(self, index_of):
        dictionary = "the quick brown fox jumps over lazy dog"
        checker = Checker(index_of(dictionary))
        text = "The quick brown fox\njumps over the lazy dog."
        assert list(checker.check(SourceBuffer(text))) == []

    def test_merge_matches_single(self, misses):
        text = "alpha beta gamma"
        assert misses(text, "alpha", "beta") == misses(text, "alpha beta")

    def test_is_known(self, index_of):
        checker = Checker(index_of("alpha"))
        assert checker.is_known("ALPHA")
        assert not checker.is_known("beta")

    def test_custom_grammar(self, index_of):
        checker = Checker(index_of("alpha"), input_grammar(r"[a-z]+[0-9]+"))
        reports = list(checker.check(SourceBuffer("alpha x1 alpha")))
        assert [r.word for r in reports] == ["x1"]


class TestFormatting:
    def test_stream_has_no_prefix(self):
        assert MatchReport(None, 3, 1, "wrod").format() == "wrod"

    def test_file_has_path_and_line(self):
        assert MatchReport("doc.txt", 3, 1, "wrod").format() == "doc.txt(3): wrod"

    def test_same_word_stream_vs_file(self, misses):
        stream = misses("wrod", "word")
        named = misses("wrod", "word", path="notes.txt")
        assert [r.format() for r in stream] == ["wrod"]
        assert [r.format() for r in named] == ["notes.txt(1): wrod"]


class TestCheckApi:
    def test_check(self):
        reports = wordcheck.check("alpha\nbeta\nunknownword\n", ["alpha beta"], path="x.txt")
        assert [r.format() for r in reports] == ["x.txt(3): unknownword"]

    def test_check_word_pattern(self):
        reports = wordcheck.check("abc 12", ["abc"], word_pattern=r"[0-9]+")
        assert [r.word for r in reports] == ["12"]

    def test_check_plain(self):
        reports = wordcheck.check(
            "c++ rocks", ["c++"], word_pattern=r"\S+", dictionary_format=DictionaryFormat.PLAIN
        )
        assert [r.word for r in reports] == ["rocks"]
