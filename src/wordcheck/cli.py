"""Command-line interface for wordcheck."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from wordcheck.checker import Checker, MatchReport
from wordcheck.errors import ConfigurationError, GrammarViolation, LoadWarning, ResourceError
from wordcheck.grammar import DictionaryFormat, input_grammar, parse_dictionary_format

CONFIG_NAME = "wordcheck.toml"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_files: list[str]
    dictionaries: list[Path]
    word_pattern: str | None
    dictionary_format: DictionaryFormat
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="wordcheck",
        description="Report words that are not in any of the given dictionaries",
    )
    p.add_argument("paths", nargs="*", help="Input files (default: stdin)")
    p.add_argument(
        "-d",
        "--dictionary",
        action="append",
        default=[],
        metavar="FILE",
        help="Whitespace separated word list (repeatable, at least one required)",
    )
    p.add_argument(
        "-w",
        "--word-regex",
        default=None,
        metavar="REGEX",
        help="Pattern for words in the input (default: capitalised, lower or upper case)",
    )
    p.add_argument(
        "--plain",
        action="store_true",
        help="Read dictionaries as plain whitespace separated entries",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--debug", action="store_true", help="Dump index and lexemes to stderr")
    return p


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse argv, allowing input paths and switches in any order."""
    return build_parser().parse_intermixed_args(argv)


def load_config(config_path: Path | None, base_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else base_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"invalid config file {path}: {exc}") from exc


def resolve_options(args: argparse.Namespace, base_dir: Path | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    if base_dir is None:
        base_dir = Path(".")
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, base_dir)
    config_dir = config_path.parent if config_path is not None else base_dir

    # Dictionaries: config paths first, then CLI
    dictionaries: list[Path] = []
    dictionary_format = DictionaryFormat.WORDS
    cfg_dicts = config.get("dictionaries")
    if isinstance(cfg_dicts, dict):
        cfg_paths = cfg_dicts.get("paths")
        if isinstance(cfg_paths, list):
            dictionaries.extend(config_dir / str(p) for p in cfg_paths)
        elif cfg_paths is not None:
            raise ConfigurationError("dictionaries.paths must be a list")
        cfg_format = cfg_dicts.get("format")
        if cfg_format is not None:
            dictionary_format = parse_dictionary_format(str(cfg_format))
    dictionaries.extend(Path(p) for p in args.dictionary)
    if args.plain:
        dictionary_format = DictionaryFormat.PLAIN

    # Word pattern: config < CLI
    word_pattern: str | None = None
    cfg_input = config.get("input")
    if isinstance(cfg_input, dict):
        cfg_rx = cfg_input.get("word_regex")
        if isinstance(cfg_rx, str):
            word_pattern = cfg_rx
        elif cfg_rx is not None:
            raise ConfigurationError("input.word_regex must be a string")
    if args.word_regex is not None:
        word_pattern = args.word_regex

    return CliOptions(
        input_files=list(args.paths),
        dictionaries=dictionaries,
        word_pattern=word_pattern,
        dictionary_format=dictionary_format,
        debug=args.debug,
    )


def build_checker(options: CliOptions) -> Checker:
    """Load the dictionaries and compile the input grammar."""
    from wordcheck.index import build_index
    from wordcheck.sources import load_dictionaries

    buffers = load_dictionaries(options.dictionaries)
    index = build_index(buffers, options.dictionary_format)
    return Checker(index, input_grammar(options.word_pattern))


def check_files(
    options: CliOptions, stdin: TextIO | None = None
) -> tuple[list[MatchReport], list[LoadWarning]]:
    """Check every input (or stdin) and return all reports plus load warnings."""
    from wordcheck.debug import dump_index, dump_lexemes
    from wordcheck.sources import load_inputs, read_stream

    checker = build_checker(options)
    if options.debug:
        dump_index(checker.index)

    if options.input_files:
        buffers, warnings = load_inputs(options.input_files)
    else:
        buffers, warnings = [read_stream(stdin if stdin is not None else sys.stdin)], []

    reports: list[MatchReport] = []
    for buffer in buffers:
        if options.debug:
            dump_lexemes(buffer, checker.grammar)
        reports.extend(checker.check(buffer))
    return reports, warnings


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    args = parse_args(argv)

    try:
        options = resolve_options(args)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        reports, warnings = check_files(options)
    except GrammarViolation as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except (ConfigurationError, ResourceError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for warning in warnings:
        print(warning.format(), file=sys.stderr)

    for report in reports:
        sys.stdout.write(report.format() + "\n")

    return 0
