"""Command line interface for poet."""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from tabulate import tabulate

from .config import DEFAULT_SONNET_SCHEME, AnalysisConfig
from .dictionary import ParseError
from .engine import AnalysisResult, Engine
from .forms import FORM_NAMES, SONNET_SCHEMES
from .models import RhymeLookup
from .resolvers import MappingResolver, parse_datamuse_words
from .sources import download_cmudict, load_store

LOGGER = logging.getLogger("poet")

DICT_FILENAME = "cmudict.dict"
USERDICT_FILENAME = "userdict.dict"


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _default_dictionary_path() -> Path:
    """Resolve the dictionary file: ``$POET_DICT``, ``./cmudict.dict``, then the XDG data dir."""

    env_path = os.environ.get("POET_DICT")
    if env_path:
        return Path(env_path)
    local = Path.cwd() / DICT_FILENAME
    if local.exists():
        return local
    xdg = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / "poet" / DICT_FILENAME


def _default_userdict_path() -> Path:
    env_path = os.environ.get("POET_USERDICT")
    if env_path:
        return Path(env_path)
    return Path.cwd() / USERDICT_FILENAME


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="poet", description="Rhymes and poetic form checks")
    parser.add_argument("--dict", dest="dict_path", help="Path to a cmudict.dict style dictionary")
    parser.add_argument("--userdict", help="User dictionary overriding base entries")
    parser.add_argument("--nltk", action="store_true", help="Use NLTK's cmudict corpus as the base dictionary")
    parser.add_argument("--no-progress", action="store_true", help="Hide progress bars while loading")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    download_parser = subparsers.add_parser("download", help="Download the CMU pronouncing dictionary")
    download_parser.add_argument("--dest", help="Destination file (defaults to the dictionary path)")

    lookup_parser = subparsers.add_parser("lookup", help="Show pronunciations and rhymes for a word")
    lookup_parser.add_argument("word", help="Word to inspect")
    lookup_parser.add_argument("--limit", type=int, default=10, help="Maximum number of rhymes to show")

    rhyme_parser = subparsers.add_parser("rhymes", help="List words that rhyme with a word")
    rhyme_parser.add_argument("word", help="Word to rhyme with")
    rhyme_parser.add_argument("--limit", type=int, default=25, help="Maximum number of results")
    rhyme_parser.add_argument("--min-score", type=float, default=0.0, help="Minimum rhyme score (0-1)")
    rhyme_parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    analyze_parser = subparsers.add_parser("analyze", help="Check a poem against a form")
    analyze_parser.add_argument("input", nargs="?", default="-", help="Text file to analyze ('-' for stdin)")
    analyze_parser.add_argument("--form", choices=FORM_NAMES, required=True)
    analyze_parser.add_argument(
        "--scheme",
        default=DEFAULT_SONNET_SCHEME,
        help=f"Sonnet rhyme scheme or preset ({', '.join(SONNET_SCHEMES)})",
    )
    analyze_parser.add_argument("--tolerance", type=int, default=1, help="Sonnet syllable tolerance around 10")
    analyze_parser.add_argument("--threshold", type=float, default=0.8, help="Minimum score accepted as a rhyme")
    analyze_parser.add_argument("--guesses", help="Datamuse /words JSON with pronunciations for unknown words")
    analyze_parser.add_argument("--json", action="store_true", help="Print JSON instead of tables")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if getattr(args, "limit", 1) < 1:
        parser.error("--limit must be at least 1")

    dict_path = Path(args.dict_path) if args.dict_path else _default_dictionary_path()

    if args.command == "download":
        destination = download_cmudict(Path(args.dest) if args.dest else dict_path)
        LOGGER.info("Dictionary saved to %s", destination)
        return 0

    if not args.nltk and not dict_path.exists():
        parser.error(f"Dictionary {dict_path} does not exist. Run 'poet download' first or pass --nltk.")
    userdict = Path(args.userdict) if args.userdict else _default_userdict_path()
    progress = not args.no_progress and sys.stderr.isatty()
    try:
        store = load_store(dict_path, userdict, use_nltk=args.nltk, progress=progress)
    except ParseError as exc:
        parser.error(str(exc))

    if args.command == "lookup":
        engine = Engine(store)
        return _lookup(engine, args.word, args.limit)

    if args.command == "rhymes":
        engine = Engine(store)
        lookup = engine.rhymes(args.word, limit=args.limit, min_score=args.min_score)
        if args.json:
            print(json.dumps(lookup.to_dict(), indent=2))
        else:
            _print_rhymes(lookup)
        return 0 if lookup.found else 1

    if args.command == "analyze":
        resolver = None
        if args.guesses:
            try:
                resolver = _load_guesses(args.guesses)
            except (OSError, ValueError) as exc:
                parser.error(f"Cannot read guesses from {args.guesses}: {exc}")
        text = _read_input(args.input)
        try:
            config = AnalysisConfig(
                rhyme_threshold=args.threshold,
                sonnet_tolerance=args.tolerance,
                sonnet_scheme=args.scheme,
            )
            engine = Engine(store, config=config, resolver=resolver)
            result = engine.analyze(text, args.form)
        except ValueError as exc:
            parser.error(str(exc))
        if args.json:
            print(json.dumps(result.to_dict(), indent=2))
        else:
            _print_analysis(result)
        return 0 if result.report.passed else 1
    return 0


def _load_guesses(path: str) -> MappingResolver:
    """Build a resolver from a saved Datamuse ``/words`` response."""

    with open(path, "r", encoding="utf8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise ValueError("expected a JSON list of Datamuse word objects")
    return MappingResolver(parse_datamuse_words(payload))


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf8")


def _lookup(engine: Engine, word: str, limit: int) -> int:
    entry = engine.describe(word)
    if entry is None:
        print(f"Not found: {word}")
        return 1
    print(f"Pronunciations for {entry.word} ({entry.source}):")
    rows = [
        [index, pron.text, pron.syllable_count, pron.stress_pattern]
        for index, pron in enumerate(entry.pronunciations, start=1)
    ]
    print(tabulate(rows, headers=["Variant", "Pronunciation", "Syllables", "Stress"]))
    print()
    _print_rhymes(engine.rhymes(word, limit=limit))
    return 0


def _print_rhymes(lookup: RhymeLookup) -> None:
    if not lookup.found:
        print(f"Not found: {lookup.word}")
        return
    if not lookup.matches:
        print("No rhymes found")
        return
    rows = [
        [match.word, match.pronunciation.text, match.syllable_count, f"{match.score:.3f}"]
        for match in lookup.matches
    ]
    print(tabulate(rows, headers=["Word", "Pronunciation", "Syllables", "Score"]))


def _print_analysis(result: AnalysisResult) -> None:
    report = result.report
    print(f"{report.form}: {report.status.value.upper()}")
    print(f"Lines: expected {report.line_count.expected}, found {report.line_count.observed}")
    print()
    rows = []
    for constraint in report.syllables:
        expected = "-" if constraint.expected is None else str(constraint.expected)
        if constraint.expected is not None and constraint.tolerance:
            expected += f"±{constraint.tolerance}"
        observed = "?" if constraint.observed is None else constraint.observed
        rows.append([constraint.position, constraint.text.strip(), expected, observed, constraint.status.value])
    if rows:
        print(tabulate(rows, headers=["#", "Line", "Expected", "Syllables", "Status"]))
    if report.rhymes:
        print()
        rows = [
            [
                constraint.letter,
                f"{constraint.positions[0]}/{constraint.positions[1]}",
                " / ".join(word or "-" for word in constraint.words),
                "-" if constraint.score is None else f"{constraint.score:.3f}",
                constraint.status.value,
            ]
            for constraint in report.rhymes
        ]
        print(tabulate(rows, headers=["Rhyme", "Lines", "Words", "Score", "Status"]))
    if result.unknown_words:
        print()
        print("Unknown words: " + ", ".join(result.unknown_words))


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
