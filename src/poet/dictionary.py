"""In-memory phonetic dictionary.

Entries follow the cmudict format, one pronunciation per line::

    aluminium AH0 L UW1 M IH0 N AH0 M
    aluminium(2) AE2 L Y UW1 M IH0 N AH0 M
    achill AE1 K IH0 L # place, irish

A word may have several pronunciations; the ``(N)`` suffix numbers the
alternates and the unsuffixed line is variant 1.

:class:`DictionaryStore` offers exact lookups by word and a suffix index
(reversed, stress-free phoneme sequences kept sorted so that words with the
same ending are adjacent) used to find rhyme candidates.
"""
from __future__ import annotations

import logging
import re
from bisect import bisect_left
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .phonetics import InvalidPronunciation, Pronunciation, tokens

LOGGER = logging.getLogger(__name__)

TERM_RE = re.compile(r"^(?P<word>[^\s()#]+)(?:\((?P<variant>\d+)\))?$")

# Sorts after every phoneme symbol; closes prefix ranges in the suffix index.
_HIGH = "\uffff"

SOURCE_BASE = "base"
SOURCE_USER = "user"


class ParseError(ValueError):
    """A dictionary line could not be parsed."""

    def __init__(self, line_number: int, line: str, reason: str):
        super().__init__(f"line {line_number}: {reason}: {line.strip()!r}")
        self.line_number = line_number
        self.line = line
        self.reason = reason


@dataclass(frozen=True)
class Entry:
    """A single parsed dictionary line."""

    word: str
    variant: int
    pronunciation: Pronunciation
    line_number: int = 0

    @property
    def syllables(self) -> int:
        return self.pronunciation.syllable_count


@dataclass(frozen=True)
class DictionaryEntry:
    """A word with all of its pronunciations, ordered by variant."""

    word: str
    pronunciations: Tuple[Pronunciation, ...]
    source: str = SOURCE_BASE

    def __post_init__(self) -> None:
        if not self.pronunciations:
            raise ValueError(f"entry for {self.word!r} has no pronunciations")

    @property
    def primary(self) -> Pronunciation:
        return self.pronunciations[0]

    @property
    def syllable_counts(self) -> Tuple[int, ...]:
        """Distinct syllable counts across variants, primary first."""

        counts = dict.fromkeys(p.syllable_count for p in self.pronunciations)
        return tuple(counts)


@dataclass(frozen=True)
class RhymeCandidate:
    word: str
    pronunciation: Pronunciation
    tail_length: int


def parse_line(line: str, line_number: int = 0) -> Optional[Entry]:
    """Parse one dictionary line; returns ``None`` for blank and comment lines."""

    if line.startswith(";;;"):
        return None
    text = line.split("#", 1)[0]
    parts = tokens(text)
    if not parts:
        return None
    match = TERM_RE.match(parts[0])
    if match is None:
        raise ParseError(line_number, line, f"malformed word token {parts[0]!r}")
    variant = 1
    if match.group("variant") is not None:
        variant = int(match.group("variant"))
        if variant < 2:
            raise ParseError(line_number, line, "explicit variant suffix must be 2 or more")
    if len(parts) < 2:
        raise ParseError(line_number, line, "missing phonemes")
    try:
        pronunciation = Pronunciation(tuple(parts[1:]))
    except InvalidPronunciation as exc:
        raise ParseError(line_number, line, str(exc)) from exc
    return Entry(
        word=match.group("word").lower(),
        variant=variant,
        pronunciation=pronunciation,
        line_number=line_number,
    )


def parse_lines(lines: Iterable[str]) -> Dict[str, List[Entry]]:
    """Parse every line, grouping entries per word in variant order.

    Raises :class:`ParseError` on the first malformed line or on a repeated
    ``(word, variant)`` pair.
    """

    grouped: Dict[str, List[Entry]] = defaultdict(list)
    seen: Dict[Tuple[str, int], int] = {}
    for line_number, line in enumerate(lines, start=1):
        entry = parse_line(line, line_number)
        if entry is None:
            continue
        key = (entry.word, entry.variant)
        if key in seen:
            raise ParseError(
                line_number,
                line,
                f"duplicate entry for {entry.word}({entry.variant}), first seen on line {seen[key]}",
            )
        seen[key] = line_number
        grouped[entry.word].append(entry)
    for entries in grouped.values():
        entries.sort(key=lambda e: e.variant)
    return dict(grouped)


def _to_dictionary_entry(word: str, entries: List[Entry], source: str) -> DictionaryEntry:
    return DictionaryEntry(
        word=word,
        pronunciations=tuple(e.pronunciation for e in entries),
        source=source,
    )


def normalize_word(word: str) -> str:
    return word.strip().lower()


class DictionaryStore:
    """Read-mostly container for dictionary entries.

    Populate with :meth:`load` and optionally :meth:`overlay`, then call
    :meth:`freeze`. A frozen store is never mutated and can be shared between
    threads without locking.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, DictionaryEntry] = {}
        # Parallel sorted lists: reversed stress-free phonemes -> (word, variant index).
        self._suffix_keys: List[Tuple[str, ...]] = []
        self._suffix_refs: List[Tuple[str, int]] = []
        self._loaded = False
        self._frozen = False

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        user_lines: Optional[Iterable[str]] = None,
    ) -> "DictionaryStore":
        store = cls()
        store.load(lines)
        if user_lines is not None:
            store.overlay(user_lines)
        store.freeze()
        return store

    # ------------------------------------------------------------------
    # build phase
    # ------------------------------------------------------------------
    def load(self, lines: Iterable[str]) -> None:
        """Parse base dictionary lines and build both indexes."""

        self._check_mutable()
        if self._loaded:
            raise RuntimeError("base dictionary already loaded; use overlay() for additions")
        grouped = parse_lines(lines)
        for word, entries in grouped.items():
            self._entries[word] = _to_dictionary_entry(word, entries, SOURCE_BASE)
        self._loaded = True
        self._rebuild_suffix_index()
        LOGGER.info(
            "Loaded %s words (%s pronunciations)", len(self._entries), len(self._suffix_keys)
        )

    def overlay(self, lines: Iterable[str], source: str = SOURCE_USER) -> int:
        """Merge a user dictionary; overlaid words replace base entries wholesale.

        Returns the number of words inserted or replaced.
        """

        self._check_mutable()
        grouped = parse_lines(lines)
        shadowed = 0
        for word, entries in grouped.items():
            if word in self._entries:
                shadowed += 1
            self._entries[word] = _to_dictionary_entry(word, entries, source)
        self._rebuild_suffix_index()
        LOGGER.info("Overlaid %s words (%s shadowing existing entries)", len(grouped), shadowed)
        return len(grouped)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("dictionary store is frozen")

    def _rebuild_suffix_index(self) -> None:
        rows = []
        for word, entry in self._entries.items():
            for index, pronunciation in enumerate(entry.pronunciations):
                rows.append((tuple(reversed(pronunciation.stripped)), word, index))
        rows.sort()
        self._suffix_keys = [row[0] for row in rows]
        self._suffix_refs = [(row[1], row[2]) for row in rows]

    # ------------------------------------------------------------------
    # read paths
    # ------------------------------------------------------------------
    def lookup(self, word: str) -> Tuple[Pronunciation, ...]:
        """Return every pronunciation of ``word``, or an empty tuple."""

        entry = self._entries.get(normalize_word(word))
        return entry.pronunciations if entry is not None else ()

    def entry(self, word: str) -> Optional[DictionaryEntry]:
        return self._entries.get(normalize_word(word))

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and normalize_word(word) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._entries))

    def rhyme_candidates(
        self, pronunciation: Pronunciation, min_tail_len: int = 1
    ) -> Iterator[RhymeCandidate]:
        """Yield indexed pronunciations sharing an ending with ``pronunciation``.

        Candidates come grouped by the length of the common (stress-free)
        suffix, longest first, alphabetical within a group.
        """

        if min_tail_len < 1:
            raise ValueError("min_tail_len must be at least 1")
        key = tuple(reversed(pronunciation.stripped))
        if min_tail_len > len(key):
            return
        # Prefix ranges nest: range(n + 1) is contained in range(n).
        inner_lo = inner_hi = 0
        for length in range(len(key), min_tail_len - 1, -1):
            lo, hi = self._prefix_range(key[:length])
            group = []
            for position in range(lo, hi):
                if length < len(key) and inner_lo <= position < inner_hi:
                    continue
                group.append(self._suffix_refs[position])
            group.sort()
            for word, index in group:
                yield RhymeCandidate(
                    word=word,
                    pronunciation=self._entries[word].pronunciations[index],
                    tail_length=length,
                )
            inner_lo, inner_hi = lo, hi

    def _prefix_range(self, prefix: Tuple[str, ...]) -> Tuple[int, int]:
        lo = bisect_left(self._suffix_keys, prefix)
        hi = bisect_left(self._suffix_keys, prefix + (_HIGH,), lo)
        return lo, hi
