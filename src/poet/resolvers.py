"""Resolution of tokens against the dictionary and pluggable fallbacks.

Words missing from the dictionary can be handed to a :class:`Resolver`, for
example guesses fetched from the Datamuse ``/words`` API ahead of time. A
``/words`` item looks like::

    {"word": "bustards", "score": 129367, "numSyllables": 2,
     "tags": ["pron:B AH1 S T ER0 D Z ", "f:2.1"]}
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from .dictionary import DictionaryEntry, DictionaryStore
from .phonetics import Pronunciation, to_pronunciation, try_pronunciation
from .snippet import Line, Token

LOGGER = logging.getLogger(__name__)

SOURCE_RESOLVER = "resolver"
PRON_TAG = "pron:"


class Resolver(Protocol):
    def resolve(self, word: str) -> Optional[Pronunciation]:
        ...


class MappingResolver:
    """Serve pronunciations from a plain mapping of word to phonemes."""

    def __init__(self, pronunciations: Mapping[str, Pronunciation | str | Iterable[str]]):
        self._pronunciations: Dict[str, Pronunciation] = {}
        for word, value in pronunciations.items():
            pronunciation = value if isinstance(value, Pronunciation) else to_pronunciation(value)
            self._pronunciations[word.lower()] = pronunciation

    def resolve(self, word: str) -> Optional[Pronunciation]:
        return self._pronunciations.get(word.lower())

    def __len__(self) -> int:
        return len(self._pronunciations)


def parse_datamuse_words(payload: Iterable[Mapping[str, Any]]) -> Dict[str, Pronunciation]:
    """Extract the first ``pron:`` tag of each Datamuse ``/words`` item.

    Items without a usable pronunciation are skipped.
    """

    result: Dict[str, Pronunciation] = {}
    for item in payload:
        word = str(item.get("word", "")).strip().lower()
        if not word or word in result:
            continue
        for tag in item.get("tags") or ():
            if not tag.startswith(PRON_TAG):
                continue
            pronunciation = try_pronunciation(tag[len(PRON_TAG) :])
            if pronunciation is None:
                LOGGER.debug("Ignoring unusable pronunciation %r for %r", tag, word)
                continue
            result[word] = pronunciation
            break
    return result


@dataclass(frozen=True)
class ResolvedToken:
    """A token annotated with its dictionary entry; ``entry`` is ``None`` when unknown."""

    token: Token
    entry: Optional[DictionaryEntry]

    @property
    def is_unknown(self) -> bool:
        return self.entry is None

    @property
    def pronunciations(self) -> Tuple[Pronunciation, ...]:
        return self.entry.pronunciations if self.entry is not None else ()


@dataclass(frozen=True)
class ResolvedLine:
    line: Line
    tokens: Tuple[ResolvedToken, ...]

    @property
    def number(self) -> int:
        return self.line.number

    @property
    def text(self) -> str:
        return self.line.text

    @property
    def is_blank(self) -> bool:
        return self.line.is_blank

    @property
    def unknown(self) -> Tuple[ResolvedToken, ...]:
        return tuple(t for t in self.tokens if t.is_unknown)

    @property
    def last(self) -> Optional[ResolvedToken]:
        return self.tokens[-1] if self.tokens else None


def resolve_token(
    token: Token, store: DictionaryStore, resolver: Optional[Resolver] = None
) -> Optional[DictionaryEntry]:
    for key in token.candidate_keys:
        entry = store.entry(key)
        if entry is not None:
            return entry
    if resolver is None:
        return None
    pronunciation = resolver.resolve(token.key)
    if pronunciation is None:
        return None
    return DictionaryEntry(word=token.key, pronunciations=(pronunciation,), source=SOURCE_RESOLVER)


def resolve_lines(
    lines: Iterable[Line], store: DictionaryStore, resolver: Optional[Resolver] = None
) -> List[ResolvedLine]:
    """Annotate every token of ``lines``; tokens themselves are left untouched."""

    cache: Dict[Tuple[str, ...], Optional[DictionaryEntry]] = {}
    resolved: List[ResolvedLine] = []
    for line in lines:
        annotated = []
        for token in line.tokens:
            keys = token.candidate_keys
            if keys not in cache:
                cache[keys] = resolve_token(token, store, resolver)
            annotated.append(ResolvedToken(token=token, entry=cache[keys]))
        resolved.append(ResolvedLine(line=line, tokens=tuple(annotated)))
    return resolved


def unknown_words(lines: Iterable[ResolvedLine]) -> List[str]:
    """Surface forms of unknown tokens, first occurrence per lookup key."""

    seen = set()
    result: List[str] = []
    for line in lines:
        for token in line.unknown:
            if token.token.key in seen:
                continue
            seen.add(token.token.key)
            result.append(token.token.word)
    return result
