"""Splitting free-form text into lines and word tokens.

A "snippet" is any bit of text to be analyzed: most often a poem, sometimes a
single word. It usually carries punctuation and capitalization that must be
removed before dictionary lookup, and line structure that matters for the
analysis, so tokens keep both the original surface text and a lookup key.
"""
from __future__ import annotations

import re
import string
from dataclasses import dataclass
from typing import List, Tuple

from nltk.tokenize import WhitespaceTokenizer

_APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "ʼ": "'"})
_EDGE_PUNCTUATION = string.punctuation + "“”«»—–…"
_EDGE_NO_PERIOD = _EDGE_PUNCTUATION.replace(".", "")
_EDGE_NO_APOSTROPHE = _EDGE_PUNCTUATION.replace("'", "")
_INNER_PERIOD_RE = re.compile(r"\.\w")
# Words joined by single apostrophes, hyphens or periods, with any edge punctuation.
_WORD_RUN_RE = re.compile(r"\W*\w+(?:['’ʼ.\-]\w+)*\W*")

_TOKENIZER = WhitespaceTokenizer()


def normalize_for_lookup(term: str) -> str:
    """Normalize a surface word for looking up in the dictionary.

    Dictionary words are lower-cased and keep only essential punctuation
    (``let's``, ``a.m.``), so edge punctuation is stripped. Trailing periods
    survive when the term also has periods inside it.

    >>> normalize_for_lookup("Hello!")
    'hello'
    >>> normalize_for_lookup("p.m.,")
    'p.m.'
    """

    result = term.lower().translate(_APOSTROPHES)
    if _INNER_PERIOD_RE.search(result):
        return result.lstrip(_EDGE_PUNCTUATION).rstrip(_EDGE_NO_PERIOD)
    return result.strip(_EDGE_PUNCTUATION)


@dataclass(frozen=True)
class Token:
    """One word of the input with its position."""

    line: int
    index: int
    surface: str
    key: str
    start: int
    end: int

    @property
    def word(self) -> str:
        """Surface text without edge punctuation, case preserved."""

        return self.surface.translate(_APOSTROPHES).strip(_EDGE_PUNCTUATION)

    @property
    def candidate_keys(self) -> Tuple[str, ...]:
        """Lookup keys in order of preference.

        The second key keeps edge apostrophes for entries like ``'twas``.
        """

        alternate = self.surface.lower().translate(_APOSTROPHES).strip(_EDGE_NO_APOSTROPHE)
        if alternate and alternate != self.key:
            return (self.key, alternate)
        return (self.key,)


@dataclass(frozen=True)
class Line:
    number: int
    text: str
    tokens: Tuple[Token, ...]

    @property
    def is_blank(self) -> bool:
        """Lines without any word act as stanza breaks."""

        return not self.tokens


def tokenize_line(text: str, number: int = 1) -> Tuple[Token, ...]:
    """Split one line into word tokens.

    Whitespace chunks are split further wherever punctuation separates two
    words (``cat,hat`` or ``night--day``). A single apostrophe, hyphen or period
    between word characters joins them, so ``o'er``, ``well-known`` and
    ``a.m.`` stay whole. Leading and trailing punctuation stays on the
    surface text of its word.
    """

    result: List[Token] = []
    for chunk_start, chunk_end in _TOKENIZER.span_tokenize(text):
        chunk = text[chunk_start:chunk_end]
        for match in _WORD_RUN_RE.finditer(chunk):
            surface = match.group()
            key = normalize_for_lookup(surface)
            if not key:
                continue
            result.append(
                Token(
                    line=number,
                    index=len(result),
                    surface=surface,
                    key=key,
                    start=chunk_start + match.start(),
                    end=chunk_start + match.end(),
                )
            )
    return tuple(result)


def split(text: str) -> List[Line]:
    """Split ``text`` into numbered lines of tokens; blank lines are kept.

    Only ``\\n`` and ``\\r\\n`` end a line.
    """

    raw_lines = text.split("\n")
    if raw_lines[-1] == "":
        raw_lines.pop()
    lines: List[Line] = []
    for number, line in enumerate(raw_lines, start=1):
        if line.endswith("\r"):
            line = line[:-1]
        lines.append(Line(number=number, text=line, tokens=tokenize_line(line, number)))
    return lines
