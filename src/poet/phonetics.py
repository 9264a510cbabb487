"""Utilities for working with ARPABET pronunciations and stresses."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

STRESS_DIGITS = "012"

PHONEME_RE = re.compile(r"^[A-Z]+[012]?$")


class InvalidPronunciation(ValueError):
    """Raised when a phoneme sequence cannot form a pronunciation."""


@dataclass(frozen=True)
class Pronunciation:
    """Structured representation of a pronunciation.

    Every symbol ending in a stress digit is a vowel, and a pronunciation
    always holds at least one of them.
    """

    phonemes: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.phonemes, tuple):
            object.__setattr__(self, "phonemes", tuple(self.phonemes))
        if not self.phonemes:
            raise InvalidPronunciation("pronunciation has no phonemes")
        for phoneme in self.phonemes:
            if not PHONEME_RE.match(phoneme):
                raise InvalidPronunciation(f"invalid phoneme symbol {phoneme!r}")
        if not any(is_vowel(p) for p in self.phonemes):
            raise InvalidPronunciation(
                f"pronunciation {' '.join(self.phonemes)!r} has no vowel phoneme"
            )

    def __len__(self) -> int:
        return len(self.phonemes)

    def __str__(self) -> str:
        return self.text

    @property
    def text(self) -> str:
        """Return the pronunciation as a space separated string."""

        return " ".join(self.phonemes)

    @property
    def syllable_count(self) -> int:
        """Number of syllables in the pronunciation."""

        return count_syllables(self)

    @property
    def stress_pattern(self) -> str:
        """Return stress digits for vowels in order."""

        return "".join(p[-1] for p in self.phonemes if is_vowel(p))

    @property
    def stripped(self) -> Tuple[str, ...]:
        """Phonemes with stress digits removed."""

        return tuple(strip_stress(p) for p in self.phonemes)

    def final_stressed_index(self) -> int:
        """Index of the last vowel carrying primary or secondary stress.

        Falls back to the last vowel for pronunciations with no stressed vowel
        (e.g. ``a AH0``).
        """

        indices = _vowel_indices(self.phonemes)
        for index in reversed(indices):
            if self.phonemes[index][-1] in "12":
                return index
        return indices[-1]

    def last_syllable_length(self) -> int:
        """Number of phonemes from the last vowel through the end."""

        return len(self.phonemes) - _vowel_indices(self.phonemes)[-1]


def count_syllables(pronunciation: Pronunciation | Sequence[str]) -> int:
    """Count syllable nuclei: each stress-bearing phoneme is exactly one syllable."""

    phonemes = pronunciation.phonemes if isinstance(pronunciation, Pronunciation) else pronunciation
    return sum(1 for p in phonemes if is_vowel(p))


def tokens(pronunciation: str) -> List[str]:
    """Split a CMU pronunciation string into tokens."""

    return [part for part in pronunciation.strip().split() if part]


def is_vowel(phoneme: str) -> bool:
    """Return ``True`` if the phoneme carries a stress digit."""

    return bool(phoneme) and phoneme[-1] in STRESS_DIGITS


def strip_stress(phoneme: str) -> str:
    """Remove stress digits from a phoneme."""

    return phoneme.rstrip("0123456789")


def _vowel_indices(phonemes: Sequence[str]) -> List[int]:
    return [index for index, phoneme in enumerate(phonemes) if is_vowel(phoneme)]


def to_pronunciation(pronunciation: Iterable[str] | str) -> Pronunciation:
    """Create a :class:`Pronunciation` instance from input."""

    if isinstance(pronunciation, str):
        phonemes = tokens(pronunciation)
    else:
        phonemes = list(pronunciation)
    return Pronunciation(tuple(phonemes))


def try_pronunciation(pronunciation: Iterable[str] | str) -> Optional[Pronunciation]:
    """Like :func:`to_pronunciation` but returns ``None`` for invalid input."""

    try:
        return to_pronunciation(pronunciation)
    except InvalidPronunciation:
        return None
