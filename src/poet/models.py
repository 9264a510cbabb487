"""Dataclasses representing rhyme lookup results."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .phonetics import Pronunciation


@dataclass
class RhymeMatch:
    word: str
    pronunciation: Pronunciation
    syllable_count: int
    score: float
    tail_length: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "pronunciation": self.pronunciation.text,
            "syllables": self.syllable_count,
            "score": round(self.score, 4),
            "tail_length": self.tail_length,
        }


@dataclass
class RhymeLookup:
    """Answer to a rhyme query.

    ``found`` is ``False`` when the query word has no pronunciation; ``reason``
    then explains why ``matches`` is empty.
    """

    word: str
    found: bool
    pronunciations: Tuple[Pronunciation, ...] = ()
    matches: List[RhymeMatch] = field(default_factory=list)
    reason: Optional[str] = None

    @classmethod
    def not_found(cls, word: str) -> "RhymeLookup":
        return cls(word=word, found=False, reason=f"{word!r} is not in the dictionary")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "found": self.found,
            "pronunciations": [p.text for p in self.pronunciations],
            "matches": [m.to_dict() for m in self.matches],
            "reason": self.reason,
        }
