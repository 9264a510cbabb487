"""Rhyme similarity scoring and ranked rhyme lookup."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence

from .dictionary import DictionaryStore, normalize_word
from .models import RhymeLookup, RhymeMatch
from .phonetics import Pronunciation

LOGGER = logging.getLogger(__name__)


def common_suffix_length(left: Sequence[str], right: Sequence[str]) -> int:
    """Number of trailing elements shared by ``left`` and ``right``."""

    length = 0
    for a, b in zip(reversed(left), reversed(right)):
        if a != b:
            break
        length += 1
    return length


class RhymeScorer:
    """Score how well two pronunciations rhyme, from 0 (nothing shared) to 1.

    The base score is the stress-free common suffix length over the length of
    the longer pronunciation. When both final stressed vowels fall inside that
    suffix at the same position and carry the same stress digit, the score
    moves ``stress_bonus`` of the way towards 1. Only identical phoneme
    sequences score exactly 1.0.

    Scores are not ordered by suffix length first. With the default bonus,
    ``AE1 T`` against ``S T AE1 T`` (two shared phonemes, aligned stress)
    scores 0.875, above ``K S T AE2 T`` (four shared phonemes, different
    stress) at 0.8.
    """

    def __init__(self, stress_bonus: float = 0.75):
        if not 0.0 <= stress_bonus < 1.0:
            raise ValueError("stress_bonus must be in [0, 1)")
        self.stress_bonus = stress_bonus

    def score(self, a: Pronunciation, b: Pronunciation) -> float:
        if a.phonemes == b.phonemes:
            return 1.0
        longer = max(len(a), len(b))
        suffix = common_suffix_length(a.stripped, b.stripped)
        if suffix == longer:
            # Same phonemes, shifted stress: the mismatched vowel counts for the bonus only.
            return (longer - 1 + self.stress_bonus) / longer
        raw = suffix / longer
        if self.stress_matches(a, b, suffix):
            raw += (1.0 - raw) * self.stress_bonus
        return raw

    @staticmethod
    def stress_matches(a: Pronunciation, b: Pronunciation, suffix: int) -> bool:
        """Whether the final stressed vowels align within ``suffix`` with equal stress."""

        index_a = a.final_stressed_index()
        index_b = b.final_stressed_index()
        offset = len(a) - index_a
        if offset != len(b) - index_b or offset > suffix:
            return False
        return a.phonemes[index_a] == b.phonemes[index_b]

    def best_score(
        self, left: Iterable[Pronunciation], right: Iterable[Pronunciation]
    ) -> float:
        """Highest score over every pair of variants."""

        right = tuple(right)
        return max((self.score(a, b) for a in left for b in right), default=0.0)


def find_rhymes(
    store: DictionaryStore,
    word: str,
    limit: Optional[int] = None,
    scorer: Optional[RhymeScorer] = None,
    min_score: float = 0.0,
    min_tail_len: Optional[int] = None,
) -> RhymeLookup:
    """Rank the words that rhyme with ``word``.

    Candidates share at least the last syllable of one of the query's
    pronunciations unless ``min_tail_len`` says otherwise. Each candidate word
    is reported once with its best-scoring pronunciation. The full candidate
    list is sorted before ``limit`` is applied.
    """

    if limit is not None and limit < 1:
        raise ValueError("limit must be at least 1")
    pronunciations = store.lookup(word)
    if not pronunciations:
        LOGGER.debug("Rhyme lookup for unknown word %r", word)
        return RhymeLookup.not_found(word)
    scorer = scorer or RhymeScorer()
    query = normalize_word(word)

    best: Dict[str, RhymeMatch] = {}
    for pronunciation in pronunciations:
        tail = min_tail_len or pronunciation.last_syllable_length()
        for candidate in store.rhyme_candidates(pronunciation, tail):
            if candidate.word == query:
                continue
            score = scorer.score(pronunciation, candidate.pronunciation)
            if score < min_score:
                continue
            current = best.get(candidate.word)
            if current is not None and (current.score, current.tail_length) >= (
                score,
                candidate.tail_length,
            ):
                continue
            best[candidate.word] = RhymeMatch(
                word=candidate.word,
                pronunciation=candidate.pronunciation,
                syllable_count=candidate.pronunciation.syllable_count,
                score=score,
                tail_length=candidate.tail_length,
            )

    matches = sorted(best.values(), key=lambda m: (-m.score, -m.tail_length, m.word))
    LOGGER.debug("Found %s rhymes for %r", len(matches), query)
    if limit is not None:
        matches = matches[:limit]
    return RhymeLookup(word=query, found=True, pronunciations=pronunciations, matches=matches)
