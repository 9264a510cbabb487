"""Tunable thresholds for rhyme scoring and form verification."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_SONNET_SCHEME = "ABAB CDCD EFEF GG"


@dataclass(frozen=True)
class AnalysisConfig:
    """Defaults used by :class:`poet.engine.Engine`.

    ``rhyme_threshold`` is the minimum :class:`~poet.rhymes.RhymeScorer`
    score accepted as a rhyme in a scheme slot. Sonnet lines pass when their
    syllable count lies within ``sonnet_syllables +/- sonnet_tolerance``.
    ``sonnet_scheme`` is a scheme string or a preset name (``shakespearean``,
    ``petrarchan``, ``spenserian``).
    """

    rhyme_threshold: float = 0.8
    stress_bonus: float = 0.75
    sonnet_syllables: int = 10
    sonnet_tolerance: int = 1
    sonnet_scheme: str = DEFAULT_SONNET_SCHEME
    haiku_syllables: Tuple[int, int, int] = (5, 7, 5)
    rhyme_limit: Optional[int] = 25

    def __post_init__(self) -> None:
        if not 0.0 <= self.rhyme_threshold <= 1.0:
            raise ValueError("rhyme_threshold must be between 0 and 1")
        if not 0.0 <= self.stress_bonus < 1.0:
            raise ValueError("stress_bonus must be in [0, 1)")
        if self.sonnet_tolerance < 0:
            raise ValueError("sonnet_tolerance cannot be negative")
        if self.sonnet_syllables - self.sonnet_tolerance < 1:
            raise ValueError("sonnet syllable band must stay above zero")
        if len(self.haiku_syllables) != 3 or min(self.haiku_syllables) < 1:
            raise ValueError("haiku_syllables needs three positive targets")
        if self.rhyme_limit is not None and self.rhyme_limit < 1:
            raise ValueError("rhyme_limit must be positive")
