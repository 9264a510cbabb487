"""Verification of text against fixed poetic forms.

A form is a line count, a syllable target per line and, optionally, a rhyme
scheme. :class:`FormAnalyzer` never raises for an ill-formed poem; every
problem is a constraint record in the :class:`FormReport`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from itertools import combinations
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from .config import DEFAULT_SONNET_SCHEME, AnalysisConfig
from .resolvers import ResolvedLine, ResolvedToken, unknown_words
from .rhymes import RhymeScorer

LOGGER = logging.getLogger(__name__)

HAIKU = "haiku"
SONNET = "sonnet"
FORM_NAMES = (HAIKU, SONNET)

SONNET_SCHEMES = {
    "shakespearean": DEFAULT_SONNET_SCHEME,
    "petrarchan": "ABBAABBA CDECDE",
    "spenserian": "ABAB BCBC CDCD EE",
}


class ConstraintStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    UNRESOLVABLE = "unresolvable"


@dataclass(frozen=True)
class FormSpec:
    name: str
    line_count: int
    syllable_targets: Tuple[int, ...]
    syllable_tolerance: int = 0
    rhyme_scheme: Optional[str] = None

    def __post_init__(self) -> None:
        if len(self.syllable_targets) != self.line_count:
            raise ValueError(f"{self.name}: need one syllable target per line")
        letters = self.scheme_letters
        if letters is not None and len(letters) != self.line_count:
            raise ValueError(
                f"{self.name}: rhyme scheme {self.rhyme_scheme!r} does not cover {self.line_count} lines"
            )

    @property
    def scheme_letters(self) -> Optional[str]:
        if self.rhyme_scheme is None:
            return None
        return "".join(self.rhyme_scheme.split()).upper()

    def target(self, position: int) -> Optional[int]:
        """Syllable target for the 0-based ``position``, ``None`` past the end."""

        if position < self.line_count:
            return self.syllable_targets[position]
        return None


def haiku(targets: Sequence[int] = (5, 7, 5)) -> FormSpec:
    return FormSpec(name=HAIKU, line_count=3, syllable_targets=tuple(targets))


def sonnet(
    syllables: int = 10, tolerance: int = 1, scheme: str = DEFAULT_SONNET_SCHEME
) -> FormSpec:
    """Sonnet form; ``scheme`` is a scheme string or a name from :data:`SONNET_SCHEMES`."""

    scheme = SONNET_SCHEMES.get(scheme.lower(), scheme)
    return FormSpec(
        name=SONNET,
        line_count=14,
        syllable_targets=(syllables,) * 14,
        syllable_tolerance=tolerance,
        rhyme_scheme=scheme,
    )


def get_form(name: str, config: Optional[AnalysisConfig] = None) -> FormSpec:
    config = config or AnalysisConfig()
    normalized = name.strip().lower()
    if normalized == HAIKU:
        return haiku(config.haiku_syllables)
    if normalized == SONNET:
        return sonnet(config.sonnet_syllables, config.sonnet_tolerance, config.sonnet_scheme)
    raise ValueError(f"Unknown form {name!r}; expected one of {', '.join(FORM_NAMES)}")


# ----------------------------------------------------------------------
# report records
# ----------------------------------------------------------------------
@dataclass
class LineCountConstraint:
    expected: int
    observed: int
    status: ConstraintStatus

    def to_dict(self) -> Dict[str, Any]:
        return {"expected": self.expected, "observed": self.observed, "status": self.status.value}


@dataclass
class SyllableConstraint:
    """Syllable check for one line.

    ``position`` is the 1-based place of the line in the poem (blank lines
    skipped) and ``line_number`` its line in the input text. ``observed`` is
    ``None`` when the line has unknown words; ``expected`` is ``None`` for
    lines beyond the form's length.
    """

    position: int
    line_number: int
    text: str
    expected: Optional[int]
    tolerance: int
    observed: Optional[int]
    status: ConstraintStatus
    alternatives: Tuple[int, ...] = ()
    unknown_words: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "line_number": self.line_number,
            "text": self.text,
            "expected": self.expected,
            "tolerance": self.tolerance,
            "observed": self.observed,
            "alternatives": list(self.alternatives),
            "unknown_words": list(self.unknown_words),
            "status": self.status.value,
        }


@dataclass
class RhymeConstraint:
    letter: str
    positions: Tuple[int, int]
    words: Tuple[Optional[str], Optional[str]]
    score: Optional[float]
    threshold: float
    status: ConstraintStatus

    def to_dict(self) -> Dict[str, Any]:
        return {
            "letter": self.letter,
            "positions": list(self.positions),
            "words": list(self.words),
            "score": None if self.score is None else round(self.score, 4),
            "threshold": self.threshold,
            "status": self.status.value,
        }


@dataclass
class FormReport:
    form: str
    status: ConstraintStatus
    line_count: LineCountConstraint
    syllables: List[SyllableConstraint] = field(default_factory=list)
    rhymes: List[RhymeConstraint] = field(default_factory=list)
    unknown_words: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.status is ConstraintStatus.PASSED

    def failures(self) -> List[Any]:
        """Every constraint that was evaluated and not met."""

        return self._with_status(ConstraintStatus.FAILED)

    def unresolvable(self) -> List[Any]:
        return self._with_status(ConstraintStatus.UNRESOLVABLE)

    def _with_status(self, status: ConstraintStatus) -> List[Any]:
        records: List[Any] = [self.line_count, *self.syllables, *self.rhymes]
        return [r for r in records if r.status is status]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "form": self.form,
            "status": self.status.value,
            "passed": self.passed,
            "line_count": self.line_count.to_dict(),
            "syllables": [c.to_dict() for c in self.syllables],
            "rhymes": [c.to_dict() for c in self.rhymes],
            "unknown_words": list(self.unknown_words),
        }


# ----------------------------------------------------------------------
# analysis
# ----------------------------------------------------------------------
def achievable_counts(tokens: Sequence[ResolvedToken]) -> Set[int]:
    """Every line total reachable by picking one variant per token."""

    totals = {0}
    for token in tokens:
        counts = {p.syllable_count for p in token.pronunciations}
        totals = {total + count for total in totals for count in counts}
    return totals


class FormAnalyzer:
    def __init__(self, scorer: Optional[RhymeScorer] = None, rhyme_threshold: float = 0.8):
        self.scorer = scorer or RhymeScorer()
        self.rhyme_threshold = rhyme_threshold

    def analyze(self, form: FormSpec, lines: Sequence[ResolvedLine]) -> FormReport:
        content = [line for line in lines if not line.is_blank]
        count_status = (
            ConstraintStatus.PASSED if len(content) == form.line_count else ConstraintStatus.FAILED
        )
        line_count = LineCountConstraint(form.line_count, len(content), count_status)

        syllables = [
            self._check_syllables(form, position, line) for position, line in enumerate(content)
        ]
        rhymes = self._check_rhymes(form, content)

        records: List[Any] = [line_count, *syllables, *rhymes]
        statuses = {record.status for record in records}
        if ConstraintStatus.FAILED in statuses:
            status = ConstraintStatus.FAILED
        elif ConstraintStatus.UNRESOLVABLE in statuses:
            status = ConstraintStatus.UNRESOLVABLE
        else:
            status = ConstraintStatus.PASSED

        LOGGER.debug("%s verdict %s (%s lines)", form.name, status.value, len(content))
        return FormReport(
            form=form.name,
            status=status,
            line_count=line_count,
            syllables=syllables,
            rhymes=rhymes,
            unknown_words=unknown_words(content),
        )

    def _check_syllables(
        self, form: FormSpec, position: int, line: ResolvedLine
    ) -> SyllableConstraint:
        expected = form.target(position)
        record = dict(
            position=position + 1,
            line_number=line.number,
            text=line.text,
            expected=expected,
            tolerance=form.syllable_tolerance,
        )
        if line.unknown:
            return SyllableConstraint(
                observed=None,
                status=ConstraintStatus.UNRESOLVABLE,
                unknown_words=tuple(unknown_words([line])),
                **record,
            )

        primary = sum(t.pronunciations[0].syllable_count for t in line.tokens)
        totals = achievable_counts(line.tokens)
        alternatives = tuple(sorted(totals))
        if expected is None:
            return SyllableConstraint(
                observed=primary,
                status=ConstraintStatus.FAILED,
                alternatives=alternatives,
                **record,
            )

        low = expected - form.syllable_tolerance
        high = expected + form.syllable_tolerance
        hits = [total for total in alternatives if low <= total <= high]
        if not hits:
            return SyllableConstraint(
                observed=primary,
                status=ConstraintStatus.FAILED,
                alternatives=alternatives,
                **record,
            )
        observed = primary if primary in hits else min(hits, key=lambda t: (abs(t - primary), t))
        return SyllableConstraint(
            observed=observed,
            status=ConstraintStatus.PASSED,
            alternatives=alternatives,
            **record,
        )

    def _check_rhymes(self, form: FormSpec, content: Sequence[ResolvedLine]) -> List[RhymeConstraint]:
        letters = form.scheme_letters
        if letters is None:
            return []
        groups: Dict[str, List[int]] = {}
        for position, letter in enumerate(letters[: len(content)]):
            groups.setdefault(letter, []).append(position)

        result: List[RhymeConstraint] = []
        for letter, positions in groups.items():
            for first, second in combinations(positions, 2):
                result.append(self._check_pair(letter, first, second, content))
        return result

    def _check_pair(
        self, letter: str, first: int, second: int, content: Sequence[ResolvedLine]
    ) -> RhymeConstraint:
        left = content[first].last
        right = content[second].last
        words = (
            left.token.word if left is not None else None,
            right.token.word if right is not None else None,
        )
        positions = (first + 1, second + 1)
        if left is None or right is None or left.is_unknown or right.is_unknown:
            return RhymeConstraint(
                letter=letter,
                positions=positions,
                words=words,
                score=None,
                threshold=self.rhyme_threshold,
                status=ConstraintStatus.UNRESOLVABLE,
            )
        score = self.scorer.best_score(left.pronunciations, right.pronunciations)
        status = ConstraintStatus.PASSED if score >= self.rhyme_threshold else ConstraintStatus.FAILED
        return RhymeConstraint(
            letter=letter,
            positions=positions,
            words=words,
            score=score,
            threshold=self.rhyme_threshold,
            status=status,
        )
