"""High level entry points combining the dictionary, scorer and form analyzer."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import AnalysisConfig
from .dictionary import DictionaryEntry, DictionaryStore
from .forms import FormAnalyzer, FormReport, FormSpec, get_form
from .models import RhymeLookup
from .resolvers import ResolvedLine, Resolver, resolve_lines
from .rhymes import RhymeScorer, find_rhymes
from .snippet import split

LOGGER = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    report: FormReport
    unknown_words: List[str] = field(default_factory=list)
    lines: List[ResolvedLine] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return self.report.to_dict()


class Engine:
    """Analyze snippets against one shared, read-only :class:`DictionaryStore`."""

    def __init__(
        self,
        store: DictionaryStore,
        config: Optional[AnalysisConfig] = None,
        resolver: Optional[Resolver] = None,
    ):
        self.store = store
        self.config = config or AnalysisConfig()
        self.resolver = resolver
        self.scorer = RhymeScorer(self.config.stress_bonus)
        self.analyzer = FormAnalyzer(self.scorer, self.config.rhyme_threshold)

    def resolve(self, text: str) -> List[ResolvedLine]:
        return resolve_lines(split(text), self.store, self.resolver)

    def analyze(self, text: str, form: str | FormSpec) -> AnalysisResult:
        """Check ``text`` against ``form`` (a form name or a :class:`FormSpec`)."""

        spec = form if isinstance(form, FormSpec) else get_form(form, self.config)
        lines = self.resolve(text)
        report = self.analyzer.analyze(spec, lines)
        unknown = list(report.unknown_words)
        if unknown:
            LOGGER.debug("Unknown words: %s", ", ".join(unknown))
        return AnalysisResult(report=report, unknown_words=unknown, lines=lines)

    def rhymes(
        self, word: str, limit: Optional[int] = None, min_score: float = 0.0
    ) -> RhymeLookup:
        if limit is None:
            limit = self.config.rhyme_limit
        return find_rhymes(self.store, word, limit=limit, scorer=self.scorer, min_score=min_score)

    def describe(self, word: str) -> Optional[DictionaryEntry]:
        return self.store.entry(word)
