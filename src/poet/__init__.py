"""Phonetic dictionary, rhyme scoring and poetic form checks."""

from .config import AnalysisConfig
from .dictionary import DictionaryEntry, DictionaryStore, ParseError
from .engine import AnalysisResult, Engine
from .forms import ConstraintStatus, FormAnalyzer, FormReport, get_form
from .phonetics import Pronunciation, count_syllables
from .rhymes import RhymeScorer, find_rhymes
from .snippet import split

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "ConstraintStatus",
    "DictionaryEntry",
    "DictionaryStore",
    "Engine",
    "FormAnalyzer",
    "FormReport",
    "ParseError",
    "Pronunciation",
    "RhymeScorer",
    "count_syllables",
    "find_rhymes",
    "get_form",
    "split",
]
