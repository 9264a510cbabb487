"""Reading dictionary lines from files and corpora."""
from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Iterator, List, Optional

import nltk
from nltk.corpus import cmudict
from tqdm import tqdm

from .dictionary import DictionaryStore, ParseError
from .phonetics import try_pronunciation

LOGGER = logging.getLogger(__name__)

CMUDICT_URL = "https://raw.githubusercontent.com/cmusphinx/cmudict/master/cmudict.dict"


def ensure_nltk_data() -> None:
    """Ensure the CMU dictionary corpus is available to NLTK."""

    try:
        cmudict.ensure_loaded()
    except LookupError:
        LOGGER.info("Downloading cmudict corpus via NLTK…")
        nltk.download("cmudict", quiet=True)
        cmudict.ensure_loaded()


def download_cmudict(destination: Path | str) -> Path:
    """Download ``cmudict.dict`` to ``destination``."""

    import urllib.request

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    LOGGER.info("Downloading CMU Pronouncing Dictionary to %s…", destination)
    urllib.request.urlretrieve(CMUDICT_URL, destination)
    return destination


def iter_dictionary_lines(path: Path | str, progress: bool = False) -> Iterator[str]:
    """Yield the raw lines of a dictionary file.

    The file is decoded as latin-1 so stray bytes in legacy comment lines never
    abort a load.
    """

    path = Path(path)
    with path.open("r", encoding="latin-1") as handle:
        yield from tqdm(handle, desc=path.name, unit=" lines", disable=not progress)


def nltk_cmudict_lines(progress: bool = False) -> List[str]:
    """Render NLTK's cmudict corpus as dictionary lines with ``(N)`` variants.

    Corpus entries without a vowel phoneme cannot be represented and are
    dropped with a warning.
    """

    ensure_nltk_data()
    variants: Counter = Counter()
    lines: List[str] = []
    dropped = 0
    for word, phones in tqdm(cmudict.entries(), desc="cmudict", disable=not progress):
        if try_pronunciation(phones) is None:
            dropped += 1
            continue
        variants[word] += 1
        term = word if variants[word] == 1 else f"{word}({variants[word]})"
        lines.append(f"{term} {' '.join(phones)}")
    if dropped:
        LOGGER.warning("Dropped %s NLTK cmudict entries without a vowel phoneme", dropped)
    return lines


def load_store(
    dict_path: Optional[Path | str] = None,
    userdict_path: Optional[Path | str] = None,
    use_nltk: bool = False,
    progress: bool = False,
) -> DictionaryStore:
    """Build and freeze a store from a dictionary file (or NLTK) plus a user overlay.

    A missing user dictionary is logged and skipped; a missing base
    dictionary raises :class:`FileNotFoundError`.
    """

    store = DictionaryStore()
    if use_nltk:
        store.load(nltk_cmudict_lines(progress=progress))
    else:
        if dict_path is None:
            raise ValueError("dict_path is required unless use_nltk is set")
        base = Path(dict_path)
        if not base.exists():
            raise FileNotFoundError(base)
        LOGGER.info("Loading pronunciations from %s", base)
        try:
            store.load(iter_dictionary_lines(base, progress=progress))
        except ParseError as exc:
            LOGGER.error("Failed to parse %s: %s", base, exc)
            raise

    if userdict_path is not None:
        user = Path(userdict_path)
        if user.exists():
            LOGGER.info("Overlaying user dictionary %s", user)
            try:
                store.overlay(iter_dictionary_lines(user))
            except ParseError as exc:
                LOGGER.error("Failed to parse %s: %s", user, exc)
                raise
        else:
            LOGGER.warning("User dictionary %s not found; continuing without it", user)
    store.freeze()
    return store
