import _bootstrap  # noqa: F401

from poet.resolvers import (
    SOURCE_RESOLVER,
    MappingResolver,
    parse_datamuse_words,
    resolve_lines,
    unknown_words,
)
from poet.snippet import split

DATAMUSE = [
    {"word": "bustards", "score": 129367, "numSyllables": 2,
     "tags": ["pron:B AH1 S T ER0 D Z ", "f:2.1"]},
    {"word": "zzyzx", "tags": ["f:0.1", "pron:Z AY1 Z IH0 K S"]},
    {"word": "nope", "tags": ["f:3.0"]},
    {"word": "garbled", "tags": ["pron:not phonemes", "pron:G AA1 R B AH0 L D"]},
    {"word": "Zzyzx", "tags": ["pron:Z IH1 Z IH0 K S"]},
]


def test_parse_datamuse_words_takes_first_usable_pronunciation():
    prons = parse_datamuse_words(DATAMUSE)
    assert sorted(prons) == ["bustards", "garbled", "zzyzx"]
    assert prons["bustards"].text == "B AH1 S T ER0 D Z"
    assert prons["garbled"].text == "G AA1 R B AH0 L D"
    # the first item for a word wins
    assert prons["zzyzx"].text == "Z AY1 Z IH0 K S"


def test_mapping_resolver_fills_unknown_words(sample_store):
    resolver = MappingResolver({"Zzyzx": "Z AY1 Z IH0 K S"})
    assert len(resolver) == 1
    (line,) = resolve_lines(split("the zzyzx"), sample_store, resolver)
    assert line.unknown == ()
    guessed = line.last
    assert guessed.entry.source == SOURCE_RESOLVER
    assert guessed.pronunciations[0].syllable_count == 2


def test_dictionary_wins_over_resolver(sample_store):
    resolver = MappingResolver({"cat": "D AO1 G"})
    (line,) = resolve_lines(split("cat"), sample_store, resolver)
    assert line.last.pronunciations[0].text == "K AE1 T"
    assert line.last.entry.source == "base"


def test_leading_apostrophe_and_compounds_resolve(sample_store):
    (line,) = resolve_lines(split("'Twas well-known"), sample_store)
    assert line.unknown == ()
    assert [t.entry.word for t in line.tokens] == ["'twas", "well-known"]


def test_unknown_words_are_reported_once(sample_store):
    lines = resolve_lines(split("Blorp the cat\nblorp, glix!\n\nGlix"), sample_store)
    assert unknown_words(lines) == ["Blorp", "glix"]
    assert lines[2].is_blank
    assert lines[0].last.token.surface == "cat"
    assert not lines[0].last.is_unknown


def test_resolution_leaves_tokens_untouched(sample_store):
    lines = split("The Cat!")
    resolved = resolve_lines(lines, sample_store)
    assert [t.token for t in resolved[0].tokens] == list(lines[0].tokens)
    assert resolved[0].text == "The Cat!"
    assert resolved[0].number == 1


def test_words_joined_by_punctuation_resolve_separately(sample_store):
    (line,) = resolve_lines(split("the cat,hat"), sample_store)
    assert line.unknown == ()
    assert [t.entry.word for t in line.tokens] == ["the", "cat", "hat"]
