import pytest

import _bootstrap  # noqa: F401

from poet.phonetics import (
    InvalidPronunciation,
    Pronunciation,
    count_syllables,
    is_vowel,
    strip_stress,
    to_pronunciation,
    try_pronunciation,
)


def test_pronunciation_features():
    pron = Pronunciation(("K", "AE1", "T"))
    assert pron.syllable_count == 1
    assert pron.stress_pattern == "1"
    assert pron.stripped == ("K", "AE", "T")
    assert pron.text == "K AE1 T"
    assert pron.last_syllable_length() == 2


def test_syllables_count_stress_bearing_phonemes():
    assert count_syllables(to_pronunciation("AH0")) == 1
    assert count_syllables(to_pronunciation("AA1 R D V AA2 R K")) == 2
    assert count_syllables(to_pronunciation("AH0 M AW1 N IH0 D")) == 3
    assert count_syllables(["G", "IY1", "D", "IY1", "P", "IY1"]) == 3


def test_final_stressed_vowel_prefers_primary_or_secondary():
    pron = to_pronunciation("P AH1 S T EY2 SH AH0 N")
    assert pron.final_stressed_index() == 4


def test_final_stressed_vowel_falls_back_to_last_vowel():
    pron = to_pronunciation("DH AH0")
    assert pron.final_stressed_index() == 1


@pytest.mark.parametrize("phonemes", ["", "B R", "K ae1 T", "AH3", "K AE1 T!"])
def test_invalid_pronunciations_are_rejected(phonemes):
    with pytest.raises(InvalidPronunciation):
        to_pronunciation(phonemes)
    assert try_pronunciation(phonemes) is None


def test_list_input_is_stored_as_tuple():
    pron = Pronunciation(["K", "AE1", "T"])
    assert pron.phonemes == ("K", "AE1", "T")
    assert hash(pron) == hash(Pronunciation(("K", "AE1", "T")))


def test_vowel_helpers():
    assert is_vowel("ER0")
    assert not is_vowel("NG")
    assert strip_stress("AE2") == "AE"
