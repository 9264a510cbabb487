from __future__ import annotations

import _bootstrap  # noqa: F401
import pytest

from poet.dictionary import DictionaryStore
from poet.engine import Engine

SAMPLE_LINES = [
    ";;; sample of the cmudict format",
    "a AH0",
    "a(2) EY1",
    "again AH0 G EH1 N",
    "again(2) AH0 G EY1 N",
    "an AE1 N",
    "an(2) AH0 N",
    "bad B AE1 D",
    "bat B AE1 T",
    "cat K AE1 T",
    "day D EY1",
    "dove D AH1 V",
    "every EH1 V ER0 IY0",
    "every(2) EH1 V R IY0",
    "frog F R AA1 G",
    "hat HH AE1 T",
    "into IH1 N T UW0",
    "into(2) IH0 N T UW1",
    "jumps JH AH1 M P S",
    "la L AA1",
    "let's L EH1 T S",
    "light L AY1 T",
    "love L AH1 V",
    "night N AY1 T",
    "now N AW1",
    "old OW1 L D",
    "pond P AA1 N D",
    "rhyme R AY1 M",
    "ring R IH1 NG",
    "sea S IY1",
    "silence S AY1 L AH0 N S",
    "silent S AY1 L AH0 N T",
    "sing S IH1 NG",
    "splash S P L AE1 SH",
    "the DH AH0  # unstressed",
    "the(2) DH AH1",
    "the(3) DH IY0",
    "time T AY1 M",
    "tree T R IY1",
    "'twas T W AH1 Z",
    "way W EY1",
    "well-known W EH1 L N OW1 N",
]


@pytest.fixture()
def sample_lines():
    return list(SAMPLE_LINES)


@pytest.fixture()
def sample_store():
    return DictionaryStore.from_lines(SAMPLE_LINES)


@pytest.fixture()
def engine(sample_store):
    return Engine(sample_store)


@pytest.fixture()
def dict_file(tmp_path):
    path = tmp_path / "cmudict.dict"
    path.write_text("\n".join(SAMPLE_LINES) + "\n")
    return path


SONNET_ENDINGS = [
    "cat", "day", "hat", "way",
    "night", "sea", "light", "tree",
    "love", "time", "dove", "rhyme",
    "sing", "ring",
]


def make_sonnet(endings=SONNET_ENDINGS, filler=9):
    """Fourteen lines of ``filler`` one-syllable words followed by a rhyme word."""

    return "\n".join(" ".join(["la"] * filler + [word]) for word in endings)
