import _bootstrap  # noqa: F401

from poet.snippet import normalize_for_lookup, split, tokenize_line


def test_token_normalize():
    assert normalize_for_lookup("tools") == "tools"
    assert normalize_for_lookup("let's") == "let's"

    # capitals are lowercased
    assert normalize_for_lookup("Such") == "such"
    assert normalize_for_lookup("ID") == "id"

    # edge punctuation is cleared
    assert normalize_for_lookup("this,") == "this"
    assert normalize_for_lookup("there.") == "there"
    assert normalize_for_lookup("found...") == "found"
    assert normalize_for_lookup("prize!") == "prize"
    assert normalize_for_lookup("flowers?") == "flowers"
    assert normalize_for_lookup('"quoted"') == "quoted"
    assert normalize_for_lookup("(aside)") == "aside"

    # periods survive when they also appear within the term
    assert normalize_for_lookup("A.M.") == "a.m."
    assert normalize_for_lookup("p.m.,") == "p.m."


def test_curly_apostrophes_are_folded():
    assert normalize_for_lookup("Let’s") == "let's"


def test_split_keeps_blank_lines():
    lines = split("First line here\n\nsecond, line.\n")
    assert [line.number for line in lines] == [1, 2, 3]
    assert [line.is_blank for line in lines] == [False, True, False]
    assert lines[1].tokens == ()


def test_tokens_keep_surface_text_and_positions():
    tokens = tokenize_line("  Hello,  World!", number=4)
    assert [t.surface for t in tokens] == ["Hello,", "World!"]
    assert [t.key for t in tokens] == ["hello", "world"]
    assert [t.word for t in tokens] == ["Hello", "World"]
    assert [t.index for t in tokens] == [0, 1]
    assert all(t.line == 4 for t in tokens)
    first = tokens[0]
    assert "  Hello,  World!"[first.start : first.end] == "Hello,"


def test_punctuation_only_chunks_are_not_tokens():
    tokens = tokenize_line("wait — what ... now")
    assert [t.key for t in tokens] == ["wait", "what", "now"]
    assert split("* * *")[0].is_blank


def test_compounds_and_contractions_stay_whole():
    tokens = tokenize_line("A well-known o'er-long tale")
    assert [t.key for t in tokens] == ["a", "well-known", "o'er-long", "tale"]


def test_candidate_keys_offer_leading_apostrophe():
    (token,) = tokenize_line("'Twas")
    assert token.candidate_keys == ("twas", "'twas")
    (plain,) = tokenize_line("cat.")
    assert plain.candidate_keys == ("cat",)


def test_punctuation_between_words_splits_tokens():
    tokens = tokenize_line("the cat,hat")
    assert [t.key for t in tokens] == ["the", "cat", "hat"]
    assert [t.surface for t in tokens] == ["the", "cat,", "hat"]
    assert "the cat,hat"[tokens[2].start : tokens[2].end] == "hat"

    tokens = tokenize_line("night—day (again)")
    assert [t.key for t in tokens] == ["night", "day", "again"]
    assert [t.surface for t in tokens] == ["night—", "day", "(again)"]


def test_joined_words_stay_whole():
    tokens = tokenize_line("rock'n'roll at 5 p.m., Let’s go")
    assert [t.key for t in tokens] == ["rock'n'roll", "at", "5", "p.m.", "let's", "go"]


def test_only_newlines_end_lines():
    lines = split("the cat now\r\nday\r\n")
    assert [line.text for line in lines] == ["the cat now", "day"]
    assert [t.key for t in lines[0].tokens] == ["the", "cat", "now"]
    assert split("") == []

    (line,) = split("the cat\u2028now")
    assert [t.key for t in line.tokens] == ["the", "cat", "now"]
