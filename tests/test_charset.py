from group_codes.codes.charset import (
    ALPHABET,
    AMBIGUOUS_CHARS,
    alphabet_size,
    body_pattern,
    code_space_size,
)


def test_alphabet_is_exact():
    assert ALPHABET == "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
    assert alphabet_size() == 32
    assert len(set(ALPHABET)) == 32


def test_alphabet_has_no_ambiguous_chars():
    for char in "0O1Il":
        assert char in AMBIGUOUS_CHARS
        assert char not in ALPHABET


def test_body_pattern_is_anchored_by_fullmatch():
    pattern = body_pattern(5)
    assert pattern.fullmatch("ABC23")
    assert pattern.fullmatch("ABC2") is None
    assert pattern.fullmatch("ABC234") is None
    assert pattern.fullmatch("ABC2O") is None


def test_code_space_size():
    assert code_space_size(5) == 33_554_432
    assert code_space_size(1) == 32
