import pytest

from atpkit.slice import Slice


def test_length_defaults_to_data():
    assert len(Slice(b"hello")) == 5


def test_explicit_size_truncates():
    s = Slice(b"hello", 3)
    assert bytes(s) == b"hel"
    assert len(s) == 3


def test_size_out_of_range_raises():
    with pytest.raises(ValueError):
        Slice(b"abc", 4)


def test_default_is_empty():
    s = Slice()
    assert len(s) == 0
    assert s.empty is True
    assert not s


def test_getitem_returns_byte():
    s = Slice(b"abc")
    assert s[1] == ord("b")


def test_getitem_out_of_range():
    s = Slice(b"abc")
    assert s[2] == ord("c")
    with pytest.raises(IndexError):
        s.__getitem__(3)
    with pytest.raises(IndexError):
        s.__getitem__(-1)


def test_getitem_respects_truncated_size():
    s = Slice(b"abcdef", 2)
    assert s[1] == ord("b")
    with pytest.raises(IndexError):
        s.__getitem__(2)


def test_equality_by_content():
    assert Slice(b"abcdef", 3) == Slice(b"abc")
    assert not (Slice(b"abc") == Slice(b"abd"))
    assert Slice(b"abc") == b"abc"


def test_unequal_sizes():
    assert Slice(b"ab") != Slice(b"abc")


def test_hash_matches_equal():
    assert hash(Slice(b"xy")) == hash(Slice(b"xyz", 2))


def test_clear_empties():
    s = Slice(b"data")
    s.clear()
    assert len(s) == 0
    assert s == Slice()


def test_text_round_trip():
    assert Slice("héllo").to_string() == "héllo"