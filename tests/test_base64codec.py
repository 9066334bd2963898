import pytest

from atpkit.base64codec import decode, encode


def test_encode_full_group():
    assert encode(b"Man") == "TWFu"


def test_encode_one_padding():
    assert encode(b"Ma") == "TWE="


def test_encode_two_padding():
    assert encode(b"M") == "TQ=="


@pytest.mark.parametrize(
    "payload",
    [b"a", b"ab", b"abc", b"abcd", bytes(range(256)), b"\x00\xff\x10" * 7],
)
def test_round_trip(payload):
    assert decode(encode(payload)) == payload


def test_encode_text_is_utf8():
    assert decode(encode("héllo")) == "héllo".encode("utf-8")


def test_encoded_length_is_multiple_of_four():
    for size in range(1, 20):
        assert len(encode(b"x" * size)) % 4 == 0


def test_decode_without_padding_matches_padded():
    assert decode("TWE") == decode("TWE=")
    assert decode("TQ") == decode("TQ==")


def test_decode_stops_at_nul():
    assert decode("TWFu\0TWFu") == decode("TWFu")


def test_decode_stops_at_padding():
    assert decode("TWE=TWFu") == decode("TWE=")


def test_decode_accepts_bytes():
    assert decode(encode(b"payload").encode("ascii")) == b"payload"


def test_encode_empty_raises():
    with pytest.raises(ValueError):
        encode(b"")


def test_decode_empty_raises():
    with pytest.raises(ValueError):
        decode("")


def test_decode_invalid_character_raises():
    with pytest.raises(ValueError):
        decode("TW*u")