import pytest

from atpkit.codec import CodecError, decode, encode


def test_null_encodes_to_empty():
    assert encode(None) == ""


@pytest.mark.parametrize(
    "value",
    [{"a": 1, "b": [1, 2, {"c": "d"}]}, [1, 2, 3], "text", 42, True, {"nested": {"x": None}}],
)
def test_round_trip(value):
    assert decode(encode(value)) == value


def test_keys_are_sorted():
    text = encode({"zeta": 1, "alpha": 2})
    assert text.index('"alpha"') < text.index('"zeta"')


def test_colon_spacing():
    assert '"a" : 1' in encode({"a": 1})


def test_non_ascii_is_escaped():
    text = encode({"k": "é"})
    assert "é" not in text
    assert decode(text) == {"k": "é"}


def test_tab_indentation():
    lines = encode({"a": 1}).splitlines()
    assert lines[1].startswith("\t")


def test_decode_invalid_raises():
    with pytest.raises(CodecError):
        decode("{")


def test_decode_nan_rejected():
    with pytest.raises(CodecError):
        decode("NaN")


def test_codec_error_is_value_error():
    with pytest.raises(ValueError):
        decode("not json")