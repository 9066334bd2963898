import re
import uuid

import pytest

from atpkit.uuidgen import UUIDGenerator

CANONICAL = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}")


def test_generate_is_canonical_lowercase_v4():
    text = UUIDGenerator().generate()
    assert CANONICAL.fullmatch(text)
    assert uuid.UUID(text).version == 4


def test_generate_is_unique():
    generator = UUIDGenerator()
    values = {generator.generate() for _ in range(100)}
    assert len(values) == 100


def test_parse_round_trip():
    generator = UUIDGenerator()
    text = generator.generate()
    assert str(generator.parse(text)) == text


def test_parse_accepts_uppercase():
    generator = UUIDGenerator()
    text = generator.generate()
    assert generator.parse(text.upper()) == uuid.UUID(text)


@pytest.mark.parametrize("bad", [
    "",
    "not-a-uuid",
    "{12345678-1234-1234-1234-123456789abc}",
    "123456781234123412341234567890ab",
    "12345678-1234-1234-1234-123456789abz",
])
def test_parse_rejects_malformed(bad):
    with pytest.raises(ValueError):
        UUIDGenerator().parse(bad)


def test_compare_orders_bytewise():
    generator = UUIDGenerator()
    low = "00000000-0000-0000-0000-000000000001"
    high = "ffffffff-0000-0000-0000-000000000000"
    assert generator.compare(low, high) == -1
    assert generator.compare(high, low) == 1
    assert generator.compare(low, uuid.UUID(low)) == 0


def test_is_null():
    generator = UUIDGenerator()
    assert generator.is_null("00000000-0000-0000-0000-000000000000")
    assert generator.is_null(uuid.UUID(int=0))
    assert not generator.is_null(generator.generate())