"""Tests for the base32 secret codec."""

import random

import pytest

from marketotp import random_base32
from marketotp.base32 import InvalidSecretFormat, decode, decode_hex


def test_decode_known_secret():
    assert decode("GEZDGNBVGY3TQOJQ") == b"1234567890"
    assert decode("JBSWY3DPEHPK3PXP") == b"Hello!\xde\xad\xbe\xef"


def test_decode_is_case_insensitive():
    assert decode("gezdgnbvgy3tqojq") == decode("GEZDGNBVGY3TQOJQ")
    assert decode("GezDgnBvGY3tqOJQ") == b"1234567890"


def test_decode_hex_returns_nibbles():
    assert decode_hex("GEZDGNBVGY3TQOJQ") == "31323334353637383930"
    assert decode_hex("ME") == "61"


def test_trailing_bits_are_truncated():
    # 20 bits: five nibbles, the last one cannot complete a byte
    assert decode_hex("MFRA") == "61620"
    assert decode("MFRA") == b"ab"
    # 5 bits: one nibble, no whole byte
    assert decode("A") == b""


def test_trailing_padding_is_ignored():
    assert decode("MFRA====") == b"ab"


def test_32_character_secrets_decode_to_20_bytes():
    rng = random.Random(1234)
    for _ in range(50):
        assert len(decode(random_base32(rng=rng))) == 20


def test_invalid_character_fails_fast():
    with pytest.raises(InvalidSecretFormat) as excinfo:
        decode("ABC1")
    assert excinfo.value.position == 3
    assert excinfo.value.character == "1"


def test_padding_inside_secret_is_rejected():
    with pytest.raises(InvalidSecretFormat) as excinfo:
        decode("MF=A")
    assert excinfo.value.position == 2


@pytest.mark.parametrize("secret", ["", "====", "GEZD GNBV", "GEZDGNBV-GY3TQOJQ", "Ä"])
def test_malformed_secrets(secret):
    with pytest.raises(ValueError):
        decode(secret)
