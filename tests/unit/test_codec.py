# tests/unit/test_codec.py

import re

import pytest

from textshare.errors import DecodeFailure, EncodeFailure
from textshare.utils.codec import decode, encode, is_token

TOKEN_RE = re.compile(r"^[A-Za-z0-9_-]*$")

SAMPLES = [
    "",
    "Hello",
    "Hello, 世界! 🎉",
    "é combining acute",
    "a+b/c=d==",
    "ÿ",
    "👩‍👩‍👧‍👦 family emoji with joiners",
    "line one\nline two\ttabbed",
    "?>>???",
    "x" * 1000,
]


@pytest.mark.parametrize("text", SAMPLES)
def test_round_trip(text):
    assert decode(encode(text)) == text


@pytest.mark.parametrize("text", SAMPLES)
def test_token_alphabet(text):
    token = encode(text)
    assert TOKEN_RE.match(token)
    assert "=" not in token


def test_known_vectors():
    assert encode("") == ""
    assert encode("Hello") == "SGVsbG8"
    # '+' and '/' of standard base64 become '-' and '_'
    assert encode("?>>") == "Pz4-"
    assert encode("???") == "Pz8_"


def test_decode_restores_padding():
    assert decode("SGVsbG8") == "Hello"
    assert decode("SGk") == "Hi"


def test_encode_rejects_lone_surrogate():
    with pytest.raises(EncodeFailure) as exc_info:
        encode("broken \ud800 text")
    assert exc_info.value.error_code == "ENCODE_FAILURE"


@pytest.mark.parametrize("token", [
    "not-a-valid-token-!!!",
    "%%%invalid",
    "SGVsbG8=",      # padding is never part of a token
    "SGVs bG8",
    "A",              # one leftover character cannot hold a byte
    "_w",             # decodes to 0xFF, not UTF-8
    "5Li",            # first two bytes of a three-byte character
])
def test_decode_rejects_malformed_tokens(token):
    with pytest.raises(DecodeFailure):
        decode(token)


def test_decode_failure_is_an_app_error_with_reason():
    with pytest.raises(DecodeFailure) as exc_info:
        decode("%%%invalid")
    err = exc_info.value
    assert err.status_code == 400
    assert "reason" in err.details


def test_is_token():
    assert is_token("Pz4-_abc")
    assert is_token("")
    assert not is_token("Pz4+")


@pytest.mark.parametrize("value", ["abc\n", "ab c", "Pz4="])
def test_is_token_rejects_trailing_and_foreign_characters(value):
    assert not is_token(value)
    with pytest.raises(DecodeFailure):
        decode(value)
