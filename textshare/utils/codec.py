# textshare/utils/codec.py
# Text <-> URL-fragment-safe token conversion
# Pure functions with no side effects: UTF-8 bytes, then base64url without padding

import base64
import binascii
import re

from textshare.constants import TOKEN_PATTERN
from textshare.errors import DecodeFailure, EncodeFailure

_TOKEN_RE = re.compile(TOKEN_PATTERN)

# base64 <-> base64url alphabet swaps
_TO_URLSAFE = str.maketrans("+/", "-_")
_FROM_URLSAFE = str.maketrans("-_", "+/")


def encode(text: str) -> str:
    """
    Encode text into a token made of [A-Za-z0-9_-] only.
    Raises EncodeFailure when the text has no UTF-8 form (lone surrogates).
    """
    try:
        raw = text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodeFailure(details={"reason": str(e)}) from e
    token = base64.b64encode(raw).decode("ascii")
    return token.translate(_TO_URLSAFE).rstrip("=")


def decode(token: str) -> str:
    """
    Reconstruct the exact text behind a token produced by encode().
    Raises DecodeFailure for anything else; never returns partial text.
    """
    if not isinstance(token, str) or not is_token(token):
        raise DecodeFailure(details={"reason": "token contains characters outside [A-Za-z0-9_-]"})
    # a single leftover character can never come from whole bytes
    if len(token) % 4 == 1:
        raise DecodeFailure(details={"reason": "token length is not a valid base64 length"})

    padded = token.translate(_FROM_URLSAFE) + "=" * (-len(token) % 4)
    try:
        raw = base64.b64decode(padded, validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise DecodeFailure(details={"reason": str(e)}) from e


def is_token(value: str) -> bool:
    """Return True if value only uses the token alphabet."""
    return _TOKEN_RE.fullmatch(value) is not None
