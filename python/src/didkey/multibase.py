# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Base58btc and the multibase text layer used by did:key."""

from __future__ import annotations

from .types import InvalidEncodingError, UnsupportedMultibaseError

# Base58btc alphabet (Bitcoin alphabet)
_BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE58_INDEX = {char: index for index, char in enumerate(_BASE58_ALPHABET)}

BASE58BTC_PREFIX = "z"

# Selectors of other multibase encodings, used only to name them in errors.
_KNOWN_SELECTORS = {
    "0": "base2",
    "7": "base8",
    "9": "base10",
    "f": "base16",
    "F": "base16upper",
    "b": "base32",
    "B": "base32upper",
    "c": "base32pad",
    "v": "base32hex",
    "k": "base36",
    "Z": "base58flickr",
    "m": "base64",
    "M": "base64pad",
    "u": "base64url",
    "U": "base64urlpad",
    "\U0001f680": "base256emoji",
}


def encode_base58btc(data: bytes) -> str:
    """Encode bytes as base58btc (Bitcoin alphabet, no multibase prefix)."""
    count = 0
    for byte in data:
        if byte != 0:
            break
        count += 1

    n = int.from_bytes(data, "big")
    digits = []
    while n > 0:
        n, remainder = divmod(n, 58)
        digits.append(_BASE58_ALPHABET[remainder])

    return "1" * count + "".join(reversed(digits))


def decode_base58btc(encoded: str) -> bytes:
    """Decode a base58btc string (no multibase prefix) to bytes."""
    n = 0
    for char in encoded:
        index = _BASE58_INDEX.get(char)
        if index is None:
            raise InvalidEncodingError(f"invalid base58btc character: {char!r}")
        n = n * 58 + index

    leading_zeros = len(encoded) - len(encoded.lstrip("1"))
    raw = n.to_bytes((n.bit_length() + 7) // 8, "big") if n > 0 else b""
    return b"\x00" * leading_zeros + raw


def encode_multibase(data: bytes) -> str:
    """Encode bytes as multibase base58btc text (``z`` + base58btc)."""
    return BASE58BTC_PREFIX + encode_base58btc(data)


def decode_multibase(text: str) -> bytes:
    """Decode multibase text, accepting only the base58btc selector.

    Raises
    ------
    UnsupportedMultibaseError
        If *text* is empty or its selector is anything but ``z``.
    InvalidEncodingError
        If the characters after the selector are not base58btc.
    """
    if not text:
        raise UnsupportedMultibaseError("decode_multibase: missing multibase selector")

    selector = text[0]
    if selector != BASE58BTC_PREFIX:
        name = _KNOWN_SELECTORS.get(selector, "unknown")
        raise UnsupportedMultibaseError(
            f"decode_multibase: unexpected multibase encoding {name} ({selector!r})"
        )
    return decode_base58btc(text[1:])
