# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Multicodec key-type registry and the varint-tagged key envelope.

An envelope is ``uvarint(code) || raw_key_bytes``. There is no length prefix
on the key bytes; the code determines how they are interpreted.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .types import (
    KeyAlgorithm,
    MalformedVarintError,
    UnsupportedAlgorithmError,
    UnsupportedInputAlgorithmError,
)

# ed25519-pub
ED25519_PUB = 0xED
# rsa-x509-pub, https://github.com/multiformats/multicodec/pull/226
RSA_X509_PUB = 0x1205
# secp256k1-pub
SECP256K1_PUB = 0x1206

# Codes above 2**63 - 1 are not valid multicodec values.
MAX_UVARINT_LEN = 9
_MAX_UVARINT = (1 << 63) - 1

_CODE_BY_ALGORITHM: Mapping[KeyAlgorithm, int] = MappingProxyType(
    {
        KeyAlgorithm.ED25519: ED25519_PUB,
        KeyAlgorithm.RSA: RSA_X509_PUB,
        KeyAlgorithm.SECP256K1: SECP256K1_PUB,
    }
)

_ALGORITHM_BY_CODE: Mapping[int, KeyAlgorithm] = MappingProxyType(
    {code: algorithm for algorithm, code in _CODE_BY_ALGORITHM.items()}
)


def as_algorithm(algorithm: KeyAlgorithm | str) -> KeyAlgorithm:
    """Coerce *algorithm* into the closed :class:`KeyAlgorithm` set."""
    try:
        return KeyAlgorithm(algorithm)
    except ValueError:
        raise UnsupportedInputAlgorithmError(
            f"unsupported key algorithm: {algorithm!r}"
        ) from None


def code_for(algorithm: KeyAlgorithm | str) -> int:
    """Return the multicodec code for *algorithm*."""
    return _CODE_BY_ALGORITHM[as_algorithm(algorithm)]


def algorithm_for(code: int) -> KeyAlgorithm:
    """Return the algorithm registered under multicodec *code*."""
    try:
        return _ALGORITHM_BY_CODE[code]
    except KeyError:
        raise UnsupportedAlgorithmError(code) from None


def encode_uvarint(value: int) -> bytes:
    """Encode a non-negative integer as an unsigned LEB128 varint."""
    if value < 0 or value > _MAX_UVARINT:
        raise ValueError(f"encode_uvarint: value out of range: {value}")

    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def decode_uvarint(data: bytes) -> tuple[int, int]:
    """Read one unsigned varint from the front of *data*.

    Returns
    -------
    tuple[int, int]
        The decoded value and the number of bytes consumed.

    Raises
    ------
    MalformedVarintError
        If *data* is empty or ends mid-varint, if the encoding uses more
        bytes than needed, or if the value does not fit in 63 bits.
    """
    value = 0
    for i, byte in enumerate(data):
        if i >= MAX_UVARINT_LEN:
            raise MalformedVarintError("decode_uvarint: varint overflows 63 bits")

        value |= (byte & 0x7F) << (7 * i)
        if byte & 0x80:
            continue

        if byte == 0 and i > 0:
            raise MalformedVarintError("decode_uvarint: varint is not minimally encoded")
        if value > _MAX_UVARINT:
            raise MalformedVarintError("decode_uvarint: varint overflows 63 bits")
        return value, i + 1

    raise MalformedVarintError("decode_uvarint: buffer too short")


def wrap(code: int, raw: bytes) -> bytes:
    """Prefix *raw* with the varint form of multicodec *code*."""
    return encode_uvarint(code) + bytes(raw)


def unwrap(data: bytes) -> tuple[int, bytes]:
    """Split an envelope into its multicodec code and the remaining bytes.

    The remainder is not checked against the algorithm's key shape.
    """
    code, n = decode_uvarint(data)
    return code, bytes(data[n:])
