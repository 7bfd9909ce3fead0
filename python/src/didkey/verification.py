# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Verification-key projection.

:func:`project` turns an algorithm and its raw key bytes into the typed
:data:`~didkey.types.VerificationKey` a signature verifier consumes. It is
also the shape check every :class:`~didkey.did.DIDKey` passes through on
construction, so a key that would fail here can never be encoded or decoded.

Per-algorithm rules
-------------------
- **RSA** — the bytes must parse as DER SubjectPublicKeyInfo and the key
  inside must be RSA.
- **Ed25519** — exactly 32 bytes.
- **Secp256k1** — 33 (compressed) or 65 (uncompressed) bytes. The point is
  not checked against the curve here.
"""

from __future__ import annotations

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes

from .multicodec import as_algorithm
from .types import (
    Ed25519VerifyKey,
    InvalidEd25519KeyError,
    InvalidRsaKeyError,
    InvalidSecp256k1KeyLengthError,
    KeyAlgorithm,
    RsaVerifyKey,
    Secp256k1RawPoint,
    VerificationKey,
)

ED25519_PUBLIC_KEY_SIZE = 32
SECP256K1_KEY_SIZES = (33, 65)


def project(algorithm: KeyAlgorithm | str, raw: bytes) -> VerificationKey:
    """Build the verification key for *raw* under *algorithm*.

    Raises
    ------
    InvalidRsaKeyError
        RSA bytes that are not an RSA SubjectPublicKeyInfo.
    InvalidEd25519KeyError
        Ed25519 bytes of the wrong length.
    InvalidSecp256k1KeyLengthError
        Secp256k1 bytes that are neither 33 nor 65 bytes long.
    UnsupportedInputAlgorithmError
        *algorithm* is not one of the supported algorithms.
    """
    algorithm = as_algorithm(algorithm)
    raw = bytes(raw)

    if algorithm is KeyAlgorithm.RSA:
        return _project_rsa(raw)

    if algorithm is KeyAlgorithm.ED25519:
        if len(raw) != ED25519_PUBLIC_KEY_SIZE:
            raise InvalidEd25519KeyError(
                f"project: expected {ED25519_PUBLIC_KEY_SIZE}-byte Ed25519 public key, "
                f"got {len(raw)}"
            )
        return Ed25519VerifyKey(raw=raw)

    # KeyAlgorithm.SECP256K1
    if len(raw) not in SECP256K1_KEY_SIZES:
        raise InvalidSecp256k1KeyLengthError(len(raw))
    return Secp256k1RawPoint(raw=raw)


def to_public_key(verification_key: VerificationKey) -> PublicKeyTypes:
    """Return the ``cryptography`` public key behind *verification_key*."""
    return verification_key.to_public_key()


def _project_rsa(raw: bytes) -> RsaVerifyKey:
    try:
        key = serialization.load_der_public_key(raw)
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise InvalidRsaKeyError(
            f"project: cannot parse RSA SubjectPublicKeyInfo: {exc}"
        ) from exc

    if not isinstance(key, rsa.RSAPublicKey):
        raise InvalidRsaKeyError(
            f"project: public key is not an RSA key, got {type(key).__name__}"
        )
    return RsaVerifyKey(der=raw, key=key)
