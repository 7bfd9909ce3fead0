# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""Shared value types for the didkey package."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union

from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa


class KeyAlgorithm(str, Enum):
    """Public-key algorithms that can be carried in a did:key identifier."""

    ED25519 = "Ed25519"
    RSA = "RSA"
    SECP256K1 = "Secp256k1"


class VerificationMethodType(str, Enum):
    """Type of a DID verification method."""

    ED25519_2020 = "Ed25519VerificationKey2020"
    MULTIKEY = "Multikey"


# ------------------------------------------------------------------
# Verification keys
# ------------------------------------------------------------------


@dataclass(frozen=True)
class RsaVerifyKey:
    """An RSA public key parsed from DER SubjectPublicKeyInfo."""

    algorithm: ClassVar[KeyAlgorithm] = KeyAlgorithm.RSA

    der: bytes
    key: rsa.RSAPublicKey = field(compare=False, repr=False)

    def to_public_key(self) -> rsa.RSAPublicKey:
        return self.key


@dataclass(frozen=True)
class Ed25519VerifyKey:
    """A raw 32-byte Ed25519 public key."""

    algorithm: ClassVar[KeyAlgorithm] = KeyAlgorithm.ED25519

    raw: bytes

    def to_public_key(self) -> ed25519.Ed25519PublicKey:
        return ed25519.Ed25519PublicKey.from_public_bytes(self.raw)


@dataclass(frozen=True)
class Secp256k1RawPoint:
    """An encoded secp256k1 point, 33 bytes compressed or 65 uncompressed.

    The point is not checked against the curve until :meth:`to_public_key`
    is called; that is left to the verifier.
    """

    algorithm: ClassVar[KeyAlgorithm] = KeyAlgorithm.SECP256K1

    raw: bytes

    @property
    def compressed(self) -> bool:
        return len(self.raw) == 33

    def to_public_key(self) -> ec.EllipticCurvePublicKey:
        """Load the point as a ``cryptography`` key.

        Raises
        ------
        ValueError
            If the bytes do not describe a point on secp256k1.
        """
        return ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), self.raw)


VerificationKey = Union[RsaVerifyKey, Ed25519VerifyKey, Secp256k1RawPoint]


# ------------------------------------------------------------------
# DID documents
# ------------------------------------------------------------------


@dataclass(frozen=True)
class VerificationMethod:
    """A single verification method entry in a DID Document."""

    id: str
    type: VerificationMethodType
    controller: str
    public_key_multibase: str


@dataclass(frozen=True)
class DIDDocument:
    """W3C DID Document."""

    context: list[str]
    id: str
    verification_method: list[VerificationMethod]
    authentication: list[str]
    assertion_method: list[str]


# ------------------------------------------------------------------
# Errors
# ------------------------------------------------------------------


class DIDKeyError(ValueError):
    """Base class for every error raised while encoding or decoding a did:key."""


class BadPrefixError(DIDKeyError):
    """Raised when a string is not a ``did:key:`` identifier."""


class UnsupportedMultibaseError(DIDKeyError):
    """Raised when the multibase selector is not base58btc (``z``)."""


class InvalidEncodingError(DIDKeyError):
    """Raised when the multibase payload is not valid base58btc."""


class MalformedVarintError(DIDKeyError):
    """Raised when the multicodec varint is truncated, non-minimal or overflows."""


class UnsupportedAlgorithmError(DIDKeyError):
    """Raised when a decoded multicodec code is not a supported key type."""

    def __init__(self, code: int) -> None:
        self.code = code
        super().__init__(f"unsupported key type multicodec code: 0x{code:x}")


class InvalidRsaKeyError(DIDKeyError):
    """Raised when RSA key bytes are not a DER SubjectPublicKeyInfo for RSA."""


class InvalidEd25519KeyError(DIDKeyError):
    """Raised when Ed25519 key bytes have the wrong length."""


class InvalidSecp256k1KeyLengthError(DIDKeyError):
    """Raised when secp256k1 key bytes are neither 33 nor 65 bytes long."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"invalid Secp256k1 public key length: {length}")


class UnsupportedInputAlgorithmError(DIDKeyError):
    """Raised when asked to encode a key outside Ed25519, RSA and Secp256k1."""


class DIDDocumentError(DIDKeyError):
    """Raised when a DID document is malformed or carries no usable key."""
