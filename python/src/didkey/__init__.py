# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""didkey — encode and decode did:key identifiers for Ed25519, RSA and secp256k1 keys.

Quickstart
----------
>>> from didkey import DIDKey, KeyAlgorithm
>>> did_key = DIDKey(KeyAlgorithm.ED25519, bytes(32))
>>> str(did_key)
'did:key:z6MkeTG3bFFSLYVU7VqhgZxqr6YzpaGrQtFMh1uvqGy1vDnP'

From a ``cryptography`` key object, and back to a verification key:

>>> from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
>>> did = str(DIDKey.from_public_key(Ed25519PrivateKey.generate().public_key()))
>>> DIDKey.parse(did).verification_key()  # doctest: +ELLIPSIS
Ed25519VerifyKey(raw=...)
"""

from .did import (
    DID_KEY_PREFIX,
    DIDKey,
    build_key_did_document,
    decode_key_did,
    did_document_to_dict,
    encode_key_did,
    key_from_document,
    method_type_for,
    parse_did_document,
    resolve_key_did,
)
from .types import (
    BadPrefixError,
    DIDDocument,
    DIDDocumentError,
    DIDKeyError,
    Ed25519VerifyKey,
    InvalidEd25519KeyError,
    InvalidEncodingError,
    InvalidRsaKeyError,
    InvalidSecp256k1KeyLengthError,
    KeyAlgorithm,
    MalformedVarintError,
    RsaVerifyKey,
    Secp256k1RawPoint,
    UnsupportedAlgorithmError,
    UnsupportedInputAlgorithmError,
    UnsupportedMultibaseError,
    VerificationKey,
    VerificationMethod,
    VerificationMethodType,
)
from .verification import project, to_public_key

__all__ = [
    # Identifier codec
    "DID_KEY_PREFIX",
    "DIDKey",
    "encode_key_did",
    "decode_key_did",
    # Verification keys
    "project",
    "to_public_key",
    "VerificationKey",
    "RsaVerifyKey",
    "Ed25519VerifyKey",
    "Secp256k1RawPoint",
    # DID documents
    "build_key_did_document",
    "resolve_key_did",
    "key_from_document",
    "method_type_for",
    "did_document_to_dict",
    "parse_did_document",
    # Core types
    "KeyAlgorithm",
    "DIDDocument",
    "VerificationMethod",
    "VerificationMethodType",
    # Exceptions
    "DIDKeyError",
    "BadPrefixError",
    "UnsupportedMultibaseError",
    "InvalidEncodingError",
    "MalformedVarintError",
    "UnsupportedAlgorithmError",
    "InvalidRsaKeyError",
    "InvalidEd25519KeyError",
    "InvalidSecp256k1KeyLengthError",
    "UnsupportedInputAlgorithmError",
    "DIDDocumentError",
]
