# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dsa, x25519

from didkey.did import DIDKey, decode_key_did, encode_key_did
from didkey.types import (
    BadPrefixError,
    DIDKeyError,
    InvalidEd25519KeyError,
    InvalidEncodingError,
    InvalidRsaKeyError,
    InvalidSecp256k1KeyLengthError,
    KeyAlgorithm,
    MalformedVarintError,
    UnsupportedAlgorithmError,
    UnsupportedInputAlgorithmError,
    UnsupportedMultibaseError,
)

ZERO_ED25519_DID = "did:key:z6MkeTG3bFFSLYVU7VqhgZxqr6YzpaGrQtFMh1uvqGy1vDnP"
COUNTING_ED25519_DID = "did:key:z6MkeXCES4onVW4up9Qgz1KRnZsKmGufcaZxF6Zpv2w5QwUK"
SECP256K1_DID = "did:key:zEPJbyXqVNUVQJzVda4RG1Mc8sZ122bmKqWf46zQ44FmZoHU4"


# --- Pinned encodings ---


def test_zero_ed25519_key_encoding():
    assert encode_key_did(KeyAlgorithm.ED25519, bytes(32)) == ZERO_ED25519_DID


def test_counting_ed25519_key_encoding():
    raw = bytes(range(1, 33))
    assert encode_key_did(KeyAlgorithm.ED25519, raw) == COUNTING_ED25519_DID
    assert decode_key_did(COUNTING_ED25519_DID) == DIDKey(KeyAlgorithm.ED25519, raw)


def test_secp256k1_encoding():
    raw = b"\x02" + b"\x11" * 32
    did_key = DIDKey(KeyAlgorithm.SECP256K1, raw)
    assert str(did_key) == SECP256K1_DID
    assert did_key.fingerprint == SECP256K1_DID[len("did:key:"):]
    assert did_key.code == 0x1206


def test_every_did_starts_with_base58btc_selector(rsa_key):
    assert str(DIDKey.from_public_key(rsa_key)).startswith("did:key:z")


# --- Round trips ---


def test_round_trip_from_key_objects(ed25519_key, rsa_key, secp256k1_key):
    for public_key in (ed25519_key, rsa_key, secp256k1_key):
        did_key = DIDKey.from_public_key(public_key)
        parsed = DIDKey.parse(did_key.did)
        assert parsed == did_key
        assert parsed.algorithm is did_key.algorithm
        assert parsed.raw == did_key.raw


def test_to_public_key_returns_equal_key(ed25519_key, rsa_key, secp256k1_key):
    raw_format = (serialization.Encoding.Raw, serialization.PublicFormat.Raw)
    loaded = DIDKey.parse(str(DIDKey.from_public_key(ed25519_key))).to_public_key()
    assert loaded.public_bytes(*raw_format) == ed25519_key.public_bytes(*raw_format)

    loaded = DIDKey.parse(str(DIDKey.from_public_key(rsa_key))).to_public_key()
    assert loaded.public_numbers() == rsa_key.public_numbers()

    loaded = DIDKey.parse(str(DIDKey.from_public_key(secp256k1_key))).to_public_key()
    assert loaded.public_numbers() == secp256k1_key.public_numbers()


def test_secp256k1_encodings_are_not_canonicalized(secp256k1_key):
    compressed = DIDKey.from_public_key(secp256k1_key)
    uncompressed = DIDKey.from_public_key(secp256k1_key, compressed=False)

    assert len(compressed.raw) == 33
    assert len(uncompressed.raw) == 65
    assert compressed != uncompressed
    assert str(compressed) != str(uncompressed)
    assert DIDKey.parse(str(uncompressed)) == uncompressed
    assert (
        compressed.to_public_key().public_numbers()
        == uncompressed.to_public_key().public_numbers()
    )


def test_rsa_did_carries_spki(rsa_key):
    did_key = DIDKey.from_public_key(rsa_key)
    assert did_key.algorithm is KeyAlgorithm.RSA
    assert did_key.raw == rsa_key.public_bytes(
        serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo
    )
    assert did_key.verification_key().der == did_key.raw


# --- Construction ---


def test_construction_validates_eagerly():
    with pytest.raises(InvalidEd25519KeyError):
        DIDKey(KeyAlgorithm.ED25519, bytes(31))
    with pytest.raises(InvalidSecp256k1KeyLengthError):
        DIDKey(KeyAlgorithm.SECP256K1, bytes(32))
    with pytest.raises(InvalidRsaKeyError):
        DIDKey(KeyAlgorithm.RSA, b"not der")


def test_construction_copies_raw_bytes():
    raw = bytearray(32)
    did_key = DIDKey(KeyAlgorithm.ED25519, raw)
    raw[0] = 1
    assert did_key.raw == bytes(32)
    assert str(did_key) == ZERO_ED25519_DID


def test_construction_coerces_algorithm_names():
    assert DIDKey("Ed25519", bytes(32)).algorithm is KeyAlgorithm.ED25519


def test_encode_rejects_unknown_algorithm():
    with pytest.raises(UnsupportedInputAlgorithmError):
        encode_key_did("P-256", bytes(33))


def test_from_public_key_rejects_other_curves(p256_key):
    with pytest.raises(UnsupportedInputAlgorithmError, match="secp256r1"):
        DIDKey.from_public_key(p256_key)


def test_from_public_key_rejects_other_key_types():
    with pytest.raises(UnsupportedInputAlgorithmError):
        DIDKey.from_public_key(x25519.X25519PrivateKey.generate().public_key())
    with pytest.raises(UnsupportedInputAlgorithmError):
        DIDKey.from_public_key(dsa.generate_private_key(key_size=1024).public_key())


# --- Decode failures, one per stage ---


@pytest.mark.parametrize(
    "did",
    [
        "example:foo",
        "did:web:example.com",
        "",
        "did:keyz6MkeTG3bFFSLYVU7VqhgZxqr6YzpaGrQtFMh1uvqGy1vDnP",
    ],
)
def test_decode_rejects_bad_prefix(did):
    with pytest.raises(BadPrefixError):
        decode_key_did(did)


@pytest.mark.parametrize("did", ["did:key:", "did:key:f00ed01", "did:key:mAO0B"])
def test_decode_rejects_other_multibase(did):
    with pytest.raises(UnsupportedMultibaseError):
        decode_key_did(did)


def test_decode_rejects_invalid_base58():
    with pytest.raises(InvalidEncodingError):
        decode_key_did("did:key:z6Mk0OIl")


@pytest.mark.parametrize(
    "did",
    [
        "did:key:z",  # empty envelope
        "did:key:z56",  # 0xed with the continuation byte missing
        "did:key:z2Nmx3",  # 0xed 0x81 0x00, non-minimal
    ],
)
def test_decode_rejects_malformed_varint(did):
    with pytest.raises(MalformedVarintError):
        decode_key_did(did)


def test_decode_rejects_unknown_code():
    # uvarint(0x9999) || 01 02 03
    with pytest.raises(UnsupportedAlgorithmError) as excinfo:
        decode_key_did("did:key:z2KYBwy9Wr")
    assert excinfo.value.code == 0x9999


def test_decode_rejects_short_ed25519_key():
    # 0xed 0x01 || 31 zero bytes
    with pytest.raises(InvalidEd25519KeyError):
        decode_key_did("did:key:z2DQUyFHStG42FqbEhyM6LhkEqqV45NGGqKCwNxVWWu7Yzj")


def test_decode_rejects_short_secp256k1_key():
    # 0x86 0x24 || 32 bytes of 0x11
    with pytest.raises(InvalidSecp256k1KeyLengthError):
        decode_key_did("did:key:z42t8aJMQJ4aAnvbUSfnCskLPc5zWdUjdhvdaqezkwqyfBn8")


def test_decode_rejects_non_rsa_key_under_rsa_code(p256_key):
    from didkey.multibase import encode_multibase
    from didkey.multicodec import RSA_X509_PUB, wrap

    spki = p256_key.public_bytes(
        serialization.Encoding.DER, serialization.PublicFormat.SubjectPublicKeyInfo
    )
    did = "did:key:" + encode_multibase(wrap(RSA_X509_PUB, spki))
    with pytest.raises(InvalidRsaKeyError):
        decode_key_did(did)


def test_all_decode_errors_share_a_base_class():
    with pytest.raises(DIDKeyError):
        decode_key_did("example:foo")
    with pytest.raises(ValueError):
        decode_key_did("did:key:z2KYBwy9Wr")

