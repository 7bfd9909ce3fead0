# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""did:key identifiers, parsing, and DID document derivation.

Encoding: ``did:key:z`` + base58btc(uvarint(multicodec code) || raw key bytes)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.hazmat.primitives.asymmetric.types import PublicKeyTypes

from .multibase import decode_multibase, encode_multibase
from .multicodec import algorithm_for, as_algorithm, code_for, unwrap, wrap
from .types import (
    BadPrefixError,
    DIDDocument,
    DIDDocumentError,
    KeyAlgorithm,
    UnsupportedInputAlgorithmError,
    VerificationKey,
    VerificationMethod,
    VerificationMethodType,
)
from .verification import project

DID_KEY_PREFIX = "did:key"

_DID_CONTEXT = "https://www.w3.org/ns/did/v1"
_ED25519_2020_CONTEXT = "https://w3id.org/security/suites/ed25519-2020/v1"
_MULTIKEY_CONTEXT = "https://w3id.org/security/multikey/v1"


@dataclass(frozen=True)
class DIDKey:
    """A did:key identifier: a key algorithm plus its raw public key bytes.

    The raw bytes are validated against the algorithm on construction, so a
    ``DIDKey`` always encodes to a string that decodes back to an equal
    ``DIDKey``.

    Secp256k1 keys are not canonicalized: the compressed and uncompressed
    encodings of one point are different identifiers.

    Examples
    --------
    >>> did_key = DIDKey(KeyAlgorithm.ED25519, bytes(32))
    >>> str(did_key)
    'did:key:z6MkeTG3bFFSLYVU7VqhgZxqr6YzpaGrQtFMh1uvqGy1vDnP'
    >>> DIDKey.parse(str(did_key)) == did_key
    True
    """

    algorithm: KeyAlgorithm
    raw: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "algorithm", as_algorithm(self.algorithm))
        object.__setattr__(self, "raw", bytes(self.raw))
        project(self.algorithm, self.raw)

    @classmethod
    def from_public_key(
        cls, public_key: PublicKeyTypes, *, compressed: bool = True
    ) -> "DIDKey":
        """Create a DIDKey from a ``cryptography`` public key object.

        Parameters
        ----------
        public_key:
            An Ed25519, RSA, or secp256k1 elliptic-curve public key.
        compressed:
            For secp256k1 keys, whether to embed the 33-byte compressed point
            (the default) or the 65-byte uncompressed one.

        Raises
        ------
        UnsupportedInputAlgorithmError
            For any other kind of key, including other elliptic curves.
        """
        if isinstance(public_key, ed25519.Ed25519PublicKey):
            raw = public_key.public_bytes(
                serialization.Encoding.Raw, serialization.PublicFormat.Raw
            )
            return cls(KeyAlgorithm.ED25519, raw)

        if isinstance(public_key, rsa.RSAPublicKey):
            raw = public_key.public_bytes(
                serialization.Encoding.DER,
                serialization.PublicFormat.SubjectPublicKeyInfo,
            )
            return cls(KeyAlgorithm.RSA, raw)

        if isinstance(public_key, ec.EllipticCurvePublicKey):
            if not isinstance(public_key.curve, ec.SECP256K1):
                raise UnsupportedInputAlgorithmError(
                    f"from_public_key: unsupported elliptic curve: {public_key.curve.name}"
                )
            point_format = (
                serialization.PublicFormat.CompressedPoint
                if compressed
                else serialization.PublicFormat.UncompressedPoint
            )
            raw = public_key.public_bytes(serialization.Encoding.X962, point_format)
            return cls(KeyAlgorithm.SECP256K1, raw)

        raise UnsupportedInputAlgorithmError(
            f"from_public_key: unsupported key type: {type(public_key).__name__}"
        )

    @classmethod
    def parse(cls, did: str) -> "DIDKey":
        """Parse a did:key string. Same as :func:`decode_key_did`."""
        return decode_key_did(did)

    @property
    def code(self) -> int:
        """Multicodec code of this key's algorithm."""
        return code_for(self.algorithm)

    @property
    def fingerprint(self) -> str:
        """The multibase part of the DID, after ``did:key:``."""
        return encode_multibase(wrap(self.code, self.raw))

    @property
    def did(self) -> str:
        return f"{DID_KEY_PREFIX}:{self.fingerprint}"

    def verification_key(self) -> VerificationKey:
        return project(self.algorithm, self.raw)

    def to_public_key(self) -> PublicKeyTypes:
        """Load the key as a ``cryptography`` public key object.

        Raises ``ValueError`` for secp256k1 bytes that are not a curve point.
        """
        return self.verification_key().to_public_key()

    def __str__(self) -> str:
        return self.did


def encode_key_did(algorithm: KeyAlgorithm | str, raw: bytes) -> str:
    """Encode raw public key bytes as a did:key string."""
    return DIDKey(algorithm, raw).did


def decode_key_did(did: str) -> DIDKey:
    """Decode a did:key string into a validated :class:`DIDKey`.

    Each stage must succeed before the next runs: prefix, multibase,
    varint, multicodec code, key shape.

    Raises
    ------
    BadPrefixError
        *did* does not start with ``did:key:``.
    UnsupportedMultibaseError
        The multibase selector is not ``z``.
    InvalidEncodingError
        The payload is not base58btc.
    MalformedVarintError
        The multicodec varint is truncated, non-minimal, or overflows.
    UnsupportedAlgorithmError
        The multicodec code is not Ed25519, RSA, or secp256k1.
    InvalidRsaKeyError, InvalidEd25519KeyError, InvalidSecp256k1KeyLengthError
        The key bytes do not fit the algorithm.
    """
    if not did.startswith(DID_KEY_PREFIX):
        raise BadPrefixError(f"decode_key_did: not a 'key' DID: {did!r}")

    rest = did[len(DID_KEY_PREFIX):]
    if not rest.startswith(":"):
        raise BadPrefixError(f"decode_key_did: missing ':' after {DID_KEY_PREFIX!r}")

    return _decode_fingerprint(rest[1:])


def _decode_fingerprint(fingerprint: str) -> DIDKey:
    envelope = decode_multibase(fingerprint)
    code, raw = unwrap(envelope)
    algorithm = algorithm_for(code)
    return DIDKey(algorithm, raw)


# ------------------------------------------------------------------
# DID documents
# ------------------------------------------------------------------


def method_type_for(algorithm: KeyAlgorithm) -> VerificationMethodType:
    """Verification method type used to describe a key of *algorithm*."""
    if algorithm is KeyAlgorithm.ED25519:
        return VerificationMethodType.ED25519_2020
    return VerificationMethodType.MULTIKEY


def build_key_did_document(did_key: DIDKey) -> DIDDocument:
    """Synthesize the DID document for a did:key.

    No network call is required. The document holds one verification
    method, ``<did>#<fingerprint>``, referenced from both ``authentication``
    and ``assertionMethod``. Ed25519 keys are described as
    ``Ed25519VerificationKey2020``; RSA and secp256k1 keys as ``Multikey``.
    """
    did = did_key.did
    vm_id = f"{did}#{did_key.fingerprint}"
    vm_type = method_type_for(did_key.algorithm)

    if vm_type is VerificationMethodType.ED25519_2020:
        context = [_DID_CONTEXT, _ED25519_2020_CONTEXT]
    else:
        context = [_DID_CONTEXT, _MULTIKEY_CONTEXT]

    verification_method = VerificationMethod(
        id=vm_id,
        type=vm_type,
        controller=did,
        public_key_multibase=did_key.fingerprint,
    )

    return DIDDocument(
        context=context,
        id=did,
        verification_method=[verification_method],
        authentication=[vm_id],
        assertion_method=[vm_id],
    )


def resolve_key_did(did: str) -> DIDDocument:
    """Resolve a did:key string to its DID document, entirely offline."""
    return build_key_did_document(decode_key_did(did))


def key_from_document(doc: DIDDocument) -> DIDKey:
    """Decode the key of the first supported verification method in *doc*.

    A method is supported when its declared type matches the algorithm of
    the key it carries. When *doc* describes a did:key, the decoded key must
    be that DID's own key.

    Raises
    ------
    DIDDocumentError
        No method in *doc* is supported, or the key does not belong to the
        document's did:key.
    DIDKeyError
        A method's ``publicKeyMultibase`` is not a valid multicodec key.
    """
    for vm in doc.verification_method:
        did_key = _decode_fingerprint(vm.public_key_multibase)
        if vm.type is not method_type_for(did_key.algorithm):
            continue

        if doc.id.startswith(f"{DID_KEY_PREFIX}:") and doc.id != did_key.did:
            raise DIDDocumentError(
                f"key_from_document: key in {vm.id!r} belongs to {did_key.did}, "
                f"not {doc.id}"
            )
        return did_key

    raise DIDDocumentError(
        f"key_from_document: no supported verification method in document for {doc.id}"
    )


def did_document_to_dict(doc: DIDDocument) -> dict[str, Any]:
    """Render a DIDDocument as a JSON-serializable dict."""
    return {
        "@context": list(doc.context),
        "id": doc.id,
        "verificationMethod": [
            {
                "id": vm.id,
                "type": vm.type.value,
                "controller": vm.controller,
                "publicKeyMultibase": vm.public_key_multibase,
            }
            for vm in doc.verification_method
        ],
        "authentication": list(doc.authentication),
        "assertionMethod": list(doc.assertion_method),
    }


def parse_did_document(raw: object, expected_did: str) -> DIDDocument:
    """Parse and validate a JSON-decoded DID document for *expected_did*.

    Verification methods of unknown types are skipped. Every remaining
    method must be controlled by *expected_did* and carry a
    ``publicKeyMultibase``; the relationship lists must hold strings.
    """
    if not isinstance(raw, dict):
        raise DIDDocumentError(
            f"parse_did_document: expected dict, got {type(raw).__name__}"
        )

    if raw.get("id") != expected_did:
        raise DIDDocumentError(
            f"parse_did_document: document id {raw.get('id')!r} does not match "
            f"requested DID {expected_did!r}"
        )

    context = raw.get("@context", [])
    if isinstance(context, str):
        context = [context]

    return DIDDocument(
        context=_string_list(context, "@context"),
        id=expected_did,
        verification_method=[
            vm
            for vm in (
                _parse_verification_method(vm_raw, expected_did)
                for vm_raw in _list_field(raw, "verificationMethod")
            )
            if vm is not None
        ],
        authentication=_string_list(raw.get("authentication", []), "authentication"),
        assertion_method=_string_list(raw.get("assertionMethod", []), "assertionMethod"),
    )


def _parse_verification_method(
    vm_raw: object, expected_did: str
) -> VerificationMethod | None:
    if not isinstance(vm_raw, dict):
        raise DIDDocumentError("parse_did_document: verification method is not an object")

    try:
        vm_type = VerificationMethodType(vm_raw.get("type", ""))
    except ValueError:
        return None

    vm_id = vm_raw.get("id")
    controller = vm_raw.get("controller")
    if controller != expected_did:
        raise DIDDocumentError(
            f"parse_did_document: verification method {vm_id!r} is controlled by "
            f"{controller!r}, not {expected_did!r}"
        )

    public_key_multibase = vm_raw.get("publicKeyMultibase")
    if not isinstance(public_key_multibase, str) or not public_key_multibase:
        raise DIDDocumentError(
            f"parse_did_document: verification method {vm_id!r} has no publicKeyMultibase"
        )

    return VerificationMethod(
        id=str(vm_id),
        type=vm_type,
        controller=controller,
        public_key_multibase=public_key_multibase,
    )


def _list_field(raw: dict[str, Any], name: str) -> list[Any]:
    value = raw.get(name, [])
    if not isinstance(value, list):
        raise DIDDocumentError(f"parse_did_document: {name} is not a list")
    return value


def _string_list(value: object, name: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise DIDDocumentError(f"parse_did_document: {name} must be a list of strings")
    return list(value)
