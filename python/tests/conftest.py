# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

import pytest
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa


@pytest.fixture
def ed25519_key():
    return ed25519.Ed25519PrivateKey.generate().public_key()


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048).public_key()


@pytest.fixture
def secp256k1_key():
    return ec.generate_private_key(ec.SECP256K1()).public_key()


@pytest.fixture
def p256_key():
    return ec.generate_private_key(ec.SECP256R1()).public_key()
