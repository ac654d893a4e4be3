"""Shared test fixtures for oci-dns-solver."""

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

import oci_dns_solver.auth as _auth
import oci_dns_solver.webhook as _webhook


def pytest_runtest_setup(item):
    """Reset module-level caches between tests."""
    _auth._core_api = None
    _webhook._solver = None


@pytest.fixture(scope="session")
def rsa_private_key_pem():
    """An unencrypted 2048-bit RSA key in PEM form, as stored in a profile secret."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.TraditionalOpenSSL,
        serialization.NoEncryption(),
    ).decode()
