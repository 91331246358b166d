"""Shared test fixtures for jwtui."""

from collections.abc import AsyncIterator
from pathlib import Path
from typing import NamedTuple

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes
from httpx import ASGITransport, AsyncClient

from jwtui.core.app import create_app

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537


class KeyFiles(NamedTuple):
    """Private and public halves of a keypair written as PEM and DER."""

    private_pem: Path
    private_der: Path
    public_pem: Path
    public_der: Path


def write_keypair(directory: Path, name: str, private_key: PrivateKeyTypes) -> KeyFiles:
    """Write PKCS#8 private and SubjectPublicKeyInfo public files."""
    public_key = private_key.public_key()
    paths = KeyFiles(
        private_pem=directory / f"{name}_private_key.pem",
        private_der=directory / f"{name}_private_key.der",
        public_pem=directory / f"{name}_public_key.pem",
        public_der=directory / f"{name}_public_key.der",
    )
    for encoding, path in (
        (serialization.Encoding.PEM, paths.private_pem),
        (serialization.Encoding.DER, paths.private_der),
    ):
        path.write_bytes(
            private_key.private_bytes(
                encoding=encoding,
                format=serialization.PrivateFormat.PKCS8,
                encryption_algorithm=serialization.NoEncryption(),
            )
        )
    for encoding, path in (
        (serialization.Encoding.PEM, paths.public_pem),
        (serialization.Encoding.DER, paths.public_der),
    ):
        path.write_bytes(
            public_key.public_bytes(
                encoding=encoding,
                format=serialization.PublicFormat.SubjectPublicKeyInfo,
            )
        )
    return paths


@pytest.fixture(scope="session")
def key_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("keys")


@pytest.fixture(scope="session")
def rsa_keys(key_dir: Path) -> KeyFiles:
    """RSA-2048 keypair files."""
    key = rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=RSA_KEY_SIZE,
    )
    return write_keypair(key_dir, "rsa", key)


@pytest.fixture(scope="session")
def p256_keys(key_dir: Path) -> KeyFiles:
    """NIST P-256 keypair files for ES256."""
    return write_keypair(key_dir, "ecdsa_p256", ec.generate_private_key(ec.SECP256R1()))


@pytest.fixture(scope="session")
def p384_keys(key_dir: Path) -> KeyFiles:
    """NIST P-384 keypair files for ES384."""
    return write_keypair(key_dir, "ecdsa_p384", ec.generate_private_key(ec.SECP384R1()))


@pytest.fixture(scope="session")
def ed25519_keys(key_dir: Path) -> KeyFiles:
    """Ed25519 keypair files for EdDSA."""
    return write_keypair(key_dir, "eddsa", ed25519.Ed25519PrivateKey.generate())


@pytest.fixture(autouse=True)
def _set_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin workbench settings so ambient environment does not leak in."""
    for name in (
        "JWTUI_DEFAULT_SECRET",
        "JWTUI_IGNORE_EXPIRY",
        "JWTUI_UTC_TIME_FORMAT",
        "JWTUI_LEEWAY_SECONDS",
        "JWTUI_CORS_ORIGINS",
        "JWTUI_KEY_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("JWTUI_LOG_LEVEL", "DEBUG")


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """Create an httpx test client for the workbench app."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
