"""Tests for secret spec resolution."""

from pathlib import Path

import pytest

from jwtui.crypto.errors import JwtUiError, KeyMaterialError, SecretFileError
from jwtui.crypto.secret_resolver import resolve_secret, secret_type_for_path
from jwtui.crypto.types import Algorithm, SecretType


class TestInlineSecrets:
    """Secrets typed directly into the secret field."""

    def test_plain_secret(self) -> None:
        material = resolve_secret("secrets", Algorithm.HS256)
        assert material.secret_type is SecretType.PLAIN
        assert material.consume() == b"secrets"

    def test_b64_prefix_is_stripped(self) -> None:
        material = resolve_secret("b64:c2VjcmV0cw==", Algorithm.HS256)
        assert material.secret_type is SecretType.BASE64
        assert material.consume() == b"c2VjcmV0cw=="

    def test_empty_secret_is_plain(self) -> None:
        material = resolve_secret("", Algorithm.HS384)
        assert material.secret_type is SecretType.PLAIN
        assert material.consume() == b""

    def test_utf8_bytes(self) -> None:
        material = resolve_secret("sécret", Algorithm.HS512)
        assert material.consume() == "sécret".encode()


class TestFileSecrets:
    """Secrets loaded from ``@path`` references."""

    def test_pem_extension(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "key.pem").write_bytes(b"-----BEGIN PUBLIC KEY-----")
        monkeypatch.chdir(tmp_path)
        material = resolve_secret("@./key.pem", Algorithm.RS256)
        assert material.secret_type is SecretType.PEM
        assert material.consume() == b"-----BEGIN PUBLIC KEY-----"

    def test_der_extension(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "key.der").write_bytes(b"\x30\x82")
        monkeypatch.chdir(tmp_path)
        material = resolve_secret("@./key.der", Algorithm.RS256)
        assert material.secret_type is SecretType.DER

    def test_pk8_extension_is_der(self, tmp_path: Path) -> None:
        path = tmp_path / "key.pk8"
        path.write_bytes(b"\x30\x82")
        material = resolve_secret(f"@{path}", Algorithm.ES256)
        assert material.secret_type is SecretType.DER

    def test_other_extension_is_plain(self, tmp_path: Path) -> None:
        path = tmp_path / "secret.txt"
        path.write_bytes(b"from-a-file")
        material = resolve_secret(f"@{path}", Algorithm.HS256)
        assert material.secret_type is SecretType.PLAIN
        assert material.consume() == b"from-a-file"

    def test_file_prefix_wins_over_b64(self, tmp_path: Path) -> None:
        path = tmp_path / "b64:weird.pem"
        path.write_bytes(b"pem-bytes")
        material = resolve_secret(f"@{path}", Algorithm.RS256)
        assert material.secret_type is SecretType.PEM
        assert material.consume() == b"pem-bytes"

    def test_b64_prefix_on_path_is_part_of_filename(self, tmp_path: Path) -> None:
        with pytest.raises(SecretFileError):
            resolve_secret(f"@b64:{tmp_path / 'key.pem'}", Algorithm.RS256)

    def test_missing_file_is_io_error(self, tmp_path: Path) -> None:
        with pytest.raises(SecretFileError) as exc_info:
            resolve_secret(f"@{tmp_path / 'missing.pem'}", Algorithm.RS256)
        assert not isinstance(exc_info.value, KeyMaterialError)
        assert isinstance(exc_info.value, OSError)
        assert isinstance(exc_info.value, JwtUiError)
        assert "missing.pem" in str(exc_info.value)

    def test_directory_is_io_error(self, tmp_path: Path) -> None:
        with pytest.raises(SecretFileError):
            resolve_secret(f"@{tmp_path}", Algorithm.HS256)


class TestSecretTypeForPath:
    """Extension-based type inference."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("key.pem", SecretType.PEM),
            ("KEY.PEM", SecretType.PEM),
            ("key.der", SecretType.DER),
            ("key.pk8", SecretType.DER),
            ("jwks.json", SecretType.PLAIN),
            ("secret", SecretType.PLAIN),
        ],
    )
    def test_extension(self, name: str, expected: SecretType) -> None:
        assert secret_type_for_path(Path(name)) is expected
