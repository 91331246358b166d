"""Resolve a secret spec (``@file``, ``b64:inline`` or inline) into bytes."""

import logging
from pathlib import Path

from jwtui.crypto.errors import SecretFileError
from jwtui.crypto.types import Algorithm, SecretMaterial, SecretType

logger = logging.getLogger(__name__)

FILE_PREFIX = "@"
BASE64_PREFIX = "b64:"

_EXTENSION_TYPES = {
    ".pem": SecretType.PEM,
    ".der": SecretType.DER,
    ".pk8": SecretType.DER,
}


def secret_type_for_path(path: Path) -> SecretType:
    """Infer the secret encoding from a key file's extension."""
    return _EXTENSION_TYPES.get(path.suffix.lower(), SecretType.PLAIN)


def read_secret_file(path: Path) -> bytes:
    """Read a whole secret file, raising SecretFileError on any failure."""
    try:
        return path.read_bytes()
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise SecretFileError(f"Unable to read secret file {path}: {reason}") from exc


def resolve_secret(spec: str, algorithm: Algorithm) -> SecretMaterial:
    """Turn a raw secret spec into bytes plus the detected SecretType.

    The ``@`` file prefix is checked first, so ``@b64:key`` names a file
    called ``b64:key``.
    """
    if spec.startswith(FILE_PREFIX):
        path = Path(spec[len(FILE_PREFIX) :])
        secret_type = secret_type_for_path(path)
        data = read_secret_file(path)
        logger.debug(
            "Resolved %s secret from file %s for %s",
            secret_type.value,
            path,
            algorithm.value,
        )
        return SecretMaterial(data, secret_type)

    if spec.startswith(BASE64_PREFIX):
        secret_type = SecretType.BASE64
        data = spec[len(BASE64_PREFIX) :].encode()
    else:
        secret_type = SecretType.PLAIN
        data = spec.encode()
    logger.debug("Resolved inline %s secret for %s", secret_type.value, algorithm.value)
    return SecretMaterial(data, secret_type)
