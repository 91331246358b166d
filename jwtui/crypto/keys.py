"""Build signing and verification keys from resolved secret material."""

import base64
import binascii
import logging
from typing import assert_never

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.hazmat.primitives.asymmetric.types import (
    PrivateKeyTypes,
    PublicKeyTypes,
)

from jwtui.crypto.errors import AlgorithmMismatchError, KeyMaterialError
from jwtui.crypto.types import (
    Algorithm,
    AlgorithmFamily,
    KeyUse,
    SecretMaterial,
    SecretType,
)

logger = logging.getLogger(__name__)

JwsKey = bytes | PrivateKeyTypes | PublicKeyTypes

_SYMMETRIC = frozenset({SecretType.PLAIN, SecretType.BASE64})
_ASYMMETRIC = frozenset({SecretType.PEM, SecretType.DER})

ACCEPTED_SECRET_TYPES: dict[AlgorithmFamily, frozenset[SecretType]] = {
    AlgorithmFamily.HMAC: _SYMMETRIC,
    AlgorithmFamily.RSA_PKCS1: _ASYMMETRIC,
    AlgorithmFamily.RSA_PSS: _ASYMMETRIC,
    AlgorithmFamily.ECDSA: _ASYMMETRIC,
    AlgorithmFamily.EDDSA: _ASYMMETRIC,
}

EC_CURVES: dict[Algorithm, str] = {
    Algorithm.ES256: ec.SECP256R1.name,
    Algorithm.ES384: ec.SECP384R1.name,
}

_KEY_ERRORS = (ValueError, TypeError, UnsupportedAlgorithm)


def build_key(algorithm: Algorithm, material: SecretMaterial, use: KeyUse) -> JwsKey:
    """Build a key for ``algorithm`` from ``material``.

    The material is consumed whether or not a key can be built.
    """
    secret_type = material.secret_type
    data = material.consume()
    family = algorithm.family
    if secret_type not in ACCEPTED_SECRET_TYPES[family]:
        raise AlgorithmMismatchError(
            f"Invalid secret file type for {algorithm.value}: "
            f"{family.value} keys cannot be built from {secret_type.value} secrets"
        )

    match family:
        case AlgorithmFamily.HMAC:
            return _hmac_key(data, secret_type)
        case AlgorithmFamily.RSA_PKCS1 | AlgorithmFamily.RSA_PSS:
            key = _load_asymmetric(algorithm, data, secret_type, use)
            if not isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
                raise KeyMaterialError(f"{algorithm.value} requires an RSA key")
            return key
        case AlgorithmFamily.ECDSA:
            key = _load_asymmetric(algorithm, data, secret_type, use)
            if not isinstance(
                key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)
            ):
                raise KeyMaterialError(f"{algorithm.value} requires an EC key")
            if key.curve.name != EC_CURVES[algorithm]:
                raise KeyMaterialError(
                    f"{algorithm.value} requires a {EC_CURVES[algorithm]} key, "
                    f"got {key.curve.name}"
                )
            return key
        case AlgorithmFamily.EDDSA:
            key = _load_asymmetric(algorithm, data, secret_type, use)
            if not isinstance(
                key, (ed25519.Ed25519PrivateKey, ed25519.Ed25519PublicKey)
            ):
                raise KeyMaterialError(f"{algorithm.value} requires an Ed25519 key")
            return key
        case _:
            assert_never(family)


def build_signing_key(algorithm: Algorithm, material: SecretMaterial) -> JwsKey:
    return build_key(algorithm, material, KeyUse.SIGN)


def build_verification_key(algorithm: Algorithm, material: SecretMaterial) -> JwsKey:
    return build_key(algorithm, material, KeyUse.VERIFY)


def _hmac_key(data: bytes, secret_type: SecretType) -> bytes:
    """Return the raw HMAC key, base64-decoding it when needed."""
    if secret_type is SecretType.PLAIN:
        return data
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as exc:
        raise KeyMaterialError(f"Invalid base64 secret: {exc}") from exc


def _load_asymmetric(
    algorithm: Algorithm, data: bytes, secret_type: SecretType, use: KeyUse
) -> PrivateKeyTypes | PublicKeyTypes:
    try:
        if use is KeyUse.SIGN:
            return _load_private(data, secret_type)
        return _load_public(data, secret_type)
    except _KEY_ERRORS as exc:
        logger.debug("Rejected %s key for %s", secret_type.value, algorithm.value)
        raise KeyMaterialError(
            f"Invalid {secret_type.value.upper()} key for {algorithm.value}: {exc}"
        ) from exc


def _load_private(data: bytes, secret_type: SecretType) -> PrivateKeyTypes:
    if secret_type is SecretType.PEM:
        return serialization.load_pem_private_key(data, password=None)
    return serialization.load_der_private_key(data, password=None)


def _load_public(data: bytes, secret_type: SecretType) -> PublicKeyTypes:
    """Load a public key, falling back to the public half of a private key."""
    if secret_type is SecretType.PEM:
        load_public = serialization.load_pem_public_key
    else:
        load_public = serialization.load_der_public_key
    try:
        return load_public(data)
    except ValueError as public_exc:
        try:
            private_key = _load_private(data, secret_type)
        except _KEY_ERRORS:
            raise public_exc from None
        return private_key.public_key()
