"""Type definitions for algorithms, secret material, and key usage."""

from enum import StrEnum


class AlgorithmFamily(StrEnum):
    """Signature scheme families; each accepts a fixed set of secret types."""

    HMAC = "HMAC"
    RSA_PKCS1 = "RSA-PKCS1"
    RSA_PSS = "RSA-PSS"
    ECDSA = "ECDSA"
    EDDSA = "EdDSA"


class Algorithm(StrEnum):
    """JWS algorithms the workbench can sign and verify with."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"
    ES256 = "ES256"
    ES384 = "ES384"
    EDDSA = "EdDSA"

    @property
    def family(self) -> AlgorithmFamily:
        return ALGORITHM_FAMILIES[self]


ALGORITHM_FAMILIES: dict[Algorithm, AlgorithmFamily] = {
    Algorithm.HS256: AlgorithmFamily.HMAC,
    Algorithm.HS384: AlgorithmFamily.HMAC,
    Algorithm.HS512: AlgorithmFamily.HMAC,
    Algorithm.RS256: AlgorithmFamily.RSA_PKCS1,
    Algorithm.RS384: AlgorithmFamily.RSA_PKCS1,
    Algorithm.RS512: AlgorithmFamily.RSA_PKCS1,
    Algorithm.PS256: AlgorithmFamily.RSA_PSS,
    Algorithm.PS384: AlgorithmFamily.RSA_PSS,
    Algorithm.PS512: AlgorithmFamily.RSA_PSS,
    Algorithm.ES256: AlgorithmFamily.ECDSA,
    Algorithm.ES384: AlgorithmFamily.ECDSA,
    Algorithm.EDDSA: AlgorithmFamily.EDDSA,
}


class SecretType(StrEnum):
    """How resolved secret bytes are encoded."""

    PLAIN = "plain"
    BASE64 = "base64"
    PEM = "pem"
    DER = "der"


class KeyUse(StrEnum):
    """Whether a key is built for signing or for verification."""

    SIGN = "sign"
    VERIFY = "verify"


class SecretMaterial:
    """Resolved secret bytes, handed from the resolver to the key builder.

    The buffer can be consumed once; afterwards it is wiped and any further
    ``consume()`` raises. The repr never shows the bytes.
    """

    __slots__ = ("_buffer", "secret_type")

    def __init__(self, data: bytes, secret_type: SecretType) -> None:
        self._buffer: bytearray | None = bytearray(data)
        self.secret_type = secret_type

    @property
    def consumed(self) -> bool:
        return self._buffer is None

    def consume(self) -> bytes:
        """Return the secret bytes and drop the internal buffer."""
        if self._buffer is None:
            raise RuntimeError("secret material was already consumed")
        data = bytes(self._buffer)
        self._buffer[:] = b"\x00" * len(self._buffer)
        self._buffer = None
        return data

    def __repr__(self) -> str:
        state = "consumed" if self._buffer is None else "<redacted>"
        return f"SecretMaterial(type={self.secret_type.value}, {state})"
