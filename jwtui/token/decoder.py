"""Decode a compact token and verify it against a secret spec."""

import binascii
import logging

import jwt
from jwt.types import Options
from jwt.utils import base64url_decode

from jwtui.crypto.errors import (
    JwtUiError,
    KeyMaterialError,
    MalformedTokenError,
    ParseError,
    SignatureError,
    TemporalValidationError,
    ValidationError,
)
from jwtui.crypto.keys import JwsKey, build_verification_key
from jwtui.crypto.secret_resolver import resolve_secret
from jwtui.crypto.types import Algorithm
from jwtui.token.parser import parse_claims, parse_header
from jwtui.token.types import Claims, DecodeOutcome, TokenHeader, VerificationResult

logger = logging.getLogger(__name__)

DEFAULT_LEEWAY_SECONDS = 60
TOKEN_SEGMENTS = 3

_jwt = jwt.PyJWT()


def split_token(token: str) -> tuple[str, str, str]:
    """Split a compact token into its header, payload and signature segments."""
    segments = token.split(".")
    if len(segments) != TOKEN_SEGMENTS:
        raise MalformedTokenError(
            f"Invalid token: expected {TOKEN_SEGMENTS} segments separated by '.', "
            f"found {len(segments)}"
        )
    header, payload, signature = segments
    return header, payload, signature


def _decode_segment(segment: str) -> str:
    try:
        return base64url_decode(segment).decode("utf-8")
    except (binascii.Error, ValueError) as exc:
        raise ParseError(f"invalid base64url segment: {exc}") from exc


def decode_unverified(token: str) -> tuple[TokenHeader, Claims]:
    """Recover header and claims without checking the signature."""
    header_segment, payload_segment, _ = split_token(token)
    try:
        header = parse_header(_decode_segment(header_segment))
    except ParseError as exc:
        raise ParseError(f"Error decoding header: {exc}") from exc
    try:
        claims = parse_claims(_decode_segment(payload_segment))
    except ParseError as exc:
        raise ParseError(f"Error decoding payload: {exc}") from exc
    return header, claims


def _verify(
    token: str,
    key: JwsKey,
    algorithm: Algorithm,
    *,
    ignore_expiry: bool,
    leeway: int,
) -> JwtUiError | None:
    """Check signature and temporal claims; return the failure, if any."""
    opts: Options = {
        "verify_signature": True,
        "verify_exp": not ignore_expiry,
        "verify_nbf": True,
        "verify_iat": False,
        "verify_aud": False,
        "verify_iss": False,
        "verify_sub": False,
        "verify_jti": False,
        "require": [],
    }
    try:
        _jwt.decode_complete(
            token,
            key,
            algorithms=[algorithm.value],
            options=opts,
            leeway=leeway,
        )
    except jwt.InvalidKeyError as exc:
        raise KeyMaterialError(str(exc)) from exc
    except jwt.InvalidSignatureError as exc:
        return SignatureError(str(exc))
    except (jwt.ExpiredSignatureError, jwt.ImmatureSignatureError) as exc:
        return TemporalValidationError(str(exc))
    except jwt.InvalidTokenError as exc:
        return ValidationError(f"Invalid token: {exc}")
    return None


def decode_token(
    token: str,
    secret_spec: str,
    ignore_expiry: bool = False,
    utc_time_format: bool = False,
    leeway: int = DEFAULT_LEEWAY_SECONDS,
) -> DecodeOutcome:
    """Decode ``token`` and verify it with the key described by ``secret_spec``.

    Malformed tokens, unreadable secrets and unusable keys abort with no
    decoded content. Signature and expiry failures still return the header
    and claims with ``verified=False`` so they can be shown next to the error.
    """
    token = token.strip()
    try:
        header, claims = decode_unverified(token)
        key = build_verification_key(header.alg, resolve_secret(secret_spec, header.alg))
        error = _verify(
            token, key, header.alg, ignore_expiry=ignore_expiry, leeway=leeway
        )
    except JwtUiError as exc:
        logger.info("Token decode aborted: %s", exc.kind)
        return DecodeOutcome(error=exc, utc_time_format=utc_time_format)

    if error is not None:
        logger.info("Token failed verification: %s", error.kind)
    result = VerificationResult(header=header, claims=claims, verified=error is None)
    return DecodeOutcome(result=result, error=error, utc_time_format=utc_time_format)
