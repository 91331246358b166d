"""Encode a header/claims pair into a signed compact token."""

import json
import logging

import jwt
from jwt.utils import base64url_encode

from jwtui.crypto.errors import KeyMaterialError, ParseError, ValidationError
from jwtui.crypto.keys import JwsKey, build_signing_key
from jwtui.crypto.secret_resolver import resolve_secret
from jwtui.token.parser import parse_claims, parse_header
from jwtui.token.types import TokenHeader

logger = logging.getLogger(__name__)

_jws = jwt.PyJWS()


def _sign(header: TokenHeader, payload: bytes, key: JwsKey) -> str:
    """Compact serialization of ``header`` and ``payload`` signed with ``key``.

    The header is written exactly as given, so an empty ``typ`` or a ``b64``
    extension reaches the token unchanged.
    """
    algorithm = _jws.get_algorithm_by_name(header.alg.value)
    header_json = json.dumps(header.to_json_dict(), separators=(",", ":"))
    segments = [base64url_encode(header_json.encode()), base64url_encode(payload)]
    signing_input = b".".join(segments)
    try:
        signature = algorithm.sign(signing_input, algorithm.prepare_key(key))
    except jwt.InvalidKeyError as exc:
        raise KeyMaterialError(str(exc)) from exc
    segments.append(base64url_encode(signature))
    return b".".join(segments).decode("ascii")


def encode_token(header_text: str, claims_text: str, secret_spec: str) -> str:
    """Sign the claims with the key described by ``secret_spec``.

    Raises a JwtUiError subclass whose message is fit for display.
    """
    if not header_text:
        raise ValidationError("Header should not be empty")
    if not claims_text:
        raise ValidationError("Payload should not be empty")

    try:
        header = parse_header(header_text)
    except ParseError as exc:
        raise ParseError(f"Error parsing header: {exc}") from exc
    try:
        claims = parse_claims(claims_text)
    except ParseError as exc:
        raise ParseError(f"Error parsing payload: {exc}") from exc

    key = build_signing_key(header.alg, resolve_secret(secret_spec, header.alg))

    payload = json.dumps(claims, separators=(",", ":"), ensure_ascii=False).encode()
    token = _sign(header, payload, key)
    logger.debug("Encoded %s token", header.alg.value)
    return token
