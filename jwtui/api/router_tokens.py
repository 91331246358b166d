"""Token encode/decode endpoints for an interactive front end."""

from typing import Annotated

from fastapi import APIRouter, Depends

from jwtui.api.schemas import (
    AlgorithmEntry,
    AlgorithmsResponse,
    DecodeRequest,
    DecodeResponse,
    EncodeRequest,
    EncodeResponse,
    ErrorDetail,
)
from jwtui.core.settings import WorkbenchSettings
from jwtui.crypto.errors import ValidationError
from jwtui.crypto.keys import ACCEPTED_SECRET_TYPES
from jwtui.crypto.secret_resolver import FILE_PREFIX
from jwtui.crypto.types import Algorithm
from jwtui.token.decoder import decode_token
from jwtui.token.encoder import encode_token
from jwtui.token.types import DecodeOutcome

router = APIRouter(prefix="/tokens", tags=["tokens"])


def _load_settings() -> WorkbenchSettings:
    return WorkbenchSettings()


Settings = Annotated[WorkbenchSettings, Depends(_load_settings)]


def _pick(value: bool | None, default: bool) -> bool:
    return default if value is None else value


def _confine_secret(secret: str, settings: WorkbenchSettings) -> str:
    """Map a client @file secret to an absolute path inside ``key_dir``.

    Inline secrets pass through unchanged.
    """
    if not secret.startswith(FILE_PREFIX):
        return secret
    if settings.key_dir is None:
        raise ValidationError(
            "File secrets are disabled; set JWTUI_KEY_DIR to enable them"
        )
    root = settings.key_dir.resolve()
    path = (root / secret[len(FILE_PREFIX) :]).resolve()
    if not path.is_relative_to(root):
        raise ValidationError("File secrets must name a file inside the key directory")
    return f"{FILE_PREFIX}{path}"


def _outcome_to_response(outcome: DecodeOutcome) -> DecodeResponse:
    """Convert a decode outcome that carries content to an API response."""
    if outcome.result is None:
        assert outcome.error is not None
        raise outcome.error
    result = outcome.result
    error = None
    if outcome.error is not None:
        error = ErrorDetail(error=outcome.error.kind, message=str(outcome.error))
    return DecodeResponse(
        header=result.header.to_json_dict(),
        payload=result.claims,
        header_text=outcome.header_text,
        payload_text=outcome.claims_text,
        verified=result.verified,
        error=error,
    )


@router.post("/encode")
def encode(body: EncodeRequest, settings: Settings) -> EncodeResponse:
    """POST /tokens/encode -- sign header and payload text."""
    secret = _confine_secret(body.secret, settings)
    return EncodeResponse(token=encode_token(body.header, body.payload, secret))


@router.post("/decode")
def decode(body: DecodeRequest, settings: Settings) -> DecodeResponse:
    """POST /tokens/decode -- decode a token and verify its signature."""
    if body.secret is None:
        secret = settings.default_secret
    else:
        secret = _confine_secret(body.secret, settings)
    outcome = decode_token(
        body.token,
        secret,
        ignore_expiry=_pick(body.ignore_exp, settings.ignore_expiry),
        utc_time_format=_pick(body.utc_dates, settings.utc_time_format),
        leeway=settings.leeway_seconds,
    )
    return _outcome_to_response(outcome)


@router.get("/algorithms")
def algorithms() -> AlgorithmsResponse:
    """GET /tokens/algorithms -- supported algorithms and secret types."""
    entries = [
        AlgorithmEntry(
            alg=alg.value,
            family=alg.family.value,
            secret_types=sorted(t.value for t in ACCEPTED_SECRET_TYPES[alg.family]),
        )
        for alg in Algorithm
    ]
    return AlgorithmsResponse(algorithms=entries)
