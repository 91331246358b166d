"""Pydantic request and response bodies for the token endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class EncodeRequest(BaseModel):
    """Request body for POST /tokens/encode."""

    header: str
    payload: str
    secret: str = ""


class EncodeResponse(BaseModel):
    """Response for POST /tokens/encode."""

    token: str


class DecodeRequest(BaseModel):
    """Request body for POST /tokens/decode.

    Unset options fall back to the workbench settings.
    """

    token: str
    secret: str | None = None
    ignore_exp: bool | None = None
    utc_dates: bool | None = None


class ErrorDetail(BaseModel):
    """A failure kind and its user-facing message."""

    error: str
    message: str


class DecodeResponse(BaseModel):
    """Response for POST /tokens/decode."""

    header: dict[str, Any]
    payload: dict[str, Any]
    header_text: str
    payload_text: str
    verified: bool
    error: ErrorDetail | None = None


class AlgorithmEntry(BaseModel):
    """One supported algorithm and the secret types it accepts."""

    alg: str
    family: str
    secret_types: list[str] = Field(default_factory=list)


class AlgorithmsResponse(BaseModel):
    """Response for GET /tokens/algorithms."""

    algorithms: list[AlgorithmEntry] = Field(default_factory=list)
