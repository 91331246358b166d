"""Type definitions for token headers, claims, and decode outcomes."""

import json
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from jwtui.crypto.errors import JwtUiError
from jwtui.crypto.types import Algorithm

TEMPORAL_CLAIMS = ("exp", "iat", "nbf")

Claims = dict[str, Any]


class TokenHeader(BaseModel):
    """JOSE header: ``alg`` and ``typ`` plus any extension fields."""

    model_config = ConfigDict(extra="allow")

    alg: Algorithm
    typ: str | None = None

    def to_json_dict(self) -> dict[str, Any]:
        """Header fields in wire order: ``typ``, ``alg``, then extensions.

        ``typ`` is left out only when the source header did not have it.
        """
        headers: dict[str, Any] = {}
        if "typ" in self.model_fields_set:
            headers["typ"] = self.typ
        headers["alg"] = self.alg.value
        headers.update(self.model_extra or {})
        return headers


class VerificationResult(BaseModel):
    """Decoded header and claims plus whether the token verified."""

    header: TokenHeader
    claims: Claims
    verified: bool


class DecodeOutcome(BaseModel):
    """What a decode produced: decoded content, a failure, or both.

    ``result`` is None when decoding aborted before the header and claims
    could be shown. A signature or temporal failure keeps ``result`` with
    ``verified=False`` and sets ``error``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    result: VerificationResult | None = None
    error: JwtUiError | None = None
    utc_time_format: bool = False

    @property
    def verified(self) -> bool:
        return self.result is not None and self.result.verified

    def unwrap(self) -> VerificationResult:
        """Return the verified result or raise the decode error."""
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result

    @property
    def header_text(self) -> str:
        if self.result is None:
            return ""
        return json.dumps(self.result.header.to_json_dict(), indent=2)

    @property
    def claims_text(self) -> str:
        if self.result is None:
            return ""
        claims = self.result.claims
        if self.utc_time_format:
            claims = format_temporal_claims(claims)
        return json.dumps(claims, indent=2, ensure_ascii=False)


def format_temporal_claims(claims: Claims) -> Claims:
    """Copy of ``claims`` with numeric exp/iat/nbf rendered as UTC timestamps."""
    formatted = dict(claims)
    for name in TEMPORAL_CLAIMS:
        value = formatted.get(name)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                formatted[name] = datetime.fromtimestamp(value, UTC).isoformat()
            except (OverflowError, OSError, ValueError):
                continue
    return formatted
