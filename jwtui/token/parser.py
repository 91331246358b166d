"""Parse header and claims JSON text entered by the user.

Error messages name the offending field and carry a ``line L column C``
position: syntax errors use the position reported by :mod:`json`, semantic
errors (missing ``alg``, unknown algorithm, wrong type) point at the end of
the document.
"""

import json
from operator import itemgetter
from typing import Any

import pydantic

from jwtui.crypto.errors import ParseError
from jwtui.crypto.types import Algorithm
from jwtui.token.types import Claims, TokenHeader

_JSON_TYPE_NAMES = {
    list: "sequence",
    str: "string",
    int: "integer",
    float: "floating point",
    bool: "boolean",
    type(None): "null",
}


def _end_position(text: str) -> tuple[int, int]:
    """Line and column (1-based) of the last non-whitespace character."""
    stripped = text.rstrip()
    if not stripped:
        return 1, 0
    index = len(stripped) - 1
    line = stripped.count("\n", 0, index) + 1
    column = index - (stripped.rfind("\n", 0, index) + 1) + 1
    return line, column


def _at_end(message: str, text: str) -> ParseError:
    line, column = _end_position(text)
    return ParseError(f"{message} at line {line} column {column}")


def _sorted_object(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    return dict(sorted(pairs, key=itemgetter(0)))


def _load_object(text: str, expected: str, *, sort_keys: bool) -> dict[str, Any]:
    if not text.strip():
        raise ParseError("EOF while parsing a value at line 1 column 0")
    hook = _sorted_object if sort_keys else None
    try:
        value = json.loads(text, object_pairs_hook=hook)
    except json.JSONDecodeError as exc:
        raise ParseError(
            f"{exc.msg} at line {exc.lineno} column {exc.colno}"
        ) from exc
    if not isinstance(value, dict):
        kind = _JSON_TYPE_NAMES.get(type(value), type(value).__name__)
        raise _at_end(f"invalid type: {kind}, expected {expected}", text)
    return value


def parse_header(text: str) -> TokenHeader:
    """Parse header JSON; ``alg`` is required and must be a known algorithm."""
    data = _load_object(text, "struct Header", sort_keys=False)
    if "alg" not in data:
        raise _at_end("missing field `alg`", text)
    alg = data["alg"]
    if alg not in Algorithm.__members__.values():
        variants = ", ".join(f"`{a.value}`" for a in Algorithm)
        raise _at_end(
            f"unknown variant `{alg}` for field `alg`, expected one of {variants}",
            text,
        )
    if "b64" in data and data["b64"] is not True:
        raise _at_end(
            "unsupported value for field `b64`: unencoded payloads are not supported",
            text,
        )
    try:
        return TokenHeader.model_validate(data)
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise _at_end(f"invalid value for field `{field}`: {first['msg']}", text) from exc


def parse_claims(text: str) -> Claims:
    """Parse claims JSON into a map with keys in sorted order."""
    return _load_object(text, "a map", sort_keys=True)
