"""Error taxonomy for token encoding, decoding, and key handling.

``str(error)`` is the message shown to the user; ``kind`` is a stable
identifier the HTTP surface reports alongside it.
"""


class JwtUiError(Exception):
    """Base class for every user-facing workbench failure."""

    kind = "error"


class ValidationError(JwtUiError):
    """A required input was empty or otherwise unusable."""

    kind = "validation"


class ParseError(JwtUiError):
    """Header, claims, or a token segment is not the JSON we expect."""

    kind = "parse"


class AlgorithmMismatchError(JwtUiError):
    """The secret type cannot be used with the algorithm's family."""

    kind = "algorithm_mismatch"


class KeyMaterialError(JwtUiError):
    """Key bytes could not be parsed into a usable key."""

    kind = "key_material"


class SecretFileError(JwtUiError, OSError):
    """A ``@file`` secret could not be read."""

    kind = "io"


class MalformedTokenError(JwtUiError):
    """A token does not have exactly three dot-separated segments."""

    kind = "malformed_token"


class SignatureError(JwtUiError):
    """The signature does not verify against the supplied key."""

    kind = "signature"


class TemporalValidationError(JwtUiError):
    """The token is expired or not yet valid."""

    kind = "temporal"
