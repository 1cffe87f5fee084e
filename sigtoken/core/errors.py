"""Error taxonomy for token encoding, decoding, signing and verification."""


class TokenError(Exception):
    """Base class for all structural and configuration failures."""


class MalformedToken(TokenError):
    """Token does not split into exactly three non-empty segments."""


class MalformedSegment(TokenError):
    """Segment is not valid base64url or does not hold valid JSON."""


class UnsupportedAlgorithm(TokenError):
    """Algorithm identifier is missing or outside the supported set."""


class InvalidKey(TokenError):
    """Key material does not fit the algorithm family."""


class PrimitiveFailure(TokenError):
    """The underlying cryptographic operation raised an error."""
