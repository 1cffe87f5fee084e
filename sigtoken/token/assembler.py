"""Compact token assembly and disassembly.

A token is ``base64url(header).base64url(payload).base64url(signature)``.
The signature covers the first two segments exactly as they appear on the
wire, so the verifier never re-serializes the header or payload.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sigtoken.core.errors import MalformedSegment, MalformedToken, UnsupportedAlgorithm
from sigtoken.crypto.algorithms import Algorithm, parse_algorithm
from sigtoken.crypto.registry import sign, verify
from sigtoken.crypto.types import DecodeResult, VerificationStatus
from sigtoken.token.codec import (
    base64url_decode,
    base64url_encode,
    decode_segment,
    encode_segment,
)

logger = logging.getLogger(__name__)

SEGMENT_COUNT = 3


def _header_algorithm(header: Mapping[str, Any]) -> Algorithm:
    if "alg" not in header:
        raise UnsupportedAlgorithm("Header has no 'alg'")
    return parse_algorithm(header["alg"])


def _split(token: str) -> tuple[str, str, str]:
    if not isinstance(token, str):
        raise MalformedToken(f"Token must be a string, got {type(token).__name__}")
    parts = token.split(".")
    if len(parts) != SEGMENT_COUNT:
        raise MalformedToken(f"Expected {SEGMENT_COUNT} segments, got {len(parts)}")
    if not all(parts):
        raise MalformedToken("Token has an empty segment")
    return parts[0], parts[1], parts[2]


def _decode_header(segment: str) -> dict[str, Any]:
    header = decode_segment(segment)
    if not isinstance(header, dict):
        raise MalformedSegment("Header is not a JSON object")
    return header


def encode(header: Mapping[str, Any], payload: Any, key: object) -> str:
    """Sign ``payload`` under ``header`` and return the compact token.

    The algorithm comes from ``header["alg"]`` (any case). It is resolved
    before anything is serialized or signed.
    """
    if not isinstance(header, Mapping):
        raise MalformedSegment("Header must be a mapping")
    algorithm = _header_algorithm(header)
    signing_input = f"{encode_segment(dict(header))}.{encode_segment(payload)}"
    signature = sign(algorithm, key, signing_input)
    return f"{signing_input}.{base64url_encode(signature)}"


def decode(
    token: str,
    key: object,
    algorithms: Iterable[str | Algorithm] | None = None,
) -> DecodeResult:
    """Verify ``token`` and return its payload.

    A signature that does not match yields a ``SIGNATURE_MISMATCH`` result
    without payload. Structural problems raise ``MalformedToken``,
    ``MalformedSegment`` or ``UnsupportedAlgorithm``; key problems raise
    ``InvalidKey`` or ``PrimitiveFailure``.

    When ``algorithms`` is given, tokens whose header names any other
    algorithm are rejected with ``UnsupportedAlgorithm``.
    """
    header_segment, payload_segment, signature_segment = _split(token)
    header = _decode_header(header_segment)
    algorithm = _header_algorithm(header)
    if algorithms is not None:
        allowed = {parse_algorithm(a) for a in algorithms}
        if algorithm not in allowed:
            raise UnsupportedAlgorithm(f"Algorithm {algorithm.value} is not allowed")

    signature = base64url_decode(signature_segment)
    signing_input = f"{header_segment}.{payload_segment}"
    if not verify(algorithm, key, signature, signing_input):
        logger.info("Signature mismatch for %s token", algorithm.value)
        return DecodeResult(status=VerificationStatus.SIGNATURE_MISMATCH, header=header)

    return DecodeResult(
        status=VerificationStatus.VALID,
        header=header,
        payload=decode_segment(payload_segment),
    )


def get_unverified_header(token: str) -> dict[str, Any]:
    """Return the header without checking the signature."""
    header_segment, _, _ = _split(token)
    return _decode_header(header_segment)


def get_unverified_payload(token: str) -> Any:
    """Return the payload without checking the signature."""
    _, payload_segment, _ = _split(token)
    return decode_segment(payload_segment)
