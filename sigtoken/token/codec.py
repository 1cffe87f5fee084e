"""Segment codec: JSON plus unpadded base64url."""

import base64
import binascii
import json
import re
from typing import Any

from sigtoken.core.errors import MalformedSegment

_BASE64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


def base64url_encode(data: bytes) -> str:
    """Encode as base64url without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def base64url_decode(segment: str) -> bytes:
    """Decode unpadded base64url, rejecting anything outside the alphabet."""
    if not isinstance(segment, str) or not _BASE64URL_RE.fullmatch(segment):
        raise MalformedSegment("Segment is not valid base64url")
    padded = segment + "=" * (-len(segment) % 4)
    try:
        decoded = base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as exc:
        raise MalformedSegment(f"Segment is not valid base64url: {exc}") from exc
    # Unused trailing bits must be zero, so each byte string has one spelling.
    if base64url_encode(decoded) != segment:
        raise MalformedSegment("Segment is not canonical base64url")
    return decoded


def encode_segment(value: Any) -> str:
    """Serialize ``value`` as compact JSON and base64url-encode it."""
    try:
        raw = json.dumps(
            value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise MalformedSegment(f"Value is not JSON serializable: {exc}") from exc
    return base64url_encode(raw.encode("utf-8"))


def decode_segment(segment: str) -> Any:
    """Base64url-decode ``segment`` and parse the JSON inside."""
    raw = base64url_decode(segment)
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise MalformedSegment(f"Segment does not hold valid JSON: {exc}") from exc
