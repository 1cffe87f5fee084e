"""Raw signature operations dispatched by algorithm identifier."""

import logging

from cryptography import exceptions as crypto_exceptions

from sigtoken.core.errors import MalformedSegment, PrimitiveFailure
from sigtoken.crypto.primitives import as_bytes
from sigtoken.crypto.selector import resolve

logger = logging.getLogger(__name__)

_PRIMITIVE_ERRORS = (
    ValueError,
    TypeError,
    crypto_exceptions.UnsupportedAlgorithm,
    crypto_exceptions.InternalError,
)


def _message_bytes(data: object) -> bytes:
    try:
        return as_bytes(data)
    except TypeError as exc:
        raise MalformedSegment(f"Signing input must be str or bytes: {exc}") from exc


def sign(algorithm: object, key: object, data: str | bytes) -> bytes:
    """Sign ``data`` with ``key`` using ``algorithm``.

    Raises:
        UnsupportedAlgorithm: ``algorithm`` is not one of the supported twelve.
        InvalidKey: ``key`` does not fit the algorithm family.
        MalformedSegment: ``data`` is neither text nor bytes.
        PrimitiveFailure: the cryptographic primitive itself failed.
    """
    entry = resolve(algorithm)
    message = _message_bytes(data)
    logger.debug("Signing %d bytes with %s", len(message), entry.algorithm.value)
    try:
        return entry.signer(key, message)
    except _PRIMITIVE_ERRORS as exc:
        logger.warning("%s signing failed in primitive: %s", entry.algorithm.value, exc)
        raise PrimitiveFailure(f"{entry.algorithm.value} signing failed: {exc}") from exc


def verify(algorithm: object, key: object, signature: bytes, data: str | bytes) -> bool:
    """Check ``signature`` over ``data``.

    Returns ``False`` when the signature is well formed but does not match.
    A ``signature`` that is not bytes is ``MalformedSegment``. Raises the
    same errors as ``sign`` for everything else.
    """
    if not isinstance(signature, (bytes, bytearray, memoryview)):
        raise MalformedSegment(
            f"Signature must be bytes, got {type(signature).__name__}"
        )
    signature = bytes(signature)
    entry = resolve(algorithm)
    message = _message_bytes(data)
    logger.debug("Verifying %d bytes with %s", len(message), entry.algorithm.value)
    try:
        return entry.verifier(key, signature, message)
    except _PRIMITIVE_ERRORS as exc:
        logger.warning(
            "%s verification failed in primitive: %s", entry.algorithm.value, exc
        )
        raise PrimitiveFailure(
            f"{entry.algorithm.value} verification failed: {exc}"
        ) from exc
