"""Per-family signing and verification on top of ``cryptography``.

Every function takes the ``AlgorithmSpec`` first so the selector can bind
it once per algorithm. Signers return raw signature bytes; verifiers return
``False`` for a well-formed signature that does not match and raise only
for key problems.
"""

import hmac

from cryptography import exceptions as crypto_exceptions
from cryptography import x509
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hmac as crypto_hmac
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from sigtoken.core.errors import InvalidKey, PrimitiveFailure
from sigtoken.crypto.algorithms import AlgorithmSpec
from sigtoken.crypto.types import SigningKeyData

_PEM_MARKER = b"-----BEGIN"
_CERTIFICATE_MARKER = b"-----BEGIN CERTIFICATE-----"
_SSH_PREFIXES = (b"ssh-rsa", b"ssh-ed25519", b"ecdsa-sha2-")
_LOAD_ERRORS = (ValueError, TypeError, crypto_exceptions.UnsupportedAlgorithm)


def as_bytes(value: object) -> bytes:
    """UTF-8 encode text, pass bytes through."""
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"Expected str or bytes, got {type(value).__name__}")


def _pem_bytes(key: str | bytes | bytearray) -> bytes:
    pem = as_bytes(key)
    if _PEM_MARKER not in pem:
        raise InvalidKey("Expected PEM-encoded key material")
    return pem


def load_private_key(key: object) -> object:
    """Resolve a keypair or PEM to a private key object; key objects pass through."""
    if isinstance(key, SigningKeyData):
        key = key.private_key_pem
    if isinstance(key, (str, bytes, bytearray)):
        pem = _pem_bytes(key)
        try:
            return serialization.load_pem_private_key(pem, password=None)
        except _LOAD_ERRORS as exc:
            raise PrimitiveFailure(f"Could not load PEM private key: {exc}") from exc
    return key


def load_public_key(key: object) -> object:
    """Resolve a keypair, PEM or certificate to a public key object.

    Private keys, as objects or PEM, yield their public half.
    """
    if isinstance(key, SigningKeyData):
        key = key.public_key_pem
    if isinstance(key, (str, bytes, bytearray)):
        pem = _pem_bytes(key)
        try:
            if _CERTIFICATE_MARKER in pem:
                return x509.load_pem_x509_certificate(pem).public_key()
            if b"PRIVATE KEY" in pem:
                key = serialization.load_pem_private_key(pem, password=None)
            else:
                return serialization.load_pem_public_key(pem)
        except _LOAD_ERRORS as exc:
            raise PrimitiveFailure(f"Could not load PEM key: {exc}") from exc
    if isinstance(key, (rsa.RSAPrivateKey, ec.EllipticCurvePrivateKey)):
        return key.public_key()
    return key


# HMAC


def _hmac_secret(key: object) -> bytes:
    if not isinstance(key, (str, bytes, bytearray)):
        raise InvalidKey(f"HMAC requires a str or bytes secret, got {type(key).__name__}")
    secret = as_bytes(key)
    if not secret:
        raise InvalidKey("HMAC secret must not be empty")
    stripped = secret.lstrip()
    if stripped.startswith(_PEM_MARKER) or stripped.startswith(_SSH_PREFIXES):
        raise InvalidKey("Asymmetric key material cannot be used as an HMAC secret")
    return secret


def hmac_sign(spec: AlgorithmSpec, key: object, data: bytes) -> bytes:
    """Compute the MAC of ``data`` keyed by ``key``."""
    mac = crypto_hmac.HMAC(_hmac_secret(key), spec.hash_algorithm())
    mac.update(data)
    return mac.finalize()


def hmac_verify(spec: AlgorithmSpec, key: object, signature: bytes, data: bytes) -> bool:
    """Recompute the MAC and compare in constant time."""
    return hmac.compare_digest(hmac_sign(spec, key, data), signature)


# RSA


def _rsa_private_key(spec: AlgorithmSpec, key: object) -> rsa.RSAPrivateKey:
    loaded = load_private_key(key)
    if not isinstance(loaded, rsa.RSAPrivateKey):
        raise InvalidKey(
            f"{spec.algorithm.value} requires an RSA private key, got {type(loaded).__name__}"
        )
    return loaded


def _rsa_public_key(spec: AlgorithmSpec, key: object) -> rsa.RSAPublicKey:
    loaded = load_public_key(key)
    if not isinstance(loaded, rsa.RSAPublicKey):
        raise InvalidKey(
            f"{spec.algorithm.value} requires an RSA public key, got {type(loaded).__name__}"
        )
    return loaded


def _pss_padding(spec: AlgorithmSpec) -> padding.PSS:
    # Salt length pinned to the digest length on both sides.
    return padding.PSS(
        mgf=padding.MGF1(spec.hash_algorithm()),
        salt_length=spec.digest_size,
    )


def rsa_pkcs1_sign(spec: AlgorithmSpec, key: object, data: bytes) -> bytes:
    """RSASSA-PKCS1-v1_5 signature."""
    private_key = _rsa_private_key(spec, key)
    return private_key.sign(data, padding.PKCS1v15(), spec.hash_algorithm())


def rsa_pkcs1_verify(
    spec: AlgorithmSpec, key: object, signature: bytes, data: bytes
) -> bool:
    """Check an RSASSA-PKCS1-v1_5 signature."""
    public_key = _rsa_public_key(spec, key)
    try:
        public_key.verify(signature, data, padding.PKCS1v15(), spec.hash_algorithm())
    except InvalidSignature:
        return False
    return True


def rsa_pss_sign(spec: AlgorithmSpec, key: object, data: bytes) -> bytes:
    """RSASSA-PSS signature with MGF1 and digest-length salt."""
    private_key = _rsa_private_key(spec, key)
    return private_key.sign(data, _pss_padding(spec), spec.hash_algorithm())


def rsa_pss_verify(
    spec: AlgorithmSpec, key: object, signature: bytes, data: bytes
) -> bool:
    """Check an RSASSA-PSS signature."""
    public_key = _rsa_public_key(spec, key)
    try:
        public_key.verify(signature, data, _pss_padding(spec), spec.hash_algorithm())
    except InvalidSignature:
        return False
    return True


# ECDSA


def _check_curve(spec: AlgorithmSpec, curve: ec.EllipticCurve) -> None:
    expected = spec.elliptic_curve()
    if curve.name != expected.name:
        raise InvalidKey(
            f"{spec.algorithm.value} requires a {spec.curve} key, got {curve.name}"
        )


def _ec_private_key(spec: AlgorithmSpec, key: object) -> ec.EllipticCurvePrivateKey:
    loaded = load_private_key(key)
    if not isinstance(loaded, ec.EllipticCurvePrivateKey):
        raise InvalidKey(
            f"{spec.algorithm.value} requires an EC private key, got {type(loaded).__name__}"
        )
    _check_curve(spec, loaded.curve)
    return loaded


def _ec_public_key(spec: AlgorithmSpec, key: object) -> ec.EllipticCurvePublicKey:
    loaded = load_public_key(key)
    if not isinstance(loaded, ec.EllipticCurvePublicKey):
        raise InvalidKey(
            f"{spec.algorithm.value} requires an EC public key, got {type(loaded).__name__}"
        )
    _check_curve(spec, loaded.curve)
    return loaded


def ecdsa_sign(spec: AlgorithmSpec, key: object, data: bytes) -> bytes:
    """ECDSA signature in fixed-length R || S form (IEEE P1363)."""
    private_key = _ec_private_key(spec, key)
    der = private_key.sign(data, ec.ECDSA(spec.hash_algorithm()))
    r, s = decode_dss_signature(der)
    size = spec.component_size
    assert size is not None
    return r.to_bytes(size, "big") + s.to_bytes(size, "big")


def ecdsa_verify(spec: AlgorithmSpec, key: object, signature: bytes, data: bytes) -> bool:
    """Check a fixed-length R || S ECDSA signature."""
    public_key = _ec_public_key(spec, key)
    size = spec.component_size
    assert size is not None
    if len(signature) != 2 * size:
        return False
    r = int.from_bytes(signature[:size], "big")
    s = int.from_bytes(signature[size:], "big")
    try:
        public_key.verify(
            encode_dss_signature(r, s), data, ec.ECDSA(spec.hash_algorithm())
        )
    except InvalidSignature:
        return False
    return True
