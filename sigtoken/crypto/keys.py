"""Key generation and loading for the asymmetric and HMAC families."""

import secrets

import uuid_utils
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from sigtoken.core.errors import UnsupportedAlgorithm
from sigtoken.crypto.algorithms import ALGORITHM_SPECS, AlgorithmFamily, parse_algorithm
from sigtoken.crypto.primitives import load_private_key, load_public_key
from sigtoken.crypto.types import SigningKeyData

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537


AsymmetricPrivateKey = rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey


def _pkcs8_pem(private_key: AsymmetricPrivateKey) -> str:
    """Unencrypted PKCS#8, the form ``load_signing_key`` reads back."""
    pem = private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    return pem.decode("ascii")


def _spki_pem(private_key: AsymmetricPrivateKey) -> str:
    public_key = private_key.public_key()
    pem = public_key.public_bytes(
        serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo
    )
    return pem.decode("ascii")


def _keypair(private_key: AsymmetricPrivateKey) -> SigningKeyData:
    # uuid7 kids sort by creation time.
    return SigningKeyData(
        kid=str(uuid_utils.uuid7()),
        private_key_pem=_pkcs8_pem(private_key),
        public_key_pem=_spki_pem(private_key),
    )


def generate_rsa_keypair(key_size: int = RSA_KEY_SIZE) -> SigningKeyData:
    """Generate an RSA keypair usable with RS* and PS* algorithms."""
    private_key = rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=key_size,
    )
    return _keypair(private_key)


def generate_ec_keypair(algorithm: str = "ES256") -> SigningKeyData:
    """Generate an EC keypair on the curve ``algorithm`` requires."""
    spec = ALGORITHM_SPECS[parse_algorithm(algorithm)]
    if spec.family is not AlgorithmFamily.ECDSA:
        raise UnsupportedAlgorithm(f"{spec.algorithm.value} is not an ECDSA algorithm")
    return _keypair(ec.generate_private_key(spec.elliptic_curve()))


def generate_hmac_secret(algorithm: str = "HS256") -> bytes:
    """Generate a random secret as long as the algorithm's digest."""
    spec = ALGORITHM_SPECS[parse_algorithm(algorithm)]
    if spec.family is not AlgorithmFamily.HMAC:
        raise UnsupportedAlgorithm(f"{spec.algorithm.value} is not an HMAC algorithm")
    return secrets.token_bytes(spec.digest_size)


def load_signing_key(key_data: SigningKeyData | str | bytes) -> object:
    """Load the private key object from a keypair or PEM."""
    return load_private_key(key_data)


def load_verification_key(key_data: SigningKeyData | str | bytes) -> object:
    """Load the public key object from a keypair, PEM or certificate."""
    return load_public_key(key_data)
