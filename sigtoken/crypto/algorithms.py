"""Supported JWS algorithms and the parameters each one carries."""

from enum import Enum
from types import MappingProxyType

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from pydantic import BaseModel, ConfigDict

from sigtoken.core.errors import UnsupportedAlgorithm


class Algorithm(str, Enum):
    """Closed set of JWS algorithm identifiers."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"


class AlgorithmFamily(str, Enum):
    """Signature scheme shared by a group of algorithms."""

    HMAC = "hmac"
    RSA_PKCS1 = "rsa-pkcs1v15"
    RSA_PSS = "rsa-pss"
    ECDSA = "ecdsa"


_HASHES: dict[int, type[hashes.HashAlgorithm]] = {
    256: hashes.SHA256,
    384: hashes.SHA384,
    512: hashes.SHA512,
}

_CURVES: dict[str, type[ec.EllipticCurve]] = {
    "P-256": ec.SECP256R1,
    "P-384": ec.SECP384R1,
    "P-521": ec.SECP521R1,
}


class AlgorithmSpec(BaseModel):
    """Family parameters for one algorithm.

    ``curve`` and ``component_size`` are only set for ECDSA, where the
    signature is the fixed-length concatenation of R and S, each
    ``component_size`` bytes long.
    """

    model_config = ConfigDict(frozen=True)

    algorithm: Algorithm
    family: AlgorithmFamily
    digest_bits: int
    curve: str | None = None
    component_size: int | None = None

    @property
    def digest_size(self) -> int:
        """Digest length in bytes."""
        return self.digest_bits // 8

    def hash_algorithm(self) -> hashes.HashAlgorithm:
        """Build a fresh ``cryptography`` hash instance for this algorithm."""
        return _HASHES[self.digest_bits]()

    def elliptic_curve(self) -> ec.EllipticCurve:
        """Build the curve instance required by an ECDSA algorithm."""
        if self.curve is None:
            raise UnsupportedAlgorithm(f"{self.algorithm.value} has no curve")
        return _CURVES[self.curve]()


def _spec(
    algorithm: Algorithm,
    family: AlgorithmFamily,
    digest_bits: int,
    curve: str | None = None,
) -> AlgorithmSpec:
    component_size = None
    if curve is not None:
        component_size = (_CURVES[curve].key_size + 7) // 8
    return AlgorithmSpec(
        algorithm=algorithm,
        family=family,
        digest_bits=digest_bits,
        curve=curve,
        component_size=component_size,
    )


ALGORITHM_SPECS: MappingProxyType[Algorithm, AlgorithmSpec] = MappingProxyType(
    {
        Algorithm.HS256: _spec(Algorithm.HS256, AlgorithmFamily.HMAC, 256),
        Algorithm.HS384: _spec(Algorithm.HS384, AlgorithmFamily.HMAC, 384),
        Algorithm.HS512: _spec(Algorithm.HS512, AlgorithmFamily.HMAC, 512),
        Algorithm.RS256: _spec(Algorithm.RS256, AlgorithmFamily.RSA_PKCS1, 256),
        Algorithm.RS384: _spec(Algorithm.RS384, AlgorithmFamily.RSA_PKCS1, 384),
        Algorithm.RS512: _spec(Algorithm.RS512, AlgorithmFamily.RSA_PKCS1, 512),
        Algorithm.ES256: _spec(Algorithm.ES256, AlgorithmFamily.ECDSA, 256, "P-256"),
        Algorithm.ES384: _spec(Algorithm.ES384, AlgorithmFamily.ECDSA, 384, "P-384"),
        Algorithm.ES512: _spec(Algorithm.ES512, AlgorithmFamily.ECDSA, 512, "P-521"),
        Algorithm.PS256: _spec(Algorithm.PS256, AlgorithmFamily.RSA_PSS, 256),
        Algorithm.PS384: _spec(Algorithm.PS384, AlgorithmFamily.RSA_PSS, 384),
        Algorithm.PS512: _spec(Algorithm.PS512, AlgorithmFamily.RSA_PSS, 512),
    }
)

_BY_NAME = {a.value.lower(): a for a in Algorithm}


def parse_algorithm(identifier: object) -> Algorithm:
    """Map an identifier to an ``Algorithm``, ignoring case."""
    if isinstance(identifier, Algorithm):
        return identifier
    if not isinstance(identifier, str):
        raise UnsupportedAlgorithm(f"Algorithm identifier must be a string: {identifier!r}")
    try:
        return _BY_NAME[identifier.lower()]
    except KeyError:
        raise UnsupportedAlgorithm(f"Unsupported algorithm: {identifier!r}") from None
