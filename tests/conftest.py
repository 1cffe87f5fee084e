"""Shared test fixtures for sigtoken."""

from collections.abc import Callable

import pytest

from sigtoken.crypto.keys import generate_ec_keypair, generate_rsa_keypair
from sigtoken.crypto.types import SigningKeyData

EC_ALGORITHMS = ("ES256", "ES384", "ES512")

KeysFor = Callable[[str], tuple[object, object]]


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings independent of the developer's environment."""
    for name in (
        "SIGTOKEN_DEFAULT_ALGORITHM",
        "SIGTOKEN_TOKEN_TYPE",
        "SIGTOKEN_ALLOWED_ALGORITHMS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def rsa_keypair() -> SigningKeyData:
    """One RSA-2048 keypair shared across the session."""
    return generate_rsa_keypair()


@pytest.fixture(scope="session")
def other_rsa_keypair() -> SigningKeyData:
    """An unrelated RSA keypair for wrong-key checks."""
    return generate_rsa_keypair()


@pytest.fixture(scope="session")
def ec_keypairs() -> dict[str, SigningKeyData]:
    """An EC keypair per ES* algorithm, on the matching curve."""
    return {alg: generate_ec_keypair(alg) for alg in EC_ALGORITHMS}


@pytest.fixture(scope="session")
def other_ec_keypairs() -> dict[str, SigningKeyData]:
    """Unrelated EC keypairs for wrong-key checks."""
    return {alg: generate_ec_keypair(alg) for alg in EC_ALGORITHMS}


@pytest.fixture(scope="session")
def keys_for(
    rsa_keypair: SigningKeyData, ec_keypairs: dict[str, SigningKeyData]
) -> KeysFor:
    """Return ``(signing_key, verification_key)`` for an algorithm name."""

    def _keys(alg: str) -> tuple[object, object]:
        if alg.startswith("HS"):
            secret = f"{alg}-" + "test-secret-" * 6
            return secret, secret
        if alg.startswith("ES"):
            kp = ec_keypairs[alg]
            return kp.private_key_pem, kp.public_key_pem
        return rsa_keypair.private_key_pem, rsa_keypair.public_key_pem

    return _keys


@pytest.fixture(scope="session")
def wrong_keys_for(
    other_rsa_keypair: SigningKeyData, other_ec_keypairs: dict[str, SigningKeyData]
) -> Callable[[str], object]:
    """Return an unrelated verification key of the same family."""

    def _key(alg: str) -> object:
        if alg.startswith("HS"):
            return "wrong-secret"
        if alg.startswith("ES"):
            return other_ec_keypairs[alg].public_key_pem
        return other_rsa_keypair.public_key_pem

    return _key
