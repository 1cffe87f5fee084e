"""Token issuance and verification bound to one algorithm and key."""

from typing import Any

from sigtoken.core.settings import TokenSettings
from sigtoken.crypto.algorithms import Algorithm, parse_algorithm
from sigtoken.crypto.types import DecodeResult
from sigtoken.token.assembler import decode, encode


class TokenManager:
    """Issues and verifies compact signed tokens with a fixed algorithm."""

    def __init__(
        self,
        signing_key: object,
        verification_key: object | None = None,
        algorithm: str | Algorithm | None = None,
        kid: str | None = None,
        settings: TokenSettings | None = None,
    ) -> None:
        self._settings = settings or TokenSettings()
        if algorithm is None:
            self._algorithm = self._settings.get_default_algorithm()
        else:
            self._algorithm = parse_algorithm(algorithm)
        self._signing_key = signing_key
        self._verification_key = (
            signing_key if verification_key is None else verification_key
        )
        self._kid = kid

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    def issue(self, payload: Any, headers: dict[str, Any] | None = None) -> str:
        """Sign ``payload`` and return the compact token."""
        header: dict[str, Any] = {
            "alg": self._algorithm.value,
            "typ": self._settings.token_type,
        }
        if self._kid is not None:
            header["kid"] = self._kid
        if headers:
            header.update({k: v for k, v in headers.items() if k != "alg"})
        return encode(header, payload, self._signing_key)

    def verify(self, token: str) -> DecodeResult:
        """Verify ``token`` against the configured algorithm allow-list."""
        allowed = self._settings.get_allowed_algorithm_list() or [self._algorithm]
        return decode(token, self._verification_key, algorithms=allowed)
