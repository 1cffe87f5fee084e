"""Type definitions for key bundles and decode results."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class SigningKeyData(BaseModel):
    """An asymmetric keypair in PEM form.

    Accepted wherever a key is expected for RS*, PS* and ES* algorithms:
    the private half signs, the public half verifies.
    """

    model_config = ConfigDict(frozen=True)

    kid: str
    private_key_pem: str
    public_key_pem: str


class VerificationStatus(str, Enum):
    """Outcome of verifying a structurally valid token."""

    VALID = "valid"
    SIGNATURE_MISMATCH = "signature_mismatch"


class DecodeResult(BaseModel):
    """Result of decoding a token.

    ``payload`` is only populated when the signature verified.
    """

    model_config = ConfigDict(frozen=True)

    status: VerificationStatus
    header: dict[str, Any]
    payload: Any = None

    @property
    def ok(self) -> bool:
        """Whether the signature verified."""
        return self.status is VerificationStatus.VALID

    def __bool__(self) -> bool:
        return self.ok


SIGNATURE_MISMATCH = VerificationStatus.SIGNATURE_MISMATCH
