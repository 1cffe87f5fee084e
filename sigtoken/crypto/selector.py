"""Algorithm lookup: identifier to bound signer and verifier."""

from collections.abc import Callable
from functools import partial
from types import MappingProxyType
from typing import assert_never

from pydantic import BaseModel, ConfigDict

from sigtoken.crypto import primitives
from sigtoken.crypto.algorithms import (
    ALGORITHM_SPECS,
    Algorithm,
    AlgorithmFamily,
    AlgorithmSpec,
    parse_algorithm,
)

Signer = Callable[[object, bytes], bytes]
Verifier = Callable[[object, bytes, bytes], bool]

_FamilySigner = Callable[[AlgorithmSpec, object, bytes], bytes]
_FamilyVerifier = Callable[[AlgorithmSpec, object, bytes, bytes], bool]


class AlgorithmEntry(BaseModel):
    """Signer and verifier bound to one algorithm's parameters."""

    model_config = ConfigDict(frozen=True)

    algorithm: Algorithm
    spec: AlgorithmSpec
    signer: Signer
    verifier: Verifier


def _family_functions(
    family: AlgorithmFamily,
) -> tuple[_FamilySigner, _FamilyVerifier]:
    if family is AlgorithmFamily.HMAC:
        return primitives.hmac_sign, primitives.hmac_verify
    if family is AlgorithmFamily.RSA_PKCS1:
        return primitives.rsa_pkcs1_sign, primitives.rsa_pkcs1_verify
    if family is AlgorithmFamily.RSA_PSS:
        return primitives.rsa_pss_sign, primitives.rsa_pss_verify
    if family is AlgorithmFamily.ECDSA:
        return primitives.ecdsa_sign, primitives.ecdsa_verify
    assert_never(family)


def _build_entry(spec: AlgorithmSpec) -> AlgorithmEntry:
    sign_fn, verify_fn = _family_functions(spec.family)
    return AlgorithmEntry(
        algorithm=spec.algorithm,
        spec=spec,
        signer=partial(sign_fn, spec),
        verifier=partial(verify_fn, spec),
    )


_ENTRIES: MappingProxyType[Algorithm, AlgorithmEntry] = MappingProxyType(
    {algorithm: _build_entry(spec) for algorithm, spec in ALGORITHM_SPECS.items()}
)


def resolve(identifier: object) -> AlgorithmEntry:
    """Look up the entry for ``identifier``, ignoring case."""
    return _ENTRIES[parse_algorithm(identifier)]


def supported_algorithms() -> list[Algorithm]:
    """All algorithms with a registered signer and verifier."""
    return list(_ENTRIES)
