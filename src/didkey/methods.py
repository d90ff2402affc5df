# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Verification methods derived from a did:key.

A verification method provider is any callable ``(did_key, method_type)``
returning a :class:`VerificationMethod`. Two are shipped: :func:`multikey`
(``publicKeyMultibase``) and :class:`didkey.jwk.JwkMethodProvider`
(``publicKeyJwk``).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Union

from .core.exceptions import EmptyConfigurationError, NullInputError, UnsupportedMethodTypeError
from .did import DidKey, DidUrl
from .encoding import BASE58BTC, multibase_encode

# =============================================================================
# PUBLIC KEY FORMS
# =============================================================================


@dataclass(frozen=True)
class MultibaseKey:
    """Public key carried as ``publicKeyMultibase``."""

    base_name: str
    debased: bytes

    @property
    def encoded(self) -> str:
        """The multibase string, e.g. ``z6Mk...``."""
        return multibase_encode(self.debased)


@dataclass(frozen=True, eq=False)
class JwkKey:
    """Public key carried as ``publicKeyJwk``; the mapping is read-only."""

    jwk: Mapping[str, str]

    def __post_init__(self) -> None:
        if not isinstance(self.jwk, MappingProxyType):
            object.__setattr__(self, "jwk", MappingProxyType(dict(self.jwk)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JwkKey):
            return NotImplemented
        return dict(self.jwk) == dict(other.jwk)

    def __hash__(self) -> int:
        return hash(tuple(self.jwk.items()))


PublicKey = Union[MultibaseKey, JwkKey]


@dataclass(frozen=True)
class VerificationMethod:
    """Verification method in a did:key document."""

    id: DidUrl
    type: str
    controller: DidKey
    public_key: PublicKey

    @property
    def public_key_multibase(self) -> MultibaseKey | None:
        return self.public_key if isinstance(self.public_key, MultibaseKey) else None

    @property
    def public_key_jwk(self) -> Mapping[str, str] | None:
        return self.public_key.jwk if isinstance(self.public_key, JwkKey) else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (JSON-LD format)."""
        result: dict[str, Any] = {
            "id": str(self.id),
            "type": self.type,
            "controller": str(self.controller),
        }
        if isinstance(self.public_key, MultibaseKey):
            result["publicKeyMultibase"] = self.public_key.encoded
        else:
            result["publicKeyJwk"] = dict(self.public_key.jwk)
        return result


VerificationMethodProvider = Callable[[DidKey, str], VerificationMethod]
JwkProducer = Callable[[DidKey], Mapping[str, str]]


# =============================================================================
# PROVIDERS
# =============================================================================


def multikey(did_key: DidKey, method_type: str) -> VerificationMethod:
    """Multikey provider: the key stays in its multibase form."""
    if did_key is None:
        raise NullInputError("did_key")
    if method_type is None:
        raise NullInputError("method_type")

    return VerificationMethod(
        id=DidUrl.fragment_of(did_key),
        type=method_type,
        controller=did_key,
        public_key=MultibaseKey(base_name=BASE58BTC, debased=did_key.debased),
    )


class MethodProviderSelector:
    """Provider dispatching on the requested method type."""

    def __init__(self, providers: Mapping[str, VerificationMethodProvider]):
        self._providers = MappingProxyType(dict(providers))

    @classmethod
    def builder(cls) -> MethodProviderSelectorBuilder:
        return MethodProviderSelectorBuilder()

    @property
    def method_types(self) -> tuple[str, ...]:
        return tuple(self._providers)

    def __call__(self, did_key: DidKey, method_type: str) -> VerificationMethod:
        provider = self._providers.get(method_type)
        if provider is None:
            raise UnsupportedMethodTypeError(method_type)
        return provider(did_key, method_type)


class MethodProviderSelectorBuilder:
    def __init__(self) -> None:
        self._providers: dict[str, VerificationMethodProvider] = {}

    def with_type(self, method_type: str, provider: VerificationMethodProvider) -> MethodProviderSelectorBuilder:
        if method_type is None:
            raise NullInputError("method_type")
        if provider is None:
            raise NullInputError("provider")
        self._providers[method_type] = provider
        return self

    def build(self) -> VerificationMethodProvider:
        """Build the selector; a single registered provider is returned as-is."""
        if not self._providers:
            raise EmptyConfigurationError("At least one method provider must be registered")
        if len(self._providers) == 1:
            return next(iter(self._providers.values()))
        return MethodProviderSelector(self._providers)
