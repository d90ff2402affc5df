# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""did:key resolver.

Usage:
    from didkey import DidKeyResolver

    resolver = DidKeyResolver.builder().multikey().jwk().build()
    resolved = resolver.resolve("did:key:z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp")
    print(resolved.document.to_json(indent=2))

Resolution is local and deterministic: the DID document is generated from
the public key embedded in the identifier.
"""

from __future__ import annotations

import logging
from typing import Any

from .core.config import JWK_2020_TYPE, JWK_TYPE, MULTIKEY_TYPE, DidKeySettings, get_config
from .core.exceptions import (
    DidResolutionError,
    EmptyConfigurationError,
    InvalidDidKeyError,
    NullInputError,
    ResolutionErrorCode,
    UnsupportedMethodTypeError,
)
from .did import METHOD_NAME, Did, DidKey
from .document import DidDocument, ResolvedDocument
from .encoding import MulticodecDecoder
from .jwk import JwkMethodProvider
from .methods import VerificationMethodProvider
from .methods import multikey as multikey_provider

logger = logging.getLogger(__name__)

__all__ = [
    "JWK_2020_TYPE",
    "JWK_TYPE",
    "MULTIKEY_TYPE",
    "DidKeyResolver",
    "DidKeyResolverBuilder",
]


class DidKeyResolver:
    """Resolves did:key identifiers into DID documents.

    Built once via :meth:`builder`; the registered method types are fixed
    afterwards.
    """

    MULTIKEY_TYPE = MULTIKEY_TYPE
    JWK_TYPE = JWK_TYPE
    JWK_2020_TYPE = JWK_2020_TYPE

    def __init__(
        self,
        codecs: MulticodecDecoder,
        methods: tuple[tuple[str, VerificationMethodProvider], ...],
        encryption_key_derivation: bool = False,
    ):
        self._codecs = codecs
        self._methods = tuple(methods)
        self._encryption_key_derivation = encryption_key_derivation

    @classmethod
    def builder(cls, codecs: MulticodecDecoder | None = None) -> DidKeyResolverBuilder:
        return DidKeyResolverBuilder(codecs or MulticodecDecoder.for_keys())

    @classmethod
    def with_defaults(cls, codecs: MulticodecDecoder | None = None) -> DidKeyResolver:
        """Resolver producing Multikey verification methods only."""
        return cls.builder(codecs).multikey().build()

    @classmethod
    def from_config(cls, settings: DidKeySettings | None = None) -> DidKeyResolver:
        """Build a resolver from ``DIDKEY_METHOD_TYPES`` and related settings.

        Raises:
            UnsupportedMethodTypeError: For a configured type with no provider.
            EmptyConfigurationError: If no method type is configured.
        """
        settings = settings or get_config()
        builder = cls.builder().encryption_key_derivation(settings.encryption_key_derivation)

        for method_type in settings.method_type_iris:
            if method_type == MULTIKEY_TYPE:
                builder.multikey()
            elif method_type in (JWK_TYPE, JWK_2020_TYPE):
                builder.jwk(method_type)
            else:
                raise UnsupportedMethodTypeError(method_type)

        return builder.build()

    @property
    def codecs(self) -> MulticodecDecoder:
        return self._codecs

    @property
    def method_types(self) -> tuple[str, ...]:
        return tuple(method_type for method_type, _ in self._methods)

    @property
    def encryption_key_derivation(self) -> bool:
        return self._encryption_key_derivation

    def resolve(self, value: Any) -> ResolvedDocument:
        """Resolve a did:key given as a string, URI, :class:`Did` or :class:`DidKey`.

        Raises:
            NullInputError: If ``value`` is None.
            DidResolutionError: If the value is not a resolvable did:key.
            UnsupportedKeyError: If a provider cannot express the key.
        """
        if value is None:
            raise NullInputError("did")

        did_key = self._to_did_key(value)

        if self._encryption_key_derivation:
            raise DidResolutionError(
                did_key,
                ResolutionErrorCode.NOT_IMPLEMENTED,
                "Encryption key derivation is not yet supported.",
            )

        methods = tuple(provider(did_key, method_type) for method_type, provider in self._methods)

        logger.debug("Resolved %s with %d verification method(s)", did_key, len(methods))

        return ResolvedDocument(document=DidDocument(id=did_key, verification=methods))

    def _to_did_key(self, value: Any) -> DidKey:
        if isinstance(value, DidKey):
            return value

        try:
            did = value if isinstance(value, Did) else Did.parse(value)
        except InvalidDidKeyError as e:
            raise DidResolutionError(value, ResolutionErrorCode.INVALID_DID, e.message) from e

        if did.method.lower() != METHOD_NAME:
            raise DidResolutionError(
                did,
                ResolutionErrorCode.UNSUPPORTED_METHOD,
                f"Unsupported DID method '{did.method}', expected '{METHOD_NAME}'",
            )

        try:
            return DidKey.parse(did, self._codecs)
        except InvalidDidKeyError as e:
            raise DidResolutionError(did, ResolutionErrorCode.INVALID_DID, e.message) from e

    def __repr__(self) -> str:
        return f"DidKeyResolver(method_types={list(self.method_types)!r})"


class DidKeyResolverBuilder:
    """Collects method providers for a :class:`DidKeyResolver`.

    Providers are keyed by method type and applied in first-registration
    order; registering a type again replaces its provider. :meth:`build`
    takes a snapshot, so later builder calls never affect a built resolver.
    """

    def __init__(self, codecs: MulticodecDecoder):
        if codecs is None:
            raise NullInputError("codecs")
        self._codecs = codecs
        self._methods: dict[str, VerificationMethodProvider] = {}
        self._encryption_key_derivation = False

    def method(self, method_type: str, provider: VerificationMethodProvider) -> DidKeyResolverBuilder:
        if method_type is None:
            raise NullInputError("method_type")
        if provider is None:
            raise NullInputError("provider")
        self._methods[method_type] = provider
        return self

    def multikey(self) -> DidKeyResolverBuilder:
        return self.method(MULTIKEY_TYPE, multikey_provider)

    def multibase(self, method_type: str) -> DidKeyResolverBuilder:
        """Multibase-encoded key under a custom method type."""
        return self.method(method_type, multikey_provider)

    def jwk(self, method_type: str = JWK_TYPE) -> DidKeyResolverBuilder:
        return self.method(method_type, JwkMethodProvider.default())

    def jwk_2020(self) -> DidKeyResolverBuilder:
        return self.jwk(JWK_2020_TYPE)

    def encryption_key_derivation(self, enabled: bool = True) -> DidKeyResolverBuilder:
        self._encryption_key_derivation = bool(enabled)
        return self

    def build(self) -> DidKeyResolver:
        if not self._methods:
            raise EmptyConfigurationError(
                "At least one verification method type must be configured",
                {"hint": "call multikey(), jwk() or method() before build()"},
            )
        return DidKeyResolver(self._codecs, tuple(self._methods.items()), self._encryption_key_derivation)
