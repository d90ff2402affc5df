# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""didkey - the did:key DID method.

Parse did:key identifiers, create them from public keys, and resolve them
into DID documents carrying Multikey or JSON Web Key verification methods.

    >>> from didkey import DidKey, DidKeyResolver
    >>> did_key = DidKey.parse("did:key:z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp")
    >>> did_key.codec.name
    'ed25519-pub'
"""

__version__ = "1.0.0"

from .core.config import JWK_2020_TYPE, JWK_TYPE, MULTIKEY_TYPE
from .core.exceptions import (
    BadEncodingError,
    DidKeyException,
    DidResolutionError,
    EmptyConfigurationError,
    InvalidDidKeyError,
    InvalidPointError,
    MalformedDidError,
    NotDidKeyError,
    NullInputError,
    ResolutionErrorCode,
    UnsupportedCodecError,
    UnsupportedKeyError,
    UnsupportedMethodTypeError,
)
from .did import Did, DidKey, DidUrl, is_did, is_did_key
from .document import DidDocument, ResolvedDocument
from .encoding import KeyCodec, Multicodec, MulticodecDecoder
from .jwk import JwkMethodProvider
from .methods import JwkKey, MethodProviderSelector, MultibaseKey, VerificationMethod, multikey
from .resolver import DidKeyResolver, DidKeyResolverBuilder

__all__ = [
    "__version__",
    # Method types
    "JWK_2020_TYPE",
    "JWK_TYPE",
    "MULTIKEY_TYPE",
    # Identifiers
    "Did",
    "DidKey",
    "DidUrl",
    "is_did",
    "is_did_key",
    # Codecs
    "KeyCodec",
    "Multicodec",
    "MulticodecDecoder",
    # Verification methods
    "JwkKey",
    "JwkMethodProvider",
    "MethodProviderSelector",
    "MultibaseKey",
    "VerificationMethod",
    "multikey",
    # Resolution
    "DidDocument",
    "DidKeyResolver",
    "DidKeyResolverBuilder",
    "ResolvedDocument",
    # Errors
    "BadEncodingError",
    "DidKeyException",
    "DidResolutionError",
    "EmptyConfigurationError",
    "InvalidDidKeyError",
    "InvalidPointError",
    "MalformedDidError",
    "NotDidKeyError",
    "NullInputError",
    "ResolutionErrorCode",
    "UnsupportedCodecError",
    "UnsupportedKeyError",
    "UnsupportedMethodTypeError",
]
