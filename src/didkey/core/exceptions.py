# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Exception hierarchy for didkey.

Every failure is surfaced to the caller as one of the types below. Parse
failures share :class:`InvalidDidKeyError` (a ``ValueError``) so callers can
catch the whole family; the resolver reports them as
:class:`DidResolutionError` with a machine-readable code.
"""

from __future__ import annotations

import enum
from typing import Any


class DidKeyException(Exception):  # noqa: N818
    """Base exception for all didkey errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class NullInputError(DidKeyException, TypeError):
    """A required argument was ``None``."""

    def __init__(self, argument: str):
        super().__init__(f"{argument} must not be None", {"argument": argument})
        self.argument = argument


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class InvalidDidKeyError(DidKeyException, ValueError):
    """Base class for values that cannot be parsed as a ``did:key``.

    Raised when:
    - The value is not a syntactically valid DID
    - The DID method is not ``key``
    - The method-specific id is not base58btc multibase
    - The multicodec prefix is unknown
    """

    def __init__(self, message: str, did: str | None = None):
        details = {}
        if did is not None:
            details["did"] = did
        super().__init__(message, details)
        self.did = did


class MalformedDidError(InvalidDidKeyError):
    """The value does not match the generic DID grammar."""


class NotDidKeyError(InvalidDidKeyError):
    """The DID method name is not ``key``."""


class BadEncodingError(InvalidDidKeyError):
    """The multibase prefix is not base58btc or the base58 payload is invalid."""


class UnsupportedCodecError(InvalidDidKeyError):
    """The multicodec prefix is not recognised by the decoder."""


# ---------------------------------------------------------------------------
# Key material
# ---------------------------------------------------------------------------


class UnsupportedKeyError(DidKeyException, ValueError):
    """The codec is known but cannot be expressed in the requested form."""

    def __init__(self, message: str, codec: str | None = None):
        details = {}
        if codec:
            details["codec"] = codec
        super().__init__(message, details)
        self.codec = codec


class InvalidPointError(DidKeyException, ValueError):
    """Malformed compressed SEC1 elliptic-curve point."""

    def __init__(self, message: str, curve: str | None = None):
        details = {}
        if curve:
            details["curve"] = curve
        super().__init__(message, details)
        self.curve = curve


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class EmptyConfigurationError(DidKeyException):
    """A builder was asked to build without any registered provider."""


class UnsupportedMethodTypeError(DidKeyException, ValueError):
    """No provider is registered for a verification method type."""

    def __init__(self, method_type: str):
        super().__init__(
            f"Unsupported {method_type}, no method provider is associated with the type",
            {"method_type": method_type},
        )
        self.method_type = method_type


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class ResolutionErrorCode(enum.StrEnum):
    """Error codes reported by the resolver."""

    INVALID_DID = "invalidDid"
    UNSUPPORTED_METHOD = "methodNotSupported"
    NOT_IMPLEMENTED = "notImplemented"


class DidResolutionError(DidKeyException):
    """Resolution of a DID failed.

    The ``code`` tells the caller which stage failed; the original parse error,
    if any, is available as ``__cause__``.
    """

    def __init__(self, did: Any, code: ResolutionErrorCode, message: str):
        super().__init__(message, {"did": str(did), "code": code.value})
        self.did = str(did)
        self.code = code
