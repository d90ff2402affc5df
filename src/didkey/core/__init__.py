# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Core infrastructure: configuration, logging and the exception hierarchy."""

from .config import DidKeySettings, clear_config_cache, get_config
from .exceptions import (
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
from .logging import configure_logging

__all__ = [
    "BadEncodingError",
    "DidKeyException",
    "DidKeySettings",
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
    "clear_config_cache",
    "configure_logging",
    "get_config",
]
