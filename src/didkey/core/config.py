# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Core configuration - centralized config for the didkey package.

All environment-based configuration flows through this module.

Usage:
    from didkey.core.config import get_config
    config = get_config()

    log_level = config.log_level
    method_types = config.method_type_iris
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MULTIKEY_TYPE = "https://w3id.org/security#Multikey"
JWK_TYPE = "https://w3id.org/security#JsonWebKey"
JWK_2020_TYPE = "https://w3id.org/security#JsonWebKey2020"

# Short names accepted in DIDKEY_METHOD_TYPES
METHOD_TYPE_ALIASES = {
    "multikey": MULTIKEY_TYPE,
    "jwk": JWK_TYPE,
    "jsonwebkey": JWK_TYPE,
    "jwk2020": JWK_2020_TYPE,
    "jsonwebkey2020": JWK_2020_TYPE,
}


class DidKeySettings(BaseSettings):
    """Configuration settings for didkey.

    Settings can be configured via ``DIDKEY_`` environment variables or a
    ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # RESOLVER SETTINGS
    # ==========================================================================

    method_types: str = Field(
        default="multikey",
        description="Comma-separated verification method types (aliases or IRIs)",
        validation_alias="DIDKEY_METHOD_TYPES",
    )
    encryption_key_derivation: bool = Field(
        default=False,
        description="Derive key agreement keys from signing keys (not yet supported)",
        validation_alias="DIDKEY_ENCRYPTION_KEY_DERIVATION",
    )

    # ==========================================================================
    # LOGGING SETTINGS
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias="DIDKEY_LOG_LEVEL",
    )
    log_format: str = Field(
        default="",
        description="Log format: 'json', 'text', or '' (auto-detect)",
        validation_alias="DIDKEY_LOG_FORMAT",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (optional)",
        validation_alias="DIDKEY_LOG_FILE",
    )

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def method_type_iris(self) -> list[str]:
        """Configured method types with aliases expanded to IRIs, in order."""
        iris: list[str] = []
        for item in self.method_types.split(","):
            item = item.strip()
            if not item:
                continue
            iri = METHOD_TYPE_ALIASES.get(item.lower(), item)
            if iri not in iris:
                iris.append(iri)
        return iris


# ==========================================================================
# GLOBAL CONFIG INSTANCE (lazy loaded)
# ==========================================================================

_config: DidKeySettings | None = None


def get_config() -> DidKeySettings:
    """Get the global configuration instance.

    Returns:
        The singleton DidKeySettings instance.
    """
    global _config
    if _config is None:
        _config = DidKeySettings()
    return _config


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing."""
    global _config
    _config = None
