"""Global test fixtures for the didkey test suite."""

from __future__ import annotations

import os

import pytest

from didkey.core.config import clear_config_cache

# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove all DIDKEY_ environment variables and reset the config singleton.

    Runs from an empty directory so a stray ``.env`` is never picked up.
    """
    for key in list(os.environ.keys()):
        if key.startswith("DIDKEY_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_config_cache()
    yield
    clear_config_cache()


# ============================================================================
# Identifier Fixtures
# ============================================================================


@pytest.fixture
def ed25519_did():
    return "did:key:z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp"


@pytest.fixture
def p256_did():
    return "did:key:zDnaerx9CtbPJ1q36T5Ln5wYt3MQYeGRG5ehnPAmxcf5mDZpv"


@pytest.fixture
def secp256k1_did():
    return "did:key:zQ3shokFTS3brHcDQrn82RUDfCZESWL1ZdCEJwekUDPQiYBme"
