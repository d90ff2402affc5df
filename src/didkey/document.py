# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""DID documents produced by did:key resolution.

A did:key document is derived entirely from the identifier: every
verification relationship references the same verification methods, and
there are no services, controllers or aliases.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .core.config import JWK_2020_TYPE, JWK_TYPE, MULTIKEY_TYPE
from .did import DidKey
from .methods import VerificationMethod

DID_CONTEXT = "https://www.w3.org/ns/did/v1"

# Extra JSON-LD contexts per verification method type
METHOD_CONTEXTS = {
    MULTIKEY_TYPE: "https://w3id.org/security/multikey/v1",
    JWK_TYPE: "https://w3id.org/security/jwk/v1",
    JWK_2020_TYPE: "https://w3id.org/security/suites/jws-2020/v1",
}


@dataclass(frozen=True)
class DidDocument:
    """DID Document for a did:key."""

    id: DidKey
    verification: tuple[VerificationMethod, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "verification", tuple(self.verification))

    # Every relationship is the same set of methods
    @property
    def authentication(self) -> tuple[VerificationMethod, ...]:
        return self.verification

    @property
    def assertion(self) -> tuple[VerificationMethod, ...]:
        return self.verification

    @property
    def capability_invocation(self) -> tuple[VerificationMethod, ...]:
        return self.verification

    @property
    def capability_delegation(self) -> tuple[VerificationMethod, ...]:
        return self.verification

    @property
    def also_known_as(self) -> tuple:
        return ()

    @property
    def controller(self) -> tuple:
        return ()

    @property
    def key_agreement(self) -> tuple:
        return ()

    @property
    def service(self) -> tuple:
        return ()

    def has_required_properties(self) -> bool:
        return self.id is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (JSON-LD format)."""
        context = [DID_CONTEXT]
        for method in self.verification:
            extra = METHOD_CONTEXTS.get(method.type)
            if extra and extra not in context:
                context.append(extra)

        doc: dict[str, Any] = {
            "@context": context,
            "id": str(self.id),
        }

        if self.verification:
            method_ids = list(dict.fromkeys(str(m.id) for m in self.verification))
            doc["verificationMethod"] = [m.to_dict() for m in self.verification]
            doc["authentication"] = method_ids
            doc["assertionMethod"] = list(method_ids)
            doc["capabilityInvocation"] = list(method_ids)
            doc["capabilityDelegation"] = list(method_ids)

        return doc

    def to_json(self, indent: int | None = None) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


@dataclass(frozen=True)
class ResolvedDocument:
    """Resolution result; did:key resolution carries no document metadata."""

    document: DidDocument
    metadata: Any = None
