"""Persona registry: persisted records plus derived readiness state."""

from persona_creator.registry.derived import (
    COMMON_KEY_TYPES,
    PersonaView,
    derive,
    is_ready,
    missing_keys,
)
from persona_creator.registry.models import (
    CredentialMarker,
    PersonaRecord,
    PersonaStatus,
    RegistryDocument,
    marker_configured_at,
)
from persona_creator.registry.store import RegistryStore

__all__ = [
    "COMMON_KEY_TYPES",
    "CredentialMarker",
    "PersonaRecord",
    "PersonaStatus",
    "PersonaView",
    "RegistryDocument",
    "RegistryStore",
    "derive",
    "is_ready",
    "marker_configured_at",
    "missing_keys",
]
