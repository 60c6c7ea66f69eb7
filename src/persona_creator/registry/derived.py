"""Derived persona state: configured keys, missing keys and readiness.

These values are never persisted. They are recomputed from the stored record
every time the registry is read.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from persona_creator.registry.models import PersonaRecord, PersonaStatus

# Reference list used to report which credentials a persona is still missing.
COMMON_KEY_TYPES: tuple[str, ...] = (
    "openai",
    "anthropic",
    "google",
    "elevenlabs",
    "huggingface",
    "replicate",
    "stability",
    "midjourney",
    "custom",
)


def keys_configured(keys: Mapping[str, object]) -> list[str]:
    return list(keys)


def missing_keys(
    keys: Mapping[str, object], common_key_types: Sequence[str] = COMMON_KEY_TYPES
) -> list[str]:
    """Common key types that are not present in `keys`, in the common list's order."""

    return [key for key in common_key_types if key not in keys]


def is_ready(record: PersonaRecord) -> bool:
    """A persona is ready once it has any configured key and is not in error.

    This deliberately does not require every common key to be present.
    """

    return len(record.keys) > 0 and record.status != PersonaStatus.ERROR.value


@dataclass(frozen=True, slots=True)
class PersonaView:
    """A registry record together with its derived fields."""

    name: str
    record: PersonaRecord
    keys_configured: list[str]
    missing_keys: list[str]
    is_ready: bool

    @property
    def status(self) -> str:
        return self.record.status

    @property
    def repo(self) -> str:
        return self.record.repo

    @property
    def path(self) -> str:
        return self.record.path

    @property
    def created_at(self) -> str | None:
        return self.record.created_at

    @property
    def last_updated(self) -> str | None:
        return self.record.last_updated

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            **self.record.model_dump(mode="json", by_alias=True),
            "keysConfigured": list(self.keys_configured),
            "missingKeys": list(self.missing_keys),
            "isReady": self.is_ready,
        }


def derive(
    name: str, record: PersonaRecord, common_key_types: Sequence[str] = COMMON_KEY_TYPES
) -> PersonaView:
    return PersonaView(
        name=name,
        record=record,
        keys_configured=keys_configured(record.keys),
        missing_keys=missing_keys(record.keys, common_key_types),
        is_ready=is_ready(record),
    )
