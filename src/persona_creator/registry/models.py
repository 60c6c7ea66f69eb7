"""Persisted shapes of the persona registry document.

All models allow extra fields so that data written by newer (or older) tools
survives a read-modify-write cycle untouched. Field names are camelCase on disk.
Credential markers are kept as raw JSON values: only the presence of a key
matters, and whatever was stored for it is written back as-is.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PersonaStatus(str, Enum):
    NEEDS_SETUP = "needs-setup"
    READY = "ready"
    ERROR = "error"


def utc_iso_now() -> str:
    return datetime.now(tz=UTC).isoformat()


class CredentialMarker(BaseModel):
    """Records that a credential kind was configured. The credential itself is never stored."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    configured: bool = True
    configured_at: str | None = Field(default=None, alias="configuredAt")

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def marker_configured_at(marker: Any) -> str | None:
    """Best-effort `configuredAt` of a stored marker, which may be any JSON value."""

    if isinstance(marker, dict):
        value = marker.get("configuredAt")
        return None if value is None else str(value)
    return None


class PersonaRecord(BaseModel):
    """A single persona entry in the registry."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    # Free-form on disk; the tool itself only writes PersonaStatus values.
    status: str = Field(default=PersonaStatus.NEEDS_SETUP.value)
    repo: str = Field(default="")
    path: str = Field(default="")
    keys: dict[str, Any] = Field(default_factory=dict)
    created_at: str | None = Field(default=None, alias="createdAt")
    last_updated: str | None = Field(default=None, alias="lastUpdated")

    @field_validator("keys", mode="before")
    @classmethod
    def _null_keys_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_json(self) -> dict[str, Any]:
        # Fields absent on disk stay absent; mutations go through attribute
        # assignment so they count as set.
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class RegistryDocument(BaseModel):
    """The whole registry file: `{personas: {...}, lastUpdated: ...}`."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    personas: dict[str, PersonaRecord] = Field(default_factory=dict)
    last_updated: str | None = Field(default=None, alias="lastUpdated")

    @field_validator("personas", mode="before")
    @classmethod
    def _null_personas_as_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_json(self) -> dict[str, Any]:
        rest = self.model_dump(
            mode="json", by_alias=True, exclude_unset=True, exclude={"personas"}
        )
        return {
            "personas": {name: record.to_json() for name, record in self.personas.items()},
            **rest,
        }
