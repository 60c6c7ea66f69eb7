"""Error types shared by the registry, the lifecycle layer and the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PersonaNotFound(Exception):
    """Raised when an operation targets a persona that is not registered."""

    name: str

    def __str__(self) -> str:
        return f"Persona {self.name!r} not found"


@dataclass(frozen=True, slots=True)
class PersonaPathMissing(Exception):
    """Raised when a persona is registered against a path that does not exist."""

    path: Path

    def __str__(self) -> str:
        return f"Persona path does not exist: {self.path}"


@dataclass(frozen=True, slots=True)
class KeyNotConfigured(Exception):
    """Raised when removing a credential kind that was never configured."""

    name: str
    key_type: str

    def __str__(self) -> str:
        return f"Key {self.key_type!r} is not configured for persona {self.name!r}"


@dataclass(frozen=True, slots=True)
class RegistryPersistenceError(Exception):
    """The registry document could not be read, parsed or written.

    The store raises this instead of falling back to an empty registry, so an
    unreadable document is never silently overwritten.
    """

    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Persona registry at {self.path} is unusable: {self.reason}"
