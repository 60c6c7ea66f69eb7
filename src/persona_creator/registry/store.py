"""JSON-file backed persona registry.

Every operation loads the document fresh and every mutation writes it back in
full. There is no locking: two processes mutating the registry at the same time
can lose one of the updates (last writer wins).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from pydantic import ValidationError

from persona_creator.errors import RegistryPersistenceError
from persona_creator.registry.derived import COMMON_KEY_TYPES, PersonaView, derive
from persona_creator.registry.models import (
    CredentialMarker,
    PersonaRecord,
    PersonaStatus,
    RegistryDocument,
    utc_iso_now,
)

logger = logging.getLogger(__name__)


class RegistryStore:
    """Read-modify-write access to the persona registry document."""

    def __init__(
        self,
        path: Path,
        *,
        common_key_types: Sequence[str] = COMMON_KEY_TYPES,
        clock: Callable[[], str] = utc_iso_now,
    ) -> None:
        self._path = path
        self._common_key_types = tuple(common_key_types)
        self._clock = clock

    @property
    def path(self) -> Path:
        return self._path

    def common_key_types(self) -> list[str]:
        return list(self._common_key_types)

    def _load(self) -> RegistryDocument:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return RegistryDocument()
        except OSError as e:
            raise RegistryPersistenceError(self._path, f"cannot read: {e}") from e

        if not text.strip():
            return RegistryDocument()

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise RegistryPersistenceError(self._path, f"invalid JSON: {e}") from e

        if not isinstance(raw, dict):
            raise RegistryPersistenceError(self._path, "expected a JSON object at the top level")

        try:
            return RegistryDocument.model_validate(raw)
        except ValidationError as e:
            raise RegistryPersistenceError(self._path, f"unexpected shape: {e}") from e

    def _save(self, document: RegistryDocument) -> None:
        document.last_updated = self._clock()
        payload = json.dumps(document.to_json(), indent=2, ensure_ascii=False) + "\n"

        # Write-then-rename so a crash never leaves a truncated document behind.
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(self._path)
        except OSError as e:
            raise RegistryPersistenceError(self._path, f"cannot write: {e}") from e

        logger.debug(
            "Registry saved",
            extra={"path": str(self._path), "personas": len(document.personas)},
        )

    def _view(self, name: str, record: PersonaRecord) -> PersonaView:
        return derive(name, record, self._common_key_types)

    def register(self, name: str, repo: str, path: str) -> PersonaRecord:
        """Insert or replace the record for `name`.

        Re-registration keeps `createdAt` (and any unknown fields) but resets the
        status to needs-setup and empties the configured keys.
        """

        document = self._load()
        existing = document.personas.get(name)
        now = self._clock()

        if existing is not None:
            logger.info("Persona already registered, updating", extra={"persona": name})

        preserved = dict(existing.model_extra or {}) if existing is not None else {}
        record = PersonaRecord.model_validate(
            {
                **preserved,
                "status": PersonaStatus.NEEDS_SETUP.value,
                "repo": repo,
                "path": path,
                "keys": {},
                "createdAt": existing.created_at if existing and existing.created_at else now,
                "lastUpdated": now,
            }
        )
        document.personas[name] = record
        self._save(document)

        logger.info("Registered persona", extra={"persona": name, "repo": repo})
        return record

    def get(self, name: str) -> PersonaView | None:
        record = self._load().personas.get(name)
        if record is None:
            return None
        return self._view(name, record)

    def list(self) -> list[PersonaView]:
        document = self._load()
        return [self._view(name, record) for name, record in document.personas.items()]

    def update_status(self, name: str, status: str) -> bool:
        document = self._load()
        record = document.personas.get(name)
        if record is None:
            logger.error("Persona not found in registry", extra={"persona": name})
            return False

        record.status = status
        record.last_updated = self._clock()
        self._save(document)

        logger.info("Updated persona status", extra={"persona": name, "status": status})
        return True

    def add_key(self, name: str, key_type: str) -> bool:
        """Mark `key_type` as configured. Overwrites an existing marker."""

        document = self._load()
        record = document.personas.get(name)
        if record is None:
            logger.error("Persona not found in registry", extra={"persona": name})
            return False

        now = self._clock()
        marker = CredentialMarker(configured=True, configured_at=now)
        record.keys = {**record.keys, key_type: marker.to_json()}
        record.last_updated = now
        self._save(document)

        logger.info("Added key", extra={"persona": name, "key_type": key_type})
        return True

    def remove_key(self, name: str, key_type: str) -> bool:
        document = self._load()
        record = document.personas.get(name)
        if record is None or key_type not in record.keys:
            return False

        record.keys = {key: marker for key, marker in record.keys.items() if key != key_type}
        record.last_updated = self._clock()
        self._save(document)

        logger.info("Removed key", extra={"persona": name, "key_type": key_type})
        return True

    def unregister(self, name: str) -> bool:
        document = self._load()
        if name not in document.personas:
            logger.error("Persona not found in registry", extra={"persona": name})
            return False

        del document.personas[name]
        self._save(document)

        logger.info("Unregistered persona", extra={"persona": name})
        return True

    def get_keys(self, name: str) -> list[str]:
        view = self.get(name)
        return list(view.keys_configured) if view is not None else []
