"""Persona lifecycle: the command sequences behind the CLI.

Creation runs scaffold -> config -> repository bootstrap -> registration. A
failed bootstrap is reported but the persona is still registered locally with
the intended repository identifier. Scaffold and config failures propagate and
stop the sequence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from persona_creator.config import PersonaSettings
from persona_creator.errors import KeyNotConfigured, PersonaNotFound, PersonaPathMissing
from persona_creator.github.bootstrap import BootstrapResult, RepoBootstrap
from persona_creator.registry import PersonaStatus, PersonaView, RegistryStore
from persona_creator.scaffold import create_config, create_persona_scaffold

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CreatedPersona:
    persona: PersonaView
    persona_path: Path
    config_path: Path
    bootstrap: BootstrapResult


@dataclass(frozen=True, slots=True)
class KeyAdded:
    persona: PersonaView
    became_ready: bool


class PersonaLifecycle:
    """High-level, testable persona operations on top of the registry."""

    def __init__(
        self,
        *,
        store: RegistryStore,
        bootstrap: RepoBootstrap,
        settings: PersonaSettings,
    ) -> None:
        self._store = store
        self._bootstrap = bootstrap
        self._settings = settings

    @property
    def store(self) -> RegistryStore:
        return self._store

    def _require(self, name: str) -> PersonaView:
        view = self._store.get(name)
        if view is None:
            raise PersonaNotFound(name)
        return view

    def create_persona(
        self, *, name: str, model: str | None = None, description: str = ""
    ) -> CreatedPersona:
        model = model or self._settings.default_model
        repo_name = self._settings.repository_name(name)
        intended_repo = self._settings.repository_id(name)

        persona_path = create_persona_scaffold(
            root=self._settings.personas_root, name=name, description=description
        )
        config_path = create_config(persona_path=persona_path, name=name, model=model)

        result = self._bootstrap.bootstrap(
            local_path=persona_path, repo_name=repo_name, org=self._settings.github_org
        )
        if result.ok:
            repository = result.repository
        else:
            logger.warning(
                "Continuing with local-only registration",
                extra={"persona": name, "repo": intended_repo, "error": result.error},
            )
            repository = intended_repo

        self._store.register(name, repository, str(persona_path))
        return CreatedPersona(
            persona=self._require(name),
            persona_path=persona_path,
            config_path=config_path,
            bootstrap=result,
        )

    def register_existing(
        self, *, name: str, repo: str | None = None, path: Path | None = None
    ) -> PersonaView:
        """Register a persona directory that already exists on disk."""

        resolved_path = path or self._settings.persona_path(name)
        resolved_repo = repo or self._settings.repository_id(name)
        if not resolved_path.exists():
            raise PersonaPathMissing(resolved_path)

        self._store.register(name, resolved_repo, str(resolved_path))
        return self._require(name)

    def status(self, name: str) -> PersonaView:
        return self._require(name)

    def list_personas(self) -> list[PersonaView]:
        return self._store.list()

    def add_key(self, *, name: str, key_type: str) -> KeyAdded:
        """Mark a key configured; flip to ready once no common key is missing."""

        self._require(name)
        if not self._store.add_key(name, key_type):
            raise PersonaNotFound(name)

        view = self._require(name)
        if not view.missing_keys and view.status != PersonaStatus.READY.value:
            self._store.update_status(name, PersonaStatus.READY.value)
            logger.info("All common keys configured", extra={"persona": name})
            return KeyAdded(persona=self._require(name), became_ready=True)
        return KeyAdded(persona=view, became_ready=False)

    def remove_key(self, *, name: str, key_type: str) -> PersonaView:
        self._require(name)
        if not self._store.remove_key(name, key_type):
            raise KeyNotConfigured(name, key_type)
        return self._require(name)

    def update_status(self, *, name: str, status: str) -> PersonaView:
        if not self._store.update_status(name, status):
            raise PersonaNotFound(name)
        return self._require(name)

    def unregister(self, name: str) -> None:
        if not self._store.unregister(name):
            raise PersonaNotFound(name)
