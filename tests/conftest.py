"""Test configuration and fixtures."""

from pathlib import Path

import pytest

from persona_creator.config import PersonaSettings
from persona_creator.registry import RegistryStore


class FakeClock:
    """Deterministic, strictly increasing ISO-8601 timestamps."""

    def __init__(self) -> None:
        self.ticks = 0

    def __call__(self) -> str:
        self.ticks += 1
        return f"2025-01-01T00:00:{self.ticks:02d}+00:00"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry_path(tmp_path: Path) -> Path:
    """Registry document location inside a not-yet-existing directory."""
    return tmp_path / ".clawdbot" / "persona-registry.json"


@pytest.fixture
def store(registry_path: Path, clock: FakeClock) -> RegistryStore:
    """Provide a registry store using the full common key list."""
    return RegistryStore(registry_path, clock=clock)


@pytest.fixture
def small_store(registry_path: Path, clock: FakeClock) -> RegistryStore:
    """Provide a registry store whose common key list is just openai + anthropic."""
    return RegistryStore(registry_path, common_key_types=["openai", "anthropic"], clock=clock)


@pytest.fixture
def settings(tmp_path: Path, registry_path: Path) -> PersonaSettings:
    """Provide settings isolated from the environment and the user's home."""
    return PersonaSettings(
        _env_file=None,
        registry_path=registry_path,
        personas_root=tmp_path / "personas",
        github_org="test-org",
        repo_prefix="goc-persona-",
    )
