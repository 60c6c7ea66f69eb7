"""Configuration for the persona creator.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The GitHub token has its own variable, `PERSONA_GITHUB_TOKEN`, so it does not
collide with other tools that read `GITHUB_TOKEN`. It is optional: without it
the remote bootstrap fails and personas are registered locally only.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL = "minimax/MiniMax-M2.1"


class PersonaSettings(BaseSettings):
    """Settings for the persona creator.

    Environment variables:
    - PERSONA_REGISTRY_PATH     (optional)
    - PERSONA_ROOT              (optional)
    - PERSONA_GITHUB_ORG        (optional)
    - PERSONA_REPO_PREFIX       (optional)
    - PERSONA_DEFAULT_MODEL     (optional)
    - PERSONA_GITHUB_TOKEN      (optional)
    - GITHUB_BASE_URL           (optional)
    - LOG_LEVEL                 (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `PersonaSettings(_env_file=path_to_env)`. Fields can also be passed by
        name, e.g. `PersonaSettings(registry_path=...)`.
    """

    registry_path: Path = Field(
        default_factory=lambda: Path.home() / ".clawdbot" / "persona-registry.json",
        validation_alias="PERSONA_REGISTRY_PATH",
        description="JSON document holding the persona registry",
    )
    personas_root: Path = Field(
        default_factory=lambda: Path.home() / "personas",
        validation_alias="PERSONA_ROOT",
        description="Directory under which persona scaffolds are created",
    )

    github_org: str = Field(
        default="greenclawdbot",
        validation_alias="PERSONA_GITHUB_ORG",
        description="GitHub organization (or user) that owns persona repositories",
    )
    repo_prefix: str = Field(
        default="goc-persona-",
        validation_alias="PERSONA_REPO_PREFIX",
        description="Prefix prepended to the persona name to form the repository name",
    )
    repo_private: bool = Field(
        default=False,
        validation_alias="PERSONA_REPO_PRIVATE",
        description="Create persona repositories as private",
    )
    default_model: str = Field(
        default=DEFAULT_MODEL,
        validation_alias="PERSONA_DEFAULT_MODEL",
        description="Model written to config.yaml when --model is not given",
    )

    github_token: str = Field(
        default="",
        validation_alias="PERSONA_GITHUB_TOKEN",
        description="GitHub token used to create and push persona repositories",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    git_user_name: str = Field(
        default="Clawdbot",
        validation_alias="PERSONA_GIT_USER_NAME",
        description="Committer name used when the scaffold repository has none configured",
    )
    git_user_email: str = Field(
        default="bot@greenclaw.dev",
        validation_alias="PERSONA_GIT_USER_EMAIL",
        description="Committer email used when the scaffold repository has none configured",
    )

    setup_guide_path: Path | None = Field(
        default=None,
        validation_alias="PERSONA_SETUP_GUIDE_PATH",
        description="Markdown file shown by `setup` instead of the built-in guide",
    )

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("github_org", "repo_prefix", "default_model")
    @classmethod
    def _strip(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        # An empty prefix is allowed: the repository is then named after the persona.
        if not value and info.field_name != "repo_prefix":
            raise ValueError("must not be empty")
        return value

    def persona_path(self, name: str) -> Path:
        """Default scaffold directory for a persona."""

        return self.personas_root / name

    def repository_name(self, name: str) -> str:
        """Repository name (without owner) for a persona."""

        return f"{self.repo_prefix}{name}"

    def repository_id(self, name: str) -> str:
        """Repository identifier in `owner/repo` form for a persona."""

        return f"{self.github_org}/{self.repository_name(name)}"
