"""GitHub integration: repository creation and local git bootstrap."""

from persona_creator.github.bootstrap import (
    BootstrapResult,
    GitRepoBootstrap,
    RepoBootstrap,
    SkippedRepoBootstrap,
)
from persona_creator.github.client import CreatedRepository, GitHubRepoClient

__all__ = [
    "BootstrapResult",
    "CreatedRepository",
    "GitHubRepoClient",
    "GitRepoBootstrap",
    "RepoBootstrap",
    "SkippedRepoBootstrap",
]
