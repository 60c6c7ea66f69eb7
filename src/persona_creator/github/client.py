"""GitHub API client wrapper.

This wraps PyGithub (plus a plain REST session) to keep GitHub calls out of the
bootstrap and CLI code and make tests easy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlparse

import requests
from github import Auth, Github

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CreatedRepository:
    """Minimal repository metadata returned from GitHub."""

    full_name: str
    html_url: str
    clone_url: str


class GitHubRepoClient:
    """Small wrapper around PyGithub for creating persona repositories."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://api.github.com",
        github_api: Github | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")

        self._rest_base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "persona-creator",
            }
        )

        auth = Auth.Token(token)
        self._github = github_api or Github(auth=auth, base_url=base_url)

    def _repo_url(self, *, repository: str) -> str:
        return f"{self._rest_base_url}/repos/{repository.strip()}"

    def clone_url(self, *, repository: str) -> str:
        """HTTPS clone URL for `owner/repo`, derived from the API base URL.

        `https://api.github.com` maps to `https://github.com`; an Enterprise base such as
        `https://ghe.example.com/api/v3` maps to `https://ghe.example.com`.
        """

        parsed = urlparse(self._rest_base_url)
        host = parsed.netloc
        if host == "api.github.com":
            host = "github.com"
        return f"{parsed.scheme or 'https'}://{host}/{repository.strip()}.git"

    def repository_exists(self, *, repository: str) -> bool:
        """Return whether `owner/repo` exists and is visible to the token."""

        resp = self._session.get(self._repo_url(repository=repository), timeout=30)
        if resp.status_code == 404:
            return False
        resp.raise_for_status()
        return True

    def create_repository(
        self,
        *,
        owner: str,
        name: str,
        private: bool = False,
        description: str = "",
    ) -> CreatedRepository:
        """Create `owner/name`.

        `owner` may be an organization or the authenticated user's own login.
        """

        if not name.strip():
            raise ValueError("Repository name is required")

        user = self._github.get_user()
        if user.login.lower() == owner.strip().lower():
            repo = user.create_repo(name, description=description, private=private)
        else:
            org = self._github.get_organization(owner)
            repo = org.create_repo(name, description=description, private=private)

        logger.info(
            "Created GitHub repository",
            extra={"repo": repo.full_name, "private": private},
        )
        return CreatedRepository(
            full_name=repo.full_name,
            html_url=repo.html_url,
            clone_url=repo.clone_url,
        )

    def close(self) -> None:
        self._session.close()
        self._github.close()
