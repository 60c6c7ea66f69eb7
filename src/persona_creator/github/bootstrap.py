"""Repository bootstrap: local git initialisation plus GitHub remote creation.

A bootstrap never raises for expected failures (git errors, missing token,
GitHub API errors). It returns a `BootstrapResult` so that callers can keep
going with a local-only registration.
"""

from __future__ import annotations

import base64
import logging
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

import requests
from github import GithubException

from persona_creator.github.client import GitHubRepoClient

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"
INITIAL_COMMIT_MESSAGE = "Initial commit: scaffold persona"

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


@dataclass(frozen=True, slots=True)
class BootstrapResult:
    ok: bool
    repository: str
    error: str | None = None
    skipped: bool = False


class RepoBootstrap(Protocol):
    """Turns a local persona directory into a pushed GitHub repository."""

    def bootstrap(self, *, local_path: Path, repo_name: str, org: str) -> BootstrapResult: ...


@dataclass(frozen=True, slots=True)
class SkippedRepoBootstrap:
    """Does nothing and reports the intended repository as if it were created."""

    def bootstrap(self, *, local_path: Path, repo_name: str, org: str) -> BootstrapResult:
        repository = f"{org}/{repo_name}"
        logger.info(
            "Skipping repository bootstrap",
            extra={"path": str(local_path), "repo": repository},
        )
        return BootstrapResult(ok=True, repository=repository, skipped=True)


def _redact(cmd: Sequence[Any]) -> str:
    parts = []
    for part in cmd:
        text = str(part)
        if text.startswith("http.extraheader="):
            text = "http.extraheader=***"
        parts.append(text)
    return " ".join(parts)


class GitRepoBootstrap:
    """Bootstrap using the `git` executable and the GitHub API.

    Steps, each idempotent:
      - `git init` on `main` unless the directory is already a repository
      - set a committer identity if none is configured
      - stage everything and commit (nothing to commit is fine)
      - create the GitHub repository unless it already exists
      - add `origin` unless present, then push `main`
    """

    def __init__(
        self,
        *,
        github: GitHubRepoClient | None,
        token: str = "",
        git_user_name: str = "Clawdbot",
        git_user_email: str = "bot@greenclaw.dev",
        private: bool = False,
        timeout_seconds: float = 30.0,
        runner: Runner = subprocess.run,
    ) -> None:
        self._github = github
        self._token = token
        self._git_user_name = git_user_name
        self._git_user_email = git_user_email
        self._private = private
        self._timeout_seconds = timeout_seconds
        self._runner = runner

    def _git(
        self, *args: str, cwd: Path, check: bool = True
    ) -> subprocess.CompletedProcess[str]:
        cmd = ["git", *args]
        logger.debug("Running git", extra={"cmd": _redact(cmd), "cwd": str(cwd)})
        result = self._runner(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=self._timeout_seconds,
            check=False,
        )
        if check and result.returncode != 0:
            raise subprocess.CalledProcessError(
                result.returncode, cmd, output=result.stdout, stderr=result.stderr
            )
        return result

    def _push_auth_args(self) -> list[str]:
        if not self._token:
            return []
        basic = base64.b64encode(f"x-access-token:{self._token}".encode()).decode("ascii")
        return ["-c", f"http.extraheader=AUTHORIZATION: basic {basic}"]

    def _init_local(self, path: Path) -> None:
        if self._git("rev-parse", "--git-dir", cwd=path, check=False).returncode == 0:
            logger.info("Git repository already initialised", extra={"path": str(path)})
        else:
            self._git("init", cwd=path)
            self._git("symbolic-ref", "HEAD", f"refs/heads/{DEFAULT_BRANCH}", cwd=path)
            logger.info("Git repository initialised", extra={"path": str(path)})

        if self._git("config", "user.name", cwd=path, check=False).returncode != 0:
            self._git("config", "user.name", self._git_user_name, cwd=path)
            self._git("config", "user.email", self._git_user_email, cwd=path)

        self._git("add", ".", cwd=path)
        if self._git("commit", "-m", INITIAL_COMMIT_MESSAGE, cwd=path, check=False).returncode:
            logger.info("No changes to commit", extra={"path": str(path)})

    def _publish(self, path: Path, github: GitHubRepoClient, org: str, repo_name: str) -> str:
        repository = f"{org}/{repo_name}"
        if github.repository_exists(repository=repository):
            logger.info("GitHub repository already exists", extra={"repo": repository})
        else:
            created = github.create_repository(owner=org, name=repo_name, private=self._private)
            repository = created.full_name

        if self._git("remote", "get-url", "origin", cwd=path, check=False).returncode != 0:
            self._git("remote", "add", "origin", github.clone_url(repository=repository), cwd=path)

        self._git(*self._push_auth_args(), "push", "-u", "origin", DEFAULT_BRANCH, cwd=path)
        logger.info("Pushed persona repository", extra={"repo": repository})
        return repository

    def bootstrap(self, *, local_path: Path, repo_name: str, org: str) -> BootstrapResult:
        intended = f"{org}/{repo_name}"
        if not local_path.is_dir():
            return BootstrapResult(
                ok=False, repository=intended, error=f"Not a directory: {local_path}"
            )

        try:
            self._init_local(local_path)
            if self._github is None:
                return BootstrapResult(
                    ok=False,
                    repository=intended,
                    error="PERSONA_GITHUB_TOKEN is not set; repository initialised locally only",
                )
            repository = self._publish(local_path, self._github, org, repo_name)
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            error = f"`{_redact(e.cmd)}` exited with {e.returncode}"
            if stderr:
                error = f"{error}: {stderr}"
            return self._failed(intended, error)
        except subprocess.TimeoutExpired as e:
            return self._failed(intended, f"`{_redact(e.cmd)}` timed out after {e.timeout}s")
        except GithubException as e:
            return self._failed(intended, f"GitHub API error ({e.status}): {e.data}")
        except (requests.RequestException, OSError, ValueError) as e:
            return self._failed(intended, str(e))

        return BootstrapResult(ok=True, repository=repository)

    @staticmethod
    def _failed(repository: str, error: str) -> BootstrapResult:
        logger.warning("Repository bootstrap failed", extra={"repo": repository, "error": error})
        return BootstrapResult(ok=False, repository=repository, error=error)
