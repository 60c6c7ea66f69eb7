"""Unit tests for the repository bootstrap (git runner and GitHub mocked)."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any
from unittest.mock import Mock

from github import GithubException

from persona_creator.github import (
    CreatedRepository,
    GitHubRepoClient,
    GitRepoBootstrap,
    SkippedRepoBootstrap,
)


class FakeRunner:
    """Records git invocations; return codes are looked up by exact git arguments."""

    def __init__(self, returncodes: dict[tuple[str, ...], int] | None = None) -> None:
        self.calls: list[list[str]] = []
        self.kwargs: list[dict[str, Any]] = []
        self._returncodes = returncodes or {}

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        self.calls.append(list(cmd))
        self.kwargs.append(kwargs)
        args = tuple(cmd[1:])
        if args and args[0] == "-c":
            args = args[2:]
        code = self._returncodes.get(args, 0)
        return subprocess.CompletedProcess(cmd, code, stdout="", stderr="boom" if code else "")

    def git_args(self) -> list[tuple[str, ...]]:
        out = []
        for cmd in self.calls:
            args = tuple(cmd[1:])
            if args and args[0] == "-c":
                args = args[2:]
            out.append(args)
        return out


FRESH_REPO = {
    ("rev-parse", "--git-dir"): 128,
    ("config", "user.name"): 1,
    ("remote", "get-url", "origin"): 2,
}


def _github_mock() -> Mock:
    github = Mock(spec=GitHubRepoClient)
    github.repository_exists.return_value = False
    github.create_repository.return_value = CreatedRepository(
        full_name="org/goc-persona-p",
        html_url="https://github.com/org/goc-persona-p",
        clone_url="https://github.com/org/goc-persona-p.git",
    )
    github.clone_url.return_value = "https://github.com/org/goc-persona-p.git"
    return github


def test_skipped_bootstrap_reports_intended_repository(tmp_path: Path) -> None:
    result = SkippedRepoBootstrap().bootstrap(local_path=tmp_path, repo_name="r", org="o")

    assert result.ok is True
    assert result.skipped is True
    assert result.repository == "o/r"


def test_bootstrap_fresh_directory_creates_and_pushes(tmp_path: Path) -> None:
    runner = FakeRunner(dict(FRESH_REPO))
    github = _github_mock()
    bootstrap = GitRepoBootstrap(github=github, token="secret-token", runner=runner)

    result = bootstrap.bootstrap(local_path=tmp_path, repo_name="goc-persona-p", org="org")

    assert result.ok is True
    assert result.repository == "org/goc-persona-p"
    assert runner.git_args() == [
        ("rev-parse", "--git-dir"),
        ("init",),
        ("symbolic-ref", "HEAD", "refs/heads/main"),
        ("config", "user.name"),
        ("config", "user.name", "Clawdbot"),
        ("config", "user.email", "bot@greenclaw.dev"),
        ("add", "."),
        ("commit", "-m", "Initial commit: scaffold persona"),
        ("remote", "get-url", "origin"),
        ("remote", "add", "origin", "https://github.com/org/goc-persona-p.git"),
        ("push", "-u", "origin", "main"),
    ]
    github.create_repository.assert_called_once_with(
        owner="org", name="goc-persona-p", private=False
    )
    assert all(kw["cwd"] == tmp_path for kw in runner.kwargs)
    assert runner.calls[-1][1] == "-c"
    assert runner.calls[-1][2].startswith("http.extraheader=AUTHORIZATION: basic ")


def test_bootstrap_existing_repository_is_reused(tmp_path: Path) -> None:
    runner = FakeRunner()
    github = _github_mock()
    github.repository_exists.return_value = True
    bootstrap = GitRepoBootstrap(github=github, runner=runner)

    result = bootstrap.bootstrap(local_path=tmp_path, repo_name="goc-persona-p", org="org")

    assert result.ok is True
    assert result.repository == "org/goc-persona-p"
    github.create_repository.assert_not_called()
    assert ("init",) not in runner.git_args()
    assert ("remote", "add", "origin", "https://github.com/org/goc-persona-p.git") not in (
        runner.git_args()
    )
    # No token: push without an auth header.
    assert runner.calls[-1] == ["git", "push", "-u", "origin", "main"]


def test_bootstrap_nothing_to_commit_is_not_an_error(tmp_path: Path) -> None:
    runner = FakeRunner({("commit", "-m", "Initial commit: scaffold persona"): 1})

    result = GitRepoBootstrap(github=_github_mock(), runner=runner).bootstrap(
        local_path=tmp_path, repo_name="goc-persona-p", org="org"
    )

    assert result.ok is True


def test_bootstrap_without_github_initialises_locally_only(tmp_path: Path) -> None:
    runner = FakeRunner(dict(FRESH_REPO))

    result = GitRepoBootstrap(github=None, runner=runner).bootstrap(
        local_path=tmp_path, repo_name="goc-persona-p", org="org"
    )

    assert result.ok is False
    assert result.repository == "org/goc-persona-p"
    assert result.error is not None and "PERSONA_GITHUB_TOKEN" in result.error
    assert ("commit", "-m", "Initial commit: scaffold persona") in runner.git_args()
    assert not any(args[0] == "push" for args in runner.git_args())


def test_bootstrap_push_failure_is_reported_without_token(tmp_path: Path) -> None:
    runner = FakeRunner({("push", "-u", "origin", "main"): 1})

    result = GitRepoBootstrap(github=_github_mock(), token="secret-token", runner=runner).bootstrap(
        local_path=tmp_path, repo_name="goc-persona-p", org="org"
    )

    assert result.ok is False
    assert result.error is not None
    assert "exited with 1" in result.error
    assert "boom" in result.error
    assert "secret-token" not in result.error
    assert "http.extraheader=***" in result.error


def test_bootstrap_github_error_is_reported(tmp_path: Path) -> None:
    github = _github_mock()
    github.create_repository.side_effect = GithubException(422, {"message": "name exists"})

    result = GitRepoBootstrap(github=github, runner=FakeRunner()).bootstrap(
        local_path=tmp_path, repo_name="goc-persona-p", org="org"
    )

    assert result.ok is False
    assert result.error is not None and "422" in result.error


def test_bootstrap_timeout_is_reported(tmp_path: Path) -> None:
    def runner(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    result = GitRepoBootstrap(github=None, runner=runner, timeout_seconds=5).bootstrap(
        local_path=tmp_path, repo_name="r", org="o"
    )

    assert result.ok is False
    assert result.error is not None and "timed out" in result.error


def test_bootstrap_missing_directory(tmp_path: Path) -> None:
    runner = FakeRunner()

    result = GitRepoBootstrap(github=None, runner=runner).bootstrap(
        local_path=tmp_path / "missing", repo_name="r", org="o"
    )

    assert result.ok is False
    assert runner.calls == []
