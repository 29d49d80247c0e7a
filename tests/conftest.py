"""Shared test fixtures for dotfix tests."""

from __future__ import annotations

import pathlib
import shutil
import subprocess

import pytest

import dotfix.config

_GIT_ENV = {
    "GIT_CONFIG_NOSYSTEM": "1",
    "GIT_AUTHOR_DATE": "2024-01-01T00:00:00Z",
    "GIT_COMMITTER_DATE": "2024-01-01T00:00:00Z",
}


@pytest.fixture(autouse=True)
def isolated_global_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> pathlib.Path:
    """Keep the user's ~/.config/dotfix out of every test."""
    path = tmp_path_factory.mktemp("global") / "config.toml"
    monkeypatch.setattr(dotfix.config, "_global_path", lambda: path)
    return path


@pytest.fixture
def fake_runner():
    """Factory for a runner that answers from a template -> output mapping."""

    def _create(outputs: dict[str, str]):
        calls: list[tuple[str, list[str]]] = []

        def run(template: str, arguments: list[str]) -> str:
            calls.append((template, list(arguments)))
            return outputs[template]

        run.calls = calls
        return run

    return _create


@pytest.fixture
def git_repo(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> pathlib.Path:
    """A real repository with commits from two authors and an origin remote."""
    if shutil.which("git") is None or shutil.which("sed") is None:
        pytest.skip("git and sed are required")
    monkeypatch.setenv("HOME", str(tmp_path))
    for key, value in _GIT_ENV.items():
        monkeypatch.setenv(key, value)

    repo = tmp_path / "repo"
    repo.mkdir()

    def git(*args: str) -> None:
        subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)

    git("init", "-q")
    for name, email, count in (
        ("Rob Frawley 2nd", "rmf@src.run", 3),
        ("Jane Doe", "jane@example.com", 1),
    ):
        for i in range(count):
            git(
                "-c", f"user.name={name}",
                "-c", f"user.email={email}",
                "commit", "-q", "--allow-empty", "-m", f"{name} {i}",
            )
    git("remote", "add", "origin", "git@github.com:src-run/usr-src-builder-dots.git")
    return repo
