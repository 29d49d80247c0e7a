"""Tests for the top-level dotfix CLI."""

from __future__ import annotations

import json
import pathlib

import pytest

import dotfix.__main__ as cli
import dotfix.metadata
import dotfix.shell

_OUTPUTS = {
    dotfix.metadata.PROJECT_COMMAND: "src-run/dots",
    dotfix.metadata.CONTACT_COMMAND: "Rob <rmf@src.run>",
}


@pytest.fixture
def stub_git(monkeypatch: pytest.MonkeyPatch) -> None:
    """Answer git queries without a repository."""

    def _runner(root: pathlib.Path):
        return lambda template, arguments: _OUTPUTS[template]

    monkeypatch.setattr(dotfix.shell, "git_runner", _runner)


class TestRun:
    def test_no_args_prints_usage(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.run([]) == 1
        assert "Usage:" in capsys.readouterr().out

    def test_unknown_command(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.run(["frobnicate"]) == 1

    def test_root(
        self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (tmp_path / ".git").mkdir()
        sub = tmp_path / "stub"
        sub.mkdir()
        assert cli.run(["root", "--path", str(sub)]) == 0
        assert capsys.readouterr().out.strip() == str(tmp_path.resolve())

    def test_header(
        self,
        tmp_path: pathlib.Path,
        stub_git: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert cli.run(["header", "--path", str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert "This file is part of the `src-run/dots` project." in out

    def test_show_is_json(
        self,
        tmp_path: pathlib.Path,
        stub_git: None,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("DEBUG_ENABLE", "1")
        assert cli.run(["show", "--path", str(tmp_path)]) == 0
        captured = capsys.readouterr()
        data = json.loads(captured.out)
        assert data["cache_file"] == ".php-cs-fixer.cache"
        assert "(c) Rob <rmf@src.run>" in data["rules"]["header_comment"]["header"]
        assert "[DEBUG]" in captured.err

    def test_debug(
        self,
        tmp_path: pathlib.Path,
        stub_git: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert cli.run(["debug", "--path", str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert '[DEBUG]  project --> "src-run/dots"' in out

    def test_files(
        self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (tmp_path / ".git").mkdir()
        (tmp_path / ".php-cs-fixer.dist.php").write_text("<?php\n")
        (tmp_path / "vendor").mkdir()
        (tmp_path / "vendor" / "php-cs-fixer.dist.php").write_text("<?php\n")
        assert cli.run(["files", "--path", str(tmp_path)]) == 0
        assert capsys.readouterr().out.splitlines() == [".php-cs-fixer.dist.php"]

    def test_check_missing(
        self,
        tmp_path: pathlib.Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        import dotfix.deps

        monkeypatch.setattr(dotfix.deps.shutil, "which", lambda name: None)
        assert cli.run(["check", "--path", str(tmp_path)]) == 1
        assert "not found" in capsys.readouterr().err

    def test_command_error_exits_1(
        self,
        tmp_path: pathlib.Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        def _runner(root: pathlib.Path):
            def run(template: str, arguments: list[str]) -> str:
                raise dotfix.shell.CommandError(template, arguments)

            return run

        monkeypatch.setattr(dotfix.shell, "git_runner", _runner)
        assert cli.run(["header", "--path", str(tmp_path)]) == 1
        assert "Failed to call" in capsys.readouterr().err

    def test_config_dispatch(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.run(["config", "list"]) == 0
        assert "[fixer]" in capsys.readouterr().out

    def test_invalid_setting_exits_1(
        self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        toml_path = tmp_path / ".dotfix" / "config.toml"
        toml_path.parent.mkdir()
        toml_path.write_text("[root]\nmax_levels = [2]\n")
        assert cli.run(["root", "--path", str(tmp_path)]) == 1
        assert "Invalid value for root.max_levels" in capsys.readouterr().err
