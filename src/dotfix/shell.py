"""Run a templated shell command and capture its output.

Templates hold ``%s`` slots; arguments are quoted with :func:`shlex.quote`
before they are substituted, so they always reach the command as single
literal words.
"""

from __future__ import annotations

import functools
import logging
import pathlib
import shlex
import subprocess
from typing import Protocol

logger = logging.getLogger("dotfix.shell")

SENTINEL = "undefined"


class CommandError(RuntimeError):
    """A templated command could not be executed."""

    def __init__(self, command: str, arguments: list[str]) -> None:
        self.command = command
        self.arguments = list(arguments)
        quoted = ", ".join(f'"{a}"' for a in self.arguments)
        super().__init__(
            f'Failed to call "{command}" with the following arguments: {quoted}.'
        )


class Runner(Protocol):
    def __call__(self, template: str, arguments: list[str]) -> str: ...


def render_command(template: str, arguments: list[str]) -> str:
    """Substitute the shell-quoted *arguments* into *template*."""
    return template % tuple(shlex.quote(a) for a in arguments)


def run_command(
    template: str,
    arguments: list[str],
    *,
    cwd: pathlib.Path,
    executable: str = "git",
) -> str:
    """Run ``<executable> <template>`` in *cwd* and return its trimmed stdout.

    Returns :data:`SENTINEL` when the command prints nothing.
    """
    try:
        command = f"{executable} {render_command(template, arguments)}"
        logger.debug("Running %r in %s", command, cwd)
        result = subprocess.run(
            command,
            shell=True,
            cwd=str(cwd),
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=True,
        )
    except (subprocess.SubprocessError, OSError, TypeError, ValueError) as exc:
        raise CommandError(template, arguments) from exc

    output = result.stdout.strip()
    return output or SENTINEL


def git_runner(root: pathlib.Path) -> Runner:
    """Bind :func:`run_command` to *root*."""
    return functools.partial(run_command, cwd=root)
