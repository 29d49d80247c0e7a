"""Project slug and top contributor, as reported by git."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import dotfix.shell

# Highest commit count last; strip the count column and trailing blanks.
# HEAD is explicit: without a revision shortlog reads stdin when not on a tty.
CONTACT_COMMAND = "shortlog --summary --numbered --email HEAD | sort -n | tail -n1 | sed -E %s"
CONTACT_ARGUMENTS = [r"s/(^[0-9\t ]+|[\t ]+$)//g"]

# git@github.com:owner/repo.git -> owner/repo
PROJECT_COMMAND = "remote get-url --push origin | sed -E %s"
PROJECT_ARGUMENTS = [r"s/[^:]+:([^/]+\/.+)\.git/\1/g"]


def resolve_contact(run: dotfix.shell.Runner) -> str:
    """Return ``Name <email>`` of the contributor with the most commits."""
    return run(CONTACT_COMMAND, CONTACT_ARGUMENTS)


def resolve_project(run: dotfix.shell.Runner) -> str:
    """Return the ``owner/repo`` slug of the ``origin`` push URL."""
    return run(PROJECT_COMMAND, PROJECT_ARGUMENTS)
