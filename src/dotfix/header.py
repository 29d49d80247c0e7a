"""License header rendered into every fixed file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import dotfix.metadata

if TYPE_CHECKING:
    import dotfix.shell

HEADER_TEMPLATE = """\
This file is part of the `{project}` project.

(c) {contact}

For the full copyright and license information, please view the LICENSE.md
file that was distributed with this source code."""


def render_header(project: str, contact: str) -> str:
    return HEADER_TEMPLATE.format(project=project, contact=contact)


def resolve_heading(run: dotfix.shell.Runner) -> str:
    """Query git through *run* and render the header.

    A failing query propagates; there is no fallback header.
    """
    project = dotfix.metadata.resolve_project(run)
    contact = dotfix.metadata.resolve_contact(run)
    return render_header(project, contact)
