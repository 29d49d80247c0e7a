"""Assemble the fixer configuration for a project."""

from __future__ import annotations

import functools
import logging
import os
import pathlib
import sys
from collections.abc import Mapping
from typing import TextIO

import dotfix.config
import dotfix.deps
import dotfix.diagnostics
import dotfix.fixer
import dotfix.header
import dotfix.metadata
import dotfix.root
import dotfix.shell

logger = logging.getLogger("dotfix.loader")


def locate_root(start: pathlib.Path) -> pathlib.Path:
    """Resolve the project root using the ``root`` settings found at *start*."""
    settings = dotfix.config.load("root", start)
    return dotfix.root.resolve_root(
        start, marker=settings.marker, max_levels=settings.max_levels
    )


def default_resolvers(
    root: pathlib.Path,
    run: dotfix.shell.Runner,
) -> list[dotfix.diagnostics.Resolver]:
    return [
        ("root dir", lambda: root),
        ("author", functools.partial(dotfix.metadata.resolve_contact, run)),
        ("project", functools.partial(dotfix.metadata.resolve_project, run)),
        ("header", functools.partial(dotfix.header.resolve_heading, run)),
    ]


def load(
    start: pathlib.Path | None = None,
    *,
    runner: dotfix.shell.Runner | None = None,
    environ: Mapping[str, str] | None = None,
    stream: TextIO | None = None,
    require_tool: bool = False,
) -> dotfix.fixer.FixerConfig:
    """Build the :class:`~dotfix.fixer.FixerConfig` for the project at *start*.

    *runner* replaces the git runner bound to the resolved root; *environ*
    and *stream* default to ``os.environ`` and ``sys.stdout``.
    """
    if start is None:
        start = pathlib.Path.cwd()
    if environ is None:
        environ = os.environ
    if stream is None:
        stream = sys.stdout

    root = locate_root(start)
    logger.debug("Project root: %s", root)

    if require_tool:
        dotfix.deps.require_autoload(root)

    run = runner if runner is not None else dotfix.shell.git_runner(root)

    diagnostics = dotfix.config.load("diagnostics", root)
    if dotfix.diagnostics.debug_enabled(diagnostics, environ):
        dotfix.diagnostics.dump(default_resolvers(root, run), stream)

    heading = dotfix.header.resolve_heading(run)
    return dotfix.fixer.build_config(
        root,
        heading,
        settings=dotfix.config.load("fixer", root),
        finder_settings=dotfix.config.load("finder", root),
    )
