"""Repository root discovery."""

from __future__ import annotations

import dataclasses
import logging
import pathlib

import dotfix.config

logger = logging.getLogger("dotfix.root")


@dotfix.config.configurable("root")
@dataclasses.dataclass
class RootConfig:
    marker: str = ".git"
    max_levels: int = 2


def resolve_root(
    start: pathlib.Path,
    *,
    marker: str = ".git",
    max_levels: int = 2,
) -> pathlib.Path:
    """Return the nearest directory holding *marker*, looking at most
    *max_levels* parents above *start*.

    ``.git`` may be a file for worktrees and submodules, so any entry counts.
    Falls back to *start* when nothing in range has the marker.
    """
    start = start.resolve()
    current = start
    for _ in range(max_levels + 1):
        if (current / marker).exists():
            logger.debug("Found %s in %s", marker, current)
            return current
        if current.parent == current:
            break
        current = current.parent

    logger.debug("No %s within %d levels of %s", marker, max_levels, start)
    return start
