"""Debug dump of resolved values.

Each resolver is printed as a labelled block::

    [DEBUG] root dir --> "/src/project"
    [DEBUG]   header --> "This file is part of ..."
    [DEBUG]   header --- ""
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Mapping
from typing import TextIO

import dotfix.config

logger = logging.getLogger("dotfix.diagnostics")

Resolver = tuple[str, Callable[[], object]]


@dotfix.config.configurable("diagnostics")
@dataclasses.dataclass
class DiagnosticsConfig:
    enabled: bool = False
    # Presence of this variable turns the dump on, whatever its value.
    env_var: str = "DEBUG_ENABLE"


def debug_enabled(config: DiagnosticsConfig, environ: Mapping[str, str]) -> bool:
    return config.enabled or config.env_var in environ


def format_value(label: str, value: object) -> str:
    """Render *value* one quoted line at a time under *label*."""
    lines = str(value).split("\n")
    head = f'[DEBUG] {label:>8} --> "{lines[0]}"'
    tail = [f'[DEBUG] {label:>8} --- "{line}"' for line in lines[1:]]
    return "\n".join([head, *tail])


def dump(resolvers: list[Resolver], stream: TextIO) -> None:
    """Write every resolver's value to *stream*.

    A failing resolver prints an ``EXCEPTION`` line and the dump goes on.
    """
    for label, resolve in resolvers:
        try:
            block = format_value(label, resolve())
        except Exception as exc:
            logger.debug("Resolver %r failed", label, exc_info=True)
            block = f'[DEBUG] {label:>8} -->EXCEPTION: "{exc}"'
        stream.write(block + "\n")
