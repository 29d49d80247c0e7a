"""Locate the php-cs-fixer installation that consumes the configuration."""

from __future__ import annotations

import logging
import pathlib
import shutil
import subprocess

logger = logging.getLogger("dotfix.deps")

AUTOLOAD_PATH = pathlib.Path("vendor") / "autoload.php"
FIXER_BIN = pathlib.Path("vendor") / "bin" / "php-cs-fixer"


class ToolNotFoundError(FileNotFoundError):
    """Neither a vendored autoloader nor a global fixer is available."""


def find_fixer(root: pathlib.Path) -> pathlib.Path | None:
    """Return the vendored fixer binary, else the one on ``PATH``."""
    vendored = root / FIXER_BIN
    if vendored.is_file():
        return vendored
    found = shutil.which("php-cs-fixer")
    return pathlib.Path(found) if found else None


def require_autoload(root: pathlib.Path) -> pathlib.Path | None:
    """Return the project's ``vendor/autoload.php``.

    Returns ``None`` when it is missing but a fixer is installed globally.
    """
    autoload = root / AUTOLOAD_PATH
    if autoload.is_file():
        return autoload
    if shutil.which("php-cs-fixer") is not None:
        logger.debug("No %s; using php-cs-fixer from PATH", autoload)
        return None
    raise ToolNotFoundError(
        f"{autoload} not found and php-cs-fixer is not on PATH "
        "(run `composer install`)"
    )


def check_fixer(root: pathlib.Path) -> tuple[bool, str]:
    """Return ``(True, version)`` when a fixer is found, else ``(False, "not found")``."""
    binary = find_fixer(root)
    if binary is None:
        return (False, "not found")
    try:
        result = subprocess.run(
            [str(binary), "--version"],
            capture_output=True,
            text=True,
            timeout=10,
        )
        version = result.stdout.strip() or result.stderr.strip()
        return (True, version or "unknown")
    except (subprocess.SubprocessError, OSError):
        return (True, "unknown")
