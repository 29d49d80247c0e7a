"""Settings registry with TOML-backed overrides.

Settings dataclasses register themselves with ``@configurable(section)``;
``load()`` builds an instance from code defaults, then the global file,
then the project-local file.

Config files:
    ~/.config/dotfix/config.toml     global (user-wide)
    .dotfix/config.toml              local  (next to the resolved root)
"""

from __future__ import annotations

import dataclasses
import logging
import pathlib
import tomllib
from typing import Any, TypeVar

T = TypeVar("T")

logger = logging.getLogger("dotfix.config")

_REGISTRY: dict[str, type] = {}


# ---------------------------------------------------------------------------
# Decorator
# ---------------------------------------------------------------------------

def configurable(section: str):
    """Class decorator: register a dataclass under *section*."""

    def decorator(cls: type[T]) -> type[T]:
        _REGISTRY[section] = cls
        return cls

    return decorator


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

def _global_path() -> pathlib.Path:
    return pathlib.Path.home() / ".config" / "dotfix" / "config.toml"


def _local_path(root: pathlib.Path) -> pathlib.Path:
    return root / ".dotfix" / "config.toml"


def _find_root(root: pathlib.Path | None = None) -> pathlib.Path:
    """Use *root* when given, else resolve from the working directory."""
    if root is not None:
        return root
    import dotfix.root

    return dotfix.root.resolve_root(pathlib.Path.cwd())


# ---------------------------------------------------------------------------
# TOML I/O
# ---------------------------------------------------------------------------

def _load_toml(path: pathlib.Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError):
        logger.warning("Ignoring unreadable config file %s", path)
        return {}


def _write_toml(path: pathlib.Path, data: dict[str, Any]) -> None:
    import tomli_w

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(tomli_w.dumps(data).encode())


# ---------------------------------------------------------------------------
# Type coercion
# ---------------------------------------------------------------------------

def _coerce(value: str, target_type: type) -> Any:
    """Coerce a CLI string to *target_type*."""
    if target_type is bool:
        return value.lower() in ("true", "1", "yes")
    if target_type is int:
        return int(value)
    if target_type is float:
        return float(value)
    if target_type is list:
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


def _field_type(cls: type, field_name: str) -> type:
    for f in dataclasses.fields(cls):
        if f.name == field_name:
            t = f.type
            # Annotations are strings under ``from __future__ import annotations``
            if isinstance(t, str):
                if t.startswith("list"):
                    return list
                mapping = {"int": int, "float": float, "bool": bool, "str": str}
                return mapping.get(t, str)
            return t
    raise KeyError(field_name)


def _check(cls: type, section: str, key: str, value: Any) -> Any:
    """Return *value* as the field's type, or raise ``ValueError``."""
    target = _field_type(cls, key)
    if isinstance(value, str) and target is not str:
        try:
            value = _coerce(value, target)
        except ValueError as exc:
            raise ValueError(
                f"Invalid value for {section}.{key}: {value!r}"
            ) from exc

    if target is list:
        ok = isinstance(value, list) and all(isinstance(v, str) for v in value)
    elif target is int:
        # bool is an int subclass
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, target)
    if not ok:
        raise ValueError(
            f"Invalid value for {section}.{key}: expected {target.__name__}, "
            f"got {value!r}"
        )
    return value


# ---------------------------------------------------------------------------
# Core API
# ---------------------------------------------------------------------------

def list_sections() -> dict[str, type]:
    """Return a copy of the registry."""
    return dict(_REGISTRY)


def load(section: str, root: pathlib.Path | None = None) -> Any:
    """Load a settings section, merging defaults → global → local."""
    cls = _REGISTRY.get(section)
    if cls is None:
        raise KeyError(f"Unknown config section: {section}")

    root = _find_root(root)

    global_data = _load_toml(_global_path()).get(section, {})
    local_data = _load_toml(_local_path(root)).get(section, {})
    merged = {**global_data, **local_data}

    valid_fields = {f.name for f in dataclasses.fields(cls)}
    kwargs = {}
    for k, v in merged.items():
        if k in valid_fields:
            kwargs[k] = _check(cls, section, k, v)
        else:
            logger.debug("Ignoring unknown key %s.%s", section, k)

    return cls(**kwargs)


def get_effective(
    section: str,
    key: str,
    root: pathlib.Path | None = None,
) -> Any:
    """Get the effective value for a single key."""
    instance = load(section, root)
    return getattr(instance, key)


def set_value(
    section: str,
    key: str,
    value: Any,
    *,
    scope: str = "local",
    root: pathlib.Path | None = None,
) -> None:
    """Write a value to the global or local TOML file."""
    cls = _REGISTRY.get(section)
    if cls is None:
        raise KeyError(f"Unknown config section: {section}")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    if key not in valid_fields:
        raise KeyError(f"Unknown key: {section}.{key}")

    value = _check(cls, section, key, value)

    root = _find_root(root)
    path = _global_path() if scope == "global" else _local_path(root)
    data = _load_toml(path)
    data.setdefault(section, {})[key] = value
    _write_toml(path, data)


def reset_value(
    section: str,
    key: str,
    *,
    scope: str = "local",
    root: pathlib.Path | None = None,
) -> None:
    """Remove an override from the TOML file."""
    root = _find_root(root)
    path = _global_path() if scope == "global" else _local_path(root)
    data = _load_toml(path)
    sec = data.get(section, {})
    if key in sec:
        del sec[key]
        if not sec:
            del data[section]
        _write_toml(path, data)
