"""CLI for dotfix settings.

Usage:
    dotfix config list                         Show all settings sections
    dotfix config get <section.key>            Print effective value
    dotfix config set [--global] <key> <value> Write a value (lists: a,b,c)
    dotfix config reset [--global] <key>       Remove an override
    dotfix config show                         Dump all effective settings
    dotfix config edit [--global]              Open config.toml in $EDITOR
"""

from __future__ import annotations

import argparse
import dataclasses
import os
import subprocess
import sys
from pathlib import Path

import dotfix.config
import dotfix.root


def _ensure_registry() -> None:
    """Import all settings modules so the registry is populated."""
    import dotfix.diagnostics
    import dotfix.fixer  # noqa: F401


def _split_key(key: str) -> tuple[str, str] | None:
    parts = key.split(".", 1)
    if len(parts) != 2:
        print(f"Invalid key format: {key!r} (expected section.key)", file=sys.stderr)
        return None
    return parts[0], parts[1]


def cmd_list() -> int:
    _ensure_registry()
    for name, cls in sorted(dotfix.config.list_sections().items()):
        print(f"[{name}]")
        instance = cls()
        for f in dataclasses.fields(cls):
            type_name = f.type if isinstance(f.type, str) else f.type.__name__
            print(f"  {f.name}: {type_name} = {getattr(instance, f.name)!r}")
        print()
    return 0


def cmd_get(key: str, root: Path) -> int:
    _ensure_registry()
    parts = _split_key(key)
    if parts is None:
        return 1
    section, field = parts
    try:
        value = dotfix.config.get_effective(section, field, root)
    except (KeyError, AttributeError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(value)
    return 0


def cmd_set(key: str, value: str, *, global_flag: bool, root: Path) -> int:
    _ensure_registry()
    parts = _split_key(key)
    if parts is None:
        return 1
    section, field = parts
    scope = "global" if global_flag else "local"
    try:
        dotfix.config.set_value(section, field, value, scope=scope, root=root)
    except (KeyError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(f"Set {key} = {value} ({scope})")
    return 0


def cmd_reset(key: str, *, global_flag: bool, root: Path) -> int:
    parts = _split_key(key)
    if parts is None:
        return 1
    section, field = parts
    scope = "global" if global_flag else "local"
    dotfix.config.reset_value(section, field, scope=scope, root=root)
    print(f"Reset {key} ({scope})")
    return 0


def cmd_show(root: Path) -> int:
    _ensure_registry()
    for name in sorted(dotfix.config.list_sections()):
        instance = dotfix.config.load(name, root)
        print(f"[{name}]")
        for f in dataclasses.fields(instance):
            print(f"  {f.name} = {getattr(instance, f.name)!r}")
        print()
    return 0


def cmd_edit(*, global_flag: bool, root: Path) -> int:
    if global_flag:
        path = dotfix.config._global_path()
    else:
        path = dotfix.config._local_path(root)

    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.write_text("# dotfix configuration\n# See: dotfix config list\n")

    editor = os.environ.get("EDITOR", "vi")
    return subprocess.call([editor, str(path)])


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``dotfix config``."""
    parser = argparse.ArgumentParser(
        prog="dotfix config",
        description="dotfix settings.",
    )
    sub = parser.add_subparsers(dest="subcmd")

    sub.add_parser("list", help="Show all settings sections")

    p_get = sub.add_parser("get", help="Print effective value")
    p_get.add_argument("key", help="section.key")

    p_set = sub.add_parser("set", help="Set a value")
    p_set.add_argument("key", help="section.key")
    p_set.add_argument("value", help="New value")
    p_set.add_argument("--global", dest="global_flag", action="store_true")

    p_reset = sub.add_parser("reset", help="Remove an override")
    p_reset.add_argument("key", help="section.key")
    p_reset.add_argument("--global", dest="global_flag", action="store_true")

    sub.add_parser("show", help="Dump all effective settings")

    p_edit = sub.add_parser("edit", help="Open config.toml in $EDITOR")
    p_edit.add_argument("--global", dest="global_flag", action="store_true")

    for p in (p_get, p_set, p_reset, p_edit, sub.choices["show"]):
        p.add_argument("--path", type=Path, default=Path.cwd())

    args = parser.parse_args(argv)

    if args.subcmd is None:
        parser.print_help()
        return 1
    if args.subcmd == "list":
        return cmd_list()

    root = dotfix.root.resolve_root(args.path)
    if args.subcmd == "get":
        return cmd_get(args.key, root)
    elif args.subcmd == "set":
        return cmd_set(args.key, args.value, global_flag=args.global_flag, root=root)
    elif args.subcmd == "reset":
        return cmd_reset(args.key, global_flag=args.global_flag, root=root)
    elif args.subcmd == "show":
        return cmd_show(root)
    elif args.subcmd == "edit":
        return cmd_edit(global_flag=args.global_flag, root=root)

    parser.print_help()
    return 1
