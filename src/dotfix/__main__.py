"""dotfix CLI: php-cs-fixer configuration for dots projects.

Usage:
    dotfix [-v] show      Print the fixer configuration as JSON
    dotfix [-v] header    Print the rendered license header
    dotfix [-v] root      Print the resolved project root
    dotfix [-v] debug     Dump every resolved value
    dotfix [-v] files     List the files the fixer would visit
    dotfix [-v] check     Check that php-cs-fixer is installed
    dotfix config <cmd>   Settings (get/set/reset/list/show/edit)

Every command except ``config`` accepts ``--path DIR`` (default: cwd).
Set DEBUG_ENABLE to dump resolved values whenever the configuration loads.
"""

from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys

import dotfix.shell


def _parse_path(prog: str, args: list[str]) -> pathlib.Path:
    parser = argparse.ArgumentParser(prog=f"dotfix {prog}")
    parser.add_argument("--path", type=pathlib.Path, default=pathlib.Path.cwd())
    return parser.parse_args(args).path


def _cmd_show(args: list[str]) -> int:
    """Print the fixer configuration as JSON."""
    import dotfix.loader

    config = dotfix.loader.load(_parse_path("show", args), stream=sys.stderr)
    print(json.dumps(config.to_dict(), indent=2))
    return 0


def _cmd_header(args: list[str]) -> int:
    """Print the rendered license header."""
    import dotfix.header
    import dotfix.loader

    root = dotfix.loader.locate_root(_parse_path("header", args))
    print(dotfix.header.resolve_heading(dotfix.shell.git_runner(root)))
    return 0


def _cmd_root(args: list[str]) -> int:
    import dotfix.loader

    print(dotfix.loader.locate_root(_parse_path("root", args)))
    return 0


def _cmd_debug(args: list[str]) -> int:
    """Dump every resolved value, even when DEBUG_ENABLE is unset."""
    import dotfix.diagnostics
    import dotfix.loader

    root = dotfix.loader.locate_root(_parse_path("debug", args))
    resolvers = dotfix.loader.default_resolvers(root, dotfix.shell.git_runner(root))
    dotfix.diagnostics.dump(resolvers, sys.stdout)
    return 0


def _cmd_files(args: list[str]) -> int:
    """List the files the fixer would visit."""
    import dotfix.config
    import dotfix.fixer
    import dotfix.loader

    root = dotfix.loader.locate_root(_parse_path("files", args))
    config = dotfix.fixer.build_config(
        root,
        "",
        finder_settings=dotfix.config.load("finder", root),
    )
    for path in config.finder.files():
        print(path.relative_to(root))
    return 0


def _cmd_check(args: list[str]) -> int:
    """Check that php-cs-fixer is installed."""
    import dotfix.deps
    import dotfix.loader

    root = dotfix.loader.locate_root(_parse_path("check", args))
    found, version = dotfix.deps.check_fixer(root)
    if not found:
        print("php-cs-fixer: not found (run `composer install`)", file=sys.stderr)
        return 1
    print(f"php-cs-fixer: {version}")
    return 0


def _cmd_config(args: list[str]) -> int:
    import dotfix.config_cli

    return dotfix.config_cli.main(args)


_COMMANDS = {
    "show": _cmd_show,
    "header": _cmd_header,
    "root": _cmd_root,
    "debug": _cmd_debug,
    "files": _cmd_files,
    "check": _cmd_check,
    "config": _cmd_config,
}


def run(args: list[str]) -> int:
    level = logging.INFO
    if args and args[0] in ("-v", "--verbose"):
        level = logging.DEBUG
        args = args[1:]
    logging.basicConfig(level=level, format="%(message)s")

    if not args or args[0] not in _COMMANDS:
        print(__doc__)
        return 1

    try:
        return _COMMANDS[args[0]](args[1:])
    except (dotfix.shell.CommandError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 1


def main() -> None:
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
