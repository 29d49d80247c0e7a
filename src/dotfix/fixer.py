"""Fixer configuration: settings, file discovery and the rule set."""

from __future__ import annotations

import copy
import dataclasses
import fnmatch
import os
import pathlib
from collections.abc import Iterator
from typing import Any

import dotfix.config

_VCS_DIRS = frozenset({".git", ".svn", ".hg", "_darcs", ".bzr", "CVS"})


@dotfix.config.configurable("fixer")
@dataclasses.dataclass
class FixerSettings:
    using_cache: bool = True
    risky_allowed: bool = True
    hide_progress: bool = False
    line_ending: str = "\n"
    indent: str = "    "
    cache_file: str = ".php-cs-fixer.cache"


@dotfix.config.configurable("finder")
@dataclasses.dataclass
class FinderSettings:
    names: list[str] = dataclasses.field(
        default_factory=lambda: [".php-cs-fixer.dist.php", "php-cs-fixer.dist.php"]
    )
    exclude: list[str] = dataclasses.field(
        default_factory=lambda: [".bldr", "var", "vendor"]
    )
    ignore_dot_files: bool = False
    ignore_vcs: bool = True


@dataclasses.dataclass
class Finder:
    """Which files the fixer should visit."""

    directories: list[pathlib.Path]
    names: list[str] = dataclasses.field(default_factory=list)
    exclude: list[str] = dataclasses.field(default_factory=list)
    ignore_dot_files: bool = True
    ignore_vcs: bool = True

    def _skip_dir(self, rel: pathlib.PurePosixPath) -> bool:
        name = rel.name
        if self.ignore_vcs and name in _VCS_DIRS:
            return True
        if self.ignore_dot_files and name.startswith("."):
            return True
        # A bare name excludes that directory at any depth; "a/b" excludes
        # any directory whose trailing segments are a/b.
        for exc in self.exclude:
            parts = pathlib.PurePosixPath(exc.strip("/")).parts
            if parts and rel.parts[-len(parts):] == parts:
                return True
        return False

    def _matches(self, name: str) -> bool:
        if self.ignore_dot_files and name.startswith("."):
            return False
        if not self.names:
            return True
        return any(fnmatch.fnmatchcase(name, pattern) for pattern in self.names)

    def files(self) -> Iterator[pathlib.Path]:
        """Yield matching files, sorted per directory."""
        for directory in self.directories:
            found: list[pathlib.Path] = []
            for dirpath, dirnames, filenames in os.walk(directory):
                base = pathlib.Path(dirpath)
                rel_base = pathlib.PurePosixPath(base.relative_to(directory).as_posix())
                dirnames[:] = [
                    d for d in dirnames if not self._skip_dir(rel_base / d)
                ]
                found.extend(base / f for f in filenames if self._matches(f))
            yield from sorted(found)

    def to_dict(self) -> dict[str, Any]:
        return {
            "in": [str(d) for d in self.directories],
            "name": list(self.names),
            "exclude": list(self.exclude),
            "ignore_dot_files": self.ignore_dot_files,
            "ignore_vcs": self.ignore_vcs,
        }


@dataclasses.dataclass
class FixerConfig:
    """Everything the external fixer is configured with."""

    finder: Finder
    rules: dict[str, Any]
    using_cache: bool = True
    risky_allowed: bool = True
    hide_progress: bool = False
    line_ending: str = "\n"
    indent: str = "    "
    cache_file: str = ".php-cs-fixer.cache"

    def to_dict(self) -> dict[str, Any]:
        return {
            "using_cache": self.using_cache,
            "risky_allowed": self.risky_allowed,
            "hide_progress": self.hide_progress,
            "line_ending": self.line_ending,
            "indent": self.indent,
            "cache_file": self.cache_file,
            "finder": self.finder.to_dict(),
            "rules": copy.deepcopy(self.rules),
        }


RULES: dict[str, Any] = {
    "@Symfony": True,
    "@Symfony:risky": True,
    "@PHPUnit57Migration:risky": True,
    "align_multiline_comment": {"comment_type": "phpdocs_like"},
    "array_indentation": True,
    "array_syntax": {"syntax": "short"},
    "braces": {"allow_single_line_closure": True},
    "binary_operator_spaces": {
        "operators": {"=>": "single_space", "=": "single_space"},
    },
    "class_attributes_separation": {
        "elements": {"const": "one", "method": "one", "property": "one"},
    },
    "combine_consecutive_issets": True,
    "combine_consecutive_unsets": True,
    "concat_space": {"spacing": "one"},
    "echo_tag_syntax": {
        "format": "long",
        "long_function": "echo",
        "shorten_simple_statements_only": False,
    },
    "escape_implicit_backslashes": True,
    "explicit_indirect_variable": True,
    "final_internal_class": True,
    "function_typehint_space": True,
    # "header" is filled in by build_config()
    "header_comment": {"header": "", "separate": "both"},
    "heredoc_to_nowdoc": True,
    "linebreak_after_opening_tag": True,
    "list_syntax": {"syntax": "short"},
    "lowercase_cast": True,
    "mb_str_functions": True,
    "multiline_whitespace_before_semicolons": {
        "strategy": "new_line_for_chained_calls",
    },
    "native_constant_invocation": False,
    "native_function_invocation": False,
    "no_php4_constructor": True,
    "no_unreachable_default_argument_value": True,
    "no_useless_else": True,
    "no_useless_return": True,
    "no_extra_blank_lines": {
        "tokens": [
            "case",
            "continue",
            "curly_brace_block",
            "default",
            "extra",
            "parenthesis_brace_block",
            "square_brace_block",
            "switch",
            "throw",
            "use",
            "use_trait",
        ],
    },
    "no_whitespace_before_comma_in_array": True,
    "no_whitespace_in_blank_line": True,
    "ordered_class_elements": {
        "order": [
            "use_trait",
            "constant_public",
            "constant_protected",
            "constant_private",
            "property_public",
            "property_protected",
            "property_private",
            "construct",
            "destruct",
            "magic",
            "phpunit",
            "method_public",
            "method_protected",
            "method_private",
        ],
    },
    "ordered_imports": True,
    "php_unit_strict": True,
    "php_unit_no_expectation_annotation": True,
    "php_unit_test_class_requires_covers": True,
    "phpdoc_order": True,
    "phpdoc_summary": False,
    "semicolon_after_instruction": True,
    "short_scalar_cast": True,
    "single_blank_line_before_namespace": True,
    "single_line_comment_style": {"comment_types": ["hash"]},
    "single_quote": True,
    "strict_comparison": True,
    "strict_param": True,
    "trim_array_spaces": True,
    "unary_operator_spaces": True,
    "whitespace_after_comma_in_array": True,
}


def build_rules(header: str) -> dict[str, Any]:
    """Return a copy of :data:`RULES` carrying *header*."""
    rules = copy.deepcopy(RULES)
    rules["header_comment"]["header"] = header
    return rules


def build_config(
    root: pathlib.Path,
    header: str,
    *,
    settings: FixerSettings | None = None,
    finder_settings: FinderSettings | None = None,
) -> FixerConfig:
    if settings is None:
        settings = FixerSettings()
    if finder_settings is None:
        finder_settings = FinderSettings()

    finder = Finder(
        directories=[root],
        names=list(finder_settings.names),
        exclude=list(finder_settings.exclude),
        ignore_dot_files=finder_settings.ignore_dot_files,
        ignore_vcs=finder_settings.ignore_vcs,
    )
    return FixerConfig(
        finder=finder,
        rules=build_rules(header),
        **dataclasses.asdict(settings),
    )
