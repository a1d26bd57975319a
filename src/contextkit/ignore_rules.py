"""Ignore-name and include-extension rules for directory scans."""

import logging
import pathlib
import re

import pathspec

from contextkit.constants import DEFAULT_IGNORE_PATTERNS, DEFAULT_INCLUDE_EXTENSIONS
from contextkit.models import ScannerOptions

logger = logging.getLogger(__name__)

_SEPARATORS_RE = re.compile(r"[\\/]")


def create_ignore_patterns(options: ScannerOptions) -> frozenset[str]:
    """Default ignore names plus (or replaced by) the additional ones."""
    if not options.extend_defaults:
        return frozenset(options.additional_ignore_patterns)
    return DEFAULT_IGNORE_PATTERNS | options.additional_ignore_patterns


def create_include_extensions(options: ScannerOptions) -> frozenset[str]:
    """Default extensions plus (or replaced by) the additional ones."""
    if not options.extend_extensions:
        return frozenset(options.additional_extensions)
    return DEFAULT_INCLUDE_EXTENSIONS | options.additional_extensions


def should_ignore_path(path: str, ignore_patterns: frozenset[str] | set[str]) -> bool:
    """True if any path segment is exactly one of the ignored names.

    Examples:
        >>> should_ignore_path("src/node_modules/x.js", {"node_modules"})
        True
        >>> should_ignore_path("src/node_modules_old/x.js", {"node_modules"})
        False
    """
    return any(part in ignore_patterns for part in _SEPARATORS_RE.split(path))


def should_include_file(path: str, include_extensions: frozenset[str] | set[str]) -> bool:
    """True if the file name's suffix from its last dot is an included extension."""
    name = _SEPARATORS_RE.split(path)[-1]
    dot = name.rfind(".")
    if dot == -1:
        return False
    return name[dot:] in include_extensions


def load_gitignore_spec(root_dir: pathlib.Path) -> pathspec.PathSpec | None:
    """Build a PathSpec from the root .gitignore and .git/info/exclude.

    Args:
        root_dir: Scan root

    Returns:
        PathSpec combining both files, or None if neither has patterns
    """
    lines: list[str] = []
    for candidate in (root_dir / ".gitignore", root_dir / ".git" / "info" / "exclude"):
        if not candidate.is_file():
            continue
        try:
            with open(candidate, encoding="utf-8", errors="ignore") as f:
                lines.extend(f.readlines())
        except OSError as e:
            logger.warning("Could not read %s: %s", candidate, e)

    if not any(line.strip() and not line.startswith("#") for line in lines):
        return None
    return pathspec.PathSpec.from_lines(pathspec.patterns.GitWildMatchPattern, lines)
