"""Glob and regex matching of root-relative file paths.

Globs understand three wildcards:

* ``**`` matches any sequence of characters, path separators included
  (``**/`` also matches no directory at all, so ``src/**/*.ts`` selects
  ``src/a.ts``);
* ``*`` matches any sequence of characters except ``/``;
* ``?`` matches exactly one character.

Everything else in a glob is literal.
"""

import functools
import re

from contextkit.constants import CATCH_ALL_PATTERN
from contextkit.errors import PatternError
from contextkit.models import FilePattern


def glob_to_regex(pattern: str) -> str:
    """Translate a glob into an (unanchored) regular expression.

    Examples:
        >>> glob_to_regex("src/*.py")
        'src/[^/]*\\\\.py'
    """
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if pattern.startswith("**", i):
            i += 2
            if pattern.startswith("/", i):
                parts.append("(?:.*/)?")
                i += 1
            else:
                parts.append(".*")
            continue
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
        i += 1
    return "".join(parts)


@functools.lru_cache(maxsize=512)
def _compile_glob(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(f"^{glob_to_regex(pattern)}$", re.DOTALL)
    except re.error as e:
        raise PatternError(f"Invalid glob pattern: {pattern}", pattern, e) from e


@functools.lru_cache(maxsize=512)
def _compile_regex(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(f"Invalid regex pattern: {pattern}", pattern, e) from e


def match_glob_pattern(path: str, pattern: str) -> bool:
    """Test whether the whole of ``path`` matches the glob ``pattern``."""
    return _compile_glob(pattern).match(path) is not None


def match_regex_pattern(path: str, pattern: str) -> bool:
    """Test whether ``pattern`` matches anywhere in ``path``."""
    return _compile_regex(pattern).search(path) is not None


def match_pattern(path: str, file_pattern: FilePattern) -> bool:
    if file_pattern.is_regex:
        return match_regex_pattern(path, file_pattern.pattern)
    return match_glob_pattern(path, file_pattern.pattern)


def match_any_pattern(path: str, patterns: list[FilePattern] | tuple[FilePattern, ...]) -> bool:
    return any(match_pattern(path, p) for p in patterns)


def create_pattern(pattern: str, is_regex: bool = False) -> FilePattern:
    """Build a FilePattern, stripping a leading ``./``."""
    if pattern.startswith("./"):
        pattern = pattern[2:]
    if not pattern:
        raise PatternError("Pattern must not be empty", pattern)
    return FilePattern(pattern=pattern, is_regex=is_regex)


def parse_pattern_input(content: str) -> list[FilePattern]:
    """Parse a pattern file.

    Each non-blank line not starting with ``#`` is ``pattern[,type]`` where
    type is ``simple`` (the default) or ``regex``, case-insensitively. The
    type follows the last comma, so a pattern containing a comma needs an
    explicit type.
    Blank input selects everything.

    Raises:
        PatternError: A line has an empty pattern or an unknown type
    """
    if not content.strip():
        return [create_pattern(CATCH_ALL_PATTERN)]

    patterns = []
    for line_no, raw_line in enumerate(content.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        pattern, sep, type_str = line.rpartition(",")
        if not sep:
            pattern, type_str = line, ""
        pattern = pattern.strip()
        type_str = type_str.strip().lower() or "simple"
        if type_str not in ("simple", "regex"):
            raise PatternError(
                f"Unknown pattern type '{type_str}' on line {line_no}", pattern
            )
        if not pattern:
            raise PatternError(f"Empty pattern on line {line_no}", pattern)
        patterns.append(create_pattern(pattern, type_str == "regex"))

    return patterns


def serialize_patterns(patterns: list[FilePattern]) -> str:
    """Write patterns in the format read by parse_pattern_input."""
    lines = [f"{p.pattern},{'regex' if p.is_regex else 'simple'}" for p in patterns]
    return "\n".join(lines) + "\n"
