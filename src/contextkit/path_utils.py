"""Path normalization helpers.

All paths handed out by this module use ``/`` as the separator, whatever
the host platform, so relative paths can be matched against patterns and
printed consistently.
"""

import os
import re

from contextkit.errors import FileSystemError

_SEPARATORS_RE = re.compile(r"[\\/]+")


def normalize(path: str) -> str:
    """Collapse runs of separators into a single ``/`` and drop a trailing one.

    Examples:
        >>> normalize("src\\\\utils//fs/")
        'src/utils/fs'
    """
    normalized = _SEPARATORS_RE.sub("/", path)
    if normalized.endswith("/") and normalized != "/":
        normalized = normalized[:-1]
    return normalized


def get_relative_path(path: str, root: str) -> str:
    """Relative path from ``root`` to ``path``; "" when they are the same."""
    relative = os.path.relpath(path, root)
    if relative == os.curdir:
        return ""
    return normalize(relative)


def get_absolute_path(path: str, root: str) -> str:
    if os.path.isabs(path):
        return normalize(path)
    return normalize(os.path.abspath(os.path.join(root, path)))


def validate_path(path: str) -> bool:
    """Check that ``path`` exists.

    Missing or inaccessible paths give False; a path value the OS rejects
    outright (an embedded NUL byte, for example) raises FileSystemError.
    """
    try:
        os.stat(path)
    except (FileNotFoundError, NotADirectoryError, PermissionError):
        return False
    except (OSError, ValueError, TypeError) as e:
        raise FileSystemError(f"Invalid path: {path}", e) from e
    return True


def get_extension(path: str) -> str:
    return os.path.splitext(path)[1].lower()


def get_base_name(path: str) -> str:
    """Base name without its extension."""
    return os.path.splitext(os.path.basename(path))[0]


def join(*segments: str) -> str:
    return normalize(os.path.join(*segments))


def create_display_path(path: str, max_length: int = 50) -> str:
    """Shorten ``path`` for display by replacing its middle with ``...``."""
    if len(path) <= max_length:
        return path
    head = path[: max_length // 2 - 2]
    tail = path[-(max_length // 2) + 1 :]
    return f"{head}...{tail}"
