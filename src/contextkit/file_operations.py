"""File reading, token estimation and content hashing."""

import hashlib
import math
import os

from contextkit.constants import CHARS_PER_TOKEN, DEFAULT_MAX_FILE_SIZE
from contextkit.errors import FileReadError, FileSystemError, FileTooLargeError
from contextkit.models import FileReadResult
from contextkit.path_utils import validate_path


def calculate_tokens(content: str) -> int:
    """Estimate the LLM token count of ``content`` (about 4 characters per token).

    Examples:
        >>> calculate_tokens("hello")
        2
    """
    return math.ceil(len(content) / CHARS_PER_TOKEN)


def check_file_size(path: str, max_size: int) -> int:
    """Return the size of ``path`` in bytes.

    Raises:
        FileTooLargeError: The file is larger than ``max_size``
        FileReadError: The file could not be stat'ed
    """
    try:
        size = os.stat(path).st_size
    except OSError as e:
        raise FileReadError(path, "Error checking file size", e) from e
    if size > max_size:
        raise FileTooLargeError(path, size, max_size)
    return size


def read_file(
    path: str,
    encoding: str = "utf-8",
    calculate_token_count: bool = True,
    max_size: int = DEFAULT_MAX_FILE_SIZE,
) -> FileReadResult:
    """Read a text file without raising.

    Args:
        path: File to read
        encoding: Text encoding
        calculate_token_count: Attach a token estimate to the result
        max_size: Largest accepted file size in bytes

    Returns:
        FileReadResult with the content, or with ``error`` set to a
        FileSystemError describing why the file could not be read
    """
    try:
        if not validate_path(path):
            raise FileReadError(path, "File does not exist")

        check_file_size(path, max_size)

        with open(path, encoding=encoding, newline="") as f:
            content = f.read()
    except FileSystemError as e:
        return FileReadResult(error=e)
    except (OSError, UnicodeDecodeError, LookupError) as e:
        return FileReadResult(error=FileReadError(path, "Error reading file", e))

    token_count = calculate_tokens(content) if calculate_token_count else None
    return FileReadResult(content=content, token_count=token_count)


def read_file_strict(
    path: str,
    encoding: str = "utf-8",
    max_size: int = DEFAULT_MAX_FILE_SIZE,
) -> str:
    """Like read_file, but raise the read error and return only the content."""
    result = read_file(path, encoding=encoding, calculate_token_count=False, max_size=max_size)
    if result.error is not None:
        raise result.error
    return result.content


def is_readable(path: str) -> bool:
    """Best-effort check that ``path`` is an existing, readable file."""
    try:
        return os.path.isfile(path) and os.access(path, os.R_OK)
    except (OSError, ValueError, TypeError):
        return False


def get_file_hash(path: str) -> str:
    """SHA-256 hex digest of the file's bytes.

    Raises:
        FileReadError: The file could not be read
    """
    hash_sha256 = hashlib.sha256()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(4096), b""):
                hash_sha256.update(chunk)
    except OSError as e:
        raise FileReadError(path, "Error hashing file", e) from e
    return hash_sha256.hexdigest()
