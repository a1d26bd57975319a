"""Error types and context-tagged error reporting."""

import logging

logger = logging.getLogger(__name__)


class ContextKitError(Exception):
    """Base class for all errors raised by contextkit.

    Attributes:
        code: Short machine-readable error code used in log messages
        message: Human-readable description
        original_error: The lower-level exception that caused this one, if any
    """

    code = "CONTEXTKIT_ERROR"

    def __init__(self, message: str, original_error: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class FileSystemError(ContextKitError):
    """A path is invalid or a read/write operation failed."""

    code = "FS_ERROR"


class FileReadError(FileSystemError):
    """A single file could not be read."""

    code = "FILE_READ_ERROR"

    def __init__(self, path: str, message: str, original_error: BaseException | None = None):
        super().__init__(f"{message}: {path}", original_error)
        self.path = path


class FileTooLargeError(FileReadError):
    """A file exceeds the configured maximum size."""

    code = "FILE_TOO_LARGE"

    def __init__(self, path: str, actual_size: int, max_size: int):
        super().__init__(
            path,
            f"File size {actual_size} bytes exceeds maximum size {max_size} bytes",
        )
        self.actual_size = actual_size
        self.max_size = max_size


class DirectoryError(ContextKitError):
    """The entries of a directory could not be listed."""

    code = "DIRECTORY_ERROR"

    def __init__(self, path: str, message: str, original_error: BaseException | None = None):
        super().__init__(f"{message}: {path}", original_error)
        self.path = path


class PatternError(ContextKitError):
    """A glob or regex pattern is malformed."""

    code = "PATTERN_ERROR"

    def __init__(self, message: str, pattern: str, original_error: BaseException | None = None):
        super().__init__(message, original_error)
        self.pattern = pattern


class GitError(ContextKitError):
    """An external git invocation failed or could not be started.

    ``status`` is None when the process never ran.
    """

    code = "GIT_ERROR"

    def __init__(
        self, command: str, status: int | None, original_error: BaseException | None = None
    ):
        if status is None:
            message = f"Could not run '{command}'"
        else:
            message = f"'{command}' failed with status {status}"
        super().__init__(message, original_error)
        self.command = command
        self.status = status


class ConfigurationError(ContextKitError):
    """Required configuration is missing or invalid."""

    code = "CONFIG_ERROR"


class SummaryError(ContextKitError):
    """The summarization API returned something unusable."""

    code = "SUMMARY_ERROR"


def handle_error(
    error: BaseException, context: str, debug: bool = False, reraise: bool = False
) -> None:
    """Log an error with a context tag.

    Args:
        error: The exception to report
        context: Short description of what was being done
        debug: Also log the original error or traceback
        reraise: Raise ``error`` again after logging it
    """
    if isinstance(error, ContextKitError):
        logger.error("[%s] %s: %s", error.code, context, error.message)
        if debug and error.original_error is not None:
            logger.debug("Original error: %r", error.original_error)
    else:
        logger.error("Unexpected error in %s: %s", context, error)
        if debug:
            logger.debug("Stack trace:", exc_info=error)

    if reraise:
        raise error


def handle_file_system_error(
    error: BaseException, context: str, debug: bool = False, reraise: bool = False
) -> None:
    """Report ``error`` as a FileSystemError, wrapping it if needed."""
    if not isinstance(error, FileSystemError):
        error = FileSystemError(f"Unexpected error in {context}", error)
    handle_error(error, f"File System - {context}", debug=debug, reraise=reraise)


def handle_pattern_error(
    error: BaseException,
    pattern: str,
    context: str,
    debug: bool = False,
    reraise: bool = False,
) -> None:
    """Report ``error`` as a PatternError, wrapping it if needed."""
    if not isinstance(error, PatternError):
        error = PatternError(f"Error processing pattern: {pattern}", pattern, error)
    handle_error(error, f"Pattern Matching - {context}", debug=debug, reraise=reraise)
