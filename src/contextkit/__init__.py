"""contextkit: developer utilities that turn a source tree into LLM context.

This package provides a directory scanner with ignore rules and glob/regex
include patterns, plus tools built on it: a codebase capture dump, a
directory structure prompt with token estimates, a git diff commit-script
generator and a hash-cached per-file summarizer.
"""

from contextkit.errors import (
    ContextKitError,
    DirectoryError,
    FileSystemError,
    GitError,
    PatternError,
)
from contextkit.models import DirectoryNode, FileNode, FilePattern, ScannerOptions
from contextkit.scanner import DirectoryScanner

__version__ = "0.1.0"
__all__ = [
    "ContextKitError",
    "DirectoryError",
    "DirectoryNode",
    "DirectoryScanner",
    "FileNode",
    "FilePattern",
    "FileSystemError",
    "GitError",
    "PatternError",
    "ScannerOptions",
]
