"""Data models for contextkit."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

from contextkit.constants import DEFAULT_MAX_FILE_SIZE
from contextkit.errors import FileSystemError


@dataclass(frozen=True)
class FileNode:
    """A file that passed every scan filter and was read successfully.

    Attributes:
        name: Base name of the file
        path: Path relative to the scan root, forward-slash separated
        full_path: Absolute path to the file
        extension: Lower-cased extension including the dot, or ""
        content: File text, when the scanner keeps content
        token_count: Estimated token count, when the scanner counts tokens
    """

    name: str
    path: str
    full_path: str
    extension: str = ""
    content: str | None = None
    token_count: int | None = None
    type: Literal["file"] = field(default="file", init=False)


@dataclass(frozen=True)
class DirectoryNode:
    """A directory with at least one eligible descendant (or the scan root).

    Attributes:
        name: Base name of the directory
        path: Path relative to the scan root ("" for the root itself)
        full_path: Absolute path to the directory
        children: Child nodes sorted by name
    """

    name: str
    path: str
    full_path: str
    children: tuple[Node, ...] = ()
    type: Literal["directory"] = field(default="directory", init=False)


Node = Union[FileNode, DirectoryNode]


@dataclass(frozen=True)
class FilePattern:
    """A glob or regex used to select files by their root-relative path."""

    pattern: str
    is_regex: bool = False


@dataclass(frozen=True)
class ScannerOptions:
    """Configuration for a single DirectoryScanner walk.

    Attributes:
        root_dir: Directory to scan (defaults to the current directory)
        additional_ignore_patterns: Extra names to ignore
        extend_defaults: Add to the default ignore set instead of replacing it
        additional_extensions: Extra extensions to include
        extend_extensions: Add to the default extensions instead of replacing them
        include_patterns: When set, files must also match one of these
        calculate_tokens: Attach token estimates to file nodes
        store_file_content: Keep file text in file nodes
        max_file_size: Files larger than this many bytes are skipped
        use_gitignore: Also skip files matched by the root .gitignore
        exclude_paths: Files to leave out wherever they sit, such as the output file
    """

    root_dir: str | None = None
    additional_ignore_patterns: frozenset[str] = frozenset()
    extend_defaults: bool = True
    additional_extensions: frozenset[str] = frozenset()
    extend_extensions: bool = True
    include_patterns: tuple[FilePattern, ...] | None = None
    calculate_tokens: bool = True
    store_file_content: bool = True
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    use_gitignore: bool = False
    exclude_paths: frozenset[str] = frozenset()


@dataclass
class FileReadResult:
    """Outcome of reading one file; ``error`` is set on failure."""

    content: str = ""
    token_count: int | None = None
    error: FileSystemError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SummaryRecord:
    """Cached summary of one source file.

    Attributes:
        file_path: Source path relative to the project root
        summary: Sanitized summary text
        last_updated: ISO-8601 timestamp of generation
        file_hash: Hex digest of the source file when it was summarized
    """

    file_path: str
    summary: str
    last_updated: str
    file_hash: str

    def to_json(self) -> dict[str, str]:
        return {
            "filePath": self.file_path,
            "summary": self.summary,
            "lastUpdated": self.last_updated,
            "fileHash": self.file_hash,
        }

    @classmethod
    def from_json(cls, data: dict) -> SummaryRecord | None:
        """Build a record from its JSON form, or None if a field is missing or empty."""
        try:
            values = [data["filePath"], data["summary"], data["lastUpdated"], data["fileHash"]]
        except (KeyError, TypeError):
            return None
        if not all(isinstance(v, str) and v for v in values):
            return None
        return cls(*values)
