"""Recursive directory scanning into a tree of file and directory nodes."""

import logging
import os
import pathlib
from collections.abc import Iterator

from contextkit.errors import DirectoryError
from contextkit.file_operations import read_file
from contextkit.ignore_rules import (
    create_ignore_patterns,
    create_include_extensions,
    load_gitignore_spec,
    should_ignore_path,
    should_include_file,
)
from contextkit.models import DirectoryNode, FileNode, Node, ScannerOptions
from contextkit.path_utils import get_extension, get_relative_path, normalize
from contextkit.pattern_matcher import match_any_pattern

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Walks one directory tree and keeps the files that pass every filter.

    A file is kept when no segment of its root-relative path is an ignored
    name, its extension is included, and (if include patterns were given)
    its root-relative path matches at least one of them. Ignored
    directories are pruned without being listed. Directories left with no
    eligible files are dropped from the tree.

    Example:
        >>> scanner = DirectoryScanner(ScannerOptions(root_dir="src"))
        >>> tree = scanner.scan()
    """

    def __init__(self, options: ScannerOptions | None = None):
        self.options = options or ScannerOptions()
        self.root_dir = os.path.abspath(self.options.root_dir or os.getcwd())
        self.ignore_patterns = create_ignore_patterns(self.options)
        self.include_extensions = create_include_extensions(self.options)
        self.gitignore_spec = (
            load_gitignore_spec(pathlib.Path(self.root_dir))
            if self.options.use_gitignore
            else None
        )
        self.exclude_paths = frozenset(
            pathlib.Path(p).resolve() for p in self.options.exclude_paths
        )

    def should_process_file(self, path: str) -> bool:
        """Decide whether the file at ``path`` belongs in the tree.

        Args:
            path: Absolute path, or a path relative to the scan root

        Returns:
            True if the file passes the ignore, extension and include filters
        """
        relative_path = get_relative_path(os.path.join(self.root_dir, path), self.root_dir)

        if should_ignore_path(relative_path, self.ignore_patterns):
            return False

        if not should_include_file(relative_path, self.include_extensions):
            return False

        if self.gitignore_spec is not None and self.gitignore_spec.match_file(relative_path):
            return False

        if self.options.include_patterns:
            return match_any_pattern(relative_path, self.options.include_patterns)

        return True

    def _is_pruned(self, relative_path: str, is_dir: bool) -> bool:
        if should_ignore_path(relative_path, self.ignore_patterns):
            return True
        if is_dir and self.gitignore_spec is not None:
            # Trailing slash so directory-only patterns like "build/" apply
            return self.gitignore_spec.match_file(relative_path + "/")
        return False

    def _create_file_node(self, path: str, relative_path: str) -> FileNode | None:
        result = read_file(
            path,
            calculate_token_count=self.options.calculate_tokens,
            max_size=self.options.max_file_size,
        )
        if result.error is not None:
            logger.warning("Skipping file: %s", result.error.message)
            return None

        return FileNode(
            name=os.path.basename(path),
            path=relative_path,
            full_path=normalize(path),
            extension=get_extension(path),
            content=result.content if self.options.store_file_content else None,
            token_count=result.token_count,
        )

    def _scan_directory(self, dir_path: str) -> DirectoryNode:
        try:
            with os.scandir(dir_path) as it:
                entries = list(it)
        except OSError as e:
            raise DirectoryError(dir_path, "Error scanning directory", e) from e

        children: list[Node] = []
        for entry in entries:
            full_path = os.path.join(dir_path, entry.name)
            relative_path = get_relative_path(full_path, self.root_dir)

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file()
            except OSError as e:
                logger.warning("Could not stat %s: %s", full_path, e)
                continue

            if self._is_pruned(relative_path, is_dir):
                continue

            if is_dir:
                sub_dir = self._scan_directory(full_path)
                if sub_dir.children:
                    children.append(sub_dir)
            elif (
                is_file
                and pathlib.Path(full_path).resolve() not in self.exclude_paths
                and self.should_process_file(full_path)
            ):
                file_node = self._create_file_node(full_path, relative_path)
                if file_node is not None:
                    children.append(file_node)

        children.sort(key=lambda node: node.name)
        return DirectoryNode(
            name=os.path.basename(dir_path),
            path=get_relative_path(dir_path, self.root_dir),
            full_path=normalize(dir_path),
            children=tuple(children),
        )

    def scan(self) -> DirectoryNode:
        """Scan the configured root and return its directory node.

        Raises:
            DirectoryError: A directory's entries could not be listed
        """
        logger.debug("Scanning %s", self.root_dir)
        return self._scan_directory(self.root_dir)


def iter_files(node: Node) -> Iterator[FileNode]:
    """Yield the file nodes under ``node`` depth-first, in child order."""
    if isinstance(node, FileNode):
        yield node
        return
    for child in node.children:
        yield from iter_files(child)


def count_nodes(node: Node) -> tuple[int, int]:
    """Return (directory count, file count) for the tree under ``node``."""
    if isinstance(node, FileNode):
        return 0, 1
    dirs, files = 1, 0
    for child in node.children:
        child_dirs, child_files = count_nodes(child)
        dirs += child_dirs
        files += child_files
    return dirs, files
