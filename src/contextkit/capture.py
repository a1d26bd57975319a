"""Capture the contents of pattern-selected files into one text dump."""

import logging
import pathlib

from contextkit.constants import (
    CAPTURE_IGNORE_NAMES,
    CATCH_ALL_PATTERN,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_PATTERNS_FILE,
)
from contextkit.errors import FileSystemError, handle_file_system_error
from contextkit.file_operations import read_file_strict
from contextkit.models import FilePattern, ScannerOptions
from contextkit.output_generators import format_capture_output
from contextkit.path_utils import validate_path
from contextkit.pattern_matcher import create_pattern, parse_pattern_input
from contextkit.scanner import DirectoryScanner, count_nodes

logger = logging.getLogger(__name__)


class CodebaseCapture:
    """Concatenate the files selected by a pattern file.

    Args:
        patterns_path: Pattern file; when missing every non-ignored file is captured
    """

    def __init__(self, patterns_path: str = DEFAULT_PATTERNS_FILE):
        self.patterns_path = patterns_path
        self.patterns: list[FilePattern] = []

    def load_patterns(self) -> list[FilePattern]:
        """Load include patterns from the pattern file.

        Raises:
            PatternError: The pattern file is malformed
        """
        try:
            if not validate_path(self.patterns_path):
                logger.info("No patterns file found, including all files by default")
                self.patterns = [create_pattern(CATCH_ALL_PATTERN)]
                return self.patterns
            content = read_file_strict(self.patterns_path)
        except FileSystemError as e:
            handle_file_system_error(e, f"Error reading patterns file: {self.patterns_path}")
            self.patterns = [create_pattern(CATCH_ALL_PATTERN)]
            return self.patterns

        self.patterns = parse_pattern_input(content)
        logger.info("Loaded include patterns:")
        for p in self.patterns:
            logger.info("  %s: %s", "Regex" if p.is_regex else "Simple", p.pattern)
        return self.patterns

    def render(self, root_dir: str, output_file: str | None = None) -> str:
        """Scan ``root_dir`` and return the capture text, leaving out ``output_file``."""
        self.load_patterns()

        scanner = DirectoryScanner(
            ScannerOptions(
                root_dir=root_dir,
                include_patterns=tuple(self.patterns),
                additional_ignore_patterns=CAPTURE_IGNORE_NAMES,
                store_file_content=True,
                exclude_paths=frozenset([output_file]) if output_file else frozenset(),
            )
        )
        tree = scanner.scan()
        _, file_count = count_nodes(tree)
        logger.debug("Matched %d files under %s", file_count, root_dir)
        return "".join(format_capture_output(tree))

    def capture(self, root_dir: str, output_file: str = DEFAULT_OUTPUT_FILE) -> pathlib.Path | None:
        """Write the capture of ``root_dir`` to ``output_file``.

        Returns:
            Path of the written file, or None when nothing matched

        Raises:
            DirectoryError: A directory could not be listed
            PatternError: The pattern file is malformed
            FileSystemError: The output could not be written
        """
        print(f"📂 Scanning directory: {pathlib.Path(root_dir).resolve()}")
        output = self.render(root_dir, output_file)

        if not output.strip():
            logger.error("No files were captured! Check your patterns and paths.")
            return None

        output_path = pathlib.Path(output_file)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(output, encoding="utf-8")
        except OSError as e:
            raise FileSystemError(f"Could not write to {output_path}", e) from e

        print("✅ Codebase capture complete!")
        print(f"📄 Output: {output_path}")
        return output_path


def capture_codebase(
    root_dir: str,
    patterns_path: str = DEFAULT_PATTERNS_FILE,
    output_file: str = DEFAULT_OUTPUT_FILE,
) -> pathlib.Path | None:
    return CodebaseCapture(patterns_path).capture(root_dir, output_file)
