"""Render a directory tree with token estimates as an LLM prompt."""

import logging
import pathlib

import pyperclip

from contextkit.constants import DEFAULT_OUTPUT_FILE, STRUCTURE_IGNORE_NAMES
from contextkit.errors import FileSystemError
from contextkit.models import DirectoryNode, ScannerOptions
from contextkit.output_generators import (
    format_tree,
    generate_structure_prompt,
    generate_token_statistics,
)
from contextkit.scanner import DirectoryScanner

logger = logging.getLogger(__name__)


class StructureScanner:
    """Builds the structure prompt for a directory."""

    def scan_tree(self, root_dir: str, output_file: str | None = None) -> DirectoryNode:
        options = ScannerOptions(
            root_dir=root_dir,
            calculate_tokens=True,
            store_file_content=False,
            additional_ignore_patterns=STRUCTURE_IGNORE_NAMES,
            extend_defaults=True,
            exclude_paths=frozenset([output_file]) if output_file else frozenset(),
        )
        return DirectoryScanner(options).scan()

    def scan(self, root_dir: str) -> str:
        return generate_structure_prompt(format_tree(self.scan_tree(root_dir)))


def copy_to_clipboard(text: str) -> bool:
    """Copy ``text`` to the system clipboard; False when no clipboard is available."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.debug("Clipboard unavailable: %s", e)
        return False
    return True


def write_structure(
    root_dir: str, output_file: str = DEFAULT_OUTPUT_FILE, clipboard: bool = True
) -> str:
    """Write the structure prompt for ``root_dir`` to ``output_file``.

    Returns:
        The prompt text

    Raises:
        DirectoryError: A directory could not be listed
        FileSystemError: The output could not be written
    """
    tree = StructureScanner().scan_tree(root_dir, output_file)
    prompt = generate_structure_prompt(format_tree(tree))

    output_path = pathlib.Path(output_file)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(prompt, encoding="utf-8")
    except OSError as e:
        raise FileSystemError(f"Could not write to {output_path}", e) from e

    if clipboard and copy_to_clipboard(prompt):
        print(f"✅ Output saved to clipboard and {output_path}")
    else:
        print(f"⚠️ Output saved to {output_path}")
    print(generate_token_statistics(tree), end="")
    return prompt


def scan(root_dir: str) -> str:
    return StructureScanner().scan(root_dir)
