"""Text output generation: capture dumps, tree renderings and commit scripts."""

from collections import defaultdict

from contextkit.constants import (
    COMMIT_PROMPT,
    DIRECTORY_MARKER,
    FILE_MARKER,
    STRUCTURE_PROMPT_FOOTER,
)
from contextkit.models import DirectoryNode, FileNode, Node


def _capture_order(node: Node) -> str:
    return node.name


def _structure_order(node: Node) -> tuple[int, str]:
    # Directories first, then by name
    return (0 if isinstance(node, DirectoryNode) else 1, node.name)


def format_capture_output(node: Node, result: list[str] | None = None) -> list[str]:
    """Flatten the file contents of a tree into output chunks.

    Each file with content contributes a ``=== File: <path> ===`` header
    followed by its content.

    Args:
        node: Tree (or single file) to flatten
        result: List to append to

    Returns:
        The list of output chunks
    """
    if result is None:
        result = []

    if isinstance(node, FileNode):
        if node.content:
            result.append(f"\n=== File: {node.path} ===\n")
            result.append(node.content)
    else:
        for child in sorted(node.children, key=_capture_order):
            format_capture_output(child, result)

    return result


def format_tree(node: Node, level: int = 0) -> str:
    """Render a tree with two spaces of indentation per level.

    Examples:
        >>> print(format_tree(FileNode(name="a.py", path="a.py", full_path="/r/a.py",
        ...                            token_count=3)), end="")
        📄 a.py (a.py [3 tokens])
    """
    indent = " " * (level * 2)
    if isinstance(node, DirectoryNode):
        output = f"{indent}{DIRECTORY_MARKER} {node.name} ({node.path})\n"
        for child in sorted(node.children, key=_structure_order):
            output += format_tree(child, level + 1)
        return output

    token_info = f" [{node.token_count} tokens]" if node.token_count is not None else ""
    return f"{indent}{FILE_MARKER} {node.name} ({node.path}{token_info})\n"


def generate_structure_prompt(structure: str) -> str:
    """Wrap a rendered tree in the fixed analysis prompt."""
    return "\n".join(["Current directory structure:", structure, *STRUCTURE_PROMPT_FOOTER])


def generate_token_statistics(node: DirectoryNode) -> str:
    """Summarize file and token counts by extension, largest first.

    Returns:
        Multi-line plain-text statistics block
    """
    by_extension: dict[str, list[FileNode]] = defaultdict(list)
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, FileNode):
            by_extension[current.extension or "(none)"].append(current)
        else:
            stack.extend(current.children)

    total_files = sum(len(files) for files in by_extension.values())
    total_tokens = sum(f.token_count or 0 for files in by_extension.values() for f in files)

    stats = f"Total Files: {total_files}\n"
    stats += f"Total Tokens: {total_tokens:,}\n"
    for extension, files in sorted(
        by_extension.items(),
        key=lambda item: (-sum(f.token_count or 0 for f in item[1]), item[0]),
    ):
        tokens = sum(f.token_count or 0 for f in files)
        stats += f"  {extension}: {len(files)} files, {tokens:,} tokens\n"
    return stats


def generate_commit_script(diff_output: str, target: str, timestamp: str) -> str:
    """Build the paste-ready shell script wrapping a diff in a heredoc.

    Args:
        diff_output: Raw ``git diff`` output
        target: Git reference the diff was taken against
        timestamp: ISO-8601 generation time
    """
    header = (
        f"# DIFF CONTENT BELOW - {timestamp}\n"
        f"# git diff {target}\n\n"
        "cat << 'EOF'\n"
    )
    if diff_output and not diff_output.endswith("\n"):
        diff_output += "\n"
    return COMMIT_PROMPT + header + diff_output + "EOF\n"
