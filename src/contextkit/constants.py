"""Default configuration values shared by the scanner and the CLI tools."""

# --- Scanning defaults ---

DEFAULT_IGNORE_PATTERNS: frozenset[str] = frozenset(
    {
        # Version control
        ".git",
        ".svn",
        ".hg",
        # Dependencies and caches
        "node_modules",
        ".cache",
        "__pycache__",
        ".venv",
        "venv",
        ".mypy_cache",
        ".pytest_cache",
        ".tox",
        # Build output
        "dist",
        "build",
        "coverage",
        ".next",
        # OS metadata and lockfiles
        ".DS_Store",
        "Thumbs.db",
        "package-lock.json",
    }
)

DEFAULT_INCLUDE_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".ts",
        ".tsx",
        ".js",
        ".jsx",
        ".json",
        ".md",
        ".txt",
        ".py",
    }
)

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MiB

# Rough characters-per-token ratio used for LLM token estimates
CHARS_PER_TOKEN = 4

CATCH_ALL_PATTERN = "**/*"

# --- Tool outputs ---

DEFAULT_OUTPUT_FILE = "paste.txt"
DEFAULT_PATTERNS_FILE = "input.csv"
CAPTURE_IGNORE_NAMES: frozenset[str] = frozenset({DEFAULT_OUTPUT_FILE, "codebase-snapshot.json"})
STRUCTURE_IGNORE_NAMES: frozenset[str] = frozenset({DEFAULT_OUTPUT_FILE})

DIRECTORY_MARKER = "📁"
FILE_MARKER = "📄"

STRUCTURE_PROMPT_FOOTER = (
    "",
    "The /summaries directory contains overview summaries for most files.",
    "",
    "Please provide your analysis in these steps:",
    "1. List files needed to understand the context",
    "2. Specific code sections to focus on",
    "3. Areas where you need additional context",
    "",
)

GIT_DIFF_ARGS = (
    "diff",
    "--staged",
    "--src-prefix=a/",
    "--dst-prefix=b/",
    "--ignore-space-change",
    "--ignore-blank-lines",
)

COMMIT_PROMPT = """#!/bin/bash
# Auto-generated commit command builder | paste into terminal
# INSTRUCTIONS:
# 1. AI should generate a single -m argument for semantic commits
# 2. Format: "type(scope): brief summary"
# 3. Use bullet points for detailed changes
# 4. Escape quotes with \\"
echo "Generated commit command:"
echo "git commit -m \\"
"""

# --- Summarizer ---

DEFAULT_MODEL = "claude-3-haiku-20240307"
DEFAULT_SUMMARY_MAX_TOKENS = 1024
DEFAULT_SUMMARY_DIR_NAME = "summaries"
SUMMARY_SUFFIX = ".summary.json"
SUMMARY_CONTENT_LIMIT = 12000
TRUNCATION_MARKER = "\n[...Content truncated for brevity...]"

SUMMARIZER_IGNORE_NAMES: frozenset[str] = frozenset(
    {DEFAULT_SUMMARY_DIR_NAME, ".DS_Store", "package-lock.json", DEFAULT_OUTPUT_FILE}
)
SUMMARIZER_EXTENSIONS: frozenset[str] = frozenset(
    {".ts", ".tsx", ".txt", ".js", ".jsx", ".json", ".md", ".py", ".gitignore"}
)
