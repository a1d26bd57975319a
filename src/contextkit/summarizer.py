"""Per-file AI summaries, cached as JSON and refreshed when a file's hash changes."""

import json
import logging
import pathlib
import re
from collections import Counter
from datetime import datetime, timezone

import anthropic
import tqdm

from contextkit.config import SummarizerConfig
from contextkit.constants import (
    SUMMARIZER_EXTENSIONS,
    SUMMARIZER_IGNORE_NAMES,
    SUMMARY_CONTENT_LIMIT,
    SUMMARY_SUFFIX,
    TRUNCATION_MARKER,
)
from contextkit.errors import ContextKitError, FileSystemError, SummaryError, handle_error
from contextkit.file_operations import get_file_hash, read_file_strict
from contextkit.models import ScannerOptions, SummaryRecord
from contextkit.path_utils import get_extension, get_relative_path
from contextkit.scanner import DirectoryScanner, iter_files

logger = logging.getLogger(__name__)

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x19]+")

SKIPPED = "skipped"
UP_TO_DATE = "up-to-date"
UPDATED = "updated"
FAILED = "failed"


# --- Prompts ---

SYSTEM_PROMPT = """You are a technical documentation expert creating summaries for a Retrieval Augmented Generation system.
Generate summaries that:
1. Identify key entities, concepts, and relationships
2. Highlight unique terminology and domain-specific language
3. Note important numerical data or statistics
4. Maintain semantic relationships between concepts
5. Include specific function/class/method names where applicable
6. Preserve important technical specifications and dependencies
7. Mention error conditions or edge cases documented in the content"""

USER_PROMPT = """Create a RAG-optimized summary for {file_name} ({extension}) that will help in semantic search and question answering.
Consider the following aspects:
{aspects}

Structure your response as:
<summary>
  <purpose>Concise description of primary purpose</purpose>
  <key_components>
    {components}
  </key_components>
  <dependencies>{dependencies}</dependencies>
  <unique_characteristics>Distinctive features or patterns</unique_characteristics>
  <methods>a list of all public and private method names in the code</methods>
  <exports>all the exports and what they are</exports>
  <notes>any other information an LLM looking at a summary of all files in the repo would need to know</notes>
</summary>

Avoid markdown formatting. Keep technical terms intact. Prioritize searchability and factual density.

File Content:
{content}"""

ASPECTS_BY_EXTENSION = {
    ".ts": """- Key classes/interfaces and their responsibilities
- Main exported functions/constants
- Critical type definitions
- Notable algorithms or patterns
- Important dependencies/imports
- Configuration requirements""",
    ".py": """- Key classes and their responsibilities
- Public functions and module-level constants
- Notable algorithms or patterns
- Important imports and third-party dependencies
- Raised exceptions and error handling""",
    ".json": """- Primary purpose of the configuration
- Critical keys and their significance
- Default values and overrides
- Relationships between configuration properties
- Environment-specific settings""",
    ".txt": """- Core concepts and entities
- Relationships between mentioned items
- Quantitative data points
- Process flows or workflows
- Decision criteria or business rules""",
    ".jsx": """- Component hierarchy and relationships
- Key props and state management
- Important lifecycle methods
- UI interaction patterns
- Data fetching strategies
- Accessibility features""",
}

DEFAULT_ASPECTS = """- Main entities and their relationships
- Key processes or workflows
- Important numerical values or thresholds
- Decision-making criteria
- Business rules or validation logic"""

COMPONENTS_BY_EXTENSION = {
    ".ts": "List notable exports, classes, functions, types",
    ".py": "List notable classes, functions, constants",
    ".json": "List critical configuration keys and groups",
    ".txt": "List key entities, concepts, and relationships",
    ".jsx": "List main components, props, state variables",
}

DEPENDENCIES_BY_EXTENSION = {
    ".ts": "List critical npm dependencies and peer dependencies",
    ".py": "List imported packages and internal modules",
}


def truncate_content(content: str, max_length: int = SUMMARY_CONTENT_LIMIT) -> str:
    if len(content) <= max_length:
        return content
    return content[:max_length] + TRUNCATION_MARKER


def build_user_prompt(file_name: str, extension: str, content: str) -> str:
    return USER_PROMPT.format(
        file_name=file_name,
        extension=extension,
        aspects=ASPECTS_BY_EXTENSION.get(extension, DEFAULT_ASPECTS),
        components=COMPONENTS_BY_EXTENSION.get(extension, "List key components and their purposes"),
        dependencies=DEPENDENCIES_BY_EXTENSION.get(
            extension, "Document any cross-file or external dependencies"
        ),
        content=truncate_content(content),
    )


def sanitize_summary(summary: str) -> str:
    """Replace control characters with spaces and trim every line.

    Examples:
        >>> sanitize_summary("  purpose:\\tparse\\x01files  ")
        'purpose: parse files'
    """
    cleaned = _CONTROL_CHARS_RE.sub(" ", summary)
    return "\n    ".join(line.strip() for line in cleaned.split("\n")).strip()


class Summarizer:
    """Summarizes every eligible file under a project root, one API call at a time.

    Args:
        config: Summarizer settings
        client: Object with an Anthropic-style ``messages.create``; an
            ``anthropic.Anthropic`` client is created when omitted
    """

    def __init__(self, config: SummarizerConfig, client=None):
        self.config = config
        self.client = client or anthropic.Anthropic(api_key=config.api_key)
        self.scanner = DirectoryScanner(
            ScannerOptions(
                root_dir=str(config.project_root),
                additional_ignore_patterns=SUMMARIZER_IGNORE_NAMES
                | {config.summary_dir.name},
                additional_extensions=SUMMARIZER_EXTENSIONS,
                extend_extensions=False,
                calculate_tokens=False,
                store_file_content=False,
            )
        )

    def relative_path(self, file_path: pathlib.Path) -> str:
        return get_relative_path(str(file_path), str(self.config.project_root))

    def summary_path_for(self, file_path: pathlib.Path) -> pathlib.Path:
        return self.config.summary_dir / f"{self.relative_path(file_path)}{SUMMARY_SUFFIX}"

    def load_summary_record(self, summary_path: pathlib.Path) -> SummaryRecord | None:
        """Read a cached summary; None if it is missing or unusable."""
        try:
            content = summary_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("Error reading summary metadata from %s: %s", summary_path, e)
            return None

        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            try:
                data = json.loads(_CONTROL_CHARS_RE.sub(" ", content))
            except json.JSONDecodeError as e:
                logger.error("Invalid JSON in %s: %s", summary_path, e)
                return None

        record = SummaryRecord.from_json(data) if isinstance(data, dict) else None
        if record is None:
            logger.error("Invalid metadata structure in %s", summary_path)
        return record

    def needs_new_summary(self, file_path: pathlib.Path, current_hash: str | None = None) -> bool:
        record = self.load_summary_record(self.summary_path_for(file_path))
        if record is None:
            logger.debug("No existing summary found for: %s", file_path)
            return True

        current_hash = current_hash or get_file_hash(str(file_path))
        needs_update = current_hash != record.file_hash
        logger.debug(
            "File: %s, current hash: %s, stored hash: %s, needs update: %s",
            file_path,
            current_hash,
            record.file_hash,
            needs_update,
        )
        return needs_update

    def generate_summary(self, file_path: pathlib.Path) -> str:
        """Ask the model for a summary of one file.

        Raises:
            FileSystemError: The file could not be read
            SummaryError: The response held no text
        """
        content = read_file_strict(str(file_path))
        message = self.client.messages.create(
            model=self.config.model,
            max_tokens=self.config.max_tokens,
            system=SYSTEM_PROMPT,
            messages=[
                {
                    "role": "user",
                    "content": build_user_prompt(file_path.name, get_extension(file_path.name), content),
                }
            ],
        )

        first_block = message.content[0] if message.content else None
        if first_block is None or getattr(first_block, "type", None) != "text":
            raise SummaryError(f"Expected a text response for {file_path}")
        return first_block.text

    def save_summary(
        self, file_path: pathlib.Path, summary: str, file_hash: str | None = None
    ) -> SummaryRecord:
        """Write the summary cache file for ``file_path``.

        Raises:
            FileSystemError: The cache file could not be written
        """
        record = SummaryRecord(
            file_path=self.relative_path(file_path),
            summary=sanitize_summary(summary),
            last_updated=datetime.now(timezone.utc).isoformat(),
            file_hash=file_hash or get_file_hash(str(file_path)),
        )

        summary_path = self.summary_path_for(file_path)
        try:
            summary_path.parent.mkdir(parents=True, exist_ok=True)
            summary_path.write_text(
                json.dumps(record.to_json(), indent=2, ensure_ascii=False), encoding="utf-8"
            )
        except OSError as e:
            raise FileSystemError(f"Error saving summary for {file_path}", e) from e
        return record

    def process_file(self, file_path: pathlib.Path) -> str:
        """Refresh the summary of one file if needed.

        Returns:
            One of ``skipped``, ``up-to-date``, ``updated`` or ``failed``
        """
        if not self.scanner.should_process_file(str(file_path)):
            return SKIPPED

        try:
            current_hash = get_file_hash(str(file_path))
            if not self.needs_new_summary(file_path, current_hash):
                logger.info("Summary is up to date for: %s", file_path)
                return UP_TO_DATE

            logger.info("Generating summary for: %s", file_path)
            summary = self.generate_summary(file_path)
            self.save_summary(file_path, summary, current_hash)
        except (ContextKitError, anthropic.APIError) as e:
            handle_error(e, f"Processing {file_path}")
            return FAILED

        logger.info("Summary saved for: %s", file_path)
        return UPDATED

    def run(self) -> Counter:
        """Summarize every eligible file under the project root.

        Returns:
            Counter of outcomes keyed by ``skipped``/``up-to-date``/``updated``/``failed``

        Raises:
            DirectoryError: A directory could not be listed
            FileSystemError: The summary directory could not be created
        """
        try:
            self.config.summary_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(f"Could not create {self.config.summary_dir}", e) from e

        files = [pathlib.Path(node.full_path) for node in iter_files(self.scanner.scan())]
        outcomes: Counter = Counter()
        for file_path in tqdm.tqdm(files, desc="Summarizing", unit="file"):
            outcomes[self.process_file(file_path)] += 1

        print(
            f"✅ Summary generation complete! {outcomes[UPDATED]} updated, "
            f"{outcomes[UP_TO_DATE]} up to date, {outcomes[FAILED]} failed"
        )
        return outcomes
