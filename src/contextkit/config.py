"""Environment-based configuration for the summarizer.

Values are read from the process environment after loading a ``.env``
file (if present) with python-dotenv:

* ``ANTHROPIC_API_KEY`` (required)
* ``CONTEXTKIT_MODEL``
* ``CONTEXTKIT_MAX_TOKENS``
* ``CONTEXTKIT_SUMMARY_DIR``
"""

import os
import pathlib
from collections.abc import Mapping
from dataclasses import dataclass

from dotenv import load_dotenv

from contextkit.constants import (
    DEFAULT_MODEL,
    DEFAULT_SUMMARY_DIR_NAME,
    DEFAULT_SUMMARY_MAX_TOKENS,
)
from contextkit.errors import ConfigurationError


@dataclass(frozen=True)
class SummarizerConfig:
    """Settings for one summarizer run.

    Attributes:
        project_root: Directory whose files are summarized
        summary_dir: Directory holding the ``.summary.json`` cache files
        api_key: Anthropic API key
        model: Model used for summaries
        max_tokens: Response token limit per summary
    """

    project_root: pathlib.Path
    summary_dir: pathlib.Path
    api_key: str
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_SUMMARY_MAX_TOKENS


def load_summarizer_config(
    project_root: str,
    summary_dir: str | None = None,
    model: str | None = None,
    env: Mapping[str, str] | None = None,
) -> SummarizerConfig:
    """Build a SummarizerConfig from arguments and the environment.

    Explicit arguments win over environment values. When ``env`` is None
    the ``.env`` file is loaded into ``os.environ`` first.

    Raises:
        ConfigurationError: The API key is missing or a value is invalid
    """
    if env is None:
        load_dotenv()
        env = os.environ

    api_key = env.get("ANTHROPIC_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError("ANTHROPIC_API_KEY environment variable is not set")

    raw_max_tokens = env.get("CONTEXTKIT_MAX_TOKENS", str(DEFAULT_SUMMARY_MAX_TOKENS))
    try:
        max_tokens = int(raw_max_tokens)
    except ValueError as e:
        raise ConfigurationError(
            f"CONTEXTKIT_MAX_TOKENS must be an integer, got {raw_max_tokens!r}", e
        ) from e
    if max_tokens <= 0:
        raise ConfigurationError(f"CONTEXTKIT_MAX_TOKENS must be positive, got {max_tokens}")

    root = pathlib.Path(project_root).resolve()
    summary_dir = summary_dir or env.get("CONTEXTKIT_SUMMARY_DIR")
    resolved_summary_dir = (
        pathlib.Path(summary_dir).resolve() if summary_dir else root / DEFAULT_SUMMARY_DIR_NAME
    )

    return SummarizerConfig(
        project_root=root,
        summary_dir=resolved_summary_dir,
        api_key=api_key,
        model=model or env.get("CONTEXTKIT_MODEL") or DEFAULT_MODEL,
        max_tokens=max_tokens,
    )
