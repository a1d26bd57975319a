"""Tests for summarizer configuration loading."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from contextkit.config import load_summarizer_config
from contextkit.constants import DEFAULT_MODEL, DEFAULT_SUMMARY_MAX_TOKENS
from contextkit.errors import ConfigurationError


class LoadSummarizerConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config = load_summarizer_config(tmp, env={"ANTHROPIC_API_KEY": "sk-test"})

            root = Path(tmp).resolve()
            self.assertEqual(config.project_root, root)
            self.assertEqual(config.summary_dir, root / "summaries")
            self.assertEqual(config.api_key, "sk-test")
            self.assertEqual(config.model, DEFAULT_MODEL)
            self.assertEqual(config.max_tokens, DEFAULT_SUMMARY_MAX_TOKENS)

    def test_missing_api_key_is_fatal(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            load_summarizer_config(".", env={})
        self.assertIn("ANTHROPIC_API_KEY", ctx.exception.message)

        with self.assertRaises(ConfigurationError):
            load_summarizer_config(".", env={"ANTHROPIC_API_KEY": "   "})

    def test_environment_overrides(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            env = {
                "ANTHROPIC_API_KEY": "sk-test",
                "CONTEXTKIT_MODEL": "claude-test",
                "CONTEXTKIT_MAX_TOKENS": "256",
                "CONTEXTKIT_SUMMARY_DIR": os.path.join(tmp, "cache"),
            }
            config = load_summarizer_config(tmp, env=env)

            self.assertEqual(config.model, "claude-test")
            self.assertEqual(config.max_tokens, 256)
            self.assertEqual(config.summary_dir, (Path(tmp) / "cache").resolve())

    def test_arguments_win_over_environment(self) -> None:
        env = {"ANTHROPIC_API_KEY": "sk-test", "CONTEXTKIT_MODEL": "from-env"}
        config = load_summarizer_config(".", model="from-arg", summary_dir="out", env=env)
        self.assertEqual(config.model, "from-arg")
        self.assertEqual(config.summary_dir, Path("out").resolve())

    def test_invalid_max_tokens(self) -> None:
        for value in ("many", "0", "-5"):
            with self.assertRaises(ConfigurationError):
                load_summarizer_config(
                    ".", env={"ANTHROPIC_API_KEY": "k", "CONTEXTKIT_MAX_TOKENS": value}
                )

    def test_dotenv_is_loaded_from_process_environment(self) -> None:
        with mock.patch("contextkit.config.load_dotenv") as load_dotenv, mock.patch.dict(
            os.environ, {"ANTHROPIC_API_KEY": "sk-env"}
        ):
            config = load_summarizer_config(".")

        load_dotenv.assert_called_once_with()
        self.assertEqual(config.api_key, "sk-env")


if __name__ == "__main__":
    unittest.main()
