"""Tests for the contextkit command-line entry point."""

from __future__ import annotations

import io
import logging
import os
import subprocess
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from contextkit import cli
from contextkit.errors import ConfigurationError, GitError


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / "src").mkdir()
        (self.root / "src" / "a.ts").write_text("const a = 1;\n", encoding="utf-8")
        # basicConfig is a no-op once the root logger has handlers
        patcher = mock.patch("contextkit.cli.configure_logging")
        self.configure_logging = patcher.start()
        self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_capture_command(self) -> None:
        output = self.root / "out" / "paste.txt"
        with redirect_stdout(io.StringIO()):
            code = cli.main(
                ["capture", str(self.root), "-p", str(self.root / "none.csv"), "-o", str(output)]
            )

        self.assertEqual(code, 0)
        self.assertIn("=== File: src/a.ts ===", output.read_text(encoding="utf-8"))

    def test_capture_with_nothing_matched_exits_1(self) -> None:
        patterns = self.root / "input.csv"
        patterns.write_text("docs/*.md\n", encoding="utf-8")
        with redirect_stdout(io.StringIO()), self.assertLogs("contextkit", level="ERROR"):
            code = cli.main(["capture", str(self.root), "-p", str(patterns), "-o", str(self.root / "o.txt")])
        self.assertEqual(code, 1)

    def test_malformed_pattern_file_exits_1(self) -> None:
        patterns = self.root / "input.csv"
        patterns.write_text("src/*.ts,wild\n", encoding="utf-8")
        with redirect_stdout(io.StringIO()), self.assertLogs("contextkit.errors", level="ERROR") as logs:
            code = cli.main(["capture", str(self.root), "-p", str(patterns)])

        self.assertEqual(code, 1)
        self.assertTrue(any("[PATTERN_ERROR] codebase capture" in line for line in logs.output))

    def test_structure_command(self) -> None:
        output = self.root / "structure.txt"
        with redirect_stdout(io.StringIO()):
            code = cli.main(["structure", str(self.root), "-o", str(output), "--no-clipboard"])

        self.assertEqual(code, 0)
        self.assertIn("📄 a.ts (src/a.ts [4 tokens])", output.read_text(encoding="utf-8"))

    def test_capture_output_inside_root_is_not_recaptured(self) -> None:
        output = self.root / "dump.txt"
        args = ["capture", str(self.root), "-p", str(self.root / "none.csv"), "-o", str(output)]
        with redirect_stdout(io.StringIO()):
            self.assertEqual(cli.main(args), 0)
            self.assertEqual(cli.main(args), 0)

        text = output.read_text(encoding="utf-8")
        self.assertNotIn("=== File: dump.txt ===", text)
        self.assertEqual(text.count("=== File: src/a.ts ==="), 1)

    def test_structure_output_inside_root_is_not_listed(self) -> None:
        output = self.root / "tree.txt"
        args = ["structure", str(self.root), "-o", str(output), "--no-clipboard"]
        with redirect_stdout(io.StringIO()):
            self.assertEqual(cli.main(args), 0)
            self.assertEqual(cli.main(args), 0)

        self.assertNotIn("tree.txt", output.read_text(encoding="utf-8"))

    def test_structure_creates_output_directory(self) -> None:
        output = self.root / "out" / "tree.txt"
        with redirect_stdout(io.StringIO()):
            code = cli.main(["structure", str(self.root), "-o", str(output), "--no-clipboard"])

        self.assertEqual(code, 0)
        self.assertTrue(output.exists())

    def test_missing_directory_exits_1(self) -> None:
        with redirect_stdout(io.StringIO()), self.assertLogs("contextkit.errors", level="ERROR") as logs:
            code = cli.main(
                ["structure", str(self.root / "missing"), "-o", str(self.root / "s.txt"), "--no-clipboard"]
            )

        self.assertEqual(code, 1)
        self.assertTrue(any("DIRECTORY_ERROR" in line for line in logs.output))

    def test_git_failure_exits_1(self) -> None:
        failed = subprocess.CompletedProcess(args=[], returncode=1, stdout="")
        with mock.patch("contextkit.diff.subprocess.run", return_value=failed), self.assertLogs(
            "contextkit.errors", level="ERROR"
        ) as logs:
            code = cli.main(["diff", "-o", str(self.root / "paste.txt")])

        self.assertEqual(code, 1)
        self.assertTrue(any("[GIT_ERROR] diff capture" in line and "status 1" in line for line in logs.output))
        self.assertFalse((self.root / "paste.txt").exists())

    def test_diff_target_is_passed_through(self) -> None:
        with mock.patch("contextkit.cli.DiffCapturer") as capturer_cls:
            code = cli.main(["diff", "abc1234", "-o", "x.sh"])

        self.assertEqual(code, 0)
        capturer_cls.assert_called_once_with("x.sh")
        capturer_cls.return_value.capture_diff.assert_called_once_with("abc1234")

    def test_git_error_raised_directly_is_caught(self) -> None:
        with mock.patch("contextkit.cli.DiffCapturer") as capturer_cls, self.assertLogs(
            "contextkit.errors", level="ERROR"
        ):
            capturer_cls.return_value.capture_diff.side_effect = GitError("git diff HEAD", 128)
            self.assertEqual(cli.main(["diff"]), 1)

    def test_summarize_without_api_key_exits_1(self) -> None:
        with mock.patch(
            "contextkit.cli.load_summarizer_config",
            side_effect=ConfigurationError("ANTHROPIC_API_KEY environment variable is not set"),
        ), self.assertLogs("contextkit.errors", level="ERROR") as logs:
            code = cli.main(["summarize", str(self.root)])

        self.assertEqual(code, 1)
        self.assertTrue(any("CONFIG_ERROR" in line for line in logs.output))

    def test_summarize_reports_failures_in_exit_code(self) -> None:
        with mock.patch("contextkit.cli.load_summarizer_config") as load_config, mock.patch(
            "contextkit.cli.Summarizer"
        ) as summarizer_cls:
            summarizer_cls.return_value.run.return_value = {"failed": 1, "updated": 2}
            self.assertEqual(cli.main(["summarize", str(self.root), "--model", "m"]), 1)
            summarizer_cls.return_value.run.return_value = {"failed": 0, "updated": 2}
            self.assertEqual(cli.main(["summarize", str(self.root)]), 0)

        load_config.assert_any_call(str(self.root), summary_dir=None, model="m")

    def test_command_is_required(self) -> None:
        with self.assertRaises(SystemExit), mock.patch("sys.stderr", new=io.StringIO()):
            cli.main([])

    def test_verbosity_flags(self) -> None:
        with mock.patch("contextkit.cli.DiffCapturer"):
            cli.main(["-v", "diff"])
            cli.main(["-q", "diff"])
        self.assertEqual(
            self.configure_logging.call_args_list,
            [mock.call(True, False), mock.call(False, True)],
        )


class ConfigureLoggingTests(unittest.TestCase):
    def test_levels(self) -> None:
        with mock.patch("contextkit.cli.logging.basicConfig") as basic_config:
            cli.configure_logging(verbose=True)
            cli.configure_logging(quiet=True)
            cli.configure_logging()

        levels = [c.kwargs["level"] for c in basic_config.call_args_list]
        self.assertEqual(levels, [logging.DEBUG, logging.WARNING, logging.INFO])


class DefaultRootTests(unittest.TestCase):
    def test_root_defaults_to_current_directory(self) -> None:
        args = cli.build_parser().parse_args(["structure"])
        self.assertEqual(args.root, os.curdir)
        self.assertEqual(args.output, "paste.txt")


if __name__ == "__main__":
    unittest.main()
