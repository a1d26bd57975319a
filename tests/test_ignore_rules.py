"""Tests for ignore-name and include-extension rules."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from contextkit.constants import DEFAULT_IGNORE_PATTERNS, DEFAULT_INCLUDE_EXTENSIONS
from contextkit.ignore_rules import (
    create_ignore_patterns,
    create_include_extensions,
    load_gitignore_spec,
    should_ignore_path,
    should_include_file,
)
from contextkit.models import ScannerOptions


class IgnoreSetTests(unittest.TestCase):
    def test_defaults_are_extended(self) -> None:
        patterns = create_ignore_patterns(
            ScannerOptions(additional_ignore_patterns=frozenset({"paste.txt"}))
        )
        self.assertIn("paste.txt", patterns)
        self.assertTrue(DEFAULT_IGNORE_PATTERNS <= patterns)

    def test_defaults_can_be_replaced(self) -> None:
        patterns = create_ignore_patterns(
            ScannerOptions(additional_ignore_patterns=frozenset({"vendor"}), extend_defaults=False)
        )
        self.assertEqual(patterns, frozenset({"vendor"}))

    def test_extensions_extend_or_replace(self) -> None:
        extended = create_include_extensions(
            ScannerOptions(additional_extensions=frozenset({".go"}))
        )
        self.assertEqual(extended, DEFAULT_INCLUDE_EXTENSIONS | {".go"})
        replaced = create_include_extensions(
            ScannerOptions(additional_extensions=frozenset({".go"}), extend_extensions=False)
        )
        self.assertEqual(replaced, frozenset({".go"}))

    def test_default_sets_are_immutable(self) -> None:
        self.assertIsInstance(DEFAULT_IGNORE_PATTERNS, frozenset)
        self.assertIsInstance(DEFAULT_INCLUDE_EXTENSIONS, frozenset)


class ShouldIgnorePathTests(unittest.TestCase):
    def test_matches_whole_segments_only(self) -> None:
        ignore = {"node_modules", "dist"}
        self.assertTrue(should_ignore_path("node_modules/pkg/index.js", ignore))
        self.assertTrue(should_ignore_path("src/dist", ignore))
        self.assertFalse(should_ignore_path("src/node_modules_old/x.js", ignore))
        self.assertFalse(should_ignore_path("src/distribution/x.js", ignore))
        self.assertFalse(should_ignore_path("src/my-dist.js", ignore))

    def test_splits_on_both_separators(self) -> None:
        self.assertTrue(should_ignore_path("src\\node_modules\\x.js", {"node_modules"}))
        self.assertTrue(should_ignore_path("C:\\repo/.git/config", {".git"}))

    def test_empty_set_ignores_nothing(self) -> None:
        self.assertFalse(should_ignore_path("node_modules/x.js", set()))


class ShouldIncludeFileTests(unittest.TestCase):
    def test_uses_suffix_from_last_dot(self) -> None:
        extensions = {".ts", ".d.ts", ".gitignore"}
        self.assertTrue(should_include_file("src/a.ts", extensions))
        self.assertTrue(should_include_file("types/a.d.ts", extensions))
        self.assertTrue(should_include_file(".gitignore", extensions))
        self.assertFalse(should_include_file("src/a.tsx", extensions))

    def test_extension_match_is_case_sensitive(self) -> None:
        self.assertFalse(should_include_file("README.MD", {".md"}))

    def test_files_without_extension_are_excluded(self) -> None:
        self.assertFalse(should_include_file("Makefile", {".md", "e"}))
        self.assertFalse(should_include_file("dir.d/Makefile", {".d/Makefile", ".md"}))


class GitignoreSpecTests(unittest.TestCase):
    def test_missing_gitignore_gives_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(load_gitignore_spec(Path(tmp)))

    def test_combines_gitignore_and_info_exclude(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / ".gitignore").write_text("# generated\n*.log\n", encoding="utf-8")
            (root / ".git" / "info").mkdir(parents=True)
            (root / ".git" / "info" / "exclude").write_text("secret/\n", encoding="utf-8")

            spec = load_gitignore_spec(root)

            self.assertIsNotNone(spec)
            self.assertTrue(spec.match_file("logs/app.log"))
            self.assertTrue(spec.match_file("secret/key.txt"))
            self.assertFalse(spec.match_file("src/app.py"))


if __name__ == "__main__":
    unittest.main()
