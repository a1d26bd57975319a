"""Command-line interface for contextkit."""

import argparse
import logging
import os
import sys

from contextkit.capture import CodebaseCapture
from contextkit.config import load_summarizer_config
from contextkit.constants import DEFAULT_OUTPUT_FILE, DEFAULT_PATTERNS_FILE
from contextkit.diff import DiffCapturer
from contextkit.errors import ContextKitError, handle_error
from contextkit.structure import write_structure
from contextkit.summarizer import Summarizer


def _run_capture(args: argparse.Namespace) -> int:
    output = CodebaseCapture(args.patterns).capture(args.root, args.output)
    return 0 if output is not None else 1


def _run_structure(args: argparse.Namespace) -> int:
    write_structure(args.root, args.output, clipboard=not args.no_clipboard)
    return 0


def _run_diff(args: argparse.Namespace) -> int:
    DiffCapturer(args.output).capture_diff(args.target)
    return 0


def _run_summarize(args: argparse.Namespace) -> int:
    config = load_summarizer_config(args.root, summary_dir=args.summary_dir, model=args.model)
    outcomes = Summarizer(config).run()
    return 1 if outcomes["failed"] else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contextkit",
        description="Scan a source tree and build LLM-ready context artifacts.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="Show detailed processing information."
    )
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    capture = subparsers.add_parser(
        "capture",
        help="Concatenate pattern-selected files into one text file.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    capture.add_argument("root", nargs="?", default=os.curdir, help="Directory to capture.")
    capture.add_argument(
        "-p", "--patterns", default=DEFAULT_PATTERNS_FILE, help="Pattern file (pattern[,simple|regex] per line)."
    )
    capture.add_argument("-o", "--output", default=DEFAULT_OUTPUT_FILE, help="Output file.")
    capture.set_defaults(handler=_run_capture, context="codebase capture")

    structure = subparsers.add_parser(
        "structure",
        help="Render the directory tree with token counts as a prompt.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    structure.add_argument("root", nargs="?", default=os.curdir, help="Directory to render.")
    structure.add_argument("-o", "--output", default=DEFAULT_OUTPUT_FILE, help="Output file.")
    structure.add_argument(
        "--no-clipboard", action="store_true", help="Do not copy the prompt to the clipboard."
    )
    structure.set_defaults(handler=_run_structure, context="structure scan")

    diff = subparsers.add_parser(
        "diff",
        help="Wrap the staged git diff in a commit-message script.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    diff.add_argument("target", nargs="?", default=None, help="Git reference to diff against (HEAD).")
    diff.add_argument("-o", "--output", default=DEFAULT_OUTPUT_FILE, help="Output script.")
    diff.set_defaults(handler=_run_diff, context="diff capture")

    summarize = subparsers.add_parser(
        "summarize",
        help="Generate cached AI summaries for changed files.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    summarize.add_argument("root", nargs="?", default=os.curdir, help="Project root to summarize.")
    summarize.add_argument(
        "--summary-dir", default=None, help="Summary cache directory (<root>/summaries)."
    )
    summarize.add_argument("--model", default=None, help="Model used for summaries.")
    summarize.set_defaults(handler=_run_summarize, context="summary generation")

    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the contextkit CLI."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        return args.handler(args)
    except ContextKitError as e:
        handle_error(e, args.context, debug=args.verbose)
        return 1


if __name__ == "__main__":
    sys.exit(main())
