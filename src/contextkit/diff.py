"""Turn the staged git diff into a paste-ready commit-message script."""

import logging
import os
import pathlib
import shlex
import subprocess
from datetime import datetime, timezone

from contextkit.constants import DEFAULT_OUTPUT_FILE, GIT_DIFF_ARGS
from contextkit.errors import FileSystemError, GitError
from contextkit.output_generators import generate_commit_script

logger = logging.getLogger(__name__)


class DiffCapturer:
    """Captures ``git diff --staged`` against a reference and writes a commit script.

    Args:
        output_file: Where the generated script is written
        cwd: Repository directory git runs in (defaults to the current directory)
    """

    def __init__(self, output_file: str = DEFAULT_OUTPUT_FILE, cwd: str | None = None):
        self.output_file = output_file
        self.cwd = cwd

    def build_command(self, target: str | None = None) -> list[str]:
        return ["git", *GIT_DIFF_ARGS, target or "HEAD"]

    def execute_git_diff(self, target: str | None = None) -> str:
        """Run git diff and return its output.

        Raises:
            GitError: git could not be started or exited with a non-zero status
        """
        command = self.build_command(target)
        command_line = shlex.join(command)
        logger.debug("Executing: %s", command_line)

        try:
            result = subprocess.run(
                command,
                cwd=self.cwd,
                stdout=subprocess.PIPE,
                stderr=None,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise GitError(command_line, None, e) from e

        if result.returncode != 0:
            raise GitError(command_line, result.returncode)
        return result.stdout

    def capture_diff(self, target: str | None = None) -> pathlib.Path:
        """Write the commit script for the staged diff against ``target``.

        Returns:
            Path of the generated script

        Raises:
            GitError: The diff could not be produced
            FileSystemError: The script could not be written
        """
        diff_output = self.execute_git_diff(target)
        timestamp = datetime.now(timezone.utc).isoformat()
        script = generate_commit_script(diff_output, target or "HEAD", timestamp)

        output_path = pathlib.Path(self.output_file)
        try:
            output_path.write_text(script, encoding="utf-8")
            os.chmod(output_path, 0o755)
        except OSError as e:
            raise FileSystemError(f"Could not write to {output_path}", e) from e

        print(f"✅ Generated paste-ready file: {output_path}")
        return output_path
