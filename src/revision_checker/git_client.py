"""
Thin wrapper around the git executable.

Every command runs with the working copy as its ``cwd``; the process working
directory is never changed. All calls are synchronous.
"""

import subprocess
from datetime import datetime
from pathlib import Path

from ..shared_utilities import get_logger
from .errors import GitCommandError

# Separator emitted by the %x1f placeholder in --format strings
_FIELD_SEP = "\x1f"


class GitClient:
    """Runs git commands against one working copy."""

    def __init__(self, working_dir: Path | str, executable: str = "git"):
        """
        Initialize git client.

        Args:
            working_dir: Root of the working copy all commands operate on
            executable: git executable name or path
        """
        self.working_dir = Path(working_dir)
        self.executable = executable
        self.logger = get_logger(__name__)

    def run(self, args: list[str]) -> str:
        """
        Run a git command and return its stdout.

        Raises:
            GitCommandError: If git cannot be started or exits non-zero
        """
        command = [self.executable, *args]
        self.logger.debug(f"Running: {' '.join(command)}")

        try:
            result = subprocess.run(
                command,
                cwd=self.working_dir,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise GitCommandError(command, None, str(e)) from e

        if result.returncode != 0:
            raise GitCommandError(command, result.returncode, result.stderr)

        return result.stdout

    def fetch(self, remote: str) -> None:
        self.run(["fetch", remote])

    def checkout(self, branch: str) -> None:
        self.run(["checkout", branch])

    def reset_hard(self, ref: str) -> None:
        self.run(["reset", "--hard", ref])

    def show_file(self, revision: str, path: str) -> str:
        """Return the content of ``path`` as it exists at ``revision``."""
        return self.run(["show", f"{revision}:{path}"])

    def last_commit_date(self, path: str) -> str | None:
        """Committer date (``%ci``) of the latest commit touching ``path``."""
        output = self.run(["log", "-1", "--format=%ci", "--", path]).strip()
        return output or None

    def last_commit_id(self, path: str) -> str | None:
        """Hash of the latest commit touching ``path``."""
        output = self.run(["log", "-1", "--format=%H", "--", path]).strip()
        return output or None

    def commits_since(
        self, path: str, since: datetime | None
    ) -> list[tuple[str, str]]:
        """
        List commits touching ``path`` with commit time at or after ``since``.

        A ``since`` of None lists every commit touching ``path``.

        Returns:
            ``(commit_id, commit_date)`` pairs in git's reverse-chronological
            order
        """
        args = ["log"]
        if since is not None:
            args.append(f"--since={since.strftime('%Y-%m-%d %H:%M:%S %z')}")
        args.extend(["--format=%H%x1f%ci", "--", path])
        output = self.run(args)

        commits = []
        for line in output.split("\n"):
            if _FIELD_SEP not in line:
                continue
            commit_id, commit_date = line.split(_FIELD_SEP, 1)
            commits.append((commit_id.strip(), commit_date.strip()))
        return commits
