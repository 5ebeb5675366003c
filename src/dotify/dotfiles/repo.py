"""Git operations on the tracked directory."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List

from ..exceptions import NotInstalledError

logger = logging.getLogger(__name__)


@dataclass
class ChangedFile:
    """One line of ``git status --porcelain``."""

    code: str
    path: str

    @property
    def untracked(self) -> bool:
        return self.code == "??"


def parse_porcelain(output: str) -> List[ChangedFile]:
    """Parse ``git status --porcelain`` output into changed files."""
    changed = []
    for line in output.splitlines():
        if len(line) < 4:
            continue
        code, path = line[:2], line[3:]
        # Renames are reported as "old -> new"
        if " -> " in path:
            path = path.split(" -> ", 1)[1]
        changed.append(ChangedFile(code=code.strip() or code, path=path))
    return changed


class TrackedRepo:
    """A git repository living in the tracked directory.

    dotify never creates or merges history itself; it only stages,
    commits and pushes what the user already has in the repo.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def is_repo(self) -> bool:
        return (self.path / ".git").exists()

    def run(
        self, *args, check: bool = True, timeout: int = 60
    ) -> subprocess.CompletedProcess:
        """Run a git command inside the tracked directory.

        Args:
            *args: Git command arguments (e.g., "status", "--porcelain")
            check: If True, raise on non-zero exit code
            timeout: Command timeout in seconds

        Returns:
            CompletedProcess with stdout/stderr captured as text

        Raises:
            NotInstalledError: If the tracked directory is not a git repo
        """
        if not self.is_repo():
            raise NotInstalledError(f"{self.path} is not a git repository")

        cmd = ["git", "-C", str(self.path)] + list(args)
        logger.debug(f"Running {' '.join(cmd)}")
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=check,
        )

    def changed_files(self) -> List[ChangedFile]:
        """Modified and untracked files, relative to the tracked directory."""
        result = self.run("status", "--porcelain", "--untracked-files=all")
        return parse_porcelain(result.stdout)

    def add(self, path: str):
        self.run("add", "--", path)
        logger.info(f"Staged {path}")

    def commit(self, message: str) -> bool:
        """Commit the index. Returns False if there was nothing to commit."""
        result = self.run("commit", "-m", message, check=False)
        if result.returncode != 0:
            output = result.stdout + result.stderr
            if "nothing to commit" in output or "no changes added" in output:
                return False
            raise subprocess.CalledProcessError(
                result.returncode,
                result.args,
                output=result.stdout,
                stderr=result.stderr,
            )
        logger.info("Created commit")
        return True

    def push(self, remote: str = "origin"):
        self.run("push", remote, "HEAD", timeout=120)
        logger.info("Pushed tracked directory to remote")
