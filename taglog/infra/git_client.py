"""
Git client infrastructure for taglog.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic
"""

import subprocess
from typing import Optional
import logging

from ..exit_codes import GitCommandError

logger = logging.getLogger(__name__)


class GitClient:
    """
    Abstraction over git commands.

    Runs git with an argument list in a fixed working directory and
    returns its standard output.

    Example:
        client = GitClient("/path/to/repo")
        out = client.exec("for-each-ref", "refs/tags")
    """

    def __init__(self, cwd: Optional[str] = None, bin: str = "git", timeout: int = 30):
        """
        Initialize GitClient.

        Args:
            cwd: Repository directory (default: current directory)
            bin: git executable
            timeout: Command timeout in seconds (default: 30)
        """
        self.cwd = cwd
        self.bin = bin
        self.timeout = timeout

    def exec(self, *args: str) -> str:
        """
        Run a git command.

        Args:
            *args: Arguments passed to git

        Returns:
            Standard output with surrounding whitespace stripped

        Raises:
            GitCommandError: If git cannot be run, times out or exits non-zero
        """
        cmd = [self.bin, *args]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired as e:
            raise GitCommandError(
                f"git command timed out after {self.timeout}s: {' '.join(args)}", args
            ) from e
        except OSError as e:
            raise GitCommandError(f"failed to run {self.bin}: {e}", args) from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise GitCommandError(
                f"git {args[0] if args else ''} exited with status {result.returncode}: {stderr}",
                args,
                stderr=stderr
            )

        return (result.stdout or "").strip()
