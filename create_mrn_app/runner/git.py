"""Git repository initialization for freshly generated projects."""

from __future__ import annotations

import asyncio
from pathlib import Path

from ..config import DEFAULT_COMMIT_MESSAGE
from ..errors import ScaffoldError


class GitError(ScaffoldError):
    """Raised when a git command fails or times out."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


async def _run_git(
    *args: str,
    cwd: str | Path | None = None,
    timeout: float = 60.0,
) -> tuple[str, str]:
    """Run a git command asynchronously and return (stdout, stderr).

    Raises GitError if the command exits with a non-zero code or times out.
    """
    cmd = ["git"] + list(args)
    cmd_str = " ".join(cmd)

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
    )
    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise GitError(
            f"Git command timed out after {timeout}s: {cmd_str}",
            command=cmd_str,
        )

    stdout = stdout_bytes.decode("utf-8", errors="replace").strip()
    stderr = stderr_bytes.decode("utf-8", errors="replace").strip()

    if process.returncode != 0:
        raise GitError(
            f"Git command failed (exit {process.returncode}): {cmd_str}\n{stderr}",
            command=cmd_str,
            stderr=stderr,
        )

    return stdout, stderr


def is_git_repo(cwd: str | Path) -> bool:
    return (Path(cwd) / ".git").exists()


async def init_git(
    cwd: str | Path,
    message: str = DEFAULT_COMMIT_MESSAGE,
    timeout: float = 60.0,
) -> bool:
    """Initialise a repository in *cwd* and commit everything in it.

    Returns ``False`` without touching anything when *cwd* is already a git
    repository, ``True`` after a successful initial commit.

    Raises:
        GitError: If any git command fails.
        FileNotFoundError: If git is not installed.
    """
    if is_git_repo(cwd):
        return False

    await _run_git("init", cwd=cwd, timeout=timeout)
    await _run_git("add", "-A", cwd=cwd, timeout=timeout)
    await _run_git("commit", "-m", message, cwd=cwd, timeout=timeout)
    return True
