"""Package-manager commands for the generated project.

Each package manager spells install/add/run/exec differently.  The
``get_*_command`` helpers return argument lists (or display strings for the
"next steps" summary); ``install_dependencies`` and ``add_packages`` actually
run them through ``run_command``.  Every command is attempted exactly once.
"""

from __future__ import annotations

from pathlib import Path

from ..errors import ScaffoldError
from ..resolver.models import PackageManager
from ..utils import run_command

DEFAULT_INSTALL_TIMEOUT = 600


class InstallError(ScaffoldError):
    """Raised when a package-manager command exits non-zero."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


# ---------------------------------------------------------------------------
# Command spelling
# ---------------------------------------------------------------------------


def get_install_command(pm: PackageManager) -> list[str]:
    """``npm install`` / ``pnpm install`` / ``bun install``."""
    return [pm.value, "install"]


def get_add_command(pm: PackageManager, packages: list[str], dev: bool = False) -> list[str]:
    """Command that adds *packages* to the manifest in the current directory."""
    if pm is PackageManager.NPM:
        cmd = ["npm", "install"]
        if dev:
            cmd.append("--save-dev")
    elif pm is PackageManager.PNPM:
        cmd = ["pnpm", "add"]
        if dev:
            cmd.append("-D")
    else:
        cmd = ["bun", "add"]
        if dev:
            cmd.append("-d")
    return cmd + list(packages)


def get_run_command(pm: PackageManager, script: str) -> str:
    """How the user runs a package script, e.g. ``pnpm dev``."""
    if pm is PackageManager.NPM:
        return f"npm run {script}"
    if pm is PackageManager.PNPM:
        return f"pnpm {script}"
    return f"bun run {script}"


def get_exec_command(pm: PackageManager) -> str:
    """One-off package executor: ``npx`` / ``pnpm dlx`` / ``bunx``."""
    if pm is PackageManager.NPM:
        return "npx"
    if pm is PackageManager.PNPM:
        return "pnpm dlx"
    return "bunx"


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------


async def _run_pm(cmd: list[str], cwd: str | Path, timeout: int) -> str:
    cmd_str = " ".join(cmd)
    try:
        returncode, stdout, stderr = await run_command(cmd, cwd=cwd, timeout=timeout)
    except FileNotFoundError as exc:
        raise InstallError(
            f"{cmd[0]} is not installed or not on PATH", command=cmd_str
        ) from exc

    if returncode != 0:
        raise InstallError(
            f"Command failed (exit {returncode}): {cmd_str}\n{stderr}",
            command=cmd_str,
            stderr=stderr,
        )
    return stdout


async def install_dependencies(
    cwd: str | Path,
    pm: PackageManager,
    timeout: int = DEFAULT_INSTALL_TIMEOUT,
) -> None:
    """Install every dependency declared by the manifest(s) under *cwd*.

    Raises:
        InstallError: If the package manager is missing or exits non-zero.
    """
    await _run_pm(get_install_command(pm), cwd, timeout)


async def add_packages(
    cwd: str | Path,
    pm: PackageManager,
    packages: list[str],
    dev: bool = False,
    timeout: int = DEFAULT_INSTALL_TIMEOUT,
) -> None:
    """Add *packages* to the manifest in *cwd*.  No-op for an empty list."""
    if not packages:
        return
    await _run_pm(get_add_command(pm, packages, dev=dev), cwd, timeout)
