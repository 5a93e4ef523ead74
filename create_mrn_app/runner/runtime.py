"""Probes for the JavaScript runtimes available on this machine."""

from __future__ import annotations

from typing import Optional

from ..utils import run_command

_PROBE_TIMEOUT = 10


async def _probe_version(binary: str) -> Optional[str]:
    try:
        returncode, stdout, _ = await run_command(
            [binary, "--version"], timeout=_PROBE_TIMEOUT
        )
    except (FileNotFoundError, PermissionError):
        return None
    if returncode != 0 or not stdout:
        return None
    return stdout.splitlines()[0].strip()


async def get_bun_version() -> Optional[str]:
    """Installed Bun version (e.g. ``"1.1.38"``), or ``None`` if Bun is missing."""
    return await _probe_version("bun")


async def check_bun_installed() -> bool:
    return await get_bun_version() is not None


async def check_node_version() -> Optional[str]:
    """Installed Node.js version without the leading ``v``, or ``None``."""
    version = await _probe_version("node")
    if version is None:
        return None
    return version.lstrip("v")
