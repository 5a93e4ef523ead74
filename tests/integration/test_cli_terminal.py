"""CLI tests against a real pseudo-terminal.

The CLI runs as a child process attached to a pty, the way a user runs it,
and receives a real SIGINT while it waits at the first prompt.
"""

from __future__ import annotations

import os
import select
import signal
import subprocess
import sys
import time
from pathlib import Path

import pytest

pty = pytest.importorskip("pty")

# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.integration

_REPO_ROOT = Path(__file__).resolve().parents[2]


def _read_until(fd: int, marker: bytes, timeout: float) -> bytes:
    """Read from *fd* until *marker* shows up or *timeout* seconds pass."""
    output = b""
    deadline = time.monotonic() + timeout
    while marker not in output:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break
        ready, _, _ = select.select([fd], [], [], remaining)
        if not ready:
            break
        try:
            chunk = os.read(fd, 4096)
        except OSError:
            break
        if not chunk:
            break
        output += chunk
    return output


@pytest.fixture
def cli_in_pty(tmp_path: Path):
    """Start ``python -m create_mrn_app.pipeline`` on a pty in *tmp_path*."""
    master, slave = pty.openpty()
    env = {
        **os.environ,
        "MRN_SKIP_INSTALL": "1",
        "MRN_SKIP_GIT": "1",
        "PYTHONPATH": os.pathsep.join(
            p for p in (str(_REPO_ROOT), os.environ.get("PYTHONPATH", "")) if p
        ),
    }
    process = subprocess.Popen(
        [sys.executable, "-m", "create_mrn_app.pipeline"],
        stdin=slave,
        stdout=slave,
        stderr=slave,
        cwd=tmp_path,
        env=env,
        close_fds=True,
    )
    os.close(slave)
    try:
        yield process, master
    finally:
        if process.poll() is None:
            process.kill()
            process.wait()
        os.close(master)


class TestCtrlC:
    def test_sigint_at_first_prompt(self, cli_in_pty, tmp_path: Path):
        process, master = cli_in_pty
        output = _read_until(master, b"project name", timeout=30)
        assert b"project name" in output

        process.send_signal(signal.SIGINT)
        returncode = process.wait(timeout=15)
        output += _read_until(master, b"cancelled", timeout=2)

        assert returncode == 0
        assert b"cancelled" in output
        assert list(tmp_path.iterdir()) == []
